"""Startup flow helpers for the main application."""

from __future__ import annotations

import logging
from typing import Any

from kvx.domains.browser.app.events import Startup
from kvx.domains.browser.state.modes import FocusTarget
from kvx.domains.vaults.app.formatting import VAULTS_HINT

logger = logging.getLogger(__name__)


def run_on_mount(app: Any) -> None:
    """Start the event pump and kick off vault discovery."""
    controller = app.controller
    app.run_worker(controller.pump.run(), name="browser-events", group="browser", exclusive=True)

    app.set_list_title("Vaults")
    app.set_detail(VAULTS_HINT, title="Details")
    app.focus_widget(FocusTarget.LIST)

    if app.discover_on_mount:
        logger.debug("Starting vault discovery")
        controller.post(Startup())
