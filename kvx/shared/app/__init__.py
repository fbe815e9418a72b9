"""Shared application wiring."""

from kvx.shared.app.log_setup import configure_logging
from kvx.shared.app.runtime import RuntimeConfig

__all__ = ["RuntimeConfig", "configure_logging"]
