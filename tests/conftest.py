"""Pytest fixtures for kvx tests."""

from __future__ import annotations

import pytest

from kvx.core.keymap import set_keymap

from tests.helpers import RecordingView, make_store


@pytest.fixture(autouse=True)
def _reset_keymap():
    """Ensure a custom keymap does not leak between tests."""
    set_keymap(None)
    yield
    set_keymap(None)


@pytest.fixture
def store():
    return make_store()


@pytest.fixture
def view():
    return RecordingView()
