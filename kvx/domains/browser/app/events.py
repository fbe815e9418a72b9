"""UI events and the serial pump that feeds them to the controller."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Union

from kvx.domains.browser.state.modes import FocusTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Startup:
    pass


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class ListHighlighted:
    index: int


@dataclass(frozen=True)
class ListActivated:
    index: int


@dataclass(frozen=True)
class FilterChanged:
    text: str


@dataclass(frozen=True)
class FilterSubmitted:
    pass


@dataclass(frozen=True)
class PromptSubmitted:
    text: str


@dataclass(frozen=True)
class FocusChanged:
    target: FocusTarget


BrowserEvent = Union[
    Startup,
    KeyPressed,
    ListHighlighted,
    ListActivated,
    FilterChanged,
    FilterSubmitted,
    PromptSubmitted,
    FocusChanged,
]

EventHandler = Callable[[BrowserEvent], Awaitable[None]]
ErrorHandler = Callable[[BrowserEvent, Exception], None]


class EventPump:
    """Run one handler at a time, in arrival order.

    Each handler runs to completion, including any store calls it awaits,
    before the next event is taken off the queue.
    """

    def __init__(self, handler: EventHandler, on_error: ErrorHandler | None = None) -> None:
        self._handler = handler
        self._on_error = on_error
        self._queue: asyncio.Queue[BrowserEvent] = asyncio.Queue()

    def post(self, event: BrowserEvent) -> None:
        self._queue.put_nowait(event)

    async def run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._handler(event)
            except Exception as exc:
                logger.exception("Unhandled error while processing %r", event)
                if self._on_error is not None:
                    self._on_error(event, exc)
            finally:
                self._queue.task_done()

    async def join(self) -> None:
        """Wait until every posted event has been handled."""
        await self._queue.join()
