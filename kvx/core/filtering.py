"""Name filtering for list views."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar


class Named(Protocol):
    name: str


T = TypeVar("T", bound=Named)


def filter_items(items: Sequence[T], query: str) -> list[T]:
    """Return items whose name contains ``query`` (case-insensitive).

    An empty query returns every item in its original order.
    """
    if not query:
        return list(items)
    needle = query.casefold()
    return [item for item in items if needle in item.name.casefold()]
