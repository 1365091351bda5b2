"""A sequence of items with a wrap-around cursor."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class SelectableList(Generic[T]):
    """Ordered, replace-only items plus an optional selected index.

    A non-empty list always starts with the first item selected; an empty
    list has no selection. Only :meth:`next`, :meth:`previous` and
    :meth:`replace_items` change the state, and none of them can leave the
    selected index out of bounds.
    """

    def __init__(self, items: Iterable[T] = ()):
        self._items: tuple[T, ...] = ()
        self._selected: int | None = None
        self.replace_items(items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"SelectableList(len={len(self._items)}, selected={self._selected})"

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    @property
    def selected_index(self) -> int | None:
        return self._selected

    def selected(self) -> T | None:
        if self._selected is None:
            return None
        return self._items[self._selected]

    def next(self) -> None:
        if not self._items:
            return
        if self._selected is None or self._selected >= len(self._items) - 1:
            self._selected = 0
        else:
            self._selected += 1

    def previous(self) -> None:
        if not self._items:
            return
        if self._selected is None or self._selected <= 0:
            self._selected = len(self._items) - 1
        else:
            self._selected -= 1

    def replace_items(self, items: Iterable[T]) -> None:
        """Swap the backing sequence and select its first item, if any."""
        self._items = tuple(items)
        self._selected = 0 if self._items else None
