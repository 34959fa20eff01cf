"""A spin box that steps through a fixed list of strings."""

from __future__ import annotations

from enum import IntFlag
from typing import Iterable

from octstream.plugin import Signal


class StepEnabled(IntFlag):
    NONE = 0
    STEP_UP = 1
    STEP_DOWN = 2


def _bound(low: int, value: int, high: int) -> int:
    return max(low, min(high, value))


class StringSpinBox:
    """Selects one string out of a list by stepping up and down."""

    def __init__(self) -> None:
        self._strings: list[str] = []
        self._index = -1
        self.index_changed = Signal()

    @property
    def strings(self) -> tuple[str, ...]:
        return tuple(self._strings)

    @property
    def index(self) -> int:
        return self._index

    @property
    def text(self) -> str:
        """The currently shown string, or "" when there are no strings."""
        return self._strings[self._index] if self._strings else ""

    def set_strings(self, strings: Iterable[str]) -> None:
        """Replace the strings and show the first one."""
        values = [str(s) for s in strings]
        if not values:
            raise ValueError("a string spin box needs at least one string")
        self._strings = values
        self._index = 0

    def step_by(self, steps: int) -> None:
        """Move by ``steps``, clamped to the list, and emit ``index_changed``."""
        if not self._strings:
            raise IndexError("no strings to step through")
        self._index = _bound(0, self._index + steps, len(self._strings) - 1)
        self.index_changed.emit()

    def set_index(self, index: int) -> None:
        """Show the string at ``index``; indexes outside the list are ignored."""
        if self._strings and 0 <= index < len(self._strings):
            self._index = index
            self.index_changed.emit()

    def step_enabled(self) -> StepEnabled:
        """Which step directions are currently possible."""
        enabled = StepEnabled.STEP_UP | StepEnabled.STEP_DOWN
        max_index = len(self._strings) - 1
        position = _bound(0, self._index, max_index)
        if position == 0:
            enabled &= ~StepEnabled.STEP_DOWN
        if position == max_index:
            enabled &= ~StepEnabled.STEP_UP
        return enabled