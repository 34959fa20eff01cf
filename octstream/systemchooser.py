"""Lets the user pick one acquisition system out of a list."""

from __future__ import annotations

from typing import Callable, Iterable, Optional


class SystemChooser:
    """Offers a list of system names and returns the one the user picks.

    ``interact`` is called with the chooser while the list is shown; it
    must finish by calling ``on_ok_clicked``, ``on_double_clicked`` or
    ``close``. By default the list is offered on the console.
    """

    def __init__(
        self,
        interact: Optional[Callable[["SystemChooser"], None]] = None,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ) -> None:
        self._interact = interact if interact is not None else self._console_interaction
        self._input = input_func
        self._output = output_func
        self._items: list[str] = []
        self._current: Optional[int] = None
        self.selected_system = ""
        self.closed = False

    @property
    def items(self) -> list[str]:
        return list(self._items)

    @property
    def current_item(self) -> Optional[str]:
        return None if self._current is None else self._items[self._current]

    def set_current(self, index: int) -> None:
        """Highlight the item at ``index``."""
        if not 0 <= index < len(self._items):
            raise IndexError(index)
        self._current = index

    def _populate(self, systems: Iterable[str]) -> None:
        self._clear()
        self._items = [str(s) for s in systems]

    def _clear(self) -> None:
        self._items = []
        self._current = None

    def close(self) -> None:
        """Close the chooser without changing the selection."""
        self.closed = True

    def select_system(self, systems: Iterable[str]) -> str:
        """Show ``systems`` and return the selected name ("" if none ever was)."""
        self._populate(systems)
        if self._items:
            self._current = 0
        self.closed = False
        self._interact(self)
        return self.selected_system

    def on_ok_clicked(self) -> None:
        """Accept the highlighted item, if any, and close."""
        if self._current is not None:
            self.selected_system = self._items[self._current]
        self.close()
        self._clear()

    def on_double_clicked(self, item: str) -> None:
        """Accept ``item`` directly and close."""
        self.selected_system = item
        self.close()
        self._clear()

    def _console_interaction(self, chooser: "SystemChooser") -> None:
        if not self._items:
            self._output("No systems are available.")
            self.on_ok_clicked()
            return
        self._output("The following systems are available:")
        for number, name in enumerate(self._items, start=1):
            self._output(f"  {number}. {name}")
        prompt = f"Select system [1-{len(self._items)}, Enter for {self.current_item}]: "
        while True:
            try:
                answer = self._input(prompt).strip()
            except EOFError:
                self.close()
                return
            if not answer:
                self.on_ok_clicked()
                return
            if answer.isdigit() and 1 <= int(answer) <= len(self._items):
                self.on_double_clicked(self._items[int(answer) - 1])
                return
            if answer in self._items:
                self.on_double_clicked(answer)
                return
            self._output(f"Invalid selection: {answer}")