"""Plugin base types and a minimal signal/slot mechanism."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable


class Signal:
    """A list of callables that are invoked, in connection order, on emit."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        """Register ``slot`` to be called on every emit."""
        if not callable(slot):
            raise TypeError("slot must be callable")
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        """Remove one connection of ``slot``; raise ValueError if not connected."""
        try:
            self._slots.remove(slot)
        except ValueError:
            raise ValueError("slot is not connected to this signal") from None

    def emit(self, *args: Any) -> None:
        """Call every connected slot with ``args``."""
        for slot in list(self._slots):
            slot(*args)

    def __len__(self) -> int:
        return len(self._slots)


class PluginType(Enum):
    SYSTEM = 0
    EXTENSION = 1


class Plugin:
    """Common state and signals shared by acquisition systems and extensions."""

    def __init__(self, name: str = "", plugin_type: PluginType = PluginType.SYSTEM) -> None:
        self.name = name
        self.type = plugin_type
        self.settings_map: dict[str, Any] = {}

        self.info = Signal()
        self.error = Signal()
        self.store_settings = Signal()
        self.set_klin_coeffs_request = Signal()
        self.set_disp_comp_coeffs_request = Signal()
        self.start_processing_request = Signal()
        self.stop_processing_request = Signal()

    def settings_loaded(self, settings: dict[str, Any]) -> None:
        """Receive stored settings at startup; the base class keeps a copy."""
        self.settings_map = dict(settings)