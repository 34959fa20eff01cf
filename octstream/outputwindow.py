"""Common base for named output windows with a settings map."""

from __future__ import annotations

from typing import Any


class OutputWindow:
    """A named display window whose settings can be saved and restored."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.settings_map: dict[str, Any] = {}

    def settings(self) -> dict[str, Any]:
        """Return a copy of the window's current settings."""
        return dict(self.settings_map)

    def apply_settings(self, settings: dict[str, Any]) -> None:
        """Take over the given settings."""
        self.settings_map = dict(settings)