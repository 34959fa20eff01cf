"""Registry of the available acquisition systems."""

from __future__ import annotations

from typing import Optional

from octstream.acquisition import AcquisitionSystem


class SystemManager:
    """Keeps acquisition systems together with the names they were added under."""

    def __init__(self) -> None:
        self._systems: list[AcquisitionSystem] = []
        self._names: list[str] = []

    @property
    def systems(self) -> list[AcquisitionSystem]:
        return list(self._systems)

    @property
    def system_names(self) -> list[str]:
        return list(self._names)

    def add_system(self, system: Optional[AcquisitionSystem]) -> None:
        """Register ``system`` unless it is None or already registered."""
        if system is None:
            return
        if any(existing is system for existing in self._systems):
            return
        self._systems.append(system)
        self._names.append(str(system.name))

    def get_system_by_name(self, name: str) -> AcquisitionSystem:
        """Return the first system registered under ``name``."""
        try:
            position = self._names.index(name)
        except ValueError:
            raise KeyError(name) from None
        return self._systems[position]