"""Settings of the virtual OCT system that replays raw data from a file."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from octstream.plugin import Signal

SYSNAME = "sys_name"
FILEPATH = "file_path"
BITDEPTH = "bit_depth"
WIDTH = "width"
HEIGHT = "height"
DEPTH = "depth"
BUFFERS_PER_VOLUME = "buffers_per_volume"
BUFFERS_FROM_FILE = "buffers_from_file"
WAITTIME = "wait_time"
COPY_TO_RAM = "copy_file_to_ram"

_INT_KEYS = {
    "bit_depth": BITDEPTH,
    "width": WIDTH,
    "height": HEIGHT,
    "depth": DEPTH,
    "buffers_per_volume": BUFFERS_PER_VOLUME,
    "buffers_from_file": BUFFERS_FROM_FILE,
    "wait_time_us": WAITTIME,
}


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return bool(value)


@dataclass
class SimulatorParams:
    file_path: str = ""
    bit_depth: int = 0
    width: int = 0
    height: int = 0
    depth: int = 0
    buffers_per_volume: int = 0
    buffers_from_file: int = 0
    wait_time_us: int = 0
    copy_file_to_ram: bool = False


class VirtualOCTSystemSettings:
    """Editable settings; ``apply`` publishes them via ``settings_updated``.

    ``fields`` holds the values as currently edited, ``params`` the values
    last applied.
    """

    def __init__(self) -> None:
        self.title = "Virtual OCT System Settings"
        self.fields = SimulatorParams()
        self.params = SimulatorParams()
        self.editable: dict[str, bool] = {
            f.name: True for f in dataclasses.fields(SimulatorParams)
        }
        self.settings_updated = Signal()

    def set_settings(self, settings: dict[str, Any]) -> None:
        """Load values from a settings map and apply them."""
        file_path = settings.get(FILEPATH, "")
        self.fields.file_path = "" if file_path is None else str(file_path)
        for attr, key in _INT_KEYS.items():
            setattr(self.fields, attr, _to_int(settings.get(key, 0)))
        self.fields.copy_file_to_ram = _to_bool(settings.get(COPY_TO_RAM, False))
        self.apply()

    def settings(self) -> dict[str, Any]:
        """Return the edited values as a settings map."""
        result: dict[str, Any] = {FILEPATH: self.fields.file_path}
        for attr, key in _INT_KEYS.items():
            result[key] = getattr(self.fields, attr)
        result[COPY_TO_RAM] = self.fields.copy_file_to_ram
        return result

    def apply(self) -> None:
        """Take over the edited values and emit ``settings_updated``."""
        self.params = dataclasses.replace(self.fields)
        self.settings_updated.emit(dataclasses.replace(self.params))

    def enable_gui(self, enable: bool) -> None:
        """Allow or forbid editing; the wait time always stays editable."""
        for name in self.editable:
            if name != "wait_time_us":
                self.editable[name] = bool(enable)

    def check_width_value(self) -> None:
        """Round an odd width down to the next even number."""
        if self.fields.width % 2 != 0:
            self.fields.width -= 1

    def select_file(self, chooser: Callable[[str], Optional[str]]) -> str:
        """Ask ``chooser`` for a raw file, starting at the last used path.

        If nothing is chosen the current path is kept.
        """
        current = self.fields.file_path
        start = self.params.file_path or str(Path.home() / "Desktop")
        chosen = chooser(start) or current
        self.fields.file_path = chosen
        return chosen