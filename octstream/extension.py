"""Base class for extensions that receive raw or processed OCT data."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from octstream.plugin import Plugin, PluginType


class DisplayStyle(Enum):
    SIDEBAR_TAB = 0
    SEPARATE_WINDOW = 1


class Extension(Plugin, ABC):
    """An extension plugin: it shows a widget and may grab streamed data.

    ``raw_grabbing_allowed`` and ``processed_grabbing_allowed`` tell whether
    a buffer handed to the data callbacks may still be read.
    """

    def __init__(self, name: str = "", tool_tip: str = "") -> None:
        super().__init__(name, PluginType.EXTENSION)
        self.raw_grabbing_allowed = True
        self.processed_grabbing_allowed = True
        self.extension_widget: Any = None
        self.display_style = DisplayStyle.SIDEBAR_TAB
        self.tool_tip = tool_tip

    @abstractmethod
    def get_widget(self) -> Any:
        """Return the user interface of the extension."""

    @abstractmethod
    def activate_extension(self) -> None:
        """Called when the user activates the extension."""

    @abstractmethod
    def deactivate_extension(self) -> None:
        """Called when the user deactivates the extension."""

    def raw_data_received(
        self,
        buffer: Any,
        bit_depth: int,
        samples_per_line: int,
        lines_per_frame: int,
        frames_per_buffer: int,
        buffers_per_volume: int,
        current_buffer_nr: int,
    ) -> None:
        """Receive a raw data buffer; the base class ignores it."""

    def processed_data_received(
        self,
        buffer: Any,
        bit_depth: int,
        samples_per_line: int,
        lines_per_frame: int,
        frames_per_buffer: int,
        buffers_per_volume: int,
        current_buffer_nr: int,
    ) -> None:
        """Receive a processed data buffer; the base class ignores it."""

    def enable_raw_data_grabbing(self, enabled: bool) -> None:
        """Mark whether raw buffers may be accessed."""
        self.raw_grabbing_allowed = bool(enabled)

    def enable_processed_data_grabbing(self, enabled: bool) -> None:
        """Mark whether processed buffers may be accessed."""
        self.processed_grabbing_allowed = bool(enabled)