"""Demo extension that shows how to receive processed OCT data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from octstream.extension import DisplayStyle, Extension
from octstream.plugin import Signal

LIKE = "demo_like"
PARAM = "demo_param"


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return bool(value)


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class DemoParams:
    like: bool = False
    demo_param: float = 0.0


class DemoExtensionForm:
    """Holds the demo settings and announces every applied change.

    Assigning ``like`` or ``demo_param`` behaves like a user edit: the new
    value is applied and ``parameters_updated`` is emitted.
    """

    def __init__(self) -> None:
        self._like = False
        self._demo_param = 0.0
        self.parameters = DemoParams()
        self.parameters_updated = Signal()

    @property
    def like(self) -> bool:
        return self._like

    @like.setter
    def like(self, value: bool) -> None:
        self._like = bool(value)
        self.apply()

    @property
    def demo_param(self) -> float:
        return self._demo_param

    @demo_param.setter
    def demo_param(self, value: float) -> None:
        value = float(value)
        if value != self._demo_param:
            self._demo_param = value
            self.apply()

    def set_settings(self, settings: dict[str, Any]) -> None:
        """Load values from a settings map and apply them."""
        self._like = _to_bool(settings.get(LIKE, False))
        self._demo_param = _to_float(settings.get(PARAM, 0.0))
        self.apply()

    def settings(self) -> dict[str, Any]:
        """Return the applied parameters as a settings map."""
        return {LIKE: self.parameters.like, PARAM: self.parameters.demo_param}

    def apply(self) -> None:
        """Take over the current values and emit ``parameters_updated``."""
        self.parameters = DemoParams(self._like, self._demo_param)
        self.parameters_updated.emit(self.parameters)


class DemoExtension(Extension):
    """Sums the first line of every processed 9 to 16 bit buffer while active."""

    def __init__(self) -> None:
        super().__init__("DemoExtension", "This is a demo Extension intended for developers.")
        self.display_style = DisplayStyle.SIDEBAR_TAB
        self.form = DemoExtensionForm()
        self.current_parameters = DemoParams()
        self.widget_displayed = False
        self.is_calculating = False
        self.active = False
        self.last_sum: Optional[int] = None
        self.form.parameters_updated.connect(self.set_parameters)

    def get_widget(self) -> DemoExtensionForm:
        self.widget_displayed = True
        return self.form

    def activate_extension(self) -> None:
        self.active = True

    def deactivate_extension(self) -> None:
        self.active = False

    def settings_loaded(self, settings: dict[str, Any]) -> None:
        """Hand stored settings to the form."""
        self.form.set_settings(settings)

    def set_parameters(self, params: DemoParams) -> None:
        """Take over parameters from the form and ask for them to be stored."""
        self.current_parameters = params
        self.settings_map.update(self.form.settings())
        self.store_settings.emit(self.name, dict(self.settings_map))

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
        """Raw data is not used by the demo."""

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
        """Sum the first line of the buffer into ``last_sum`` (as unsigned 32 bit)."""
        if not (self.active and not self.is_calculating and self.processed_grabbing_allowed):
            return
        self.is_calculating = True
        if 9 <= bit_depth <= 16:
            samples = np.frombuffer(buffer, dtype=np.uint16)
            total = 0
            if self.processed_grabbing_allowed:
                total = int(samples[: max(samples_per_line, 0)].sum(dtype=np.uint64))
            self.last_sum = total & 0xFFFFFFFF
            self.is_calculating = False