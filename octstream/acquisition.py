"""Acquisition buffers, acquisition parameters and the acquisition system base."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np

from octstream.plugin import Plugin, PluginType, Signal


class BufferAllocationError(Exception):
    """Raised when acquisition buffer memory cannot be allocated."""


class AcquisitionBuffer:
    """A ring of equally sized, zero-initialised byte buffers with ready flags."""

    def __init__(self) -> None:
        self.buffer_array: list[Optional[np.ndarray]] = []
        self.buffer_ready_array: list[bool] = []
        self.current_index = -1
        self.buffer_count = 0
        self.bytes_per_buffer = 0
        self.error = Signal()
        self.info = Signal()

    def allocate_memory(self, buffer_count: int, bytes_per_buffer: int) -> None:
        """Replace any existing buffers with ``buffer_count`` zeroed buffers."""
        self.buffer_count = buffer_count
        self.bytes_per_buffer = bytes_per_buffer
        self.release_memory()
        self.buffer_array = []
        self.buffer_ready_array = []

        if buffer_count < 0 or bytes_per_buffer < 0:
            self._fail("buffer count and size must not be negative")

        for _ in range(buffer_count):
            try:
                data = np.zeros(bytes_per_buffer, dtype=np.uint8)
            except (MemoryError, ValueError) as exc:
                self._fail(str(exc))
            self.buffer_array.append(data)
            self.buffer_ready_array.append(False)

    def release_memory(self) -> None:
        """Drop every allocated buffer and clear its ready flag."""
        for i, data in enumerate(self.buffer_array):
            if data is not None:
                self.buffer_array[i] = None
                self.buffer_ready_array[i] = False

    def _fail(self, detail: str) -> None:
        message = f"Buffer memory allocation error. {detail}"
        self.error.emit(message)
        raise BufferAllocationError(message)


@dataclass(frozen=True)
class AcquisitionParams:
    samples_per_line: int = 0
    ascans_per_bscan: int = 0
    bscans_per_buffer: int = 0
    buffers_per_volume: int = 0
    bit_depth: int = 0


class AcquisitionParameter:
    """Holds the current acquisition parameters and announces changes."""

    def __init__(self) -> None:
        self.params = AcquisitionParams()
        self.updated = Signal()

    def update(self, new_params: AcquisitionParams) -> None:
        """Store ``new_params`` and emit ``updated`` with them."""
        self.params = new_params
        self.updated.emit(self.params)


class AcquisitionSystem(Plugin, ABC):
    """Base class for sources of raw OCT data."""

    def __init__(self, name: str = "") -> None:
        super().__init__(name, PluginType.SYSTEM)
        self.params = AcquisitionParameter()
        self.buffer = AcquisitionBuffer()
        self.settings_dialog = None
        self.acquisition_running = False
        self.acquisition_started = Signal()
        self.acquisition_stopped = Signal()

    @abstractmethod
    def start_acquisition(self) -> None:
        """Initialise and start acquiring data."""

    @abstractmethod
    def stop_acquisition(self) -> None:
        """Stop acquiring data and release resources."""