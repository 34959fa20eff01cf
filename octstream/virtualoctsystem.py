"""Acquisition system that replays raw OCT data from a file."""

from __future__ import annotations

import math
import time
from typing import Any, BinaryIO, Optional

import numpy as np

from octstream.acquisition import (
    AcquisitionBuffer,
    AcquisitionParams,
    AcquisitionSystem,
    BufferAllocationError,
)
from octstream.plugin import Signal
from octstream.virtualoctsettings import SimulatorParams, VirtualOCTSystemSettings

STREAM_BUFFER_SIZE = 2097152

_POLL_INTERVAL_S = 100e-6


class VirtualOCTSystem(AcquisitionSystem):
    """Feeds buffers read from a raw file into the acquisition ring.

    ``start_acquisition`` blocks until ``stop_acquisition`` is called from
    elsewhere (another thread or a connected slot). ``release_delay`` is
    the time in seconds waited after stopping before the buffers are
    released, so that consumers can finish with the last buffer.
    """

    def __init__(self, release_delay: float = 0.5) -> None:
        super().__init__("Virtual OCT System")
        self.release_delay = release_delay
        self.system_dialog = VirtualOCTSystemSettings()
        self.settings_dialog = self.system_dialog
        self.current_params = SimulatorParams()
        self.stream_buffer: Optional[AcquisitionBuffer] = None
        self._file: Optional[BinaryIO] = None
        self.enable_gui = Signal()

        self.system_dialog.settings_updated.connect(self.update_params)
        self.enable_gui.connect(self.system_dialog.enable_gui)

    @property
    def _bytes_per_element(self) -> int:
        return math.ceil(self.current_params.bit_depth / 8.0)

    @property
    def _elements_per_buffer(self) -> int:
        p = self.current_params
        return p.width * p.height * p.depth

    @property
    def _buffer_size(self) -> int:
        return self._elements_per_buffer * self._bytes_per_element

    def start_acquisition(self) -> None:
        """Initialise, replay buffers until stopped, then release memory."""
        if not self._init():
            self.enable_gui.emit(True)
            self.info.emit("Initialization unsuccessful. Acquisition stopped.")
            self.buffer.release_memory()
            self._cleanup()
            self.acquisition_stopped.emit()
            return

        self.info.emit("Acquisition started")
        params = self.current_params
        if params.buffers_from_file <= 2:
            self._simulate_two_buffers()
        elif params.copy_file_to_ram:
            self._simulate_multi_file_buffers()
        else:
            self._simulate_large_file()

        self.enable_gui.emit(True)
        self.info.emit("Acquisition stopped!")
        self.acquisition_stopped.emit()
        if self.release_delay > 0:
            time.sleep(self.release_delay)
        self.buffer.release_memory()
        self._cleanup()

    def stop_acquisition(self) -> None:
        """Ask the running acquisition loop to finish."""
        self.acquisition_running = False
        self.enable_gui.emit(True)

    def settings_loaded(self, settings: dict[str, Any]) -> None:
        """Hand stored settings to the settings dialog, which applies them."""
        self.system_dialog.set_settings(settings)

    def update_params(self, new_params: SimulatorParams) -> None:
        """Take over simulator parameters and publish acquisition parameters."""
        self.current_params = new_params
        self.params.update(
            AcquisitionParams(
                samples_per_line=new_params.width,
                ascans_per_bscan=new_params.height,
                bscans_per_buffer=new_params.depth,
                buffers_per_volume=new_params.buffers_per_volume,
                bit_depth=new_params.bit_depth,
            )
        )
        self.settings_map.update(self.system_dialog.settings())
        self.store_settings.emit(self.name, dict(self.settings_map))

    def _init(self) -> bool:
        if not self._open_file():
            return False
        params = self.current_params
        size = self._buffer_size
        try:
            self.buffer.allocate_memory(2, size)
            if params.buffers_from_file > 2:
                self.stream_buffer = AcquisitionBuffer()
                if params.copy_file_to_ram:
                    self.stream_buffer.allocate_memory(params.buffers_from_file, size)
                else:
                    self.stream_buffer.allocate_memory(1, STREAM_BUFFER_SIZE)
        except BufferAllocationError as exc:
            self.error.emit(str(exc))
            self._close_file()
            return False
        self.info.emit("Virtual OCT system initialized!")
        return True

    def _open_file(self) -> bool:
        path = self.current_params.file_path
        if len(path) < 2:
            self.error.emit("No file selected for virtual OCT system.")
            return False
        try:
            self._file = open(path, "rb")
        except OSError:
            self.error.emit("Unable to open file for virtual OCT system!")
            return False
        return True

    def _close_file(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def _cleanup(self) -> None:
        self.stream_buffer = None
        self._close_file()

    def _wait_for_consumer(self) -> None:
        buf = self.buffer
        while buf.buffer_ready_array[buf.current_index] and self.acquisition_running:
            time.sleep(_POLL_INTERVAL_S)

    def _pause(self) -> None:
        time.sleep(max(self.current_params.wait_time_us, 0) / 1e6)

    @staticmethod
    def _read_into(stream: BinaryIO, target: np.ndarray, size: int) -> None:
        stream.readinto(memoryview(target)[:size])

    def _simulate_two_buffers(self) -> None:
        assert self._file is not None
        size = self._buffer_size
        buf = self.buffer
        self._read_into(self._file, buf.buffer_array[0], size)
        if self.current_params.buffers_from_file == 2:
            self._file.seek(size)
        else:
            self._file.seek(0)
        self._read_into(self._file, buf.buffer_array[1], size)
        self._close_file()

        self.enable_gui.emit(False)
        self.acquisition_running = True
        buf.current_index = 1
        self.acquisition_started.emit(self)
        while self.acquisition_running:
            self._wait_for_consumer()
            next_index = (buf.current_index + 1) % 2
            buf.current_index = next_index
            if not buf.buffer_ready_array[next_index]:
                buf.buffer_ready_array[next_index] = True
            self._pause()

    def _simulate_large_file(self) -> None:
        size = self._buffer_size
        buffers_from_file = self.current_params.buffers_from_file
        self._close_file()
        try:
            big_file = open(self.current_params.file_path, "rb", buffering=STREAM_BUFFER_SIZE)
        except OSError:
            self.error.emit("could not open file")
            return

        buf = self.buffer
        with big_file:
            read_buffers = 0
            self.enable_gui.emit(False)
            self.acquisition_running = True
            buf.current_index = 1
            next_index = 0
            self.acquisition_started.emit(self)
            while self.acquisition_running:
                self._wait_for_consumer()
                if not buf.buffer_ready_array[next_index]:
                    self._read_into(big_file, buf.buffer_array[next_index], size)
                    read_buffers += 1
                    if read_buffers >= buffers_from_file:
                        big_file.seek(0)
                        read_buffers = 0
                    buf.current_index = next_index
                    buf.buffer_ready_array[next_index] = True
                    next_index = (buf.current_index + 1) % 2
                self._pause()

    def _simulate_multi_file_buffers(self) -> None:
        assert self._file is not None and self.stream_buffer is not None
        size = self._buffer_size
        count = self.current_params.buffers_from_file
        stream = self.stream_buffer
        for i, target in enumerate(stream.buffer_array):
            self._file.seek(i * size)
            self._read_into(self._file, target, size)
        self._close_file()

        buf = self.buffer
        self.enable_gui.emit(False)
        self.acquisition_running = True
        buf.current_index = 0
        next_index = 1
        stream_index = count - 1
        self.acquisition_started.emit(self)
        while self.acquisition_running:
            self._wait_for_consumer()
            buf.current_index = next_index
            if not buf.buffer_ready_array[next_index]:
                stream_index = (stream_index + 1) % count
                buf.buffer_array[next_index][:size] = stream.buffer_array[stream_index][:size]
                buf.buffer_ready_array[next_index] = True
                next_index = (buf.current_index + 1) % 2
            self._pause()