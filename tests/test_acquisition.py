import numpy as np
import pytest

from octstream.acquisition import (
    AcquisitionBuffer,
    AcquisitionParameter,
    AcquisitionParams,
    AcquisitionSystem,
    BufferAllocationError,
)
from octstream.plugin import PluginType


def test_new_buffer_is_empty():
    buf = AcquisitionBuffer()
    assert buf.buffer_array == []
    assert buf.current_index == -1
    assert buf.buffer_count == 0


def test_allocate_creates_zeroed_buffers():
    buf = AcquisitionBuffer()
    buf.allocate_memory(2, 16)
    assert len(buf.buffer_array) == 2
    assert all(b.nbytes == 16 for b in buf.buffer_array)
    assert all(not b.any() for b in buf.buffer_array)
    assert buf.buffer_ready_array == [False, False]
    assert buf.bytes_per_buffer == 16


def test_reallocate_replaces_buffers():
    buf = AcquisitionBuffer()
    buf.allocate_memory(2, 8)
    buf.buffer_array[0][:] = 7
    buf.buffer_ready_array[0] = True
    buf.allocate_memory(3, 4)
    assert len(buf.buffer_array) == 3
    assert all(b.nbytes == 4 and not b.any() for b in buf.buffer_array)
    assert buf.buffer_ready_array == [False, False, False]


def test_release_memory_clears_buffers_and_flags():
    buf = AcquisitionBuffer()
    buf.allocate_memory(2, 8)
    buf.buffer_ready_array[1] = True
    buf.release_memory()
    assert buf.buffer_array == [None, None]
    assert buf.buffer_ready_array == [False, False]


def test_allocation_error_raises_and_emits():
    buf = AcquisitionBuffer()
    errors = []
    buf.error.connect(errors.append)
    with pytest.raises(BufferAllocationError):
        buf.allocate_memory(1, -5)
    assert len(errors) == 1
    assert errors[0].startswith("Buffer memory allocation error.")


def test_buffer_view_as_other_dtype():
    buf = AcquisitionBuffer()
    buf.allocate_memory(1, 8)
    view = buf.buffer_array[0].view(np.uint16)
    view[:] = 300
    assert buf.buffer_array[0].view(np.uint16).tolist() == [300] * 4


def test_parameter_update_stores_and_emits():
    param = AcquisitionParameter()
    assert param.params == AcquisitionParams(0, 0, 0, 0, 0)
    seen = []
    param.updated.connect(seen.append)
    new = AcquisitionParams(1024, 512, 4, 2, 12)
    param.update(new)
    assert param.params == new
    assert seen == [new]


def test_acquisition_system_is_abstract():
    with pytest.raises(TypeError):
        AcquisitionSystem()


class _Dummy(AcquisitionSystem):
    def start_acquisition(self):
        self.acquisition_running = True
        self.acquisition_started.emit(self)

    def stop_acquisition(self):
        self.acquisition_running = False
        self.acquisition_stopped.emit()


def test_subclass_lifecycle():
    system = _Dummy("dummy")
    started = []
    stopped = []
    system.acquisition_started.connect(started.append)
    system.acquisition_stopped.connect(lambda: stopped.append(True))
    assert system.type is PluginType.SYSTEM
    assert system.acquisition_running is False
    assert isinstance(system.buffer, AcquisitionBuffer)
    AcquisitionBuffer.allocate_memory(system.buffer, 2, 4)
    assert len(system.buffer.buffer_array) == 2
    assert system.buffer.buffer_ready_array == [False, False]
    system.start_acquisition()
    assert system.acquisition_running is True
    assert started == [system]
    system.stop_acquisition()
    assert system.acquisition_running is False
    assert stopped == [True]