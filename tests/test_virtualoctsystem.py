import threading
import time

import pytest

from octstream.acquisition import AcquisitionParams
from octstream.virtualoctsettings import (
    BITDEPTH,
    BUFFERS_FROM_FILE,
    BUFFERS_PER_VOLUME,
    COPY_TO_RAM,
    DEPTH,
    FILEPATH,
    HEIGHT,
    WAITTIME,
    WIDTH,
    SimulatorParams,
)
from octstream.virtualoctsystem import STREAM_BUFFER_SIZE, VirtualOCTSystem

WIDTH_V, HEIGHT_V, DEPTH_V = 4, 2, 1
CHUNK = WIDTH_V * HEIGHT_V * DEPTH_V


def _chunks(count, element_size=1):
    size = CHUNK * element_size
    return [bytes([(10 * (i + 1) + j) % 256 for j in range(size)]) for i in range(count)]


def _settings(path, buffers_from_file, copy_to_ram=False, bit_depth=8):
    return {
        FILEPATH: str(path),
        BITDEPTH: bit_depth,
        WIDTH: WIDTH_V,
        HEIGHT: HEIGHT_V,
        DEPTH: DEPTH_V,
        BUFFERS_PER_VOLUME: 1,
        BUFFERS_FROM_FILE: buffers_from_file,
        WAITTIME: 0,
        COPY_TO_RAM: copy_to_ram,
    }


def _run(system, frames_wanted, timeout=10.0):
    started = threading.Event()
    system.acquisition_started.connect(lambda _s: started.set())
    worker = threading.Thread(target=system.start_acquisition, daemon=True)
    worker.start()
    assert started.wait(timeout)
    frames = []
    deadline = time.monotonic() + timeout
    buf = system.buffer
    while len(frames) < frames_wanted and time.monotonic() < deadline:
        idx = buf.current_index
        if buf.buffer_ready_array[idx]:
            frames.append(bytes(buf.buffer_array[idx]))
            buf.buffer_ready_array[idx] = False
        else:
            time.sleep(0.0001)
    system.stop_acquisition()
    worker.join(timeout)
    assert not worker.is_alive()
    return frames


def _system(tmp_path, data, **kwargs):
    path = tmp_path / "volume.raw"
    path.write_bytes(data)
    system = VirtualOCTSystem(release_delay=0)
    system.settings_loaded(_settings(path, **kwargs))
    return system


def test_no_file_selected_reports_error_and_stops():
    system = VirtualOCTSystem(release_delay=0)
    errors, stopped, gui = [], [], []
    system.error.connect(errors.append)
    system.acquisition_stopped.connect(lambda: stopped.append(True))
    system.enable_gui.connect(gui.append)
    system.start_acquisition()
    assert errors == ["No file selected for virtual OCT system."]
    assert stopped == [True]
    assert gui == [True]


def test_missing_file_reports_error(tmp_path):
    system = VirtualOCTSystem(release_delay=0)
    system.settings_loaded(_settings(tmp_path / "missing.raw", 1))
    errors, infos = [], []
    system.error.connect(errors.append)
    system.info.connect(infos.append)
    system.start_acquisition()
    assert errors == ["Unable to open file for virtual OCT system!"]
    assert "Initialization unsuccessful. Acquisition stopped." in infos


def test_update_params_publishes_acquisition_params_and_stores_settings(tmp_path):
    system = VirtualOCTSystem(release_delay=0)
    updates, stored = [], []
    system.params.updated.connect(updates.append)
    system.store_settings.connect(lambda name, s: stored.append((name, s)))
    params = SimulatorParams(
        file_path=str(tmp_path / "a.raw"),
        bit_depth=12,
        width=WIDTH_V,
        height=HEIGHT_V,
        depth=DEPTH_V,
        buffers_per_volume=3,
        buffers_from_file=1,
    )
    system.update_params(params)
    expected = AcquisitionParams(WIDTH_V, HEIGHT_V, DEPTH_V, 3, 12)
    assert system.params.params == expected
    assert updates == [expected]
    assert stored[0][0] == "Virtual OCT System"
    assert system.current_params == params


def test_settings_loaded_round_trip(tmp_path):
    system = VirtualOCTSystem(release_delay=0)
    settings = _settings(tmp_path / "v.raw", 5, copy_to_ram=True)
    stored = []
    system.store_settings.connect(lambda name, s: stored.append(s))
    system.settings_loaded(settings)
    assert stored[-1] == settings
    assert system.current_params.buffers_from_file == 5
    assert system.current_params.copy_file_to_ram is True


def test_single_buffer_from_file_repeats_first_chunk(tmp_path):
    chunks = _chunks(2)
    system = _system(tmp_path, b"".join(chunks), buffers_from_file=1)
    frames = _run(system, 4)
    assert frames == [chunks[0]] * 4


def test_two_buffers_from_file_alternate(tmp_path):
    chunks = _chunks(2)
    system = _system(tmp_path, b"".join(chunks), buffers_from_file=2)
    frames = _run(system, 4)
    assert frames == [chunks[0], chunks[1], chunks[0], chunks[1]]


def test_copy_file_to_ram_cycles_through_all_buffers(tmp_path):
    chunks = _chunks(3)
    system = _system(tmp_path, b"".join(chunks), buffers_from_file=3, copy_to_ram=True)
    frames = _run(system, 7)
    assert frames == [chunks[i % 3] for i in range(7)]


def test_large_file_streaming_rewinds(tmp_path):
    chunks = _chunks(3)
    system = _system(tmp_path, b"".join(chunks), buffers_from_file=3, copy_to_ram=False)
    allocated = []
    system.acquisition_started.connect(
        lambda s: allocated.append(s.stream_buffer.bytes_per_buffer)
    )
    frames = _run(system, 7)
    assert frames == [chunks[i % 3] for i in range(7)]
    assert allocated == [STREAM_BUFFER_SIZE]


def test_sixteen_bit_uses_two_bytes_per_element(tmp_path):
    chunks = _chunks(1, element_size=2)
    system = _system(tmp_path, chunks[0], buffers_from_file=1, bit_depth=16)
    frames = _run(system, 2)
    assert frames == [chunks[0], chunks[0]]
    assert len(frames[0]) == 2 * CHUNK


def test_memory_released_and_signals_after_stop(tmp_path):
    chunks = _chunks(1)
    system = _system(tmp_path, chunks[0], buffers_from_file=1)
    gui, stopped, infos = [], [], []
    system.enable_gui.connect(gui.append)
    system.acquisition_stopped.connect(lambda: stopped.append(True))
    system.info.connect(infos.append)
    _run(system, 1)
    assert all(b is None for b in system.buffer.buffer_array)
    assert system.stream_buffer is None
    assert gui[0] is False and gui[-1] is True
    assert stopped == [True]
    assert "Virtual OCT system initialized!" in infos
    assert system.acquisition_running is False


def test_stop_acquisition_reenables_settings_editing():
    system = VirtualOCTSystem(release_delay=0)
    system.enable_gui.emit(False)
    assert system.system_dialog.editable["width"] is False
    system.acquisition_running = True
    system.stop_acquisition()
    assert system.acquisition_running is False
    assert system.system_dialog.editable["width"] is True


@pytest.mark.parametrize("buffers_from_file", [1, 2])
def test_short_file_leaves_rest_of_buffer_zero(tmp_path, buffers_from_file):
    system = _system(tmp_path, b"\x07\x07", buffers_from_file=buffers_from_file)
    frames = _run(system, 1)
    assert frames[0][:2] == b"\x07\x07"
    assert set(frames[0][2:]) == {0}
    assert len(frames[0]) == CHUNK