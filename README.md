# octstream

Building blocks for software that acquires optical coherence tomography (OCT) raw data.

| Module | Contents |
| --- | --- |
| `octstream.plugin` | `Signal`, `PluginType`, `Plugin` |
| `octstream.acquisition` | `AcquisitionBuffer`, `BufferAllocationError`, `AcquisitionParams`, `AcquisitionParameter`, `AcquisitionSystem` |
| `octstream.extension` | `DisplayStyle`, `Extension` |
| `octstream.windowfunction` | `WindowType`, `WindowFunction` |
| `octstream.virtualoctsettings` | `SimulatorParams`, `VirtualOCTSystemSettings` and the settings keys |
| `octstream.virtualoctsystem` | `VirtualOCTSystem` |
| `octstream.demoextension` | `DemoParams`, `DemoExtensionForm`, `DemoExtension` |
| `octstream.trackball` | `Quaternion`, `TrackMode`, `TrackBall` |
| `octstream.stringspinbox` | `StepEnabled`, `StringSpinBox` |
| `octstream.systemmanager` | `SystemManager` |
| `octstream.systemchooser` | `SystemChooser` |
| `octstream.outputwindow` | `OutputWindow` |

The only runtime dependency is numpy.

## Installation

From a checkout of the package:

```
pip install .
```

To include the test dependencies:

```
pip install ".[test]"
```

## Signals

Components talk to each other through `Signal` objects:

- `connect(slot)` registers a callable. It raises `TypeError` if the slot is not callable.
- `emit(*args)` calls every connected slot in the order they were connected.
- `disconnect(slot)` removes one connection. It raises `ValueError` if the slot was not connected.

```python
from octstream.plugin import Signal

changed = Signal()
changed.connect(print)
changed.emit("hello")
```

Every `Plugin` has a `name`, a `type` (`PluginType.SYSTEM` or `PluginType.EXTENSION`) and a `settings_map`. It also carries these signals:

- `info` and `error`
- `store_settings`
- `set_klin_coeffs_request` and `set_disp_comp_coeffs_request`
- `start_processing_request` and `stop_processing_request`

## Acquisition buffers

```python
from octstream.acquisition import AcquisitionBuffer

buffer = AcquisitionBuffer()
buffer.allocate_memory(2, 4096)   # two zeroed uint8 numpy arrays
buffer.buffer_ready_array         # [False, False]
buffer.release_memory()           # entries become None, flags False
```

`allocate_memory` raises `BufferAllocationError` in two cases: when the count or the size is negative, and when numpy cannot allocate the memory. Before raising, it emits the message on the buffer's `error` signal.

`AcquisitionParameter` holds a frozen `AcquisitionParams` record with these fields:

- `samples_per_line`
- `ascans_per_bscan`
- `bscans_per_buffer`
- `buffers_per_volume`
- `bit_depth`

Calling `update(new_params)` stores the record and emits it on `updated`.

## Writing an acquisition system

Subclass `AcquisitionSystem` and implement `start_acquisition` and `stop_acquisition`. While acquiring, the system should do the following:

1. Write data into `self.buffer.buffer_array`.
2. Set `self.buffer.current_index`.
3. Set the buffer's flag in `buffer_ready_array` to `True` once it may be processed.
4. Set `acquisition_running` while running.
5. Emit `acquisition_started` (with the system as argument) when acquisition begins, and `acquisition_stopped` when it ends.

A consumer reads a buffer whose flag is `True` and then sets the flag back to `False`, so that the system may reuse the buffer.

## Virtual OCT system

`VirtualOCTSystem` replays a raw file as if it came from real hardware. Settings are loaded with `settings_loaded`, using the keys defined in `octstream.virtualoctsettings`:

- `file_path`, `bit_depth`
- `width`, `height`, `depth`
- `buffers_per_volume`, `buffers_from_file`
- `wait_time` (in microseconds)
- `copy_file_to_ram`

Loading settings also publishes the matching `AcquisitionParams` and emits `store_settings`.

```python
import threading

from octstream.virtualoctsystem import VirtualOCTSystem

system = VirtualOCTSystem(release_delay=0.0)
system.settings_loaded({
    "file_path": "volume.raw",
    "bit_depth": 12,
    "width": 1024,
    "height": 512,
    "depth": 8,
    "buffers_per_volume": 1,
    "buffers_from_file": 2,
    "wait_time": 1000,
    "copy_file_to_ram": False,
})

def consume(sys_):
    buf = sys_.buffer
    # read buf.buffer_array[buf.current_index] when its ready flag is set,
    # then set buf.buffer_ready_array[...] = False

system.acquisition_started.connect(consume)
worker = threading.Thread(target=system.start_acquisition)
worker.start()
# ...
system.stop_acquisition()
worker.join()
```

Each buffer holds `width * height * depth * ceil(bit_depth / 8)` bytes. How the file is replayed depends on the settings:

| Settings | Behaviour |
| --- | --- |
| `buffers_from_file` ≤ 2 | Two buffers are read once (the second from the file's start when the value is not 2) and then alternated. |
| More, with `copy_file_to_ram` | All buffers are read into memory first and then cycled. |
| More, without `copy_file_to_ram` | The file is streamed and rewound after `buffers_from_file` buffers. |

`start_acquisition` blocks until `stop_acquisition` is called. It then waits `release_delay` seconds and releases the buffers.

If no file is set (a path shorter than two characters) or the file cannot be opened, it does the following:

- emits `error`;
- emits `acquisition_stopped`;
- returns.

`VirtualOCTSystemSettings` keeps two sets of values. The edited values live in `fields` and the applied values in `params`. Its methods are:

| Method | What it does |
| --- | --- |
| `apply()` | Emits `settings_updated`. |
| `enable_gui(enable)` | Switches the `editable` flags. The wait time always stays editable. |
| `check_width_value()` | Rounds an odd width down. |
| `select_file(chooser)` | Asks a callable for a path. An empty answer keeps the current path. |

## Extensions

`Extension` declares three abstract methods: `get_widget`, `activate_extension` and `deactivate_extension`. Its data callbacks `raw_data_received` and `processed_data_received` do nothing by default. `enable_raw_data_grabbing` and `enable_processed_data_grabbing` set the flags that say whether a received buffer may be read.

`DemoExtension` is a worked example. While it is active, it sums the first line of every processed buffer with 9 to 16 bit depth (read as `uint16`) into `last_sum`. Its `DemoExtensionForm` stores the settings `demo_like` and `demo_param`.

## Window functions

```python
from octstream.windowfunction import WindowFunction, WindowType

window = WindowFunction(WindowType.HANNING, 0.5, 0.9, 1024)
samples = window.data          # numpy array of 1024 float32 values
window.set_function_params(WindowType.GAUSS, 0.5, 0.9, 1024)
```

The available types are `HANNING`, `GAUSS`, `SINE`, `LANCZOS`, `RECTANGULAR` and `FLAT_TOP`.

- The center position is clamped to `[0, 1]`.
- Samples outside the range covered by the fill factor are zero, except for `GAUSS`, which uses the fill factor as its width.
- The data is recomputed only when it is read after a change.
- `set_size` raises `ValueError` for a negative size.

## Helpers

**`TrackBall`** turns pointer positions in `[-1, 1] x [-1, 1]` into a `Quaternion` rotation.

- It works in `TrackMode.PLANE` or `TrackMode.SPHERE`.
- Drive it with `push`, `move` and `release`.
- `rotation()` returns the current rotation, and the ball keeps spinning after release.
- `stop()` freezes the rotation and `start()` resumes it.
- A `clock` callable returning milliseconds can be injected.

**`StringSpinBox`** steps through a list of strings.

- `set_strings` raises `ValueError` for an empty list.
- `step_by` clamps to the list and raises `IndexError` when there are no strings.
- `set_index` ignores indexes outside the list.
- `step_enabled()` returns `StepEnabled` flags.

**`SystemManager`** registers acquisition systems by name.

- Duplicates and `None` are ignored.
- `get_system_by_name` raises `KeyError` for an unknown name.

**`SystemChooser.select_system(names)`** returns the name the user picks, or `""`.

- By default it asks on the console.
- An `interact` callable can be passed instead.

**`OutputWindow`** is a named base class with `settings()` and `apply_settings(settings)`.

## What the package does not do

The package provides the acquisition side and the plugin interfaces only. It does not contain any of the following:

- an application or command-line program;
- a graphical user interface;
- a processing pipeline (FFT, resampling, dispersion compensation);
- display windows;
- recording to disk;
- loading of plugins from shared libraries.

The window functions and buffers are meant to be used by such code, not to replace it.

## Running the tests

```
pytest
```