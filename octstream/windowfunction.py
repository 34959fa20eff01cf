"""Spectral window functions used before the FFT."""

from __future__ import annotations

from enum import IntEnum

import numpy as np

_F32 = np.float32
_UPPER = _F32(0.999)
_LOWER = _F32(0.0001)


class WindowType(IntEnum):
    HANNING = 0
    GAUSS = 1
    SINE = 2
    LANCZOS = 3
    RECTANGULAR = 4
    FLAT_TOP = 5


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


class WindowFunction:
    """A window of ``size`` float32 samples, recomputed lazily on access."""

    def __init__(
        self,
        window_type: WindowType = WindowType.HANNING,
        center_position: float = 0.0,
        fill_factor: float = 0.0,
        size: int = 0,
    ) -> None:
        self._type = WindowType.HANNING
        self._center_position = _F32(0)
        self._fill_factor = _F32(0)
        self._size = 0
        self._data = np.zeros(0, dtype=np.float32)
        self._changed = False
        self.set_function_params(window_type, center_position, fill_factor, size)

    @property
    def size(self) -> int:
        return self._size

    @property
    def window_type(self) -> WindowType:
        return self._type

    @property
    def center_position(self) -> float:
        return float(self._center_position)

    @property
    def fill_factor(self) -> float:
        return float(self._fill_factor)

    @property
    def data(self) -> np.ndarray:
        """The window samples, recalculated if parameters changed."""
        if self._changed:
            self._update_data()
            self._changed = False
        return self._data

    def set_function_params(
        self, window_type: WindowType, center_position: float, fill_factor: float, size: int
    ) -> None:
        """Set type, centre (clamped to [0, 1]), fill factor and size."""
        window_type = WindowType(window_type)
        center = _F32(center_position)
        fill = _F32(fill_factor)
        if self._size != size:
            self.set_size(size)
        if (
            self._type != window_type
            or self._center_position != center
            or self._fill_factor != fill
        ):
            self._type = window_type
            self._center_position = _F32(min(max(center, _F32(0)), _F32(1)))
            self._fill_factor = fill
            self._changed = True

    def set_size(self, size: int) -> None:
        """Resize the window; raises ValueError for a negative size."""
        if size < 0:
            raise ValueError("window size must not be negative")
        if self._size != size:
            self._data = np.zeros(size, dtype=np.float32)
            self._size = size
            self._changed = True

    def _update_data(self) -> None:
        if self._size == 0:
            return
        compute = {
            WindowType.HANNING: self._hanning,
            WindowType.GAUSS: self._gauss,
            WindowType.SINE: self._sine,
            WindowType.LANCZOS: self._lanczos,
            WindowType.RECTANGULAR: self._rectangular,
            WindowType.FLAT_TOP: self._flat_top,
        }[self._type]
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            self._data = compute().astype(np.float32)

    def _normalized_positions(self) -> tuple[np.ndarray, np.ndarray]:
        """Return the position of every sample within the fill range and an outside mask."""
        size_f = _F32(self._size)
        width = int(self._fill_factor * size_f)
        center = int(self._center_position * size_f)
        min_pos = center - _trunc_div(width, 2)
        max_pos = min_pos + width
        if max_pos < min_pos:
            min_pos = max_pos
        xi = (np.arange(self._size, dtype=np.int64) - min_pos).astype(np.float32)
        xi_norm = xi / (_F32(width) - _F32(1))
        outside = (xi_norm > _UPPER) | (xi_norm < _LOWER)
        return xi_norm, outside

    def _rectangular(self) -> np.ndarray:
        _, outside = self._normalized_positions()
        return np.where(outside, 0.0, 1.0)

    def _hanning(self) -> np.ndarray:
        x, outside = self._normalized_positions()
        values = 0.5 * (1.0 - np.cos(2.0 * np.pi * x.astype(np.float64)))
        return np.where(outside, 0.0, values)

    def _gauss(self) -> np.ndarray:
        center = int(self._center_position * _F32(self._size))
        xi = (np.arange(self._size, dtype=np.int64) - center).astype(np.float32)
        x = (xi / (_F32(self._size) - _F32(1))) / self._fill_factor
        return np.exp(_F32(-10) * np.power(x, _F32(2)))

    def _sine(self) -> np.ndarray:
        x, outside = self._normalized_positions()
        return np.where(outside, 0.0, np.sin(np.pi * x.astype(np.float64)))

    def _lanczos(self) -> np.ndarray:
        x, outside = self._normalized_positions()
        arg = (_F32(2) * x - _F32(1)).astype(np.float64)
        zero = arg == 0
        safe = np.where(zero, 1.0, arg)
        values = np.where(zero, 1.0, np.sin(np.pi * safe) / (np.pi * safe))
        return np.where(outside, 0.0, values)

    def _flat_top(self) -> np.ndarray:
        x, outside = self._normalized_positions()
        a0, a1, a2, a3, a4 = (
            float(_F32(c))
            for c in (0.215578948, 0.416631580, 0.277263158, 0.083578947, 0.006947368)
        )
        xd = x.astype(np.float64)
        values = (
            a0
            - a1 * np.cos(2 * np.pi * xd)
            + a2 * np.cos(4 * np.pi * xd)
            - a3 * np.cos(6 * np.pi * xd)
            + a4 * np.cos(8 * np.pi * xd)
        )
        return np.where(outside, 0.0, values)