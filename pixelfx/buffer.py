# -*- coding: utf-8 -*-
"""
Pixel Buffer - Rectangular grid of 8-bit RGB pixels.

``PixelBuffer`` is the only mutable image state in pixelfx. It wraps a
``(height, width, 3)`` ``uint8`` numpy array and exposes coordinate
based reads and writes using ``(x, y)`` ordering, where ``x`` is the
column and ``y`` the row. Filters read the source through
``get_pixel`` / ``clamp`` and write whole columns or rows into a freshly
allocated destination.

License
-------
MIT License
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
from typing import NamedTuple, Tuple

# Third-party
import numpy as np

# pixelfx internal
from pixelfx.exceptions import InvalidDimensionsError, ValidationError


class Color(NamedTuple):
    """An RGB triple with channels in [0, 255]."""

    r: int
    g: int
    b: int


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)


class PixelBuffer:
    """Dense 8-bit RGB raster addressed by ``(x, y)``.

    Parameters
    ----------
    width : int
        Number of columns. Must be >= 1.
    height : int
        Number of rows. Must be >= 1.

    Raises
    ------
    InvalidDimensionsError
        If either dimension is smaller than 1.

    Examples
    --------
    >>> buf = PixelBuffer(4, 3)
    >>> buf.set_pixel(1, 2, Color(10, 20, 30))
    >>> buf.get_pixel(1, 2)
    Color(r=10, g=20, b=30)
    """

    __slots__ = ('_data',)

    def __init__(self, width: int, height: int) -> None:
        _validate_dimensions(width, height)
        self._data = np.zeros((height, width, 3), dtype=np.uint8)

    @classmethod
    def from_array(cls, array: np.ndarray, copy: bool = True) -> 'PixelBuffer':
        """Wrap a ``(height, width, 3)`` array.

        Parameters
        ----------
        array : np.ndarray
            Integer array with three channels in the last axis. Values
            outside [0, 255] are rejected.
        copy : bool
            Copy the data (default). When False and *array* is already
            ``uint8``, the buffer shares memory with *array*.

        Returns
        -------
        PixelBuffer

        Raises
        ------
        ValidationError
            If the array is not 3-channel integer data in range.
        InvalidDimensionsError
            If the array has a zero-length spatial axis.
        """
        if not isinstance(array, np.ndarray):
            raise ValidationError(
                f"array must be a numpy ndarray, got {type(array).__name__}"
            )
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValidationError(
                f"array must have shape (height, width, 3), got {array.shape}"
            )
        _validate_dimensions(array.shape[1], array.shape[0])
        if not np.issubdtype(array.dtype, np.integer):
            raise ValidationError(
                f"array must hold integer channels, got dtype {array.dtype}"
            )
        if array.dtype != np.uint8:
            if array.min() < 0 or array.max() > 255:
                raise ValidationError("channel values must lie in [0, 255]")
            array = array.astype(np.uint8)
        elif copy:
            array = array.copy()

        buf = cls.__new__(cls)
        buf._data = array
        return buf

    @classmethod
    def like(cls, other: 'PixelBuffer') -> 'PixelBuffer':
        """Allocate a black buffer with the same dimensions as *other*."""
        return cls(other.width, other.height)

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """``(width, height)``."""
        return self.width, self.height

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the underlying ``(height, width, 3)`` array."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the pixel data."""
        return self._data.copy()

    def copy(self) -> 'PixelBuffer':
        return PixelBuffer.from_array(self._data, copy=True)

    def read_only(self) -> 'PixelBuffer':
        """Return a buffer sharing this data that rejects writes.

        Filters receive this view so that a run can never modify its
        source.
        """
        return PixelBuffer.from_array(self.data, copy=False)

    # -----------------------------------------------------------------
    # Coordinate access
    # -----------------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def clamp(self, x: int, y: int) -> Tuple[int, int]:
        """Clamp a coordinate pair into ``[0, W) x [0, H)``."""
        return (min(max(x, 0), self.width - 1),
                min(max(y, 0), self.height - 1))

    def get_pixel(self, x: int, y: int) -> Color:
        """Read the pixel at column *x*, row *y*.

        Raises
        ------
        IndexError
            If the coordinate lies outside the buffer.
        """
        self._check_bounds(x, y)
        r, g, b = self._data[y, x]
        return Color(int(r), int(g), int(b))

    def set_pixel(self, x: int, y: int, color: Tuple[int, int, int]) -> None:
        """Write *color* at column *x*, row *y*.

        Raises
        ------
        IndexError
            If the coordinate lies outside the buffer.
        ValidationError
            If a channel lies outside [0, 255].
        """
        self._check_bounds(x, y)
        if any(c < 0 or c > 255 for c in color):
            raise ValidationError(f"channel values must lie in [0, 255], got {tuple(color)}")
        self._data[y, x] = color

    def write_column(self, x: int, values: np.ndarray) -> None:
        """Write a full ``(height, 3)`` column of pixels at column *x*."""
        self._check_bounds(x, 0)
        self._data[:, x] = values

    def write_row(self, y: int, x0: int, values: np.ndarray) -> None:
        """Write ``values`` (shape ``(n, 3)``) into row *y* starting at *x0*."""
        self._check_bounds(x0, y)
        if len(values):
            self._check_bounds(x0 + len(values) - 1, y)
        self._data[y, x0:x0 + len(values)] = values

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} buffer"
            )

    # -----------------------------------------------------------------
    # Dunder
    # -----------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self._data.shape == other._data.shape
                and bool(np.array_equal(self._data, other._data)))

    __hash__ = None

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"


def _validate_dimensions(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise InvalidDimensionsError(
            f"image dimensions must be >= 1, got {width}x{height}"
        )
