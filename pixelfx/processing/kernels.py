# -*- coding: utf-8 -*-
"""
Kernels and Structuring Elements - Immutable neighbourhood definitions.

``Kernel`` holds a real-valued, odd-sized 2D weight matrix used by the
convolution filters. ``StructuringElement`` holds the boolean mask
scanned by the morphological filters. Both are built once when a filter
is constructed and are immutable afterwards: their arrays are copied on
construction and flagged read-only.

Kernel weights are indexed x first: ``weights[dx + radius_x, dy + radius_y]``
is the weight applied to the source pixel at offset ``(dx, dy)``, so the
first axis runs along image columns. ``Kernel.grid`` is the same matrix
laid out like an image (rows along y). Structuring-element masks are
laid out like an image directly.

Dependencies
------------
scipy

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
from typing import Sequence, Tuple, Union

# Third-party
import numpy as np
from scipy.signal.windows import gaussian as _gaussian_window

# pixelfx internal
from pixelfx.exceptions import InvalidDimensionsError, ValidationError


def _validate_odd_shape(shape: Tuple[int, ...], what: str) -> None:
    if len(shape) != 2:
        raise ValidationError(f"{what} must be 2D, got {len(shape)}D")
    size = "x".join(str(n) for n in shape)
    if min(shape) < 1:
        raise InvalidDimensionsError(f"{what} dimensions must be >= 1, got {size}")
    if any(n % 2 == 0 for n in shape):
        raise InvalidDimensionsError(f"{what} dimensions must be odd, got {size}")


class Kernel:
    """Immutable odd-sized 2D convolution weights.

    Parameters
    ----------
    weights : array_like
        ``(width, height)`` real weights indexed ``[dx + rx, dy + ry]``;
        both sides odd and >= 1.

    Raises
    ------
    InvalidDimensionsError
        If a side is zero or even.
    ValidationError
        If the weights are not 2D or contain non-finite values.
    """

    __slots__ = ('_weights', '_grid')

    def __init__(self, weights: Union[np.ndarray, Sequence[Sequence[float]]]) -> None:
        arr = np.array(weights, dtype=np.float64)
        _validate_odd_shape(arr.shape, 'kernel')
        if not np.all(np.isfinite(arr)):
            raise ValidationError("kernel weights must be finite")
        arr.flags.writeable = False
        self._weights = arr
        self._grid = arr.T

    # -----------------------------------------------------------------
    # Generators
    # -----------------------------------------------------------------
    @classmethod
    def box(cls, size: int = 3) -> 'Kernel':
        """Uniform ``size x size`` kernel with weights ``1 / size**2``."""
        return cls(np.full((size, size), 1.0 / (size * size)))

    @classmethod
    def gaussian(cls, radius: int = 3, sigma: float = 2.0) -> 'Kernel':
        """Normalised ``(2r+1) x (2r+1)`` kernel of ``exp(-(i²+j²)/(2σ²))``."""
        if radius < 0:
            raise InvalidDimensionsError(f"radius must be >= 0, got {radius}")
        if sigma <= 0:
            raise ValidationError(f"sigma must be > 0, got {sigma}")
        window = _gaussian_window(2 * radius + 1, std=sigma, sym=True)
        weights = np.outer(window, window)
        return cls(weights / weights.sum())

    @classmethod
    def motion(cls, length: int = 7) -> 'Kernel':
        """Diagonal ``length x length`` kernel with ``1 / length`` on the diagonal."""
        if length < 1:
            raise InvalidDimensionsError(f"length must be >= 1, got {length}")
        return cls(np.eye(length) / length)

    @classmethod
    def identity(cls, size: int = 3) -> 'Kernel':
        """All-zero ``size x size`` kernel with 1 at the centre."""
        weights = np.zeros((size, size))
        if size >= 1:
            weights[size // 2, size // 2] = 1.0
        return cls(weights)

    # -----------------------------------------------------------------
    # Properties
    # -----------------------------------------------------------------
    @property
    def weights(self) -> np.ndarray:
        """``(width, height)`` weights, x offset first."""
        return self._weights

    @property
    def grid(self) -> np.ndarray:
        """Read-only ``(height, width)`` view of the weights, y offset first."""
        return self._grid

    @property
    def width(self) -> int:
        return self._weights.shape[0]

    @property
    def height(self) -> int:
        return self._weights.shape[1]

    @property
    def radius_x(self) -> int:
        return self.width // 2

    @property
    def radius_y(self) -> int:
        return self.height // 2

    @property
    def center(self) -> Tuple[int, int]:
        """``(x, y)`` index of the centre cell."""
        return self.radius_x, self.radius_y

    @property
    def total(self) -> float:
        return float(self._weights.sum())

    def is_normalized(self, atol: float = 1e-9) -> bool:
        return abs(self.total - 1.0) <= atol

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Kernel):
            return NotImplemented
        return (self._weights.shape == other._weights.shape
                and bool(np.array_equal(self._weights, other._weights)))

    def __hash__(self) -> int:
        return hash((self._weights.shape, self._weights.tobytes()))

    def __repr__(self) -> str:
        return f"Kernel({self.width}x{self.height}, total={self.total:.6g})"


BLUR = Kernel.box(3)
SHARPNESS = Kernel([[-1, -1, -1],
                    [-1, 9, -1],
                    [-1, -1, -1]])
INCREASE_SHARPNESS = Kernel([[0, -1, 0],
                             [-1, 5, -1],
                             [0, -1, 0]])
# x first: SOBEL_X weights rise along dx, SOBEL_Y along dy
SOBEL_X = Kernel([[-1, -2, -1],
                  [0, 0, 0],
                  [1, 2, 1]])
SOBEL_Y = Kernel([[-1, 0, 1],
                  [-2, 0, 2],
                  [-1, 0, 1]])


class StructuringElement:
    """Immutable boolean neighbourhood mask for morphology.

    Parameters
    ----------
    mask : array_like
        ``(height, width)`` booleans; both sides odd and >= 1. Cells set
        to True take part in the min/max scan.
    """

    __slots__ = ('_mask',)

    def __init__(self, mask: Union[np.ndarray, Sequence[Sequence[bool]]]) -> None:
        arr = np.array(mask, dtype=bool)
        _validate_odd_shape(arr.shape, 'structuring element')
        if not arr.any():
            raise ValidationError("structuring element must contain a True cell")
        arr.flags.writeable = False
        self._mask = arr

    @classmethod
    def square(cls, size: int = 5) -> 'StructuringElement':
        """All-True ``size x size`` element."""
        return cls(np.ones((size, size), dtype=bool))

    @property
    def mask(self) -> np.ndarray:
        return self._mask

    @property
    def width(self) -> int:
        return self._mask.shape[1]

    @property
    def height(self) -> int:
        return self._mask.shape[0]

    @property
    def center(self) -> Tuple[int, int]:
        """``(MW // 2, MH // 2)``."""
        return self.width // 2, self.height // 2

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StructuringElement):
            return NotImplemented
        return bool(np.array_equal(self._mask, other._mask))

    def __hash__(self) -> int:
        return hash((self._mask.shape, self._mask.tobytes()))

    def __repr__(self) -> str:
        return f"StructuringElement({self.width}x{self.height})"
