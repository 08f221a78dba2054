# -*- coding: utf-8 -*-
"""
Convolution Filters - Kernel-weighted neighbourhood sums with clamped borders.

For output pixel ``(x, y)`` every kernel cell ``(dx, dy)`` reads the
source at ``(clamp(x + dx), clamp(y + dy))`` and weighs it by
``kernel.weights[dx + rx, dy + ry]``. Border pixels are
replicated, not zero-padded or wrapped. Products are accumulated per
channel in float64, the sum is truncated toward zero and clamped to
[0, 255].

Whole columns are computed with ``scipy.ndimage.correlate`` over a slab
of source columns whose x-coordinates have already been clamped; its
``'nearest'`` mode supplies the same clamping along y. ``pixel_at``
gathers the neighbourhood directly and gives the same result.

- ``Convolution``: any caller-supplied ``Kernel``
- ``Blur``: 3x3 box
- ``GaussianBlur``: normalised Gaussian, radius 3, sigma 2
- ``Sharpness`` / ``IncreaseSharpness``: fixed sharpening kernels
- ``MotionBlur``: diagonal line kernel
- ``Sobel``: gradient magnitude from two kernels (not a single convolution)

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
from abc import abstractmethod
from typing import Annotated, Any, Dict, Sequence, Union

# Third-party
import numpy as np
from scipy.ndimage import correlate

# pixelfx internal
from pixelfx.buffer import Color, PixelBuffer
from pixelfx.processing.base import (
    Filter,
    check_coordinate,
    clamp_channels,
    round_half_up,
)
from pixelfx.processing.catalog import register_filter
from pixelfx.processing.kernels import (
    BLUR,
    INCREASE_SHARPNESS,
    SHARPNESS,
    SOBEL_X,
    SOBEL_Y,
    Kernel,
)
from pixelfx.processing.params import Desc, Range
from pixelfx.processing.versioning import processor_tags, processor_version
from pixelfx.vocabulary import FilterCategory


def neighbourhood(source: PixelBuffer, x: int, y: int, kernel: Kernel) -> np.ndarray:
    """Clamped ``(kh, kw, 3)`` float64 patch of *source* centred on ``(x, y)``."""
    cols = np.clip(np.arange(x - kernel.radius_x, x + kernel.radius_x + 1),
                   0, source.width - 1)
    rows = np.clip(np.arange(y - kernel.radius_y, y + kernel.radius_y + 1),
                   0, source.height - 1)
    return source.data[np.ix_(rows, cols)].astype(np.float64)


def column_slab(source: PixelBuffer, x: int, radius_x: int) -> np.ndarray:
    """Source columns ``x - r .. x + r`` (clamped) as an ``(h, 2r+1, 3)`` float64 slab."""
    cols = np.clip(np.arange(x - radius_x, x + radius_x + 1), 0, source.width - 1)
    return source.data[:, cols].astype(np.float64)


def correlate_column(slab: np.ndarray, kernel: Kernel) -> np.ndarray:
    """Weighted sums for the centre column of *slab*, shape ``(h, 3)``.

    The slab is exactly as wide as the kernel, so the centre column never
    reaches the slab's x-boundary; only the y-boundary uses ``'nearest'``.
    """
    centre = kernel.radius_x
    return np.stack(
        [correlate(slab[:, :, c], kernel.grid, mode='nearest')[:, centre]
         for c in range(3)],
        axis=1,
    )


class MatrixFilter(Filter):
    """Single-kernel convolution.

    Subclasses implement ``build_kernel``; the kernel is built once, when
    the filter is constructed.
    """

    def __init__(self) -> None:
        self.__post_init__()

    def __post_init__(self) -> None:
        self._kernel = self.build_kernel()

    @abstractmethod
    def build_kernel(self) -> Kernel:
        ...

    @property
    def kernel(self) -> Kernel:
        return self._kernel

    def pixel_at(self, source: PixelBuffer, x: int, y: int) -> Color:
        check_coordinate(source, x, y)
        patch = neighbourhood(source, x, y, self._kernel)
        sums = np.einsum('ijc,ij->c', patch, self._kernel.grid)
        out = clamp_channels(np.trunc(sums).astype(np.int64))
        return Color(*(int(c) for c in out))

    def column_at(self, source: PixelBuffer, x: int) -> np.ndarray:
        slab = column_slab(source, x, self._kernel.radius_x)
        sums = correlate_column(slab, self._kernel)
        return clamp_channels(np.trunc(sums).astype(np.int64))


@processor_version('1.0.0')
@processor_tags(category=FilterCategory.CONVOLUTION,
                description='Convolution with a caller-supplied kernel')
class Convolution(MatrixFilter):
    """Convolution with an arbitrary kernel.

    Parameters
    ----------
    kernel : Kernel or array_like
        Odd-sized weights indexed ``[dx + rx, dy + ry]``. Not renormalised.

    Examples
    --------
    >>> identity = Convolution(Kernel.identity(3))
    >>> identity.process(image) == image
    True
    """

    def __init__(self, kernel: Union[Kernel, Sequence[Sequence[float]]]) -> None:
        self._weights = kernel if isinstance(kernel, Kernel) else Kernel(kernel)
        super().__init__()

    def build_kernel(self) -> Kernel:
        return self._weights

    @property
    def params(self) -> Dict[str, Any]:
        return {'kernel': self._weights}


@register_filter('blur')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.CONVOLUTION,
                description='3x3 box blur')
class Blur(MatrixFilter):
    """Uniform 3x3 average (weights ``1/9``)."""

    def build_kernel(self) -> Kernel:
        return BLUR


@register_filter('gaussian')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.CONVOLUTION,
                description='Gaussian blur')
class GaussianBlur(MatrixFilter):
    """Gaussian blur with a normalised ``(2r+1) x (2r+1)`` kernel.

    Parameters
    ----------
    radius : int
        Kernel radius ``r``. Default is 3.
    sigma : float
        Standard deviation in pixels. Default is 2.0.
    """

    radius: Annotated[int, Range(min=0, max=50),
                      Desc('Kernel radius')] = 3
    sigma: Annotated[float, Range(min=0.01, max=100.0),
                     Desc('Gaussian standard deviation')] = 2.0

    def build_kernel(self) -> Kernel:
        return Kernel.gaussian(self.radius, self.sigma)


@register_filter('sharpness')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.CONVOLUTION,
                description='Strong 8-neighbour sharpening')
class Sharpness(MatrixFilter):
    """Sharpen with ``[[-1,-1,-1],[-1,9,-1],[-1,-1,-1]]``."""

    def build_kernel(self) -> Kernel:
        return SHARPNESS


@register_filter('increase_sharpness')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.CONVOLUTION,
                description='4-neighbour sharpening')
class IncreaseSharpness(MatrixFilter):
    """Sharpen with ``[[0,-1,0],[-1,5,-1],[0,-1,0]]``."""

    def build_kernel(self) -> Kernel:
        return INCREASE_SHARPNESS


@register_filter('motion_blur')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.CONVOLUTION,
                description='Diagonal motion blur')
class MotionBlur(MatrixFilter):
    """Average along the main diagonal of an ``n x n`` window.

    Parameters
    ----------
    length : int
        Window side ``n``; must be odd. Default is 7.
    """

    length: Annotated[int, Range(min=1, max=99),
                      Desc('Diagonal length (odd)')] = 7

    def build_kernel(self) -> Kernel:
        return Kernel.motion(self.length)


@register_filter('sobel')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.CONVOLUTION,
                description='Sobel gradient magnitude')
class Sobel(Filter):
    """Sobel edge magnitude.

    Each channel is correlated with the horizontal and vertical Sobel
    kernels independently, giving ``(Gx, Gy)``; the output channel is
    ``clamp(round(sqrt(Gx**2 + Gy**2)))``.
    """

    kernel_x = SOBEL_X
    kernel_y = SOBEL_Y

    def pixel_at(self, source: PixelBuffer, x: int, y: int) -> Color:
        check_coordinate(source, x, y)
        patch = neighbourhood(source, x, y, self.kernel_x)
        gx = np.einsum('ijc,ij->c', patch, self.kernel_x.grid)
        gy = np.einsum('ijc,ij->c', patch, self.kernel_y.grid)
        out = clamp_channels(round_half_up(np.hypot(gx, gy)))
        return Color(*(int(c) for c in out))

    def column_at(self, source: PixelBuffer, x: int) -> np.ndarray:
        slab = column_slab(source, x, self.kernel_x.radius_x)
        gx = correlate_column(slab, self.kernel_x)
        gy = correlate_column(slab, self.kernel_y)
        return clamp_channels(round_half_up(np.hypot(gx, gy)))
