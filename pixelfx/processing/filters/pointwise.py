# -*- coding: utf-8 -*-
"""
Pointwise Filters - Single-pass colour and coordinate remaps.

Every filter here computes an output pixel from at most one source pixel
and runs under the default column driver. Each implements
``PixelMapFilter.evaluate`` on coordinate arrays, so one code path
serves both ``pixel_at`` and whole-column evaluation.

- ``Invert``: ``255 - channel``
- ``GreyScale``: luma ``round(0.299R + 0.587G + 0.114B)`` on all channels
- ``Sepia``: luma with a warm ``(+2k, +k/2, -k)`` offset
- ``SepiaInEllipse``: ``Sepia`` inside the centred ellipse only
- ``IncreaseBrightness``: add a constant to each channel
- ``Shift``: translate right, exposing black on the left
- ``GlassEffect``: sample from a randomly jittered coordinate
- ``Quantization``: snap luma up to the next multiple of a step
- ``Mirror``: reflect the right half onto the left half

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
from typing import Annotated, Optional

# Third-party
import numpy as np

# pixelfx internal
from pixelfx.buffer import PixelBuffer
from pixelfx.processing.base import PixelMapFilter, round_half_up
from pixelfx.processing.catalog import register_filter
from pixelfx.processing.params import Desc, Range
from pixelfx.processing.versioning import processor_tags, processor_version
from pixelfx.vocabulary import FilterCategory

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def _gather(source: PixelBuffer, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Source pixels at ``(xs, ys)`` as an ``(n, 3)`` int64 array."""
    return source.data[ys, xs].astype(np.int64)


def intensity(pixels: np.ndarray) -> np.ndarray:
    """Rounded luma of an ``(n, 3)`` pixel array, shape ``(n,)``."""
    return round_half_up(pixels @ LUMA_WEIGHTS)


def _grey(values: np.ndarray) -> np.ndarray:
    return np.repeat(values[:, np.newaxis], 3, axis=1)


@register_filter('invert')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.POINTWISE,
                description='Negative image')
class Invert(PixelMapFilter):
    """Replace every channel with ``255 - channel``.

    Applying ``Invert`` twice restores the original image.
    """

    def evaluate(self, source, xs, ys):
        return 255 - _gather(source, xs, ys)


@register_filter('grey_scale')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.POINTWISE,
                description='Luma greyscale')
class GreyScale(PixelMapFilter):
    """Set all three channels to ``round(0.299R + 0.587G + 0.114B)``."""

    def evaluate(self, source, xs, ys):
        return _grey(intensity(_gather(source, xs, ys)))


@register_filter('sepia')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.POINTWISE,
                description='Warm-toned greyscale')
class Sepia(PixelMapFilter):
    """Greyscale with a warm tint.

    With luma ``I`` and depth ``k`` the output is
    ``(I + 2k, I + k // 2, I - k)``, each channel clamped.

    Parameters
    ----------
    depth : int
        Tint strength ``k``. Default is 20.
    """

    depth: Annotated[int, Range(min=0, max=255),
                     Desc('Sepia tint strength k')] = 20

    def tint(self, luma: np.ndarray) -> np.ndarray:
        k = self.depth
        return np.stack([luma + 2 * k, luma + k // 2, luma - k], axis=1)

    def evaluate(self, source, xs, ys):
        return self.tint(intensity(_gather(source, xs, ys)))


@register_filter('sepia_ellipse')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.POINTWISE,
                description='Sepia inside the centred ellipse')
class SepiaInEllipse(Sepia):
    """Sepia applied only inside a centred ellipse.

    A pixel is inside when
    ``(x - W//2)**2 / (H//2)**2 + (y - H//2)**2 / (H//2)**2 < 1``.
    Both terms are normalised by the half-height, so the region is a
    circle of radius ``H//2`` centred on the image. Pixels outside pass
    through unchanged. An image one pixel tall has no inside.
    """

    def evaluate(self, source, xs, ys):
        pixels = _gather(source, xs, ys)
        half_h = source.height // 2
        if half_h == 0:
            return pixels
        norm = float(half_h * half_h)
        inside = (
            (xs - source.width // 2) ** 2 / norm
            + (ys - half_h) ** 2 / norm
        ) < 1
        toned = self.tint(intensity(pixels))
        return np.where(inside[:, np.newaxis], toned, pixels)


@register_filter('increase_brightness')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.POINTWISE,
                description='Add a constant to every channel')
class IncreaseBrightness(PixelMapFilter):
    """Add ``delta`` to every channel, clamped to [0, 255].

    Parameters
    ----------
    delta : int
        Amount added. Default is 50.
    """

    delta: Annotated[int, Range(min=-255, max=255),
                     Desc('Added to every channel')] = 50

    def evaluate(self, source, xs, ys):
        return _gather(source, xs, ys) + self.delta


@register_filter('shift')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.POINTWISE,
                description='Translate the image to the right')
class Shift(PixelMapFilter):
    """Output ``source(x - offset, y)``, or black where that falls off the left.

    Parameters
    ----------
    offset : int
        Horizontal translation in pixels. Default is 30.
    """

    offset: Annotated[int, Range(min=0),
                      Desc('Rightward translation in pixels')] = 30

    def evaluate(self, source, xs, ys):
        shifted = xs - self.offset
        valid = shifted >= 0
        pixels = _gather(source, np.where(valid, shifted, 0), ys)
        return np.where(valid[:, np.newaxis], pixels, 0)


@register_filter('glass')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.POINTWISE,
                description='Frosted glass jitter')
class GlassEffect(PixelMapFilter):
    """Sample each pixel from a randomly jittered neighbour.

    The sampled coordinate is ``(x + round((u1 - 0.5) * amplitude),
    y + round((u2 - 0.5) * amplitude))`` with fresh uniforms ``u1, u2``
    in [0, 1) per pixel, clamped into the image. Halves round away from
    zero, so the jitter is symmetric. Output is non-deterministic unless
    ``seed`` is given.

    Parameters
    ----------
    amplitude : float
        Jitter span in pixels. Default is 10.
    seed : int, optional
        Seed for the instance's random generator.
    """

    amplitude: Annotated[float, Range(min=0.0, max=1000.0),
                         Desc('Jitter span in pixels')] = 10.0
    seed: Annotated[Optional[int], Desc('Random generator seed')] = None

    def __post_init__(self) -> None:
        self._rng = np.random.default_rng(self.seed)

    def _offsets(self, n: int) -> np.ndarray:
        span = (self._rng.random(n) - 0.5) * self.amplitude
        return (np.sign(span) * np.floor(np.abs(span) + 0.5)).astype(np.int64)

    def evaluate(self, source, xs, ys):
        dx = self._offsets(len(xs))
        dy = self._offsets(len(xs))
        sx = np.clip(xs + dx, 0, source.width - 1)
        sy = np.clip(ys + dy, 0, source.height - 1)
        return _gather(source, sx, sy)


@register_filter('quantization')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.POINTWISE,
                description='Posterised greyscale')
class Quantization(PixelMapFilter):
    """Greyscale snapped up to the next multiple of ``step``.

    ``I' = step * (I // step + 1)``, clamped, on all three channels.

    Parameters
    ----------
    step : int
        Quantisation step. Default is 32.
    """

    step: Annotated[int, Range(min=1, max=256),
                    Desc('Quantisation step')] = 32

    def evaluate(self, source, xs, ys):
        luma = intensity(_gather(source, xs, ys))
        return _grey(self.step * (luma // self.step + 1))


@register_filter('mirror')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.POINTWISE,
                description='Reflect the right half onto the left')
class Mirror(PixelMapFilter):
    """Left half shows the reflected right half; right half is unchanged.

    ``output(x, y) = source(W - 1 - x, y)`` for ``x < W // 2``, else
    ``source(x, y)``. The result is left-right symmetric, so mirroring
    it again reproduces it.
    """

    def evaluate(self, source, xs, ys):
        width = source.width
        sx = np.where(xs < width // 2, width - 1 - xs, xs)
        return _gather(source, sx, ys)
