# -*- coding: utf-8 -*-
"""
Morphological Filters - Red-ranked dilation, erosion, opening and closing.

Dilation and erosion scan a square structuring element centred on each
interior pixel and copy the whole neighbour pixel (all three channels)
whose red channel is largest (dilation) or smallest (erosion). Ties go
to the first cell in row-major scan order. Only interior coordinates,
where the element fits entirely inside the image, are written; the
border band of width ``MW // 2`` / ``MH // 2`` stays black.

The drivers run row by row, with one progress/cancellation checkpoint
per row. Opening and Closing are compositions of an Erosion and a
Dilation and split the progress range between the two stages.

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
import logging
from abc import abstractmethod
from typing import Annotated, Tuple

# Third-party
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

# pixelfx internal
from pixelfx.buffer import BLACK, Color, PixelBuffer
from pixelfx.processing.base import Filter, FilterResult, check_coordinate
from pixelfx.processing.catalog import register_filter
from pixelfx.processing.kernels import StructuringElement
from pixelfx.processing.params import Desc, Range
from pixelfx.processing.versioning import processor_tags, processor_version
from pixelfx.progress import CANCELLED, RunContext, percent_of
from pixelfx.vocabulary import FilterCategory

logger = logging.getLogger(__name__)


class MorphologyFilter(Filter):
    """Base for single-stage red-ranked morphology.

    Parameters
    ----------
    size : int
        Side of the square all-True structuring element; must be odd.
        Default is 5.
    """

    size: Annotated[int, Range(min=1, max=99),
                    Desc('Structuring element side (odd)')] = 5

    def __post_init__(self) -> None:
        self._element = StructuringElement.square(self.size)

    @property
    def element(self) -> StructuringElement:
        return self._element

    @abstractmethod
    def select(self, reds: np.ndarray) -> np.ndarray:
        """Index of the chosen cell along the last axis of *reds*.

        *reds* holds red channels with masked-out cells already replaced
        by a value that can never be selected.
        """
        ...

    @property
    @abstractmethod
    def excluded_value(self) -> int:
        """Red value substituted for cells outside the mask."""
        ...

    def is_interior(self, source: PixelBuffer, x: int, y: int) -> bool:
        cx, cy = self._element.center
        return (cx <= x < source.width - cx) and (cy <= y < source.height - cy)

    def pick(self, patch: np.ndarray) -> Color:
        """Select from an ``(MH, MW, 3)`` neighbourhood patch."""
        reds = np.where(self._element.mask, patch[..., 0].astype(np.int16),
                        self.excluded_value)
        index = int(self.select(reds.reshape(1, -1))[0])
        dy, dx = divmod(index, self._element.width)
        return Color(*(int(c) for c in patch[dy, dx]))

    def pixel_at(self, source: PixelBuffer, x: int, y: int) -> Color:
        check_coordinate(source, x, y)
        if not self.is_interior(source, x, y):
            return BLACK
        cx, cy = self._element.center
        patch = source.data[y - cy:y + cy + 1, x - cx:x + cx + 1]
        return self.pick(patch)

    def _process(self, source: PixelBuffer, context: RunContext) -> FilterResult:
        height, width = source.height, source.width
        mh, mw = self._element.height, self._element.width
        cx, cy = self._element.center
        destination = PixelBuffer.like(source)
        if height < mh or width < mw:
            logger.debug("%s: image smaller than %dx%d element, no interior",
                         type(self).__qualname__, mw, mh)
            return destination

        data = source.data
        mask = self._element.mask.ravel()
        # (rows, cols, mh, mw) windows over the red channel
        windows = sliding_window_view(data[..., 0], (mh, mw))
        xs = np.arange(cx, width - cx)
        for y in range(cy, height - cy):
            if context.checkpoint(percent_of(y, height)):
                return CANCELLED
            reds = windows[y - cy].reshape(len(xs), -1).astype(np.int16)
            reds = np.where(mask, reds, self.excluded_value)
            dy, dx = np.divmod(self.select(reds), mw)
            destination.write_row(y, cx, data[y - cy + dy, xs - cx + dx])
        return destination


@register_filter('dilation')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.MORPHOLOGY,
                description='Red-ranked dilation')
class Dilation(MorphologyFilter):
    """Copy the neighbour with the largest red channel."""

    excluded_value = -1

    def select(self, reds):
        return np.argmax(reds, axis=-1)


@register_filter('erosion')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.MORPHOLOGY,
                description='Red-ranked erosion')
class Erosion(MorphologyFilter):
    """Copy the neighbour with the smallest red channel."""

    excluded_value = 256

    def select(self, reds):
        return np.argmin(reds, axis=-1)


class CompositeMorphology(Filter):
    """Two morphology stages applied in sequence.

    Parameters
    ----------
    size : int
        Structuring element side shared by both stages. Default is 5.
    """

    size: Annotated[int, Range(min=1, max=99),
                    Desc('Structuring element side (odd)')] = 5

    def __post_init__(self) -> None:
        self._stages = self.build_stages()

    @abstractmethod
    def build_stages(self) -> Tuple[MorphologyFilter, MorphologyFilter]:
        ...

    @property
    def stages(self) -> Tuple[MorphologyFilter, MorphologyFilter]:
        return self._stages

    def pixel_at(self, source: PixelBuffer, x: int, y: int) -> Color:
        check_coordinate(source, x, y)
        first, second = self._stages
        if not second.is_interior(source, x, y):
            return BLACK
        cx, cy = second.element.center
        patch = np.array(
            [[first.pixel_at(source, x + dx, y + dy)
              for dx in range(-cx, cx + 1)]
             for dy in range(-cy, cy + 1)],
            dtype=np.uint8,
        )
        return second.pick(patch)

    def _process(self, source: PixelBuffer, context: RunContext) -> FilterResult:
        first, second = self._stages
        logger.debug("%s stage 1: %s", type(self).__qualname__,
                     type(first).__qualname__)
        intermediate = first._process(source, context.scaled(0, 50))
        if intermediate is CANCELLED:
            return CANCELLED
        logger.debug("%s stage 2: %s", type(self).__qualname__,
                     type(second).__qualname__)
        return second._process(intermediate.read_only(), context.scaled(50, 100))


@register_filter('opening')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.MORPHOLOGY,
                description='Erosion followed by dilation')
class Opening(CompositeMorphology):
    """Erosion then Dilation. Removes small bright features."""

    def build_stages(self):
        return Erosion(size=self.size), Dilation(size=self.size)


@register_filter('closing')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.MORPHOLOGY,
                description='Dilation followed by erosion')
class Closing(CompositeMorphology):
    """Dilation then Erosion. Fills small dark features."""

    def build_stages(self):
        return Dilation(size=self.size), Erosion(size=self.size)
