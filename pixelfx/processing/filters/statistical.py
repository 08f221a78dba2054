# -*- coding: utf-8 -*-
"""
Statistical Filters - Two-pass colour corrections driven by global statistics.

Each filter first sweeps the whole source image to build an explicit
statistics value, then runs the default per-pixel pass with that value
threaded through. Statistics are returned by a ``@globalprocessor``
method and never stored on the filter, so an instance can be re-run on a
different image without carrying stale state.

- ``GrayWorld``: scale each channel so its mean matches the overall mean
- ``LinearCorrection``: stretch each channel's [min, max] onto [0, 255]

A zero divisor (a channel whose mean is zero, or whose min equals its
max) is handled according to ``on_degenerate``: ``'passthrough'`` copies
the affected channel unchanged and logs a warning, ``'raise'`` raises
:class:`~pixelfx.exceptions.DegenerateStatisticsError` before the
per-pixel pass starts.

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
from dataclasses import dataclass
from typing import Annotated, Optional, Union

# Third-party
import numpy as np

# pixelfx internal
from pixelfx.buffer import Color, PixelBuffer
from pixelfx.exceptions import DegenerateStatisticsError
from pixelfx.processing.base import (
    Filter,
    FilterResult,
    check_coordinate,
    clamp_channels,
)
from pixelfx.processing.catalog import register_filter
from pixelfx.processing.params import Desc, Options
from pixelfx.processing.versioning import (
    globalprocessor,
    processor_tags,
    processor_version,
)
from pixelfx.progress import RunContext
from pixelfx.vocabulary import DegeneratePolicy, FilterCategory

logger = logging.getLogger(__name__)

CHANNEL_NAMES = ('red', 'green', 'blue')


@dataclass(frozen=True, eq=False)
class ChannelMeans:
    """Per-channel means and their overall mean.

    Attributes
    ----------
    means : np.ndarray
        ``(3,)`` float64 means of R, G, B.
    overall : float
        ``(avgR + avgG + avgB) / 3``.
    """

    means: np.ndarray
    overall: float

    @property
    def degenerate(self) -> np.ndarray:
        """``(3,)`` bool mask of channels whose mean is zero."""
        return self.means == 0


@dataclass(frozen=True, eq=False)
class ChannelExtrema:
    """Per-channel minimum and maximum.

    Attributes
    ----------
    minimum, maximum : np.ndarray
        ``(3,)`` int64 arrays for R, G, B.
    """

    minimum: np.ndarray
    maximum: np.ndarray

    @property
    def span(self) -> np.ndarray:
        return self.maximum - self.minimum

    @property
    def degenerate(self) -> np.ndarray:
        """``(3,)`` bool mask of flat channels (``max == min``)."""
        return self.span == 0


RunningStatistics = Union[ChannelMeans, ChannelExtrema]


class StatisticalFilter(Filter):
    """Base for filters that need a full-image statistics pre-pass.

    Subclasses implement ``compute_statistics`` (decorated with
    ``@globalprocessor``) and ``evaluate``. ``pixel_at`` and
    ``column_at`` accept precomputed statistics and compute them from
    the source when none are given.
    """

    on_degenerate: Annotated[str, Options('passthrough', 'raise'),
                             Desc('Zero-divisor policy')] = 'passthrough'

    @abstractmethod
    def compute_statistics(self, source: PixelBuffer) -> RunningStatistics:
        """Sweep *source* once and return its statistics."""
        ...

    @abstractmethod
    def evaluate(
        self,
        source: PixelBuffer,
        xs: np.ndarray,
        ys: np.ndarray,
        statistics: RunningStatistics,
    ) -> np.ndarray:
        """Unclamped ``(n, 3)`` integer output for the coordinates ``(xs, ys)``."""
        ...

    def prepare(self, source: PixelBuffer) -> RunningStatistics:
        """Run the pre-pass and apply the degenerate-statistics policy."""
        statistics = self.compute_statistics(source)
        flat = np.flatnonzero(statistics.degenerate)
        if flat.size:
            channels = ', '.join(CHANNEL_NAMES[i] for i in flat)
            message = (
                f"{type(self).__name__}: degenerate statistics in "
                f"channel(s) {channels}"
            )
            if DegeneratePolicy(self.on_degenerate) is DegeneratePolicy.RAISE:
                raise DegenerateStatisticsError(message)
            logger.warning("%s; passing them through unchanged", message)
        return statistics

    def pixel_at(
        self,
        source: PixelBuffer,
        x: int,
        y: int,
        statistics: Optional[RunningStatistics] = None,
    ) -> Color:
        check_coordinate(source, x, y)
        if statistics is None:
            statistics = self.prepare(source)
        out = clamp_channels(
            self.evaluate(source, np.array([x]), np.array([y]), statistics)
        )
        return Color(*(int(c) for c in out[0]))

    def column_at(
        self,
        source: PixelBuffer,
        x: int,
        statistics: Optional[RunningStatistics] = None,
    ) -> np.ndarray:
        if statistics is None:
            statistics = self.prepare(source)
        ys = np.arange(source.height)
        xs = np.full_like(ys, x)
        return clamp_channels(self.evaluate(source, xs, ys, statistics))

    def _process(self, source: PixelBuffer, context: RunContext) -> FilterResult:
        statistics = self.prepare(source)
        logger.debug("%s statistics: %s", type(self).__qualname__, statistics)
        return self._drive_columns(
            source, context, lambda x: self.column_at(source, x, statistics)
        )


def _channels(source: PixelBuffer, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    return source.data[ys, xs].astype(np.float64)


@register_filter('gray_world')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.STATISTICAL,
                description='Gray-world white balance')
class GrayWorld(StatisticalFilter):
    """Gray-world colour balance.

    ``channel' = trunc(channel * Avg / avgChannel)`` clamped to [0, 255],
    where ``avgChannel`` is the channel's image mean and ``Avg`` the mean
    of the three channel means.

    Parameters
    ----------
    on_degenerate : str
        ``'passthrough'`` (default) or ``'raise'`` for a zero channel mean.
    """

    @globalprocessor
    def compute_statistics(self, source: PixelBuffer) -> ChannelMeans:
        means = source.data.reshape(-1, 3).mean(axis=0, dtype=np.float64)
        return ChannelMeans(means=means, overall=float(means.sum() / 3))

    def evaluate(self, source, xs, ys, statistics):
        pixels = _channels(source, xs, ys)
        means = statistics.means
        safe = np.where(statistics.degenerate, 1.0, means)
        scaled = pixels * statistics.overall / safe
        out = np.where(statistics.degenerate, pixels, scaled)
        return np.trunc(out).astype(np.int64)


@register_filter('linear_correction')
@processor_version('1.0.0')
@processor_tags(category=FilterCategory.STATISTICAL,
                description='Per-channel contrast stretch')
class LinearCorrection(StatisticalFilter):
    """Linear histogram stretch per channel.

    ``channel' = trunc((channel - min) * 255 / (max - min))`` clamped to
    [0, 255], using the channel's image-wide extremes.

    Parameters
    ----------
    on_degenerate : str
        ``'passthrough'`` (default) or ``'raise'`` for a flat channel.
    """

    @globalprocessor
    def compute_statistics(self, source: PixelBuffer) -> ChannelExtrema:
        flat = source.data.reshape(-1, 3)
        return ChannelExtrema(
            minimum=flat.min(axis=0).astype(np.int64),
            maximum=flat.max(axis=0).astype(np.int64),
        )

    def evaluate(self, source, xs, ys, statistics):
        pixels = _channels(source, xs, ys)
        span = np.where(statistics.degenerate, 1, statistics.span)
        stretched = (pixels - statistics.minimum) * 255.0 / span
        out = np.where(statistics.degenerate, pixels, stretched)
        return np.trunc(out).astype(np.int64)

