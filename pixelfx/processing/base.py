# -*- coding: utf-8 -*-
"""
Filter Base Classes - Abstract interface for whole-image filters.

Defines ``Filter``, the contract every concrete filter implements, and
``PixelMapFilter``, a convenience base for filters whose output pixel is
a vectorisable function of its coordinate. ``Filter`` provides version
checking at first instantiation, ``typing.Annotated``-based parameter
declarations with automatic ``__init__`` generation, collection of
``@globalprocessor`` pre-pass methods, and the default column-major
driver that reports progress and honours cancellation.

The contract has two halves:

``pixel_at(source, x, y)``
    Compute one output pixel. Pure; never mutates *source*.
``process(source, cancellation, progress_callback)``
    Run the whole image and return a new ``PixelBuffer`` or
    :data:`~pixelfx.progress.CANCELLED`. Never returns a partially
    populated buffer and never mutates *source*.

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
import warnings
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple, Union

# Third-party
import numpy as np

# pixelfx internal
from pixelfx.buffer import Color, PixelBuffer
from pixelfx.exceptions import ValidationError
from pixelfx.processing.params import ParamSpec, collect_param_specs, make_init
from pixelfx.progress import (
    CANCELLED,
    CancellationSource,
    Cancelled,
    ProgressCallback,
    RunContext,
    percent_of,
)

logger = logging.getLogger(__name__)

FilterResult = Union[PixelBuffer, Cancelled]


def clamp_channels(values: np.ndarray) -> np.ndarray:
    """Clamp integer channel values to [0, 255] and cast to ``uint8``."""
    return np.clip(values, 0, 255).astype(np.uint8)


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Round non-negative values to the nearest integer, halves upward."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5).astype(np.int64)


class Filter(ABC):
    """Common base class for all filters.

    **Parameters**: subclasses declare construction-time parameters as
    ``Annotated`` class-body fields using the markers from
    :mod:`pixelfx.processing.params`. They are collected into
    ``__param_specs__`` and a validating keyword-only ``__init__`` is
    generated unless the subclass defines its own.

    **Versioning**: a concrete subclass without ``@processor_version``
    triggers a ``UserWarning`` at first instantiation.

    **Pre-pass**: methods decorated with ``@globalprocessor`` are listed
    in ``__global_callbacks__``; ``has_global_pass`` tells callers that
    the filter sweeps the full image before its per-pixel pass.
    """

    _version_warned_classes: set = set()

    __param_specs__: Tuple[ParamSpec, ...] = ()
    __global_callbacks__: Tuple[str, ...] = ()
    __has_global_pass__: bool = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = make_init(cls.__param_specs__)

        new_callbacks = [
            name for name, attr in cls.__dict__.items()
            if callable(attr) and getattr(attr, '__is_global_callback__', False)
        ]
        parent_callbacks = getattr(super(cls, cls), '__global_callbacks__', ())
        cls.__global_callbacks__ = tuple(
            dict.fromkeys((*parent_callbacks, *new_callbacks))
        )
        cls.__has_global_pass__ = bool(cls.__global_callbacks__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'Filter':
        if cls not in Filter._version_warned_classes:
            Filter._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    @property
    def has_global_pass(self) -> bool:
        """Whether ``process`` sweeps the full image before the pixel pass."""
        return type(self).__has_global_pass__

    @property
    def params(self) -> Dict[str, Any]:
        """Declared parameter values of this instance, in declaration order."""
        return {spec.name: getattr(self, spec.name)
                for spec in type(self).__param_specs__}

    # -----------------------------------------------------------------
    # The contract
    # -----------------------------------------------------------------
    @abstractmethod
    def pixel_at(self, source: PixelBuffer, x: int, y: int) -> Color:
        """Compute the output pixel at column *x*, row *y*.

        Parameters
        ----------
        source : PixelBuffer
            Image being filtered. Not modified.
        x, y : int
            In-bounds coordinate.

        Returns
        -------
        Color
            Output pixel, every channel in [0, 255].
        """
        ...

    def column_at(self, source: PixelBuffer, x: int) -> np.ndarray:
        """Compute output column *x* as a ``(height, 3)`` ``uint8`` array.

        The default evaluates ``pixel_at`` for every row. Subclasses
        override it with an equivalent vectorised computation.
        """
        return np.array(
            [self.pixel_at(source, x, y) for y in range(source.height)],
            dtype=np.uint8,
        )

    def process(
        self,
        source: PixelBuffer,
        cancellation: Union[RunContext, CancellationSource] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> FilterResult:
        """Run the filter over the whole image.

        Parameters
        ----------
        source : PixelBuffer
            Image to filter. Read through a read-only view for the
            duration of the run.
        cancellation : CancellationToken, callable, or RunContext, optional
            Polled once per outer-loop iteration.
        progress_callback : callable, optional
            Receives an ``int`` percentage once per outer-loop iteration.

        Returns
        -------
        PixelBuffer or Cancelled
            A fully populated new buffer, or ``CANCELLED``.

        Raises
        ------
        ValidationError
            If *source* is not a ``PixelBuffer``.
        """
        if not isinstance(source, PixelBuffer):
            raise ValidationError(
                f"source must be a PixelBuffer, got {type(source).__name__}"
            )
        context = RunContext.coerce(cancellation, progress_callback)
        logger.debug("Running %s on %dx%d image", type(self).__qualname__,
                     source.width, source.height)
        result = self._process(source.read_only(), context)
        if result is CANCELLED:
            logger.info("%s cancelled", type(self).__qualname__)
        return result

    def _process(self, source: PixelBuffer, context: RunContext) -> FilterResult:
        """Run the passes. Overridden by pre-pass and morphology filters."""
        return self._drive_columns(source, context,
                                   lambda x: self.column_at(source, x))

    @staticmethod
    def _drive_columns(
        source: PixelBuffer,
        context: RunContext,
        column: Callable[[int], np.ndarray],
    ) -> FilterResult:
        """Default driver: one checkpoint per column, then fill the column.

        The destination is a local and is only returned once every column
        has been written.
        """
        width = source.width
        destination = PixelBuffer.like(source)
        for x in range(width):
            if context.checkpoint(percent_of(x, width)):
                return CANCELLED
            destination.write_column(x, column(x))
        return destination

    # -----------------------------------------------------------------
    # Dunder
    # -----------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.params == other.params

    def __hash__(self) -> int:
        return hash((type(self), tuple(self.params.items())))

    def __repr__(self) -> str:
        args = ', '.join(f"{k}={v!r}" for k, v in self.params.items())
        return f"{type(self).__name__}({args})"


class PixelMapFilter(Filter):
    """Base for filters expressed as a vectorised map over coordinates.

    Subclasses implement ``evaluate`` on arrays of coordinates and return
    unclamped integer channels; ``pixel_at`` and ``column_at`` share it so
    the single-pixel and whole-column paths can never disagree.
    """

    @abstractmethod
    def evaluate(
        self, source: PixelBuffer, xs: np.ndarray, ys: np.ndarray
    ) -> np.ndarray:
        """Return an ``(n, 3)`` integer array for the coordinates ``(xs, ys)``."""
        ...

    def pixel_at(self, source: PixelBuffer, x: int, y: int) -> Color:
        check_coordinate(source, x, y)
        out = clamp_channels(self.evaluate(source, np.array([x]), np.array([y])))
        return Color(*(int(c) for c in out[0]))

    def column_at(self, source: PixelBuffer, x: int) -> np.ndarray:
        ys = np.arange(source.height)
        xs = np.full_like(ys, x)
        return clamp_channels(self.evaluate(source, xs, ys))


def check_coordinate(source: PixelBuffer, x: int, y: int) -> None:
    """Raise ``IndexError`` when ``(x, y)`` lies outside *source*."""
    if not source.in_bounds(x, y):
        raise IndexError(
            f"pixel ({x}, {y}) outside {source.width}x{source.height} image"
        )


def process(
    filter_: Filter,
    source: PixelBuffer,
    cancellation: CancellationSource = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> FilterResult:
    """Run *filter_* over *source*.

    Entry point for callers that hold a filter chosen at runtime; see
    :meth:`Filter.process` for the contract.

    Raises
    ------
    ValidationError
        If *filter_* is not a ``Filter``.
    """
    if not isinstance(filter_, Filter):
        raise ValidationError(
            f"filter must be a Filter, got {type(filter_).__name__}"
        )
    return filter_.process(source, cancellation, progress_callback)
