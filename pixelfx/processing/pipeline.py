# -*- coding: utf-8 -*-
"""
Filter Chain - Sequential composition of filters.

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
from typing import List, Sequence

# pixelfx internal
from pixelfx.buffer import Color, PixelBuffer
from pixelfx.exceptions import ValidationError
from pixelfx.processing.base import Filter, FilterResult
from pixelfx.progress import CANCELLED, RunContext

logger = logging.getLogger(__name__)


class FilterChain(Filter):
    """Apply filters one after another.

    The output of each step is the input of the next. The chain is itself
    a ``Filter``, so chains nest. Progress is split evenly across the
    steps, and the chain stops with ``CANCELLED`` as soon as any step
    observes cancellation.

    Parameters
    ----------
    steps : Sequence[Filter]
        Filters to apply, in order. Must contain at least one.

    Examples
    --------
    >>> from pixelfx.processing.filters import GreyScale, Sharpness
    >>> chain = FilterChain([GreyScale(), Sharpness()])
    >>> result = chain.process(image, progress_callback=print)
    """

    __processor_version__ = '1.0.0'

    def __init__(self, steps: Sequence[Filter]) -> None:
        if not steps:
            raise ValidationError("FilterChain requires at least one filter")
        for i, step in enumerate(steps):
            if not isinstance(step, Filter):
                raise ValidationError(
                    f"Step {i} is not a Filter: {type(step).__name__}"
                )
        self._steps: List[Filter] = list(steps)

    @property
    def steps(self) -> List[Filter]:
        """Shallow copy of the step list."""
        return list(self._steps)

    @property
    def params(self):
        return {'steps': tuple(self._steps)}

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"FilterChain({[type(s).__name__ for s in self._steps]})"

    def pixel_at(self, source: PixelBuffer, x: int, y: int) -> Color:
        """Output pixel of the last step.

        Every step but the last needs its whole input image, so those
        steps are run in full first.
        """
        current = source
        for step in self._steps[:-1]:
            current = step.process(current)
        return self._steps[-1].pixel_at(current.read_only(), x, y)

    def _process(self, source: PixelBuffer, context: RunContext) -> FilterResult:
        n = len(self._steps)
        current = source
        for i, step in enumerate(self._steps):
            logger.debug("Chain step %d/%d: %s", i + 1, n,
                         type(step).__qualname__)
            current = step._process(
                current, context.scaled(100 * i / n, 100 * (i + 1) / n)
            )
            if current is CANCELLED:
                return CANCELLED
            current = current.read_only()
        return current.copy()
