# -*- coding: utf-8 -*-
"""
Run Context - Progress reporting and cooperative cancellation.

A filter run talks to its caller through two channels: an integer
progress percentage in [0, 100] and a cancellation flag that the run
polls. Both are checked together at checkpoints, once per outer-loop
iteration of a filter's pass. ``RunContext`` bundles the two so drivers
take a single argument, and ``scaled`` derives child contexts for
composite filters that run several passes under one progress bar.

Cancellation is an expected outcome, not an error: a cancelled run
returns the :data:`CANCELLED` sentinel instead of a buffer.

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
import math
import threading
from typing import Callable, Optional, Union

# pixelfx internal
from pixelfx.exceptions import ValidationError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


class Cancelled:
    """Result variant returned by a run that observed a cancellation request.

    There is a single instance, :data:`CANCELLED`. It is falsy so callers
    can write ``if not result: ...``.
    """

    _instance: Optional['Cancelled'] = None

    def __new__(cls) -> 'Cancelled':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'CANCELLED'


CANCELLED = Cancelled()


class CancellationToken:
    """Thread-safe cancellation flag.

    The caller (usually another thread) calls ``cancel()``; the filter run
    polls ``cancelled`` at each checkpoint.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def __call__(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"


CancellationSource = Union[CancellationToken, Callable[[], bool], None]


class RunContext:
    """Progress sink and cancellation query for one filter run.

    Parameters
    ----------
    cancellation : CancellationToken or callable, optional
        Polled at each checkpoint. A callable must take no arguments and
        return True once cancellation is requested.
    progress_callback : callable, optional
        Called with an ``int`` percentage in [0, 100].

    Notes
    -----
    Reported values are clamped to [0, 100] and never decrease within a
    context, so a composite run built from scaled children still emits a
    monotone stream.
    """

    def __init__(
        self,
        cancellation: CancellationSource = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        if cancellation is not None and not callable(cancellation):
            raise TypeError(
                "cancellation must be a CancellationToken or a callable, "
                f"got {type(cancellation).__name__}"
            )
        self._cancellation = cancellation
        self._callback = progress_callback
        self._base = 0.0
        self._scale = 1.0
        self._parent: Optional['RunContext'] = None
        self._last = -1

    @classmethod
    def coerce(
        cls,
        cancellation: Union['RunContext', CancellationSource] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> 'RunContext':
        """Return *cancellation* if it already is a context, else build one.

        Raises
        ------
        ValidationError
            If a context is passed together with a *progress_callback*.
        """
        if isinstance(cancellation, RunContext):
            if progress_callback is not None:
                raise ValidationError(
                    "progress_callback cannot be combined with a RunContext"
                )
            return cancellation
        return cls(cancellation, progress_callback)

    @property
    def cancel_requested(self) -> bool:
        if self._parent is not None:
            return self._parent.cancel_requested
        if self._cancellation is None:
            return False
        return bool(self._cancellation())

    def report(self, percent: int) -> None:
        """Emit a progress percentage for this context."""
        if self._parent is not None:
            self._parent.report(self._base + percent * self._scale)
            return
        value = min(max(math.floor(percent + 0.5), 0), 100)
        if value < self._last:
            return
        self._last = value
        if self._callback is not None:
            self._callback(value)

    def checkpoint(self, percent: int) -> bool:
        """Report progress then poll cancellation.

        Returns
        -------
        bool
            True when the run must stop and return :data:`CANCELLED`.
        """
        self.report(percent)
        if self.cancel_requested:
            logger.debug("Cancellation observed at %d%%", percent)
            return True
        return False

    def scaled(self, start: float, stop: float) -> 'RunContext':
        """Child context mapping its [0, 100] onto ``[start, stop]`` here."""
        child = RunContext()
        child._parent = self
        child._base = start
        child._scale = (stop - start) / 100.0
        return child


def percent_of(index: int, total: int) -> int:
    """Checkpoint percentage ``100 * index / total``, halves rounded up."""
    return (200 * index + total) // (2 * total)
