# -*- coding: utf-8 -*-
"""
Filter Task Runner - Run a filter on a background worker thread.

A viewer keeps its UI responsive by dispatching a filter run to a worker
and receiving progress and completion through callbacks. ``FilterTask``
owns one such run: it submits ``Filter.process`` to a single-thread
executor, forwards progress, and exposes a ``cancel()`` that sets the
run's ``CancellationToken``. The filter itself stays synchronous.

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
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Optional

# pixelfx internal
from pixelfx.buffer import PixelBuffer
from pixelfx.exceptions import PixelfxError, ProcessorError, ValidationError
from pixelfx.processing.base import Filter, FilterResult
from pixelfx.progress import CANCELLED, CancellationToken, ProgressCallback

logger = logging.getLogger(__name__)


class FilterTask:
    """One background filter run.

    Parameters
    ----------
    filter_ : Filter
        Filter to run.
    source : PixelBuffer
        Image to filter. The caller must not modify it while the task is
        running.
    progress_callback : callable, optional
        Receives ``int`` percentages, called on the worker thread.
    done_callback : callable, optional
        Called on the worker thread with the result (a ``PixelBuffer``
        or ``CANCELLED``) once the run returns normally.

    Examples
    --------
    >>> task = FilterTask(GaussianBlur(), image, progress_callback=bar.set)
    >>> task.start()
    >>> task.cancel()           # from the UI thread
    >>> task.result() is CANCELLED
    True
    """

    def __init__(
        self,
        filter_: Filter,
        source: PixelBuffer,
        progress_callback: Optional[ProgressCallback] = None,
        done_callback: Optional[Callable[[FilterResult], None]] = None,
    ) -> None:
        if not isinstance(filter_, Filter):
            raise ValidationError(
                f"filter must be a Filter, got {type(filter_).__name__}"
            )
        if not isinstance(source, PixelBuffer):
            raise ValidationError(
                f"source must be a PixelBuffer, got {type(source).__name__}"
            )
        self._filter = filter_
        self._source = source
        self._progress_callback = progress_callback
        self._done_callback = done_callback
        self._token = CancellationToken()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._future: Optional[Future] = None

    @property
    def started(self) -> bool:
        return self._future is not None

    @property
    def done(self) -> bool:
        return self._future is not None and self._future.done()

    @property
    def cancel_requested(self) -> bool:
        return self._token.cancelled

    def start(self) -> 'FilterTask':
        """Submit the run to a worker thread. Returns ``self``.

        Raises
        ------
        RuntimeError
            If the task was already started.
        """
        if self._future is not None:
            raise RuntimeError("FilterTask already started")
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix='pixelfx-filter'
        )
        self._future = self._executor.submit(self._run)
        self._executor.shutdown(wait=False)
        logger.debug("Started %r", self._filter)
        return self

    def cancel(self) -> None:
        """Request cancellation; observed at the run's next checkpoint."""
        logger.debug("Cancellation requested for %r", self._filter)
        self._token.cancel()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the run finishes. Returns False on timeout."""
        if self._future is None:
            raise RuntimeError("FilterTask not started")
        try:
            self._future.exception(timeout=timeout)
        except FutureTimeoutError:
            return False
        return True

    def result(self, timeout: Optional[float] = None) -> FilterResult:
        """Return the run's result, blocking up to *timeout* seconds.

        Raises
        ------
        RuntimeError
            If the task was not started.
        TimeoutError
            If the run does not finish in time.
        PixelfxError
            Validation and statistics errors raised by the filter.
        ProcessorError
            Any other exception raised on the worker, chained.
        """
        if self._future is None:
            raise RuntimeError("FilterTask not started")
        try:
            return self._future.result(timeout=timeout)
        except FutureTimeoutError:
            raise TimeoutError(
                f"{type(self._filter).__name__} did not finish within {timeout}s"
            ) from None
        except PixelfxError:
            raise
        except Exception as exc:
            raise ProcessorError(
                f"{type(self._filter).__name__} failed: {exc}"
            ) from exc

    def _run(self) -> FilterResult:
        try:
            result = self._filter.process(
                self._source, self._token, self._progress_callback
            )
        except Exception:
            logger.exception("%s failed on worker", type(self._filter).__name__)
            raise
        if result is CANCELLED:
            logger.debug("%r finished cancelled", self._filter)
        if self._done_callback is not None:
            self._done_callback(result)
        return result
