# -*- coding: utf-8 -*-
"""
pixelfx Exception Hierarchy - Domain-specific exceptions for filter runs.

Provides a small exception hierarchy that lets callers (an image viewer,
a batch script, the command-line entry point) catch pixelfx errors
distinctly from Python built-in exceptions. All pixelfx exceptions
subclass both ``PixelfxError`` and the appropriate built-in exception so
existing ``except ValueError`` handlers keep working.

Cancellation is not an error and has no exception here; see
:data:`pixelfx.progress.CANCELLED`.

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


class PixelfxError(Exception):
    """Base exception for all pixelfx errors."""


class ValidationError(PixelfxError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for shape and dtype mismatches, out-of-range parameters,
    unknown filter names, and other input validation failures.
    """


class InvalidDimensionsError(ValidationError):
    """Zero-sized image, kernel, or structuring element.

    Raised before any pass over the image begins.
    """


class DegenerateStatisticsError(PixelfxError, ArithmeticError):
    """A statistics pre-pass produced a zero divisor.

    Raised by GrayWorld (a channel mean of zero) and LinearCorrection
    (a channel with ``max == min``) when the filter was configured with
    ``on_degenerate='raise'``.
    """


class ProcessorError(PixelfxError, RuntimeError):
    """Non-recoverable failure while a filter run was executing.

    The background runner wraps worker exceptions in this type.
    """
