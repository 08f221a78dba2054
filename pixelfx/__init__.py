# -*- coding: utf-8 -*-
"""
pixelfx - Image filtering engine for 8-bit RGB rasters.

Runs colour remaps, convolutions, statistics-driven corrections and
red-ranked morphology over a ``PixelBuffer``, with per-row progress
reporting and cooperative cancellation.

Dependencies
------------
numpy
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

__version__ = "0.1.0"

from pixelfx.exceptions import (
    DegenerateStatisticsError,
    InvalidDimensionsError,
    PixelfxError,
    ProcessorError,
    ValidationError,
)
from pixelfx.vocabulary import DegeneratePolicy, FilterCategory
from pixelfx.buffer import BLACK, WHITE, Color, PixelBuffer
from pixelfx.progress import (
    CANCELLED,
    CancellationToken,
    Cancelled,
    RunContext,
)
from pixelfx.processing import Filter, FilterCatalog, FilterChain, process
from pixelfx.runner import FilterTask

__all__ = [
    'PixelfxError',
    'ValidationError',
    'InvalidDimensionsError',
    'DegenerateStatisticsError',
    'ProcessorError',
    'FilterCategory',
    'DegeneratePolicy',
    'Color',
    'BLACK',
    'WHITE',
    'PixelBuffer',
    'CANCELLED',
    'Cancelled',
    'CancellationToken',
    'RunContext',
    'Filter',
    'FilterCatalog',
    'FilterChain',
    'process',
    'FilterTask',
]
