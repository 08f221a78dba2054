# -*- coding: utf-8 -*-
"""
Built-in Filters - The closed catalog of concrete filters.

Importing this package registers every built-in filter with
:class:`~pixelfx.processing.catalog.FilterCatalog`.

Pointwise Filters (single pass, default column driver)
    ``Invert``, ``GreyScale``, ``Sepia``, ``SepiaInEllipse``,
    ``IncreaseBrightness``, ``Shift``, ``GlassEffect``,
    ``Quantization``, ``Mirror``

Statistical Filters (full-image pre-pass, then per-pixel pass)
    ``GrayWorld``, ``LinearCorrection``

Convolution Filters (clamped-border kernel sums)
    ``Convolution``, ``Blur``, ``GaussianBlur``, ``Sharpness``,
    ``IncreaseSharpness``, ``MotionBlur``, ``Sobel``

Morphological Filters (red-ranked, interior only)
    ``Dilation``, ``Erosion``, ``Opening``, ``Closing``

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

from pixelfx.processing.filters.pointwise import (
    GlassEffect,
    GreyScale,
    IncreaseBrightness,
    Invert,
    Mirror,
    Quantization,
    Sepia,
    SepiaInEllipse,
    Shift,
)
from pixelfx.processing.filters.statistical import (
    ChannelExtrema,
    ChannelMeans,
    GrayWorld,
    LinearCorrection,
    StatisticalFilter,
)
from pixelfx.processing.filters.convolution import (
    Blur,
    Convolution,
    GaussianBlur,
    IncreaseSharpness,
    MatrixFilter,
    MotionBlur,
    Sharpness,
    Sobel,
)
from pixelfx.processing.filters.morphology import (
    Closing,
    CompositeMorphology,
    Dilation,
    Erosion,
    MorphologyFilter,
    Opening,
)

__all__ = [
    'Invert',
    'GreyScale',
    'Sepia',
    'SepiaInEllipse',
    'IncreaseBrightness',
    'Shift',
    'GlassEffect',
    'Quantization',
    'Mirror',
    'StatisticalFilter',
    'ChannelMeans',
    'ChannelExtrema',
    'GrayWorld',
    'LinearCorrection',
    'MatrixFilter',
    'Convolution',
    'Blur',
    'GaussianBlur',
    'Sharpness',
    'IncreaseSharpness',
    'MotionBlur',
    'Sobel',
    'MorphologyFilter',
    'CompositeMorphology',
    'Dilation',
    'Erosion',
    'Opening',
    'Closing',
]
