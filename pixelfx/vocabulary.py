# -*- coding: utf-8 -*-
"""
pixelfx Vocabulary - Enumerations shared across filters and tooling.

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

from enum import Enum


class FilterCategory(Enum):
    """Functional grouping of filters for tagging and catalog lookup.

    Each value corresponds to the execution shape of a filter family.
    """

    POINTWISE = "pointwise"
    STATISTICAL = "statistical"
    CONVOLUTION = "convolution"
    MORPHOLOGY = "morphology"


class DegeneratePolicy(Enum):
    """What a statistics-driven filter does with a zero divisor.

    ``PASSTHROUGH`` copies the affected channel unchanged and logs a
    warning. ``RAISE`` aborts the run with
    :class:`~pixelfx.exceptions.DegenerateStatisticsError`.
    """

    PASSTHROUGH = "passthrough"
    RAISE = "raise"
