# -*- coding: utf-8 -*-
"""
Processing Module - Filter abstraction, kernels, catalog, and filters.

Sub-modules
-----------
base.py
    ``Filter`` ABC, ``PixelMapFilter``, the default column driver, and
    the ``process`` entry point.
kernels.py
    ``Kernel`` and ``StructuringElement`` with their generators.
filters/
    Pointwise, statistical, convolution, and morphological filters.
pipeline.py
    ``FilterChain`` sequential composition.
catalog.py
    ``FilterCatalog`` name registry.
versioning.py
    ``@processor_version``, ``@processor_tags``, ``@globalprocessor``.
params.py
    ``Range``, ``Options``, ``Desc`` parameter markers and ``ParamSpec``.

Usage
-----
    >>> from pixelfx import PixelBuffer, CancellationToken
    >>> from pixelfx.processing import FilterCatalog, process
    >>>
    >>> token = CancellationToken()
    >>> result = process(FilterCatalog.create('gaussian'), image, token,
    ...                  progress_callback=lambda p: print(f"{p}%"))

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

from pixelfx.processing.base import Filter, PixelMapFilter, process
from pixelfx.processing.kernels import Kernel, StructuringElement
from pixelfx.processing.catalog import FilterCatalog, register_filter
from pixelfx.processing.pipeline import FilterChain
from pixelfx.processing.versioning import (
    globalprocessor,
    processor_tags,
    processor_version,
)
from pixelfx.processing.params import Desc, Options, ParamSpec, Range
from pixelfx.processing.filters import *  # noqa: F401,F403
from pixelfx.processing.filters import __all__ as _filter_names

__all__ = [
    'Filter',
    'PixelMapFilter',
    'process',
    'Kernel',
    'StructuringElement',
    'FilterCatalog',
    'register_filter',
    'FilterChain',
    'globalprocessor',
    'processor_tags',
    'processor_version',
    'Desc',
    'Options',
    'ParamSpec',
    'Range',
    *_filter_names,
]
