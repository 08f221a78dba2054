# -*- coding: utf-8 -*-
"""
Filter Versioning - Version, tag, and global-pass decorators.

Provides ``@processor_version`` for stamping a semantic version on a
filter class, ``@processor_tags`` for capability metadata used by the
catalog, and ``@globalprocessor`` for marking the methods that make up a
filter's full-image statistics pre-pass.

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
import importlib.metadata
from typing import Callable, Optional, Type, TypeVar

# pixelfx internal
from pixelfx.vocabulary import FilterCategory

T = TypeVar('T')
F = TypeVar('F', bound=Callable)


def processor_version(version: Optional[str] = None):
    """Class decorator that stamps ``__processor_version__`` on a filter.

    When *version* is omitted the installed ``pixelfx`` distribution
    version is used, or ``'unknown'`` when the package is not installed.

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class Identity(PixelMapFilter):
    ...     def evaluate(self, source, xs, ys):
    ...         return source.data[ys, xs]
    >>> Identity.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version('pixelfx')
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = 'unknown'
        return cls
    return decorator


def processor_tags(
    category: Optional[FilterCategory] = None,
    description: Optional[str] = None,
):
    """Class decorator for filter capability metadata.

    Stamps ``__processor_tags__`` with the filter's category and a short
    description. The catalog uses the category to group filters.

    Raises
    ------
    TypeError
        If *category* is not a :class:`~pixelfx.vocabulary.FilterCategory`.
    """
    if category is not None and not isinstance(category, FilterCategory):
        raise TypeError(
            f"category must be a FilterCategory member, got {category!r}"
        )

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = {
            'category': category,
            'description': description,
        }
        return cls
    return decorator


def globalprocessor(method: F) -> F:
    """Mark a method as part of the full-image statistics pre-pass.

    ``Filter.__init_subclass__`` collects decorated method names into
    ``__global_callbacks__`` (parents first) and sets
    ``__has_global_pass__``. The method is returned unchanged.
    """
    method.__is_global_callback__ = True
    return method
