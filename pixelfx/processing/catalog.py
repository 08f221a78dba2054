# -*- coding: utf-8 -*-
"""
Filter Catalog - Name-based registry of the built-in filters.

Concrete filters register themselves with ``@register_filter(name)``.
``FilterCatalog`` looks them up by name, groups them by the category
stamped by ``@processor_tags``, and instantiates them with validated
parameters. Built-in filter modules are imported lazily on first lookup
so that registration never creates an import cycle.

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
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Type

# pixelfx internal
from pixelfx.exceptions import ValidationError
from pixelfx.vocabulary import FilterCategory

if TYPE_CHECKING:
    from pixelfx.processing.base import Filter
    from pixelfx.processing.params import ParamSpec

logger = logging.getLogger(__name__)

_registry: Dict[str, Type['Filter']] = {}


def register_filter(name: str):
    """Class decorator registering a filter under *name*.

    Sets ``filter_name`` on the class.

    Raises
    ------
    ValueError
        If *name* is already registered to a different class.
    """
    def decorator(cls):
        existing = _registry.get(name)
        if existing is not None and existing is not cls:
            raise ValueError(
                f"Filter name '{name}' already registered to "
                f"{existing.__qualname__}"
            )
        cls.filter_name = name
        _registry[name] = cls
        return cls
    return decorator


def load_builtin_filters() -> None:
    """Import the built-in filter modules to trigger registration."""
    from pixelfx.processing import filters  # noqa: F401


class FilterCatalog:
    """Lookup and construction of registered filters.

    Examples
    --------
    >>> FilterCatalog.names(FilterCategory.MORPHOLOGY)
    ['closing', 'dilation', 'erosion', 'opening']
    >>> blur = FilterCatalog.create('gaussian', radius=2, sigma=1.0)
    """

    @staticmethod
    def names(category: Optional[FilterCategory] = None) -> List[str]:
        """Sorted registered names, optionally restricted to *category*."""
        load_builtin_filters()
        return sorted(
            name for name, cls in _registry.items()
            if category is None or FilterCatalog.category_of(cls) is category
        )

    @staticmethod
    def get(name: str) -> Type['Filter']:
        """Return the filter class registered as *name*.

        Raises
        ------
        ValidationError
            If no filter has that name.
        """
        load_builtin_filters()
        try:
            return _registry[name]
        except KeyError:
            raise ValidationError(
                f"Unknown filter {name!r}; expected one of {sorted(_registry)}"
            ) from None

    @staticmethod
    def create(name: str, **params: Any) -> 'Filter':
        """Instantiate the filter registered as *name* with *params*."""
        cls = FilterCatalog.get(name)
        logger.debug("Creating %s with %s", cls.__qualname__, params)
        return cls(**params)

    @staticmethod
    def describe(name: str) -> Tuple['ParamSpec', ...]:
        """Parameter specifications of the filter registered as *name*."""
        return FilterCatalog.get(name).__param_specs__

    @staticmethod
    def category_of(cls: type) -> Optional[FilterCategory]:
        tags = getattr(cls, '__processor_tags__', None) or {}
        return tags.get('category')
