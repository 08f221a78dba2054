# -*- coding: utf-8 -*-
"""
Filter Parameters - Declarative parameter constraints via typing.Annotated.

Filters declare their construction-time parameters as class-body
annotations carrying ``Range``, ``Options`` and ``Desc`` markers::

    from typing import Annotated
    from pixelfx.processing.params import Desc, Range

    class IncreaseBrightness(PixelMapFilter):
        delta: Annotated[int, Range(min=-255, max=255), Desc('Added to each channel')] = 50

``Filter.__init_subclass__`` collects these into ``cls.__param_specs__``
and, unless the class defines its own ``__init__``, installs a
keyword-only ``__init__`` that validates each value, stores it on the
instance and finally calls ``__post_init__`` (where kernels and
structuring elements are built).

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
import inspect
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Callable,
    Dict,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

# pixelfx internal
from pixelfx.exceptions import ValidationError

Number = Union[int, float]


class ParamMeta:
    """Marker base; only ``Annotated`` extras of this type are collected."""


@dataclass(frozen=True)
class Range(ParamMeta):
    """Inclusive bounds. Either side may be left open."""

    min: Optional[Number] = None
    max: Optional[Number] = None


class Options(ParamMeta):
    """Closed set of allowed values."""

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


@dataclass(frozen=True)
class Desc(ParamMeta):
    """One-line help text shown by the catalog and the CLI."""

    text: str


class _Missing:
    def __repr__(self) -> str:
        return '<required>'


MISSING = _Missing()


def _type_name(tp: Any) -> str:
    return getattr(tp, '__name__', None) or repr(tp)


def _unwrap_optional(tp: Any) -> Any:
    """``Optional[X]`` -> ``X``; other unions -> tuple of members."""
    if get_origin(tp) is not Union:
        return tp
    members = tuple(t for t in get_args(tp) if t is not type(None))
    return members[0] if len(members) == 1 else members


def _is_instance(value: Any, expected: Any) -> bool:
    # bool is an int subclass but never a valid numeric parameter
    if isinstance(value, bool) and expected in (int, float):
        return False
    if expected is float:
        return isinstance(value, (int, float))
    if expected is object:
        return True
    return isinstance(value, expected)


@dataclass(frozen=True)
class ParamSpec:
    """One declared filter parameter.

    Attributes
    ----------
    name : str
        Keyword-argument name.
    param_type : type
        Declared type (may be ``Optional[...]``).
    default : Any
        Default value, or ``MISSING`` for a required parameter.
    description : str
        Text from ``Desc``.
    min_value, max_value : int, float or None
        Inclusive bounds from ``Range``.
    choices : tuple or None
        Allowed values from ``Options``.
    """

    name: str
    param_type: Any
    default: Any = MISSING
    description: str = ''
    min_value: Optional[Number] = None
    max_value: Optional[Number] = None
    choices: Optional[Tuple[Any, ...]] = None

    @property
    def required(self) -> bool:
        return self.default is MISSING

    def validate(self, value: Any) -> None:
        """Check *value* against this parameter's declaration.

        ``int`` satisfies a ``float`` declaration; ``None`` is accepted
        when ``None`` is the default.

        Raises
        ------
        TypeError
            Wrong type.
        ValidationError
            Outside the ``Range`` or not one of the ``Options``.
        """
        if value is None and self.default is None:
            return
        if not _is_instance(value, _unwrap_optional(self.param_type)):
            raise TypeError(
                f"Parameter '{self.name}' must be "
                f"{_type_name(self.param_type)}, got {type(value).__name__}"
            )

        where = f"Parameter '{self.name}' value {value!r}"
        if self.min_value is not None and value < self.min_value:
            raise ValidationError(f"{where} is below minimum {self.min_value!r}")
        if self.max_value is not None and value > self.max_value:
            raise ValidationError(f"{where} is above maximum {self.max_value!r}")
        if self.choices is not None and value not in self.choices:
            raise ValidationError(
                f"{where} is not in allowed choices {self.choices!r}"
            )


def _spec_from_hint(owner: type, name: str, hint: Any) -> Optional[ParamSpec]:
    """Build a ParamSpec from one ``Annotated`` hint, or None if unmarked."""
    if get_origin(hint) is not Annotated:
        return None
    markers: Dict[type, ParamMeta] = {}
    for extra in hint.__metadata__:
        if isinstance(extra, ParamMeta):
            markers.setdefault(type(extra), extra)
    if not markers:
        return None
    if Range in markers and Options in markers:
        raise TypeError(
            f"Parameter '{name}' on {owner.__qualname__}: "
            f"Range and Options are mutually exclusive."
        )

    bounds = markers.get(Range, Range())
    options = markers.get(Options)
    desc = markers.get(Desc)
    return ParamSpec(
        name=name,
        param_type=get_args(hint)[0],
        default=getattr(owner, name, MISSING),
        description=desc.text if desc else '',
        min_value=bounds.min,
        max_value=bounds.max,
        choices=options.choices if options else None,
    )


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """All marked parameters of *cls*, base classes first.

    Raises
    ------
    TypeError
        If a field combines ``Range`` and ``Options``.
    """
    hints = get_type_hints(cls, include_extras=True)
    names = dict.fromkeys(
        name
        for klass in reversed(cls.__mro__)
        for name in getattr(klass, '__annotations__', {})
        if name in hints
    )
    specs = (_spec_from_hint(cls, name, hints[name]) for name in names)
    return tuple(spec for spec in specs if spec is not None)


def make_init(param_specs: Tuple[ParamSpec, ...]) -> Callable[..., None]:
    """Generate a keyword-only ``__init__`` for *param_specs*.

    Unknown keywords and missing required parameters raise
    ``TypeError``. After every value is validated and set,
    ``__post_init__`` runs if the class has one.
    """
    by_name = {spec.name: spec for spec in param_specs}

    def __init__(self, **kwargs):
        cls_name = type(self).__name__
        unknown = sorted(set(kwargs) - set(by_name))
        if unknown:
            raise TypeError(
                f"{cls_name}() got unexpected keyword arguments: "
                f"{', '.join(unknown)}"
            )
        for name, spec in by_name.items():
            value = kwargs.get(name, spec.default)
            if value is MISSING:
                raise TypeError(
                    f"{cls_name}() missing required keyword argument: '{name}'"
                )
            spec.validate(value)
            object.__setattr__(self, name, value)
        post_init = getattr(self, '__post_init__', None)
        if post_init is not None:
            post_init()

    __init__.__signature__ = inspect.Signature(
        [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
        + [
            inspect.Parameter(
                spec.name,
                inspect.Parameter.KEYWORD_ONLY,
                default=(inspect.Parameter.empty if spec.required
                         else spec.default),
            )
            for spec in param_specs
        ]
    )
    __init__.__qualname__ = '__init__'
    return __init__
