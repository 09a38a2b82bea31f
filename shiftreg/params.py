# -*- coding: utf-8 -*-
"""
Tunable Parameter Annotations - Declarative algorithm settings via typing.Annotated.

Provides the constraint markers (``Range``, ``Desc``) used inside
``typing.Annotated`` class-body annotations on ``CoRegistration``
subclasses, the ``ParamSpec`` introspection class, and the helpers that
``CoRegistration.__init_subclass__`` uses to collect specs and generate a
validating ``__init__``.

Usage
-----
Declare tunable parameters as class-body annotations::

    from typing import Annotated
    from shiftreg.params import Desc, Range

    class MyCoRegistration(CoRegistration):
        levels: Annotated[int, Range(min=1), Desc('Pyramid depth')] = 10

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""

# Standard library
import inspect
from typing import (
    Annotated,
    Any,
    Dict,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# shiftreg internal
from shiftreg.exceptions import ValidationError


class ParamMeta:
    """Base marker for tunable parameter metadata in ``Annotated`` types."""


class Range(ParamMeta):
    """Inclusive numeric range constraint.

    Parameters
    ----------
    min : int or float, optional
        Minimum allowed value (inclusive).
    max : int or float, optional
        Maximum allowed value (inclusive).
    """

    __slots__ = ('min', 'max')

    def __init__(
        self,
        min: Optional[Union[int, float]] = None,
        max: Optional[Union[int, float]] = None,
    ) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        parts = []
        if self.min is not None:
            parts.append(f"min={self.min!r}")
        if self.max is not None:
            parts.append(f"max={self.max!r}")
        return f"Range({', '.join(parts)})"


class Desc(ParamMeta):
    """Human-readable parameter description."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


_SENTINEL = object()


class ParamSpec:
    """Resolved specification for a single tunable parameter.

    Attributes
    ----------
    name : str
        Parameter name (keyword-argument key).
    param_type : type
        Expected Python type (``int``, ``float``, ...).
    default : Any
        Default value, or ``None`` when the parameter is required.
    description : str
        Human-readable description.
    min_value : int, float, or None
        Inclusive minimum (from ``Range``).
    max_value : int, float, or None
        Inclusive maximum (from ``Range``).
    """

    __slots__ = (
        'name', 'param_type', 'default', '_has_default',
        'description', 'min_value', 'max_value',
    )

    def __init__(
        self,
        name: str,
        param_type: type,
        default: Any,
        has_default: bool,
        description: str,
        min_value: Optional[Union[int, float]],
        max_value: Optional[Union[int, float]],
    ) -> None:
        self.name = name
        self.param_type = param_type
        self.default = default
        self._has_default = has_default
        self.description = description
        self.min_value = min_value
        self.max_value = max_value

    @property
    def required(self) -> bool:
        """Whether this parameter has no default."""
        return not self._has_default

    def validate(self, value: Any) -> None:
        """Check *value* against this spec's type and range.

        ``int`` is accepted where ``float`` is declared; ``bool`` is never
        accepted as a number.

        Raises
        ------
        ValidationError
            If *value* has the wrong type or lies outside the range.
        """
        if self.param_type in (int, float):
            allowed = (int, float) if self.param_type is float else (int,)
            if isinstance(value, bool) or not isinstance(value, allowed):
                raise ValidationError(
                    f"Parameter '{self.name}' must be "
                    f"{self.param_type.__name__}, got {type(value).__name__}"
                )
        elif self.param_type is not object and not isinstance(value, self.param_type):
            raise ValidationError(
                f"Parameter '{self.name}' must be "
                f"{self.param_type.__name__}, got {type(value).__name__}"
            )

        if self.min_value is not None and value < self.min_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is below minimum {self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is above maximum {self.max_value!r}"
            )

    def __repr__(self) -> str:
        text = (
            f"ParamSpec(name={self.name!r}, "
            f"param_type={self.param_type.__name__}, "
            f"required={self.required!r}"
        )
        if not self.required:
            text += f", default={self.default!r}"
        if self.min_value is not None:
            text += f", min_value={self.min_value!r}"
        if self.max_value is not None:
            text += f", max_value={self.max_value!r}"
        return text + ")"


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Parse ``Annotated`` class fields of *cls* into ``ParamSpec`` objects.

    Only fields carrying at least one ``ParamMeta`` marker are collected.
    Parent-class fields come first, in declaration order.
    """
    hints = get_type_hints(cls, include_extras=True)

    seen: set = set()
    ordered_names: list = []
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name not in seen and name in hints:
                seen.add(name)
                ordered_names.append(name)

    specs: list = []
    for name in ordered_names:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue

        metas = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not metas:
            continue
        range_meta = next((m for m in metas if isinstance(m, Range)), None)
        desc_meta = next((m for m in metas if isinstance(m, Desc)), None)

        default = getattr(cls, name, _SENTINEL)
        has_default = default is not _SENTINEL
        specs.append(ParamSpec(
            name=name,
            param_type=hint.__args__[0],
            default=default if has_default else None,
            has_default=has_default,
            description=desc_meta.text if desc_meta else '',
            min_value=range_meta.min if range_meta else None,
            max_value=range_meta.max if range_meta else None,
        ))

    return tuple(specs)


def make_init(param_specs: Tuple[ParamSpec, ...]):
    """Build a keyword-only, validating ``__init__`` from *param_specs*."""

    def __init__(self, **kwargs):
        unexpected = set(kwargs) - {s.name for s in param_specs}
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected "
                f"keyword arguments: {', '.join(sorted(unexpected))}"
            )
        for spec in param_specs:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            elif not spec.required:
                value = spec.default
            else:
                raise TypeError(
                    f"{type(self).__name__}() missing required "
                    f"keyword argument: '{spec.name}'"
                )
            spec.validate(value)
            setattr(self, spec.name, value)

    params = [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    for spec in param_specs:
        params.append(inspect.Parameter(
            spec.name,
            inspect.Parameter.KEYWORD_ONLY,
            default=inspect.Parameter.empty if spec.required else spec.default,
        ))
    __init__.__signature__ = inspect.Signature(params)
    __init__.__qualname__ = '__init__'
    return __init__


def resolve_params(
    instance: Any,
    specs: Tuple[ParamSpec, ...],
    overrides: Dict[str, Any],
) -> Dict[str, Any]:
    """Merge instance values with per-call *overrides* and validate them.

    Keys in *overrides* that are not declared parameters are ignored.

    Returns
    -------
    Dict[str, Any]
        ``{param_name: resolved_value}`` for every declared parameter.
    """
    resolved: Dict[str, Any] = {}
    for spec in specs:
        value = overrides.get(spec.name, getattr(instance, spec.name))
        spec.validate(value)
        resolved[spec.name] = value
    return resolved
