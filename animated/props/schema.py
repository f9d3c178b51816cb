"""
Prop schemas: what a component accepts, as plain data.

A PropSchema maps prop names to PropSpec entries. Schemas are built by hand,
derived from a typed props declaration (TypedDict, dataclass or annotated
class) with PropSchema.from_type, or looked up on a component with
PropSchema.from_component. transform_props() turns one into the schema of the
animated wrapper.
"""
from __future__ import annotations

import dataclasses
import types
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    ClassVar,
    Dict,
    Iterator,
    Literal,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    is_typeddict,
)

from animated.animation.animated_value import is_animated
from animated.animation.types import ValueShape, is_number
from animated.logging.logger import get_logger
from animated.logging.tags import TAG_PROPS

logger = get_logger(__name__)

_NONE_TYPE = type(None)
_UNION_TYPES = (Union, types.UnionType)


class PropKind(Enum):
    """What kind of value a prop holds."""
    NUMBER = "number"
    STRING = "string"
    SCALAR = "scalar"    # Number or string, e.g. Union[int, str] widths
    OBJECT = "object"    # Nested bag of props (style)
    OTHER = "other"      # Callbacks, lists, arbitrary objects; never animated

    @property
    def is_scalar(self) -> bool:
        return self in (PropKind.NUMBER, PropKind.STRING, PropKind.SCALAR)


_SHAPES_FOR_KIND = {
    PropKind.NUMBER: (ValueShape.NUMBER,),
    PropKind.STRING: (ValueShape.STRING,),
    PropKind.SCALAR: (ValueShape.NUMBER, ValueShape.STRING),
}


@dataclass(frozen=True)
class PropSpec:
    """
    Declaration of a single prop.

    ``literal`` and ``animated`` say which forms of the value are accepted:
    plain props take literals only, transformed scalar props take both, and
    the synthetic scroll props take animated values only.
    """
    kind: PropKind
    optional: bool = False
    fields: Optional["PropSchema"] = None                 # OBJECT only
    type_hint: Any = field(default=None, compare=False)   # Declared Python type, informational
    literal: bool = True
    animated: bool = False
    host_mutation: bool = False                           # Renderer writes it on the host node

    def __post_init__(self):
        if not isinstance(self.kind, PropKind):
            object.__setattr__(self, "kind", PropKind(self.kind))
        if self.kind is PropKind.OBJECT:
            if self.fields is None:
                object.__setattr__(self, "fields", PropSchema())
            elif not isinstance(self.fields, PropSchema):
                object.__setattr__(self, "fields", PropSchema(self.fields))
        elif self.fields is not None:
            raise ValueError(f"Only OBJECT props have fields, not {self.kind.value} props")
        if not (self.literal or self.animated):
            raise ValueError("A prop must accept literals, animated values, or both")
        if self.animated and not self.kind.is_scalar:
            raise ValueError(f"{self.kind.value} props cannot be animated")

    # Shorthand constructors for hand-written schemas

    @classmethod
    def number(cls, optional: bool = False) -> "PropSpec":
        return cls(PropKind.NUMBER, optional=optional, type_hint=float)

    @classmethod
    def string(cls, optional: bool = False) -> "PropSpec":
        return cls(PropKind.STRING, optional=optional, type_hint=str)

    @classmethod
    def nested(cls, fields: Optional[Mapping[str, "PropSpec"]] = None,
               optional: bool = False) -> "PropSpec":
        return cls(PropKind.OBJECT, optional=optional, fields=PropSchema(fields or {}))

    @classmethod
    def other(cls, optional: bool = False, type_hint: Any = None) -> "PropSpec":
        return cls(PropKind.OTHER, optional=optional, type_hint=type_hint)

    def accepts(self, value: Any) -> bool:
        """True when value is an acceptable form of this prop."""
        if value is None:
            return self.optional
        if is_animated(value):
            return self.animated and value.shape in _SHAPES_FOR_KIND[self.kind]
        if not self.literal:
            return False
        if self.kind is PropKind.NUMBER:
            return is_number(value)
        if self.kind is PropKind.STRING:
            return isinstance(value, str)
        if self.kind is PropKind.SCALAR:
            return is_number(value) or isinstance(value, str)
        if self.kind is PropKind.OBJECT:
            return isinstance(value, Mapping) and all(
                self.fields.accepts(name, item) for name, item in value.items()
            )
        return True


class PropSchema(Mapping):
    """
    Immutable mapping of prop name -> PropSpec.

    ``animated`` marks schemas produced by transform_props().
    """

    def __init__(self, props: Optional[Mapping[str, PropSpec]] = None, *, animated: bool = False):
        entries: Dict[str, PropSpec] = dict(props or {})
        for name, spec in entries.items():
            if not isinstance(spec, PropSpec):
                raise TypeError(f"Prop {name!r} must map to a PropSpec, got {type(spec).__name__}")
        self._props = types.MappingProxyType(entries)
        self._animated = bool(animated)

    @property
    def animated(self) -> bool:
        return self._animated

    def __getitem__(self, name: str) -> PropSpec:
        return self._props[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._props)

    def __len__(self) -> int:
        return len(self._props)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropSchema):
            return NotImplemented
        return self._animated == other._animated and dict(self._props) == dict(other._props)

    def __hash__(self) -> int:
        return hash((self._animated, frozenset(self._props.items())))

    def __repr__(self) -> str:
        flag = ", animated=True" if self._animated else ""
        return f"PropSchema({dict(self._props)!r}{flag})"

    def accepts(self, name: str, value: Any) -> bool:
        """
        Check one prop value against the schema.

        Names the schema does not declare are accepted; the schema only
        constrains what it describes.
        """
        spec = self._props.get(name)
        if spec is None:
            return True
        return spec.accepts(value)

    @classmethod
    def from_type(cls, props_type: type) -> "PropSchema":
        """
        Derive a schema from a typed props declaration.

        Supports TypedDict (required/optional keys respected), dataclasses
        (fields with defaults are optional) and plain annotated classes
        (annotations with a class-level default are optional).

        Raises:
            TypeError: props_type is not a class
            NameError: an annotation cannot be resolved
        """
        return _schema_from_type(props_type, ())

    @classmethod
    def from_component(cls, component: Any) -> "PropSchema":
        """
        Look up the schema a component declares.

        Checked in order: a ``prop_schema`` attribute (PropSchema or mapping
        of PropSpec), a ``Props`` type (see from_type), else an empty schema.
        """
        declared = getattr(component, "prop_schema", None)
        if declared is not None:
            if isinstance(declared, PropSchema):
                return declared
            if isinstance(declared, Mapping):
                return cls(declared)
            raise TypeError(
                f"prop_schema must be a PropSchema or a mapping, got {type(declared).__name__}"
            )

        props_type = getattr(component, "Props", None)
        if props_type is not None:
            schema = cls.from_type(props_type)
            logger.debug(
                "%s Derived schema for %s from Props: %s",
                TAG_PROPS,
                getattr(component, "__name__", type(component).__name__),
                list(schema),
            )
            return schema

        logger.debug(
            "%s %s declares no props; using an empty schema",
            TAG_PROPS,
            getattr(component, "__name__", type(component).__name__),
        )
        return cls()


def _is_object_type(hint: Any) -> bool:
    return isinstance(hint, type) and (is_typeddict(hint) or dataclasses.is_dataclass(hint))


def _combine_scalar_kinds(kinds) -> PropKind:
    kinds = set(kinds)
    if len(kinds) == 1:
        return kinds.pop()
    return PropKind.SCALAR


def _scalar_kind(hint: Any) -> Optional[PropKind]:
    """Kind of a number/string hint, or None when the hint is not scalar."""
    if hint in (int, float):
        return PropKind.NUMBER
    if hint is str:
        return PropKind.STRING
    if get_origin(hint) is Literal:
        values = get_args(hint)
        if not values:
            return None
        kinds = []
        for value in values:
            if isinstance(value, str):
                kinds.append(PropKind.STRING)
            elif is_number(value):
                kinds.append(PropKind.NUMBER)
            else:
                return None
        return _combine_scalar_kinds(kinds)
    return None


def _spec_from_hint(hint: Any, stack: Tuple[type, ...]) -> PropSpec:
    declared = hint
    optional = False

    if get_origin(hint) in _UNION_TYPES:
        members = get_args(hint)
        non_none = tuple(m for m in members if m is not _NONE_TYPE)
        optional = len(non_none) != len(members)
        if len(non_none) == 1:
            hint = non_none[0]
        else:
            kinds = [_scalar_kind(m) for m in non_none]
            if kinds and None not in kinds:
                return PropSpec(_combine_scalar_kinds(kinds), optional=optional, type_hint=declared)
            return PropSpec(PropKind.OTHER, optional=optional, type_hint=declared)

    kind = _scalar_kind(hint)
    if kind is not None:
        return PropSpec(kind, optional=optional, type_hint=declared)
    if _is_object_type(hint) and hint not in stack:
        return PropSpec(
            PropKind.OBJECT,
            optional=optional,
            fields=_schema_from_type(hint, stack),
            type_hint=declared,
        )
    return PropSpec(PropKind.OTHER, optional=optional, type_hint=declared)


def _schema_from_type(props_type: Any, stack: Tuple[type, ...]) -> PropSchema:
    if not isinstance(props_type, type):
        raise TypeError(f"Expected a props class, got {props_type!r}")

    hints = get_type_hints(props_type)
    stack = stack + (props_type,)

    if is_typeddict(props_type):
        names = list(hints)
        required = set(getattr(props_type, "__required_keys__", names))
        has_default = {name for name in names if name not in required}
    elif dataclasses.is_dataclass(props_type):
        dc_fields = dataclasses.fields(props_type)
        names = [f.name for f in dc_fields]
        has_default = {
            f.name for f in dc_fields
            if f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING
        }
    else:
        names = [n for n, h in hints.items() if get_origin(h) is not ClassVar and h is not ClassVar]
        has_default = {n for n in names if hasattr(props_type, n)}

    props: Dict[str, PropSpec] = {}
    for name in names:
        spec = _spec_from_hint(hints[name], stack)
        if name in has_default and not spec.optional:
            spec = dataclasses.replace(spec, optional=True)
        props[name] = spec
    return PropSchema(props)
