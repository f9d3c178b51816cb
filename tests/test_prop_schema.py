"""Tests for prop schemas and schema derivation from typed declarations."""
from dataclasses import dataclass, field
from typing import Callable, ClassVar, List, Literal, Optional, TypedDict, Union

import pytest

from animated.animation import AnimatedValue
from animated.props import PropKind, PropSchema, PropSpec, transform_props


class Style(TypedDict, total=False):
    color: str
    opacity: float
    transform: List[str]


class LabelProps(TypedDict):
    opacity: float
    label: str
    style: Style
    children: Optional[str]


@dataclass
class ButtonProps:
    width: int
    variant: Literal["primary", "secondary"]
    on_click: Callable[[], None]
    size: Union[int, float] = 12
    tags: List[str] = field(default_factory=list)


class CardProps:
    title: str
    elevation: float = 1.0
    registry: ClassVar[dict] = {}


class SizedStyle(TypedDict, total=False):
    width: Union[int, str]
    margin: Optional[Union[float, str]]


class PanelProps(TypedDict):
    style: SizedStyle
    align: Literal["auto", 0, 1]
    level: Union[int, List[int]]


class TestFromType:

    def test_typed_dict(self):
        schema = PropSchema.from_type(LabelProps)
        assert list(schema) == ["opacity", "label", "style", "children"]
        assert schema["opacity"].kind is PropKind.NUMBER
        assert schema["label"].kind is PropKind.STRING
        assert schema["children"].kind is PropKind.STRING
        assert schema["children"].optional
        assert not schema["label"].optional

    def test_nested_typed_dict_becomes_object(self):
        style = PropSchema.from_type(LabelProps)["style"]
        assert style.kind is PropKind.OBJECT
        assert style.fields["color"].kind is PropKind.STRING
        assert style.fields["opacity"].kind is PropKind.NUMBER
        assert style.fields["transform"].kind is PropKind.OTHER
        assert all(spec.optional for spec in style.fields.values())

    def test_dataclass(self):
        schema = PropSchema.from_type(ButtonProps)
        assert schema["width"].kind is PropKind.NUMBER
        assert schema["variant"].kind is PropKind.STRING
        assert schema["on_click"].kind is PropKind.OTHER
        assert schema["size"].kind is PropKind.NUMBER
        assert schema["size"].optional
        assert schema["tags"].optional
        assert not schema["width"].optional

    def test_annotated_class(self):
        schema = PropSchema.from_type(CardProps)
        assert set(schema) == {"title", "elevation"}
        assert schema["elevation"].optional
        assert not schema["title"].optional

    def test_type_hint_kept(self):
        assert PropSchema.from_type(LabelProps)["children"].type_hint == Optional[str]

    def test_rejects_non_class(self):
        with pytest.raises(TypeError, match="Expected a props class"):
            PropSchema.from_type("LabelProps")


class TestScalarUnions:
    """Hints that allow a number or a string map to the SCALAR kind."""

    def test_union_style_field_is_scalar(self):
        style = PropSchema.from_type(PanelProps)["style"]
        assert style.fields["width"].kind is PropKind.SCALAR
        assert style.fields["margin"].kind is PropKind.SCALAR
        assert style.fields["margin"].optional

    def test_mixed_literal_is_scalar(self):
        assert PropSchema.from_type(PanelProps)["align"].kind is PropKind.SCALAR

    def test_union_with_non_scalar_member_stays_other(self):
        assert PropSchema.from_type(PanelProps)["level"].kind is PropKind.OTHER

    def test_union_style_field_becomes_animatable(self):
        schema = transform_props(PropSchema.from_type(PanelProps))
        width = schema["style"].fields["width"]
        assert width.animated and width.literal
        assert width.accepts(10)
        assert width.accepts("10px")
        assert width.accepts(AnimatedValue(0.0))
        assert width.accepts(AnimatedValue("10px"))
        assert not width.accepts(AnimatedValue((1.0, 2.0)))
        assert not width.accepts([10])

    def test_union_prop_validates_in_animated_schema(self):
        schema = transform_props(PropSchema.from_type(PanelProps))
        assert schema["align"].animated
        assert schema.accepts("align", AnimatedValue(0.0).interpolate([0, 1], ["0px", "8px"]))


class TestFromComponent:

    def test_prop_schema_attribute_wins(self):
        schema = PropSchema({"x": PropSpec.number()})

        def component(props, ref):
            return None

        component.prop_schema = schema
        component.Props = LabelProps
        assert PropSchema.from_component(component) is schema

    def test_props_type(self):
        class Label:
            Props = LabelProps

            def __call__(self, props, ref):
                return None

        assert list(PropSchema.from_component(Label())) == ["opacity", "label", "style", "children"]

    def test_mapping_attribute(self):
        def component(props, ref):
            return None

        component.prop_schema = {"x": PropSpec.string()}
        assert PropSchema.from_component(component)["x"].kind is PropKind.STRING

    def test_undeclared_component_gets_empty_schema(self):
        assert len(PropSchema.from_component(lambda props, ref: None)) == 0

    def test_bad_prop_schema_attribute(self):
        def component(props, ref):
            return None

        component.prop_schema = ["x"]
        with pytest.raises(TypeError, match="prop_schema must be"):
            PropSchema.from_component(component)


class TestPropSpec:

    def test_object_defaults_to_empty_fields(self):
        assert PropSpec(PropKind.OBJECT).fields == PropSchema()

    def test_fields_only_on_objects(self):
        with pytest.raises(ValueError, match="Only OBJECT props have fields"):
            PropSpec(PropKind.NUMBER, fields=PropSchema())

    def test_must_accept_something(self):
        with pytest.raises(ValueError, match="must accept"):
            PropSpec(PropKind.NUMBER, literal=False)

    def test_only_scalars_animate(self):
        with pytest.raises(ValueError, match="cannot be animated"):
            PropSpec(PropKind.OTHER, animated=True)

    def test_accepts_literals(self):
        assert PropSpec.number().accepts(1.5)
        assert not PropSpec.number().accepts("1.5")
        assert not PropSpec.number().accepts(True)
        assert PropSpec.string().accepts("x")
        assert PropSpec.other().accepts(object())
        assert not PropSpec.number().accepts(None)
        assert PropSpec.number(optional=True).accepts(None)

    def test_accepts_animated_only_when_allowed(self):
        value = AnimatedValue(0.0)
        assert not PropSpec.number().accepts(value)
        assert PropSpec(PropKind.NUMBER, animated=True).accepts(value)
        assert not PropSpec(PropKind.STRING, animated=True).accepts(value)


class TestPropSchema:

    def test_is_an_immutable_mapping(self):
        schema = PropSchema({"x": PropSpec.number()})
        with pytest.raises(TypeError):
            schema["y"] = PropSpec.number()
        assert "x" in schema and len(schema) == 1

    def test_entries_must_be_specs(self):
        with pytest.raises(TypeError, match="must map to a PropSpec"):
            PropSchema({"x": "number"})

    def test_equality_includes_animated_flag(self):
        entries = {"x": PropSpec.number()}
        assert PropSchema(entries) == PropSchema(entries)
        assert PropSchema(entries) != PropSchema(entries, animated=True)
        assert hash(PropSchema(entries)) == hash(PropSchema(entries))

    def test_accepts_by_name(self):
        schema = PropSchema({"x": PropSpec.number()})
        assert schema.accepts("x", 1)
        assert not schema.accepts("x", "1")
        assert schema.accepts("undeclared", object())
