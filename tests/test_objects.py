"""Tests for object converters built from fields."""

from collections import namedtuple
from dataclasses import dataclass
from typing import Optional

import pytest

from json_converters import (
    Field,
    bool_,
    decode_string,
    encode,
    field,
    float_,
    int_,
    list_,
    null,
    nullable,
    object_,
    option,
    string,
)
from json_converters.types import ConverterDefinitionError, DecodeErrorKind


@dataclass
class AllTypes:
    string: str
    int: int
    float: float
    bool: bool
    null: tuple


@dataclass
class Profile:
    name: str
    nickname: Optional[str]
    email: Optional[str]


Point = namedtuple("Point", ["x", "y"])


class TestObjectConverter:
    """Tests for object_ with field and option steps."""

    def setup_method(self):
        """Set up test fixtures."""
        self.all_types = object_(
            AllTypes,
            field("string", lambda r: r.string, string),
            field("int", lambda r: r.int, int_),
            field("float", lambda r: r.float, float_),
            field("bool", lambda r: r.bool, bool_),
            field("null", lambda r: r.null, null(())),
        )

    def test_all_primitive_fields_round_trip(self):
        """Test a record with five primitive fields round-trips."""
        record = AllTypes(string="hello", int=1, float=1.0, bool=True, null=())
        encoded = self.all_types.encoder(record)

        assert encoded == {"string": "hello", "int": 1, "float": 1.0, "bool": True, "null": None}
        assert self.all_types.decoder(encoded).value == record

    def test_encodes_in_declaration_order(self):
        """Test keys are written in the order fields were declared."""
        record = AllTypes(string="s", int=2, float=0.5, bool=False, null=())

        assert list(self.all_types.encoder(record)) == ["string", "int", "float", "bool", "null"]

    def test_decoding_ignores_key_order(self, person_converter, sample_person, sample_person_json):
        """Test fields are looked up by key, not position."""
        result = person_converter.decoder(sample_person_json)

        assert result.success
        assert result.value == sample_person

    def test_unknown_keys_are_ignored(self, person_converter, sample_person, sample_person_json):
        """Test extra keys in the input do not cause failures."""
        sample_person_json["extra"] = {"anything": [1, 2]}

        assert person_converter.decoder(sample_person_json).value == sample_person

    def test_missing_required_field(self, person_converter, sample_person_json):
        """Test an absent required key fails with MISSING_FIELD."""
        del sample_person_json["age"]
        result = person_converter.decoder(sample_person_json)

        assert not result.success
        assert result.error.kind == DecodeErrorKind.MISSING_FIELD
        assert result.error.expected == "age"
        assert "age" in result.error.message

    def test_malformed_field_reports_key(self, person_converter, sample_person_json):
        """Test a present but malformed field reports its key."""
        sample_person_json["age"] = "thirty"
        result = person_converter.decoder(sample_person_json)

        assert result.error.kind == DecodeErrorKind.NESTED_FAILURE
        assert result.error.path == ("age",)
        assert result.error.root_cause.kind == DecodeErrorKind.TYPE_MISMATCH

    def test_first_failing_field_in_declaration_order_wins(self, person_converter):
        """Test decoding stops at the first declared field that fails."""
        result = person_converter.decoder({"name": 1, "tags": "nope"})

        assert result.error.path == ("name",)

    def test_path_through_nested_list(self):
        """Test an error inside a list field carries the key and index."""
        converter = object_(lambda items: items, field("list", lambda items: items, list_(string)))
        result = decode_string(converter, '{"list": ["a", 7, "c"]}')

        assert not result.success
        assert result.error.kind == DecodeErrorKind.NESTED_FAILURE
        assert result.error.path == ("list", 1)
        assert result.error.location == "$.list[1]"

    def test_rejects_non_object(self, person_converter):
        """Test a non-object input is a type mismatch."""
        result = person_converter.decoder(["Alice", 30])

        assert result.error.kind == DecodeErrorKind.TYPE_MISMATCH
        assert result.error.found == "array"

    def test_namedtuple_constructor(self):
        """Test namedtuples work as constructors."""
        converter = object_(
            Point,
            field("x", lambda p: p.x, int_),
            field("y", lambda p: p.y, int_),
        )

        assert encode(converter, 0, Point(1, 2)) == '{"x":1,"y":2}'
        assert decode_string(converter, '{"y": 2, "x": 1}').value == Point(1, 2)


class TestOptionField:
    """Tests for optional fields and their difference from nullable."""

    def setup_method(self):
        """Set up test fixtures."""
        self.converter = object_(
            Profile,
            field("name", lambda p: p.name, string),
            option("nickname", lambda p: p.nickname, string),
            field("email", lambda p: p.email, nullable(string)),
        )

    def test_none_option_is_omitted(self):
        """Test an option yielding None leaves the key out entirely."""
        encoded = self.converter.encoder(Profile("Bob", None, None))

        assert "nickname" not in encoded
        assert encoded == {"name": "Bob", "email": None}

    def test_absent_option_decodes_to_none(self):
        """Test a missing optional key decodes to None."""
        result = self.converter.decoder({"name": "Bob", "email": None})

        assert result.success
        assert result.value == Profile("Bob", None, None)

    def test_present_option_decodes(self):
        """Test a present optional key decodes with the inner converter."""
        record = Profile("Bob", "bobby", "bob@example.com")
        encoded = self.converter.encoder(record)

        assert encoded["nickname"] == "bobby"
        assert self.converter.decoder(encoded).value == record

    def test_malformed_option_propagates(self):
        """Test a present but malformed optional key fails."""
        result = self.converter.decoder({"name": "Bob", "nickname": 3, "email": None})

        assert not result.success
        assert result.error.path == ("nickname",)

    def test_missing_height_round_trip(self, person_converter, sample_person):
        """Test a person without height encodes without the key and decodes to None."""
        sample_person.height = None
        encoded = person_converter.encoder(sample_person)

        assert "height" not in encoded
        assert person_converter.decoder(encoded).value.height is None

    def test_null_under_option_uses_inner_converter(self):
        """Test an explicit null is not treated as an absent option."""
        result = self.converter.decoder({"name": "Bob", "nickname": None, "email": None})

        assert not result.success
        assert result.error.root_cause.kind == DecodeErrorKind.INVALID_NULL_TARGET

    def test_nullable_field_is_required(self):
        """Test a nullable field must still be present."""
        result = self.converter.decoder({"name": "Bob"})

        assert result.error.kind == DecodeErrorKind.MISSING_FIELD
        assert result.error.expected == "email"

    def test_option_of_nullable_accepts_null(self):
        """Test combining option and nullable accepts both absent key and null."""
        converter = object_(
            lambda nickname: nickname,
            option("nickname", lambda n: n, nullable(string)),
        )

        assert converter.decoder({}).value is None
        assert converter.decoder({"nickname": None}).value is None
        assert converter.decoder({"nickname": "x"}).value == "x"


class TestFieldAccumulator:
    """Tests for the Field builder and its arity checks."""

    def test_builder_methods(self):
        """Test the fluent builder produces the same converter as object_."""
        converter = (
            Field(Point)
            .field("x", lambda p: p.x, int_)
            .field("y", lambda p: p.y, int_)
            .build()
        )

        assert converter.decoder({"x": 3, "y": 4}).value == Point(3, 4)

    def test_accumulator_is_immutable(self):
        """Test adding a field returns a new accumulator."""
        empty = Field(Point)
        with_x = empty.field("x", lambda p: p.x, int_)

        assert empty.names == ()
        assert with_x.names == ("x",)

    def test_too_few_fields(self):
        """Test build fails when the constructor needs more arguments."""
        with pytest.raises(ConverterDefinitionError, match="requires 2"):
            object_(Point, field("x", lambda p: p.x, int_))

    def test_too_many_fields(self):
        """Test adding a field beyond the constructor's arity fails."""
        with pytest.raises(ConverterDefinitionError, match="at most 2"):
            object_(
                Point,
                field("x", lambda p: p.x, int_),
                field("y", lambda p: p.y, int_),
                field("z", lambda p: 0, int_),
            )

    def test_duplicate_field_name(self):
        """Test a key declared twice is rejected."""
        with pytest.raises(ConverterDefinitionError, match="declared twice"):
            object_(
                Point,
                field("x", lambda p: p.x, int_),
                field("x", lambda p: p.y, int_),
            )

    def test_defaults_make_fields_optional_for_arity(self):
        """Test constructor parameters with defaults need not be declared."""

        def make(name, active=True):
            return (name, active)

        converter = object_(make, field("name", lambda r: r[0], string))

        assert converter.decoder({"name": "n"}).value == ("n", True)

    def test_var_positional_constructor(self):
        """Test *args constructors accept any number of fields."""
        converter = object_(
            lambda *values: list(values),
            field("a", lambda r: r[0], int_),
            field("b", lambda r: r[1], int_),
            field("c", lambda r: r[2], int_),
        )

        assert converter.decoder({"a": 1, "b": 2, "c": 3}).value == [1, 2, 3]

    def test_required_keyword_only_parameter(self):
        """Test constructors with required keyword-only parameters are rejected."""

        def make(name, *, flag):
            return name

        with pytest.raises(ConverterDefinitionError, match="keyword-only"):
            Field(make)

    def test_empty_object(self):
        """Test a constructor without arguments yields an empty object."""
        converter = object_(dict)

        assert converter.encoder({}) == {}
        assert converter.decoder({"ignored": 1}).value == {}

    def test_signature_inspected_once(self, monkeypatch):
        """Test the constructor signature is read once per accumulator chain."""
        from json_converters.combinators import objects

        calls = []
        original = objects._arity_bounds

        def counting(constructor):
            calls.append(constructor)
            return original(constructor)

        monkeypatch.setattr(objects, "_arity_bounds", counting)
        object_(
            Point,
            field("x", lambda p: p.x, int_),
            field("y", lambda p: p.y, int_),
        )

        assert calls == [Point]

    def test_raising_constructor_propagates(self):
        """Test a constructor that rejects decoded values raises out of the decoder."""

        @dataclass
        class Positive:
            amount: int

            def __post_init__(self):
                if self.amount <= 0:
                    raise ValueError("amount must be positive")

        converter = object_(Positive, field("amount", lambda p: p.amount, int_))

        assert converter.decoder({"amount": 3}).value == Positive(3)
        with pytest.raises(ValueError, match="positive"):
            converter.decoder({"amount": -1})
