"""Primitive converters for JSON scalars."""

import math
from typing import Any, Callable, TypeVar

from ..converter import Converter
from ..data_type_detector import DataTypeDetector, ValueKind
from ..types import DecodeError, DecodeResult, JsonValue

T = TypeVar("T")

_detector = DataTypeDetector()


def _scalar(kind: ValueKind, description: str,
            convert: Callable[[Any], DecodeResult[T]]) -> Converter[T]:
    """Build a converter for one scalar kind, rejecting null and other kinds."""

    def decoder(value: JsonValue) -> DecodeResult[T]:
        found = _detector.detect_kind(value)
        if found is ValueKind.NULL:
            return DecodeResult.fail(DecodeError.invalid_null_target(kind.value, "null"))
        if found is not kind:
            return DecodeResult.fail(DecodeError.type_mismatch(kind.value, _detector.describe(value)))
        return convert(value)

    return Converter(encoder=lambda value: value, decoder=decoder, description=description)


def _decode_int(value: Any) -> DecodeResult[int]:
    if not _detector.is_integral(value):
        return DecodeResult.fail(DecodeError.type_mismatch("integer", f"non-integral number {value!r}"))
    return DecodeResult.ok(int(value))


def _encode_float(value: float) -> float:
    if not math.isfinite(value):
        raise ValueError(f"Cannot encode non-finite float {value!r} as JSON")
    return float(value)


string: Converter[str] = _scalar(ValueKind.STRING, "string", DecodeResult.ok)

int_: Converter[int] = _scalar(ValueKind.NUMBER, "int", _decode_int)

float_: Converter[float] = Converter(
    encoder=_encode_float,
    decoder=_scalar(ValueKind.NUMBER, "float", lambda v: DecodeResult.ok(float(v))).decoder,
    description="float",
)

bool_: Converter[bool] = _scalar(ValueKind.BOOLEAN, "bool", DecodeResult.ok)

value: Converter[JsonValue] = Converter(
    encoder=lambda tree: tree,
    decoder=DecodeResult.ok,
    description="value",
)


def null(constant: T) -> Converter[T]:
    """
    Converter that always encodes to JSON null.

    Decoding accepts only null and yields ``constant``.

    Args:
        constant: Value produced when decoding null

    Returns:
        Converter for the fixed value
    """

    def decoder(tree: JsonValue) -> DecodeResult[T]:
        if tree is not None:
            return DecodeResult.fail(DecodeError.invalid_null_target("null", _detector.describe(tree)))
        return DecodeResult.ok(constant)

    return Converter(encoder=lambda _: None, decoder=decoder, description=f"null({constant!r})")
