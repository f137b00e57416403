"""
JSON Converters - paired, typed JSON encoders and decoders.

A converter couples an encoder and a decoder for one type. Converters for
scalars are combined into converters for lists, mappings, objects and
recursive shapes, so one definition yields a serializer and a checked
deserializer that always agree.
"""

__version__ = "1.0.0"

from .codec import JSONCodec, decode_string, decode_value, encode
from .combinators import (
    Field,
    Iso,
    array_like,
    bool_,
    compose,
    dict_,
    field,
    float_,
    int_,
    lazy,
    list_,
    map_,
    null,
    nullable,
    object_,
    option,
    reverse,
    string,
    value,
)
from .converter import Converter
from .error_handler import ErrorHandler, ErrorReport
from .types import ConverterDefinitionError, DecodeError, DecodeErrorKind, DecodeResult

__all__ = [
    "Converter",
    "ConverterDefinitionError",
    "DecodeError",
    "DecodeErrorKind",
    "DecodeResult",
    "ErrorHandler",
    "ErrorReport",
    "Field",
    "Iso",
    "JSONCodec",
    "array_like",
    "bool_",
    "compose",
    "decode_string",
    "decode_value",
    "dict_",
    "encode",
    "field",
    "float_",
    "int_",
    "lazy",
    "list_",
    "map_",
    "null",
    "nullable",
    "object_",
    "option",
    "reverse",
    "string",
    "value",
]
