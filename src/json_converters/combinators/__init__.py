"""Converter combinators for scalars, containers, objects and recursion."""

from .containers import array_like, dict_, list_, nullable
from .iso import Iso, compose, map_, reverse
from .lazy import lazy
from .objects import Field, field, object_, option
from .primitives import bool_, float_, int_, null, string, value

__all__ = [
    "Field",
    "Iso",
    "array_like",
    "bool_",
    "compose",
    "dict_",
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
