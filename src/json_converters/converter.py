"""The converter abstraction: a paired JSON encoder and decoder."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from .types import DecodeResult, JsonValue

if TYPE_CHECKING:
    from .combinators.iso import Iso

T = TypeVar("T")
B = TypeVar("B")


@dataclass(frozen=True)
class Converter(Generic[T]):
    """
    Immutable pairing of an encoder and a decoder for one data type.

    The encoder must be total for every value of ``T`` the program can
    construct. The decoder must not raise on malformed input; it returns a
    failed ``DecodeResult`` carrying a structured ``DecodeError`` instead.

    Converters hold no mutable state, so one instance can be shared by any
    number of threads.
    """

    encoder: Callable[[T], JsonValue]
    decoder: Callable[[JsonValue], DecodeResult[T]]
    description: str = "converter"

    def encode_value(self, value: T) -> JsonValue:
        """Encode a value to a JSON tree."""
        return self.encoder(value)

    def decode(self, value: JsonValue) -> DecodeResult[T]:
        """Decode a JSON tree."""
        return self.decoder(value)

    def map(self, iso: "Iso[T, B]") -> "Converter[B]":
        """Convert through an isomorphism; see ``combinators.iso.map_``."""
        from .combinators.iso import map_
        return map_(iso, self)

    def __repr__(self) -> str:
        return f"Converter({self.description})"
