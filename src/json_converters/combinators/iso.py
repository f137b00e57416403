"""Isomorphisms and the converter mapping built on them."""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from ..converter import Converter

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")


@dataclass(frozen=True)
class Iso(Generic[A, B]):
    """
    Pair of total, mutually inverse functions between ``A`` and ``B``.

    ``reverse_get(get(a)) == a`` and ``get(reverse_get(b)) == b`` must hold
    for every value a converter will see. The law is not checked; an iso
    that breaks it breaks the encode/decode round trip.
    """

    get: Callable[[A], B]
    reverse_get: Callable[[B], A]

    @classmethod
    def identity(cls) -> "Iso[A, A]":
        return cls(get=lambda a: a, reverse_get=lambda a: a)

    def reverse(self) -> "Iso[B, A]":
        return reverse(self)

    def compose(self, other: "Iso[B, C]") -> "Iso[A, C]":
        return compose(self, other)


def reverse(iso: Iso[A, B]) -> Iso[B, A]:
    """Swap the directions of an isomorphism."""
    return Iso(get=iso.reverse_get, reverse_get=iso.get)


def compose(first: Iso[A, B], second: Iso[B, C]) -> Iso[A, C]:
    """Chain two isomorphisms, applying ``first`` then ``second`` on ``get``."""
    return Iso(
        get=lambda a: second.get(first.get(a)),
        reverse_get=lambda c: first.reverse_get(second.reverse_get(c)),
    )


def map_(iso: Iso[A, B], converter: Converter[A]) -> Converter[B]:
    """
    Turn a converter for ``A`` into one for ``B``.

    Encoding applies ``iso.reverse_get`` before the wrapped encoder;
    decoding applies ``iso.get`` to the wrapped decoder's result.
    """
    return Converter(
        encoder=lambda b: converter.encoder(iso.reverse_get(b)),
        decoder=lambda tree: converter.decoder(tree).map(iso.get),
        description=f"map({converter.description})",
    )
