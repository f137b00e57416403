"""Deferred converters for recursive data shapes."""

from typing import Callable, Optional, TypeVar

from ..converter import Converter
from ..types import DecodeResult, JsonValue

T = TypeVar("T")


class _LazyCell:
    """Resolves a converter factory on first use and keeps the result."""

    def __init__(self, factory: Callable[[], Converter[T]]):
        self._factory = factory
        self._converter: Optional[Converter[T]] = None

    def get(self) -> Converter[T]:
        # A race may call the factory twice; both results are equivalent.
        if self._converter is None:
            self._converter = self._factory()
        return self._converter


def lazy(factory: Callable[[], Converter[T]]) -> Converter[T]:
    """
    Defer construction of a converter until it is first used.

    Needed whenever a converter refers to itself, directly or through
    another converter, since building it eagerly would never finish.
    The factory is not called here, so it may refer to names that are
    only bound after this call returns.

    Example::

        tree = object_(
            Node,
            field("value", lambda n: n.value, int_),
            option("left", lambda n: n.left, lazy(lambda: tree)),
            option("right", lambda n: n.right, lazy(lambda: tree)),
        )
    """
    cell = _LazyCell(factory)

    def encoder(item: T) -> JsonValue:
        return cell.get().encoder(item)

    def decoder(tree: JsonValue) -> DecodeResult[T]:
        return cell.get().decoder(tree)

    return Converter(encoder=encoder, decoder=decoder, description="lazy")
