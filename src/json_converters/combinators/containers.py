"""Container combinators lifting a converter to arrays, objects and null."""

from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from ..converter import Converter
from ..data_type_detector import kind_of
from ..types import DecodeError, DecodeResult, JsonValue

T = TypeVar("T")
C = TypeVar("C")


def _decode_elements(converter: Converter[T], tree: JsonValue) -> DecodeResult[List[T]]:
    if not isinstance(tree, list):
        return DecodeResult.fail(DecodeError.type_mismatch("array", kind_of(tree)))

    items: List[T] = []
    for index, element in enumerate(tree):
        result = converter.decoder(element)
        if not result.success:
            return DecodeResult.fail(DecodeError.nested(index, result.error))
        items.append(result.value)
    return DecodeResult.ok(items)


def list_(converter: Converter[T]) -> Converter[List[T]]:
    """
    Lift a converter to lists encoded as JSON arrays.

    Decoding stops at the first element that fails; the error carries the
    element's index.
    """
    return Converter(
        encoder=lambda items: [converter.encoder(item) for item in items],
        decoder=lambda tree: _decode_elements(converter, tree),
        description=f"list({converter.description})",
    )


def array_like(converter: Converter[T],
               factory: Callable[[List[T]], C] = tuple) -> Converter[C]:
    """
    Lift a converter to any iterable sequence encoded as a JSON array.

    Args:
        converter: Converter for the elements
        factory: Builds the sequence from the decoded elements, ``tuple`` by default

    Returns:
        Converter for the sequence type produced by ``factory``
    """

    def encoder(items: Iterable[T]) -> JsonValue:
        return [converter.encoder(item) for item in items]

    return Converter(
        encoder=encoder,
        decoder=lambda tree: _decode_elements(converter, tree).map(factory),
        description=f"array_like({converter.description})",
    )


def dict_(converter: Converter[T]) -> Converter[Dict[str, T]]:
    """
    Lift a converter to string-keyed mappings encoded as JSON objects.

    Keys keep insertion order. Decoding stops at the first value that
    fails; the error carries the offending key.
    """

    def decoder(tree: JsonValue) -> DecodeResult[Dict[str, T]]:
        if not isinstance(tree, dict):
            return DecodeResult.fail(DecodeError.type_mismatch("object", kind_of(tree)))

        mapping: Dict[str, T] = {}
        for key, item in tree.items():
            result = converter.decoder(item)
            if not result.success:
                return DecodeResult.fail(DecodeError.nested(key, result.error))
            mapping[key] = result.value
        return DecodeResult.ok(mapping)

    return Converter(
        encoder=lambda mapping: {key: converter.encoder(item) for key, item in mapping.items()},
        decoder=decoder,
        description=f"dict({converter.description})",
    )


def nullable(converter: Converter[T]) -> Converter[Optional[T]]:
    """
    Lift a converter to optional values where ``None`` is JSON null.

    This differs from an optional object field, which is omitted instead
    of being written as null.
    """

    def encoder(item: Optional[T]) -> JsonValue:
        if item is None:
            return None
        return converter.encoder(item)

    def decoder(tree: JsonValue) -> DecodeResult[Optional[T]]:
        if tree is None:
            return DecodeResult.ok(None)
        return converter.decoder(tree)

    return Converter(encoder=encoder, decoder=decoder,
                     description=f"nullable({converter.description})")
