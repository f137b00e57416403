"""
Object converters assembled from named fields.

A ``Field`` accumulator collects, in declaration order, one encoder entry
and one decoding step per field. Encoding walks the entries and builds a
JSON object, leaving out optional fields whose getter returned ``None``.
Decoding looks every field up by key, so the key order of the input does
not matter, and feeds the decoded values to the record constructor
positionally in declaration order.

Example::

    person = object_(
        Person,
        field("name", lambda p: p.name, string),
        option("height", lambda p: p.height, float_),
    )
"""

import functools
import inspect
import logging
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

from ..converter import Converter
from ..data_type_detector import kind_of
from ..types import ConverterDefinitionError, DecodeError, DecodeResult, JsonValue

R = TypeVar("R")
T = TypeVar("T")

logger = logging.getLogger(__name__)

# Marks an optional field left out of the encoded object
_OMITTED = object()

_UNINSPECTED = object()

Extract = Callable[[Any], Any]
Step = Callable[[Dict[str, JsonValue]], DecodeResult[Any]]


def _arity_bounds(constructor: Callable[..., Any]) -> Optional[Tuple[int, Optional[int]]]:
    """
    Count the positional parameters of a constructor.

    Returns:
        Tuple of (required, maximum) where maximum is None for ``*args``,
        or None when the signature cannot be inspected
    """
    try:
        signature = inspect.signature(constructor)
    except (TypeError, ValueError):
        return None

    required = 0
    maximum: Optional[int] = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            maximum = None
        elif parameter.kind in (inspect.Parameter.POSITIONAL_ONLY,
                                inspect.Parameter.POSITIONAL_OR_KEYWORD):
            if maximum is not None:
                maximum += 1
            if parameter.default is inspect.Parameter.empty:
                required += 1
        elif (parameter.kind is inspect.Parameter.KEYWORD_ONLY
              and parameter.default is inspect.Parameter.empty):
            raise ConverterDefinitionError(
                f"Constructor {_name_of(constructor)} has required keyword-only "
                f"parameter '{parameter.name}' that fields cannot supply",
                context={"constructor": constructor},
            )
    return required, maximum


def _name_of(constructor: Callable[..., Any]) -> str:
    return getattr(constructor, "__name__", repr(constructor))


def _decode_key(name: str, converter: Converter[Any], tree: Dict[str, JsonValue]) -> DecodeResult[Any]:
    return converter.decoder(tree[name]).map_error(lambda error: DecodeError.nested(name, error))


class Field(Generic[R]):
    """
    Immutable accumulator for an object converter under construction.

    Every call to ``field`` or ``option`` returns a new accumulator with one
    more positional constructor argument bound; ``build`` checks that the
    declared fields match the constructor and returns the converter.

    The constructor must accept every combination of decoded field values,
    like the functions of an ``Iso``. An exception it raises propagates out
    of the decoder unchanged.
    """

    def __init__(self, constructor: Callable[..., R],
                 _entries: Tuple[Tuple[str, Extract], ...] = (),
                 _decoder: Optional[Step] = None,
                 _bounds: Any = _UNINSPECTED):
        self.constructor = constructor
        self._entries = _entries
        self._decoder: Step = _decoder or (lambda tree: DecodeResult.ok(constructor))
        self._bounds = _arity_bounds(constructor) if _bounds is _UNINSPECTED else _bounds

    @property
    def names(self) -> Tuple[str, ...]:
        """Declared field names in declaration order."""
        return tuple(name for name, _ in self._entries)

    def field(self, name: str, getter: Callable[[R], T], converter: Converter[T]) -> "Field[R]":
        """
        Declare a required field.

        Args:
            name: Object key of the field
            getter: Extracts the field value from a record
            converter: Converter for the field value

        Returns:
            New accumulator including the field
        """

        def extract(record: R) -> JsonValue:
            return converter.encoder(getter(record))

        def decode(tree: Dict[str, JsonValue]) -> DecodeResult[T]:
            if name not in tree:
                return DecodeResult.fail(DecodeError.missing_field(name))
            return _decode_key(name, converter, tree)

        return self._extend(name, extract, decode)

    def option(self, name: str, getter: Callable[[R], Optional[T]],
               converter: Converter[T]) -> "Field[R]":
        """
        Declare an optional field.

        A ``None`` getter result leaves the key out of the encoded object;
        an absent key decodes to ``None``. A key that is present is always
        decoded with ``converter``, including a JSON null.

        Args:
            name: Object key of the field
            getter: Extracts the optional field value from a record
            converter: Converter for the field value when present

        Returns:
            New accumulator including the field
        """

        def extract(record: R) -> Any:
            item = getter(record)
            if item is None:
                return _OMITTED
            return converter.encoder(item)

        def decode(tree: Dict[str, JsonValue]) -> DecodeResult[Optional[T]]:
            if name not in tree:
                return DecodeResult.ok(None)
            return _decode_key(name, converter, tree)

        return self._extend(name, extract, decode)

    def build(self) -> Converter[R]:
        """
        Finish the object converter.

        Raises:
            ConverterDefinitionError: If fewer fields were declared than the
                constructor requires
        """
        if self._bounds is not None and len(self._entries) < self._bounds[0]:
            raise ConverterDefinitionError(
                f"Constructor {_name_of(self.constructor)} requires {self._bounds[0]} "
                f"positional arguments but only {len(self._entries)} fields were declared",
                context={"fields": self.names},
            )

        entries = self._entries
        decode_fields = self._decoder

        def encoder(record: R) -> JsonValue:
            tree: Dict[str, JsonValue] = {}
            for name, extract in entries:
                encoded = extract(record)
                if encoded is not _OMITTED:
                    tree[name] = encoded
            return tree

        def decoder(tree: JsonValue) -> DecodeResult[R]:
            if not isinstance(tree, dict):
                return DecodeResult.fail(DecodeError.type_mismatch("object", kind_of(tree)))
            return decode_fields(tree).map(lambda construct: construct())

        logger.debug(f"Built object converter for {_name_of(self.constructor)} "
                     f"with fields {list(self.names)}")
        return Converter(encoder=encoder, decoder=decoder,
                         description=f"object({_name_of(self.constructor)})")

    def _extend(self, name: str, extract: Extract,
                decode: Callable[[Dict[str, JsonValue]], DecodeResult[Any]]) -> "Field[R]":
        if name in self.names:
            raise ConverterDefinitionError(f"Field '{name}' is declared twice",
                                           context={"fields": self.names})

        if self._bounds is not None and self._bounds[1] is not None \
                and len(self._entries) >= self._bounds[1]:
            raise ConverterDefinitionError(
                f"Constructor {_name_of(self.constructor)} accepts at most "
                f"{self._bounds[1]} positional arguments; cannot add field '{name}'",
                context={"fields": self.names},
            )

        previous = self._decoder

        def decoder(tree: Dict[str, JsonValue]) -> DecodeResult[Any]:
            return previous(tree).bind(
                lambda construct: decode(tree).map(lambda item: functools.partial(construct, item))
            )

        return Field(self.constructor, self._entries + ((name, extract),), decoder, self._bounds)


def field(name: str, getter: Callable[[R], T],
          converter: Converter[T]) -> Callable[[Field[R]], Field[R]]:
    """Step declaring a required field; see ``Field.field``."""
    return lambda accumulator: accumulator.field(name, getter, converter)


def option(name: str, getter: Callable[[R], Optional[T]],
           converter: Converter[T]) -> Callable[[Field[R]], Field[R]]:
    """Step declaring an optional field; see ``Field.option``."""
    return lambda accumulator: accumulator.option(name, getter, converter)


def object_(constructor: Callable[..., R],
            *steps: Callable[[Field[R]], Field[R]]) -> Converter[R]:
    """
    Build an object converter from a constructor and field steps.

    Args:
        constructor: Builds the record from the field values, positionally
            in the order the steps are given; it must not raise for
            decoded values
        *steps: ``field`` and ``option`` steps

    Returns:
        Converter for the record type

    Raises:
        ConverterDefinitionError: If the fields do not match the constructor
    """
    accumulator = Field(constructor)
    for step in steps:
        accumulator = step(accumulator)
    return accumulator.build()
