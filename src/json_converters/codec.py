"""Top-level entry points running converters against JSON text and trees."""

import logging
from typing import Any, Optional, TypeVar

from .converter import Converter
from .error_handler import ErrorHandler
from .parser import JSONParser
from .types import DecodeError, DecodeResult, JsonValue

T = TypeVar("T")


class JSONCodec:
    """
    Encodes and decodes values with converters.

    The only place where converters meet the JSON text layer. Holds output
    formatting defaults and the logger; converters themselves stay pure and
    can be shared between codecs.
    """

    def __init__(self, indent: Optional[int] = None,
                 ensure_ascii: bool = False,
                 sort_keys: bool = False,
                 logger: Optional[logging.Logger] = None,
                 log_failures: bool = True):
        """
        Initialize the codec.

        Args:
            indent: Default indentation width; None or 0 renders compactly
            ensure_ascii: Escape non-ASCII characters in output
            sort_keys: Emit object keys in sorted order
            logger: Optional logger instance
            log_failures: Log decode failures at DEBUG level
        """
        if indent is not None and indent < 0:
            raise ValueError("indent must be non-negative")

        self.indent = indent
        self.ensure_ascii = ensure_ascii
        self.sort_keys = sort_keys
        self.log_failures = log_failures
        self.logger = logger or logging.getLogger(__name__)

        self.parser = JSONParser(self.logger)
        self.error_handler = ErrorHandler(self.logger, log_level=logging.DEBUG)

    def encode(self, converter: Converter[T], value: T, indent: Optional[int] = None) -> str:
        """
        Encode a value to JSON text.

        Args:
            converter: Converter for the value
            value: Value to encode
            indent: Indentation width overriding the codec default

        Returns:
            JSON text

        Raises:
            ValueError: If the encoded tree holds a non-finite float
        """
        tree = converter.encoder(value)
        text = self.parser.serialize(
            tree,
            indent=self.indent if indent is None else indent,
            ensure_ascii=self.ensure_ascii,
            sort_keys=self.sort_keys,
        )
        self.logger.debug(f"Encoded value with {converter!r} to {len(text)} characters")
        return text

    def decode_value(self, converter: Converter[T], value: JsonValue) -> DecodeResult[T]:
        """
        Decode an already parsed JSON tree.

        Args:
            converter: Converter for the expected type
            value: JSON tree to decode

        Returns:
            DecodeResult with the decoded value or a structured error
        """
        try:
            result = converter.decoder(value)
        except RecursionError:
            result = DecodeResult.fail(DecodeError.nesting_too_deep())
        if not result.success and self.log_failures:
            self.error_handler.handle_decode_error(result.error)
        return result

    def decode_string(self, converter: Converter[T], json_string: Any) -> DecodeResult[T]:
        """
        Parse JSON text and decode it.

        Args:
            converter: Converter for the expected type
            json_string: JSON text

        Returns:
            DecodeResult with the decoded value, a PARSE_FAILURE error for
            malformed text, or a structural error from the converter
        """
        parsed = self.parser.parse(json_string)
        if not parsed.success:
            if self.log_failures:
                self.error_handler.handle_decode_error(parsed.error)
            return parsed  # type: ignore[return-value]
        return self.decode_value(converter, parsed.value)


_default_codec = JSONCodec()


def encode(converter: Converter[T], indent: Optional[int], value: T) -> str:
    """Encode ``value`` to JSON text indented by ``indent`` spaces (0 for compact)."""
    return _default_codec.encode(converter, value, indent=indent or 0)


def decode_value(converter: Converter[T], value: JsonValue) -> DecodeResult[T]:
    """Decode a parsed JSON tree with ``converter``."""
    return _default_codec.decode_value(converter, value)


def decode_string(converter: Converter[T], json_string: str) -> DecodeResult[T]:
    """Parse and decode JSON text with ``converter``."""
    return _default_codec.decode_string(converter, json_string)
