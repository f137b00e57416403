"""Boundary to the JSON text layer: parsing and serialization."""

import json
import logging
from typing import Optional

from .types import DecodeError, DecodeResult, JsonValue

COMPACT_SEPARATORS = (",", ":")


class _InvalidConstant(ValueError):
    """Raised for the NaN and Infinity tokens, which are not JSON."""


def _reject_constant(token: str) -> float:
    raise _InvalidConstant(f"Invalid JSON constant '{token}'")


class JSONParser:
    """
    Thin wrapper around the ``json`` module.

    Parsing never raises for malformed text: failures are reported as a
    ``PARSE_FAILURE`` decode error so they can be told apart from
    structural mismatches found later by a converter.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> DecodeResult[JsonValue]:
        """
        Parse JSON text into a tree of native values.

        Args:
            json_string: JSON text to parse

        Returns:
            DecodeResult holding the parsed tree, or a PARSE_FAILURE error
        """
        if not isinstance(json_string, (str, bytes, bytearray)):
            return DecodeResult.fail(DecodeError.parse_failure(
                f"JSON input must be str, bytes or bytearray, got {type(json_string).__name__}"
            ))

        try:
            data = json.loads(json_string, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            self.logger.debug(f"JSON parsing failed: {e.msg} at line {e.lineno}, column {e.colno}")
            return DecodeResult.fail(DecodeError.parse_failure(e.msg, e.lineno, e.colno))
        except UnicodeDecodeError as e:
            return DecodeResult.fail(DecodeError.parse_failure(f"Invalid encoding: {e.reason}"))
        except _InvalidConstant as e:
            return DecodeResult.fail(DecodeError.parse_failure(str(e)))
        except RecursionError:
            self.logger.debug("JSON parsing failed: nesting too deep")
            return DecodeResult.fail(DecodeError.parse_failure("Nesting too deep"))

        return DecodeResult.ok(data)

    def serialize(self, value: JsonValue, indent: Optional[int] = None,
                  ensure_ascii: bool = False, sort_keys: bool = False) -> str:
        """
        Serialize a tree of native values to JSON text.

        Args:
            value: JSON tree to serialize
            indent: Spaces per nesting level; None or 0 renders compactly on one line
            ensure_ascii: Escape non-ASCII characters
            sort_keys: Emit object keys in sorted order

        Returns:
            JSON text

        Raises:
            ValueError: If the tree holds a non-finite float
            TypeError: If the tree holds a value that is not JSON
        """
        if not indent:
            return json.dumps(value, ensure_ascii=ensure_ascii, sort_keys=sort_keys,
                              allow_nan=False, separators=COMPACT_SEPARATORS)

        return json.dumps(value, ensure_ascii=ensure_ascii, sort_keys=sort_keys,
                          allow_nan=False, indent=indent)
