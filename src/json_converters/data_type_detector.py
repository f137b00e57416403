"""Kind detection for JSON tree values."""

import logging
from enum import Enum
from typing import Any, Optional


class ValueKind(Enum):
    """Enumeration of the six JSON value kinds."""
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class DataTypeDetector:
    """
    Detector mapping native Python values to JSON value kinds.

    Used by the converters to report what they found when a decode
    fails with a type mismatch.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the data type detector.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def detect_kind(self, value: Any) -> Optional[ValueKind]:
        """
        Detect the JSON kind of a single value.

        Args:
            value: Value to analyze

        Returns:
            ValueKind of the value, or None if it is not a JSON value
        """
        # bool must be checked before int: bool subclasses int
        if value is None:
            return ValueKind.NULL
        elif isinstance(value, bool):
            return ValueKind.BOOLEAN
        elif isinstance(value, (int, float)):
            return ValueKind.NUMBER
        elif isinstance(value, str):
            return ValueKind.STRING
        elif isinstance(value, list):
            return ValueKind.ARRAY
        elif isinstance(value, dict):
            return ValueKind.OBJECT

        self.logger.debug(f"Value of type {type(value).__name__} is not a JSON value")
        return None

    def describe(self, value: Any) -> str:
        """
        Describe a value for error messages.

        Args:
            value: Value to describe

        Returns:
            The JSON kind name, or the Python type name for foreign values
        """
        kind = self.detect_kind(value)
        if kind is None:
            return type(value).__name__
        return kind.value

    def is_integral(self, value: Any) -> bool:
        """Check whether a JSON number has no fractional part."""
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        return isinstance(value, float) and value.is_integer()


_detector = DataTypeDetector()


def kind_of(value: Any) -> str:
    """Describe the JSON kind of ``value`` using the shared detector."""
    return _detector.describe(value)
