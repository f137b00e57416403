"""Core type definitions for JSON converters."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")

# Native tree produced by json.loads and consumed by json.dumps
JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

PathSegment = Union[str, int]


class DecodeErrorKind(Enum):
    """Enumeration of decode failure kinds."""
    PARSE_FAILURE = "parse_failure"
    TYPE_MISMATCH = "type_mismatch"
    MISSING_FIELD = "missing_field"
    INVALID_NULL_TARGET = "invalid_null_target"
    NESTED_FAILURE = "nested_failure"
    NESTING_TOO_DEEP = "nesting_too_deep"


@dataclass(frozen=True)
class DecodeError:
    """
    Structured description of why decoding failed.

    Nested failures form a chain from the root value to the point of
    failure: each ``NESTED_FAILURE`` carries the key or index it was
    produced for and the error of the inner converter as ``cause``.
    """

    kind: DecodeErrorKind
    message: str
    expected: Optional[str] = None
    found: Optional[str] = None
    key: Optional[PathSegment] = None
    cause: Optional["DecodeError"] = None

    @classmethod
    def parse_failure(cls, message: str, line: Optional[int] = None,
                      column: Optional[int] = None) -> "DecodeError":
        """Create an error for text that is not valid JSON."""
        if line is not None and column is not None:
            message = f"{message} at line {line}, column {column}"
        return cls(kind=DecodeErrorKind.PARSE_FAILURE, message=message)

    @classmethod
    def type_mismatch(cls, expected: str, found: str) -> "DecodeError":
        """Create an error for a value of the wrong kind."""
        return cls(
            kind=DecodeErrorKind.TYPE_MISMATCH,
            message=f"Expected {expected}, found {found}",
            expected=expected,
            found=found,
        )

    @classmethod
    def missing_field(cls, name: str) -> "DecodeError":
        """Create an error for a required object key that is absent."""
        return cls(
            kind=DecodeErrorKind.MISSING_FIELD,
            message=f"Missing required field '{name}'",
            expected=name,
            key=name,
        )

    @classmethod
    def invalid_null_target(cls, expected: str, found: str) -> "DecodeError":
        """Create an error for null where a value is required, or vice versa."""
        return cls(
            kind=DecodeErrorKind.INVALID_NULL_TARGET,
            message=f"Expected {expected}, found {found}",
            expected=expected,
            found=found,
        )

    @classmethod
    def nesting_too_deep(cls) -> "DecodeError":
        """Create an error for input nested deeper than the interpreter can recurse."""
        return cls(
            kind=DecodeErrorKind.NESTING_TOO_DEEP,
            message="Value is nested too deeply to decode",
        )

    @classmethod
    def nested(cls, key: PathSegment, cause: "DecodeError") -> "DecodeError":
        """Wrap the error of an inner converter with the key or index it failed at."""
        return cls(
            kind=DecodeErrorKind.NESTED_FAILURE,
            message=f"Failed to decode {_format_segment(key)}: {cause.root_cause.message}",
            key=key,
            cause=cause,
        )

    @property
    def path(self) -> Tuple[PathSegment, ...]:
        """Keys and indices leading from the root value to the failure."""
        segments: List[PathSegment] = []
        error: Optional[DecodeError] = self
        while error is not None and error.kind == DecodeErrorKind.NESTED_FAILURE:
            segments.append(error.key)
            error = error.cause
        return tuple(segments)

    @property
    def root_cause(self) -> "DecodeError":
        """The innermost error of a nested chain."""
        error = self
        while error.cause is not None:
            error = error.cause
        return error

    @property
    def location(self) -> str:
        """Path rendered as ``$.users[2].name``."""
        return "$" + "".join(_format_segment(segment) for segment in self.path)

    def __str__(self) -> str:
        if self.kind == DecodeErrorKind.NESTED_FAILURE:
            return f"{self.location}: {self.root_cause.message}"
        return self.message


def _format_segment(segment: PathSegment) -> str:
    if isinstance(segment, int):
        return f"[{segment}]"
    if segment.isidentifier():
        return f".{segment}"
    return f"[{segment!r}]"


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """
    Result of a decode operation.

    Exactly one of ``value`` (on success) or ``error`` (on failure) is
    meaningful. Callers branch on ``success``.
    """

    success: bool
    value: Optional[T] = None
    error: Optional[DecodeError] = None

    @classmethod
    def ok(cls, value: T) -> "DecodeResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: DecodeError) -> "DecodeResult[T]":
        return cls(success=False, error=error)

    def map(self, func: Callable[[T], U]) -> "DecodeResult[U]":
        """Transform the decoded value, leaving failures untouched."""
        if not self.success:
            return self  # type: ignore[return-value]
        return DecodeResult.ok(func(self.value))

    def bind(self, func: Callable[[T], "DecodeResult[U]"]) -> "DecodeResult[U]":
        """Chain another decode step that may itself fail."""
        if not self.success:
            return self  # type: ignore[return-value]
        return func(self.value)

    def map_error(self, func: Callable[[DecodeError], DecodeError]) -> "DecodeResult[T]":
        """Transform the error of a failed result."""
        if self.success:
            return self
        return DecodeResult.fail(func(self.error))

    def unwrap(self) -> T:
        """
        Return the decoded value.

        Raises:
            ValueError: If the result is a failure
        """
        if not self.success:
            raise ValueError(f"Decoding failed: {self.error}")
        return self.value


class ConverterDefinitionError(Exception):
    """Raised when a converter is assembled incorrectly."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message)
        self.context = context
