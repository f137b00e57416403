"""Error reporting for failed decodes."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .types import DecodeError, DecodeErrorKind, PathSegment


@dataclass
class ErrorReport:
    """Flattened, loggable view of a decode error."""
    kind: DecodeErrorKind
    location: str
    message: str
    path: Tuple[PathSegment, ...]


class ErrorHandler:
    """
    Renders and logs decode errors.

    Decoding itself never raises; this class turns the structured
    ``DecodeError`` chain into text for people and log records.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 log_level: int = logging.INFO):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
            log_level: Level at which handled errors are logged
        """
        self.logger = logger or logging.getLogger(__name__)
        self.log_level = log_level

    def report(self, error: DecodeError) -> ErrorReport:
        """
        Flatten a decode error.

        Args:
            error: DecodeError to flatten

        Returns:
            ErrorReport describing the innermost failure and where it happened
        """
        cause = error.root_cause
        return ErrorReport(
            kind=cause.kind,
            location=error.location,
            message=cause.message,
            path=error.path,
        )

    def describe(self, error: DecodeError) -> str:
        """
        Render a decode error as multi-line text.

        The first line names the failure and its location; following lines
        walk the nested chain from the root to the innermost error.

        Args:
            error: DecodeError to render

        Returns:
            Human readable description
        """
        report = self.report(error)
        lines: List[str] = [f"{report.kind.value} at {report.location}: {report.message}"]

        current: Optional[DecodeError] = error
        depth = 0
        while current is not None and current.kind == DecodeErrorKind.NESTED_FAILURE:
            lines.append(f"{'  ' * depth}in {self._segment_label(current.key)}")
            current = current.cause
            depth += 1

        if current is not None and (current.expected or current.found):
            if current.kind == DecodeErrorKind.MISSING_FIELD:
                lines.append(f"{'  ' * depth}field: {current.expected}")
            else:
                lines.append(f"{'  ' * depth}expected: {current.expected}, found: {current.found}")

        return "\n".join(lines)

    def handle_decode_error(self, error: DecodeError) -> ErrorReport:
        """
        Log a decode error and return its report.

        Args:
            error: DecodeError to handle

        Returns:
            ErrorReport for the error
        """
        report = self.report(error)
        self.logger.log(self.log_level,
                        f"Decode failed: {report.kind.value} at {report.location} - {report.message}")
        return report

    @staticmethod
    def _segment_label(segment: Optional[PathSegment]) -> str:
        if isinstance(segment, int):
            return f"index {segment}"
        return f"key '{segment}'"
