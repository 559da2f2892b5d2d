"""Exception hierarchy for specmap.

All exceptions inherit from :class:`SpecmapError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specmap.exit_codes`.
The top-level error handler in :func:`specmap.app.main` catches
``SpecmapError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    SpecmapError (exit 1)
    +-- InvalidUsageError     (exit 2)
    +-- SourceError           (exit 3)
    +-- DeserializationError  (exit 4)
    +-- ConfigError           (exit 1)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from specmap.exit_codes import (
    EXIT_DESERIALIZATION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SOURCE_ERROR,
)

_POSITION_RE = re.compile(r"line (\d+) column (\d+)")


class SpecmapError(Exception):
    """Base exception for all specmap errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specmap.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecmapError):
    """Raised for invalid CLI arguments (unknown path, method or component)."""

    exit_code = EXIT_INVALID_USAGE


class SourceError(SpecmapError):
    """Raised when a spec source cannot be read: missing file, HTTP failure, size limit."""

    exit_code = EXIT_SOURCE_ERROR


class ConfigError(SpecmapError):
    """Raised for configuration problems (invalid config file or environment values)."""

    exit_code = EXIT_GENERIC_FAILURE


@dataclass(frozen=True)
class ErrorDetail:
    """One problem found while decoding a document.

    Attributes:
        location: Dotted path of JSON keys and list indexes leading to the
            offending value, e.g. ``paths./pets.get.parameters.0.name``.
            Empty for problems at the document root.
        message: What was wrong with the value.
        kind: Machine-readable error kind (``json_invalid``, ``list_type``,
            ``string_type``, ...).
    """

    location: str
    message: str
    kind: str

    def __str__(self) -> str:
        if not self.location:
            return self.message
        return f"{self.location}: {self.message}"


class DeserializationError(SpecmapError):
    """Raised when a document is not well-formed JSON or does not fit the model.

    Decoding is all-or-nothing: when this is raised no :class:`~specmap.models.API`
    value exists.

    Args:
        message: Summary line.
        details: Individual problems, in the order they were found.
        line: 1-based line of a JSON syntax error, if known.
        column: 1-based column of a JSON syntax error, if known.
    """

    exit_code = EXIT_DESERIALIZATION_ERROR

    def __init__(
        self,
        message: str,
        details: Optional[list[ErrorDetail]] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(message)
        self.details: list[ErrorDetail] = list(details or [])
        self.line = line
        self.column = column

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> DeserializationError:
        """Build a :class:`DeserializationError` from a Pydantic ``ValidationError``."""
        details = [_detail_from_pydantic(err) for err in exc.errors()]
        line: Optional[int] = None
        column: Optional[int] = None
        for detail in details:
            if detail.kind != "json_invalid":
                continue
            match = _POSITION_RE.search(detail.message)
            if match:
                line, column = int(match.group(1)), int(match.group(2))
            break

        if line is not None:
            summary = f"Malformed JSON at line {line} column {column}"
        elif details and details[0].kind == "json_invalid":
            summary = "Malformed JSON"
        else:
            count = len(details)
            noun = "problem" if count == 1 else "problems"
            summary = f"Document does not match the OpenAPI model ({count} {noun})"
        if details:
            summary += f": {details[0]}"
        return cls(summary, details=details, line=line, column=column)


def _detail_from_pydantic(err: dict[str, Any]) -> ErrorDetail:
    location = ".".join(str(part) for part in err.get("loc", ()))
    return ErrorDetail(
        location=location,
        message=str(err.get("msg", "")),
        kind=str(err.get("type", "")),
    )
