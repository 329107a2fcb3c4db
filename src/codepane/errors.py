"""Exception hierarchy for codepane."""

from __future__ import annotations

from enum import Enum


class CodepaneError(Exception):
    """Base exception for all codepane errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(CodepaneError):
    """Configuration validation or resolution failed."""


class TableShapeError(CodepaneError):
    """A result table violates its shape invariants.

    Raised for non-rectangular tables, duplicate column names and malformed
    frame payloads. Tables are rejected, never truncated.
    """


class ExtractionErrorKind(str, Enum):
    """Reasons a selected code table cannot produce text."""

    NO_COLUMNS = "NoColumns"
    EMPTY_VALUES = "EmptyValues"


class ExtractionError(CodepaneError):
    """Extraction failed for a selected code table.

    Carried inside ``Failure`` by the extractor rather than raised; the
    handoff turns it into an ``Error`` render state.
    """

    def __init__(
        self,
        kind: ExtractionErrorKind,
        message: str | None = None,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(message or kind.value, hint=hint)
        self.kind = kind
