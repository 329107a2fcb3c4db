"""Success/failure values exchanged between pipeline stages.

A stage that can fail on ordinary input (a code table with no columns or no
rows) returns ``Failure`` carrying a ``CodepaneError`` instead of raising, so
the handoff folds every outcome into a render state without try/except.
"""

from __future__ import annotations

import dataclasses

from codepane.errors import CodepaneError


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """A stage produced ``value``."""

    value: T


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E: CodepaneError]:
    """A stage could not produce a value; ``error`` says why."""

    error: E

    def __post_init__(self) -> None:
        if not isinstance(self.error, CodepaneError):
            raise TypeError(
                f"Failure must carry a CodepaneError, got {type(self.error).__name__}"
            )


type Result[T, E: CodepaneError] = Success[T] | Failure[E]
