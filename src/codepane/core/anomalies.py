"""Anomaly records: non-fatal conditions noticed while preparing code.

Anomalies are informational only. They are logged and attached to the render
state, but never change whether a call ends up ``Empty``, ``Error`` or
``Ready``.
"""

from __future__ import annotations

import dataclasses
from enum import Enum


class AnomalyKind(str, Enum):
    MULTIPLE_CODE_TABLES = "MultipleCodeTables"
    UNREPRESENTABLE_VALUE = "UnrepresentableValue"


@dataclasses.dataclass(frozen=True)
class Anomaly:
    """Record describing a recoverable pipeline anomaly.

    Attributes:
        kind: Which anomaly occurred.
        message: Human-readable description suitable for logs.
        table_index: Position of the table concerned in the input, if known.
    """

    kind: AnomalyKind
    message: str
    table_index: int | None = None

    def __post_init__(self) -> None:
        if not self.message:
            raise ValueError("Anomaly message cannot be empty")
