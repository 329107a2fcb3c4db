"""Code value extraction.

The code column is the table's first column. Backends do not guarantee a
stable column name, so it is selected by position. Only the first row is
read: one selected table yields one code block.
"""

from __future__ import annotations

from collections.abc import Mapping
import dataclasses
import json
import logging
from typing import TYPE_CHECKING, Any

from codepane.core.anomalies import Anomaly, AnomalyKind
from codepane.core.result_primitives import Failure, Result, Success
from codepane.errors import ExtractionError, ExtractionErrorKind

if TYPE_CHECKING:
    from codepane.core.table import ResultTable

log = logging.getLogger(__name__)

CODE_COLUMN_INDEX = 0
CODE_ROW_INDEX = 0


@dataclasses.dataclass(frozen=True)
class DecodedValue:
    """Display text for one cell, plus the anomaly hit while decoding it."""

    text: str
    anomaly: Anomaly | None = None


def decode_value(value: Any) -> DecodedValue:
    """Convert any cell value to its display string.

    Never raises. Values that cannot be rendered decode to ``""`` with an
    ``UnrepresentableValue`` anomaly.
    """
    try:
        return DecodedValue(_to_text(value))
    except Exception as e:
        message = (
            f"Cannot render {type(value).__name__} value as text "
            f"({type(e).__name__}: {e})"
        )
        log.warning("Unrepresentable code value: %s", message)
        return DecodedValue(
            "", Anomaly(AnomalyKind.UNREPRESENTABLE_VALUE, message)
        )


def _to_text(value: Any) -> str:
    match value:
        case None:
            return ""
        case str():
            return value
        case bool():
            return "true" if value else "false"
        case bytes() | bytearray():
            return bytes(value).decode("utf-8")
        case Mapping() | list() | tuple():
            try:
                return json.dumps(_jsonable(value), ensure_ascii=False)
            except (TypeError, ValueError, RecursionError):
                # Nested values JSON can't encode; fall back to the repr form.
                return str(value)
        case _:
            return str(value)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_jsonable(v) for v in value]
    return value


def extract_detailed(table: ResultTable) -> Result[DecodedValue, ExtractionError]:
    """Decode the first value of the code column, keeping decode anomalies."""
    if not table.columns:
        return Failure(
            ExtractionError(
                ExtractionErrorKind.NO_COLUMNS,
                f"Code table {table.label} has no columns",
            )
        )

    column = table.columns[CODE_COLUMN_INDEX]
    if len(column.values) == 0:
        return Failure(
            ExtractionError(
                ExtractionErrorKind.EMPTY_VALUES,
                f"Code column {column.name!r} in table {table.label} has no values",
            )
        )

    return Success(decode_value(column.values[CODE_ROW_INDEX]))


def extract(table: ResultTable) -> Result[str, ExtractionError]:
    """Return the code text of ``table`` or the reason there is none."""
    result = extract_detailed(table)
    if isinstance(result, Failure):
        return result
    return Success(result.value.text)
