"""Test helpers (small, reusable builders).

Keep this file tiny: it exists so suites don't each grow their own way of
spelling a code-flagged table.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from codepane.core.table import Column, ResultTable


def make_table(
    columns: Mapping[str, Sequence[Any]] | None = None,
    *,
    is_code: bool | None = None,
    language: Any = None,
    name: str | None = None,
    **metadata: Any,
) -> ResultTable:
    """Build a ResultTable using the default code flag and language keys."""
    meta: dict[str, Any] = dict(metadata)
    if is_code is not None:
        meta["isCode"] = is_code
    if language is not None:
        meta["language"] = language
    cols = tuple(Column(k, v) for k, v in (columns or {}).items())
    return ResultTable(columns=cols, metadata=meta, name=name)
