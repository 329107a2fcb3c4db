"""Code table selection.

Picks the table whose metadata marks it as carrying source code. Absence is a
valid outcome; more than one flagged table is an anomaly resolved in favour of
the first in input order, which reflects the backend's precedence.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from codepane.config import DEFAULT_CONFIG, Config
from codepane.core.anomalies import Anomaly, AnomalyKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from codepane.core.table import ResultTable

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class SelectedTable:
    """The chosen code table and where it sat in the input."""

    index: int
    table: ResultTable
    anomalies: tuple[Anomaly, ...] = ()


def is_code_table(table: ResultTable, *, config: Config | None = None) -> bool:
    """Return True when the table's code flag is set.

    Only a literal ``True`` counts; truthy strings such as ``"false"`` do not.
    """
    cfg = config or DEFAULT_CONFIG
    return table.metadata.get(cfg.code_flag_key) is True


def select_indexed(
    tables: Sequence[ResultTable], *, config: Config | None = None
) -> SelectedTable | None:
    """Select the first code-flagged table, reporting its position.

    Returns:
        ``SelectedTable`` for the winner, or None when no table is flagged.
    """
    matches = [
        i for i, table in enumerate(tables) if is_code_table(table, config=config)
    ]
    if not matches:
        log.debug("No code table among %d result table(s)", len(tables))
        return None

    first = matches[0]
    anomalies: tuple[Anomaly, ...] = ()
    if len(matches) > 1:
        message = (
            f"{len(matches)} code tables found at positions {matches}; "
            f"using position {first}"
        )
        log.warning("Multiple code tables: %s", message)
        anomalies = (
            Anomaly(AnomalyKind.MULTIPLE_CODE_TABLES, message, table_index=first),
        )

    return SelectedTable(index=first, table=tables[first], anomalies=anomalies)


def select(
    tables: Sequence[ResultTable], *, config: Config | None = None
) -> ResultTable | None:
    """Return the code table to display, or None if there is none."""
    selected = select_indexed(tables, config=config)
    return selected.table if selected is not None else None
