"""Render handoff: the single entry point the UI layer calls.

``prepare`` runs selection, extraction and language resolution over the
current table snapshot and folds the outcome into one of three render states.
It keeps no state between calls, so calling it on every upstream update is
safe and two calls with equal input give equal output.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Final, TypedDict

from codepane.core.result_primitives import Failure
from codepane.errors import ExtractionErrorKind

from . import extractor, language, selector

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from codepane.config import Config
    from codepane.core.anomalies import Anomaly
    from codepane.core.table import ResultTable

log = logging.getLogger(__name__)

# Fixed presentation policy; not configurable per call.
LINE_NUMBERS: Final = True
WRAP_LINES: Final = True

NOTICES: Final[dict[ExtractionErrorKind, str]] = {
    ExtractionErrorKind.NO_COLUMNS: "The code result has no columns to display.",
    ExtractionErrorKind.EMPTY_VALUES: "The code result is empty.",
}


@dataclasses.dataclass(frozen=True)
class ExtractedCode:
    """Decoded code text with its highlighting language."""

    text: str
    language: str
    source_table_index: int


@dataclasses.dataclass(frozen=True)
class Empty:
    """No code table was selected."""

    anomalies: tuple[Anomaly, ...] = ()


@dataclasses.dataclass(frozen=True)
class Error:
    """The selected table could not produce code; show ``notice`` inline."""

    kind: ExtractionErrorKind
    source_table_index: int
    anomalies: tuple[Anomaly, ...] = ()

    @property
    def notice(self) -> str:
        return NOTICES[self.kind]


@dataclasses.dataclass(frozen=True)
class Ready:
    """Code is ready to be highlighted."""

    code: ExtractedCode
    anomalies: tuple[Anomaly, ...] = ()
    line_numbers: bool = dataclasses.field(default=LINE_NUMBERS, init=False)
    wrap_lines: bool = dataclasses.field(default=WRAP_LINES, init=False)


RenderState = Empty | Error | Ready


class RenderProps(TypedDict):
    """Payload accepted by the highlighting renderer."""

    text: str
    language: str
    lineNumbers: bool
    wrapLines: bool


def prepare(
    tables: Iterable[ResultTable], *, config: Config | None = None
) -> RenderState:
    """Turn the current result tables into a render state.

    Args:
        tables: Snapshot of the view's result tables, in backend order.
        config: Metadata keys and default language; built-in defaults if None.

    Returns:
        ``Empty`` when no table is code-flagged, ``Error`` when the selected
        table has no columns or no rows, otherwise ``Ready``.
    """
    snapshot = tuple(tables)
    selected = selector.select_indexed(snapshot, config=config)
    if selected is None:
        return Empty()

    anomalies = selected.anomalies
    result = extractor.extract_detailed(selected.table)
    if isinstance(result, Failure):
        log.info("Code extraction failed: %s", result.error)
        return Error(
            kind=result.error.kind,
            source_table_index=selected.index,
            anomalies=anomalies,
        )

    decoded = result.value
    if decoded.anomaly is not None:
        anomalies = (
            *anomalies,
            dataclasses.replace(decoded.anomaly, table_index=selected.index),
        )

    code = ExtractedCode(
        text=decoded.text,
        language=language.resolve(selected.table, config=config),
        source_table_index=selected.index,
    )
    log.debug(
        "Prepared %d chars of %s code from table %d",
        len(code.text),
        code.language,
        code.source_table_index,
    )
    return Ready(code=code, anomalies=anomalies)


def prepare_view(
    views: Mapping[str, Iterable[ResultTable]],
    view_id: str,
    *,
    config: Config | None = None,
) -> RenderState:
    """Prepare the tables a state store holds for ``view_id``.

    An unknown view has no tables, so it renders as ``Empty``.
    """
    tables = views.get(view_id)
    if tables is None:
        log.debug("No result tables for view %r", view_id)
        return Empty()
    return prepare(tables, config=config)


def to_render_props(state: RenderState) -> RenderProps | None:
    """Build the renderer payload for a ``Ready`` state; None otherwise.

    A fresh dict is returned on every call so the renderer never shares
    state with the core.
    """
    if not isinstance(state, Ready):
        return None
    return RenderProps(
        text=state.code.text,
        language=state.code.language,
        lineNumbers=state.line_numbers,
        wrapLines=state.wrap_lines,
    )
