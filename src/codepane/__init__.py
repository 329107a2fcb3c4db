"""codepane: pick the code block out of query results and prepare it for display.

Public API:
    - prepare(): Turn result tables into a render state
    - prepare_view(): Same, for one view of a state store's table mapping
    - to_render_props(): Renderer payload for a Ready state
    - ResultTable / Column: Immutable result table snapshots
    - Config / resolve_config(): Metadata keys and default language
"""

from __future__ import annotations

import logging

from codepane.config import Config, resolve_config
from codepane.core import (
    Anomaly,
    AnomalyKind,
    Column,
    Failure,
    FieldType,
    ResultTable,
    Success,
)
from codepane.errors import (
    CodepaneError,
    ConfigurationError,
    ExtractionError,
    ExtractionErrorKind,
    TableShapeError,
)
from codepane.frames import load_frames, table_from_frame, tables_from_frames
from codepane.pipeline import (
    Empty,
    Error,
    ExtractedCode,
    Ready,
    RenderProps,
    RenderState,
    extract,
    prepare,
    prepare_view,
    resolve,
    select,
    to_render_props,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("codepane")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("codepane").addHandler(logging.NullHandler())

__all__ = [
    "Anomaly",
    "AnomalyKind",
    "CodepaneError",
    "Column",
    "Config",
    "ConfigurationError",
    "Empty",
    "Error",
    "ExtractedCode",
    "ExtractionError",
    "ExtractionErrorKind",
    "Failure",
    "FieldType",
    "Ready",
    "RenderProps",
    "RenderState",
    "ResultTable",
    "Success",
    "TableShapeError",
    "extract",
    "load_frames",
    "prepare",
    "prepare_view",
    "resolve",
    "resolve_config",
    "select",
    "table_from_frame",
    "tables_from_frames",
    "to_render_props",
]
