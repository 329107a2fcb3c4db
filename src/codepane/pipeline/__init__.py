"""Extraction pipeline stages.

selector -> extractor -> language -> handoff. Each stage is a pure function
of its input; ``handoff.prepare`` composes them.
"""

from .extractor import DecodedValue, decode_value, extract, extract_detailed
from .handoff import (
    Empty,
    Error,
    ExtractedCode,
    Ready,
    RenderProps,
    RenderState,
    prepare,
    prepare_view,
    to_render_props,
)
from .language import resolve
from .selector import SelectedTable, is_code_table, select, select_indexed

__all__ = [
    "DecodedValue",
    "Empty",
    "Error",
    "ExtractedCode",
    "Ready",
    "RenderProps",
    "RenderState",
    "SelectedTable",
    "decode_value",
    "extract",
    "extract_detailed",
    "is_code_table",
    "prepare",
    "prepare_view",
    "resolve",
    "select",
    "select_indexed",
    "to_render_props",
]
