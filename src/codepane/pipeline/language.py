"""Highlighting language resolution."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from codepane.config import DEFAULT_CONFIG, Config

if TYPE_CHECKING:
    from codepane.core.table import ResultTable

log = logging.getLogger(__name__)


def resolve(table: ResultTable, *, config: Config | None = None) -> str:
    """Return the table's language hint, or the configured default.

    The hint is returned verbatim; matching it case-insensitively is the
    renderer's job. Non-string or blank hints fall back to the default rather
    than guessing a language.
    """
    cfg = config or DEFAULT_CONFIG
    hint = table.metadata.get(cfg.language_key)
    if isinstance(hint, str) and hint.strip():
        return hint
    if hint is not None:
        log.debug(
            "Ignoring unusable language hint %r on table %s", hint, table.label
        )
    return cfg.default_language
