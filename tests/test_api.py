"""Public API surface of the top-level package."""

from __future__ import annotations

import logging

import pytest

import codepane

pytestmark = pytest.mark.unit


def test_all_exports_resolve() -> None:
    for name in codepane.__all__:
        assert getattr(codepane, name) is not None, name


def test_library_logger_has_null_handler() -> None:
    handlers = logging.getLogger("codepane").handlers

    assert any(isinstance(h, logging.NullHandler) for h in handlers)


def test_readme_example() -> None:
    table = codepane.ResultTable.from_columns(
        {"msg": ["print('hi')"]},
        metadata={"isCode": True, "language": "python"},
    )

    state = codepane.prepare([table])

    assert codepane.to_render_props(state) == {
        "text": "print('hi')",
        "language": "python",
        "lineNumbers": True,
        "wrapLines": True,
    }


def test_resolved_config_feeds_prepare() -> None:
    table = codepane.ResultTable.from_columns(
        {"q": ["SELECT 1"]}, metadata={"isCode": True}
    )

    state = codepane.prepare(
        [table], config=codepane.resolve_config({"default_language": "sql"})
    )

    assert isinstance(state, codepane.Ready)
    assert state.code.language == "sql"
