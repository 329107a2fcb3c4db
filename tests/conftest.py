"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration and small table
builders. Environment fixtures are autouse unless noted.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import os

import pytest

from codepane.core.table import ResultTable
from tests.helpers import make_table

# =============================================================================
# Table Builders
# =============================================================================

TableFactory = Callable[..., ResultTable]


@pytest.fixture
def table() -> TableFactory:
    """Factory fixture wrapping ``make_table``."""
    return make_table


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setattr(
        "codepane.config.load_dotenv", lambda *_args, **_kwargs: False
    )


@pytest.fixture(autouse=True)
def isolate_codepane_env(request, monkeypatch, tmp_path):
    """Ensure a clean CODEPANE_* environment and no ambient pyproject.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith("CODEPANE_"):
            monkeypatch.delenv(key, raising=False)
    # Resolve against an empty directory so the repo's own pyproject is ignored.
    monkeypatch.chdir(tmp_path)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def codepane_log_level(caplog):
    """Capture codepane logs down to DEBUG for assertions."""
    caplog.set_level(logging.DEBUG, logger="codepane")
