"""Configuration: metadata keys and defaults used by the extraction pipeline.

Resolution precedence, lowest to highest:

    defaults < [tool.codepane] in pyproject.toml < CODEPANE_* env < overrides

``Settings`` is the validation schema; ``Config`` is the frozen payload the
pipeline consumes. Presentation policy (line numbers, wrapping) is fixed and
deliberately absent here.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import tomllib
from typing import TYPE_CHECKING, Any
import warnings

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from codepane.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_PREFIX = "CODEPANE_"
CONFIG_TOOL_NAME = "codepane"
PYPROJECT_PATH_VAR = "CODEPANE_PYPROJECT_PATH"

# Meta variables that steer resolution but aren't config fields
_META_ENV_FIELDS = {"pyproject_path"}

DEFAULT_CODE_FLAG_KEY = "isCode"
DEFAULT_LANGUAGE_KEY = "language"
DEFAULT_LANGUAGE = "plaintext"


class Settings(BaseModel):
    """Validation schema for configuration values from any source.

    Unknown keys in pyproject or the environment are dropped with a warning;
    unknown explicit overrides are rejected by ``resolve_config``.
    """

    code_flag_key: str = Field(default=DEFAULT_CODE_FLAG_KEY, min_length=1)
    language_key: str = Field(default=DEFAULT_LANGUAGE_KEY, min_length=1)
    default_language: str = Field(default=DEFAULT_LANGUAGE, min_length=1)

    model_config = {"extra": "ignore"}

    @field_validator("code_flag_key", "language_key", "default_language", mode="before")
    @classmethod
    def strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable pipeline configuration.

    ``Config()`` gives the built-in defaults without touching the
    environment; use ``resolve_config()`` to honor env and pyproject.

    Example:
        config = Config(code_flag_key="is_code", default_language="text")
    """

    code_flag_key: str = DEFAULT_CODE_FLAG_KEY
    language_key: str = DEFAULT_LANGUAGE_KEY
    default_language: str = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        for name in ("code_flag_key", "language_key", "default_language"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(
                    f"{name} must be a non-empty string, got {value!r}",
                    hint=f"Pass a non-empty {name} or leave it unset.",
                )


DEFAULT_CONFIG = Config()


def resolve_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    pyproject_path: str | Path | None = None,
) -> Config:
    """Resolve configuration from all sources into a ``Config``.

    Args:
        overrides: Programmatic values; highest precedence.
        pyproject_path: pyproject.toml to read ``[tool.codepane]`` from.
            Defaults to ``CODEPANE_PYPROJECT_PATH`` or ``./pyproject.toml``.

    Raises:
        ConfigurationError: If a value fails validation, an override names an
            unknown field, or the TOML file is unreadable.
    """
    load_dotenv()

    overrides = dict(overrides or {})
    unknown = sorted(set(overrides) - set(Settings.model_fields))
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration field(s): {', '.join(unknown)}",
            hint=f"Valid fields: {', '.join(Settings.model_fields)}",
        )

    project = load_pyproject(pyproject_path)
    env = load_env()
    _warn_unknown_fields(project, f"[tool.{CONFIG_TOOL_NAME}]")
    _warn_unknown_fields(env, f"{ENV_PREFIX}* environment")

    merged: dict[str, Any] = {**project, **env, **overrides}

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(part) for part in err.get("loc", ()))
        raise ConfigurationError(
            f"Configuration validation failed for {field or 'config'}: {err.get('msg')}",
            hint=f"Check [tool.{CONFIG_TOOL_NAME}] and {ENV_PREFIX}* variables.",
        ) from e

    return Config(**settings.model_dump())


def load_env() -> dict[str, Any]:
    """Read ``CODEPANE_*`` variables, keyed by lower-cased field name."""
    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name in _META_ENV_FIELDS:
            continue
        config[field_name] = value
    return config


def load_pyproject(path: str | Path | None = None) -> dict[str, Any]:
    """Return the ``[tool.codepane]`` table, or ``{}`` when absent."""
    resolved = Path(path) if path is not None else _default_pyproject_path()
    if not resolved.exists():
        return {}

    try:
        with resolved.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(
            f"Could not read {resolved}: {e}",
            hint="Fix the TOML syntax or point CODEPANE_PYPROJECT_PATH elsewhere.",
        ) from e

    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        raise ConfigurationError(
            f"[tool] in {resolved} must be a table, got {type(tool).__name__}",
        )
    section = tool.get(CONFIG_TOOL_NAME, {})
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"[tool.{CONFIG_TOOL_NAME}] in {resolved} must be a table",
        )
    return dict(section)


def _warn_unknown_fields(values: Mapping[str, Any], origin: str) -> None:
    for name in sorted(set(values) - set(Settings.model_fields)):
        warnings.warn(
            f"Configuration: ignoring unknown field {name!r} from {origin}",
            UserWarning,
            stacklevel=3,
        )


def _default_pyproject_path() -> Path:
    override = os.environ.get(PYPROJECT_PATH_VAR)
    if override:
        return Path(override).expanduser()
    return Path.cwd() / "pyproject.toml"
