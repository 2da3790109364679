"""Settings for textblocks, loaded from the environment.

Environment variables (a ``.env`` file in the project root is loaded
first, without overriding variables that are already set):

    - TEXTBLOCKS_DELIMITER: delimiter in textual form ("auto", "***",
      "literal:\\n---\\n", "pattern:..."). Default: auto.
    - TEXTBLOCKS_LOG_LEVEL: logging level for the CLI. Default: WARNING.
    - TEXTBLOCKS_JSON_LOGS: "1"/"true" for JSON log lines. Default: false.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from .delimiters import DelimiterSpec, parse_delimiter_spec
from .errors import ConfigurationError

ENV_PREFIX = "TEXTBLOCKS_"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class SplitterConfig(BaseModel):
    """Defaults used when splitting from the command line."""

    delimiter: str | None = None
    log_level: str = "WARNING"
    json_logs: bool = False

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    def delimiter_spec(self) -> DelimiterSpec:
        """Return the configured delimiter as a ``DelimiterSpec``."""
        return parse_delimiter_spec(self.delimiter)


def _find_project_root(start: Path) -> Path:
    """Find the project root by locating pyproject.toml.

    Returns the start path if no parent directory has one.
    """
    for path in [start, *start.parents]:
        if (path / "pyproject.toml").exists():
            return path
    return start


def load_config_from_env(*, env_file: Path | None = None) -> SplitterConfig:
    """Build a ``SplitterConfig`` from environment variables.

    Args:
        env_file: Optional path to a specific .env file. If not provided,
            ``.env`` in the project root (directory containing
            pyproject.toml) or the current working directory is used.

    Returns:
        The loaded configuration. Unset variables keep their defaults.

    Raises:
        ConfigurationError: If a variable holds an invalid value, including
            an unusable delimiter.
    """
    dotenv_path = env_file
    if dotenv_path is None:
        dotenv_path = _find_project_root(Path.cwd()) / ".env"

    load_dotenv(dotenv_path, override=False)

    values: dict[str, str] = {}
    for field in SplitterConfig.model_fields:
        raw = os.environ.get(ENV_PREFIX + field.upper())
        if raw is not None:
            values[field] = raw

    try:
        config = SplitterConfig(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid textblocks settings: {exc}") from exc

    # empty literal delimiters are rejected here, not on first split
    config.delimiter_spec()
    return config
