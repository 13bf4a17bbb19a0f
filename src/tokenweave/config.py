"""
Token system configuration.

Configuration lives either in the ``[tokens]`` table of a TOML file
(typically ``pyproject.toml`` or ``tokenweave.toml``) or at the top level of
a YAML mapping:

    [tokens]
    prefix = "ant"
    minify = false
    enable_dark_theme = true
    load_defaults = true
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tokenweave.core.errors import ConfigError
from tokenweave.core.paths import is_valid_segment

logger = logging.getLogger(__name__)

CONFIG_TABLE = "tokens"


class TokenSystemConfig(BaseModel):
    """
    Settings for a DesignTokenSystem.

    Attributes:
        prefix: Custom property prefix (``--<prefix>-...``)
        minify: Minify every generated stylesheet
        enable_dark_theme: Emit dark override blocks in theme CSS
        load_defaults: Seed the store with the bundled default tokens
    """

    prefix: str = Field(default="ant", description="CSS custom property prefix")
    minify: bool = Field(default=False, description="Minify generated CSS")
    enable_dark_theme: bool = Field(default=True, description="Emit dark theme overrides")
    load_defaults: bool = Field(default=True, description="Seed with the default token set")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        if not is_valid_segment(value):
            raise ValueError(f"prefix must be letters, digits, '_' or '-', got {value!r}")
        return value

    def with_overrides(self, **overrides: Any) -> TokenSystemConfig:
        """Copy with the given non-None fields replaced (used by CLI flags)."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return TokenSystemConfig(**{**self.model_dump(), **changes})


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    table = data.get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[{CONFIG_TABLE}] in {path} must be a table")
    return table


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def load_config(path: Path | str) -> TokenSystemConfig:
    """Load configuration from a TOML or YAML file.

    Args:
        path: ``.toml``, ``.yaml`` or ``.yml`` file

    Returns:
        Validated configuration; missing keys take their defaults.

    Raises:
        ConfigError: If the file is missing, unparseable, or has unknown/invalid keys.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()
    if suffix == ".toml":
        data = _read_toml(config_path)
    elif suffix in (".yaml", ".yml"):
        data = _read_yaml(config_path)
    else:
        raise ConfigError(f"Unsupported config format: {config_path.suffix or config_path.name}")

    try:
        config = TokenSystemConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid token config in {config_path}: {e}") from e

    logger.debug(f"Loaded token config from {config_path}")
    return config
