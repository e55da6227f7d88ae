from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from statement_ledger.models.config_models import LedgerConfig, StatementLayout

"""Config loader.

Responsibilities:
- Load YAML config (default config/ledger.yml)
- Validate against config_schema.json (all keys optional, no extras)
- Apply defaults, then environment overrides
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "ENV_CONFIG_PATH",
    "ENV_CURRENCY",
    "ENV_SOURCE_DIR",
    "SCHEMA_PATH",
    "build_config",
    "load_config",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/ledger.yml")

ENV_CONFIG_PATH = "STATEMENT_LEDGER_CONFIG"
ENV_SOURCE_DIR = "STATEMENT_LEDGER_SOURCE_DIR"
ENV_CURRENCY = "STATEMENT_LEDGER_CURRENCY"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or config violates the schema
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def build_config(data: dict[str, Any], env: Mapping[str, str] | None = None) -> LedgerConfig:
    """Build a LedgerConfig from validated data plus environment overrides.

    Precedence: environment > config file > defaults.
    """
    env = os.environ if env is None else env
    defaults = LedgerConfig()

    layout_raw = data.get("layout") or {}
    layout = StatementLayout(**layout_raw)

    source_directory = env.get(ENV_SOURCE_DIR) or data.get("source_directory", defaults.source_directory)
    currency_symbol = env.get(ENV_CURRENCY) or data.get("currency_symbol", defaults.currency_symbol)
    extensions = data.get("file_extensions")
    return LedgerConfig(
        source_directory=source_directory,
        file_extensions=tuple(e.lower() for e in extensions) if extensions else defaults.file_extensions,
        currency_symbol=currency_symbol,
        error_log_directory=data.get("error_log_directory", defaults.error_log_directory),
        layout=layout,
    )


def load_config(path: Path, env: Mapping[str, str] | None = None) -> LedgerConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)
    return build_config(data, env=env)
