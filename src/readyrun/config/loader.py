#
# src/readyrun/config/loader.py
#
"""
Loads invocation defaults from a TOML file and merges them with CLI values.
"""

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from readyrun.config.models import InvocationParameters
from readyrun.exceptions import ConfigurationError

log = structlog.get_logger("config.loader")

INVOCATION_TABLE = "invocation"
KNOWN_KEYS = frozenset(
    {
        "workspace",
        "testrunner_path",
        "project_path",
        "project_password",
        "environment",
        "test_suite",
        "test_case",
    }
)


def load_invocation_file(config_path: Path) -> dict[str, str]:
    """
    Reads the `[invocation]` table of a readyrun TOML file.

    Raises:
        ConfigurationError: the file is unreadable, not valid TOML, or holds
            unknown keys or non-string values.
    """
    log.debug("Loading invocation file", path=str(config_path))
    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file '{config_path}': {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in '{config_path}': {e}") from e

    table = data.get(INVOCATION_TABLE, {})
    if not isinstance(table, Mapping):
        raise ConfigurationError(f"'[{INVOCATION_TABLE}]' in '{config_path}' must be a table.")

    unknown = sorted(set(table) - KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(
            f"Unknown key(s) in '[{INVOCATION_TABLE}]' of '{config_path}': {', '.join(unknown)}"
        )

    values: dict[str, str] = {}
    for key, value in table.items():
        if not isinstance(value, str):
            raise ConfigurationError(f"Key '{key}' in '{config_path}' must be a string, got {type(value).__name__}.")
        values[key] = value
    return values


def resolve_parameters(
    config_path: Path | None = None,
    default_workspace: Path | None = None,
    **cli_values: Any,
) -> InvocationParameters:
    """
    Builds InvocationParameters with precedence CLI/env > config file > defaults.

    `cli_values` holds the CLI options (click has already folded environment
    variables into them); a value of None means "not given".
    """
    merged: dict[str, Any] = {}
    if config_path is not None:
        merged.update(load_invocation_file(config_path))
    merged.update({key: value for key, value in cli_values.items() if value is not None})

    unknown = sorted(set(merged) - KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown invocation parameter(s): {', '.join(unknown)}")

    if not merged.get("workspace"):
        merged["workspace"] = default_workspace or Path.cwd()

    params = InvocationParameters(**merged)
    log.debug(
        "Invocation parameters resolved",
        workspace=str(params.workspace),
        testrunner=params.testrunner_path,
        project=params.project_path,
        test_suite=params.test_suite,
        test_case=params.test_case,
        environment=params.environment,
    )
    return params

# 🔼⚙️
