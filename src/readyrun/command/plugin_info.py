#
# src/readyrun/command/plugin_info.py
#
"""
Reads the bundled plugin metadata that is reported to the runner's analytics.
"""

import tomllib
from importlib import resources

import structlog

log = structlog.get_logger("command.plugin_info")

PLUGIN_INFO_RESOURCE = "plugin_info.toml"


def load_plugin_version(default: str = "1.0") -> str:
    """Returns the `version` key of the bundled metadata, or `default` if it cannot be read."""
    try:
        text = resources.files("readyrun.resources").joinpath(PLUGIN_INFO_RESOURCE).read_text(encoding="utf-8")
        data = tomllib.loads(text)
    except (OSError, ModuleNotFoundError, tomllib.TOMLDecodeError) as e:
        log.warning("Plugin metadata unreadable, using default version", default=default, error=str(e))
        return default

    version = data.get("version")
    if not isinstance(version, str) or not version.strip():
        return default
    return version

# 🔼⚙️
