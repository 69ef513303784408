# src/readyrun/telemetry/logger/processors.py

"""
structlog processors shared by every readyrun renderer.
"""

from typing import Any

from structlog.typing import EventDict, WrappedLogger


LOG_EMOJIS = {
    "debug": "🐛",
    "info": "ℹ️",
    "warning": "⚠️",
    "error": "❌",
    "critical": "💥",
    "build": "🧱",
    "classify": "🔎",
    "launch": "🚀",
    "license": "🔑",
    "report": "📄",
    "fail": "🚫",
    "success": "🎉",
}


def add_emoji_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Prefixes the event with an emoji chosen by `emoji_key` or the log level."""
    key: Any = event_dict.get("emoji_key") or event_dict.get("level") or method_name
    emoji = LOG_EMOJIS.get(str(key).lower())
    event = event_dict.get("event")
    if emoji and isinstance(event, str):
        event_dict["event"] = f"{emoji} {event}"
    return event_dict


def remove_extra_keys_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Drops bookkeeping keys the renderers should not print."""
    event_dict.pop("emoji_key", None)
    return event_dict

# 🔼⚙️
