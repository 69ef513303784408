#
# src/readyrun/config/models.py
#
"""
Attrs-based data models for a single runner invocation.
"""

from pathlib import Path

from attrs import define, field


def _optional_text(value: str | None) -> str | None:
    """Normalizes blank strings to None so 'not set' has one representation."""
    if value is None or not str(value).strip():
        return None
    return str(value)


def _validate_threshold(inst: object, attr: object, value: int) -> None:
    """Validator ensures a version threshold is a single decimal digit."""
    if not isinstance(value, int) or not 0 <= value <= 9:
        raise ValueError(f"Field '{attr.name}' must be a digit between 0 and 9, got {value!r}")


@define(frozen=True, slots=True)
class InvocationParameters:
    """
    Inputs for one functional test run.

    `testrunner_path` and `project_path` stay as raw strings: a blank value is
    a pre-flight failure reported by the command builder, not a model error.
    """

    workspace: Path = field(converter=Path)
    testrunner_path: str = field(default="")
    project_path: str = field(default="")
    project_password: str | None = field(default=None, converter=_optional_text, repr=False)
    environment: str | None = field(default=None, converter=_optional_text)
    test_suite: str | None = field(default=None, converter=_optional_text)
    test_case: str | None = field(default=None, converter=_optional_text)


@define(frozen=True, slots=True)
class RunnerSettings:
    """Fixed conventions of the SoapUI Pro runner, overridable for tests."""

    report_subfolder: str = field(default="ReadyAPI_report")
    report_format: str = field(default="PDF")
    analytics_min_major: int = field(default=2, validator=_validate_threshold)
    analytics_min_minor: int = field(default=4, validator=_validate_threshold)
    default_plugin_version: str = field(default="1.0")

# 🔼⚙️
