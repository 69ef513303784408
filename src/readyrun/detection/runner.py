#
# src/readyrun/detection/runner.py
#
"""
Recognizes the SoapUI Pro testrunner script from its text content.
"""

import string
from pathlib import Path

import structlog
from attrs import define

from readyrun.exceptions import ClassificationError

log = structlog.get_logger("detection.runner")

PRO_TESTRUNNER_MARKER = "com.smartbear.ready.cmd.runner.pro.SoapUIProTestCaseRunner"
VERSION_MARKER = "ready-api-ui-"


@define(frozen=True, slots=True)
class RunnerVerdict:
    """What the testrunner script told us about itself."""

    is_pro: bool
    emit_analytics_flag: bool


def is_pro_testrunner(content: str) -> bool:
    """True if the script launches the SoapUI Pro test case runner class."""
    return PRO_TESTRUNNER_MARKER in content


def _digit_at(content: str, index: int) -> int | None:
    if 0 <= index < len(content) and content[index] in string.digits:
        return int(content[index])
    return None


def should_emit_analytics_flag(content: str, min_major: int = 2, min_minor: int = 4) -> bool:
    """
    Best-effort legacy version sniff on the runner's classpath.

    The script references a jar named like ``ready-api-ui-2.5.0.jar``. Only
    the single digit right after the marker (major) and the one two
    characters further (minor, skipping the dot) are read, so the check
    assumes a ``D.D`` version. Anything that is not a digit at either
    position means no flag.
    """
    marker_at = content.find(VERSION_MARKER)
    if marker_at < 0:
        return False
    version_at = marker_at + len(VERSION_MARKER)

    major = _digit_at(content, version_at)
    if major is None or major < min_major:
        return False
    minor = _digit_at(content, version_at + 2)
    if minor is None:
        log.debug("Runner version has an unexpected format", snippet=content[version_at:version_at + 5])
        return False
    return minor >= min_minor


def read_runner_content(path: Path) -> str:
    """Reads the runner script as text, raising ClassificationError if unreadable."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ClassificationError("Cannot read testrunner file", path=str(path), details=e) from e


def inspect_testrunner(path: Path, min_major: int = 2, min_minor: int = 4) -> RunnerVerdict:
    """Reads the runner once and returns both verdicts derived from it."""
    content = read_runner_content(path)
    verdict = RunnerVerdict(
        is_pro=is_pro_testrunner(content),
        emit_analytics_flag=should_emit_analytics_flag(content, min_major, min_minor),
    )
    log.debug(
        "Testrunner inspected",
        path=str(path),
        is_pro=verdict.is_pro,
        emit_analytics_flag=verdict.emit_analytics_flag,
        emoji_key="classify",
    )
    return verdict

# 🔼⚙️
