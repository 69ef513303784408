#
# src/readyrun/command/models.py
#
"""
Immutable results of the pre-flight stage, handed on to the launcher.
"""

from enum import Enum
from pathlib import Path

from attrs import define, field

PASSWORD_FLAG = "-x"
MASKED_VALUE = "********"


class ReportScope(Enum):
    """Which part of the project a run targets; the value is the runner's report type name."""

    PROJECT = "Project Report"
    TEST_SUITE = "TestSuite Report"
    TEST_CASE = "Test Case Report"

    @property
    def completion_marker(self) -> str:
        """The line the runner prints once this printable report is written."""
        return f"Created report [{self.value}]"


@define(frozen=True, slots=True)
class PrintableReport:
    """
    Where the runner will put the single printable report of a run.

    `relative_dir` is relative to the report directory and always starts and
    ends with a path separator (just the separator for project scope).
    """

    scope: ReportScope
    relative_dir: str
    file_name: str
    marker: str

    @classmethod
    def for_scope(cls, scope: ReportScope, relative_dir: str, report_format: str) -> "PrintableReport":
        return cls(
            scope=scope,
            relative_dir=relative_dir,
            file_name=f"{scope.value}.{report_format.lower()}",
            marker=scope.completion_marker,
        )


@define(frozen=True, slots=True)
class BuildPlan:
    """A validated command line plus everything known about its reports before launch."""

    command: tuple[str, ...] = field(converter=tuple)
    report_directory: Path
    printable_report: PrintableReport

    @property
    def printable_report_path(self) -> Path:
        relative = self.printable_report.relative_dir.strip("/\\")
        directory = self.report_directory / relative if relative else self.report_directory
        return directory / self.printable_report.file_name

    def masked_command(self) -> tuple[str, ...]:
        """The command line with the project password hidden, for display."""
        masked = list(self.command)
        for index, token in enumerate(masked[:-1]):
            if token == PASSWORD_FLAG:
                masked[index + 1] = MASKED_VALUE
        return tuple(masked)

# 🔼⚙️
