#
# src/readyrun/command/builder.py
#
"""
Turns invocation parameters into a validated testrunner command line.

Every pre-flight failure is reported as one line on the log sink and makes
`CommandBuilder.build` return None; no process is started in that case.
"""

import os
import re
from collections.abc import Callable
from pathlib import Path

import structlog

from readyrun.command.models import BuildPlan, PrintableReport, ReportScope
from readyrun.command.plugin_info import load_plugin_version
from readyrun.config.models import InvocationParameters, RunnerSettings
from readyrun.detection.project import is_pro_project
from readyrun.detection.runner import RunnerVerdict, inspect_testrunner
from readyrun.exceptions import ClassificationError
from readyrun.protocols import LogSink
from readyrun.telemetry import StructLogger

log: StructLogger = structlog.get_logger("command.builder")

TESTRUNNER_NAME = "testrunner"
_STRIPPED_CHARS = re.compile(r"[\\/.]")
_WHITESPACE = re.compile(r"\s")


def _is_windows() -> bool:
    return os.name == "nt"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _is_loadable(path: Path) -> bool:
    """Exists and is not an empty file (directory sizes are filesystem-specific, so skip them)."""
    if not path.exists():
        return False
    return path.is_dir() or path.stat().st_size != 0


def report_folder_name(name: str) -> str:
    """
    Mirrors how ReadyAPI names the report folder of a suite or case.

    Backslashes, slashes and dots are dropped; every whitespace character
    becomes a hyphen.
    """
    return _WHITESPACE.sub("-", _STRIPPED_CHARS.sub("", name))


def resolve_testrunner_path(path: str | None) -> str:
    """Appends the platform's default script name when given the runner's bin directory."""
    if _is_blank(path):
        return ""
    if not Path(path).is_dir():
        return path
    extension = ".bat" if _is_windows() else ".sh"
    return f"{path}{os.sep}{TESTRUNNER_NAME}{extension}"


class CommandBuilder:
    """Validates the runner and project and assembles the runner arguments."""

    def __init__(
        self,
        sink: LogSink,
        settings: RunnerSettings | None = None,
        version_loader: Callable[[str], str] = load_plugin_version,
        create_report_directory: bool = True,
    ):
        self.sink = sink
        self.settings = settings or RunnerSettings()
        self._version_loader = version_loader
        self._create_report_directory = create_report_directory

    def build(self, params: InvocationParameters) -> BuildPlan | None:
        """Runs all pre-flight checks; returns the plan, or None if the run must not start."""
        build_log = log.bind(workspace=str(params.workspace))
        args: list[str] = []

        testrunner_path = resolve_testrunner_path(params.testrunner_path)
        verdict = self._check_testrunner(testrunner_path)
        if verdict is None:
            return None
        args.append(testrunner_path)

        report_directory = params.workspace / self.settings.report_subfolder
        if self._create_report_directory and not report_directory.exists():
            report_directory.mkdir(parents=True)
            build_log.debug("Report directory created", path=str(report_directory), emoji_key="report")
        args.extend(["-f", str(report_directory)])
        args.extend(["-r", "-j", "-J"])
        args.extend(["-F", self.settings.report_format])

        printable: PrintableReport | None = None
        if not _is_blank(params.test_case):
            if _is_blank(params.test_suite):
                self.sink.println("Enter a testsuite for the specified testcase. Exiting.")
                build_log.warning("Test case given without test suite", test_case=params.test_case)
                return None
            args.extend(["-c", params.test_case])
            args.extend(["-R", ReportScope.TEST_CASE.value])
            relative_dir = (
                f"{os.sep}{report_folder_name(params.test_suite)}"
                f"{os.sep}{report_folder_name(params.test_case)}{os.sep}"
            )
            printable = self._printable(ReportScope.TEST_CASE, relative_dir)

        if not _is_blank(params.test_suite):
            args.extend(["-s", params.test_suite])
            if printable is None:
                args.extend(["-R", ReportScope.TEST_SUITE.value])
                relative_dir = f"{os.sep}{report_folder_name(params.test_suite)}{os.sep}"
                printable = self._printable(ReportScope.TEST_SUITE, relative_dir)

        if not _is_blank(params.project_password):
            args.extend(["-x", params.project_password])
        if not _is_blank(params.environment):
            args.extend(["-E", params.environment])

        if not self._check_project(params.project_path):
            return None
        args.append(params.project_path)

        if printable is None:
            args.extend(["-R", ReportScope.PROJECT.value])
            printable = self._printable(ReportScope.PROJECT, os.sep)

        if verdict.emit_analytics_flag:
            args.extend(["-q", self._version_loader(self.settings.default_plugin_version)])

        plan = BuildPlan(command=args, report_directory=report_directory, printable_report=printable)
        build_log.info(
            "Runner command built",
            scope=printable.scope.name,
            printable_report=str(plan.printable_report_path),
            arg_count=len(plan.command),
            emoji_key="build",
        )
        return plan

    def _printable(self, scope: ReportScope, relative_dir: str) -> PrintableReport:
        return PrintableReport.for_scope(scope, relative_dir, self.settings.report_format)

    def _check_testrunner(self, testrunner_path: str) -> RunnerVerdict | None:
        if _is_blank(testrunner_path) or not _is_loadable(Path(testrunner_path)):
            self.sink.println(f"Failed to load testrunner file [{testrunner_path}]")
            log.warning("Testrunner missing or empty", path=testrunner_path, emoji_key="fail")
            return None
        try:
            verdict = inspect_testrunner(
                Path(testrunner_path),
                self.settings.analytics_min_major,
                self.settings.analytics_min_minor,
            )
        except ClassificationError as e:
            self.sink.println(f"Could not inspect the testrunner file: {e}")
            log.error("Testrunner classification failed", path=testrunner_path, exc_info=True)
            return None
        if not verdict.is_pro:
            self.sink.println(
                "The testrunner file is not correct. Please confirm it's the testrunner for SoapUI Pro. Exiting."
            )
            log.warning("Testrunner is not the SoapUI Pro runner", path=testrunner_path, emoji_key="fail")
            return None
        return verdict

    def _check_project(self, project_path: str) -> bool:
        if _is_blank(project_path) or not _is_loadable(Path(project_path)):
            self.sink.println(f"Failed to load the project file [{project_path}]")
            log.warning("Project missing or empty", path=project_path, emoji_key="fail")
            return False
        try:
            is_pro = is_pro_project(Path(project_path))
        except ClassificationError as e:
            self.sink.println(f"Could not inspect the project file: {e}")
            log.error("Project classification failed", path=project_path, exc_info=True)
            return False
        if not is_pro:
            self.sink.println("The project is not a SoapUI Pro project! Exiting.")
            log.warning("Project is not a SoapUI Pro project", path=project_path, emoji_key="fail")
            return False
        return True

# 🔼⚙️
