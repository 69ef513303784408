#
# tests/unit/test_command_builder.py
#
"""
Tests for the pre-flight checks and the runner command line.
"""

import os
from pathlib import Path

import pytest

from readyrun.command.builder import CommandBuilder, report_folder_name, resolve_testrunner_path
from readyrun.command.models import ReportScope


@pytest.fixture
def builder(sink) -> CommandBuilder:
    return CommandBuilder(sink, version_loader=lambda default: "1.0.0")


class TestReportFolderName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("My Suite", "My-Suite"),
            ("A/B.C d", "ABC-d"),
            ("back\\slash", "backslash"),
            ("v1.2 smoke", "v12-smoke"),
            ("two  spaces", "two--spaces"),
            ("tab\there", "tab-here"),
        ],
    )
    def test_folder_names(self, name: str, expected: str) -> None:
        assert report_folder_name(name) == expected


class TestResolveTestrunnerPath:
    def test_file_path_is_kept(self, runner_file: Path) -> None:
        assert resolve_testrunner_path(str(runner_file)) == str(runner_file)

    def test_blank_path(self) -> None:
        assert resolve_testrunner_path("  ") == ""
        assert resolve_testrunner_path(None) == ""

    def test_directory_gets_shell_script(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("readyrun.command.builder._is_windows", lambda: False)
        assert resolve_testrunner_path(str(tmp_path)) == f"{tmp_path}{os.sep}testrunner.sh"

    def test_directory_gets_batch_file_on_windows(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("readyrun.command.builder._is_windows", lambda: True)
        assert resolve_testrunner_path(str(tmp_path)) == f"{tmp_path}{os.sep}testrunner.bat"


class TestBuildScopes:
    def test_project_scope(self, builder, make_params, runner_file, project_file, report_dir) -> None:
        plan = builder.build(make_params())

        assert plan is not None
        assert plan.command == (
            str(runner_file),
            "-f", report_dir,
            "-r", "-j", "-J",
            "-F", "PDF",
            str(project_file),
            "-R", "Project Report",
        )
        assert plan.printable_report.scope is ReportScope.PROJECT
        assert plan.printable_report.relative_dir == os.sep
        assert plan.printable_report.file_name == "Project Report.pdf"
        assert plan.printable_report.marker == "Created report [Project Report]"
        assert plan.printable_report_path == Path(report_dir) / "Project Report.pdf"

    def test_suite_scope(self, builder, make_params, runner_file, project_file, report_dir) -> None:
        plan = builder.build(make_params(test_suite="My Suite"))

        assert plan.command == (
            str(runner_file),
            "-f", report_dir,
            "-r", "-j", "-J",
            "-F", "PDF",
            "-s", "My Suite",
            "-R", "TestSuite Report",
            str(project_file),
        )
        assert plan.printable_report.relative_dir == f"{os.sep}My-Suite{os.sep}"
        assert plan.printable_report.file_name == "TestSuite Report.pdf"
        assert plan.printable_report.marker == "Created report [TestSuite Report]"

    def test_case_scope_with_password_and_environment(
        self, builder, make_params, runner_file, project_file, report_dir
    ) -> None:
        params = make_params(
            test_suite="My Suite",
            test_case="Test 1",
            project_password="secret",
            environment="staging",
        )

        plan = builder.build(params)

        assert plan.command == (
            str(runner_file),
            "-f", report_dir,
            "-r", "-j", "-J",
            "-F", "PDF",
            "-c", "Test 1",
            "-R", "Test Case Report",
            "-s", "My Suite",
            "-x", "secret",
            "-E", "staging",
            str(project_file),
        )
        assert plan.printable_report.scope is ReportScope.TEST_CASE
        assert plan.printable_report.relative_dir == f"{os.sep}My-Suite{os.sep}Test-1{os.sep}"
        assert plan.printable_report.file_name == "Test Case Report.pdf"
        assert plan.printable_report_path == Path(report_dir) / "My-Suite" / "Test-1" / "Test Case Report.pdf"

    def test_report_directory_is_created(self, builder, make_params, workspace: Path) -> None:
        assert not (workspace / "ReadyAPI_report").exists()
        builder.build(make_params())
        assert (workspace / "ReadyAPI_report").is_dir()

    def test_existing_report_directory_is_reused(self, builder, make_params, workspace: Path) -> None:
        (workspace / "ReadyAPI_report").mkdir()
        assert builder.build(make_params()) is not None

    def test_report_directory_left_alone_when_creation_disabled(self, sink, make_params, workspace: Path) -> None:
        builder = CommandBuilder(sink, version_loader=lambda default: "1.0.0", create_report_directory=False)
        plan = builder.build(make_params())
        assert plan is not None
        assert plan.report_directory == workspace / "ReadyAPI_report"
        assert not (workspace / "ReadyAPI_report").exists()

    def test_composite_project_directory(self, builder, make_params, tmp_path: Path) -> None:
        composite = tmp_path / "composite"
        composite.mkdir()
        plan = builder.build(make_params(project_path=str(composite)))
        assert plan is not None
        assert plan.command[-3] == str(composite)

    def test_runner_directory_resolves_to_script(
        self, builder, make_params, runner_factory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("readyrun.command.builder._is_windows", lambda: False)
        script = runner_factory()
        plan = builder.build(make_params(testrunner_path=str(script.parent)))
        assert plan.command[0] == str(script)


class TestAnalyticsFlag:
    def test_new_runner_gets_version_flag(self, builder, make_params, runner_factory) -> None:
        plan = builder.build(make_params(testrunner_path=str(runner_factory(version="2.5"))))
        assert plan.command[-2:] == ("-q", "1.0.0")

    def test_old_runner_gets_no_version_flag(self, builder, make_params, runner_factory) -> None:
        plan = builder.build(make_params(testrunner_path=str(runner_factory(version="1.9"))))
        assert "-q" not in plan.command

    def test_default_loader_reads_bundled_version(self, sink, make_params, runner_factory) -> None:
        plan = CommandBuilder(sink).build(make_params(testrunner_path=str(runner_factory(version="3.4"))))
        assert plan.command[-2] == "-q"
        assert plan.command[-1]


class TestPreflightFailures:
    def test_blank_runner_path(self, builder, make_params, sink) -> None:
        assert builder.build(make_params(testrunner_path="")) is None
        assert sink.lines == ["Failed to load testrunner file []"]

    def test_missing_runner(self, builder, make_params, sink, tmp_path: Path) -> None:
        missing = tmp_path / "nope.sh"
        assert builder.build(make_params(testrunner_path=str(missing))) is None
        assert sink.lines == [f"Failed to load testrunner file [{missing}]"]

    def test_empty_runner(self, builder, make_params, sink, tmp_path: Path) -> None:
        empty = tmp_path / "empty.sh"
        empty.write_text("")
        assert builder.build(make_params(testrunner_path=str(empty))) is None
        assert sink.lines == [f"Failed to load testrunner file [{empty}]"]

    def test_open_source_runner(self, builder, make_params, sink, runner_factory, workspace: Path) -> None:
        runner = runner_factory(pro=False)
        assert builder.build(make_params(testrunner_path=str(runner))) is None
        assert sink.lines == [
            "The testrunner file is not correct. Please confirm it's the testrunner for SoapUI Pro. Exiting."
        ]
        assert not (workspace / "ReadyAPI_report").exists()

    def test_case_without_suite(self, builder, make_params, sink) -> None:
        assert builder.build(make_params(test_case="Test 1")) is None
        assert sink.lines == ["Enter a testsuite for the specified testcase. Exiting."]

    def test_case_with_blank_suite(self, builder, make_params, sink) -> None:
        assert builder.build(make_params(test_case="Test 1", test_suite="   ")) is None
        assert sink.lines == ["Enter a testsuite for the specified testcase. Exiting."]

    def test_missing_project(self, builder, make_params, sink, tmp_path: Path) -> None:
        missing = tmp_path / "missing.xml"
        assert builder.build(make_params(project_path=str(missing))) is None
        assert sink.lines == [f"Failed to load the project file [{missing}]"]

    def test_blank_project(self, builder, make_params, sink) -> None:
        assert builder.build(make_params(project_path=" ")) is None
        assert sink.lines == ["Failed to load the project file [ ]"]

    def test_open_source_project(self, builder, make_params, sink, open_source_project_file: Path) -> None:
        assert builder.build(make_params(project_path=str(open_source_project_file))) is None
        assert sink.lines == ["The project is not a SoapUI Pro project! Exiting."]

    def test_unparseable_project_is_reported_distinctly(self, builder, make_params, sink, tmp_path: Path) -> None:
        broken = tmp_path / "broken.xml"
        broken.write_text("<con:soapui-project <<<")
        assert builder.build(make_params(project_path=str(broken))) is None
        assert len(sink.lines) == 1
        assert sink.lines[0].startswith("Could not inspect the project file:")
