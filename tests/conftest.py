import stat
from pathlib import Path

import pytest

from readyrun.config import InvocationParameters

PRO_RUNNER_CLASS = "com.smartbear.ready.cmd.runner.pro.SoapUIProTestCaseRunner"

PRO_PROJECT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<con:soapui-project xmlns:con="http://eviware.com/soapui/config" name="Demo" updated="3.10.0 2021-12-02T12:00:00Z" soapui-version="5.5.0">
  <con:testSuite name="My Suite">
    <con:testCase name="Test 1"/>
  </con:testSuite>
</con:soapui-project>
"""

OPEN_SOURCE_PROJECT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<con:soapui-project xmlns:con="http://eviware.com/soapui/config" name="Demo" soapui-version="5.5.0">
  <con:testSuite name="My Suite"/>
</con:soapui-project>
"""



class RecordingSink:
    """LogSink double that keeps every line."""

    def __init__(self):
        self.lines: list[str] = []

    def println(self, line: str) -> None:
        self.lines.append(line)


def _write_runner(path: Path, body: str = "", version: str = "2.3", pro: bool = True) -> Path:
    """Writes an executable testrunner.sh double whose behavior is `body`."""
    runner_class = PRO_RUNNER_CLASS if pro else "com.smartbear.soapui.tools.SoapUITestCaseRunner"
    path.write_text(
        "#!/bin/sh\n"
        f'# CLASSPATH="$SOAPUI_HOME/lib/ready-api-ui-{version}.0.jar"\n'
        f"# exec java {runner_class} \"$@\"\n"
        f"{body}\n"
    )
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def runner_file(tmp_path: Path) -> Path:
    return _write_runner(tmp_path / "testrunner.sh", body="exit 0")


@pytest.fixture
def project_file(tmp_path: Path) -> Path:
    path = tmp_path / "demo-soapui-project.xml"
    path.write_text(PRO_PROJECT_XML)
    return path


@pytest.fixture
def make_params(workspace: Path, runner_file: Path, project_file: Path):
    """Factory for InvocationParameters pointing at valid artifacts by default."""

    def _make(**overrides) -> InvocationParameters:
        values = {
            "workspace": workspace,
            "testrunner_path": str(runner_file),
            "project_path": str(project_file),
        }
        values.update(overrides)
        return InvocationParameters(**values)

    return _make


@pytest.fixture
def report_dir(workspace: Path) -> str:
    return str(workspace / "ReadyAPI_report")


@pytest.fixture
def runner_factory(tmp_path: Path):
    """Writes executable testrunner.sh doubles: runner_factory(body, version=..., pro=..., name=...)."""

    def _make(body: str = "exit 0", version: str = "2.3", pro: bool = True, name: str = "testrunner.sh") -> Path:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        return _write_runner(bin_dir / name, body=body, version=version, pro=pro)

    return _make


@pytest.fixture
def open_source_project_file(tmp_path: Path) -> Path:
    path = tmp_path / "open-source-soapui-project.xml"
    path.write_text(OPEN_SOURCE_PROJECT_XML)
    return path
