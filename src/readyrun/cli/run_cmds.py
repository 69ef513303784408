# src/readyrun/cli/run_cmds.py

import asyncio
import os
import shlex
from pathlib import Path

import click
import structlog

from readyrun.cli.utils import EchoLogSink, logging_options, setup_logging_from_context
from readyrun.command.builder import CommandBuilder
from readyrun.command.models import BuildPlan
from readyrun.config import InvocationParameters, resolve_parameters
from readyrun.exceptions import ConfigurationError, LaunchError
from readyrun.protocols import LogSink
from readyrun.runtime.launcher import run_functional_test
from readyrun.state import RunOutcome
from readyrun.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.run")

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_PREFLIGHT_FAILED = 2
EXIT_CONFIG_ERROR = 3
EXIT_INTERRUPTED = 130


def _echo_report_summary(plan: BuildPlan, outcome: RunOutcome) -> None:
    click.echo(f"Report created: {'yes' if outcome.report_created else 'no'}")
    if outcome.printable_report_created:
        click.echo(f"Printable report: {plan.printable_report_path}")
    else:
        click.echo(f"Printable report not created (expected at {plan.printable_report_path})")


def _run_functional_test(params: InvocationParameters, sink: LogSink) -> int:
    """Runs the whole pipeline on a fresh event loop and maps the result to an exit code."""
    try:
        result = asyncio.run(run_functional_test(params, sink, env=os.environ.copy()))
    except KeyboardInterrupt:
        log.warning("Run interrupted by KeyboardInterrupt (CTRL-C).")
        return EXIT_INTERRUPTED
    except LaunchError as e:
        click.echo(f"Error: {e}", err=True)
        return EXIT_PREFLIGHT_FAILED

    if result is None:
        return EXIT_PREFLIGHT_FAILED

    plan, outcome = result
    _echo_report_summary(plan, outcome)
    if outcome.license_failure:
        return EXIT_RUN_FAILED
    if outcome.failed:
        click.echo(f"Testrunner exited with code {outcome.exit_code}", err=True)
        return EXIT_RUN_FAILED
    return EXIT_OK


@click.command(name="run")
@click.option(
    "-w",
    "--workspace",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    envvar="READYRUN_WORKSPACE",
    show_envvar=True,
    help="Workspace root; reports go to <workspace>/ReadyAPI_report. Defaults to the current directory.",
)
@click.option(
    "-t",
    "--testrunner",
    "testrunner_path",
    default=None,
    envvar="READYRUN_TESTRUNNER",
    show_envvar=True,
    help="Path to the SoapUI Pro testrunner script or to its bin directory.",
)
@click.option(
    "-p",
    "--project",
    "project_path",
    default=None,
    envvar="READYRUN_PROJECT",
    show_envvar=True,
    help="Path to the project file or composite project directory.",
)
@click.option(
    "--project-password",
    default=None,
    envvar="READYRUN_PROJECT_PASSWORD",
    show_envvar=True,
    help="Password of an encrypted project.",
)
@click.option("-e", "--environment", default=None, envvar="READYRUN_ENVIRONMENT", help="Project environment to run against.")
@click.option("-s", "--test-suite", default=None, envvar="READYRUN_TEST_SUITE", help="Run only this test suite.")
@click.option(
    "-c",
    "--test-case",
    default=None,
    envvar="READYRUN_TEST_CASE",
    help="Run only this test case (requires --test-suite).",
)
@click.option(
    "--config-path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path),
    default=None,
    envvar="READYRUN_CONF",
    show_envvar=True,
    help="TOML file with an [invocation] table supplying defaults for the options above.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Run the pre-flight checks and print the command line only; nothing is created or started.",
)
@logging_options
@click.pass_context
def run_cli(
    ctx: click.Context,
    workspace: Path | None,
    testrunner_path: str | None,
    project_path: str | None,
    project_password: str | None,
    environment: str | None,
    test_suite: str | None,
    test_case: str | None,
    config_path: Path | None,
    dry_run: bool,
    **kwargs,
):
    """Run a SoapUI Pro functional test and report the generated reports."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
    )

    try:
        params = resolve_parameters(
            config_path,
            workspace=workspace,
            testrunner_path=testrunner_path,
            project_path=project_path,
            project_password=project_password,
            environment=environment,
            test_suite=test_suite,
            test_case=test_case,
        )
    except ConfigurationError as e:
        log.error("Invalid invocation configuration", error=str(e))
        click.echo(f"Error: {e}", err=True)
        ctx.exit(EXIT_CONFIG_ERROR)

    sink = EchoLogSink()

    if dry_run:
        plan = CommandBuilder(sink, create_report_directory=False).build(params)
        if plan is None:
            ctx.exit(EXIT_PREFLIGHT_FAILED)
        click.echo(shlex.join(plan.masked_command()))
        click.echo(f"Printable report: {plan.printable_report_path}")
        return

    exit_code = _run_functional_test(params, sink)
    log.info("'run' command finished.", exit_code=exit_code)
    if exit_code != EXIT_OK:
        ctx.exit(exit_code)

# 🔼⚙️
