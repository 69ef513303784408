#
# src/readyrun/runtime/launcher.py
#
"""
Starts the testrunner and watches its output in a background task.
"""

import asyncio
import os
import signal
from collections.abc import Mapping

import structlog

from readyrun.command.builder import CommandBuilder
from readyrun.command.models import BuildPlan
from readyrun.config.models import InvocationParameters
from readyrun.exceptions import LaunchError
from readyrun.protocols import LogSink
from readyrun.runtime.monitor import monitor_output
from readyrun.state import MonitorEventKind, RunOutcome, RunState
from readyrun.telemetry import StructLogger

log: StructLogger = structlog.get_logger("runtime.launcher")

# Runner lines can be long stack traces; keep well above asyncio's 64 KiB default.
STDOUT_LINE_LIMIT = 1024 * 1024

# testrunner.sh starts java as a child; its own session lets the whole tree be killed at once.
_USE_PROCESS_GROUP = os.name == "posix"


class RunningTest:
    """
    Handle on a started testrunner process.

    The monitor task is the only writer of the run state. `wait()` joins it
    after the process exits, so the returned outcome reflects every line.
    There is no timeout: a runner that hangs without output blocks `wait()`.
    """

    def __init__(self, process: asyncio.subprocess.Process, plan: BuildPlan, sink: LogSink):
        self.process = process
        self.plan = plan
        self.sink = sink
        self._state = RunState()
        self._log = log.bind(pid=process.pid)
        self._monitor_task = asyncio.create_task(self._monitor(), name=f"readyrun-monitor-{process.pid}")

    @property
    def pid(self) -> int:
        return self.process.pid

    async def _monitor(self) -> None:
        marker = self.plan.printable_report.marker
        async for event in monitor_output(self.process.stdout, marker):
            if event.kind is MonitorEventKind.LINE:
                self.sink.println(event.line)
            elif event.kind is MonitorEventKind.STREAM_ERROR:
                self.sink.println(f"Failed to read the testrunner output: {event.line}")
            else:
                self._state.apply(event)

            if event.kind is MonitorEventKind.LICENSE_FAILURE:
                self.sink.println("No license was found! Exiting.")
                self._kill()

    def _kill(self) -> None:
        """Kills the runner together with the JVM and anything else it started."""
        try:
            if _USE_PROCESS_GROUP:
                os.killpg(self.process.pid, signal.SIGKILL)
            else:
                self.process.kill()
            self._log.warning("Testrunner killed", emoji_key="license")
        except ProcessLookupError:
            self._log.debug("Testrunner already exited before kill")

    async def wait(self) -> RunOutcome:
        """Waits for the process to exit and the output to be fully consumed."""
        try:
            exit_code = await self.process.wait()
        except asyncio.CancelledError:
            self._kill()
            raise
        await self._monitor_task
        outcome = RunOutcome.from_state(self._state, exit_code)
        self._log.info(
            "Testrunner finished",
            exit_code=exit_code,
            report_created=outcome.report_created,
            printable_report_created=outcome.printable_report_created,
            license_failure=outcome.license_failure,
            emoji_key="fail" if outcome.failed else "success",
        )
        return outcome


class RunnerLauncher:
    """Pre-flight checks followed by the actual process start."""

    def __init__(self, sink: LogSink, builder: CommandBuilder | None = None):
        self.sink = sink
        self.builder = builder or CommandBuilder(sink)

    async def launch(
        self,
        params: InvocationParameters,
        env: Mapping[str, str] | None = None,
    ) -> RunningTest | None:
        """Returns a running handle, or None if a pre-flight check failed."""
        plan = self.builder.build(params)
        if plan is None:
            log.info("Pre-flight checks failed, runner not started", emoji_key="fail")
            return None
        return await self.start(plan, env)

    async def start(self, plan: BuildPlan, env: Mapping[str, str] | None = None) -> RunningTest:
        """
        Spawns the runner for an already validated plan.

        stderr is inherited; stdout is consumed by the monitor task.

        Raises:
            LaunchError: the process could not be spawned.
        """
        self.sink.println("Starting SoapUI Pro functional test.")
        log.info("Starting testrunner", executable=plan.command[0], emoji_key="launch")
        try:
            process = await asyncio.create_subprocess_exec(
                *plan.command,
                stdout=asyncio.subprocess.PIPE,
                stderr=None,
                env=dict(env) if env is not None else None,
                limit=STDOUT_LINE_LIMIT,
                start_new_session=_USE_PROCESS_GROUP,
            )
        except OSError as e:
            log.error("Failed to start testrunner", executable=plan.command[0], exc_info=True)
            raise LaunchError(f"Could not start testrunner '{plan.command[0]}': {e}") from e
        return RunningTest(process, plan, self.sink)


async def run_functional_test(
    params: InvocationParameters,
    sink: LogSink,
    env: Mapping[str, str] | None = None,
) -> tuple[BuildPlan, RunOutcome] | None:
    """Convenience wrapper: launch, wait, and return the plan with its outcome."""
    running = await RunnerLauncher(sink).launch(params, env)
    if running is None:
        return None
    outcome = await running.wait()
    return running.plan, outcome

# 🔼⚙️
