#
# src/readyrun/state.py
#
"""
Run state folded from the runner output, and the final outcome of a run.
"""

from enum import Enum, auto

import structlog
from attrs import define, field, mutable

from readyrun.telemetry import StructLogger

log: StructLogger = structlog.get_logger("state")


class MonitorEventKind(Enum):
    """Things the output monitor can observe on a runner output line."""

    LINE = auto()  # Every line, forwarded to the log sink.
    LICENSE_FAILURE = auto()  # Runner asked for a license file; it cannot continue.
    DETAILED_REPORT_CREATED = auto()
    PRINTABLE_REPORT_CREATED = auto()
    STREAM_ERROR = auto()  # Reading the output failed; monitoring has stopped.


@define(frozen=True, slots=True)
class MonitorEvent:
    kind: MonitorEventKind
    line: str


@mutable(slots=True)
class RunState:
    """
    Milestones seen so far in one run.

    Only the monitor task of the run applies events; the caller reads the
    frozen RunOutcome once that task has finished.
    """

    report_created: bool = field(default=False)
    printable_report_created: bool = field(default=False)
    license_failure: bool = field(default=False)

    def apply(self, event: MonitorEvent) -> None:
        if event.kind is MonitorEventKind.LICENSE_FAILURE:
            self.license_failure = True
        elif event.kind is MonitorEventKind.DETAILED_REPORT_CREATED:
            self.report_created = True
        elif event.kind is MonitorEventKind.PRINTABLE_REPORT_CREATED:
            self.printable_report_created = True
        else:
            return
        log.debug("Run state updated", kind=event.kind.name)


@define(frozen=True, slots=True)
class RunOutcome:
    """What the caller learns once the runner has exited."""

    exit_code: int | None
    report_created: bool
    printable_report_created: bool
    license_failure: bool

    @property
    def failed(self) -> bool:
        return self.license_failure or self.exit_code != 0

    @classmethod
    def from_state(cls, state: RunState, exit_code: int | None) -> "RunOutcome":
        return cls(
            exit_code=exit_code,
            report_created=state.report_created,
            printable_report_created=state.printable_report_created,
            license_failure=state.license_failure,
        )

# 🔼⚙️
