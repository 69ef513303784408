#
# src/readyrun/runtime/monitor.py
#
"""
Turns the runner's stdout into a stream of MonitorEvents.
"""

import asyncio
from collections.abc import AsyncIterator

import structlog

from readyrun.state import MonitorEvent, MonitorEventKind
from readyrun.telemetry import StructLogger

log: StructLogger = structlog.get_logger("runtime.monitor")

# The runner falls back to an interactive prompt when no license is installed.
LICENSE_PROMPT = "Please enter absolute path of the license file"
DETAILED_REPORT_MARKER = "Created report at"


def scan_line(line: str, printable_marker: str) -> list[MonitorEvent]:
    """
    Classifies one output line. The LINE event always comes first.

    A license prompt ends the scan: nothing else on that line matters.
    """
    events = [MonitorEvent(MonitorEventKind.LINE, line)]
    if LICENSE_PROMPT in line:
        events.append(MonitorEvent(MonitorEventKind.LICENSE_FAILURE, line))
        return events
    if DETAILED_REPORT_MARKER in line:
        events.append(MonitorEvent(MonitorEventKind.DETAILED_REPORT_CREATED, line))
    if printable_marker in line:
        events.append(MonitorEvent(MonitorEventKind.PRINTABLE_REPORT_CREATED, line))
    return events


async def monitor_output(
    stream: asyncio.StreamReader,
    printable_marker: str,
    encoding: str = "utf-8",
) -> AsyncIterator[MonitorEvent]:
    """
    Yields events for each line until end of stream or a license failure.

    Read errors are reported as a single STREAM_ERROR event and end the
    iteration; they are never raised to the consumer. A line longer than the
    stream limit is skipped (the reader has already discarded it) and
    reading continues, so the pipe keeps draining.
    """
    line_count = 0
    while True:
        try:
            raw = await stream.readline()
        except ValueError:
            log.warning("Runner output line over the length limit skipped", lines_read=line_count)
            continue
        except OSError as e:
            log.error("Reading runner output failed", lines_read=line_count, exc_info=True)
            yield MonitorEvent(MonitorEventKind.STREAM_ERROR, f"{type(e).__name__}: {e}")
            return
        if not raw:
            log.debug("Runner output closed", lines_read=line_count)
            return

        line_count += 1
        line = raw.decode(encoding, errors="replace").rstrip("\r\n")
        events = scan_line(line, printable_marker)
        for event in events:
            yield event
        if events[-1].kind is MonitorEventKind.LICENSE_FAILURE:
            log.warning("License prompt detected, monitoring stopped", lines_read=line_count, emoji_key="license")
            return

# 🔼⚙️
