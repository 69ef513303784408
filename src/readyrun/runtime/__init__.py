#
# src/readyrun/runtime/__init__.py
#
"""
Runtime stage: process start and output monitoring.
"""

from .launcher import RunnerLauncher, RunningTest, run_functional_test
from .monitor import DETAILED_REPORT_MARKER, LICENSE_PROMPT, monitor_output, scan_line

__all__ = [
    "DETAILED_REPORT_MARKER",
    "LICENSE_PROMPT",
    "RunnerLauncher",
    "RunningTest",
    "monitor_output",
    "run_functional_test",
    "scan_line",
]

# 🔼⚙️
