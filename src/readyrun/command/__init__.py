#
# src/readyrun/command/__init__.py
#
"""
Pre-flight stage: validates artifacts and builds the runner command line.
"""

from .builder import CommandBuilder, report_folder_name, resolve_testrunner_path
from .models import BuildPlan, PrintableReport, ReportScope

__all__ = [
    "BuildPlan",
    "CommandBuilder",
    "PrintableReport",
    "ReportScope",
    "report_folder_name",
    "resolve_testrunner_path",
]

# 🔼⚙️
