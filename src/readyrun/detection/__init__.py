#
# src/readyrun/detection/__init__.py
#
"""
Artifact classification: is this the SoapUI Pro runner / a SoapUI Pro project?
"""

from .project import is_pro_project
from .runner import RunnerVerdict, inspect_testrunner, is_pro_testrunner, should_emit_analytics_flag
from .xml_sniffer import SniffResult, sniff_element_attribute

__all__ = [
    "RunnerVerdict",
    "SniffResult",
    "inspect_testrunner",
    "is_pro_project",
    "is_pro_testrunner",
    "should_emit_analytics_flag",
    "sniff_element_attribute",
]

# 🔼⚙️
