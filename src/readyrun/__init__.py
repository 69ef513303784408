#
# src/readyrun/__init__.py
#
"""
readyrun: launches the SoapUI Pro / ReadyAPI functional test runner.

Validates the runner script and project, builds the runner command line,
and watches the runner output for license failures and report milestones.
"""

# 🔼⚙️
