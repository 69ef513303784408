#
# config/__init__.py
#
"""
Configuration handling sub-package for readyrun.

Exports the invocation models and the loading helpers.
"""

from .loader import load_invocation_file, resolve_parameters
from .models import InvocationParameters, RunnerSettings

__all__ = [
    "InvocationParameters",
    "RunnerSettings",
    "load_invocation_file",
    "resolve_parameters",
]

# 🔼⚙️
