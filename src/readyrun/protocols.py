#
# src/readyrun/protocols.py
#
"""
Protocols for the collaborators readyrun talks to but does not own.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class LogSink(Protocol):
    """
    Line-oriented, append-only sink for runner output and status lines.

    The hosting build tool supplies one per invocation (e.g. its console log).
    """

    def println(self, line: str) -> None:
        """Appends one line to the sink."""
        ...

# 🔼⚙️
