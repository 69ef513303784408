# src/readyrun/exceptions.py

"""
Custom exceptions for readyrun.
"""


class ReadyRunError(Exception):
    """Base class for all readyrun errors."""

    pass


class ConfigurationError(ReadyRunError):
    """Raised when invocation parameters or the config file are invalid."""

    pass


class ClassificationError(ReadyRunError):
    """Raised when an artifact could not be inspected at all.

    Distinct from an artifact that was inspected and found to be the wrong
    product variant, which is reported as a plain ``False`` verdict.
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: Exception | None = None,
    ):
        self.path = path
        self.details = details
        full_message = f"[Classifier] {message}"
        if path:
            full_message += f" (Path: '{path}')"
        super().__init__(full_message)
        if details and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class LaunchError(ReadyRunError):
    """Raised when the test runner process could not be started."""

    pass


# 🔼⚙️
