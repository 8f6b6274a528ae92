"""Custom exception hierarchy for the run-time engine.

``DataModelError`` subclasses are raised inside the path resolver and caught
at the dispatcher boundary, where their code is copied into the error
channel.  They never escape a public API call.
"""


class ScormRuntimeError(Exception):
    """Base exception for all run-time engine errors."""


# --- Configuration ---
class ConfigError(ScormRuntimeError):
    """Invalid or missing configuration or variant wiring."""


class HookNotImplementedError(ScormRuntimeError, NotImplementedError):
    """A required variant hook was not supplied."""


# --- Data model ---
class DataModelError(ScormRuntimeError):
    """Failure carrying a variant-specific numeric error code."""

    def __init__(self, code: int, message: str = "") -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}" if message else str(code))


class StateError(DataModelError):
    """Operation attempted in the wrong lifecycle state."""


class NotFoundError(DataModelError):
    """Element path does not resolve to a defined element."""


class ReadOnlyError(DataModelError):
    """Write attempted on a read-only or computed element."""


class WriteOnlyError(DataModelError):
    """Read attempted on a write-only element."""


class ValidationError(DataModelError):
    """Value rejected by a field validator."""


class NotInitializedError(DataModelError):
    """Read of a leaf or collection index that was never assigned."""


class GeneralError(DataModelError):
    """Internal fallback, including transport faults."""
