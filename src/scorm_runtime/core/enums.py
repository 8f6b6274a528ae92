"""Enumerations used across the run-time engine."""

from enum import Enum


class SessionState(str, Enum):
    NOT_INITIALIZED = "not_initialized"
    INITIALIZED = "initialized"
    TERMINATED = "terminated"


class NodeKind(str, Enum):
    """Discriminator for data model tree nodes."""

    SCALAR = "scalar"
    COMPOSITE = "composite"
    COLLECTION = "collection"


class Access(str, Enum):
    READ_WRITE = "read_write"
    READ_ONLY = "read_only"
    WRITE_ONLY = "write_only"


class ResolveMode(str, Enum):
    GET = "get"
    SET = "set"


class ValidationFailure(str, Enum):
    """Why a validator rejected a candidate value.

    The dispatcher maps each kind onto the active variant's error code.
    """

    TYPE_MISMATCH = "type_mismatch"
    VALUE_OUT_OF_RANGE = "value_out_of_range"
    INVALID_SET_VALUE = "invalid_set_value"


class CommitFormat(str, Enum):
    STRUCTURED = "json"
    FLATTENED = "flattened"
    PARAMS = "params"


class SchedulerState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    FIRED = "fired"


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def severity(self) -> int:
        return _LOG_SEVERITY[self]


_LOG_SEVERITY: dict[LogLevel, int] = {
    LogLevel.DEBUG: 1,
    LogLevel.INFO: 2,
    LogLevel.WARNING: 3,
    LogLevel.ERROR: 4,
}
