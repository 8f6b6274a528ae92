"""Core models shared by the engine and every run-time variant."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------

class ErrorDescription(BaseModel):
    """Short and detailed message for one error code."""

    model_config = ConfigDict(frozen=True)

    basic: str
    detail: str


class ErrorCodes(BaseModel):
    """Named error codes and message table for one run-time variant.

    Several names may share a number (SCORM 1.2 reports most lifecycle
    faults as 101).
    """

    model_config = ConfigDict(frozen=True)

    general: int
    initialized: int
    terminated: int
    termination_before_init: int
    multiple_termination: int
    retrieve_before_init: int
    retrieve_after_term: int
    store_before_init: int
    store_after_term: int
    commit_before_init: int
    commit_after_term: int
    children_error: int
    count_error: int
    undefined_data_model: int
    value_not_initialized: int
    invalid_set_value: int
    read_only_element: int
    write_only_element: int
    type_mismatch: int
    value_out_of_range: int

    descriptions: dict[str, ErrorDescription] = Field(default_factory=dict)
    default_description: ErrorDescription = ErrorDescription(
        basic="No Error", detail="No Error"
    )

    def describe(self, code: int | str) -> ErrorDescription:
        return self.descriptions.get(str(code), self.default_description)


# ---------------------------------------------------------------------------
# Operation names
# ---------------------------------------------------------------------------

class OperationNames(BaseModel):
    """Names under which each public operation is logged and notified."""

    model_config = ConfigDict(frozen=True)

    initialize: str = "Initialize"
    terminate: str = "Terminate"
    get_value: str = "GetValue"
    set_value: str = "SetValue"
    commit: str = "Commit"
    get_last_error: str = "GetLastError"
    get_error_string: str = "GetErrorString"
    get_diagnostic: str = "GetDiagnostic"


# ---------------------------------------------------------------------------
# Commit
# ---------------------------------------------------------------------------

class CommitResult(BaseModel):
    """Outcome reported by a commit transport."""

    result: bool
    error_code: int = 0
