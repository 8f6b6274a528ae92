"""Validation result model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from scorm_runtime.core.enums import ValidationFailure


class ValidationOutcome(BaseModel):
    """Accept/reject verdict for one candidate value.

    ``failure`` is set iff ``accepted`` is false.  The resolver translates
    it into the active variant's numeric code.
    """

    model_config = ConfigDict(frozen=True)

    accepted: bool
    failure: ValidationFailure | None = None
    message: str = ""

    @classmethod
    def ok(cls) -> ValidationOutcome:
        return _ACCEPTED

    @classmethod
    def reject(cls, failure: ValidationFailure, message: str) -> ValidationOutcome:
        return cls(accepted=False, failure=failure, message=message)


_ACCEPTED = ValidationOutcome(accepted=True)
