"""Leaf validators for CMI data model elements.

Each validator is a pure predicate over the candidate string: it returns a
``ValidationOutcome`` and never touches the tree or the error register.

- ``TextValidator``: free text up to a maximum length
- ``IdentifierValidator``: printable ASCII identifier without spaces
- ``VocabularyValidator``: membership in a fixed token set
- ``PatternValidator``: regex-constrained values (times, timespans, results)
- ``NumberValidator``: numeric format plus optional inclusive range
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from scorm_runtime.core.enums import ValidationFailure

from .models import ValidationOutcome


@runtime_checkable
class IFieldValidator(Protocol):
    """Protocol for a single leaf validator."""

    def validate(self, value: str) -> ValidationOutcome: ...


class TextValidator:
    def __init__(self, max_length: int) -> None:
        self.max_length = max_length

    def validate(self, value: str) -> ValidationOutcome:
        if len(value) > self.max_length:
            return ValidationOutcome.reject(
                ValidationFailure.TYPE_MISMATCH,
                f"value exceeds {self.max_length} characters",
            )
        return ValidationOutcome.ok()

    def __repr__(self) -> str:
        return f"TextValidator(max_length={self.max_length})"


class IdentifierValidator:
    """Identifier of printable, non-space ASCII characters."""

    _PATTERN = re.compile(r"[\x21-\x7E]*")

    def __init__(self, max_length: int = 255) -> None:
        self.max_length = max_length

    def validate(self, value: str) -> ValidationOutcome:
        if len(value) > self.max_length or not self._PATTERN.fullmatch(value):
            return ValidationOutcome.reject(
                ValidationFailure.TYPE_MISMATCH,
                f"{value!r} is not a valid identifier",
            )
        return ValidationOutcome.ok()


class VocabularyValidator:
    def __init__(self, tokens: Iterable[str]) -> None:
        self.tokens = tuple(tokens)

    def validate(self, value: str) -> ValidationOutcome:
        if value not in self.tokens:
            return ValidationOutcome.reject(
                ValidationFailure.TYPE_MISMATCH,
                f"{value!r} is not one of {', '.join(repr(t) for t in self.tokens)}",
            )
        return ValidationOutcome.ok()

    def __repr__(self) -> str:
        return f"VocabularyValidator({list(self.tokens)!r})"


class PatternValidator:
    def __init__(self, pattern: str, name: str = "pattern") -> None:
        self.pattern = re.compile(pattern)
        self.name = name

    def validate(self, value: str) -> ValidationOutcome:
        if not self.pattern.fullmatch(value):
            return ValidationOutcome.reject(
                ValidationFailure.TYPE_MISMATCH,
                f"{value!r} is not a valid {self.name}",
            )
        return ValidationOutcome.ok()

    def __repr__(self) -> str:
        return f"PatternValidator({self.name!r})"


class NumberValidator:
    """Numeric format check followed by an inclusive range check.

    ``high=None`` leaves the range open-ended.  The empty string passes the
    range check as zero, so a decimal field may be cleared.  A bare sign or
    decimal point fails it.
    """

    def __init__(
        self,
        pattern: str,
        low: float | None = None,
        high: float | None = None,
        name: str = "number",
    ) -> None:
        self.pattern = re.compile(pattern)
        self.low = low
        self.high = high
        self.name = name

    def validate(self, value: str) -> ValidationOutcome:
        if not self.pattern.fullmatch(value):
            return ValidationOutcome.reject(
                ValidationFailure.TYPE_MISMATCH,
                f"{value!r} is not a valid {self.name}",
            )
        if self.low is None and self.high is None:
            return ValidationOutcome.ok()

        try:
            number = float(value) if value else 0.0
        except ValueError:
            # bare sign or point: matches the format but has no numeric value
            return ValidationOutcome.reject(
                ValidationFailure.VALUE_OUT_OF_RANGE,
                f"{value!r} has no numeric value",
            )
        if (self.low is not None and number < self.low) or (
            self.high is not None and number > self.high
        ):
            low = "*" if self.low is None else f"{self.low:g}"
            high = "*" if self.high is None else f"{self.high:g}"
            return ValidationOutcome.reject(
                ValidationFailure.VALUE_OUT_OF_RANGE,
                f"{value} is outside {low}#{high}",
            )
        return ValidationOutcome.ok()

    def __repr__(self) -> str:
        return f"NumberValidator({self.name!r}, {self.low}, {self.high})"
