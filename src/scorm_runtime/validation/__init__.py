"""Validation engine: pure leaf validators for CMI elements.

Validators:
    IFieldValidator, TextValidator, IdentifierValidator,
    VocabularyValidator, PatternValidator, NumberValidator

Models:
    ValidationOutcome
"""

from scorm_runtime.validation.models import ValidationOutcome
from scorm_runtime.validation.validators import (
    IdentifierValidator,
    IFieldValidator,
    NumberValidator,
    PatternValidator,
    TextValidator,
    VocabularyValidator,
)

__all__ = [
    "IFieldValidator",
    "IdentifierValidator",
    "NumberValidator",
    "PatternValidator",
    "TextValidator",
    "ValidationOutcome",
    "VocabularyValidator",
]
