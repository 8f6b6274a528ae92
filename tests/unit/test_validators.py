"""Test leaf validators: text, identifier, vocabulary, pattern, number."""

import pytest

from scorm_runtime.core.enums import ValidationFailure
from scorm_runtime.validation import (
    IdentifierValidator,
    IFieldValidator,
    NumberValidator,
    PatternValidator,
    TextValidator,
    ValidationOutcome,
    VocabularyValidator,
)
from scorm_runtime.variants.scorm12 import constants as c


class TestValidationOutcome:
    def test_ok_is_accepted(self):
        outcome = ValidationOutcome.ok()
        assert outcome.accepted is True
        assert outcome.failure is None

    def test_reject_carries_failure(self):
        outcome = ValidationOutcome.reject(ValidationFailure.TYPE_MISMATCH, "bad")
        assert outcome.accepted is False
        assert outcome.failure is ValidationFailure.TYPE_MISMATCH
        assert outcome.message == "bad"


class TestTextValidator:
    def test_within_limit(self):
        assert TextValidator(5).validate("abcde").accepted

    def test_over_limit(self):
        outcome = TextValidator(5).validate("abcdef")
        assert not outcome.accepted
        assert outcome.failure is ValidationFailure.TYPE_MISMATCH

    def test_satisfies_protocol(self):
        assert isinstance(TextValidator(1), IFieldValidator)


class TestIdentifierValidator:
    @pytest.mark.parametrize("value", ["obj-1", "urn:lesson:7", ""])
    def test_valid(self, value):
        assert IdentifierValidator().validate(value).accepted

    def test_space_rejected(self):
        assert not IdentifierValidator().validate("has space").accepted

    def test_length_limit(self):
        assert not IdentifierValidator(3).validate("abcd").accepted


class TestVocabularyValidator:
    def test_member(self):
        assert VocabularyValidator(c.EXIT).validate("suspend").accepted

    def test_empty_token_allowed_when_listed(self):
        assert VocabularyValidator(c.EXIT).validate("").accepted

    def test_non_member(self):
        outcome = VocabularyValidator(c.EXIT).validate("quit")
        assert outcome.failure is ValidationFailure.TYPE_MISMATCH
        assert "'quit'" in outcome.message


class TestPatternValidator:
    @pytest.mark.parametrize("value", ["00:00:00", "0000:30:00", "12:34:56.7"])
    def test_timespan_valid(self, value):
        assert PatternValidator(c.CMI_TIMESPAN, "CMITimespan").validate(value).accepted

    @pytest.mark.parametrize("value", ["1:00:00", "00:00", "00:00:00.123", "abc"])
    def test_timespan_invalid(self, value):
        outcome = PatternValidator(c.CMI_TIMESPAN, "CMITimespan").validate(value)
        assert not outcome.accepted
        assert "CMITimespan" in outcome.message

    def test_time_of_day(self):
        validator = PatternValidator(c.CMI_TIME, "CMITime")
        assert validator.validate("23:59:59").accepted
        assert not validator.validate("24:00:00").accepted


class TestNumberValidator:
    @pytest.fixture
    def score(self):
        return NumberValidator(c.CMI_DECIMAL, 0, 100, name="CMIDecimal")

    @pytest.mark.parametrize("value", ["0", "80", "80.5", "100", ""])
    def test_in_range(self, score, value):
        assert score.validate(value).accepted

    @pytest.mark.parametrize("value", ["101", "-1", "100.01"])
    def test_out_of_range(self, score, value):
        outcome = score.validate(value)
        assert outcome.failure is ValidationFailure.VALUE_OUT_OF_RANGE

    @pytest.mark.parametrize("value", ["-", ".", "-."])
    def test_sign_or_point_alone_is_out_of_range(self, score, value):
        outcome = score.validate(value)
        assert outcome.failure is ValidationFailure.VALUE_OUT_OF_RANGE
        assert "no numeric value" in outcome.message

    @pytest.mark.parametrize("value", ["abc", "1e5", "1000", "12,5"])
    def test_bad_format_is_type_mismatch(self, score, value):
        assert score.validate(value).failure is ValidationFailure.TYPE_MISMATCH

    def test_open_high_bound(self):
        validator = NumberValidator(c.CMI_SINTEGER, -1, None, name="CMISInteger")
        assert validator.validate("5000").accepted
        outcome = validator.validate("-2")
        assert outcome.failure is ValidationFailure.VALUE_OUT_OF_RANGE
        assert "*" in outcome.message

    def test_no_range_only_checks_format(self):
        validator = NumberValidator(c.CMI_INTEGER)
        assert validator.validate("123456").accepted
        assert not validator.validate("-1").accepted
