"""SCORM 1.2 cross-field validation and termination finalizer."""

from __future__ import annotations

import logging
import re
from typing import Any

from scorm_runtime.cmi.tree import DataModelTree
from scorm_runtime.core.config import RuntimeSettings
from scorm_runtime.core.enums import ValidationFailure
from scorm_runtime.validation.models import ValidationOutcome

from . import constants as c

logger = logging.getLogger(__name__)

_RESPONSE_ELEMENT = re.compile(
    r"cmi\.interactions\.(\d+)\.(?:correct_responses\.\d+\.pattern|student_response)"
)

# Response formats that depend on the interaction type.  Types not listed
# accept any CMIFeedback string.
_RESPONSE_FORMATS: dict[str, re.Pattern[str]] = {
    "true-false": re.compile(r"[01tf]"),
    "numeric": re.compile(c.CMI_DECIMAL),
    "likert": re.compile(r"[0-9a-z]?"),
}


def validate_cross_field(tree: DataModelTree, path: str, value: str) -> ValidationOutcome:
    if path == "cmi.core.lesson_status":
        if tree.initialized and value == "not attempted":
            return ValidationOutcome.reject(
                ValidationFailure.TYPE_MISMATCH,
                "lesson_status cannot be reset to 'not attempted'",
            )
        return ValidationOutcome.ok()

    match = _RESPONSE_ELEMENT.fullmatch(path)
    if match is None:
        return ValidationOutcome.ok()

    interaction_type = tree.peek(f"cmi.interactions.{match.group(1)}.type")
    fmt = _RESPONSE_FORMATS.get(interaction_type or "")
    if fmt is not None and not fmt.fullmatch(value):
        return ValidationOutcome.reject(
            ValidationFailure.TYPE_MISMATCH,
            f"{value!r} is not a valid {interaction_type} response",
        )
    return ValidationOutcome.ok()


# ---------------------------------------------------------------------------
# Time arithmetic
# ---------------------------------------------------------------------------

_TIMESPAN = re.compile(c.CMI_TIMESPAN)


def timespan_to_seconds(timespan: str) -> float:
    """``HHHH:MM:SS.SS`` to seconds; blank or malformed values count as zero."""
    match = _TIMESPAN.fullmatch(timespan or "")
    if match is None:
        return 0.0
    hours, minutes, seconds, fraction = match.groups()
    total = int(hours) * 3600 + int(minutes) * 60 + int(seconds)
    return total + (float(fraction) if fraction else 0.0)


def seconds_to_timespan(total_seconds: float) -> str:
    """Seconds to ``HH:MM:SS`` with up to two decimal places when fractional."""
    centis = int(round(total_seconds * 100))
    whole, centi = divmod(centis, 100)
    hours, rest = divmod(whole, 3600)
    minutes, seconds = divmod(rest, 60)
    result = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if centi:
        result += f".{centi:02d}".rstrip("0")
    return result


def add_timespans(first: str, second: str) -> str:
    return seconds_to_timespan(timespan_to_seconds(first) + timespan_to_seconds(second))


# ---------------------------------------------------------------------------
# Termination finalizer
# ---------------------------------------------------------------------------

def finalize_on_terminate(
    tree: DataModelTree,
    settings: RuntimeSettings,
    starting_data: dict[str, Any],
) -> None:
    """Derive the final lesson status and accumulate total time.

    - ``not attempted`` becomes ``completed``
    - normal mode with credit and mastery override: ``passed``/``failed``
      from ``score.raw`` against ``student_data.mastery_score``
    - browse mode with no status loaded by the LMS: ``browsed``
    """
    original_status = tree.peek("cmi.core.lesson_status")
    if original_status == "not attempted":
        tree.poke("cmi.core.lesson_status", "completed")

    lesson_mode = tree.peek("cmi.core.lesson_mode")
    if lesson_mode == "normal":
        if tree.peek("cmi.core.credit") == "credit" and settings.scorm12.mastery_override:
            mastery = tree.peek("cmi.student_data.mastery_score") or ""
            raw = tree.peek("cmi.core.score.raw") or ""
            if mastery != "" and raw != "":
                try:
                    passed = float(raw) >= float(mastery)
                except ValueError:
                    logger.warning("Cannot compare score %r with mastery %r", raw, mastery)
                else:
                    tree.poke("cmi.core.lesson_status", "passed" if passed else "failed")
    elif lesson_mode == "browse":
        loaded_status = (
            starting_data.get("cmi", {}).get("core", {}).get("lesson_status", "")
        )
        if not loaded_status and original_status == "not attempted":
            tree.poke("cmi.core.lesson_status", "browsed")

    total_time = tree.peek("cmi.core.total_time") or ""
    session_time = tree.peek("cmi.core.session_time") or ""
    tree.poke("cmi.core.total_time", add_timespans(total_time, session_time))
