"""SCORM 1.2 CMI data model schema and collection child factory."""

from __future__ import annotations

import re

from scorm_runtime.cmi.schema import CollectionSpec, CompositeSpec, LeafSpec
from scorm_runtime.cmi.tree import CollectionNode, CompositeNode
from scorm_runtime.core.enums import Access
from scorm_runtime.validation.validators import (
    IdentifierValidator,
    NumberValidator,
    PatternValidator,
    TextValidator,
    VocabularyValidator,
)

from . import constants as c

RO = Access.READ_ONLY
WO = Access.WRITE_ONLY

# ---------------------------------------------------------------------------
# Shared validators
# ---------------------------------------------------------------------------

_string255 = TextValidator(255)
_string4096 = TextValidator(4096)
_identifier = IdentifierValidator(255)
_timespan = PatternValidator(c.CMI_TIMESPAN, "CMITimespan")
_score = NumberValidator(c.CMI_DECIMAL, *c.SCORE_RANGE, name="CMIDecimal")


def _score_spec() -> CompositeSpec:
    return CompositeSpec(
        fields={
            "raw": LeafSpec(_score),
            "min": LeafSpec(_score),
            "max": LeafSpec(_score),
        },
        children=c.SCORE_CHILDREN,
    )


# ---------------------------------------------------------------------------
# Collection items
# ---------------------------------------------------------------------------

OBJECTIVE = CompositeSpec(
    fields={
        "id": LeafSpec(_identifier),
        "score": _score_spec(),
        "status": LeafSpec(VocabularyValidator(c.OBJECTIVE_STATUS), default="not attempted"),
    }
)

INTERACTION_OBJECTIVE = CompositeSpec(
    fields={"id": LeafSpec(_identifier, WO)},
)

CORRECT_RESPONSE = CompositeSpec(
    fields={"pattern": LeafSpec(_string255, WO)},
)

INTERACTION = CompositeSpec(
    fields={
        "id": LeafSpec(_identifier, WO),
        "objectives": CollectionSpec(INTERACTION_OBJECTIVE, children=c.OBJECTIVE_IDS_CHILDREN),
        "time": LeafSpec(PatternValidator(c.CMI_TIME, "CMITime"), WO),
        "type": LeafSpec(VocabularyValidator(c.INTERACTION_TYPE), WO),
        "correct_responses": CollectionSpec(
            CORRECT_RESPONSE, children=c.CORRECT_RESPONSES_CHILDREN
        ),
        "weighting": LeafSpec(
            NumberValidator(c.CMI_DECIMAL, *c.WEIGHTING_RANGE, name="CMIDecimal"), WO
        ),
        "student_response": LeafSpec(_string255, WO),
        "result": LeafSpec(PatternValidator(c.CMI_RESULT, "CMIResult"), WO),
        "latency": LeafSpec(_timespan, WO),
    }
)

# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------

CORE = CompositeSpec(
    fields={
        "student_id": LeafSpec(access=RO),
        "student_name": LeafSpec(access=RO),
        "lesson_location": LeafSpec(_string255),
        "credit": LeafSpec(VocabularyValidator(("credit", "no-credit")), RO, default="credit"),
        "lesson_status": LeafSpec(VocabularyValidator(c.LESSON_STATUS), default="not attempted"),
        "entry": LeafSpec(VocabularyValidator(("ab-initio", "resume", "")), RO),
        "score": _score_spec(),
        "total_time": LeafSpec(_timespan, RO, default="0000:00:00"),
        "lesson_mode": LeafSpec(
            VocabularyValidator(("browse", "normal", "review")), RO, default="normal"
        ),
        "exit": LeafSpec(VocabularyValidator(c.EXIT), WO),
        "session_time": LeafSpec(_timespan, WO, default="00:00:00"),
    },
    children=c.CORE_CHILDREN,
)

STUDENT_DATA = CompositeSpec(
    fields={
        "mastery_score": LeafSpec(_score, RO),
        "max_time_allowed": LeafSpec(_timespan, RO),
        "time_limit_action": LeafSpec(access=RO),
    },
    children=c.STUDENT_DATA_CHILDREN,
)

STUDENT_PREFERENCE = CompositeSpec(
    fields={
        "audio": LeafSpec(NumberValidator(c.CMI_SINTEGER, *c.AUDIO_RANGE, name="CMISInteger")),
        "language": LeafSpec(_string255),
        "speed": LeafSpec(NumberValidator(c.CMI_SINTEGER, *c.SPEED_RANGE, name="CMISInteger")),
        "text": LeafSpec(NumberValidator(c.CMI_SINTEGER, *c.TEXT_RANGE, name="CMISInteger")),
    },
    children=c.STUDENT_PREFERENCE_CHILDREN,
)

CMI = CompositeSpec(
    fields={
        "suspend_data": LeafSpec(_string4096),
        "launch_data": LeafSpec(access=RO),
        "comments": LeafSpec(_string4096),
        "comments_from_lms": LeafSpec(access=RO),
        "core": CORE,
        "objectives": CollectionSpec(OBJECTIVE, children=c.OBJECTIVES_CHILDREN),
        "student_data": STUDENT_DATA,
        "student_preference": STUDENT_PREFERENCE,
        "interactions": CollectionSpec(INTERACTION, children=c.INTERACTIONS_CHILDREN),
    },
    children=c.CMI_CHILDREN,
    constants={"_version": c.VERSION},
)

# ---------------------------------------------------------------------------
# Child factory
# ---------------------------------------------------------------------------

_INDEX = re.compile(r"\.\d+(?=\.|$)")

COLLECTION_ITEMS: dict[str, CompositeSpec] = {
    "cmi.objectives": OBJECTIVE,
    "cmi.interactions": INTERACTION,
    "cmi.interactions.n.objectives": INTERACTION_OBJECTIVE,
    "cmi.interactions.n.correct_responses": CORRECT_RESPONSE,
}


def normalize_collection_path(collection_path: str) -> str:
    """``cmi.interactions.3.objectives`` -> ``cmi.interactions.n.objectives``."""
    return _INDEX.sub(".n", collection_path)


def child_factory(collection_path: str, collection: CollectionNode) -> CompositeNode | None:
    spec = COLLECTION_ITEMS.get(normalize_collection_path(collection_path))
    if spec is None:
        return None
    return CompositeNode(spec)
