"""SCORM 1.2 error codes, keyword values and value formats."""

from __future__ import annotations

from scorm_runtime.core.models import ErrorCodes, ErrorDescription, OperationNames

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------

ERROR_DESCRIPTIONS: dict[str, ErrorDescription] = {
    "0": ErrorDescription(basic="No Error", detail="No Error"),
    "101": ErrorDescription(
        basic="General Exception",
        detail="No specific error code exists to describe the error. "
        "Use LMSGetDiagnostic for more information.",
    ),
    "201": ErrorDescription(
        basic="Invalid argument error",
        detail="Indicates that an argument represents an invalid data model "
        "element or is otherwise incorrect.",
    ),
    "202": ErrorDescription(
        basic="Element cannot have children",
        detail='Indicates that LMSGetValue was called with a data model element '
        'name that ends in "_children" for a data model element that does not '
        'support the "_children" suffix.',
    ),
    "203": ErrorDescription(
        basic="Element not an array - cannot have count",
        detail='Indicates that LMSGetValue was called with a data model element '
        'name that ends in "_count" for a data model element that does not '
        'support the "_count" suffix.',
    ),
    "301": ErrorDescription(
        basic="Not initialized",
        detail="Indicates that an API call was made before the call to "
        "LMSInitialize.",
    ),
    "401": ErrorDescription(
        basic="Not implemented error",
        detail="The data model element indicated in a call to LMSGetValue or "
        "LMSSetValue is valid, but was not implemented by this LMS. SCORM 1.2 "
        "defines a set of data model elements as being optional for an LMS to "
        "implement.",
    ),
    "402": ErrorDescription(
        basic="Invalid set value, element is a keyword",
        detail='Indicates that LMSSetValue was called on a data model element '
        'that represents a keyword (elements that end in "_children" and '
        '"_count").',
    ),
    "403": ErrorDescription(
        basic="Element is read only.",
        detail="LMSSetValue was called with a data model element that can only "
        "be read.",
    ),
    "404": ErrorDescription(
        basic="Element is write only",
        detail="LMSGetValue was called on a data model element that can only "
        "be written to.",
    ),
    "405": ErrorDescription(
        basic="Incorrect Data Type",
        detail="LMSSetValue was called with a value that is not consistent "
        "with the data format of the supplied data model element.",
    ),
}

ERROR_CODES = ErrorCodes(
    general=101,
    initialized=101,
    terminated=101,
    termination_before_init=301,
    multiple_termination=101,
    retrieve_before_init=301,
    retrieve_after_term=101,
    store_before_init=301,
    store_after_term=101,
    commit_before_init=301,
    commit_after_term=101,
    children_error=202,
    count_error=203,
    undefined_data_model=101,  # reported as a general exception in 1.2
    value_not_initialized=301,
    invalid_set_value=402,
    read_only_element=403,
    write_only_element=404,
    type_mismatch=405,
    value_out_of_range=405,
    descriptions=ERROR_DESCRIPTIONS,
)

OPERATION_NAMES = OperationNames(
    initialize="LMSInitialize",
    terminate="LMSFinish",
    get_value="LMSGetValue",
    set_value="LMSSetValue",
    commit="LMSCommit",
    get_last_error="LMSGetLastError",
    get_error_string="LMSGetErrorString",
    get_diagnostic="LMSGetDiagnostic",
)

# ---------------------------------------------------------------------------
# Keyword values
# ---------------------------------------------------------------------------

VERSION = "3.4"

CMI_CHILDREN = (
    "core,suspend_data,launch_data,comments,objectives,student_data,"
    "student_preference,interactions"
)
CORE_CHILDREN = (
    "student_id,student_name,lesson_location,credit,lesson_status,entry,"
    "score,total_time,lesson_mode,exit,session_time"
)
SCORE_CHILDREN = "raw,min,max"
OBJECTIVES_CHILDREN = "id,score,status"
CORRECT_RESPONSES_CHILDREN = "pattern"
OBJECTIVE_IDS_CHILDREN = "id"
STUDENT_DATA_CHILDREN = "mastery_score,max_time_allowed,time_limit_action"
STUDENT_PREFERENCE_CHILDREN = "audio,language,speed,text"
INTERACTIONS_CHILDREN = (
    "id,objectives,time,type,correct_responses,weighting,student_response,"
    "result,latency"
)

# ---------------------------------------------------------------------------
# Value formats
# ---------------------------------------------------------------------------

CMI_TIME = r"(?:[01]\d|2[0123]):(?:[012345]\d):(?:[012345]\d)"
CMI_TIMESPAN = r"([0-9]{2,}):([0-9]{2}):([0-9]{2})(\.[0-9]{1,2})?"
CMI_INTEGER = r"\d+"
CMI_SINTEGER = r"-?([0-9]+)"
CMI_DECIMAL = r"-?([0-9]{0,3})(\.[0-9]*)?"
CMI_RESULT = r"(correct|wrong|unanticipated|neutral|([0-9]{0,3})?(\.[0-9]*)?)"

# "not attempted" is only loadable; SCOs cannot set it on cmi.core.lesson_status
LESSON_STATUS = ("passed", "completed", "failed", "incomplete", "browsed", "not attempted")
OBJECTIVE_STATUS = LESSON_STATUS
EXIT = ("time-out", "suspend", "logout", "")
INTERACTION_TYPE = (
    "true-false",
    "choice",
    "fill-in",
    "matching",
    "performance",
    "sequencing",
    "likert",
    "numeric",
)

SCORE_RANGE = (0, 100)
AUDIO_RANGE = (-1, 100)
SPEED_RANGE = (-100, 100)
TEXT_RANGE = (-1, 1)
WEIGHTING_RANGE = (-100, 100)
