"""SCORM 1.2 run-time API.

Binds the CMI 1.2 schema, error codes and hooks into a ``RuntimeVariant``
and exposes the ``LMS*`` call surface a SCO expects.  Every call returns a
SCORM string ("true"/"false" or the element value).

Usage::

    api = Scorm12API(load_settings("scorm.toml"))
    api.load_from_json({"core": {"student_id": "s-42"}})
    api.LMSInitialize("")
    api.LMSSetValue("cmi.core.lesson_status", "completed")
    api.LMSFinish("")
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from scorm_runtime.api.session import RuntimeSession, to_token
from scorm_runtime.api.variant import RuntimeVariant
from scorm_runtime.cmi.tree import DataModelTree
from scorm_runtime.core.clock import ITimerLoop
from scorm_runtime.core.config import RuntimeSettings
from scorm_runtime.core.interfaces import ITransport
from scorm_runtime.event_bus.listeners import ListenerCallback

from .constants import ERROR_CODES, OPERATION_NAMES
from .hooks import finalize_on_terminate, validate_cross_field
from .schema import CMI, child_factory

SCORM12_VARIANT = RuntimeVariant(
    name="scorm12",
    error_codes=ERROR_CODES,
    schema=CMI,
    operation_names=OPERATION_NAMES,
    child_factory=child_factory,
    cross_field_validator=validate_cross_field,
    finalizer=finalize_on_terminate,
)

ALREADY_INITIALIZED_MESSAGE = "LMS was already initialized!"
ALREADY_FINISHED_MESSAGE = "LMS is already finished!"


class Scorm12API:
    """SCORM 1.2 facade over one ``RuntimeSession``."""

    def __init__(
        self,
        settings: RuntimeSettings | None = None,
        *,
        transport: ITransport | None = None,
        timer_loop: ITimerLoop | None = None,
        session_id: str | None = None,
    ) -> None:
        self.session = RuntimeSession(
            SCORM12_VARIANT,
            settings,
            transport=transport,
            timer_loop=timer_loop,
            session_id=session_id,
        )

    @property
    def tree(self) -> DataModelTree:
        return self.session.tree

    # ------------------------------------------------------------------
    # LMS call surface
    # ------------------------------------------------------------------

    def lms_initialize(self, parameter: str = "") -> str:
        return to_token(
            self.session.initialize(ALREADY_INITIALIZED_MESSAGE, ALREADY_FINISHED_MESSAGE)
        )

    def lms_finish(self, parameter: str = "") -> str:
        return to_token(self.session.terminate(check_terminated=True))

    def lms_get_value(self, element: str) -> str:
        return self.session.get_value(element, check_terminated=True)

    def lms_set_value(self, element: str, value: Any) -> str:
        return to_token(self.session.set_value(element, value, check_terminated=True))

    def lms_commit(self, parameter: str = "") -> str:
        return to_token(self.session.commit(check_terminated=True))

    def lms_get_last_error(self) -> str:
        return self.session.get_last_error()

    def lms_get_error_string(self, code: int | str | None) -> str:
        return self.session.get_error_string(code)

    def lms_get_diagnostic(self, code: int | str | None) -> str:
        return self.session.get_diagnostic(code)

    LMSInitialize = lms_initialize
    LMSFinish = lms_finish
    LMSGetValue = lms_get_value
    LMSSetValue = lms_set_value
    LMSCommit = lms_commit
    LMSGetLastError = lms_get_last_error
    LMSGetErrorString = lms_get_error_string
    LMSGetDiagnostic = lms_get_diagnostic

    # ------------------------------------------------------------------
    # Host-side helpers
    # ------------------------------------------------------------------

    def on(self, pattern: str, callback: ListenerCallback | None) -> None:
        self.session.on(pattern, callback)

    def load_from_json(self, data: Mapping[str, Any], root: str | None = None) -> None:
        self.session.load_from_json(data, root)

    def export_to_json_object(self) -> dict[str, Any]:
        return self.session.export_to_json_object()

    def export_to_json_string(self) -> str:
        return self.session.export_to_json_string()

    def replace_tree_from(self, other: Scorm12API) -> None:
        """Continue on ``other``'s data model, e.g. after the SCO is relaunched."""
        self.session.replace_tree(other.tree)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> Scorm12API:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
