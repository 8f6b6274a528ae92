"""Last-error register and message lookup for one session."""

from __future__ import annotations

from scorm_runtime.core.enums import LogLevel
from scorm_runtime.core.models import ErrorCodes
from scorm_runtime.observability.logger import ApiLogger


class ErrorChannel:
    """Holds the code of the most recent failure as a string.

    Reads (``last_error``, ``error_string``, ``diagnostic``) never change the
    register; only ``throw`` and a successful ``clear`` do.
    """

    def __init__(self, codes: ErrorCodes, api_log: ApiLogger) -> None:
        self._codes = codes
        self._api_log = api_log
        self._last_error = "0"
        self._last_message = ""

    @property
    def codes(self) -> ErrorCodes:
        return self._codes

    @property
    def last_error(self) -> str:
        return self._last_error

    @property
    def last_message(self) -> str:
        """Message recorded with the current error, empty when clear."""
        return self._last_message

    def throw(self, code: int, message: str | None = None) -> None:
        if not message:
            message = self._codes.describe(code).basic
        self._api_log.log("throwError", None, f"{code}: {message}", LogLevel.ERROR)
        self._last_error = str(code)
        self._last_message = message

    def clear(self, succeeded: bool) -> None:
        if succeeded:
            self._last_error = "0"
            self._last_message = ""

    def error_string(self, code: int | str | None) -> str:
        if code is None or code == "":
            return ""
        return self._codes.describe(code).basic

    def diagnostic(self, code: int | str | None) -> str:
        if code is None or code == "":
            return ""
        return self._codes.describe(code).detail
