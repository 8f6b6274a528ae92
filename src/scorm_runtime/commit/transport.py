"""HTTP transport for commit payloads.

Posts structured and flattened payloads as JSON, and params payloads as an
``application/x-www-form-urlencoded`` body with every key and value
percent-encoded.  The LMS is expected to answer with
``{"result": true|"true", "errorCode": <int>}``.

Usage::

    transport = HttpTransport(timeout_seconds=5.0, general_error_code=101)
    result = transport.send("https://lms.example.com/commit", payload)
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlencode

import httpx

from scorm_runtime.core.models import CommitResult

logger = logging.getLogger(__name__)

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def parse_commit_response(body: Any, general_error_code: int) -> CommitResult:
    """Interpret an LMS response body as a ``CommitResult``."""
    if not isinstance(body, dict):
        return CommitResult(result=False, error_code=general_error_code)

    raw_result = body.get("result")
    if isinstance(raw_result, str):
        result = raw_result.strip().lower() == "true"
    else:
        result = bool(raw_result)

    try:
        error_code = int(body.get("errorCode") or 0)
    except (TypeError, ValueError):
        error_code = general_error_code

    return CommitResult(result=result, error_code=error_code)


def encode_params(tokens: list[str]) -> str:
    """Form-encode ``key=value`` tokens, splitting each on its first ``=``."""
    pairs = []
    for token in tokens:
        key, _, value = token.partition("=")
        pairs.append((key, value))
    return urlencode(pairs)


class HttpTransport:
    """Synchronous commit transport backed by ``httpx.Client``."""

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        *,
        general_error_code: int = 101,
        client: httpx.Client | None = None,
    ) -> None:
        self._general_error_code = general_error_code
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout_seconds))
        self.sent_count = 0
        self.error_count = 0

    def send(self, destination: str, payload: dict[str, Any] | list[str]) -> CommitResult:
        try:
            if isinstance(payload, list):
                resp = self._client.post(
                    destination, content=encode_params(payload), headers=_FORM_HEADERS
                )
            else:
                resp = self._client.post(destination, json=payload)
            resp.raise_for_status()
            body = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            self.error_count += 1
            logger.warning("Commit to %s failed: %s", destination, exc)
            return CommitResult(result=False, error_code=self._general_error_code)

        self.sent_count += 1
        return parse_commit_response(body, self._general_error_code)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
