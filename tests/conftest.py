"""Shared fixtures for the scorm-runtime test suite."""

from __future__ import annotations

from typing import Any

import pytest

from scorm_runtime.api.error_channel import ErrorChannel
from scorm_runtime.api.session import RuntimeSession
from scorm_runtime.api.variant import RuntimeVariant, schema_child_factory
from scorm_runtime.cmi.resolver import PathResolver
from scorm_runtime.cmi.tree import DataModelTree
from scorm_runtime.core.clock import ManualTimerLoop
from scorm_runtime.core.config import RuntimeSettings
from scorm_runtime.core.models import CommitResult
from scorm_runtime.observability.logger import ApiLogger
from scorm_runtime.variants.scorm12.api import Scorm12API
from scorm_runtime.variants.scorm12.constants import ERROR_CODES
from scorm_runtime.variants.scorm12.schema import CMI, child_factory

COMMIT_URL = "https://lms.test/commit"


class RecordingTransport:
    """In-memory transport that records payloads and replays canned results."""

    def __init__(self, *results: CommitResult) -> None:
        self._results = list(results)
        self.sent: list[tuple[str, Any]] = []

    def send(self, destination: str, payload: Any) -> CommitResult:
        self.sent.append((destination, payload))
        if self._results:
            return self._results.pop(0)
        return CommitResult(result=True)


# ---------------------------------------------------------------------------
# Settings / clock
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> RuntimeSettings:
    return RuntimeSettings()


@pytest.fixture
def remote_settings() -> RuntimeSettings:
    """Settings with a commit destination configured."""
    return RuntimeSettings(commit={"url": COMMIT_URL})


@pytest.fixture
def autocommit_settings() -> RuntimeSettings:
    return RuntimeSettings(
        commit={"url": COMMIT_URL},
        autocommit={"enabled": True, "interval_ms": 1000},
    )


@pytest.fixture
def manual_loop() -> ManualTimerLoop:
    return ManualTimerLoop()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

@pytest.fixture
def tree() -> DataModelTree:
    return DataModelTree("cmi", CMI)


@pytest.fixture
def error_channel() -> ErrorChannel:
    return ErrorChannel(ERROR_CODES, ApiLogger())


@pytest.fixture
def resolver(tree, error_channel) -> PathResolver:
    return PathResolver(tree, error_channel, child_factory=child_factory)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

@pytest.fixture
def generic_variant() -> RuntimeVariant:
    """CMI 1.2 schema with the engine's default operation names and no hooks."""
    return RuntimeVariant(
        name="generic",
        error_codes=ERROR_CODES,
        schema=CMI,
        child_factory=schema_child_factory,
    )


@pytest.fixture
def session(generic_variant, settings, manual_loop) -> RuntimeSession:
    return RuntimeSession(generic_variant, settings, timer_loop=manual_loop)


@pytest.fixture
def api(settings, manual_loop) -> Scorm12API:
    return Scorm12API(settings, timer_loop=manual_loop)


@pytest.fixture
def initialized_api(api) -> Scorm12API:
    assert api.LMSInitialize("") == "true"
    return api
