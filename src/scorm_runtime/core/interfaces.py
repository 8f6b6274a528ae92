"""Protocol interfaces for the run-time engine's external collaborators."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .models import CommitResult


@runtime_checkable
class ITransport(Protocol):
    """Sends a rendered commit payload to a destination.

    Synchronous from the caller's point of view.
    """

    def send(self, destination: str, payload: dict[str, Any] | list[str]) -> CommitResult: ...
