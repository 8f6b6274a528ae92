"""Commit pipeline: finalize, render, and hand the payload to the transport."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from scorm_runtime.cmi.tree import DataModelTree
from scorm_runtime.core.config import RuntimeSettings
from scorm_runtime.core.interfaces import ITransport
from scorm_runtime.core.models import CommitResult

from .serializer import render_payload

if TYPE_CHECKING:
    from scorm_runtime.api.variant import TerminationFinalizer

logger = logging.getLogger(__name__)


class CommitBridge:
    """Renders the tree and forwards it to the configured destination.

    With no destination configured the commit is a local success; the
    payload stays available through ``last_payload`` for inspection.
    """

    def __init__(
        self,
        settings: RuntimeSettings,
        transport: ITransport | None,
        *,
        general_error_code: int,
        finalizer: TerminationFinalizer | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._general_error_code = general_error_code
        self._finalizer = finalizer
        self.last_payload: dict[str, Any] | list[str] | None = None

    def store(
        self,
        tree: DataModelTree,
        terminating: bool,
        starting_data: dict[str, Any],
    ) -> CommitResult:
        if terminating and self._finalizer is not None:
            self._finalizer(tree, self._settings, starting_data)

        payload = render_payload(tree, self._settings.commit.format)
        self.last_payload = payload
        destination = self._settings.commit.url

        if not destination or self._transport is None:
            logger.info(
                "Commit (terminated: %s) with no destination configured",
                "yes" if terminating else "no",
            )
            logger.debug("Commit payload: %s", payload)
            return CommitResult(result=True)

        logger.debug(
            "Commit (terminated: %s) to %s: %s",
            "yes" if terminating else "no",
            destination,
            payload,
        )
        try:
            return self._transport.send(destination, payload)
        except Exception:
            logger.exception("Commit transport raised for %s", destination)
            return CommitResult(result=False, error_code=self._general_error_code)
