"""Synchronous listener bus for API operation notifications.

Callbacks are keyed on ``(operation, element)`` and fired in registration
order.  Unlike a message bus, callback faults are not isolated: an
exception raised by a listener propagates to the API call that triggered it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

ListenerCallback = Callable[[str | None, Any], Any]


@dataclass(frozen=True)
class ListenerRegistration:
    """One ``operation[.element]`` token bound to a callback."""

    operation: str
    element: str | None
    callback: ListenerCallback

    def matches(self, operation: str, element: str | None) -> bool:
        if self.operation != operation:
            return False
        return self.element is None or self.element == element


class ListenerBus:
    """Per-session list of listener registrations."""

    def __init__(self) -> None:
        self._registrations: list[ListenerRegistration] = []
        self._fired: int = 0

    def on(self, pattern: str, callback: ListenerCallback | None) -> None:
        """Register ``callback`` for every space-separated token in ``pattern``.

        A token is ``Operation`` or ``Operation.element.path``; an element
        filter matches only that exact path.
        """
        if callback is None:
            return

        for token in pattern.split():
            operation, _, element = token.partition(".")
            if not operation:
                continue
            self._registrations.append(
                ListenerRegistration(
                    operation=operation,
                    element=element or None,
                    callback=callback,
                )
            )
            logger.debug("Listener registered: %s", token)

    def notify(
        self,
        operation: str,
        element: str | None = None,
        value: Any = None,
    ) -> int:
        """Fire every matching registration; returns how many fired."""
        fired = 0
        for registration in list(self._registrations):
            if registration.matches(operation, element):
                registration.callback(element, value)
                fired += 1
        self._fired += fired
        return fired

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def registrations(self) -> list[ListenerRegistration]:
        return list(self._registrations)

    @property
    def callbacks_fired(self) -> int:
        """Total callbacks invoked over the bus's lifetime."""
        return self._fired

    def clear(self) -> None:
        self._registrations.clear()
