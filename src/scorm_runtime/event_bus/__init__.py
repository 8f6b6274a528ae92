"""Synchronous listener bus for run-time API calls."""

from scorm_runtime.event_bus.listeners import ListenerBus, ListenerRegistration

__all__ = ["ListenerBus", "ListenerRegistration"]
