"""Run-time API session: lifecycle state machine and public operations.

One ``RuntimeSession`` models one learner session against one data model
tree.  Every fallible operation returns a success flag (or the read value)
instead of raising; failures are observed through ``get_last_error`` and
the error string lookups.

Usage::

    session = RuntimeSession(variant, settings)
    session.initialize()
    session.set_value("cmi.core.score.raw", "80")
    session.commit()
    session.terminate()
"""

from __future__ import annotations

import json
import threading
from collections.abc import Mapping
from typing import Any

from scorm_runtime.cmi.resolver import PathResolver
from scorm_runtime.cmi.tree import DataModelTree
from scorm_runtime.commit.bridge import CommitBridge
from scorm_runtime.commit.scheduler import CommitScheduler
from scorm_runtime.commit.serializer import render_tree
from scorm_runtime.commit.transport import HttpTransport
from scorm_runtime.core.clock import ITimerLoop
from scorm_runtime.core.config import RuntimeSettings
from scorm_runtime.core.enums import LogLevel, ResolveMode, SessionState
from scorm_runtime.core.errors import DataModelError, StateError
from scorm_runtime.core.interfaces import ITransport
from scorm_runtime.core.models import CommitResult
from scorm_runtime.event_bus.listeners import ListenerBus, ListenerCallback
from scorm_runtime.observability.logger import ApiLogger

from .error_channel import ErrorChannel
from .variant import RuntimeVariant

SCORM_TRUE = "true"
SCORM_FALSE = "false"


def to_token(succeeded: bool) -> str:
    """SCORM string form of a success flag."""
    return SCORM_TRUE if succeeded else SCORM_FALSE


def coerce_value(value: Any) -> str:
    """CMI values are character strings."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value if isinstance(value, str) else str(value)


class RuntimeSession:
    """One learner session against one data model tree.

    A session built without a transport creates (and owns) an
    ``HttpTransport`` when a commit URL is configured; ``close`` releases it
    and drops any pending autocommit.  Use the session as a context manager
    to close it on exit.
    """

    def __init__(
        self,
        variant: RuntimeVariant,
        settings: RuntimeSettings | None = None,
        *,
        transport: ITransport | None = None,
        timer_loop: ITimerLoop | None = None,
        session_id: str | None = None,
    ) -> None:
        self.variant = variant
        self.settings = settings or RuntimeSettings()
        self.names = variant.operation_names
        self.codes = variant.error_codes
        self.state = SessionState.NOT_INITIALIZED
        self.starting_data: dict[str, Any] = {}

        self.api_log = ApiLogger(
            self.settings.observability.log_level, session_id=session_id
        )
        self.errors = ErrorChannel(self.codes, self.api_log)
        self.tree: DataModelTree = variant.build_tree()
        self.listeners = ListenerBus()

        self._resolver = self._build_resolver()

        self._owned_transport: HttpTransport | None = None
        if transport is None and self.settings.commit.url:
            transport = self._owned_transport = HttpTransport(
                self.settings.commit.timeout_seconds,
                general_error_code=self.codes.general,
            )
        self._bridge = CommitBridge(
            self.settings,
            transport,
            general_error_code=self.codes.general,
            finalizer=variant.finalizer,
        )
        self._scheduler = CommitScheduler(self._scheduled_commit, loop=timer_loop)
        self._lock = threading.RLock()

    def _build_resolver(self) -> PathResolver:
        return PathResolver(
            self.tree,
            self.errors,
            child_factory=self.variant.child_factory,
            cross_field_validator=self.variant.cross_field_validator,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def session_id(self) -> str:
        return self.api_log.session_id

    def is_initialized(self) -> bool:
        return self.state is SessionState.INITIALIZED

    def is_not_initialized(self) -> bool:
        return self.state is SessionState.NOT_INITIALIZED

    def is_terminated(self) -> bool:
        return self.state is SessionState.TERMINATED

    @property
    def scheduler(self) -> CommitScheduler:
        return self._scheduler

    @property
    def last_commit_payload(self) -> dict[str, Any] | list[str] | None:
        return self._bridge.last_payload

    def _check_state(
        self,
        check_terminated: bool,
        before_init_error: int,
        after_term_error: int,
    ) -> bool:
        try:
            self._require_state(check_terminated, before_init_error, after_term_error)
        except StateError as exc:
            self.errors.throw(exc.code, exc.message)
            return False
        return True

    def _require_state(
        self,
        check_terminated: bool,
        before_init_error: int,
        after_term_error: int,
    ) -> None:
        if self.is_not_initialized():
            raise StateError(before_init_error)
        if check_terminated and self.is_terminated():
            raise StateError(after_term_error)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(
        self,
        initialize_message: str | None = None,
        termination_message: str | None = None,
    ) -> bool:
        with self._lock:
            name = self.names.initialize
            succeeded = False

            if self.is_initialized():
                self.errors.throw(self.codes.initialized, initialize_message)
            elif self.is_terminated():
                self.errors.throw(self.codes.terminated, termination_message)
            else:
                self.tree.initialize()
                self.state = SessionState.INITIALIZED
                self.errors.clear(True)
                succeeded = True
                self.listeners.notify(name)

            self.api_log.log(name, None, f"returned: {to_token(succeeded)}")
            self.errors.clear(succeeded)
            return succeeded

    def terminate(self, check_terminated: bool = True) -> bool:
        """Run the final commit and move to TERMINATED.

        The transition happens even when the final commit fails; the
        transport's error code is then left in the register.
        """
        with self._lock:
            name = self.names.terminate
            succeeded = False

            if self._check_state(
                check_terminated,
                self.codes.termination_before_init,
                self.codes.multiple_termination,
            ):
                self._scheduler.cancel()
                result = self._store(terminating=True)
                self.state = SessionState.TERMINATED
                succeeded = self._record_commit(result)
                self.listeners.notify(name)

            self.api_log.log(name, None, f"returned: {to_token(succeeded)}")
            self.errors.clear(succeeded)
            return succeeded

    # ------------------------------------------------------------------
    # Data access
    # ------------------------------------------------------------------

    def get_value(self, element: str, check_terminated: bool = True) -> str:
        with self._lock:
            name = self.names.get_value
            succeeded = False
            value = ""

            if self._check_state(
                check_terminated,
                self.codes.retrieve_before_init,
                self.codes.retrieve_after_term,
            ):
                succeeded, value = self._resolver.dispatch(
                    element, ResolveMode.GET, operation=name
                )
                self.listeners.notify(name, element)

            self.api_log.log(name, element, f"returned: {value}")
            self.errors.clear(succeeded)
            return value

    def set_value(
        self, element: str, value: Any, check_terminated: bool = True
    ) -> bool:
        with self._lock:
            name = self.names.set_value
            value = coerce_value(value)
            succeeded = False

            if self._check_state(
                check_terminated,
                self.codes.store_before_init,
                self.codes.store_after_term,
            ):
                succeeded, _ = self._resolver.dispatch(
                    element, ResolveMode.SET, value, operation=name
                )
                self.listeners.notify(name, element, value)

            if succeeded and self.settings.autocommit.enabled:
                self._scheduler.arm(self.settings.autocommit_delay_seconds)

            if not succeeded:
                self.api_log.log(
                    name,
                    element,
                    f"There was an error setting the value for: {element}, value of: {value}",
                    LogLevel.WARNING,
                )
            self.api_log.log(name, element, f"{value}: result: {to_token(succeeded)}")
            self.errors.clear(succeeded)
            return succeeded

    def commit(self, check_terminated: bool = True) -> bool:
        """Cancel any pending autocommit, then commit now."""
        with self._lock:
            self._scheduler.cancel()
            name = self.names.commit
            succeeded = False

            if self._check_state(
                check_terminated,
                self.codes.commit_before_init,
                self.codes.commit_after_term,
            ):
                result = self._store(terminating=False)
                succeeded = self._record_commit(result)
                self.api_log.log(
                    name, "HttpRequest", f"Result: {to_token(succeeded)}", LogLevel.DEBUG
                )
                self.listeners.notify(name)

            self.api_log.log(name, None, f"returned: {to_token(succeeded)}")
            self.errors.clear(succeeded)
            return succeeded

    def clear_scheduled_commit(self) -> None:
        with self._lock:
            self._scheduler.cancel()

    def _scheduled_commit(self) -> None:
        self.commit()

    def _store(self, terminating: bool) -> CommitResult:
        return self._bridge.store(self.tree, terminating, self.starting_data)

    def _record_commit(self, result: CommitResult) -> bool:
        if result.error_code > 0:
            self.errors.throw(result.error_code)
            return False
        if not result.result:
            self.errors.throw(self.codes.general)
            return False
        return True

    # ------------------------------------------------------------------
    # Error lookups
    # ------------------------------------------------------------------

    def get_last_error(self) -> str:
        with self._lock:
            name = self.names.get_last_error
            value = self.errors.last_error
            self.listeners.notify(name)
            self.api_log.log(name, None, f"returned: {value}")
            return value

    def get_error_string(self, code: int | str | None) -> str:
        with self._lock:
            name = self.names.get_error_string
            value = self.errors.error_string(code)
            if code is not None and code != "":
                self.listeners.notify(name)
            self.api_log.log(name, None, f"returned: {value}")
            return value

    def get_diagnostic(self, code: int | str | None) -> str:
        with self._lock:
            name = self.names.get_diagnostic
            value = self.errors.diagnostic(code)
            if code is not None and code != "":
                self.listeners.notify(name)
            self.api_log.log(name, None, f"returned: {value}")
            return value

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def on(self, pattern: str, callback: ListenerCallback | None) -> None:
        with self._lock:
            self.listeners.on(pattern, callback)

    # ------------------------------------------------------------------
    # Bulk load / export
    # ------------------------------------------------------------------

    def load_from_json(
        self, data: Mapping[str, Any], root: str | None = None
    ) -> None:
        """Hydrate the tree before ``initialize``.

        Called after initialization this only logs a warning.  Entries the
        data model rejects are logged and skipped.
        """
        with self._lock:
            if not self.is_not_initialized():
                self.api_log.log(
                    "loadFromJSON",
                    None,
                    "load_from_json can only be called before initialize",
                    LogLevel.WARNING,
                )
                return

            root = root or self.tree.root_name
            if root == self.tree.root_name:
                self.starting_data = {root: dict(data)}
            self._load(data, root)

    def _load(self, data: Mapping[str, Any], prefix: str) -> None:
        for key, value in data.items():
            if value is None or value == "":
                continue
            path = f"{prefix}.{key}"

            if isinstance(value, Mapping) and "childArray" in value:
                value = value["childArray"]

            if isinstance(value, list):
                for index, item in enumerate(value):
                    if isinstance(item, Mapping):
                        self._load(item, f"{path}.{index}")
            elif isinstance(value, Mapping):
                self._load(value, path)
            else:
                try:
                    self._resolver.resolve(
                        path,
                        ResolveMode.SET,
                        coerce_value(value),
                        operation="loadFromJSON",
                    )
                except DataModelError as exc:
                    self.api_log.log(
                        "loadFromJSON", path, f"skipped: {exc}", LogLevel.WARNING
                    )

    def export_to_json_object(self) -> dict[str, Any]:
        with self._lock:
            return render_tree(self.tree)

    def export_to_json_string(self) -> str:
        return json.dumps(self.export_to_json_object())

    def replace_tree(self, tree: DataModelTree) -> None:
        """Adopt another session's data model tree in place of this one.

        The tree is shared, not copied.  Lifecycle state, listeners and the
        error register stay with this session.
        """
        with self._lock:
            self.tree = tree
            self._resolver = self._build_resolver()

    # ------------------------------------------------------------------
    # Disposal
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Cancel any pending autocommit and close an owned transport.

        Does not commit or terminate.  Safe to call more than once.
        """
        with self._lock:
            self._scheduler.cancel()
            if self._owned_transport is not None:
                self._owned_transport.close()
                self._owned_transport = None

    def __enter__(self) -> RuntimeSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
