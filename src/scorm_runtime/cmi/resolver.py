"""Dotted element path resolution and dispatch into the data model tree.

``PathResolver.resolve`` walks the tree one segment at a time and raises a
``DataModelError`` subclass on any failure.  ``PathResolver.dispatch`` is the
boundary used by the session: it converts those errors into the error
channel's register and a boolean result.

Collection children are grown lazily during ``set``: an index equal to the
current length builds a new child through the variant's child factory.
New children are appended only after the final leaf accepts the value, so a
rejected write leaves every collection unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from scorm_runtime.api.error_channel import ErrorChannel
from scorm_runtime.core.enums import Access, NodeKind, ResolveMode, ValidationFailure
from scorm_runtime.core.errors import (
    DataModelError,
    GeneralError,
    HookNotImplementedError,
    NotFoundError,
    NotInitializedError,
    ReadOnlyError,
    ValidationError,
    WriteOnlyError,
)
from scorm_runtime.core.models import ErrorCodes

from .schema import CHILDREN_KEYWORD, COUNT_KEYWORD
from .tree import CollectionNode, CompositeNode, DataModelTree, Node, ScalarNode

if TYPE_CHECKING:
    from scorm_runtime.api.variant import ChildFactory, CrossFieldValidator

logger = logging.getLogger(__name__)

_PendingAppend = tuple[CollectionNode, int, CompositeNode]


class PathResolver:
    def __init__(
        self,
        tree: DataModelTree,
        errors: ErrorChannel,
        *,
        child_factory: ChildFactory | None = None,
        cross_field_validator: CrossFieldValidator | None = None,
    ) -> None:
        self._tree = tree
        self._errors = errors
        self._codes: ErrorCodes = errors.codes
        self._child_factory = child_factory
        self._cross_field_validator = cross_field_validator

    # ------------------------------------------------------------------
    # Dispatcher boundary
    # ------------------------------------------------------------------

    def dispatch(
        self,
        path: str,
        mode: ResolveMode,
        value: str | None = None,
        *,
        operation: str,
    ) -> tuple[bool, str]:
        """Resolve ``path`` and record any failure in the error channel."""
        try:
            return True, self.resolve(path, mode, value, operation=operation)
        except DataModelError as exc:
            self._errors.throw(exc.code, exc.message)
        except HookNotImplementedError:
            raise
        except Exception as exc:
            logger.exception("Unexpected failure resolving %s (%s)", path, mode.value)
            fault = GeneralError(self._codes.general, f"Unexpected failure: {exc}")
            self._errors.throw(fault.code, fault.message)
        return False, ""

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(
        self,
        path: str,
        mode: ResolveMode,
        value: str | None = None,
        *,
        operation: str | None = None,
    ) -> str:
        """Walk ``path`` and read or write the addressed element.

        An empty path is a no-op that returns an empty string.
        """
        if not path:
            return ""
        operation = operation or mode.value
        if mode is ResolveMode.SET and value is None:
            value = ""

        segments = path.split(".")
        if segments[0] != self._tree.root_name or len(segments) < 2:
            raise self._undefined(operation, path)

        node: Node = self._tree.root
        pending: list[_PendingAppend] = []
        last = len(segments) - 1

        for position in range(1, len(segments)):
            segment = segments[position]
            final = position == last
            collection_path = ".".join(segments[:position])

            if node.kind is NodeKind.COMPOSITE:
                if final:
                    return self._finish_composite(
                        node, segment, mode, value, path, operation, pending
                    )
                child = node.get(segment)
                if child is None:
                    raise self._undefined(operation, path)
                node = child

            elif node.kind is NodeKind.COLLECTION:
                if final:
                    return self._finish_collection(node, segment, mode, path, operation)
                node = self._descend_collection(
                    node, segment, mode, collection_path, path, operation, pending
                )

            else:
                raise self._scalar_descent(segment, final, mode, path, operation)

        raise self._undefined(operation, path)

    # ------------------------------------------------------------------
    # Per-kind steps
    # ------------------------------------------------------------------

    def _descend_collection(
        self,
        node: CollectionNode,
        segment: str,
        mode: ResolveMode,
        collection_path: str,
        path: str,
        operation: str,
        pending: list[_PendingAppend],
    ) -> CompositeNode:
        if not segment.isdigit():
            raise self._undefined(operation, path)
        index = int(segment)
        if index < len(node):
            return node.items[index]

        if mode is ResolveMode.GET:
            raise NotInitializedError(
                self._codes.value_not_initialized,
                f"The data model element passed to {operation} ({path}) "
                "has not been initialized.",
            )
        if index > len(node):
            raise NotFoundError(
                self._codes.undefined_data_model,
                f"The data model element passed to {operation} ({path}) "
                f"skips an index: {collection_path} has {len(node)} "
                "element(s) and can only grow by one.",
            )

        if self._child_factory is None:
            raise HookNotImplementedError(
                "No child factory configured for collection growth"
            )
        child = self._child_factory(collection_path, node)
        if child is None:
            raise self._undefined(operation, path)
        pending.append((node, index, child))
        return child

    def _finish_composite(
        self,
        node: CompositeNode,
        segment: str,
        mode: ResolveMode,
        value: str | None,
        path: str,
        operation: str,
        pending: list[_PendingAppend],
    ) -> str:
        keywords = node.spec.keywords()
        if segment in keywords:
            if mode is ResolveMode.SET:
                raise self._read_only(path)
            return keywords[segment]

        child = node.get(segment)
        if child is None:
            if mode is ResolveMode.GET and segment == CHILDREN_KEYWORD:
                raise NotFoundError(self._codes.children_error)
            if mode is ResolveMode.GET and segment == COUNT_KEYWORD:
                raise NotFoundError(self._codes.count_error)
            raise self._undefined(operation, path)
        if child.kind is not NodeKind.SCALAR:
            raise self._undefined(operation, path)

        if mode is ResolveMode.GET:
            return self._read_leaf(child, path, operation)

        self._write_leaf(child, path, value or "")
        for collection, index, new_child in pending:
            collection.append(index, new_child)
        return child.value

    def _finish_collection(
        self,
        node: CollectionNode,
        segment: str,
        mode: ResolveMode,
        path: str,
        operation: str,
    ) -> str:
        if segment == COUNT_KEYWORD:
            if mode is ResolveMode.SET:
                raise self._read_only(path)
            return str(len(node))
        if segment == CHILDREN_KEYWORD and node.spec.children is not None:
            if mode is ResolveMode.SET:
                raise self._read_only(path)
            return node.spec.children
        raise self._undefined(operation, path)

    def _scalar_descent(
        self,
        segment: str,
        final: bool,
        mode: ResolveMode,
        path: str,
        operation: str,
    ) -> DataModelError:
        if final and mode is ResolveMode.GET:
            if segment == CHILDREN_KEYWORD:
                return NotFoundError(self._codes.children_error)
            if segment == COUNT_KEYWORD:
                return NotFoundError(self._codes.count_error)
        return self._undefined(operation, path)

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def _read_leaf(self, leaf: ScalarNode, path: str, operation: str) -> str:
        if leaf.spec.access is Access.WRITE_ONLY:
            raise WriteOnlyError(self._codes.write_only_element)
        if not leaf.assigned and leaf.spec.default is None:
            raise NotInitializedError(
                self._codes.value_not_initialized,
                f"The data model element passed to {operation} ({path}) "
                "has not been initialized.",
            )
        return leaf.value

    def _write_leaf(self, leaf: ScalarNode, path: str, value: str) -> None:
        if leaf.spec.access is Access.READ_ONLY and self._tree.initialized:
            raise self._read_only(path)

        if leaf.spec.validator is not None:
            outcome = leaf.spec.validator.validate(value)
            if not outcome.accepted:
                raise ValidationError(self._failure_code(outcome.failure), outcome.message)

        if self._cross_field_validator is not None:
            outcome = self._cross_field_validator(self._tree, path, value)
            if not outcome.accepted:
                raise ValidationError(self._failure_code(outcome.failure), outcome.message)

        leaf.assign(value)

    # ------------------------------------------------------------------
    # Error construction
    # ------------------------------------------------------------------

    def _failure_code(self, failure: ValidationFailure | None) -> int:
        if failure is ValidationFailure.VALUE_OUT_OF_RANGE:
            return self._codes.value_out_of_range
        if failure is ValidationFailure.INVALID_SET_VALUE:
            return self._codes.invalid_set_value
        if failure is ValidationFailure.TYPE_MISMATCH:
            return self._codes.type_mismatch
        return self._codes.general

    def _undefined(self, operation: str, path: str) -> NotFoundError:
        return NotFoundError(
            self._codes.undefined_data_model,
            f"The data model element passed to {operation} ({path}) "
            "is not a valid SCORM data model element.",
        )

    def _read_only(self, path: str) -> ReadOnlyError:
        return ReadOnlyError(
            self._codes.read_only_element, f"{path} is read only"
        )

