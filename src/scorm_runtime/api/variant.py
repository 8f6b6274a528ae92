"""Capability set that parameterizes the generic engine per run-time variant.

A variant supplies its error code table, data model schema, collection child
factory, optional cross-field validator and optional termination finalizer.
The engine itself carries no knowledge of any particular data model.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from scorm_runtime.cmi.schema import CompositeSpec
from scorm_runtime.cmi.tree import CollectionNode, CompositeNode, DataModelTree
from scorm_runtime.core.config import RuntimeSettings
from scorm_runtime.core.errors import ConfigError
from scorm_runtime.core.models import ErrorCodes, OperationNames
from scorm_runtime.validation.models import ValidationOutcome

# (collection path with indices, collection) -> new child or None
ChildFactory = Callable[[str, CollectionNode], "CompositeNode | None"]

# (tree, element path, candidate value) -> verdict
CrossFieldValidator = Callable[[DataModelTree, str, str], ValidationOutcome]

# (tree, settings, data passed to load_from_json) -> None
TerminationFinalizer = Callable[[DataModelTree, RuntimeSettings, dict[str, Any]], None]


def schema_child_factory(collection_path: str, collection: CollectionNode) -> CompositeNode:
    """Build a child from the collection's declared item shape."""
    return collection.new_item()


@dataclass(frozen=True)
class RuntimeVariant:
    name: str
    error_codes: ErrorCodes
    schema: CompositeSpec
    root_name: str = "cmi"
    operation_names: OperationNames = field(default_factory=OperationNames)
    child_factory: ChildFactory | None = None
    cross_field_validator: CrossFieldValidator | None = None
    finalizer: TerminationFinalizer | None = None

    def __post_init__(self) -> None:
        if not self.root_name or "." in self.root_name:
            raise ConfigError(
                f"Variant {self.name!r}: root name must be a single segment, "
                f"got {self.root_name!r}"
            )

    def build_tree(self) -> DataModelTree:
        return DataModelTree(self.root_name, self.schema)
