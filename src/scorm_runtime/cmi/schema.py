"""Declarative schema descriptors for the CMI data model tree.

A variant describes its data model once as nested specs; the tree is built
from them at session construction and collection children are built from
``CollectionSpec.item`` on demand.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Union

from scorm_runtime.core.enums import Access, NodeKind
from scorm_runtime.validation.validators import IFieldValidator

CHILDREN_KEYWORD = "_children"
COUNT_KEYWORD = "_count"


@dataclass(frozen=True, eq=False)
class LeafSpec:
    """Scalar leaf descriptor.

    ``default=None`` marks the leaf non-defaultable: reading it before the
    first assignment fails as not-initialized.
    """

    validator: IFieldValidator | None = None
    access: Access = Access.READ_WRITE
    default: str | None = ""

    @property
    def kind(self) -> NodeKind:
        return NodeKind.SCALAR


@dataclass(frozen=True, eq=False)
class CompositeSpec:
    fields: Mapping[str, FieldSpec]
    children: str | None = None  # value of the _children keyword, if exposed
    constants: Mapping[str, str] = field(default_factory=dict)  # e.g. _version

    @property
    def kind(self) -> NodeKind:
        return NodeKind.COMPOSITE

    def keywords(self) -> dict[str, str]:
        """Read-only computed accessors exposed on this composite."""
        result = dict(self.constants)
        if self.children is not None:
            result[CHILDREN_KEYWORD] = self.children
        return result


@dataclass(frozen=True, eq=False)
class CollectionSpec:
    item: CompositeSpec
    children: str | None = None

    @property
    def kind(self) -> NodeKind:
        return NodeKind.COLLECTION


FieldSpec = Union[LeafSpec, CompositeSpec, CollectionSpec]
