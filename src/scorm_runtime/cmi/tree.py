"""In-memory CMI data model tree.

Three node kinds, discriminated by ``NodeKind``:

- ``ScalarNode``: a string value, its spec, and whether it was ever assigned
- ``CompositeNode``: fixed mapping of field name to child node
- ``CollectionNode``: contiguous, append-only list of composite children

The tree is read and written through ``PathResolver`` for SCO-facing
operations.  ``peek``/``poke`` give variant hooks raw access that skips
access modes and validators.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Union

from scorm_runtime.core.enums import NodeKind

from .schema import CollectionSpec, CompositeSpec, FieldSpec, LeafSpec


class ScalarNode:
    __slots__ = ("spec", "value", "assigned")

    kind = NodeKind.SCALAR

    def __init__(self, spec: LeafSpec) -> None:
        self.spec = spec
        self.value: str = spec.default if spec.default is not None else ""
        self.assigned = False

    def assign(self, value: str) -> None:
        self.value = value
        self.assigned = True

    def __repr__(self) -> str:
        return f"ScalarNode({self.value!r})"


class CompositeNode:
    __slots__ = ("spec", "children")

    kind = NodeKind.COMPOSITE

    def __init__(self, spec: CompositeSpec) -> None:
        self.spec = spec
        self.children: dict[str, Node] = {
            name: build_node(child) for name, child in spec.fields.items()
        }

    def get(self, name: str) -> Node | None:
        return self.children.get(name)

    def __repr__(self) -> str:
        return f"CompositeNode({list(self.children)})"


class CollectionNode:
    __slots__ = ("spec", "items")

    kind = NodeKind.COLLECTION

    def __init__(self, spec: CollectionSpec) -> None:
        self.spec = spec
        self.items: list[CompositeNode] = []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[CompositeNode]:
        return iter(self.items)

    def new_item(self) -> CompositeNode:
        """Build (but do not append) a child from the declared item shape."""
        return CompositeNode(self.spec.item)

    def append(self, index: int, child: CompositeNode) -> None:
        """Append ``child`` at ``index``, which must equal the current length."""
        if index != len(self.items):
            raise IndexError(
                f"collection can only grow at index {len(self.items)}, got {index}"
            )
        self.items.append(child)

    def __repr__(self) -> str:
        return f"CollectionNode(len={len(self.items)})"


Node = Union[ScalarNode, CompositeNode, CollectionNode]


def build_node(spec: FieldSpec) -> Node:
    if spec.kind is NodeKind.SCALAR:
        return ScalarNode(spec)
    if spec.kind is NodeKind.COMPOSITE:
        return CompositeNode(spec)
    return CollectionNode(spec)


class DataModelTree:
    """Root of one session's data model.

    ``initialized`` flips once, when the session initializes; from then on
    read-only leaves reject SCO writes.
    """

    def __init__(self, root_name: str, schema: CompositeSpec) -> None:
        self.root_name = root_name
        self.root = CompositeNode(schema)
        self.initialized = False

    def initialize(self) -> None:
        self.initialized = True

    def find(self, path: str) -> Node | None:
        """Locate an existing node without creating children."""
        segments = path.split(".")
        if not segments or segments[0] != self.root_name:
            return None
        node: Node = self.root
        for segment in segments[1:]:
            if node.kind is NodeKind.COMPOSITE:
                child = node.get(segment)
                if child is None:
                    return None
                node = child
            elif node.kind is NodeKind.COLLECTION and segment.isdigit():
                index = int(segment)
                if index >= len(node):
                    return None
                node = node.items[index]
            else:
                return None
        return node

    def peek(self, path: str) -> str | None:
        """Raw value of a scalar leaf, ignoring access mode."""
        node = self.find(path)
        if node is None or node.kind is not NodeKind.SCALAR:
            return None
        return node.value

    def poke(self, path: str, value: str) -> bool:
        """Raw write to an existing scalar leaf, skipping validation."""
        node = self.find(path)
        if node is None or node.kind is not NodeKind.SCALAR:
            return False
        node.assign(value)
        return True
