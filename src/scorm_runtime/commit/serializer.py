"""Render the data model tree into commit payloads.

Traversal is depth-first in schema-declared field order, so the same tree
always renders to the same payload.  Keyword accessors (``_children``,
``_count``, ``_version``) are not data and are never rendered; write-only
leaves are.
"""

from __future__ import annotations

from typing import Any

from scorm_runtime.cmi.tree import DataModelTree, Node
from scorm_runtime.core.enums import CommitFormat, NodeKind


def render_node(node: Node) -> Any:
    if node.kind is NodeKind.SCALAR:
        return node.value
    if node.kind is NodeKind.COMPOSITE:
        return {name: render_node(child) for name, child in node.children.items()}
    return {str(index): render_node(item) for index, item in enumerate(node.items)}


def render_tree(tree: DataModelTree) -> dict[str, Any]:
    """Nested structured form: ``{"cmi": {...}}``."""
    return {tree.root_name: render_node(tree.root)}


def flatten(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into dotted keys.

    An empty nested mapping is kept as ``{}`` under its own key.
    """
    result: dict[str, Any] = {}
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            if value:
                result.update(flatten(value, path))
            else:
                result[path] = {}
        else:
            result[path] = value
    return result


def to_params(flat: dict[str, Any]) -> list[str]:
    """``path=value`` tokens; empty containers render as ``path=``."""
    return [
        f"{path}={'' if isinstance(value, dict) else value}"
        for path, value in flat.items()
    ]


def render_payload(
    tree: DataModelTree, fmt: CommitFormat
) -> dict[str, Any] | list[str]:
    structured = render_tree(tree)
    if fmt is CommitFormat.FLATTENED:
        return flatten(structured)
    if fmt is CommitFormat.PARAMS:
        return to_params(flatten(structured))
    return structured
