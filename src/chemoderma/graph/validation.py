"""Structural checks applied while flattening a source tree.

Every check raises MalformedTreeError with the path of the offending node.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from chemoderma.exceptions import MalformedTreeError


def validate_node(node: Any, path: str, *, is_root: bool) -> None:
    """A tree node must be a mapping; the root must carry a name."""
    if not isinstance(node, Mapping):
        raise MalformedTreeError(
            path,
            f"expected an object, got {type(node).__name__}",
        )
    if is_root and not node.get("name"):
        raise MalformedTreeError(path, "root node has no 'name'")


def get_children(node: Mapping[str, Any], path: str) -> Sequence[Any]:
    """Return a node's children, validating the ``children`` field.

    Absent or null children mean a leaf. Strings and mappings are rejected
    even though Python treats them as sequences/iterables.
    """
    children = node.get("children")
    if children is None:
        return ()
    if isinstance(children, (str, bytes, Mapping)) or not isinstance(children, Sequence):
        raise MalformedTreeError(
            path,
            f"'children' must be a list, got {type(children).__name__}",
        )
    return children


def validate_unique_id(node_id: str, seen: set[str], path: str) -> None:
    """Node ids must be unique across the whole tree."""
    if node_id in seen:
        raise MalformedTreeError(path, f"duplicate node id '{node_id}'")
