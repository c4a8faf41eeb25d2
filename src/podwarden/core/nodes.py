#!/usr/bin/env python3
"""
PODWARDEN NODE ACCESSORS
------------------------
Small lookup and kind-check helpers used by every field validator.
None of them mutate the tree; the ones that report append to the
caller's error list.

Author: PodWarden Team
Date: 2026-10-18
"""

from typing import Dict, List, Optional

from podwarden.core.models import Node, NodeKind, ValidationError
from podwarden.core.schema import INTEGER_PATTERN

# Human-readable kind names used in "must be <kind>" messages
KIND_NAMES: Dict[NodeKind, str] = {
    NodeKind.SCALAR: "string",
    NodeKind.MAPPING: "object",
    NodeKind.SEQUENCE: "list",
}


def node_line(node: Optional[Node]) -> int:
    """Returns the node's 1-based line, or 0 when there is no node."""
    if node is not None and node.line > 0:
        return node.line
    return 0


def child_by_key(mapping: Optional[Node], key: str) -> Optional[Node]:
    """
    Returns the value node paired with the scalar key `key`.
    Duplicate keys resolve to the first occurrence.
    """
    if mapping is None or mapping.kind is not NodeKind.MAPPING:
        return None
    for key_node, value_node in mapping.pairs:
        if key_node.kind is NodeKind.SCALAR and key_node.value == key:
            return value_node
    return None


def expect_kind(node: Node, kind: NodeKind, field: str, errors: List[ValidationError]) -> bool:
    """
    Checks that a present node has the expected kind, recording
    "<field> must be <kind>" otherwise.
    """
    if node.kind is kind:
        return True
    errors.append(ValidationError(node_line(node), field, f"{field} must be {KIND_NAMES[kind]}"))
    return False


def require(parent: Node, key: str, field: str, errors: List[ValidationError]) -> Optional[Node]:
    """
    Looks up a required key. A missing key has no source position, so
    "<field> is required" is recorded with line 0.
    """
    child = child_by_key(parent, key)
    if child is None:
        errors.append(ValidationError(0, field, f"{field} is required"))
    return child


def is_blank(node: Node) -> bool:
    return not (node.value or "").strip()


def parse_int(node: Node) -> Optional[int]:
    """Base-10 integer value of a scalar's text, or None if it is not one."""
    if node.kind is not NodeKind.SCALAR or node.value is None:
        return None
    if not INTEGER_PATTERN.fullmatch(node.value):
        return None
    return int(node.value)
