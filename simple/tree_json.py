"""JSON serialization/deserialization for Simple parse trees.

This module converts between parse tree `Node` objects and plain Python
dict/list structures suitable for JSON encoding. VARIABLE nodes are
written with their name only; on load they are bound to entries of the
symbol table passed in, so a saved tree can be executed later.
"""

from __future__ import annotations

from typing import Any, Dict

from .symtab import Symtab
from .tree import Node, NodeType


def tree_to_obj(node: Node) -> Dict[str, Any]:
    obj: Dict[str, Any] = {"type": node.type.name, "line": node.line_number}
    if node.text is not None:
        obj["text"] = node.text
    if node.value is not None:
        obj["value"] = node.value
    if node.descending:
        obj["descending"] = True
    if node.children:
        obj["children"] = [tree_to_obj(child) for child in node.children]
    return obj


def tree_from_obj(obj: Any, symtab: Symtab) -> Node:
    if not isinstance(obj, dict):
        raise TypeError("Invalid parse tree object")
    try:
        node_type = NodeType[obj["type"]]
    except KeyError:
        raise ValueError(f"Unknown parse tree node type: {obj.get('type')}")

    node = Node(
        node_type,
        line_number=int(obj.get("line", 0)),
        text=obj.get("text"),
        value=obj.get("value"),
        descending=bool(obj.get("descending", False)),
    )
    if node_type == NodeType.REAL_CONSTANT and node.value is not None:
        # hand-written files may store a real as an integer
        node.value = float(node.value)
    if node_type == NodeType.VARIABLE:
        if node.text is None:
            raise ValueError("VARIABLE node without a name")
        node.entry = symtab.enter(node.text)
    if node_type == NodeType.PROGRAM and node.text is not None:
        symtab.enter(node.text)

    for child in obj.get("children", []):
        node.adopt(tree_from_obj(child, symtab))
    return node
