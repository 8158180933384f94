from __future__ import annotations
from typing import Dict

from tree import BinaryOp, Constant, ExpressionTree, Variable


def _const_to_string(v: float) -> str:
    return "%.17g" % v


def to_string(tree: ExpressionTree) -> str:
    """Render ``tree`` as ``left op right`` text for display.

    No parentheses are emitted, so the grouping of the tree is lost:
    ``(a + b) * c`` and ``a + b * c`` render the same. The result is meant
    for humans and is not guaranteed to parse back into an equal tree.
    """
    if tree is None or tree.is_empty():
        return ""
    parts: Dict[str, str] = {}
    for nid in tree.postorder():
        data = tree.node(nid)
        if isinstance(data, Constant):
            parts[nid] = _const_to_string(data.value)
        elif isinstance(data, Variable):
            parts[nid] = data.name
        elif isinstance(data, BinaryOp):
            parts[nid] = f"{parts.pop(data.left)} {data.op} {parts.pop(data.right)}"
        else:
            raise TypeError(f"Unknown node type {type(data).__name__}")
    return parts[tree.root]
