from __future__ import annotations
from typing import Dict

from tree import BinaryOp, Constant, ExpressionTree, Variable, normalize_name


def substitute(tree: ExpressionTree, var: str, value: float) -> ExpressionTree:
    """Return a new tree with every ``var`` replaced by ``Constant(value)``.

    The input is left untouched and the result owns its own nodes.
    """
    out = ExpressionTree()
    if tree is None or tree.is_empty():
        return out
    var = normalize_name(var)
    memo: Dict[str, str] = {}
    for nid in tree.postorder():
        data = tree.node(nid)
        if isinstance(data, Constant):
            memo[nid] = out.add_const(data.value)
        elif isinstance(data, Variable):
            if data.name == var:
                memo[nid] = out.add_const(value)
            else:
                memo[nid] = out.add_var(data.name)
        elif isinstance(data, BinaryOp):
            memo[nid] = out.add_op(data.op, memo[data.left], memo[data.right])
        else:
            raise TypeError(f"Unknown node type {type(data).__name__}")
    out.root = memo[tree.root]
    return out
