from __future__ import annotations
import logging
from typing import Dict

from errors import DiffError
from tree import BinaryOp, Constant, ExpressionTree, Variable, normalize_name

logger = logging.getLogger(__name__)


def differentiate(tree: ExpressionTree, var: str) -> ExpressionTree:
    """Symbolic derivative of ``tree`` with respect to ``var``.

    Sum, difference, product and quotient rules only; an operator without a
    rule (``^``) raises DiffError. Operands reused by the product and
    quotient rules are copied at every position, so the result owns each of
    its nodes exactly once and can be released on its own.
    """
    out = ExpressionTree()
    if tree is None or tree.is_empty():
        return out
    var = normalize_name(var)
    d: Dict[str, str] = {}
    for nid in tree.postorder():
        data = tree.node(nid)
        if isinstance(data, Constant):
            d[nid] = out.add_const(0.0)
        elif isinstance(data, Variable):
            d[nid] = out.add_const(1.0 if data.name == var else 0.0)
        elif isinstance(data, BinaryOp):
            u, v = data.left, data.right
            du, dv = d.pop(u), d.pop(v)
            if data.op in ("+", "-"):
                d[nid] = out.add_op(data.op, du, dv)
            elif data.op == "*":
                # u'v + uv'
                left = out.add_op("*", du, out.copy_subtree(tree, v))
                right = out.add_op("*", out.copy_subtree(tree, u), dv)
                d[nid] = out.add_op("+", left, right)
            elif data.op == "/":
                # (u'v - uv') / (v*v)
                num = out.add_op(
                    "-",
                    out.add_op("*", du, out.copy_subtree(tree, v)),
                    out.add_op("*", out.copy_subtree(tree, u), dv),
                )
                den = out.add_op(
                    "*", out.copy_subtree(tree, v), out.copy_subtree(tree, v)
                )
                d[nid] = out.add_op("/", num, den)
            else:
                logger.debug("no derivative rule for operator %r", data.op)
                out.release()
                raise DiffError(data.op)
        else:
            raise TypeError(f"Unknown node type {type(data).__name__}")
    out.root = d[tree.root]
    return out
