from __future__ import annotations
import logging

from evaluator import apply_operator
from tree import BinaryOp, Constant, ExpressionTree

logger = logging.getLogger(__name__)


def simplify(tree: ExpressionTree) -> ExpressionTree:
    """Fold every operator whose operands are both constants.

    The tree is rewritten in place and returned; folded operands are removed
    from its arena. Nothing else is simplified: ``x * 0`` stays as it is.
    """
    if tree is None or tree.is_empty():
        return tree
    folded = 0
    for nid in tree.postorder():
        data = tree.node(nid)
        if not isinstance(data, BinaryOp):
            continue
        a = tree.node(data.left)
        b = tree.node(data.right)
        if isinstance(a, Constant) and isinstance(b, Constant):
            result = apply_operator(data.op, a.value, b.value)
            tree.g.remove_node(data.left)
            tree.g.remove_node(data.right)
            tree.g.nodes[nid]["data"] = Constant(result)
            folded += 1
    if folded:
        logger.debug("folded %d constant operator(s)", folded)
    return tree
