from __future__ import annotations
import math
import numpy as np
from collections.abc import Mapping
from typing import Callable, Dict, Optional, Union

from tree import BinaryOp, Constant, ExpressionTree, Variable

Lookup = Union[Callable[[str], float], Mapping[str, float]]


def apply_operator(op: str, a: float, b: float) -> float:
    """Apply a binary operator with IEEE semantics; anomalies become NaN."""
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    if op == "/":
        return a / b if b != 0.0 else math.nan
    if op == "^":
        with np.errstate(all="ignore"):
            return float(np.power(np.float64(a), np.float64(b)))
    raise ValueError(f"Unsupported binary op {op}")


def _resolve(name: str, lookup: Optional[Lookup]) -> float:
    if lookup is None:
        return math.nan
    try:
        if isinstance(lookup, Mapping):
            v = lookup[name]
        else:
            v = lookup(name)
    except LookupError:
        return math.nan
    if v is None:
        return math.nan
    try:
        return float(v)
    except (TypeError, ValueError):
        return math.nan


def evaluate(tree: ExpressionTree, lookup: Optional[Lookup] = None) -> float:
    """Evaluate ``tree`` to a float.

    ``lookup`` maps variable names to values, either as a callable or a
    mapping. An unbound variable, a zero divisor or an empty tree yields NaN
    rather than an exception.
    """
    if tree is None or tree.is_empty():
        return math.nan
    values: Dict[str, float] = {}
    for nid in tree.postorder():
        data = tree.node(nid)
        if isinstance(data, Constant):
            values[nid] = data.value
        elif isinstance(data, Variable):
            values[nid] = _resolve(data.name, lookup)
        elif isinstance(data, BinaryOp):
            values[nid] = apply_operator(
                data.op, values.pop(data.left), values.pop(data.right)
            )
        else:
            raise TypeError(f"Unknown node type {type(data).__name__}")
    return values[tree.root]
