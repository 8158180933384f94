from __future__ import annotations
import logging
import networkx as nx
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)

OPERATORS = ("+", "-", "*", "/", "^")

# Variable names are stored in at most this many UTF-8 bytes.
MAX_NAME_LENGTH = 31


def normalize_name(name: str) -> str:
    """Truncate a variable name to ``MAX_NAME_LENGTH`` bytes."""
    raw = name.encode("utf-8")
    if len(raw) <= MAX_NAME_LENGTH:
        return name
    short = raw[:MAX_NAME_LENGTH].decode("utf-8", errors="ignore")
    logger.debug("truncating variable name %r to %r", name, short)
    return short


@dataclass(frozen=True)
class Constant:
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True)
class Variable:
    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("variable name must not be empty")
        object.__setattr__(self, "name", normalize_name(self.name))


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: str  # handle of the left operand
    right: str  # handle of the right operand

    def __post_init__(self) -> None:
        if self.op not in OPERATORS:
            raise ValueError(f"Unknown operator {self.op!r}")
        if self.left == self.right:
            raise ValueError("operands of a binary operator must be distinct nodes")


ExpressionNode = Union[Constant, Variable, BinaryOp]


class ExpressionTree:
    """Expression tree stored as a node arena.

    Nodes live in a ``networkx.DiGraph`` keyed by string handles, with one
    edge from every operator to each of its operands. A tree owns every node
    in its arena; nodes are never shared with another tree, and copying a
    subtree into a tree always allocates fresh handles.
    """

    def __init__(self) -> None:
        self.g = nx.DiGraph()
        self.root: Optional[str] = None
        self._id = 0

    def _nid(self) -> str:
        self._id += 1
        return f"n{self._id}"

    def node(self, nid: str) -> ExpressionNode:
        return self.g.nodes[nid]["data"]

    # -----------------
    # Construction
    # -----------------
    def add_const(self, value: float) -> str:
        n = self._nid()
        self.g.add_node(n, data=Constant(value))
        return n

    def add_var(self, name: str) -> str:
        n = self._nid()
        self.g.add_node(n, data=Variable(name))
        return n

    def add_op(self, op: str, left: str, right: str) -> str:
        node = BinaryOp(op, left, right)
        for c in (left, right):
            if c not in self.g:
                raise KeyError(f"unknown node {c!r}")
            if self.g.in_degree(c) > 0:
                raise ValueError(f"node {c!r} already has a parent")
        n = self._nid()
        self.g.add_node(n, data=node)
        self.g.add_edge(n, left)
        self.g.add_edge(n, right)
        return n

    def copy_subtree(self, src: "ExpressionTree", nid: str) -> str:
        """Copy the subtree of ``src`` rooted at ``nid`` into this tree.

        Returns the handle of the copy's root. The copy shares no nodes with
        ``src`` even when ``src`` is this tree.
        """
        memo: Dict[str, str] = {}
        for cur in list(nx.dfs_postorder_nodes(src.g, nid)):
            data = src.node(cur)
            if isinstance(data, Constant):
                memo[cur] = self.add_const(data.value)
            elif isinstance(data, Variable):
                memo[cur] = self.add_var(data.name)
            elif isinstance(data, BinaryOp):
                memo[cur] = self.add_op(data.op, memo[data.left], memo[data.right])
            else:
                raise TypeError(f"Unknown node type {type(data).__name__}")
        return memo[nid]

    def clone(self) -> "ExpressionTree":
        out = ExpressionTree()
        if self.root is not None:
            out.root = out.copy_subtree(self, self.root)
        return out

    # -----------------
    # Inspection
    # -----------------
    def is_empty(self) -> bool:
        return self.root is None

    def postorder(self) -> List[str]:
        """Handles reachable from the root, children before parents."""
        if self.root is None:
            return []
        return list(nx.dfs_postorder_nodes(self.g, self.root))

    def depth(self) -> int:
        heights: Dict[str, int] = {}
        for nid in self.postorder():
            data = self.node(nid)
            if isinstance(data, BinaryOp):
                heights[nid] = 1 + max(heights[data.left], heights[data.right])
            else:
                heights[nid] = 1
        return heights.get(self.root, 0) if self.root is not None else 0

    def variables(self) -> List[str]:
        names: List[str] = []
        for nid in self.postorder():
            data = self.node(nid)
            if isinstance(data, Variable) and data.name not in names:
                names.append(data.name)
        return names

    def check_ownership(self) -> bool:
        """True when the arena is a proper tree rooted at ``root``.

        Every node must be reachable from the root through exactly one
        parent, and nothing else may live in the arena.
        """
        if self.root is None:
            return self.g.number_of_nodes() == 0
        if self.root not in self.g or self.g.in_degree(self.root) != 0:
            return False
        if not nx.is_arborescence(self.g):
            return False
        for nid in self.g.nodes:
            data = self.node(nid)
            expected = {data.left, data.right} if isinstance(data, BinaryOp) else set()
            if set(self.g.successors(nid)) != expected:
                return False
        return True

    def __len__(self) -> int:
        return self.g.number_of_nodes()

    # -----------------
    # Lifetime
    # -----------------
    def release(self) -> None:
        self.g.clear()
        self.root = None

    # -----------------
    # Stringification
    # -----------------
    def to_string(self) -> str:
        # Local import to avoid circular dependency at module load time
        from serializer import to_string as _to_string

        return _to_string(self)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        if self.root is None:
            return "ExpressionTree(<empty>)"
        return f"ExpressionTree({self.to_string()!r})"


def release(tree: Optional[ExpressionTree]) -> None:
    """Free every node of ``tree``. Safe on None and on released trees."""
    if tree is None:
        return
    tree.release()
