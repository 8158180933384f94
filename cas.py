from __future__ import annotations
from typing import Any, Dict, Mapping, Optional, Tuple
import logging
import numpy as np

from config import EngineConfig
from differentiator import differentiate
from evaluator import Lookup, evaluate
from interval import Interval
from parser import parse_expression
from simplifier import simplify
from substitutor import substitute
from tree import ExpressionTree

logger = logging.getLogger(__name__)

DEFAULT_LOWER_BOUND = -100.0
DEFAULT_UPPER_BOUND = 100.0


class CAS:
    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def parse(self, expr: str) -> "CAS.ExprResult":
        tree = parse_expression(expr, max_depth=self.config.max_depth)
        return CAS.ExprResult(tree, self.config)

    def wrap(self, tree: ExpressionTree) -> "CAS.ExprResult":
        return CAS.ExprResult(tree, self.config)

    class ExprResult:
        """Handle pairing an expression tree with the engine configuration.

        ``simplify`` rewrites the wrapped tree in place; ``diff`` and ``subs``
        return new handles around trees of their own.
        """

        def __init__(
            self, tree: ExpressionTree, config: EngineConfig | None = None
        ) -> None:
            self._tree = tree
            self._config = config or EngineConfig()

        @property
        def tree(self) -> ExpressionTree:
            return self._tree

        def eval(self, env: Optional[Lookup] = None) -> float:
            return evaluate(self._tree, env)

        def simplify(self) -> "CAS.ExprResult":
            simplify(self._tree)
            return self

        def diff(self, var: str) -> "CAS.ExprResult":
            return CAS.ExprResult(differentiate(self._tree, var), self._config)

        def subs(self, var: str, value: float) -> "CAS.ExprResult":
            return CAS.ExprResult(substitute(self._tree, var, value), self._config)

        def release(self) -> None:
            self._tree.release()

        def __str__(self) -> str:
            return self._tree.to_string()

        def __repr__(self) -> str:
            return f"ExprResult({self._tree.to_string()!r})"

        def _eval_float(
            self, var: str, x: float, env: Optional[Mapping[str, Any]] = None
        ) -> float:
            """Evaluate expression at x, returning float."""
            bindings: Dict[str, Any] = dict(env or {})
            bindings[var] = x
            return self.eval(bindings)

        def sample(
            self,
            var: str,
            interval: Interval,
            points: Optional[int] = None,
            env: Optional[Mapping[str, Any]] = None,
        ) -> Tuple[np.ndarray, np.ndarray]:
            """Evaluate the expression at evenly spaced values of ``var``.

            Returns ``(xs, ys)``. Unbounded endpoints are clamped to
            DEFAULT_LOWER_BOUND/DEFAULT_UPPER_BOUND and open endpoints are
            excluded. Points where evaluation fails hold NaN.
            """
            n = self._config.sample_points if points is None else points
            if n < 2:
                raise ValueError("points must be at least 2")
            if interval.is_empty():
                return np.empty(0), np.empty(0)
            a, b = interval.sample_bounds(DEFAULT_LOWER_BOUND, DEFAULT_UPPER_BOUND)
            if a > b:
                return np.empty(0), np.empty(0)
            xs = np.linspace(a, b, n)
            ys = np.array([self._eval_float(var, float(x), env) for x in xs])
            bad = int(np.count_nonzero(np.isnan(ys)))
            if bad:
                logger.debug("%d of %d samples of %s are NaN", bad, n, self)
            return xs, ys

