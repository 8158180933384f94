from math import inf
from typing import Tuple, Union

Number = Union[int, float]

# Open endpoints are moved inward by this much before sampling.
OPEN_ENDPOINT_NUDGE = 1e-6


class Interval:
    a: Number
    b: Number
    left_open: bool
    right_open: bool

    @staticmethod
    def empty():
        return Interval(0, 0, True, True)

    @staticmethod
    def closed(l: Number, r: Number):
        return Interval(l, r, False, False)

    @staticmethod
    def open(l: Number, r: Number):
        return Interval(l, r, True, True)

    @staticmethod
    def open_closed(l: Number, r: Number):
        return Interval(l, r, True, False)

    @staticmethod
    def closed_open(l: Number, r: Number):
        return Interval(l, r, False, True)

    @staticmethod
    def reals():
        return Interval(-inf, inf, True, True)

    def __init__(self, l: Number, r: Number, lo: bool = False, ro: bool = False):
        self.a = l
        self.b = r
        self.left_open = lo
        self.right_open = ro

    def is_empty(self) -> bool:
        return self.a > self.b or (
            self.a == self.b and (self.left_open or self.right_open)
        )

    def sample_bounds(self, lower: float, upper: float) -> Tuple[float, float]:
        """Finite endpoints to sample between.

        Infinite endpoints are replaced by ``lower``/``upper`` and open
        endpoints are nudged inward.
        """
        a = lower if self.a == -inf else float(self.a)
        b = upper if self.b == inf else float(self.b)
        if self.left_open and self.a != -inf:
            a += OPEN_ENDPOINT_NUDGE
        if self.right_open and self.b != inf:
            b -= OPEN_ENDPOINT_NUDGE
        return a, b

    def __str__(self):
        s = "(" if self.left_open else "["
        s += "-∞" if self.a == -inf else str(self.a)
        s += ", "
        s += "∞" if self.b == inf else str(self.b)
        s += ")" if self.right_open else "]"
        return s
