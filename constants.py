from __future__ import annotations
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
import math

# Named literals shared by every evaluator that accepts them by name.
NAMED_CONSTANTS: Mapping[str, float] = MappingProxyType(
    {
        "pi": math.pi,
        "e": math.e,
        "ln2": math.log(2.0),
        "ln10": math.log(10.0),
        "sqrt2": math.sqrt(2.0),
        "sqrt1_2": math.sqrt(0.5),
        "deg2rad": math.pi / 180.0,
        "rad2deg": 180.0 / math.pi,
        "log2e": 1.0 / math.log(2.0),
        "log10e": 1.0 / math.log(10.0),
        "two_pi": 2.0 * math.pi,
        "half_pi": 0.5 * math.pi,
    }
)


def _is_ident_char(c: str) -> bool:
    return c.isascii() and (c.isalnum() or c == "_")


def match_constant(s: str, i: int) -> Optional[Tuple[str, float]]:
    """Match a named constant starting at ``s[i]``.

    A name only matches when the character after it cannot continue an
    identifier, so ``pi`` matches in ``pi*x`` but not in ``pi2`` or ``pi_x``.
    Returns ``(name, value)`` or None.
    """
    for name, value in NAMED_CONSTANTS.items():
        j = i + len(name)
        if s.startswith(name, i) and (j >= len(s) or not _is_ident_char(s[j])):
            return name, value
    return None
