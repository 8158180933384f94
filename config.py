from __future__ import annotations
from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 100
# Each nesting level costs the parser three stack frames.
MAX_DEPTH_LIMIT = 200
DEFAULT_SAMPLE_POINTS = 101


def check_max_depth(max_depth: int) -> int:
    if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
        raise ValueError(f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}")
    return max_depth


@dataclass(frozen=True)
class EngineConfig:
    # maximum parenthesis nesting accepted by the parser
    max_depth: int = DEFAULT_MAX_DEPTH
    sample_points: int = DEFAULT_SAMPLE_POINTS

    def __post_init__(self) -> None:
        check_max_depth(self.max_depth)
        if self.sample_points < 2:
            raise ValueError("sample_points must be at least 2")
