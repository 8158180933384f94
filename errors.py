from __future__ import annotations
from enum import Enum


class ParseErrorReason(Enum):
    UNEXPECTED_CHARACTER = "unexpected character"
    UNMATCHED_PARENTHESIS = "unmatched parenthesis"
    TRAILING_INPUT = "trailing input"
    EMPTY_FACTOR = "expected a number, constant, variable or '('"
    NESTING_TOO_DEEP = "parentheses nested too deeply"


class ParseError(ValueError):
    """Raised when text cannot be parsed into a complete expression tree.

    ``offset`` is the byte offset into the UTF-8 encoded input where the
    problem was detected.
    """

    def __init__(self, reason: ParseErrorReason, offset: int, text: str = "") -> None:
        self.reason = reason
        self.offset = offset
        self.text = text
        super().__init__(f"{reason.value} at offset {offset}")


class DiffError(ValueError):
    """Raised when a tree contains an operator with no differentiation rule."""

    def __init__(self, operator: str) -> None:
        self.operator = operator
        super().__init__(f"cannot differentiate operator '{operator}'")
