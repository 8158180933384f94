from __future__ import annotations
import logging
import re
from typing import List, Optional

from config import DEFAULT_MAX_DEPTH, check_max_depth
from constants import match_constant
from errors import ParseError, ParseErrorReason
from tree import ExpressionTree

logger = logging.getLogger(__name__)

# =====================
# Tokenizer
# =====================

_number_re = re.compile(r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_ident_re = re.compile(r"[A-Za-z][A-Za-z0-9]*")
_space = " \t\n\r\f\v"


class ExprTok:
    def __init__(
        self, kind: str, lex: str = "", num: Optional[float] = None, pos: int = 0
    ):
        self.kind, self.lex, self.num, self.pos = kind, lex, num, pos

    def __repr__(self) -> str:
        return f"ExprTok({self.kind!r}, {self.lex!r}, pos={self.pos})"


def expr_tokenize(expr: str) -> List[ExprTok]:
    """Split ``expr`` into tokens, ending with an ``END`` token.

    Named constants are folded into ``NUM`` tokens here, so they can never
    reach the tree as variables. Token positions are byte offsets.
    """
    s = expr
    i, n = 0, len(s)
    pos = 0  # byte offset of s[i]
    toks: List[ExprTok] = []
    while i < n:
        c = s[i]
        if c in _space:
            i += 1
            pos += 1
            continue
        start = i
        if c in "+-*/()":
            toks.append(ExprTok(c, c, pos=pos))
            i += 1
            pos += 1
            continue
        m = _number_re.match(s, i)
        if m:
            toks.append(ExprTok("NUM", m.group(), float(m.group()), pos))
            i = m.end()
            pos += len(s[start:i].encode("utf-8"))
            continue
        const = match_constant(s, i)
        if const is not None:
            name, value = const
            toks.append(ExprTok("NUM", name, value, pos))
            i += len(name)
            pos += len(name)
            continue
        m = _ident_re.match(s, i)
        if m:
            toks.append(ExprTok("ID", m.group(), pos=pos))
            i = m.end()
            pos += len(s[start:i].encode("utf-8"))
            continue
        raise ParseError(ParseErrorReason.UNEXPECTED_CHARACTER, pos, expr)
    toks.append(ExprTok("END", "", pos=pos))
    return toks


# =====================
# Recursive descent
# =====================
#
#   expr   = term { ('+' | '-') term }
#   term   = factor { ('*' | '/') factor }
#   factor = number | constant | identifier | '(' expr ')'


class _Parser:
    def __init__(self, text: str, toks: List[ExprTok], max_depth: int) -> None:
        self.text = text
        self.toks = toks
        self.i = 0
        self.nesting = 0
        self.max_depth = max_depth
        self.out = ExpressionTree()

    def _peek(self) -> ExprTok:
        return self.toks[self.i]

    def _advance(self) -> ExprTok:
        t = self.toks[self.i]
        self.i += 1
        return t

    def _fail(self, reason: ParseErrorReason, tok: ExprTok) -> ParseError:
        return ParseError(reason, tok.pos, self.text)

    def parse(self) -> ExpressionTree:
        root = self.expr()
        t = self._peek()
        if t.kind == ")":
            raise self._fail(ParseErrorReason.UNMATCHED_PARENTHESIS, t)
        if t.kind != "END":
            raise self._fail(ParseErrorReason.TRAILING_INPUT, t)
        self.out.root = root
        return self.out

    def expr(self) -> str:
        left = self.term()
        while self._peek().kind in ("+", "-"):
            op = self._advance().kind
            right = self.term()
            left = self.out.add_op(op, left, right)
        return left

    def term(self) -> str:
        left = self.factor()
        while self._peek().kind in ("*", "/"):
            op = self._advance().kind
            right = self.factor()
            left = self.out.add_op(op, left, right)
        return left

    def factor(self) -> str:
        t = self._peek()
        if t.kind == "NUM":
            self._advance()
            return self.out.add_const(t.num)
        if t.kind == "ID":
            self._advance()
            return self.out.add_var(t.lex)
        if t.kind == "(":
            if self.nesting >= self.max_depth:
                raise self._fail(ParseErrorReason.NESTING_TOO_DEEP, t)
            self._advance()
            self.nesting += 1
            inner = self.expr()
            if self._peek().kind != ")":
                if self._peek().kind == "END":
                    raise self._fail(ParseErrorReason.UNMATCHED_PARENTHESIS, t)
                raise self._fail(ParseErrorReason.TRAILING_INPUT, self._peek())
            self._advance()
            self.nesting -= 1
            return inner
        raise self._fail(ParseErrorReason.EMPTY_FACTOR, t)


def parse_expression(expr: str, max_depth: int = DEFAULT_MAX_DEPTH) -> ExpressionTree:
    """Parse infix text into an expression tree.

    Raises ParseError when the text is not a complete expression; nothing is
    returned for partially parsed input.
    """
    if not isinstance(expr, str):
        raise TypeError(f"expected str, got {type(expr).__name__}")
    check_max_depth(max_depth)
    toks = expr_tokenize(expr)
    tree = _Parser(expr, toks, max_depth).parse()
    logger.debug("parsed %r into %d nodes", expr, len(tree))
    return tree


parse = parse_expression
