import math

import pytest

from evaluator import evaluate
from parser import parse
from substitutor import substitute
from tree import ExpressionTree, release


def test_substitution_composes():
    tree = parse("x + y")
    step = substitute(tree, "x", 10.0)
    final = substitute(step, "y", 20.0)
    assert evaluate(final) == 30.0
    assert str(step) == "10 + y"
    assert final.variables() == []


def test_input_is_not_modified():
    tree = parse("x + y")
    substitute(tree, "x", 1.0)
    assert str(tree) == "x + y"


def test_result_is_independent():
    tree = parse("x * (x + 1)")
    out = substitute(tree, "x", 2.0)
    assert out.check_ownership()
    release(tree)
    assert evaluate(out) == 6.0


def test_other_variables_are_kept():
    out = substitute(parse("x * y"), "z", 5.0)
    assert str(out) == "x * y"
    assert evaluate(out, {"x": 2, "y": 4}) == 8.0


def test_named_constant_cannot_be_shadowed():
    out = substitute(parse("pi + x"), "pi", 0.0)
    assert evaluate(out, {"x": 0.0}) == pytest.approx(math.pi)


def test_empty_tree():
    assert substitute(ExpressionTree(), "x", 1.0).is_empty()
