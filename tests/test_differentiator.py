import pytest

from differentiator import differentiate
from errors import DiffError
from evaluator import evaluate
from parser import parse
from tree import ExpressionTree, release


@pytest.mark.parametrize("x", [-7.0, 0.0, 123.5])
def test_derivative_of_sum(x):
    d = differentiate(parse("x + 3"), "x")
    assert evaluate(d, {"x": x}) == 1.0


def test_product_rule():
    d = differentiate(parse("x * y"), "x")
    assert str(d) == "1 * y + x * 0"
    assert evaluate(d, {"x": 2, "y": 5}) == 5.0


def test_quotient_rule():
    tree = parse("x / y")
    dx = differentiate(tree, "x")
    dy = differentiate(tree, "y")
    assert str(dx) == "1 * y - x * 0 / y * y"
    assert evaluate(dx, {"x": 3, "y": 4}) == pytest.approx(0.25)
    assert evaluate(dy, {"x": 3, "y": 4}) == pytest.approx(-3.0 / 16.0)


def test_cubic():
    d = differentiate(parse("x * x * x"), "x")
    assert evaluate(d, {"x": 2}) == pytest.approx(12.0)


def test_rational_function():
    d = differentiate(parse("(x + 1) / (x - 1)"), "x")
    assert evaluate(d, {"x": 3}) == pytest.approx(-0.5)


def test_constants_and_other_variables_vanish():
    assert evaluate(differentiate(parse("42"), "x")) == 0.0
    assert evaluate(differentiate(parse("y - pi"), "x")) == 0.0


def test_derivative_owns_every_node():
    tree = parse("(a * x) / (x + b)")
    d = differentiate(tree, "x")
    assert d.check_ownership()
    # the denominator holds two separate copies of v
    root = d.node(d.root)
    den = d.node(root.right)
    assert den.op == "*"
    assert den.left != den.right


def test_results_release_independently():
    tree = parse("x / y")
    d1 = differentiate(tree, "x")
    d2 = differentiate(d1, "y")
    release(d1)
    assert d1.is_empty()
    assert evaluate(d2, {"x": 1, "y": 2}) == pytest.approx(-0.25)
    release(tree)
    assert evaluate(d2, {"x": 1, "y": 2}) == pytest.approx(-0.25)
    release(d2)
    release(d2)


def test_input_is_not_modified():
    tree = parse("x * y")
    before = len(tree)
    differentiate(tree, "x")
    assert len(tree) == before
    assert str(tree) == "x * y"


def test_power_is_not_differentiable():
    t = ExpressionTree()
    t.root = t.add_op("^", t.add_var("x"), t.add_const(2))
    with pytest.raises(DiffError) as info:
        differentiate(t, "x")
    assert info.value.operator == "^"


def test_long_variable_name_matches_truncated_node():
    name = "v" * 40
    assert evaluate(differentiate(parse(name), name)) == 1.0


def test_empty_tree():
    assert differentiate(ExpressionTree(), "x").is_empty()
