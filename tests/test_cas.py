import math

import numpy as np
import pytest

from cas import CAS, DEFAULT_LOWER_BOUND, DEFAULT_UPPER_BOUND
from config import EngineConfig
from errors import ParseError, ParseErrorReason
from interval import Interval


def test_parse_and_eval():
    f = CAS().parse("x*y+1")
    assert f.eval({"x": 2, "y": 3}) == 7.0
    assert str(f) == "x * y + 1"


def test_simplify_in_place():
    f = CAS().parse("2 + 3")
    assert f.simplify() is f
    assert str(f) == "5"


def test_diff_and_subs_return_new_results():
    f = CAS().parse("x * y")
    df = f.diff("x")
    g = df.subs("y", 5.0)
    assert df is not f and g is not df
    assert str(f) == "x * y"
    assert g.eval({"x": 2}) == 5.0
    f.release()
    assert g.eval({"x": 2}) == 5.0


def test_wrap_existing_tree():
    cas = CAS()
    f = cas.wrap(cas.parse("x - 1").tree)
    assert f.eval({"x": 1}) == 0.0


def test_configured_nesting_limit():
    cas = CAS(EngineConfig(max_depth=2))
    cas.parse("((x))")
    with pytest.raises(ParseError) as info:
        cas.parse("(((x)))")
    assert info.value.reason is ParseErrorReason.NESTING_TOO_DEEP


def test_config_validation():
    with pytest.raises(ValueError):
        EngineConfig(max_depth=0)
    with pytest.raises(ValueError):
        EngineConfig(sample_points=1)


def test_sample_closed_interval():
    xs, ys = CAS().parse("x * x").sample("x", Interval.closed(0, 2), points=3)
    np.testing.assert_allclose(xs, [0.0, 1.0, 2.0])
    np.testing.assert_allclose(ys, [0.0, 1.0, 4.0])


def test_sample_open_interval_excludes_endpoints():
    xs, _ = CAS().parse("x").sample("x", Interval.open(0, 1), points=5)
    assert xs[0] == pytest.approx(1e-6)
    assert xs[-1] == pytest.approx(1 - 1e-6)


def test_sample_unbounded_interval_uses_defaults():
    xs, ys = CAS().parse("x + 1").sample("x", Interval.reals())
    assert len(xs) == EngineConfig().sample_points
    assert xs[0] == DEFAULT_LOWER_BOUND
    assert xs[-1] == DEFAULT_UPPER_BOUND
    assert ys[0] == DEFAULT_LOWER_BOUND + 1


def test_sample_marks_anomalies_as_nan():
    _, ys = CAS().parse("1 / x").sample("x", Interval.closed(-1, 1), points=3)
    assert ys[0] == -1.0
    assert math.isnan(ys[1])
    assert ys[2] == 1.0


def test_sample_with_extra_bindings():
    _, ys = CAS().parse("x * k").sample(
        "x", Interval.closed(1, 2), points=2, env={"k": 10}
    )
    np.testing.assert_allclose(ys, [10.0, 20.0])


def test_sample_empty_interval():
    xs, ys = CAS().parse("x").sample("x", Interval.empty())
    assert xs.size == 0 and ys.size == 0


def test_sample_needs_two_points():
    with pytest.raises(ValueError):
        CAS().parse("x").sample("x", Interval.closed(0, 1), points=1)


def test_interval_str():
    assert str(Interval.reals()) == "(-∞, ∞)"
    assert str(Interval.closed_open(0, 1)) == "[0, 1)"
    assert str(Interval.open_closed(0, 1)) == "(0, 1]"


def test_config_rejects_nesting_above_limit():
    with pytest.raises(ValueError):
        EngineConfig(max_depth=5000)


def test_interval_constructors_survive_on_instances():
    iv = Interval.closed(0, 1)
    assert iv.left_open is False and iv.right_open is False
    assert iv.closed_open(2, 3).right_open is True
    assert iv.open_closed(2, 3).left_open is True
