import pytest
from channelflow.bisection import bisect, expand_bracket


def test_zero_crossing():
    solution = bisect(lambda x: x**3 - 8.0, 0.0, 10.0)

    assert solution.converged
    assert solution.root == pytest.approx(2.0, abs=1e-6)


def test_target_form():
    solution = bisect(lambda x: x**2, 0.0, 2.0, target=2.0)

    assert solution.converged
    assert solution.root == pytest.approx(2.0**0.5, abs=1e-6)
    assert solution.iterations <= 100


def test_decreasing_function():
    solution = bisect(lambda x: 10.0 - x, 0.0, 10.0, target=4.0, increasing=False)

    assert solution.converged
    assert solution.root == pytest.approx(6.0, abs=1e-6)


def test_non_convergence_returns_midpoint():
    solution = bisect(lambda x: x, 0.0, 1.0, target=0.3, tolerance=0.0, max_iter=5)

    assert not solution.converged
    assert solution.iterations == 5
    assert 0.0 <= solution.root <= 1.0
    assert solution.root == pytest.approx(0.3, abs=1.0 / 2**5)


def test_expand_bracket_encloses_target():
    lower, upper = expand_bracket(lambda x: x, 0.0, 50.0, target=1000.0)

    assert lower < 1000.0 <= upper
    assert upper == 1600.0


def test_expand_bracket_keeps_enclosing_bracket():
    assert expand_bracket(lambda x: x, 0.0, 50.0, target=10.0) == (0.0, 50.0)
