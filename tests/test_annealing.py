import math
from unittest import mock

import pytest

from keyopt import annealing


def test_temperature_starts_at_t0():
    assert annealing.temperature(0) == annealing.T0


def test_temperature_strictly_decreases():
    temps = [annealing.temperature(i) for i in range(0, annealing.N + 1, 500)]
    assert all(a > b for a, b in zip(temps, temps[1:]))


def test_temperature_decays_geometrically():
    ratios = [
        annealing.temperature(i) / annealing.temperature(i + 1)
        for i in (0, 100, 7000, 14000)
    ]
    for ratio in ratios[1:]:
        assert math.isclose(ratio, ratios[0], rel_tol=1e-9)


def test_cutoff_probability_for_zero_cost_is_p0():
    for i in (1, 500, annealing.N):
        assert annealing.cutoff_p(0.0, i) == pytest.approx(annealing.P0)


def test_cutoff_probability_shrinks_with_cost():
    probs = [annealing.cutoff_p(de, 10) for de in (0.1, 0.5, 1.0, 2.0, 5.0)]
    assert all(a > b for a, b in zip(probs, probs[1:]))
    assert all(0.0 < p <= annealing.P0 for p in probs)


def test_cutoff_probability_shrinks_as_run_cools():
    early = annealing.cutoff_p(1.0, 1)
    late = annealing.cutoff_p(1.0, annealing.N)
    assert late < early


@pytest.mark.parametrize("de", [-0.001, -1.0, -1000.0])
def test_improvements_always_accepted(de):
    assert all(annealing.accept_transition(de, i) for i in (1, 100, annealing.N))


def test_huge_regression_never_accepted():
    results = {annealing.accept_transition(1e6, i) for i in range(1, 200)}
    assert results == {False}


def test_acceptance_compares_draw_with_cutoff():
    assert annealing.cutoff_p(5.0, 1) < 0.5
    with mock.patch("random.random", return_value=0.5):
        assert annealing.accept_transition(0.0, 1) is True
        assert annealing.accept_transition(5.0, 1) is False


def test_simulation_range_covers_all_iterations():
    rng = annealing.simulation_range()
    assert rng[0] == 1
    assert rng[-1] == annealing.N
    assert len(rng) == annealing.N