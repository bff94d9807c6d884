"""Simulated-annealing acceptance rules.

The schedule is generic: a temperature that decays exponentially over a fixed
number of iterations, and a probability of accepting a worse state that
shrinks with both the size of the regression and the current temperature.
"""

import math
import random

# Initial temperature, scaled for the magnitude of the penalty model's output.
T0 = 1.5
# Decay constant of the temperature schedule.
K = 10.0
# Acceptance probability for a transition that costs nothing.
P0 = 1.0
# Number of iterations in one simulation run.
N = 15000

_KN = K / N


def temperature(i):
    """Return T(i) = T0 * exp(-i * K / N)."""
    return T0 * math.exp(-i * _KN)


def cutoff_p(de, i):
    """Return the probability p(dE, i) = P0 * exp(-dE / T(i))."""
    return P0 * math.exp(-de / temperature(i))


def accept_transition(de, i):
    """Decide whether to move to a state whose energy differs by ``de``.

    Improvements (negative ``de``) are always accepted; otherwise the
    transition is accepted with probability ``cutoff_p(de, i)``.
    """
    if de < 0.0:
        return True
    return random.random() < cutoff_p(de, i)


def simulation_range():
    """Return the iteration numbers of one run, 1 through N inclusive."""
    return range(1, N + 1)