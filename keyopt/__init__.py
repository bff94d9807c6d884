"""Keyboard layout optimisation by simulated annealing and swap search over a typing-effort penalty model."""

__version__ = "0.1.0"
__all__ = ["annealing", "layout", "penalty", "simulator", "cli"]