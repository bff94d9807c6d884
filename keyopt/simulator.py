"""Searching for better layouts: simulated annealing and exhaustive refinement."""

from __future__ import annotations

import random
from dataclasses import dataclass

from keyopt.annealing import accept_transition, simulation_range
from keyopt.layout import Layout, layout_permutations
from keyopt.penalty import _format_float, calculate_penalty


@dataclass
class BestLayoutsEntry:
    """A layout remembered together with its scaled penalty."""

    layout: Layout
    penalty: float


def insert_ordered(best_layouts, entry, limit):
    """Insert ``entry`` into the ascending list ``best_layouts`` in place.

    The entry goes after any entries with an equal penalty. The list is then
    cut down to at most ``limit`` entries, dropping the worst.
    """
    index = next(
        (k for k, existing in enumerate(best_layouts) if entry.penalty < existing.penalty),
        len(best_layouts),
    )
    best_layouts.insert(index, entry)
    del best_layouts[max(limit, 0):]


def format_result(layout, penalty):
    """Render a layout and its detailed penalty summary as text."""
    lines = [
        str(layout),
        f"total: {_format_float(penalty.total)}; scaled: {_format_float(penalty.scaled)}",
    ]
    for result in penalty.results:
        worst = sorted(
            result.high_keys.items(), key=lambda item: abs(item[1]), reverse=True
        )[:5]
        keys = "".join(f" {keys}: {_format_float(amount)};" for keys, amount in worst)
        lines.append(f"{result}  / {keys}")
    return "\n".join(lines)


def print_result(layout, penalty):
    """Print a layout and its detailed penalty summary."""
    print(format_result(layout, penalty))


def simulate(quartads, length, init_layout, penalties, debug, top_layouts, num_swaps):
    """Run one annealing pass starting from ``init_layout``.

    Prints the best accepted layouts and returns them, best first.
    """
    if num_swaps < 1:
        raise ValueError("the number of swaps per iteration must be at least 1")

    summary = calculate_penalty(quartads, length, init_layout, penalties, True)
    if debug:
        print("Initial layout:")
        print_result(init_layout, summary)

    best_layouts = []
    accepted_layout = init_layout.copy()
    accepted_penalty = summary.scaled
    for i in simulation_range():
        candidate = accepted_layout.copy()
        candidate.shuffle(random.randrange(num_swaps) + 1)

        scaled = calculate_penalty(quartads, length, candidate, penalties, False).scaled

        if accept_transition(scaled - accepted_penalty, i):
            if debug:
                print(f"Iteration {i} accepted with penalty {_format_float(scaled)}")
            accepted_layout = candidate
            accepted_penalty = scaled
            insert_ordered(
                best_layouts, BestLayoutsEntry(candidate.copy(), scaled), top_layouts
            )

    for entry in best_layouts:
        detailed = calculate_penalty(quartads, length, entry.layout, penalties, True)
        print()
        print_result(entry.layout, detailed)

    return best_layouts


def refine(quartads, length, init_layout, penalties, debug, top_layouts, num_swaps):
    """Repeatedly move to the best layout within ``num_swaps`` swaps.

    Stops once no neighbouring layout improves the penalty, prints the
    winner and returns it.
    """
    if top_layouts < 1:
        raise ValueError("at least one top layout must be kept")

    summary = calculate_penalty(quartads, length, init_layout, penalties, True)
    print("Initial layout:")
    print_result(init_layout, summary)

    current = init_layout.copy()
    current_penalty = summary.scaled

    while True:
        best_layouts = []
        for i, candidate in enumerate(layout_permutations(current, num_swaps)):
            scaled = calculate_penalty(quartads, length, candidate, penalties, False).scaled
            if debug:
                print(f"Iteration {i}: {_format_float(scaled)}")
            insert_ordered(best_layouts, BestLayoutsEntry(candidate, scaled), top_layouts)

        for entry in best_layouts:
            detailed = calculate_penalty(quartads, length, entry.layout, penalties, True)
            print()
            print_result(entry.layout, detailed)

        winner = best_layouts[0]
        if current_penalty <= winner.penalty:
            break
        current = winner.layout
        current_penalty = winner.penalty

    print()
    print("Ultimate winner:")
    print(current)
    return current