"""Scoring of keyboard layouts against a text corpus.

A corpus is reduced to a count of "quartads": every run of up to four
consecutive typeable characters ending at each typeable character. Each
quartad is scored by looking at its last keystroke and up to three
preceding ones.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import NamedTuple

from keyopt.layout import Finger, Row

# Cost of pressing each key position on its own.
BASE_PENALTY = (
    1.5, 1.0, 1.0, 1.5, 3.0,    3.0, 1.5, 1.0, 1.0, 1.5, 4.0,
    0.5, 0.5, 0.25, 0.25, 1.5,  1.5, 0.25, 0.25, 0.5, 0.5, 2.0,
    2.0, 2.0, 1.5, 1.5, 2.5,    2.5, 1.5, 1.5, 2.0, 2.0,
    0.0, 0.0,
)

_PENALTY_NAMES = (
    # Same finger twice; extra for the centre column.
    "same finger",
    # Top-to-bottom or bottom-to-top row jump on the same hand.
    "long jump hand",
    # Top-to-bottom or bottom-to-top row jump on the same finger.
    "long jump",
    # Row jump on consecutive fingers.
    "long jump consecutive",
    # Pinky reaching above the ring finger.
    "pinky/ring twist",
    # Ring, pinky, middle (or middle, pinky, ring) on one hand.
    "roll reversal",
    # Same hand four times in a row.
    "same hand",
    # Alternating hands three times in a row.
    "alternating hand",
    # Rolling outwards.
    "roll out",
    # Rolling inwards (a bonus).
    "roll in",
    # Row jump on the same finger with one keystroke in between.
    "long jump sandwich",
    # Three keystrokes rolling across all three rows.
    "twist",
    # Returning to the finger used two keystrokes ago.
    "aba",
)

(
    _BASE, _SAME_FINGER, _LONG_JUMP_HAND, _LONG_JUMP, _LONG_JUMP_CONSECUTIVE,
    _PINKY_RING_TWIST, _ROLL_REVERSAL, _SAME_HAND, _ALTERNATING_HAND,
    _ROLL_OUT, _ROLL_IN, _LONG_JUMP_SANDWICH, _TWIST, _ABA,
) = range(14)


def _format_float(value):
    """Render a float in plain decimal notation, dropping a zero fraction."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True)
class KeyPenalty:
    """A named scoring rule."""

    name: str


@dataclass
class KeyPenaltyResult:
    """Accumulated score of one rule, with the key sequences that caused it."""

    name: str
    total: float = 0.0
    high_keys: dict = field(default_factory=dict)

    def add(self, keys, amount):
        self.high_keys[keys] = self.high_keys.get(keys, 0.0) + amount
        self.total += amount

    def __str__(self):
        return f"{self.name}: {_format_float(self.total)}"


class PenaltySummary(NamedTuple):
    """Total penalty, penalty per corpus character, and per-rule details."""

    total: float
    scaled: float
    results: list


def init():
    """Return the scoring rules in the order their results are reported."""
    return [KeyPenalty("base")] + [KeyPenalty(name) for name in _PENALTY_NAMES]


def prepare_quartad_list(string, position_map):
    """Count every run of up to four typeable characters in ``string``.

    A character is typeable if ``position_map`` knows it; any other
    character breaks the run.
    """
    quartads = Counter()
    start = 0
    for end, char in enumerate(string, start=1):
        if char in position_map:
            start = max(start, end - 4)
            quartads[string[start:end]] += 1
        else:
            start = end
    return quartads


def calculate_penalty(quartads, length, layout, penalties, detailed):
    """Score ``layout`` against counted ``quartads`` from a corpus of ``length``.

    With ``detailed`` set, the per-rule breakdown is returned too, one
    result for each entry of ``penalties``.
    """
    results = (
        [KeyPenaltyResult(penalty.name) for penalty in penalties] if detailed else []
    )
    position_map = layout.position_map()
    total = 0.0
    for string, count in quartads.items():
        total += _penalty_for_quartad(string, count, position_map, results, detailed)

    if length:
        scaled = total / length
    else:
        scaled = math.copysign(math.inf, total) if total else math.nan
    return PenaltySummary(total, scaled, results)


def is_roll_out(curr, prev):
    """True if moving from finger ``prev`` to ``curr`` rolls towards the pinky."""
    if curr is Finger.THUMB:
        return False
    if curr is Finger.INDEX:
        return prev is Finger.THUMB
    if curr is Finger.MIDDLE:
        return prev in (Finger.THUMB, Finger.INDEX)
    if curr is Finger.RING:
        return prev not in (Finger.PINKY, Finger.RING)
    return prev is not Finger.PINKY


def is_roll_in(curr, prev):
    """True if moving from finger ``prev`` to ``curr`` rolls towards the thumb."""
    if curr is Finger.THUMB:
        return prev is not Finger.THUMB
    if curr is Finger.INDEX:
        return prev not in (Finger.THUMB, Finger.INDEX)
    if curr is Finger.MIDDLE:
        return prev in (Finger.PINKY, Finger.RING)
    if curr is Finger.RING:
        return prev is Finger.PINKY
    return False


def _is_long_jump(row_a, row_b):
    return (row_a is Row.TOP and row_b is Row.BOTTOM) or (
        row_a is Row.BOTTOM and row_b is Row.TOP
    )


def _penalty_for_quartad(string, count, position_map, results, detailed):
    chars = string[::-1]
    curr = position_map.key_position(chars[0])
    if curr is None:
        return 0.0
    older = [position_map.key_position(c) for c in chars[1:4]]
    older += [None] * (3 - len(older))
    return _penalize(string, count, curr, *older, results, detailed)


def _penalize(string, count, curr, old1, old2, old3, results, detailed):
    count = float(count)
    total = 0.0

    def add(index, width, amount):
        nonlocal total
        if detailed:
            results[index].add(string[-width:], amount)
        total += amount

    # One key penalties.
    add(_BASE, 1, BASE_PENALTY[curr.pos] * count)

    # Two key penalties.
    if old1 is None:
        return total

    if curr.hand is old1.hand:
        long_jump = _is_long_jump(curr.row, old1.row)

        if curr.finger is old1.finger:
            if curr.pos == old1.pos:
                amount = 3.0
            else:
                amount = 5.0 + (5.0 if curr.center else 0.0) + (5.0 if old1.center else 0.0)
            add(_SAME_FINGER, 2, amount * count)

        if long_jump:
            add(_LONG_JUMP_HAND, 2, count)

        if curr.finger is old1.finger and long_jump:
            add(_LONG_JUMP, 2, 10.0 * count)

        if long_jump:
            pair = (curr.finger, old1.finger)
            if pair in (
                (Finger.RING, Finger.PINKY),
                (Finger.PINKY, Finger.RING),
                (Finger.MIDDLE, Finger.RING),
                (Finger.RING, Finger.MIDDLE),
            ) or (
                curr.finger is Finger.INDEX
                and old1.finger in (Finger.MIDDLE, Finger.RING)
                and curr.row is Row.TOP
                and old1.row is Row.BOTTOM
            ):
                add(_LONG_JUMP_CONSECUTIVE, 2, 5.0 * count)

        if (
            curr.finger is Finger.RING
            and old1.finger is Finger.PINKY
            and curr.row in (Row.HOME, Row.BOTTOM)
            and old1.row is Row.TOP
        ) or (
            curr.finger is Finger.PINKY
            and old1.finger is Finger.RING
            and curr.row is Row.TOP
            and old1.row in (Row.HOME, Row.BOTTOM)
        ):
            add(_PINKY_RING_TWIST, 2, 10.0 * count)

        if old1.finger is not Finger.THUMB and is_roll_out(curr.finger, old1.finger):
            add(_ROLL_OUT, 2, 0.125 * count)

        if is_roll_in(curr.finger, old1.finger):
            add(_ROLL_IN, 2, -0.125 * count)

    # Three key penalties.
    if old2 is None:
        return total

    if curr.hand is old1.hand and old1.hand is old2.hand:
        fingers = (curr.finger, old1.finger, old2.finger)
        if fingers in (
            (Finger.MIDDLE, Finger.PINKY, Finger.RING),
            (Finger.RING, Finger.PINKY, Finger.MIDDLE),
        ):
            add(_ROLL_REVERSAL, 3, 20.0 * count)

        rows = (curr.row, old1.row, old2.row)
        if rows in ((Row.TOP, Row.HOME, Row.BOTTOM), (Row.BOTTOM, Row.HOME, Row.TOP)) and (
            (is_roll_out(curr.finger, old1.finger) and is_roll_out(old1.finger, old2.finger))
            or (is_roll_in(curr.finger, old1.finger) and is_roll_in(old1.finger, old2.finger))
        ):
            add(_TWIST, 3, 10.0 * count)

        if curr.finger is old2.finger:
            add(_ABA, 3, 2.0 * count)

    if (
        curr.hand is old2.hand
        and curr.finger is old2.finger
        and _is_long_jump(curr.row, old2.row)
    ):
        add(_LONG_JUMP_SANDWICH, 3, 3.0 * count)

    # Four key penalties.
    if old3 is None:
        return total

    if curr.hand is old1.hand and old1.hand is old2.hand and old2.hand is old3.hand:
        add(_SAME_HAND, 4, 0.5 * count)
    elif (
        curr.hand is not old1.hand
        and old1.hand is not old2.hand
        and old2.hand is not old3.hand
    ):
        add(_ALTERNATING_HAND, 4, 0.5 * count)

    return total