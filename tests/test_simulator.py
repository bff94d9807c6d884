import pytest

from keyopt.layout import INIT_LAYOUT, QWERTY_LAYOUT
from keyopt.penalty import (
    KeyPenaltyResult,
    PenaltySummary,
    calculate_penalty,
    init,
    prepare_quartad_list,
)
from keyopt.simulator import (
    BestLayoutsEntry,
    format_result,
    insert_ordered,
    print_result,
    refine,
    simulate,
)

CORPUS = "the quick brown fox jumps over the lazy dog"


@pytest.fixture
def scoring():
    quartads = prepare_quartad_list(CORPUS, INIT_LAYOUT.position_map())
    return quartads, len(CORPUS), init()


def test_insert_ordered_keeps_ascending_order():
    best = []
    for penalty in (3.0, 1.0, 2.0, 0.5):
        insert_ordered(best, BestLayoutsEntry(INIT_LAYOUT.copy(), penalty), 10)
    assert [entry.penalty for entry in best] == [0.5, 1.0, 2.0, 3.0]


def test_insert_ordered_places_ties_after_existing():
    first = BestLayoutsEntry(INIT_LAYOUT.copy(), 1.0)
    second = BestLayoutsEntry(QWERTY_LAYOUT.copy(), 1.0)
    best = [first]
    insert_ordered(best, second, 5)
    assert best[0] is first
    assert best[1] is second


def test_insert_ordered_truncates_to_limit():
    best = []
    for penalty in (5.0, 4.0, 3.0, 2.0, 1.0):
        insert_ordered(best, BestLayoutsEntry(INIT_LAYOUT.copy(), penalty), 2)
    assert [entry.penalty for entry in best] == [1.0, 2.0]


def test_insert_ordered_limit_zero_empties():
    best = []
    insert_ordered(best, BestLayoutsEntry(INIT_LAYOUT.copy(), 1.0), 0)
    assert best == []


def test_format_result_header_and_total_line():
    summary = PenaltySummary(12.0, 1.5, [])
    lines = format_result(INIT_LAYOUT, summary).split("\n")
    assert "\n".join(lines[:4]) == str(INIT_LAYOUT)
    assert lines[4] == "total: 12; scaled: 1.5"


def test_format_result_sorts_high_keys_by_magnitude():
    result = KeyPenaltyResult("base", 3.0, {"a": 1.0, "b": -2.0})
    text = format_result(INIT_LAYOUT, PenaltySummary(3.0, 3.0, [result]))
    assert text.split("\n")[-1] == "base: 3  /  b: -2; a: 1;"


def test_format_result_shows_at_most_five_keys():
    keys = {c: float(n) for n, c in enumerate("abcdefg", start=1)}
    result = KeyPenaltyResult("base", sum(keys.values()), keys)
    line = format_result(INIT_LAYOUT, PenaltySummary(0.0, 0.0, [result])).split("\n")[-1]
    assert line.count(";") == 5
    assert " a:" not in line and " b:" not in line
    assert " g:" in line


def test_format_result_one_line_per_rule(scoring):
    quartads, length, penalties = scoring
    summary = calculate_penalty(quartads, length, INIT_LAYOUT, penalties, True)
    lines = format_result(INIT_LAYOUT, summary).split("\n")
    assert len(lines) == 4 + 1 + len(penalties)
    assert lines[5].startswith("base: ")


def test_print_result_matches_format(capsys, scoring):
    quartads, length, penalties = scoring
    summary = calculate_penalty(quartads, length, QWERTY_LAYOUT, penalties, True)
    print_result(QWERTY_LAYOUT, summary)
    assert capsys.readouterr().out == format_result(QWERTY_LAYOUT, summary) + "\n"


def test_refine_never_gets_worse(capsys, scoring):
    quartads, length, penalties = scoring
    start = calculate_penalty(quartads, length, INIT_LAYOUT, penalties, False).scaled
    winner = refine(quartads, length, INIT_LAYOUT, penalties, False, 1, 1)
    final = calculate_penalty(quartads, length, winner, penalties, False).scaled
    assert final <= start
    out = capsys.readouterr().out
    assert out.startswith("Initial layout:\n")
    assert out.endswith("Ultimate winner:\n" + str(winner) + "\n")


def test_refine_leaves_input_untouched(capsys, scoring):
    quartads, length, penalties = scoring
    original = INIT_LAYOUT.copy()
    refine(quartads, length, original, penalties, False, 1, 1)
    assert original == INIT_LAYOUT


def test_refine_requires_a_top_layout(scoring):
    quartads, length, penalties = scoring
    with pytest.raises(ValueError):
        refine(quartads, length, INIT_LAYOUT, penalties, False, 0, 1)


def test_simulate_rejects_zero_swaps(scoring):
    quartads, length, penalties = scoring
    with pytest.raises(ValueError):
        simulate(quartads, length, INIT_LAYOUT, penalties, False, 1, 0)


def test_simulate_returns_sorted_best_layouts(capsys):
    corpus = "abc"
    quartads = prepare_quartad_list(corpus, INIT_LAYOUT.position_map())
    penalties = init()
    best = simulate(quartads, len(corpus), INIT_LAYOUT, penalties, False, 2, 2)
    assert 1 <= len(best) <= 2
    scores = [entry.penalty for entry in best]
    assert scores == sorted(scores)
    for entry in best:
        recomputed = calculate_penalty(quartads, len(corpus), entry.layout, penalties, False)
        assert recomputed.scaled == pytest.approx(entry.penalty)
        assert sorted(entry.layout.lower) == sorted(INIT_LAYOUT.lower)
    assert capsys.readouterr().out.count("total: ") == len(best)