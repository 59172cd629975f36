"""
Tests for the match engine: rank distance, percentage, sorting and threshold.
"""

import copy
import itertools

import numpy as np
import pytest

from matchmaking.matching import (
    MatchResult,
    compute_matches,
    filter_matches,
    match_percentage,
    rank_distance,
    sort_matches,
)
from matchmaking.traits import max_rank_distance

TRAITS = ("creative", "intellectual", "innovative", "adventurous")

SUBJECT = {"creative": 1, "intellectual": 2, "innovative": 3, "adventurous": 4}
SWAPPED = {"creative": 2, "intellectual": 1, "innovative": 4, "adventurous": 3}
REVERSED = {"creative": 4, "intellectual": 3, "innovative": 2, "adventurous": 1}


def _all_rankings(traits):
    for perm in itertools.permutations(range(1, len(traits) + 1)):
        yield dict(zip(traits, perm))


# --- Rank distance and percentage ---


def test_pairwise_swaps_give_fifty_percent():
    assert rank_distance(SUBJECT, SWAPPED, TRAITS) == 4
    assert match_percentage(4, max_rank_distance(4)) == 50


def test_reversed_ranking_gives_zero_percent():
    assert rank_distance(SUBJECT, REVERSED, TRAITS) == 8
    assert match_percentage(8, 8) == 0


def test_self_match_is_one_hundred_percent():
    for ranking in _all_rankings(TRAITS):
        assert rank_distance(ranking, dict(ranking), TRAITS) == 0
    assert match_percentage(0, 8) == 100


@pytest.mark.parametrize("distance,expected", [
    (0, 100), (1, 88), (2, 75), (3, 63), (4, 50), (5, 38), (6, 25), (7, 13), (8, 0)
])
def test_halves_round_up(distance, expected):
    assert match_percentage(distance, 8) == expected


def test_percentage_works_on_arrays():
    result = match_percentage(np.array([0, 4, 8]), 8)
    assert result.tolist() == [100, 50, 0]


def test_distance_beyond_maximum_is_an_internal_error():
    with pytest.raises(RuntimeError):
        match_percentage(9, 8)
    with pytest.raises(RuntimeError):
        match_percentage(np.array([2, 10]), 8)


@pytest.mark.parametrize("n_traits", [2, 3, 4, 5])
def test_percentage_bounds_over_all_ranking_pairs(n_traits):
    traits = [f"t{i}" for i in range(n_traits)]
    rankings = list(_all_rankings(traits))
    max_distance = max_rank_distance(n_traits)
    observed_max = 0
    for a in rankings[:24]:
        for b in rankings:
            d = rank_distance(a, b, traits)
            observed_max = max(observed_max, d)
            assert 0 <= match_percentage(d, max_distance) <= 100
    assert observed_max == max_distance


def test_single_trait_always_matches_fully():
    assert compute_matches({"only": 1}, [({"only": 1}, {"email": "x"})], ["only"])[0].percentage == 100


# --- Sorting and filtering ---


def _result(email, percentage):
    return MatchResult(display={"email": email}, percentage=percentage)


def test_threshold_is_exclusive():
    results = [_result("a", 30), _result("b", 31), _result("c", 29), _result("d", 100)]
    kept = filter_matches(results)
    assert [r.display["email"] for r in kept] == ["b", "d"]


def test_custom_threshold():
    results = [_result("a", 50), _result("b", 51)]
    assert [r.display["email"] for r in filter_matches(results, 50)] == ["b"]
    assert len(filter_matches(results, 0)) == 2


def test_sort_is_descending_and_stable():
    results = [_result("a", 50), _result("b", 75), _result("c", 50), _result("d", 75), _result("e", 100)]
    ordered = sort_matches(results)
    assert [r.display["email"] for r in ordered] == ["e", "b", "d", "a", "c"]
    assert sort_matches([]) == []


# --- compute_matches ---


def test_compute_matches_scenarios():
    others = [
        (REVERSED, {"email": "reversed@example.org"}),
        (SWAPPED, {"email": "swapped@example.org"}),
        (dict(SUBJECT), {"email": "twin@example.org"}),
    ]
    matches = compute_matches(SUBJECT, others, TRAITS)
    assert [(m.display["email"], m.percentage) for m in matches] == [
        ("twin@example.org", 100),
        ("swapped@example.org", 50),
    ]


def test_empty_others_gives_empty_result():
    assert compute_matches(SUBJECT, [], TRAITS) == []


def test_equal_percentages_keep_input_order():
    others = [({"creative": 1, "intellectual": 2, "innovative": 4, "adventurous": 3}, {"email": f"p{i}"})
              for i in range(5)]
    matches = compute_matches(SUBJECT, others, TRAITS)
    assert [m.display["email"] for m in matches] == ["p0", "p1", "p2", "p3", "p4"]
    assert {m.percentage for m in matches} == {75}


def test_display_fields_pass_through_unchanged():
    display = {"name": "Asha", "email": "asha@example.org", "mobile_number": None,
               "origin": "Hyderabad", "batch": "UG2", "extra": [1, 2]}
    matches = compute_matches(SUBJECT, [(SWAPPED, display)], TRAITS)
    assert matches[0].display is display
    assert matches[0].to_dict() == dict(display, percentage=50)


def test_inputs_are_not_mutated():
    others = [(SWAPPED, {"email": "a"}), (REVERSED, {"email": "b"})]
    snapshot = copy.deepcopy(others)
    subject = dict(SUBJECT)
    compute_matches(subject, others, TRAITS)
    assert others == snapshot
    assert subject == SUBJECT


@pytest.mark.parametrize("bad", [
    {"creative": 1, "intellectual": 2, "innovative": 3},
    {"creative": 1, "intellectual": 2, "innovative": 3, "adventurous": 4, "cautious": 5},
    {"creative": 1, "intellectual": 2, "innovative": 3, "bold": 4},
    {"creative": 1, "intellectual": 1, "innovative": 3, "adventurous": 4},
    {"creative": 1.9, "intellectual": 2, "innovative": 3, "adventurous": 4},
])
def test_inconsistent_trait_coverage_is_rejected(bad):
    with pytest.raises(ValueError):
        compute_matches(SUBJECT, [(SWAPPED, {"email": "ok"}), (bad, {"email": "bad"})], TRAITS)
    with pytest.raises(ValueError):
        compute_matches(bad, [(SWAPPED, {"email": "ok"})], TRAITS)


def test_invalid_subject_is_rejected_even_without_others():
    with pytest.raises(ValueError):
        compute_matches({"creative": 1}, [], TRAITS)


def test_results_are_sorted_filtered_and_bounded():
    rankings = list(_all_rankings(TRAITS))
    others = [(r, {"email": f"r{i}"}) for i, r in enumerate(rankings)]
    matches = compute_matches(SUBJECT, others, TRAITS)
    percentages = [m.percentage for m in matches]
    assert percentages == sorted(percentages, reverse=True)
    assert all(30 < p <= 100 for p in percentages)
    assert percentages[0] == 100
    # Everything above the threshold survives
    expected = sum(
        1 for r in rankings
        if match_percentage(rank_distance(SUBJECT, r, TRAITS), 8) > 30
    )
    assert len(matches) == expected
