"""
Tests for batch-run evaluation metrics.
"""

import json

import pytest

from matchmaking.evaluation import (
    compute_score_distribution_stats,
    compute_trait_dominance,
    create_match_report,
)
from matchmaking.inference import MatchResponse
from matchmaking.matching import MatchResult

TRAITS = ("creative", "intellectual", "innovative", "adventurous")


def test_score_distribution_stats():
    stats = compute_score_distribution_stats([50, 75, 100], quantiles=[0.5])
    assert stats.mean == pytest.approx(75.0)
    assert stats.min == 50.0
    assert stats.max == 100.0
    assert stats.quantiles == {"p50": 75.0}


def test_score_distribution_stats_needs_scores():
    with pytest.raises(ValueError):
        compute_score_distribution_stats([])


def test_trait_dominance():
    rankings = [
        {"creative": 1, "intellectual": 2, "innovative": 3, "adventurous": 4},
        {"creative": 2, "intellectual": 1, "innovative": 3, "adventurous": 4},
        {"creative": 1, "intellectual": 3, "innovative": 2, "adventurous": 4},
        {"creative": 4, "intellectual": 3, "innovative": 2, "adventurous": 1},
    ]
    assert compute_trait_dominance(rankings, TRAITS) == {
        "creative": 0.5, "intellectual": 0.25, "innovative": 0.0, "adventurous": 0.25
    }
    assert compute_trait_dominance([], TRAITS) == {t: 0.0 for t in TRAITS}


def test_match_report(tmp_path, matchmaker, respondents):
    responses = matchmaker.match_all(respondents)
    rankings = [matchmaker.ranking(r) for r in respondents]
    report = create_match_report(responses, rankings, TRAITS)

    assert report.n_subjects == 5
    # meera has no matches above 30%
    assert report.n_subjects_with_matches == 4
    assert report.distribution_stats.max == 100.0
    assert report.distribution_stats.min > 30
    assert report.trait_dominance["creative"] == pytest.approx(0.4)

    path = tmp_path / "report.json"
    report.save(str(path))
    saved = json.loads(path.read_text())
    assert saved["n_subjects"] == 5
    assert "distribution_stats" in saved
    assert "Subjects with matches: 4" in report.summary()


def test_match_report_without_matches():
    report = create_match_report([MatchResponse(email="a"), MatchResponse(email="b")])
    assert report.n_subjects == 2
    assert report.n_subjects_with_matches == 0
    assert report.mean_matches_per_subject == 0.0
    assert report.distribution_stats is None
    assert "distribution_stats" not in report.to_dict()


def test_match_report_counts():
    responses = [
        MatchResponse(email="a", matches=[MatchResult({"email": "b"}, 88), MatchResult({"email": "c"}, 50)]),
        MatchResponse(email="b", matches=[MatchResult({"email": "a"}, 88)]),
        MatchResponse(email="c"),
    ]
    report = create_match_report(responses)
    assert report.n_subjects_with_matches == 2
    assert report.mean_matches_per_subject == pytest.approx(1.0)
    assert report.trait_dominance == {}
