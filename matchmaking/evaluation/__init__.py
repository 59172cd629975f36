"""Evaluation module for batch matching runs."""

from .metrics import (
    compute_score_distribution_stats,
    compute_trait_dominance,
    MatchReport,
    create_match_report
)

__all__ = [
    "compute_score_distribution_stats",
    "compute_trait_dominance",
    "MatchReport",
    "create_match_report"
]
