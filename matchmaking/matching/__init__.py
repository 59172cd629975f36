"""Match engine: rank distance, match percentage, sorting and filtering."""

from .results import MatchResult
from .engine import (
    compute_matches,
    rank_distance,
    match_percentage,
    sort_matches,
    filter_matches,
    DEFAULT_MIN_PERCENTAGE,
)

__all__ = [
    "MatchResult",
    "compute_matches",
    "rank_distance",
    "match_percentage",
    "sort_matches",
    "filter_matches",
    "DEFAULT_MIN_PERCENTAGE",
]
