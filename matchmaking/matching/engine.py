"""
Rank-distance matching between respondents.

For a subject and a collection of other respondents this module:
1. Computes the rank distance |subject[t] - other[t]| summed over traits
2. Normalizes it against the full-reversal distance of N traits
3. Converts it to an integer match percentage (0 - 100)
4. Sorts by descending percentage (stable) and keeps results above a threshold

Percentage Formula:
    percentage = round((1 - rank_distance / max_rank_distance) * 100)

Halves round up (87.5 -> 88). The arithmetic is done on integers so no
floating point error can move a result across the threshold.
"""

import logging
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

import numpy as np
from sklearn.metrics.pairwise import manhattan_distances

from .results import MatchResult
from ..profiling.ranking import ranking_vector
from ..traits import max_rank_distance

logger = logging.getLogger(__name__)

DEFAULT_MIN_PERCENTAGE = 30


def rank_distance(
    ranking_a: Mapping[str, int],
    ranking_b: Mapping[str, int],
    traits: Sequence[str]
) -> int:
    """
    Sum of absolute rank differences between two rankings.

    Args:
        ranking_a: First trait ranking
        ranking_b: Second trait ranking
        traits: Declared traits

    Returns:
        Rank distance in [0, max_rank_distance(len(traits))]
    """
    a = ranking_vector(ranking_a, traits)
    b = ranking_vector(ranking_b, traits)
    return int(np.abs(a - b).sum())


def match_percentage(
    distance: Union[int, np.ndarray],
    max_distance: int
) -> Union[int, np.ndarray]:
    """
    Convert rank distance(s) to match percentage(s).

    Computes round((1 - distance / max_distance) * 100) with halves
    rounded up, as floor((200 * (max - d) + max) / (2 * max)).

    Args:
        distance: Rank distance, or array of distances
        max_distance: Full-reversal rank distance for the trait count

    Returns:
        Integer percentage (or integer array) in [0, 100]

    Raises:
        RuntimeError: If a percentage falls outside [0, 100]; this only
            happens when a distance exceeds the theoretical maximum
    """
    d = np.asarray(distance, dtype=np.int64)
    if max_distance <= 0:
        # A single trait can only ever produce identical rankings
        percentage = np.full(d.shape, 100, dtype=np.int64)
    else:
        percentage = (200 * (max_distance - d) + max_distance) // (2 * max_distance)

    if np.any(percentage < 0) or np.any(percentage > 100):
        raise RuntimeError(
            f"Match percentage outside [0, 100] for distance(s) {d.tolist()} "
            f"with max distance {max_distance}"
        )

    if np.ndim(percentage) == 0:
        return int(percentage)
    return percentage


def sort_matches(results: Sequence[MatchResult]) -> List[MatchResult]:
    """
    Sort results by descending percentage.

    Equal percentages keep their input order.
    """
    if not results:
        return []
    percentages = np.array([r.percentage for r in results], dtype=np.int64)
    order = np.argsort(-percentages, kind="stable")
    return [results[i] for i in order]


def filter_matches(
    results: Sequence[MatchResult],
    min_percentage: int = DEFAULT_MIN_PERCENTAGE
) -> List[MatchResult]:
    """
    Keep results strictly above `min_percentage` (exactly 30 is dropped).
    """
    return [r for r in results if r.percentage > min_percentage]


def compute_matches(
    subject_ranking: Mapping[str, int],
    others: Sequence[Tuple[Mapping[str, int], Dict[str, Any]]],
    traits: Sequence[str],
    min_percentage: int = DEFAULT_MIN_PERCENTAGE
) -> List[MatchResult]:
    """
    Match one subject against a collection of other respondents.

    Args:
        subject_ranking: Trait ranking of the subject
        others: Sequence of (trait ranking, display fields) pairs
        traits: Declared traits; every ranking must cover exactly these
        min_percentage: Results must score strictly above this to be kept

    Returns:
        Match results sorted by descending percentage, ties in input
        order, filtered to percentage > min_percentage

    Raises:
        ValueError: If any ranking does not cover the declared traits
            as a permutation of 1..N
    """
    subject = ranking_vector(subject_ranking, traits)

    if len(others) == 0:
        return []

    # Validate every ranking before computing anything
    other_matrix = np.vstack([ranking_vector(ranking, traits) for ranking, _ in others])

    distances = manhattan_distances(subject.reshape(1, -1), other_matrix)[0]
    distances = np.rint(distances).astype(np.int64)

    max_distance = max_rank_distance(len(traits))
    percentages = match_percentage(distances, max_distance)

    results = [
        MatchResult(display=display, percentage=int(percentage))
        for (_, display), percentage in zip(others, percentages)
    ]

    ordered = sort_matches(results)
    kept = filter_matches(ordered, min_percentage)
    logger.debug(f"Scored {len(results)} candidates, kept {len(kept)} above {min_percentage}%")
    return kept
