"""
Trait ranking derivation.

Turns a personality profile into an ordinal ranking: the strongest trait
gets rank 1, the weakest rank N. Equal scores are ordered by the traits'
declaration order, so every profile maps to exactly one permutation of
1..N and two identical profiles always get identical rankings.
"""

import logging
from typing import Dict, Mapping, Sequence

import numpy as np
from scipy.stats import rankdata

from .profile import profile_vector

logger = logging.getLogger(__name__)


def derive_ranking(profile: Mapping[str, int], traits: Sequence[str]) -> Dict[str, int]:
    """
    Derive the trait ranking of a profile.

    Uses ordinal ranking of the negated scores: rankdata's "ordinal"
    method assigns distinct ranks in order of appearance among ties,
    which is the declaration order of `traits`.

    Args:
        profile: Trait -> score mapping
        traits: Declared traits, in tie-break order

    Returns:
        Dict trait -> rank (1 = highest score), in trait declaration order

    Raises:
        ValueError: If the profile does not cover exactly the declared traits
    """
    scores = profile_vector(profile, traits)
    ranks = rankdata(-scores, method="ordinal")
    return {trait: int(rank) for trait, rank in zip(traits, ranks)}


def ranking_vector(ranking: Mapping[str, int], traits: Sequence[str]) -> np.ndarray:
    """
    Convert a ranking to a rank vector in trait declaration order.

    Args:
        ranking: Trait -> rank mapping
        traits: Declared traits

    Returns:
        Integer array of shape (n_traits,)

    Raises:
        ValueError: If the ranking does not cover exactly the declared
            traits, or is not a permutation of 1..N
    """
    if set(ranking) != set(traits):
        raise ValueError(
            f"Ranking traits {sorted(ranking)} do not match declared traits {sorted(traits)}"
        )

    values = [ranking[trait] for trait in traits]
    if any(isinstance(v, bool) or not isinstance(v, (int, np.integer)) for v in values):
        raise ValueError(f"Ranking must be a permutation of integers 1..{len(traits)}, got {dict(ranking)}")

    vector = np.array(values, dtype=np.int64)
    expected = np.arange(1, len(traits) + 1)
    if not np.array_equal(np.sort(vector), expected):
        raise ValueError(f"Ranking must be a permutation of 1..{len(traits)}, got {dict(ranking)}")

    return vector


def top_trait(ranking: Mapping[str, int]) -> str:
    """Return the trait ranked first."""
    return min(ranking, key=ranking.get)
