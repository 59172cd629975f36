"""
Personality profile computation.

Reduces one respondent's raw answers to a per-trait score by summing the
trait weights of every answered question. Questions the respondent left
out, and answers the weight table does not know, add nothing.
"""

import logging
from typing import Dict, Mapping, Optional

import numpy as np

from ..traits import TraitModel

logger = logging.getLogger(__name__)


def compute_profile(
    answers: Optional[Mapping[str, str]],
    trait_model: TraitModel
) -> Dict[str, int]:
    """
    Compute a personality profile from raw answers.

    Iterates over every question known to the trait model (not only the
    ones present in `answers`) and accumulates the weights of the given
    answer into the running per-trait total.

    Args:
        answers: Question id -> answer option; may be sparse or None
        trait_model: Trait model holding the weight table

    Returns:
        Dict trait -> non-negative integer score, in trait declaration order
    """
    profile = {trait: 0 for trait in trait_model.traits}
    if not answers:
        return profile

    for question in trait_model.questions:
        answer = answers.get(question)
        if answer is None:
            continue
        for trait, weight in trait_model.weights(question, answer).items():
            profile[trait] += weight

    return profile


def profile_vector(profile: Mapping[str, int], traits) -> np.ndarray:
    """
    Convert a profile to a score vector in trait declaration order.

    Args:
        profile: Trait -> score mapping
        traits: Declared traits

    Returns:
        Integer array of shape (n_traits,)

    Raises:
        ValueError: If the profile does not cover exactly the declared traits
    """
    if set(profile) != set(traits):
        raise ValueError(
            f"Profile traits {sorted(profile)} do not match declared traits {sorted(traits)}"
        )
    return np.array([profile[trait] for trait in traits], dtype=np.int64)
