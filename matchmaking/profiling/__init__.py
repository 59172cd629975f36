"""Profiling module: answers -> trait profile -> trait ranking."""

from .profile import compute_profile, profile_vector
from .ranking import derive_ranking, ranking_vector, top_trait

__all__ = [
    "compute_profile",
    "profile_vector",
    "derive_ranking",
    "ranking_vector",
    "top_trait",
]
