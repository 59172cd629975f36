"""
Evaluation metrics for batch matching runs.

There is no ground truth for "good" matches, so evaluation describes
the output of a run rather than scoring it:
1. Match percentage distribution
2. Match coverage (how many respondents got at least one match)
3. Trait dominance (which traits respondents rank first)
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Any, Mapping, Optional, Sequence
import json

import numpy as np

from ..inference.schema import MatchResponse
from ..profiling.ranking import top_trait

logger = logging.getLogger(__name__)


@dataclass
class ScoreDistributionStats:
    """Statistics about match percentage distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 38.0, "p50": 62.0, "p90": 88.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class MatchReport:
    """
    Summary of a batch matching run.

    Attributes:
        n_subjects: Number of respondents matched
        n_subjects_with_matches: Respondents with at least one match kept
        mean_matches_per_subject: Average length of the kept match lists
        distribution_stats: Distribution of kept match percentages (None if no matches)
        trait_dominance: Share of respondents ranking each trait first
    """
    n_subjects: int
    n_subjects_with_matches: int
    mean_matches_per_subject: float
    distribution_stats: Optional[ScoreDistributionStats] = None
    trait_dominance: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "n_subjects": int(self.n_subjects),
            "n_subjects_with_matches": int(self.n_subjects_with_matches),
            "mean_matches_per_subject": float(self.mean_matches_per_subject),
            "trait_dominance": {k: float(v) for k, v in self.trait_dominance.items()}
        }
        if self.distribution_stats:
            result["distribution_stats"] = self.distribution_stats.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved match report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            "Match Report",
            "=" * 50,
            "",
            f"Subjects:              {self.n_subjects}",
            f"Subjects with matches: {self.n_subjects_with_matches}",
            f"Matches per subject:   {self.mean_matches_per_subject:.2f}",
        ]

        if self.distribution_stats:
            lines.extend([
                "",
                "Match Percentage Distribution:",
                f"  Mean: {self.distribution_stats.mean:.2f}",
                f"  Std:  {self.distribution_stats.std:.2f}",
                f"  Min:  {self.distribution_stats.min:.0f}",
                f"  Max:  {self.distribution_stats.max:.0f}",
            ])
            for q_name, q_value in self.distribution_stats.quantiles.items():
                lines.append(f"  {q_name}: {q_value:.2f}")

        if self.trait_dominance:
            lines.extend(["", "Top Trait Share:"])
            for trait, share in self.trait_dominance.items():
                lines.append(f"  {trait}: {share:.2%}")

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: Sequence[float],
    quantiles: List[float] = [0.1, 0.25, 0.5, 0.75, 0.9]
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for match percentages.

    Args:
        scores: Match percentages
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance

    Raises:
        ValueError: If `scores` is empty
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        raise ValueError("Cannot compute distribution of an empty score list")

    quantile_dict = {
        f"p{int(q * 100)}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def compute_trait_dominance(
    rankings: Sequence[Mapping[str, int]],
    traits: Sequence[str]
) -> Dict[str, float]:
    """
    Share of rankings that put each trait first.

    Args:
        rankings: Trait rankings, one per respondent
        traits: Declared traits (every trait appears in the result)

    Returns:
        Dict trait -> share in [0, 1], in trait declaration order
    """
    counts = {trait: 0 for trait in traits}
    for ranking in rankings:
        counts[top_trait(ranking)] += 1

    total = len(rankings)
    return {trait: (count / total if total else 0.0) for trait, count in counts.items()}


def create_match_report(
    responses: Sequence[MatchResponse],
    rankings: Optional[Sequence[Mapping[str, int]]] = None,
    traits: Optional[Sequence[str]] = None,
    quantiles: List[float] = [0.1, 0.25, 0.5, 0.75, 0.9]
) -> MatchReport:
    """
    Create a report for a batch matching run.

    Args:
        responses: Match responses, one per subject
        rankings: Trait rankings of the subjects (for trait dominance)
        traits: Declared traits (required with `rankings`)
        quantiles: Quantiles to compute

    Returns:
        MatchReport instance
    """
    match_counts = [len(r.matches) for r in responses]
    percentages = [m.percentage for r in responses for m in r.matches]

    dist_stats = None
    if percentages:
        dist_stats = compute_score_distribution_stats(percentages, quantiles)

    dominance = {}
    if rankings is not None and traits is not None:
        dominance = compute_trait_dominance(rankings, traits)

    return MatchReport(
        n_subjects=len(responses),
        n_subjects_with_matches=sum(1 for c in match_counts if c > 0),
        mean_matches_per_subject=float(np.mean(match_counts)) if match_counts else 0.0,
        distribution_stats=dist_stats,
        trait_dominance=dominance
    )
