"""
Match computation for questionnaire respondents.

This module provides the matching entrypoint that:
1. Accepts a subject respondent and the collection of all respondents
2. Computes each respondent's trait profile and ranking
3. Scores the subject against everyone else by rank distance
4. Returns the sorted, filtered match list

The matchmaker holds only the (immutable) trait model and settings, so
one instance can serve any number of concurrent requests.
"""

import logging
from typing import Dict, List, Optional, Sequence

from joblib import Parallel, delayed

from ..configs import MatchingConfig
from ..matching import compute_matches
from ..profiling import compute_profile, derive_ranking
from ..traits import TraitModel
from .schema import Respondent, MatchResponse

logger = logging.getLogger(__name__)


class Matchmaker:
    """
    Personality matchmaker over a fixed trait model.

    Attributes:
        trait_model: Trait model (traits and weight table)
        config: Matching settings (threshold, parallelism)
    """

    def __init__(self, trait_model: TraitModel, config: Optional[MatchingConfig] = None):
        """
        Initialize the matchmaker.

        Args:
            trait_model: Validated trait model
            config: Matching settings; defaults to MatchingConfig()
        """
        self.trait_model = trait_model
        self.config = config or MatchingConfig()
        self.config.validate()
        logger.info(
            f"Initialized Matchmaker with traits={list(trait_model.traits)}, "
            f"min_percentage={self.config.min_percentage}"
        )

    def profile(self, respondent: Respondent) -> Dict[str, int]:
        """Compute the trait profile of a respondent."""
        return compute_profile(respondent.answers, self.trait_model)

    def ranking(self, respondent: Respondent) -> Dict[str, int]:
        """Compute the trait ranking of a respondent."""
        return derive_ranking(self.profile(respondent), self.trait_model.traits)

    def match(
        self,
        subject: Respondent,
        respondents: Sequence[Respondent]
    ) -> MatchResponse:
        """
        Compute matches for one subject.

        The subject itself is skipped if present in `respondents`
        (identity compared case-insensitively).

        Args:
            subject: Respondent to find matches for
            respondents: Candidate respondents

        Returns:
            MatchResponse with matches sorted by descending percentage
        """
        subject_profile = self.profile(subject)
        subject_ranking = derive_ranking(subject_profile, self.trait_model.traits)
        logger.debug(f"Profile for {subject.email}: {subject_profile}")
        logger.debug(f"Ranking for {subject.email}: {subject_ranking}")

        others = [
            (self.ranking(other), other.display_fields())
            for other in respondents
            if other.identity_key != subject.identity_key
        ]

        matches = compute_matches(
            subject_ranking,
            others,
            self.trait_model.traits,
            min_percentage=self.config.min_percentage
        )
        logger.info(f"Found {len(matches)}/{len(others)} matches for {subject.email}")

        return MatchResponse(email=subject.email, matches=matches)

    def match_all(
        self,
        respondents: Sequence[Respondent],
        n_jobs: Optional[int] = None
    ) -> List[MatchResponse]:
        """
        Compute matches for every respondent against all the others.

        Subjects are processed in parallel with joblib; each subject is
        independent of the others.

        Args:
            respondents: All respondents
            n_jobs: joblib worker count; defaults to config.n_jobs

        Returns:
            List of MatchResponse objects, in the order of `respondents`
        """
        n_jobs = self.config.n_jobs if n_jobs is None else n_jobs
        logger.info(f"Matching {len(respondents)} respondents (n_jobs={n_jobs})")

        if n_jobs == 1:
            return [self.match(subject, respondents) for subject in respondents]

        return Parallel(n_jobs=n_jobs)(
            delayed(self.match)(subject, respondents) for subject in respondents
        )


def create_matchmaker(
    mapping_file: Optional[str] = None,
    config: Optional[MatchingConfig] = None
) -> Matchmaker:
    """
    Factory function to create a Matchmaker.

    Args:
        mapping_file: Path to a trait mapping YAML; falls back to
            config.mapping_file, then to the packaged questionnaire
        config: Matching settings

    Returns:
        Configured Matchmaker instance
    """
    # Imported here to avoid circular imports
    from ..data_loading import load_trait_model

    config = config or MatchingConfig()
    trait_model = load_trait_model(mapping_file or config.mapping_file)
    return Matchmaker(trait_model, config)
