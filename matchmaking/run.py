"""
Batch runner for the matchmaking engine.

This is the single entrypoint for computing matches outside a web service.

Usage:
    python -m matchmaking.run --config configs/config.yaml
    python -m matchmaking.run --config configs/config.yaml --subject someone@example.org

The runner performs the following steps:
1. Load and validate configuration
2. Load the trait model (questionnaire weight table)
3. Load respondents
4. Compute matches (one subject, or every respondent)
5. Write match lists, a match report and run metadata
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Any, List, Optional
from datetime import datetime
import json

import numpy as np

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def run_matching(
    config_path: str,
    respondents_path: Optional[str] = None,
    subject_email: Optional[str] = None,
    output_dir: Optional[str] = None
) -> Dict[str, Any]:
    """
    Run a batch matching job.

    Args:
        config_path: Path to the configuration YAML file
        respondents_path: If provided, overrides data.respondents.path
        subject_email: If provided, compute matches for this respondent only
        output_dir: If provided, write outputs here instead of config default

    Returns:
        Dictionary with run results and paths to outputs
    """
    from .configs import load_config, validate_config, get_config_value, MatchingConfig
    from .data_loading import load_trait_model, load_respondents
    from .inference import Matchmaker
    from .evaluation import create_match_report

    # =========================================================================
    # 1. Load and validate configuration
    # =========================================================================
    logger.info("=" * 60)
    logger.info("PERSONALITY MATCHMAKING")
    logger.info("=" * 60)

    config = load_config(config_path)
    issues = validate_config(config)
    if issues:
        for issue in issues:
            logger.warning(f"Config issue: {issue}")

    setup_logging(get_config_value(config, "global.log_level", "INFO"))

    matching_config = MatchingConfig.from_config(config)
    matching_config.validate()

    # =========================================================================
    # 2. Load trait model
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 1: Loading Trait Model")
    logger.info("=" * 60)

    trait_model = load_trait_model(matching_config.mapping_file)
    logger.info(f"Traits: {list(trait_model.traits)}")
    logger.info(f"Max rank distance: {trait_model.max_rank_distance}")

    # =========================================================================
    # 3. Load respondents
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 2: Loading Respondents")
    logger.info("=" * 60)

    data_path = respondents_path or get_config_value(config, "data.respondents.path")
    data_format = get_config_value(config, "data.respondents.format")
    if data_path is None:
        raise ValueError("No respondents file given (data.respondents.path or --respondents)")

    respondents = load_respondents(data_path, fmt=data_format)
    _warn_unknown_answers(respondents, trait_model)

    # =========================================================================
    # 4. Compute matches
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 3: Computing Matches")
    logger.info("=" * 60)

    matchmaker = Matchmaker(trait_model, matching_config)

    if subject_email is not None:
        subjects = [r for r in respondents if r.identity_key == subject_email.lower()]
        if not subjects:
            raise ValueError(f"Subject not found among respondents: {subject_email}")
        responses = [matchmaker.match(subjects[0], respondents)]
    else:
        subjects = respondents
        responses = matchmaker.match_all(respondents)

    rankings = [matchmaker.ranking(subject) for subject in subjects]
    report = create_match_report(responses, rankings, trait_model.traits)
    logger.info("\n" + report.summary())

    # =========================================================================
    # 5. Save outputs
    # =========================================================================
    out_dir = Path(output_dir or get_config_value(config, "global.output_dir", "outputs"))
    out_dir.mkdir(parents=True, exist_ok=True)

    matches_path = out_dir / "matches.json"
    with open(matches_path, "w") as f:
        json.dump([response.to_dict() for response in responses], f, indent=2)
    logger.info(f"Saved {len(responses)} match lists to {matches_path}")

    report.save(str(out_dir / "match_report.json"))
    matching_config.save(str(out_dir / "matching_config.json"))

    metadata = {
        "run_timestamp": datetime.now().isoformat(),
        "config_path": config_path,
        "respondents_path": str(data_path),
        "n_respondents": len(respondents),
        "n_subjects": len(responses),
        "subject": subject_email,
        "traits": list(trait_model.traits),
        "n_questions": len(trait_model.questions),
    }
    with open(out_dir / "metadata.json", "w") as f:
        json.dump(metadata, f, indent=2)

    logger.info("\n" + "=" * 60)
    logger.info("MATCHING COMPLETE")
    logger.info("=" * 60)

    return {
        "success": True,
        "output_dir": str(out_dir),
        "responses": responses,
        "report": report,
        "metadata": metadata
    }


def _warn_unknown_answers(respondents, trait_model) -> None:
    """Log answers missing from the weight table; they score zero."""
    n_unknown = 0
    for respondent in respondents:
        for question, answer in respondent.answers.items():
            if answer not in trait_model.answer_options(question):
                n_unknown += 1
                logger.debug(f"{respondent.email}: unscored answer {question}={answer!r}")
    if n_unknown:
        logger.warning(f"{n_unknown} answers are not in the weight table and will score zero")


def create_synthetic_respondents(
    trait_model,
    n_samples: int = 50,
    answer_rate: float = 0.9,
    random_seed: int = 42
) -> List[Any]:
    """
    Create synthetic respondents for demonstration and smoke testing.

    Args:
        trait_model: Trait model whose questions are answered
        n_samples: Number of respondents
        answer_rate: Probability that any one question is answered
        random_seed: Seed for reproducibility

    Returns:
        List of Respondent objects
    """
    from .inference import Respondent

    rng = np.random.RandomState(random_seed)
    origins = ["Hyderabad", "Delhi", "Mumbai", "Chennai", "Kolkata"]
    batches = ["UG1", "UG2", "UG3", "PG1"]

    respondents = []
    for i in range(n_samples):
        answers = {}
        for question in trait_model.questions:
            options = trait_model.answer_options(question)
            if rng.rand() < answer_rate:
                answers[question] = options[rng.randint(len(options))]
        respondents.append(Respondent(
            email=f"respondent{i:03d}@example.org",
            name=f"Respondent {i}" if i % 7 else None,
            mobile_number=f"+91{rng.randint(6, 10)}{rng.randint(0, 10**9):09d}",
            origin=origins[rng.randint(len(origins))],
            batch=batches[rng.randint(len(batches))],
            answers=answers
        ))

    logger.info(f"Created synthetic respondents: {n_samples} samples")
    return respondents


def main():
    """Main entry point for the batch runner."""
    parser = argparse.ArgumentParser(
        description="Compute personality matches for questionnaire respondents"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--respondents",
        type=str,
        default=None,
        help="Respondents file (overrides config)"
    )
    parser.add_argument(
        "--subject",
        type=str,
        default=None,
        help="Compute matches for this email only"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory (overrides config)"
    )

    args = parser.parse_args()

    try:
        result = run_matching(
            args.config,
            respondents_path=args.respondents,
            subject_email=args.subject,
            output_dir=args.output_dir
        )
        if result["success"]:
            logger.info("\nMatching completed successfully!")
            return 0
        else:
            logger.error("\nMatching failed!")
            return 1
    except Exception as e:
        logger.exception(f"Matching failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
