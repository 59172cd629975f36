"""
Data loading functions for the matchmaking engine.

This module handles loading the trait-weight table from YAML and
respondent records from JSON or CSV files.
No scoring is done here - that's handled by the profiling module.
"""

import logging
from pathlib import Path
from typing import Dict, List, Any, Optional
import json

import pandas as pd
import yaml

from ..inference.schema import Respondent, DISPLAY_FIELDS
from ..traits import TraitModel, validate_trait_mapping

logger = logging.getLogger(__name__)

DEFAULT_TRAIT_MAPPING = Path(__file__).resolve().parent.parent / "configs" / "trait_weights.yaml"


def load_trait_mapping(filepath: str) -> Dict[str, Any]:
    """
    Load the question/answer -> trait weight mapping from YAML.

    The mapping file specifies:
    - The declared traits (in tie-break order)
    - Optionally, the allowed answer options
    - The weight of every (question, answer) pair

    Args:
        filepath: Path to the trait mapping YAML file

    Returns:
        Dictionary with mapping configuration:
        {
            "traits": ["creative", "intellectual", "innovative", "adventurous"],
            "answer_options": ["A", "B", "C", "D"],
            "questions": {
                "q1": {"A": {"adventurous": 10}, ...},
                ...
            }
        }

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the mapping is invalid or incomplete
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Trait mapping file not found: {filepath}")

    logger.info(f"Loading trait mapping from {filepath}")
    with open(filepath, "r") as f:
        mapping = yaml.safe_load(f)

    if mapping is None:
        raise ValueError(f"Trait mapping file is empty: {filepath}")

    validate_trait_mapping(mapping)

    total_answers = sum(len(answers) for answers in mapping["questions"].values())
    logger.info(
        f"Loaded mapping for {len(mapping['traits'])} traits, "
        f"{len(mapping['questions'])} questions, {total_answers} answers"
    )

    return mapping


def load_trait_model(filepath: Optional[str] = None) -> TraitModel:
    """
    Load a validated trait model.

    Args:
        filepath: Path to a trait mapping YAML file; the packaged
            reference questionnaire is used when None

    Returns:
        TraitModel instance
    """
    if filepath is None:
        filepath = str(DEFAULT_TRAIT_MAPPING)
    return TraitModel.from_mapping(load_trait_mapping(filepath))


def load_default_trait_model() -> TraitModel:
    """Load the packaged reference questionnaire (4 traits, q1-q10)."""
    return load_trait_model(None)


def load_respondents(filepath: str, fmt: Optional[str] = None) -> List[Respondent]:
    """
    Load respondent records from JSON or CSV.

    JSON files hold a list of objects with a nested "answers" object.
    CSV files hold one row per respondent: the display columns
    (email, name, mobile_number, origin, batch) plus one column per
    question; empty cells are treated as unanswered.

    Args:
        filepath: Path to the respondents file
        fmt: "json" or "csv"; inferred from the file suffix when None

    Returns:
        List of Respondent objects, in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the format is unknown or a record is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Respondents file not found: {filepath}")

    fmt = (fmt or path.suffix.lstrip(".")).lower()
    logger.info(f"Loading respondents from {filepath} (format: {fmt})")

    if fmt == "json":
        records = _read_json_records(path)
    elif fmt == "csv":
        records = _read_csv_records(path)
    else:
        raise ValueError(f"Unknown respondents format: {fmt!r}")

    respondents = [Respondent.from_dict(record) for record in records]
    logger.info(f"Loaded {len(respondents)} respondents")
    return respondents


def _read_json_records(path: Path) -> List[Dict[str, Any]]:
    """Read a JSON list of respondent objects."""
    with open(path, "r") as f:
        data = json.load(f)

    # Accept {"respondents": [...]} as well as a bare list
    if isinstance(data, dict):
        data = data.get("respondents")
    if not isinstance(data, list):
        raise ValueError(f"Respondents JSON must contain a list of records: {path}")

    return data


def _read_csv_records(path: Path) -> List[Dict[str, Any]]:
    """Read a CSV with display columns and one column per question."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    if "email" not in df.columns:
        raise ValueError(f"Respondents CSV has no 'email' column: {list(df.columns)}")

    if df.empty:
        logger.warning(f"Respondents file has no rows: {path}")
        return []

    question_columns = [c for c in df.columns if c not in DISPLAY_FIELDS]
    logger.info(f"Found {len(question_columns)} question columns: {question_columns}")

    records = []
    for row in df.to_dict(orient="records"):
        record = {key: row.get(key) for key in DISPLAY_FIELDS}
        record["answers"] = {
            q: row[q].strip() for q in question_columns if row[q].strip()
        }
        records.append(record)
    return records


def save_respondents(respondents: List[Respondent], filepath: str) -> None:
    """
    Write respondents to a JSON file readable by `load_respondents`.

    Args:
        respondents: Respondents to write
        filepath: Output path
    """
    with open(filepath, "w") as f:
        json.dump([r.to_dict() for r in respondents], f, indent=2)
    logger.info(f"Saved {len(respondents)} respondents to {filepath}")
