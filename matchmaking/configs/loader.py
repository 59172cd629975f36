"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates that the matching settings are usable.
"""

import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Any, List, Optional
import json

import yaml

from ..matching.engine import DEFAULT_MIN_PERCENTAGE

logger = logging.getLogger(__name__)


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    required_sections = ["global", "matching", "data"]
    for section in required_sections:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    if "data" in config:
        respondents = config["data"].get("respondents", {})
        if "path" not in respondents:
            issues.append("Missing data.respondents.path")
        fmt = respondents.get("format")
        if fmt is not None and fmt not in ("json", "csv"):
            issues.append(f"Unknown respondents format: {fmt}")

    if "matching" in config:
        threshold = config["matching"].get("min_percentage", DEFAULT_MIN_PERCENTAGE)
        if not isinstance(threshold, int) or not 0 <= threshold <= 100:
            issues.append(f"matching.min_percentage must be an integer in [0, 100], got {threshold}")

    if "global" in config:
        n_jobs = config["global"].get("n_jobs", 1)
        if not isinstance(n_jobs, int) or n_jobs == 0:
            issues.append(f"global.n_jobs must be a non-zero integer, got {n_jobs}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "matching.min_percentage")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value


@dataclass
class MatchingConfig:
    """
    Settings for one matching run.

    Attributes:
        min_percentage: Results must score strictly above this to be kept
        n_jobs: joblib worker count for batch matching (-1 = all cores)
        mapping_file: Optional path to a trait-weight table (packaged table if None)
    """
    min_percentage: int = DEFAULT_MIN_PERCENTAGE
    n_jobs: int = 1
    mapping_file: Optional[str] = None

    def validate(self) -> None:
        """Validate configuration values."""
        if not isinstance(self.min_percentage, int) or not 0 <= self.min_percentage <= 100:
            raise ValueError(f"min_percentage must be an integer in [0, 100], got {self.min_percentage}")
        if not isinstance(self.n_jobs, int) or self.n_jobs == 0:
            raise ValueError(f"n_jobs must be a non-zero integer, got {self.n_jobs}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MatchingConfig":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "MatchingConfig":
        """Create from main config dictionary."""
        return cls(
            min_percentage=get_config_value(config, "matching.min_percentage", DEFAULT_MIN_PERCENTAGE),
            n_jobs=get_config_value(config, "global.n_jobs", 1),
            mapping_file=get_config_value(config, "traits.mapping_file"),
        )

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved matching config to {filepath}")
