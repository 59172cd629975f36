"""Configuration loading for the matchmaking engine."""

from .loader import load_config, validate_config, get_config_value, MatchingConfig

__all__ = ["load_config", "validate_config", "get_config_value", "MatchingConfig"]
