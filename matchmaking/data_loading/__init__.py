"""Data loading module for trait mappings and respondent records."""

from .loaders import (
    load_trait_mapping,
    load_trait_model,
    load_default_trait_model,
    load_respondents,
    save_respondents,
)

__all__ = [
    "load_trait_mapping",
    "load_trait_model",
    "load_default_trait_model",
    "load_respondents",
    "save_respondents",
]
