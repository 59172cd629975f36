"""Trait model: declared traits and the answer -> trait weight table."""

from .model import TraitModel, max_rank_distance, validate_trait_mapping

__all__ = ["TraitModel", "max_rank_distance", "validate_trait_mapping"]
