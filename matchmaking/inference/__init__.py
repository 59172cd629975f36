"""
Inference module for personality matching.

This module provides the respondent schema and the matchmaker that turns
questionnaire responses into ranked match lists.
"""

from .schema import Respondent, MatchResponse
from .matchmaker import Matchmaker, create_matchmaker

__all__ = [
    "Respondent",
    "MatchResponse",
    "Matchmaker",
    "create_matchmaker",
]
