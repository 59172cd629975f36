"""
Personality Matchmaking Engine

This package matches questionnaire respondents to each other based on a
short multiple-choice personality questionnaire.

Key Design Decisions:
- The question/answer to trait-weight table is configuration data (YAML), not code
- Respondents are compared on trait *rankings*, not raw trait scores
- Maximum rank distance is derived from the number of declared traits
- Every scoring step is a pure function; only the final sort/filter needs the full set
"""

__version__ = "1.0.0"
