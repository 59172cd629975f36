"""
Pytest fixtures for matchmaking tests. Uses the packaged reference
questionnaire (creative, intellectual, innovative, adventurous; q1-q10).
"""

import pytest

from matchmaking.configs import MatchingConfig
from matchmaking.data_loading import load_default_trait_model
from matchmaking.inference import Matchmaker, Respondent


@pytest.fixture
def trait_model():
    return load_default_trait_model()


@pytest.fixture
def matchmaker(trait_model):
    return Matchmaker(trait_model, MatchingConfig())


@pytest.fixture
def respondents():
    """
    Five respondents with hand-checked rankings:
      asha   creative > intellectual > innovative = adventurous (85, 20, 0, 0)
      vikram intellectual only (105)
      meera  adventurous only (100), no display name
      rahul  innovative > creative (85, 10)
      zoya   creative only (55), five questions answered
    """
    return [
        Respondent(
            email="asha.rao@example.org", name="Asha Rao", mobile_number="+919800000001",
            origin="Hyderabad", batch="UG2",
            answers={"q1": "D", "q2": "A", "q3": "B", "q4": "C", "q5": "D",
                     "q6": "B", "q7": "A", "q8": "B", "q9": "C", "q10": "B"},
        ),
        Respondent(
            email="vikram.s@example.org", name="Vikram S", mobile_number="+919800000002",
            origin="Chennai", batch="UG2",
            answers={"q1": "B", "q2": "B", "q3": "C", "q4": "C", "q5": "B",
                     "q6": "B", "q7": "C", "q8": "A", "q9": "B", "q10": "D"},
        ),
        Respondent(
            email="meera.k@example.org", name="", mobile_number="+919800000003",
            origin="Pune", batch="UG3",
            answers={"q1": "A", "q2": "D", "q3": "A", "q4": "A", "q5": "C",
                     "q6": "A", "q7": "B", "q8": "C", "q9": "D", "q10": "C"},
        ),
        Respondent(
            email="rahul.n@example.org", name="Rahul N", mobile_number="+919800000004",
            origin="Delhi", batch="PG1",
            answers={"q1": "D", "q2": "C", "q3": "D", "q4": "B", "q5": "A",
                     "q6": "C", "q7": "D", "q8": "D", "q9": "A", "q10": "A"},
        ),
        Respondent(
            email="zoya.m@example.org", name="Zoya M", mobile_number="+919800000005",
            origin="Mumbai", batch="UG1",
            answers={"q1": "D", "q2": "A", "q3": "B", "q5": "D", "q7": "A"},
        ),
    ]
