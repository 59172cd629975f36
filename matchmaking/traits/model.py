"""
Trait model for the personality questionnaire.

Holds the closed set of personality traits and the static
(question, answer) -> trait weight table.

The table is supplied as data (a mapping-of-mappings, normally loaded
from YAML) and validated against the declared traits when the model is
built. Weight lookups for unknown questions or answers return an
all-zero weight mapping instead of failing: an unanswered question or an
out-of-range answer simply contributes nothing.

Mapping format:
    {
        "traits": ["creative", "intellectual", ...],
        "answer_options": ["A", "B", "C", "D"],      # optional
        "questions": {
            "q1": {"A": {"adventurous": 10}, "B": {...}, ...},
            ...
        }
    }
"""

import logging
from types import MappingProxyType
from typing import Dict, Any, List, Mapping, Tuple

logger = logging.getLogger(__name__)


def max_rank_distance(n_traits: int) -> int:
    """
    Largest possible rank distance between two rankings of n traits.

    Reached when one ranking is the full reversal of the other:
    sum(|i - (n + 1 - i)|) for i in 1..n, which equals n**2 // 2
    (8 for four traits).

    Args:
        n_traits: Number of traits being ranked

    Returns:
        Maximum sum of absolute rank differences
    """
    if n_traits < 1:
        raise ValueError(f"Need at least one trait, got {n_traits}")
    return (n_traits * n_traits) // 2


def validate_trait_mapping(mapping: Dict[str, Any]) -> None:
    """
    Validate a trait-weight mapping.

    Checks:
    - `traits` is a non-empty list of unique names
    - `questions` is a non-empty mapping of question -> answer -> weights
    - Every weight names a declared trait and is a non-negative integer
    - Answers belong to `answer_options` when that list is given

    Args:
        mapping: The loaded mapping dictionary

    Raises:
        ValueError: If validation fails
    """
    if not isinstance(mapping, dict):
        raise ValueError(f"Trait mapping must be a mapping, got {type(mapping).__name__}")

    if "traits" not in mapping:
        raise ValueError("Trait mapping missing 'traits' declaration")

    if "questions" not in mapping:
        raise ValueError("Trait mapping missing 'questions' table")

    traits = mapping["traits"]
    if not isinstance(traits, list) or len(traits) == 0:
        raise ValueError("Trait mapping 'traits' must be a non-empty list")

    if len(set(traits)) != len(traits):
        raise ValueError(f"Trait mapping declares duplicate traits: {traits}")

    questions = mapping["questions"]
    if not isinstance(questions, dict) or len(questions) == 0:
        raise ValueError("Trait mapping 'questions' must be a non-empty mapping")

    answer_options = mapping.get("answer_options")
    declared = set(traits)

    for question, answers in questions.items():
        if not isinstance(answers, dict):
            raise ValueError(f"Question '{question}' must map answers to weights")

        for answer, weights in answers.items():
            if answer_options is not None and answer not in answer_options:
                raise ValueError(
                    f"Question '{question}' has answer '{answer}' outside {answer_options}"
                )

            if not isinstance(weights, dict):
                raise ValueError(f"Weights for {question}/{answer} must be a mapping")

            unknown = set(weights) - declared
            if unknown:
                raise ValueError(
                    f"Weights for {question}/{answer} reference undeclared traits: {unknown}"
                )

            for trait, weight in weights.items():
                # bool is an int subclass, reject it explicitly
                if isinstance(weight, bool) or not isinstance(weight, int) or weight < 0:
                    raise ValueError(
                        f"Weight for {question}/{answer}/{trait} must be a "
                        f"non-negative integer, got {weight!r}"
                    )


class TraitModel:
    """
    Static definition of personality traits and answer weights.

    Instances are immutable: the weight table is frozen into read-only
    mappings at construction and every weight mapping covers all traits.

    Attributes:
        traits: Declared traits, in tie-break order
        questions: Questions known to the weight table
    """

    def __init__(self, traits: List[str], table: Dict[str, Dict[str, Dict[str, int]]]):
        """
        Initialize the trait model.

        Use `from_mapping` to build a model from configuration data;
        this constructor expects an already validated table.

        Args:
            traits: Declared trait names in declaration order
            table: question -> answer -> {trait: weight}
        """
        self._traits: Tuple[str, ...] = tuple(traits)
        self._zero = MappingProxyType({trait: 0 for trait in self._traits})

        frozen = {}
        for question, answers in table.items():
            frozen[question] = MappingProxyType({
                answer: MappingProxyType({
                    trait: int(weights.get(trait, 0)) for trait in self._traits
                })
                for answer, weights in answers.items()
            })
        self._table: Mapping[str, Mapping[str, Mapping[str, int]]] = MappingProxyType(frozen)

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Any]) -> "TraitModel":
        """
        Build a validated trait model from a mapping-of-mappings.

        Args:
            mapping: Trait mapping (see module docstring for the format)

        Returns:
            TraitModel instance

        Raises:
            ValueError: If the mapping is invalid
        """
        validate_trait_mapping(mapping)
        model = cls(mapping["traits"], mapping["questions"])
        logger.debug(f"Built trait model: {model.n_traits} traits, {len(model.questions)} questions")
        return model

    @property
    def traits(self) -> Tuple[str, ...]:
        return self._traits

    @property
    def questions(self) -> Tuple[str, ...]:
        return tuple(self._table.keys())

    @property
    def n_traits(self) -> int:
        return len(self._traits)

    @property
    def max_rank_distance(self) -> int:
        """Full-reversal rank distance for this model's trait count."""
        return max_rank_distance(self.n_traits)

    def answer_options(self, question: str) -> Tuple[str, ...]:
        """Answers listed in the weight table for `question` (empty if unknown)."""
        return tuple(self._table.get(question, {}).keys())

    def weights(self, question: str, answer: Any) -> Mapping[str, int]:
        """
        Look up the trait weights of one answer.

        Args:
            question: Question identifier (e.g. "q1")
            answer: Answer option (e.g. "A")

        Returns:
            Read-only mapping trait -> weight; all zeros when the
            (question, answer) pair is not in the table
        """
        answers = self._table.get(question)
        if answers is None:
            return self._zero
        try:
            return answers.get(answer, self._zero)
        except TypeError:
            # Unhashable answer values cannot be in the table
            return self._zero

    def to_mapping(self) -> Dict[str, Any]:
        """Convert back to a plain (non-zero weights only) mapping."""
        return {
            "traits": list(self._traits),
            "questions": self._plain_table()
        }

    def _plain_table(self) -> Dict[str, Dict[str, Dict[str, int]]]:
        return {
            question: {
                answer: {t: w for t, w in weights.items() if w}
                for answer, weights in answers.items()
            }
            for question, answers in self._table.items()
        }

    def __reduce__(self):
        # mappingproxy objects don't pickle; joblib workers need a copy
        return (self.__class__, (list(self._traits), self._plain_table()))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TraitModel):
            return NotImplemented
        return self._traits == other._traits and self._plain_table() == other._plain_table()

    __hash__ = None

    def __repr__(self) -> str:
        return f"TraitModel(traits={list(self._traits)}, questions={len(self._table)})"
