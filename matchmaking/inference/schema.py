"""
Data structures for respondents and match results.

A respondent is one person who filled in the questionnaire: an identity
(their email address), display fields shown to their matches, and raw
answers (question -> answer option). Display fields are opaque to the
matching logic and are passed through unchanged.

Wire format of a match response:
    {
        "email": "subject@example.org",
        "matches": [
            {"name": ..., "email": ..., "mobile_number": ...,
             "origin": ..., "batch": ..., "percentage": 88},
            ...
        ]
    }
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from ..matching.results import MatchResult

DISPLAY_FIELDS = ["name", "email", "mobile_number", "origin", "batch"]


def _optional_str(value: Any) -> Optional[str]:
    """Treat None, empty strings and NaN cells as missing."""
    if value is None:
        return None
    if isinstance(value, float) and value != value:
        return None
    text = str(value).strip()
    return text or None


@dataclass
class Respondent:
    """
    One questionnaire respondent.

    Attributes:
        email: Identity of the respondent
        answers: Raw answers, question id -> answer option (may be sparse)
        name: Display name (falls back to email when shown)
        mobile_number: Contact number
        origin: Where the respondent is from
        batch: Cohort the respondent belongs to
    """
    email: str
    answers: Dict[str, str] = field(default_factory=dict)
    name: Optional[str] = None
    mobile_number: Optional[str] = None
    origin: Optional[str] = None
    batch: Optional[str] = None

    def __post_init__(self):
        """Validate identity and answers."""
        email = _optional_str(self.email)
        if email is None:
            raise ValueError("Respondent email is required")
        self.email = email

        if self.answers is None:
            self.answers = {}
        if not isinstance(self.answers, dict):
            raise ValueError(f"answers must be a mapping, got {type(self.answers).__name__}")

        self.name = _optional_str(self.name)
        self.mobile_number = _optional_str(self.mobile_number)
        self.origin = _optional_str(self.origin)
        self.batch = _optional_str(self.batch)

    @property
    def identity_key(self) -> str:
        """Case-insensitive identity used to recognise the same person."""
        return self.email.lower()

    def display_fields(self) -> Dict[str, Optional[str]]:
        """Fields shown to other respondents; name falls back to email."""
        return {
            "name": self.name or self.email,
            "email": self.email,
            "mobile_number": self.mobile_number,
            "origin": self.origin,
            "batch": self.batch,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "email": self.email,
            "name": self.name,
            "mobile_number": self.mobile_number,
            "origin": self.origin,
            "batch": self.batch,
            "answers": dict(self.answers),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Respondent":
        """Create from dictionary."""
        if "email" not in data:
            raise ValueError(f"Respondent record has no email: {sorted(data)}")
        return cls(
            email=data["email"],
            answers=data.get("answers") or {},
            name=data.get("name"),
            mobile_number=data.get("mobile_number"),
            origin=data.get("origin"),
            batch=data.get("batch"),
        )


@dataclass
class MatchResponse:
    """
    Matches computed for one subject.

    Attributes:
        email: Subject identity, passed through
        matches: Filtered matches, highest percentage first
    """
    email: str
    matches: List[MatchResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "email": self.email,
            "matches": [match.to_dict() for match in self.matches]
        }
