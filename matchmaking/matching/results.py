"""Match result container shared by the engine and the response schema."""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class MatchResult:
    """
    One entry of a match list.

    Attributes:
        display: Display fields of the matched respondent, unchanged
        percentage: Match percentage in [0, 100]
    """
    display: Dict[str, Any]
    percentage: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (display fields plus percentage)."""
        result = dict(self.display)
        result["percentage"] = int(self.percentage)
        return result
