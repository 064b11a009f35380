"""
Suggestion Models

The shape of data exchanged with the external suggestion collaborator:
a serialized snapshot of the floor goes out, ranked swap suggestions and
an overall assessment come back.
"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class PairSnapshot(BaseModel):
    person_a: str
    person_b: str
    desk_a: str
    desk_b: str
    score: int
    level: str
    insights: List[str] = Field(default_factory=list)
    breakdown: Dict[str, int] = Field(default_factory=dict)


class DeskSnapshot(BaseModel):
    id: str
    label: str
    room_name: str
    assignee_name: str
    member_id: str


class SuggestionSnapshot(BaseModel):
    """Everything the suggestion provider is allowed to see."""
    pairs: List[PairSnapshot] = Field(default_factory=list)
    desks: List[DeskSnapshot] = Field(default_factory=list)
    global_average: float = 0.0


class ExpectedImprovement(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SwapSuggestion(BaseModel):
    """A proposed desk exchange, referenced by names and desk labels."""
    person_a: str
    desk_a: str
    person_b: str
    desk_b: str
    reason: str
    expected_improvement: ExpectedImprovement = ExpectedImprovement.MEDIUM

    # Filled by resolve_suggestion_desks so the simulator can be run on it
    desk_a_id: Optional[str] = None
    desk_b_id: Optional[str] = None


class SuggestionResponse(BaseModel):
    overall_assessment: str
    suggestions: List[SwapSuggestion] = Field(default_factory=list)
