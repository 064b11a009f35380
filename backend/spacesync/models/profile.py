"""
Person Profile Models

A PersonProfile is the single value object the scoring engine reads about
a person. It is assembled once by the store (see spacesync.store.profiles)
from several loosely-typed records; the engine never sees those records.
"""

from datetime import date
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


RIASEC_DIMENSIONS = ("R", "I", "A", "S", "E", "C")


class RiasecScore(BaseModel):
    """Six-dimension RIASEC intensity vector (each typically 0-100)."""
    R: float = Field(default=0, ge=0, description="Realistic")
    I: float = Field(default=0, ge=0, description="Investigative")
    A: float = Field(default=0, ge=0, description="Artistic")
    S: float = Field(default=0, ge=0, description="Social")
    E: float = Field(default=0, ge=0, description="Enterprising")
    C: float = Field(default=0, ge=0, description="Conventional")

    def as_tuple(self) -> tuple:
        return tuple(getattr(self, dim) for dim in RIASEC_DIMENSIONS)


class LinkTargetType(str, Enum):
    """What a collaboration link points at."""
    MEMBER = "member"
    TEAM = "team"


class MemberBreakdown(BaseModel):
    """Share of a team link attributed to a single team member."""
    member_id: str
    member_label: str = ""
    percentage: float = Field(..., ge=0, le=100, description="Share of the team link")
    affinity: Optional[int] = Field(default=None, ge=1, le=5, description="Per-member affinity override")


class CollaborationLink(BaseModel):
    """
    A declared working relationship.

    collaboration_percentage answers "how much of my work involves this
    target"; personal_affinity is a 1-5 rating.
    """
    target_type: LinkTargetType
    target_id: str
    target_label: str = ""
    collaboration_percentage: float = Field(..., ge=0, le=100)
    personal_affinity: int = Field(default=3, ge=1, le=5)
    member_breakdown: List[MemberBreakdown] = Field(default_factory=list)


class CollaborationProfile(BaseModel):
    """Collaboration links plus the environmental traits of a role."""
    links: List[CollaborationLink] = Field(default_factory=list)
    environmental_impact: int = Field(default=3, ge=1, le=5, description="Noise/disturbance generated (Likert)")
    operational_fluidity: int = Field(default=3, ge=1, le=5, description="Calls, exits, interruptions (Likert)")


class HardSkill(BaseModel):
    name: str
    proficiency_level: Optional[int] = None
    category: Optional[str] = None


class PersonProfile(BaseModel):
    """
    Everything the proximity engine knows about one seated person.

    Every field except the identifiers is optional; the scorer degrades
    each sub-score to a neutral value when its input is missing.
    """
    id: str = Field(..., description="User ID (or member ID for placeholder members)")
    member_id: str = Field(..., description="Company member ID, the key used on desks")
    first_name: str = ""
    last_name: str = ""
    job_title: Optional[str] = None
    role_id: Optional[str] = None
    role_title: Optional[str] = None

    # Psychometric data
    riasec_scores: Optional[RiasecScore] = None
    soft_skills: List[str] = Field(default_factory=list)
    primary_values: List[str] = Field(default_factory=list)
    risk_factors: List[str] = Field(default_factory=list)

    # Generation data
    birth_date: Optional[date] = None
    age: Optional[int] = Field(default=None, ge=0)
    hard_skills: List[HardSkill] = Field(default_factory=list)

    collaboration_profile: Optional[CollaborationProfile] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
