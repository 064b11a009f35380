"""
Proximity Result Models

Ephemeral results of the proximity engine. None of these are persisted:
they are recomputed from a floor snapshot whenever a desk moves, an
assignment changes, or a swap is simulated.
"""

from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, Field

from spacesync.models.profile import PersonProfile


class ProximityLevel(str, Enum):
    """Qualitative band of an overall compatibility score."""
    POOR = "poor"            # score < 40
    FAIR = "fair"            # 40 <= score < 60
    GOOD = "good"            # 60 <= score < 80
    EXCELLENT = "excellent"  # score >= 80


class SynergyType(str, Enum):
    MENTORING = "mentoring"
    REVERSE_MENTORING = "reverse_mentoring"
    PEER_SUPPORT = "peer_support"
    NONE = "none"


class SynergyResult(BaseModel):
    """Intergenerational synergy between two people."""
    type: SynergyType = SynergyType.NONE
    score: int = Field(default=50, ge=0, le=100)
    reason: str = ""
    age_gap: Optional[int] = None
    generation_a: Optional[str] = None
    generation_b: Optional[str] = None
    tech_skills: List[str] = Field(default_factory=list)


class ProximityBreakdown(BaseModel):
    """Sub-scores, each 0-100. The last two are penalties."""
    riasec_complementarity: int = Field(..., ge=0, le=100)
    communication_flow: int = Field(..., ge=0, le=100)
    values_alignment: int = Field(..., ge=0, le=100)
    collaboration_flow: int = Field(..., ge=0, le=100)
    generation_synergy: int = Field(..., ge=0, le=100)
    conflict_risk: int = Field(..., ge=0, le=100)
    environmental_friction: int = Field(..., ge=0, le=100)


class ProximityResult(BaseModel):
    """Compatibility of two people seated next to each other."""
    score: int = Field(..., ge=0, le=100, description="Overall score 0-100")
    breakdown: ProximityBreakdown
    level: ProximityLevel
    insights: List[str] = Field(default_factory=list)
    synergy: Optional[SynergyResult] = None


class DeskRef(BaseModel):
    """The subset of a desk carried on a scored pair."""
    id: str
    label: str
    x: float
    y: float
    room_id: str


class ScoredPair(BaseModel):
    """Two adjacent, assigned desks and the compatibility of their occupants."""
    desk_a: DeskRef
    desk_b: DeskRef
    person_a: PersonProfile
    person_b: PersonProfile
    distance: float = Field(..., ge=0)
    result: ProximityResult

    @property
    def score(self) -> int:
        return self.result.score


class DeskScore(BaseModel):
    """Average compatibility of one desk with all of its scored neighbours."""
    average_score: int
    pair_count: int


class PairInsight(BaseModel):
    insight: str
    person_a: str
    person_b: str
    score: int


class ProximityReport(BaseModel):
    """Floor-level summary used by heatmaps and textual reports."""
    global_average: float
    pair_count: int
    excellent_count: int
    poor_count: int
    top_pairs: List[ScoredPair] = Field(default_factory=list, description="Best excellent pairs, best first")
    critical_pairs: List[ScoredPair] = Field(default_factory=list)
    top_insights: List[PairInsight] = Field(default_factory=list)


class SwapSimulation(BaseModel):
    """Outcome of exchanging the people on two desks, without persisting it."""
    desk_a_id: str
    desk_b_id: str
    person_a_id: Optional[str] = None
    person_b_id: Optional[str] = None
    is_noop: bool = False
    new_pairs: List[ScoredPair] = Field(default_factory=list)
    baseline_average: float = 0.0
    new_global_average: float = 0.0
    delta: float = 0.0


class FlowConnection(BaseModel):
    """
    Declared collaboration between two seated people, merged over both
    directions. "ab" is the direction from member_a to member_b.
    """
    key: str
    member_a_id: str
    member_b_id: str
    desk_a_id: str
    desk_b_id: str
    name_a: str
    name_b: str
    position_a: Tuple[float, float]
    position_b: Tuple[float, float]
    pct_ab: int = 0
    pct_ba: int = 0
    affinity_ab: int = 0
    affinity_ba: int = 0
    bidirectional: bool = False
    distance: float = 0.0

    @property
    def strongest_percentage(self) -> int:
        return max(self.pct_ab, self.pct_ba)

    @property
    def strongest_affinity(self) -> int:
        return max(self.affinity_ab, self.affinity_ba)


class FlowReport(BaseModel):
    """Collaboration flow summary for a floor."""
    connections: List[FlowConnection] = Field(default_factory=list)
    connection_count: int = 0
    average_percentage: int = 0
    average_affinity: float = 0.0
    bidirectional_count: int = 0
    missing_count: int = Field(default=0, description="Declared targets not seated on this floor")
    distant_collaborators: List[FlowConnection] = Field(default_factory=list)
