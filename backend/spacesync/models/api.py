"""
API Request/Response Schemas

Pydantic models for API endpoints.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from spacesync.models.floor import Desk, Room
from spacesync.models.profile import PersonProfile
from spacesync.models.proximity import (
    DeskScore,
    FlowReport,
    ProximityReport,
    ScoredPair,
    SwapSimulation,
)
from spacesync.models.suggestion import SuggestionResponse


# ============ Proximity Endpoints ============

class ScoreRequest(BaseModel):
    """Request body for /proximity/score (caller-supplied snapshot)."""
    desks: List[Desk] = Field(..., description="Desks of the floor")
    rooms: List[Room] = Field(..., description="Rooms of the floor")
    profiles: List[PersonProfile] = Field(default_factory=list, description="Profiles of seated people")
    adjacency_threshold: Optional[float] = Field(default=None, gt=0, description="Override the configured threshold")


class ProximityResponse(BaseModel):
    """Scored pairs plus the aggregates the heatmap needs."""
    pairs: List[ScoredPair]
    desk_scores: Dict[str, DeskScore]
    report: ProximityReport


class FlowResponse(BaseModel):
    report: FlowReport


# ============ Swap Endpoints ============

class SwapRequest(BaseModel):
    """Request body for /simulate-swap and /apply-swap."""
    desk_id_a: str = Field(..., description="First desk")
    desk_id_b: str = Field(..., description="Second desk")


class SwapResponse(BaseModel):
    simulation: SwapSimulation


class ApplySwapResponse(BaseModel):
    """Response from /apply-swap."""
    updated_desks: List[Desk]
    simulation: SwapSimulation
    message: str = "Swap applied"


# ============ Suggestion Endpoint ============

class SuggestionsResponse(BaseModel):
    global_average: float
    result: SuggestionResponse


# ============ Layout Endpoints ============

class LayoutIssuesResponse(BaseModel):
    issues: List[str] = Field(default_factory=list)


# ============ Health Check ============

class HealthResponse(BaseModel):
    """Response from /health endpoint."""
    status: str = "ok"
    version: str
    message: str = "SpaceSync API is running"
