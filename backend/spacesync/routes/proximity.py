"""
Proximity Routes

Heatmap scoring, collaboration flow, swap simulation and AI suggestions
for a floor. Every endpoint reads one snapshot from the store and runs
the pure engine over it; only /apply-swap writes back.
"""

import logging
from typing import Dict, List, Tuple

from fastapi import APIRouter, Depends, HTTPException

from spacesync.agents.suggestion_node import SuggestionProvider, get_suggestion_provider
from spacesync.config import get_settings
from spacesync.core.flow import summarize_flow
from spacesync.core.pairs import build_pairs, desk_scores, global_average, summarize_pairs
from spacesync.core.simulation import simulate_swap, swap_assignments
from spacesync.core.snapshot import build_snapshot, resolve_suggestion_desks
from spacesync.exceptions import InvalidLayoutError, NotFoundError, SuggestionError
from spacesync.models.api import (
    ApplySwapResponse,
    FlowResponse,
    ProximityResponse,
    ScoreRequest,
    SuggestionsResponse,
    SwapRequest,
    SwapResponse,
)
from spacesync.models.floor import Desk, Room
from spacesync.models.profile import PersonProfile
from spacesync.store import SpaceStore, get_store
from spacesync.store.profiles import member_ids_on_desks

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Proximity"])


FloorSnapshot = Tuple[List[Desk], List[Room], Dict[str, PersonProfile]]


def load_floor(store: SpaceStore, location_id: str) -> FloorSnapshot:
    """Read desks, rooms and seated profiles of a location in one go."""
    try:
        desks = store.list_desks(location_id)
        rooms = store.list_rooms(location_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    profiles = store.list_profiles(member_ids_on_desks(desks))
    return desks, rooms, profiles


def _proximity_response(
    desks: List[Desk],
    rooms: List[Room],
    profiles: Dict[str, PersonProfile],
    threshold: float
) -> ProximityResponse:
    settings = get_settings()
    pairs = build_pairs(desks, rooms, profiles, threshold=threshold, desk_size=settings.desk_size)
    return ProximityResponse(
        pairs=pairs,
        desk_scores=desk_scores(pairs),
        report=summarize_pairs(pairs),
    )


@router.post("/proximity/score", response_model=ProximityResponse)
async def score_snapshot(request: ScoreRequest) -> ProximityResponse:
    """
    Score a caller-supplied floor snapshot without touching the store.
    """
    threshold = request.adjacency_threshold or get_settings().adjacency_threshold
    profiles = {p.member_id: p for p in request.profiles}
    return _proximity_response(request.desks, request.rooms, profiles, threshold)


@router.get("/locations/{location_id}/proximity", response_model=ProximityResponse)
async def location_proximity(
    location_id: str,
    store: SpaceStore = Depends(get_store)
) -> ProximityResponse:
    """
    Score all adjacent desk pairs of a location.

    Returns the sorted pairs, per-desk averages (desks without neighbours
    are absent) and the floor report.
    """
    desks, rooms, profiles = load_floor(store, location_id)
    return _proximity_response(desks, rooms, profiles, get_settings().adjacency_threshold)


@router.get("/locations/{location_id}/flow", response_model=FlowResponse)
async def location_flow(
    location_id: str,
    store: SpaceStore = Depends(get_store)
) -> FlowResponse:
    """Collaboration flow between seated people and distant-collaborator alerts."""
    settings = get_settings()
    desks, rooms, profiles = load_floor(store, location_id)
    report = summarize_flow(
        desks, rooms, profiles,
        threshold=settings.adjacency_threshold,
        noise_floor=settings.flow_noise_floor,
        min_percentage=settings.distant_collaborator_min_percentage,
        desk_size=settings.desk_size,
    )
    return FlowResponse(report=report)


@router.post("/locations/{location_id}/simulate-swap", response_model=SwapResponse)
async def simulate_location_swap(
    location_id: str,
    request: SwapRequest,
    store: SpaceStore = Depends(get_store)
) -> SwapResponse:
    """
    Simulate exchanging the people on two desks. Nothing is persisted.

    An impossible swap (unassigned desk, unknown person, same desk) comes
    back as a no-op simulation rather than an error.
    """
    settings = get_settings()
    desks, rooms, profiles = load_floor(store, location_id)
    simulation = simulate_swap(
        request.desk_id_a, request.desk_id_b, desks, rooms, profiles,
        threshold=settings.adjacency_threshold,
        desk_size=settings.desk_size,
    )
    return SwapResponse(simulation=simulation)


@router.post("/locations/{location_id}/apply-swap", response_model=ApplySwapResponse)
async def apply_location_swap(
    location_id: str,
    request: SwapRequest,
    store: SpaceStore = Depends(get_store)
) -> ApplySwapResponse:
    """
    Persist a desk swap.

    The swap is simulated first on the same snapshot; a no-op simulation
    is rejected with 400.
    """
    settings = get_settings()
    desks, rooms, profiles = load_floor(store, location_id)
    simulation = simulate_swap(
        request.desk_id_a, request.desk_id_b, desks, rooms, profiles,
        threshold=settings.adjacency_threshold,
        desk_size=settings.desk_size,
    )
    if simulation.is_noop:
        raise HTTPException(status_code=400, detail="Swap has no effect and was not applied")

    swapped = swap_assignments(desks, request.desk_id_a, request.desk_id_b)
    changed = [d for d in swapped if d.id in (request.desk_id_a, request.desk_id_b)]
    try:
        updated = store.update_desks(changed)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidLayoutError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(
        f"Applied swap {request.desk_id_a} <-> {request.desk_id_b} on {location_id} "
        f"(delta {simulation.delta:+.1f})"
    )
    return ApplySwapResponse(updated_desks=updated, simulation=simulation)


@router.post("/locations/{location_id}/suggestions", response_model=SuggestionsResponse)
async def location_suggestions(
    location_id: str,
    store: SpaceStore = Depends(get_store),
    provider: SuggestionProvider = Depends(get_suggestion_provider)
) -> SuggestionsResponse:
    """
    Ask the suggestion provider for desk swaps.

    Suggested desk labels are resolved to desk IDs so each suggestion can
    be checked with /simulate-swap before it is applied.
    """
    settings = get_settings()
    desks, rooms, profiles = load_floor(store, location_id)
    pairs = build_pairs(
        desks, rooms, profiles,
        threshold=settings.adjacency_threshold,
        desk_size=settings.desk_size,
    )
    average = global_average(pairs)
    snapshot = build_snapshot(pairs, desks, rooms, average)

    try:
        result = await provider.suggest(snapshot)
    except SuggestionError as e:
        raise HTTPException(status_code=502, detail=f"Suggestion service failed: {e}")

    return SuggestionsResponse(
        global_average=round(average, 1),
        result=resolve_suggestion_desks(result, desks),
    )
