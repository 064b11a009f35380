"""
Collaboration Flow Extractor

Builds a graph of declared collaboration between seated people,
independent of how close their desks are, and flags heavy collaborators
who sit far apart.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from shapely.geometry import Point

from spacesync.core.geometry import (
    ADJACENCY_THRESHOLD,
    DESK_SIZE,
    absolute_position,
    index_rooms,
)
from spacesync.core.scoring import round_half_up
from spacesync.models.floor import Desk, Room
from spacesync.models.profile import LinkTargetType, PersonProfile
from spacesync.models.proximity import FlowConnection, FlowReport

logger = logging.getLogger(__name__)


# Team fan-out entries below this effective percentage are dropped
FLOW_NOISE_FLOOR = 3

# Strongest-direction percentage from which distance matters
DISTANT_COLLABORATOR_MIN_PERCENTAGE = 20


@dataclass
class _SeatedMember:
    desk: Desk
    position: Tuple[float, float]
    profile: PersonProfile


def _seat_members(
    desks: Sequence[Desk],
    rooms: Sequence[Room],
    profiles_by_id: Mapping[str, PersonProfile],
    desk_size: float
) -> Dict[str, _SeatedMember]:
    """member id -> seat, for assigned desks with a known room and profile."""
    room_map = index_rooms(rooms)
    seated = {}
    for desk in desks:
        if not desk.is_assigned:
            continue
        room = room_map.get(desk.room_id)
        profile = profiles_by_id.get(desk.company_member_id)
        if room is None or profile is None:
            continue
        seated[desk.company_member_id] = _SeatedMember(
            desk=desk,
            position=absolute_position(desk, room, desk_size),
            profile=profile,
        )
    return seated


def _distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return Point(a).distance(Point(b))


def _declared_targets(
    profile: PersonProfile,
    noise_floor: int
) -> List[Tuple[str, int, int]]:
    """(target member id, percentage, affinity) declared by one person, team links expanded."""
    if profile.collaboration_profile is None:
        return []

    targets = []
    for link in profile.collaboration_profile.links:
        if link.target_type == LinkTargetType.MEMBER:
            targets.append((link.target_id, round_half_up(link.collaboration_percentage), link.personal_affinity))
        elif link.target_type == LinkTargetType.TEAM:
            for entry in link.member_breakdown:
                effective = round_half_up(link.collaboration_percentage * entry.percentage / 100)
                if effective < noise_floor:
                    logger.debug(
                        f"Dropping team flow {profile.member_id} -> {entry.member_id}: {effective}% below noise floor"
                    )
                    continue
                affinity = entry.affinity if entry.affinity is not None else link.personal_affinity
                targets.append((entry.member_id, effective, affinity))
    return targets


def build_flow_connections(
    desks: Sequence[Desk],
    rooms: Sequence[Room],
    profiles_by_id: Mapping[str, PersonProfile],
    noise_floor: int = FLOW_NOISE_FLOOR,
    desk_size: float = DESK_SIZE
) -> List[FlowConnection]:
    """
    Merge declared collaboration links into one connection per pair of people.

    A direction observed more than once (e.g. a direct link and a team
    link to the same person) keeps the maximum percentage and affinity,
    never the sum. A connection becomes bidirectional once both people
    have declared each other.

    Returns:
        Connections in discovery order
    """
    seated = _seat_members(desks, rooms, profiles_by_id, desk_size)
    connections: Dict[str, FlowConnection] = {}

    for member_id, seat in seated.items():
        for target_id, pct, affinity in _declared_targets(seat.profile, noise_floor):
            if target_id == member_id:
                continue
            target = seated.get(target_id)
            if target is None:
                continue

            key = "::".join(sorted((member_id, target_id)))
            existing = connections.get(key)
            if existing is None:
                connections[key] = FlowConnection(
                    key=key,
                    member_a_id=member_id,
                    member_b_id=target_id,
                    desk_a_id=seat.desk.id,
                    desk_b_id=target.desk.id,
                    name_a=seat.profile.full_name,
                    name_b=target.profile.full_name,
                    position_a=seat.position,
                    position_b=target.position,
                    pct_ab=pct,
                    affinity_ab=affinity,
                    distance=_distance(seat.position, target.position),
                )
            elif existing.member_a_id == member_id:
                existing.pct_ab = max(existing.pct_ab, pct)
                existing.affinity_ab = max(existing.affinity_ab, affinity)
            else:
                existing.pct_ba = max(existing.pct_ba, pct)
                existing.affinity_ba = max(existing.affinity_ba, affinity)
                existing.bidirectional = True

    return list(connections.values())


def distant_collaborators(
    connections: Sequence[FlowConnection],
    threshold: float = ADJACENCY_THRESHOLD,
    min_percentage: int = DISTANT_COLLABORATOR_MIN_PERCENTAGE
) -> List[FlowConnection]:
    """Connections of people who collaborate heavily but are not seated within the adjacency threshold."""
    return [
        c for c in connections
        if c.strongest_percentage >= min_percentage and c.distance > threshold
    ]


def count_missing_targets(
    desks: Sequence[Desk],
    rooms: Sequence[Room],
    profiles_by_id: Mapping[str, PersonProfile],
    noise_floor: int = FLOW_NOISE_FLOOR,
    desk_size: float = DESK_SIZE
) -> int:
    """Number of declared targets (above the noise floor) that are not seated on this floor."""
    seated = _seat_members(desks, rooms, profiles_by_id, desk_size)
    missing = 0
    for member_id, seat in seated.items():
        for target_id, _, _ in _declared_targets(seat.profile, noise_floor):
            if target_id != member_id and target_id not in seated:
                missing += 1
    return missing


def summarize_flow(
    desks: Sequence[Desk],
    rooms: Sequence[Room],
    profiles_by_id: Mapping[str, PersonProfile],
    threshold: float = ADJACENCY_THRESHOLD,
    noise_floor: int = FLOW_NOISE_FLOOR,
    min_percentage: int = DISTANT_COLLABORATOR_MIN_PERCENTAGE,
    desk_size: float = DESK_SIZE,
    connections: Optional[List[FlowConnection]] = None
) -> FlowReport:
    """Collaboration flow report for a floor, strongest connections first."""
    if connections is None:
        connections = build_flow_connections(desks, rooms, profiles_by_id, noise_floor, desk_size)
    ordered = sorted(connections, key=lambda c: c.strongest_percentage, reverse=True)

    if ordered:
        avg_pct = round_half_up(sum(c.strongest_percentage for c in ordered) / len(ordered))
        avg_affinity = round(sum(c.strongest_affinity for c in ordered) / len(ordered), 1)
    else:
        avg_pct, avg_affinity = 0, 0.0

    return FlowReport(
        connections=ordered,
        connection_count=len(ordered),
        average_percentage=avg_pct,
        average_affinity=avg_affinity,
        bidirectional_count=sum(1 for c in ordered if c.bidirectional),
        missing_count=count_missing_targets(desks, rooms, profiles_by_id, noise_floor, desk_size),
        distant_collaborators=distant_collaborators(ordered, threshold, min_percentage),
    )
