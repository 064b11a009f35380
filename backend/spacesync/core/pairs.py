"""
Pair Graph Builder

Enumerates adjacent pairs of assigned desks, scores each pair and
aggregates the results per desk and per floor.
"""

import logging
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from spacesync.core.geometry import (
    ADJACENCY_THRESHOLD,
    DESK_SIZE,
    desk_distance,
    index_rooms,
    is_adjacent,
)
from spacesync.core.scoring import round_half_up, score_pair
from spacesync.models.floor import Desk, Room
from spacesync.models.profile import PersonProfile
from spacesync.models.proximity import (
    DeskRef,
    DeskScore,
    PairInsight,
    ProximityLevel,
    ProximityReport,
    ScoredPair,
)

logger = logging.getLogger(__name__)


def scorable_desks(
    desks: Sequence[Desk],
    rooms: Mapping[str, Room],
    profiles_by_id: Mapping[str, PersonProfile]
) -> List[Desk]:
    """Assigned desks whose room and assignee profile are both known, in input order."""
    result = []
    for desk in desks:
        if not desk.is_assigned:
            continue
        if desk.room_id not in rooms:
            logger.debug(f"Skipping desk {desk.id}: room {desk.room_id} not found")
            continue
        if desk.company_member_id not in profiles_by_id:
            logger.debug(f"Skipping desk {desk.id}: no profile for member {desk.company_member_id}")
            continue
        result.append(desk)
    return result


def _desk_ref(desk: Desk) -> DeskRef:
    return DeskRef(id=desk.id, label=desk.label, x=desk.x, y=desk.y, room_id=desk.room_id)


def build_pairs(
    desks: Sequence[Desk],
    rooms: Sequence[Room],
    profiles_by_id: Mapping[str, PersonProfile],
    threshold: float = ADJACENCY_THRESHOLD,
    desk_size: float = DESK_SIZE,
    reference_date: Optional[date] = None
) -> List[ScoredPair]:
    """
    Score every adjacent pair of assigned desks.

    Args:
        desks: Desks of the floor (assigned or not)
        rooms: Rooms of the floor
        profiles_by_id: Person profiles keyed by company member ID
        threshold: Inclusive adjacency distance
        desk_size: Desk footprint used for centre points
        reference_date: Day ages are computed on (default: today)

    Returns:
        Scored pairs sorted by descending score. Ties keep enumeration
        order (desk i before desk j, i < j in input order).
    """
    if reference_date is None:
        reference_date = date.today()

    room_map = index_rooms(rooms)
    assigned = scorable_desks(desks, room_map, profiles_by_id)
    pairs = []

    for i, desk_a in enumerate(assigned):
        for desk_b in assigned[i + 1:]:
            if desk_a.company_member_id == desk_b.company_member_id:
                continue
            distance = desk_distance(
                desk_a, room_map.get(desk_a.room_id),
                desk_b, room_map.get(desk_b.room_id),
                desk_size,
            )
            if not is_adjacent(distance, threshold):
                continue

            person_a = profiles_by_id[desk_a.company_member_id]
            person_b = profiles_by_id[desk_b.company_member_id]
            pairs.append(ScoredPair(
                desk_a=_desk_ref(desk_a),
                desk_b=_desk_ref(desk_b),
                person_a=person_a,
                person_b=person_b,
                distance=distance,
                result=score_pair(person_a, person_b, reference_date),
            ))

    # list.sort is stable, so equal scores keep enumeration order
    pairs.sort(key=lambda p: p.result.score, reverse=True)
    return pairs


def desk_scores(pairs: Sequence[ScoredPair]) -> Dict[str, DeskScore]:
    """
    Average score of each desk across all pairs it takes part in.

    Desks without pairs are absent from the result, which is different
    from a desk scoring 0.
    """
    totals: Dict[str, Tuple[int, int]] = {}
    for pair in pairs:
        for desk_id in (pair.desk_a.id, pair.desk_b.id):
            total, count = totals.get(desk_id, (0, 0))
            totals[desk_id] = (total + pair.result.score, count + 1)

    return {
        desk_id: DeskScore(average_score=round_half_up(total / count), pair_count=count)
        for desk_id, (total, count) in totals.items()
    }


def global_average(pairs: Sequence[ScoredPair]) -> float:
    """Mean overall score of all pairs, 0.0 when there are none."""
    if not pairs:
        return 0.0
    return sum(p.result.score for p in pairs) / len(pairs)


def summarize_pairs(
    pairs: Sequence[ScoredPair],
    max_top: int = 3,
    max_critical: int = 3,
    max_insights: int = 5
) -> ProximityReport:
    """Floor-level report: global score, excellent/poor counts, best and critical pairs, top insights."""
    excellent = [p for p in pairs if p.result.level == ProximityLevel.EXCELLENT]
    poor = [p for p in pairs if p.result.level == ProximityLevel.POOR]

    insights = []
    for pair in pairs:
        for text in pair.result.insights:
            if len(insights) >= max_insights:
                break
            insights.append(PairInsight(
                insight=text,
                person_a=pair.person_a.full_name,
                person_b=pair.person_b.full_name,
                score=pair.result.score,
            ))

    best = sorted(excellent, key=lambda p: p.result.score, reverse=True)[:max_top]
    # Worst first
    critical = sorted(poor, key=lambda p: p.result.score)[:max_critical]

    return ProximityReport(
        global_average=round(global_average(pairs), 1),
        pair_count=len(pairs),
        excellent_count=len(excellent),
        poor_count=len(poor),
        top_pairs=best,
        critical_pairs=critical,
        top_insights=insights,
    )
