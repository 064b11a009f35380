"""
Suggestion snapshot serialization.

Converts engine results into the data handed to the suggestion
provider, and maps the desk labels it answers with back to desk IDs.
"""

from typing import Dict, Sequence

from spacesync.core.geometry import index_rooms
from spacesync.models.floor import Desk, Room
from spacesync.models.proximity import ScoredPair
from spacesync.models.suggestion import (
    DeskSnapshot,
    PairSnapshot,
    SuggestionResponse,
    SuggestionSnapshot,
)


def build_snapshot(
    pairs: Sequence[ScoredPair],
    desks: Sequence[Desk],
    rooms: Sequence[Room],
    global_average: float
) -> SuggestionSnapshot:
    """Serialize scored pairs and assigned desks for the suggestion provider."""
    room_map = index_rooms(rooms)
    names: Dict[str, str] = {}
    for pair in pairs:
        names[pair.person_a.member_id] = pair.person_a.full_name
        names[pair.person_b.member_id] = pair.person_b.full_name

    desk_snapshots = []
    for desk in desks:
        if not desk.is_assigned:
            continue
        room = room_map.get(desk.room_id)
        desk_snapshots.append(DeskSnapshot(
            id=desk.id,
            label=desk.label,
            room_name=room.name if room else "",
            assignee_name=desk.assignee_name or names.get(desk.company_member_id, desk.company_member_id),
            member_id=desk.company_member_id,
        ))

    pair_snapshots = [
        PairSnapshot(
            person_a=pair.person_a.full_name,
            person_b=pair.person_b.full_name,
            desk_a=pair.desk_a.label,
            desk_b=pair.desk_b.label,
            score=pair.result.score,
            level=pair.result.level.value,
            insights=list(pair.result.insights),
            breakdown=pair.result.breakdown.model_dump(),
        )
        for pair in pairs
    ]

    return SuggestionSnapshot(
        pairs=pair_snapshots,
        desks=desk_snapshots,
        global_average=round(global_average, 1),
    )


def resolve_suggestion_desks(
    response: SuggestionResponse,
    desks: Sequence[Desk]
) -> SuggestionResponse:
    """
    Attach desk IDs to each suggestion by matching desk labels.

    Suggestions whose labels do not match any desk keep None IDs; the
    caller cannot simulate those. The first desk wins on duplicate labels.
    """
    by_label: Dict[str, str] = {}
    for desk in desks:
        by_label.setdefault(desk.label.strip().lower(), desk.id)

    resolved = [
        s.model_copy(update={
            "desk_a_id": by_label.get(s.desk_a.strip().lower()),
            "desk_b_id": by_label.get(s.desk_b.strip().lower()),
        })
        for s in response.suggestions
    ]
    return response.model_copy(update={"suggestions": resolved})
