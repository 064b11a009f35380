"""
Swap Simulator

"What if these two people exchanged desks?" The whole pair graph is
rebuilt over a copy of the floor with the two assignments exchanged,
because a single move can change the adjacency set of everyone around
both desks. Nothing here mutates the caller's data.
"""

import logging
from datetime import date
from typing import List, Mapping, Optional, Sequence

from spacesync.core.geometry import ADJACENCY_THRESHOLD, DESK_SIZE
from spacesync.core.pairs import build_pairs, global_average
from spacesync.models.floor import Desk, Room
from spacesync.models.profile import PersonProfile
from spacesync.models.proximity import SwapSimulation

logger = logging.getLogger(__name__)


def swap_assignments(desks: Sequence[Desk], desk_id_a: str, desk_id_b: str) -> List[Desk]:
    """
    Return a copy of `desks` with the occupants of two desks exchanged.

    The joined display fields travel with the person. Desks that are not
    involved are returned as-is; the input list is never modified.
    """
    by_id = {d.id: d for d in desks}
    desk_a = by_id.get(desk_id_a)
    desk_b = by_id.get(desk_id_b)
    if desk_a is None or desk_b is None:
        return list(desks)

    def occupant(desk: Desk) -> dict:
        return {
            "company_member_id": desk.company_member_id,
            "assignee_name": desk.assignee_name,
            "assignee_job_title": desk.assignee_job_title,
        }

    swapped = []
    for desk in desks:
        if desk.id == desk_id_a:
            swapped.append(desk.model_copy(update=occupant(desk_b)))
        elif desk.id == desk_id_b:
            swapped.append(desk.model_copy(update=occupant(desk_a)))
        else:
            swapped.append(desk)
    return swapped


def _noop_reason(
    desk_id_a: str,
    desk_id_b: str,
    desks: Sequence[Desk],
    profiles_by_id: Mapping[str, PersonProfile]
) -> Optional[str]:
    if desk_id_a == desk_id_b:
        return "both ids name the same desk"
    by_id = {d.id: d for d in desks}
    for desk_id in (desk_id_a, desk_id_b):
        desk = by_id.get(desk_id)
        if desk is None:
            return f"desk {desk_id} not found"
        if not desk.company_member_id:
            return f"desk {desk_id} is unassigned"
        if desk.company_member_id not in profiles_by_id:
            return f"no profile for member {desk.company_member_id}"
    if by_id[desk_id_a].company_member_id == by_id[desk_id_b].company_member_id:
        return "both desks hold the same person"
    return None


def simulate_swap(
    desk_id_a: str,
    desk_id_b: str,
    desks: Sequence[Desk],
    rooms: Sequence[Room],
    profiles_by_id: Mapping[str, PersonProfile],
    baseline_average: Optional[float] = None,
    threshold: float = ADJACENCY_THRESHOLD,
    desk_size: float = DESK_SIZE,
    reference_date: Optional[date] = None
) -> SwapSimulation:
    """
    Simulate exchanging the people on two desks.

    Args:
        desk_id_a: First desk
        desk_id_b: Second desk
        desks: Current desks of the floor (snapshot)
        rooms: Rooms of the floor
        profiles_by_id: Person profiles keyed by company member ID
        baseline_average: Current global average; computed from the
            snapshot when omitted

    Returns:
        SwapSimulation. When the swap is not meaningful (unknown or
        unassigned desk, missing profile, same desk or same person) the
        result is a no-op: is_noop is True, new_pairs are the current
        pairs and delta is 0.
    """
    if reference_date is None:
        reference_date = date.today()

    current_pairs = None
    if baseline_average is None:
        current_pairs = build_pairs(desks, rooms, profiles_by_id, threshold, desk_size, reference_date)
        baseline_average = global_average(current_pairs)

    by_id = {d.id: d for d in desks}
    person_a_id = by_id[desk_id_a].company_member_id if desk_id_a in by_id else None
    person_b_id = by_id[desk_id_b].company_member_id if desk_id_b in by_id else None

    reason = _noop_reason(desk_id_a, desk_id_b, desks, profiles_by_id)
    if reason is not None:
        logger.debug(f"Swap {desk_id_a} <-> {desk_id_b} is a no-op: {reason}")
        if current_pairs is None:
            current_pairs = build_pairs(desks, rooms, profiles_by_id, threshold, desk_size, reference_date)
        return SwapSimulation(
            desk_a_id=desk_id_a,
            desk_b_id=desk_id_b,
            person_a_id=person_a_id,
            person_b_id=person_b_id,
            is_noop=True,
            new_pairs=current_pairs,
            baseline_average=baseline_average,
            new_global_average=baseline_average,
            delta=0.0,
        )

    swapped = swap_assignments(desks, desk_id_a, desk_id_b)
    new_pairs = build_pairs(swapped, rooms, profiles_by_id, threshold, desk_size, reference_date)
    new_average = global_average(new_pairs)

    return SwapSimulation(
        desk_a_id=desk_id_a,
        desk_b_id=desk_id_b,
        person_a_id=person_a_id,
        person_b_id=person_b_id,
        is_noop=False,
        new_pairs=new_pairs,
        baseline_average=baseline_average,
        new_global_average=new_average,
        delta=new_average - baseline_average,
    )
