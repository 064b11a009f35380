"""Pytest configuration and shared factories."""

import logging
from datetime import date

import pytest

from spacesync.models.floor import Desk, Location, Room
from spacesync.models.profile import (
    CollaborationLink,
    CollaborationProfile,
    LinkTargetType,
    MemberBreakdown,
    PersonProfile,
)

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

REFERENCE_DATE = date(2026, 6, 15)


def make_location(location_id="loc1", width=1200, height=800) -> Location:
    return Location(
        id=location_id,
        company_id="acme",
        name="HQ 2nd floor",
        canvas_width=width,
        canvas_height=height,
    )


def make_room(room_id="room1", x=0, y=0, width=400, height=400, location_id="loc1") -> Room:
    return Room(
        id=room_id,
        location_id=location_id,
        name=f"Room {room_id}",
        x=x,
        y=y,
        width=width,
        height=height,
    )


def make_desk(desk_id, x=0, y=0, member_id=None, room_id="room1") -> Desk:
    return Desk(
        id=desk_id,
        room_id=room_id,
        label=desk_id.upper(),
        x=x,
        y=y,
        company_member_id=member_id,
    )


def make_profile(member_id, first_name=None, **fields) -> PersonProfile:
    return PersonProfile(
        id=f"user-{member_id}",
        member_id=member_id,
        first_name=first_name or member_id.capitalize(),
        last_name="Test",
        **fields,
    )


def member_link(target_id, percentage, affinity=3) -> CollaborationLink:
    return CollaborationLink(
        target_type=LinkTargetType.MEMBER,
        target_id=target_id,
        collaboration_percentage=percentage,
        personal_affinity=affinity,
    )


def team_link(team_id, percentage, shares, affinity=3, overrides=None) -> CollaborationLink:
    overrides = overrides or {}
    return CollaborationLink(
        target_type=LinkTargetType.TEAM,
        target_id=team_id,
        collaboration_percentage=percentage,
        personal_affinity=affinity,
        member_breakdown=[
            MemberBreakdown(member_id=m, percentage=share, affinity=overrides.get(m))
            for m, share in shares.items()
        ],
    )


def collab(*links, impact=3, fluidity=3) -> CollaborationProfile:
    return CollaborationProfile(
        links=list(links),
        environmental_impact=impact,
        operational_fluidity=fluidity,
    )


def profiles_map(*profiles: PersonProfile):
    return {p.member_id: p for p in profiles}


@pytest.fixture
def reference_date() -> date:
    return REFERENCE_DATE


@pytest.fixture
def square_floor():
    """Four desks at the corners of a 100x100 square, one person each."""
    rooms = [make_room()]
    desks = [
        make_desk("d1", 0, 0, "alice"),
        make_desk("d2", 100, 0, "bob"),
        make_desk("d3", 0, 100, "carol"),
        make_desk("d4", 100, 100, "dave"),
    ]
    profiles = profiles_map(
        make_profile("alice", riasec_scores={"R": 80, "I": 70, "A": 20, "S": 30, "E": 10, "C": 60},
                     collaboration_profile=collab(member_link("bob", 60, 5))),
        make_profile("bob", soft_skills=["Teamwork", "Listening"], age=28),
        make_profile("carol", soft_skills=["Teamwork", "Focus"], age=52,
                     risk_factors=["Micromanagement"]),
        make_profile("dave", risk_factors=["Needs autonomy"],
                     collaboration_profile=collab(impact=5, fluidity=1)),
    )
    return desks, rooms, profiles
