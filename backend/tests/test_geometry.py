"""Tests for desk geometry and adjacency."""

import pytest

from spacesync.core.geometry import (
    ADJACENCY_THRESHOLD,
    DESK_SIZE,
    absolute_position,
    desk_distance,
    desk_within_room,
    is_adjacent,
    layout_issues,
    room_within_canvas,
)

from conftest import make_desk, make_location, make_room


def test_constants():
    assert DESK_SIZE == 32
    assert ADJACENCY_THRESHOLD == 200


def test_absolute_position_uses_room_offset_and_desk_centre():
    room = make_room(x=100, y=50)
    desk = make_desk("d1", 10, 20)

    assert absolute_position(desk, room) == (126.0, 86.0)


def test_distance_across_rooms():
    room_a = make_room("r1", x=0, y=0)
    room_b = make_room("r2", x=300, y=400)
    desk_a = make_desk("d1", 0, 0, room_id="r1")
    desk_b = make_desk("d2", 0, 0, room_id="r2")

    assert desk_distance(desk_a, room_a, desk_b, room_b) == pytest.approx(500.0)


def test_distance_is_symmetric():
    room_a = make_room("r1", x=10, y=20)
    room_b = make_room("r2", x=250, y=40)
    desk_a = make_desk("d1", 5, 70, room_id="r1")
    desk_b = make_desk("d2", 33, 12, room_id="r2")

    assert desk_distance(desk_a, room_a, desk_b, room_b) == desk_distance(desk_b, room_b, desk_a, room_a)


def test_missing_room_gives_no_distance():
    room = make_room()
    desk_a = make_desk("d1")
    desk_b = make_desk("d2", room_id="ghost")

    assert desk_distance(desk_a, room, desk_b, None) is None
    assert desk_distance(desk_a, None, desk_b, room) is None
    assert is_adjacent(None) is False


class TestAdjacencyBoundary:
    def test_exactly_at_threshold_is_adjacent(self):
        room = make_room(width=600)
        distance = desk_distance(make_desk("d1", 0, 0), room, make_desk("d2", 200, 0), room)

        assert distance == 200.0
        assert is_adjacent(distance) is True

    def test_one_unit_beyond_is_not_adjacent(self):
        room = make_room(width=600)
        distance = desk_distance(make_desk("d1", 0, 0), room, make_desk("d2", 201, 0), room)

        assert distance == 201.0
        assert is_adjacent(distance) is False

    def test_custom_threshold(self):
        assert is_adjacent(150, threshold=150) is True
        assert is_adjacent(150.5, threshold=150) is False


def test_room_within_canvas():
    location = make_location(width=500, height=500)

    assert room_within_canvas(make_room(x=100, y=100, width=400, height=400), location)
    assert not room_within_canvas(make_room(x=200, y=100, width=400, height=400), location)


def test_desk_within_room():
    room = make_room(width=100, height=100)

    assert desk_within_room(make_desk("d1", 68, 68), room)
    assert not desk_within_room(make_desk("d2", 80, 10), room)


def test_layout_issues():
    location = make_location(width=500, height=500)
    rooms = [make_room("r1", width=100, height=100), make_room("r2", x=450, width=100, height=100)]
    desks = [
        make_desk("d1", 10, 10, "alice", room_id="r1"),
        make_desk("d2", 90, 10, None, room_id="r1"),
        make_desk("d3", 10, 10, "alice", room_id="r2"),
        make_desk("d4", 0, 0, None, room_id="missing"),
    ]

    issues = layout_issues(location, rooms, desks)

    assert "Room 'Room r2' extends beyond the floor plan canvas." in issues
    assert "Desk 'D2' is placed outside room 'Room r1'." in issues
    assert "Desk 'D4' references a missing room and will be ignored." in issues
    assert "Member alice is assigned to 2 desks." in issues
    assert len(issues) == 4


def test_clean_layout_has_no_issues():
    location = make_location()
    rooms = [make_room()]
    desks = [make_desk("d1", 10, 10, "alice"), make_desk("d2", 100, 10, "bob")]

    assert layout_issues(location, rooms, desks) == []
