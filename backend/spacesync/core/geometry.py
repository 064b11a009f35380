"""
Geometry Utilities

Shapely-based functions for floor plan geometry:
- Resolving room-relative desk coordinates to absolute floor coordinates
- Desk-to-desk (centre-to-centre) distance across rooms
- Adjacency classification
- Bounds checks for rooms on a location canvas and desks inside rooms
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple
from shapely.geometry import Point, box

from spacesync.models.floor import Desk, Location, Room


# Visual footprint of every desk, in canvas units
DESK_SIZE = 32

# Centre-to-centre distance at or below which two desks are adjacent
ADJACENCY_THRESHOLD = 200


def absolute_position(
    desk: Desk,
    room: Room,
    desk_size: float = DESK_SIZE
) -> Tuple[float, float]:
    """
    Resolve a desk's centre point in absolute floor coordinates.

    Args:
        desk: Desk with coordinates relative to its room's top-left
        room: The desk's room, positioned in location space
        desk_size: Side length of the desk footprint

    Returns:
        (x, y) of the desk centre

    Example:
        >>> room = Room(id="r1", location_id="l1", name="Open space", x=100, y=50, width=400, height=300)
        >>> desk = Desk(id="d1", room_id="r1", label="D1", x=10, y=20)
        >>> absolute_position(desk, room)
        (126.0, 86.0)
    """
    half = desk_size / 2
    return (room.x + desk.x + half, room.y + desk.y + half)


def desk_center(desk: Desk, room: Room, desk_size: float = DESK_SIZE) -> Point:
    """Absolute desk centre as a Shapely Point."""
    return Point(absolute_position(desk, room, desk_size))


def desk_distance(
    desk_a: Desk,
    room_a: Optional[Room],
    desk_b: Desk,
    room_b: Optional[Room],
    desk_size: float = DESK_SIZE
) -> Optional[float]:
    """
    Euclidean distance between two desk centres, regardless of which rooms
    they are in.

    Returns:
        Distance in canvas units, or None when either room is unknown.
        Callers treat None as "not adjacent" and skip the pair.
    """
    if room_a is None or room_b is None:
        return None
    return desk_center(desk_a, room_a, desk_size).distance(
        desk_center(desk_b, room_b, desk_size)
    )


def is_adjacent(
    distance: Optional[float],
    threshold: float = ADJACENCY_THRESHOLD
) -> bool:
    """
    Check whether a desk distance qualifies for scoring.

    The boundary is inclusive: desks exactly `threshold` apart are
    adjacent, anything beyond is not. An unknown distance is never adjacent.
    """
    if distance is None:
        return False
    return distance <= threshold


def room_within_canvas(room: Room, location: Location) -> bool:
    """
    Check if a room lies fully within its location's canvas.

    Returns:
        True if the room rectangle is inside the canvas bounds
    """
    canvas = box(0, 0, location.canvas_width, location.canvas_height)
    return canvas.covers(box(room.x, room.y, room.right, room.bottom))


def desk_within_room(desk: Desk, room: Room, desk_size: float = DESK_SIZE) -> bool:
    """Check if a desk footprint lies fully within its room (room-relative)."""
    room_area = box(0, 0, room.width, room.height)
    footprint = box(desk.x, desk.y, desk.x + desk_size, desk.y + desk_size)
    return room_area.covers(footprint)


def index_rooms(rooms: Iterable[Room]) -> Dict[str, Room]:
    """Map room id -> room."""
    return {room.id: room for room in rooms}


def layout_issues(
    location: Location,
    rooms: List[Room],
    desks: List[Desk],
    desk_size: float = DESK_SIZE
) -> List[str]:
    """
    Collect human-readable warnings about a floor plan.

    None of these are enforced; they flag data the proximity engine will
    either skip (desks without a room) or trust blindly (out-of-bounds
    coordinates, a person seated twice).

    Returns:
        List of warning strings, empty for a clean layout
    """
    issues = []
    room_map = index_rooms(rooms)

    for room in rooms:
        if not room_within_canvas(room, location):
            issues.append(f"Room '{room.name}' extends beyond the floor plan canvas.")

    for desk in desks:
        room = room_map.get(desk.room_id)
        if room is None:
            issues.append(f"Desk '{desk.label}' references a missing room and will be ignored.")
        elif not desk_within_room(desk, room, desk_size):
            issues.append(f"Desk '{desk.label}' is placed outside room '{room.name}'.")

    seat_counts = Counter(d.company_member_id for d in desks if d.company_member_id)
    for member_id, count in sorted(seat_counts.items()):
        if count > 1:
            issues.append(f"Member {member_id} is assigned to {count} desks.")

    return issues
