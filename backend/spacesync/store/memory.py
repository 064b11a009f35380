"""In-memory store backend (no persistence)."""

import logging
import threading
from collections import Counter
from typing import Dict, Iterable, List

from spacesync.exceptions import InvalidLayoutError, NotFoundError
from spacesync.models.floor import Desk, Location, Room
from spacesync.models.profile import PersonProfile
from spacesync.store.base import SpaceStore

logger = logging.getLogger(__name__)


class InMemorySpaceStore(SpaceStore):
    """Dictionary-backed store. Data is lost when the process exits.

    Every read returns copies, so callers get a consistent snapshot they
    can hand to the proximity engine while other requests keep writing.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._locations: Dict[str, Location] = {}
        self._rooms: Dict[str, Room] = {}
        self._desks: Dict[str, Desk] = {}
        self._profiles: Dict[str, PersonProfile] = {}

    # ---- helpers ----

    def _require_location(self, location_id: str) -> Location:
        location = self._locations.get(location_id)
        if location is None:
            raise NotFoundError(f"Location {location_id} not found")
        return location

    def _require_room(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            raise NotFoundError(f"Room {room_id} not found")
        return room

    def _require_desk(self, desk_id: str) -> Desk:
        desk = self._desks.get(desk_id)
        if desk is None:
            raise NotFoundError(f"Desk {desk_id} not found")
        return desk

    def _location_of_desk(self, desk: Desk) -> str:
        return self._require_room(desk.room_id).location_id

    def _check_unique_seats(self, desks: Dict[str, Desk], location_id: str) -> None:
        seats = Counter(
            d.company_member_id for d in desks.values()
            if d.company_member_id and self._rooms[d.room_id].location_id == location_id
        )
        for member_id, count in seats.items():
            if count > 1:
                raise InvalidLayoutError(f"Member {member_id} would be seated at {count} desks")

    def _with_display_fields(self, desk: Desk) -> Desk:
        profile = self._profiles.get(desk.company_member_id) if desk.company_member_id else None
        if profile is None:
            return desk.model_copy(update={"assignee_name": None, "assignee_job_title": None})
        return desk.model_copy(update={
            "assignee_name": profile.full_name,
            "assignee_job_title": profile.job_title,
        })

    # ---- locations ----

    def list_locations(self, company_id: str) -> List[Location]:
        with self._lock:
            locations = [l for l in self._locations.values() if l.company_id == company_id]
            return sorted((l.model_copy() for l in locations), key=lambda l: (l.sort_order, l.name))

    def get_location(self, location_id: str) -> Location:
        with self._lock:
            return self._require_location(location_id).model_copy()

    def create_location(self, location: Location) -> Location:
        with self._lock:
            if location.id in self._locations:
                raise InvalidLayoutError(f"Location {location.id} already exists")
            self._locations[location.id] = location.model_copy()
            logger.debug(f"Created location {location.id}")
            return location

    def update_location(self, location: Location) -> Location:
        with self._lock:
            self._require_location(location.id)
            self._locations[location.id] = location.model_copy()
            return location

    def delete_location(self, location_id: str) -> None:
        with self._lock:
            self._require_location(location_id)
            room_ids = [r.id for r in self._rooms.values() if r.location_id == location_id]
            for room_id in room_ids:
                self._delete_room_locked(room_id)
            del self._locations[location_id]
            logger.debug(f"Deleted location {location_id} with {len(room_ids)} room(s)")

    # ---- rooms ----

    def list_rooms(self, location_id: str) -> List[Room]:
        with self._lock:
            self._require_location(location_id)
            return [r.model_copy() for r in self._rooms.values() if r.location_id == location_id]

    def create_room(self, room: Room) -> Room:
        with self._lock:
            self._require_location(room.location_id)
            if room.id in self._rooms:
                raise InvalidLayoutError(f"Room {room.id} already exists")
            self._rooms[room.id] = room.model_copy()
            return room

    def update_room(self, room: Room) -> Room:
        with self._lock:
            existing = self._require_room(room.id)
            if existing.location_id != room.location_id:
                raise InvalidLayoutError("Rooms cannot move between locations")
            self._rooms[room.id] = room.model_copy()
            return room

    def _delete_room_locked(self, room_id: str) -> None:
        for desk_id in [d.id for d in self._desks.values() if d.room_id == room_id]:
            del self._desks[desk_id]
        del self._rooms[room_id]

    def delete_room(self, room_id: str) -> None:
        with self._lock:
            self._require_room(room_id)
            self._delete_room_locked(room_id)

    # ---- desks ----

    def list_desks(self, location_id: str) -> List[Desk]:
        with self._lock:
            self._require_location(location_id)
            return [
                self._with_display_fields(d) for d in self._desks.values()
                if self._rooms[d.room_id].location_id == location_id
            ]

    def get_desk(self, desk_id: str) -> Desk:
        with self._lock:
            return self._with_display_fields(self._require_desk(desk_id))

    def create_desk(self, desk: Desk) -> Desk:
        with self._lock:
            if desk.id in self._desks:
                raise InvalidLayoutError(f"Desk {desk.id} already exists")
            location_id = self._location_of_desk(desk)
            candidate = dict(self._desks)
            candidate[desk.id] = desk.model_copy()
            self._check_unique_seats(candidate, location_id)
            self._desks = candidate
            return self._with_display_fields(desk)

    def update_desk(self, desk: Desk) -> Desk:
        return self.update_desks([desk])[0]

    def update_desks(self, desks: List[Desk]) -> List[Desk]:
        with self._lock:
            candidate = dict(self._desks)
            touched_locations = set()
            for desk in desks:
                self._require_desk(desk.id)
                touched_locations.add(self._location_of_desk(desk))
                candidate[desk.id] = desk.model_copy()
            for location_id in touched_locations:
                self._check_unique_seats(candidate, location_id)
            self._desks = candidate
            return [self._with_display_fields(d) for d in desks]

    def delete_desk(self, desk_id: str) -> None:
        with self._lock:
            self._require_desk(desk_id)
            del self._desks[desk_id]

    # ---- profiles ----

    def list_profiles(self, member_ids: Iterable[str]) -> Dict[str, PersonProfile]:
        with self._lock:
            return {
                member_id: self._profiles[member_id].model_copy(deep=True)
                for member_id in member_ids if member_id in self._profiles
            }

    def save_profile(self, profile: PersonProfile) -> PersonProfile:
        with self._lock:
            self._profiles[profile.member_id] = profile.model_copy(deep=True)
            return profile
