"""Store interface for floor plans and person profiles."""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from spacesync.models.floor import Desk, Location, Room
from spacesync.models.profile import PersonProfile


class SpaceStore(ABC):
    """Abstract base class for the persistence collaborator.

    The proximity engine never talks to a store: the HTTP layer reads a
    snapshot from it, runs the engine, and writes back whatever the user
    decided to keep (e.g. an accepted swap).
    """

    # Locations

    @abstractmethod
    def list_locations(self, company_id: str) -> List[Location]:
        pass

    @abstractmethod
    def get_location(self, location_id: str) -> Location:
        """Get a location by ID.

        Raises:
            NotFoundError: If the location does not exist
        """
        pass

    @abstractmethod
    def create_location(self, location: Location) -> Location:
        pass

    @abstractmethod
    def update_location(self, location: Location) -> Location:
        pass

    @abstractmethod
    def delete_location(self, location_id: str) -> None:
        """Delete a location together with its rooms and desks."""
        pass

    # Rooms

    @abstractmethod
    def list_rooms(self, location_id: str) -> List[Room]:
        pass

    @abstractmethod
    def create_room(self, room: Room) -> Room:
        pass

    @abstractmethod
    def update_room(self, room: Room) -> Room:
        pass

    @abstractmethod
    def delete_room(self, room_id: str) -> None:
        """Delete a room together with its desks."""
        pass

    # Desks

    @abstractmethod
    def list_desks(self, location_id: str) -> List[Desk]:
        """List desks of a location with assignee display fields joined in."""
        pass

    @abstractmethod
    def get_desk(self, desk_id: str) -> Desk:
        pass

    @abstractmethod
    def create_desk(self, desk: Desk) -> Desk:
        pass

    @abstractmethod
    def update_desk(self, desk: Desk) -> Desk:
        pass

    @abstractmethod
    def update_desks(self, desks: List[Desk]) -> List[Desk]:
        """Update several desks at once, validating the final state only.

        Needed for swaps, where each single update would briefly seat
        a person twice.
        """
        pass

    @abstractmethod
    def delete_desk(self, desk_id: str) -> None:
        pass

    # Profiles

    @abstractmethod
    def list_profiles(self, member_ids: Iterable[str]) -> Dict[str, PersonProfile]:
        """Profiles keyed by member ID; unknown members are simply absent."""
        pass

    @abstractmethod
    def save_profile(self, profile: PersonProfile) -> PersonProfile:
        pass
