"""
Floor Plan Data Models

These Pydantic models define the physical hierarchy of an office:
locations (sites/floors), rooms placed on a location canvas, and desks
placed inside rooms. They are the "contract" between the store and the
proximity engine.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class RoomType(str, Enum):
    """Classification of rooms on a floor plan."""
    OFFICE = "office"
    MEETING = "meeting"
    COMMON = "common"
    OTHER = "other"


class Location(BaseModel):
    """
    A physical site or floor owned by a company.

    Attributes:
        id: Unique identifier
        company_id: Owning tenant
        name: Display name (e.g., "HQ - 2nd floor")
        canvas_width: Width of the floor plan coordinate space
        canvas_height: Height of the floor plan coordinate space
    """
    id: str = Field(..., description="Unique location ID")
    company_id: str = Field(..., description="Owning company (tenant) ID")
    name: str = Field(..., description="Display name")
    address: Optional[str] = None
    building_name: Optional[str] = None
    floor_number: Optional[int] = None
    sort_order: int = Field(default=0)
    canvas_width: int = Field(default=1200, gt=0)
    canvas_height: int = Field(default=800, gt=0)


class Room(BaseModel):
    """
    A rectangular area within exactly one location.

    (x, y) is the top-left corner in location space.
    """
    id: str = Field(..., description="Unique room ID")
    location_id: str = Field(..., description="Owning location ID")
    name: str = Field(..., description="Room name")
    x: float = Field(default=0)
    y: float = Field(default=0)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    room_type: RoomType = Field(default=RoomType.OFFICE)
    color: str = Field(default="#e2e8f0")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


class Desk(BaseModel):
    """
    A point-like workstation within exactly one room.

    Attributes:
        id: Unique identifier
        room_id: Owning room ID
        label: Short label shown on the plan (e.g., "D-12")
        x: X coordinate of the desk's top-left, relative to the room
        y: Y coordinate of the desk's top-left, relative to the room
        company_member_id: Person seated at the desk, if any
        company_role_id: Role the desk is reserved for, if any
    """
    id: str = Field(..., description="Unique desk ID")
    room_id: str = Field(..., description="Owning room ID")
    label: str = Field(..., description="Short desk label")
    x: float = Field(default=0)
    y: float = Field(default=0)
    company_member_id: Optional[str] = None
    company_role_id: Optional[str] = None

    # Joined display data (not stored with the desk)
    assignee_name: Optional[str] = None
    assignee_job_title: Optional[str] = None
    role_name: Optional[str] = None

    @property
    def is_assigned(self) -> bool:
        return bool(self.company_member_id)
