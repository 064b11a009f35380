"""
Layout Routes

CRUD for locations, rooms, desks and person profiles, passed straight
through to the store, plus a non-blocking layout check.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from spacesync.config import get_settings
from spacesync.core.geometry import layout_issues
from spacesync.exceptions import InvalidLayoutError, NotFoundError
from spacesync.models.api import LayoutIssuesResponse
from spacesync.models.floor import Desk, Location, Room
from spacesync.models.profile import PersonProfile
from spacesync.store import SpaceStore, get_store


router = APIRouter(tags=["Layout"])


def _raise_http(e: Exception) -> None:
    if isinstance(e, NotFoundError):
        raise HTTPException(status_code=404, detail=str(e))
    raise HTTPException(status_code=400, detail=str(e))


def _check_path_id(path_id: str, body_id: str) -> None:
    if path_id != body_id:
        raise HTTPException(status_code=400, detail="ID in path and body do not match")


# ============ Locations ============

@router.get("/companies/{company_id}/locations", response_model=List[Location])
async def list_locations(company_id: str, store: SpaceStore = Depends(get_store)):
    return store.list_locations(company_id)


@router.post("/locations", response_model=Location, status_code=201)
async def create_location(location: Location, store: SpaceStore = Depends(get_store)):
    try:
        return store.create_location(location)
    except InvalidLayoutError as e:
        _raise_http(e)


@router.get("/locations/{location_id}", response_model=Location)
async def get_location(location_id: str, store: SpaceStore = Depends(get_store)):
    try:
        return store.get_location(location_id)
    except NotFoundError as e:
        _raise_http(e)


@router.put("/locations/{location_id}", response_model=Location)
async def update_location(location_id: str, location: Location, store: SpaceStore = Depends(get_store)):
    _check_path_id(location_id, location.id)
    try:
        return store.update_location(location)
    except NotFoundError as e:
        _raise_http(e)


@router.delete("/locations/{location_id}", status_code=204)
async def delete_location(location_id: str, store: SpaceStore = Depends(get_store)):
    try:
        store.delete_location(location_id)
    except NotFoundError as e:
        _raise_http(e)


@router.get("/locations/{location_id}/issues", response_model=LayoutIssuesResponse)
async def location_issues(location_id: str, store: SpaceStore = Depends(get_store)):
    """
    Report layout problems (rooms off-canvas, desks outside their room,
    people seated twice). Informational only; nothing is rejected.
    """
    try:
        location = store.get_location(location_id)
        rooms = store.list_rooms(location_id)
        desks = store.list_desks(location_id)
    except NotFoundError as e:
        _raise_http(e)
    return LayoutIssuesResponse(
        issues=layout_issues(location, rooms, desks, get_settings().desk_size)
    )


# ============ Rooms ============

@router.get("/locations/{location_id}/rooms", response_model=List[Room])
async def list_rooms(location_id: str, store: SpaceStore = Depends(get_store)):
    try:
        return store.list_rooms(location_id)
    except NotFoundError as e:
        _raise_http(e)


@router.post("/rooms", response_model=Room, status_code=201)
async def create_room(room: Room, store: SpaceStore = Depends(get_store)):
    try:
        return store.create_room(room)
    except (NotFoundError, InvalidLayoutError) as e:
        _raise_http(e)


@router.put("/rooms/{room_id}", response_model=Room)
async def update_room(room_id: str, room: Room, store: SpaceStore = Depends(get_store)):
    _check_path_id(room_id, room.id)
    try:
        return store.update_room(room)
    except (NotFoundError, InvalidLayoutError) as e:
        _raise_http(e)


@router.delete("/rooms/{room_id}", status_code=204)
async def delete_room(room_id: str, store: SpaceStore = Depends(get_store)):
    try:
        store.delete_room(room_id)
    except NotFoundError as e:
        _raise_http(e)


# ============ Desks ============

@router.get("/locations/{location_id}/desks", response_model=List[Desk])
async def list_desks(location_id: str, store: SpaceStore = Depends(get_store)):
    try:
        return store.list_desks(location_id)
    except NotFoundError as e:
        _raise_http(e)


@router.post("/desks", response_model=Desk, status_code=201)
async def create_desk(desk: Desk, store: SpaceStore = Depends(get_store)):
    try:
        return store.create_desk(desk)
    except (NotFoundError, InvalidLayoutError) as e:
        _raise_http(e)


@router.put("/desks/{desk_id}", response_model=Desk)
async def update_desk(desk_id: str, desk: Desk, store: SpaceStore = Depends(get_store)):
    _check_path_id(desk_id, desk.id)
    try:
        return store.update_desk(desk)
    except (NotFoundError, InvalidLayoutError) as e:
        _raise_http(e)


@router.delete("/desks/{desk_id}", status_code=204)
async def delete_desk(desk_id: str, store: SpaceStore = Depends(get_store)):
    try:
        store.delete_desk(desk_id)
    except NotFoundError as e:
        _raise_http(e)


# ============ Profiles ============

@router.put("/profiles/{member_id}", response_model=PersonProfile)
async def save_profile(member_id: str, profile: PersonProfile, store: SpaceStore = Depends(get_store)):
    _check_path_id(member_id, profile.member_id)
    return store.save_profile(profile)
