"""Custom exceptions for the SpaceSync service."""


class SpaceSyncError(Exception):
    """Base exception for all SpaceSync errors."""

    pass


class NotFoundError(SpaceSyncError):
    """Raised when a location, room, desk or profile does not exist in the store."""

    pass


class InvalidLayoutError(SpaceSyncError):
    """Raised when a store mutation would leave the floor plan inconsistent."""

    pass


class SuggestionError(SpaceSyncError):
    """Raised when the suggestion provider fails or returns an unusable answer."""

    pass
