"""SpaceSync - collaboration-aware office space planning."""

__version__ = "0.1.0"
