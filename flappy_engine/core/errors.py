"""
Exception types for the game engine.
"""


class InvalidTransitionError(Exception):
    """Raised when no reducer is registered for an event type."""
    pass


class IntegrityError(Exception):
    """Raised when hash chain verification fails."""
    pass


class EventStoreError(Exception):
    """Raised when event store operations fail."""
    pass


class ScheduleError(Exception):
    """Raised when the obstacle schedule cannot be read."""
    pass
