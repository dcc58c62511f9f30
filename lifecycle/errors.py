# Lifecycle engine error taxonomy
# Every rejected operation raises one of these before anything is written.
# The API layer maps them to HTTP responses (see server.py).

from fastapi import status


class LifecycleError(Exception):
    """Base class for all lifecycle rule violations."""

    kind = "lifecycle_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message, **self.context}


class NotFound(LifecycleError):
    """A referenced entity id does not exist."""
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidState(LifecycleError):
    """The entity exists but its state does not permit the operation."""
    kind = "invalid_state"
    status_code = status.HTTP_409_CONFLICT


class InvalidTransition(LifecycleError):
    """The (current, requested) status pair is not in the transition table."""
    kind = "invalid_transition"
    status_code = status.HTTP_409_CONFLICT


class Conflict(LifecycleError):
    """Uniqueness violation or lost concurrent-write race."""
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class Forbidden(LifecycleError):
    """The actor is not a participant of the collaboration."""
    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class InvalidArgument(LifecycleError):
    """Malformed input, e.g. commission arithmetic that does not add up."""
    kind = "invalid_argument"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
