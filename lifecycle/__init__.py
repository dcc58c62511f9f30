# Collaboration lifecycle engine
# State machines for collaborations, deliverables, payments and disputes,
# driven through LifecycleCoordinator.

from lifecycle.errors import (
    LifecycleError,
    NotFound,
    InvalidState,
    InvalidTransition,
    Conflict,
    Forbidden,
    InvalidArgument,
)
from lifecycle.events import EventBus, LifecycleEvent, LifecycleEventType
from lifecycle.coordinator import LifecycleCoordinator

__all__ = [
    "LifecycleError",
    "NotFound",
    "InvalidState",
    "InvalidTransition",
    "Conflict",
    "Forbidden",
    "InvalidArgument",
    "EventBus",
    "LifecycleEvent",
    "LifecycleEventType",
    "LifecycleCoordinator",
]
