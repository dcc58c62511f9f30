from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)


class LifecycleEventType(str, Enum):
    COLLABORATION_COMPLETED = "collaboration.completed"
    DELIVERABLE_SUBMITTED = "deliverable.submitted"
    PAYMENT_RELEASED = "payment.released"
    DISPUTE_OPENED = "dispute.opened"
    DISPUTE_RESOLVED = "dispute.resolved"


@dataclass(frozen=True)
class LifecycleEvent:
    type: LifecycleEventType
    collaboration_id: str
    entity_id: str
    brand_user_id: Optional[str] = None
    influencer_user_id: Optional[str] = None
    payload: dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def participants(self) -> list[str]:
        return [u for u in (self.brand_user_id, self.influencer_user_id) if u]


Listener = Callable[[LifecycleEvent], None]


class EventBus:
    """
    In-process fan-out of lifecycle events.
    Delivery is best-effort: a failing listener is logged and skipped.
    """

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def publish(self, event: LifecycleEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "Lifecycle listener %r failed for %s on collaboration %s",
                    listener, event.type.value, event.collaboration_id,
                )
