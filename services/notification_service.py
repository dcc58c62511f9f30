# Notification Service for collaboration lifecycle events
# Turns lifecycle events into per-user Notification rows

import logging
from sqlalchemy.orm import Session
from typing import Optional, List
from enum import Enum

from database.lifecycle_models import Notification
from lifecycle.events import LifecycleEvent, LifecycleEventType

logger = logging.getLogger(__name__)


class NotificationType(str, Enum):
    """Notification types stored in Notification.type."""
    COLLABORATION_COMPLETED = "collaboration_completed"
    DELIVERABLE_SUBMITTED = "deliverable_submitted"
    PAYMENT_RELEASED = "payment_released"
    DISPUTE_OPENED = "dispute_opened"
    DISPUTE_RESOLVED = "dispute_resolved"


class NotificationService:
    """
    Service for creating user notifications.
    Writes into the caller's session; the caller commits.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        user_id: str,
        type: NotificationType,
        title: str,
        message: str,
        data: Optional[dict] = None,
    ) -> Notification:
        """
        Create a new notification for a user.

        Args:
            user_id: The user to notify
            type: Notification type
            title: Short notification title
            message: Full notification message
            data: Optional additional data as JSON

        Returns:
            The created Notification object
        """
        notification = Notification(
            user_id=user_id,
            type=type.value,
            title=title,
            message=message,
            data=data or {},
        )
        self.db.add(notification)
        self.db.flush()  # Get the ID without committing
        return notification

    def create_batch(
        self,
        user_ids: List[str],
        type: NotificationType,
        title: str,
        message: str,
        data: Optional[dict] = None,
    ) -> List[Notification]:
        """Create the same notification for several users."""
        return [
            self.create(user_id=user_id, type=type, title=title, message=message, data=data)
            for user_id in user_ids
        ]

    # =========================================================================
    # LIFECYCLE EVENT HANDLERS
    # =========================================================================

    def handle(self, event: LifecycleEvent) -> List[Notification]:
        handler = {
            LifecycleEventType.COLLABORATION_COMPLETED: self.notify_collaboration_completed,
            LifecycleEventType.DELIVERABLE_SUBMITTED: self.notify_deliverable_submitted,
            LifecycleEventType.PAYMENT_RELEASED: self.notify_payment_released,
            LifecycleEventType.DISPUTE_OPENED: self.notify_dispute_opened,
            LifecycleEventType.DISPUTE_RESOLVED: self.notify_dispute_resolved,
        }.get(event.type)
        if handler is None:
            return []
        return handler(event)

    def notify_collaboration_completed(self, event: LifecycleEvent):
        """Both participants can now leave reviews."""
        return self.create_batch(
            event.participants,
            type=NotificationType.COLLABORATION_COMPLETED,
            title="Collaboration Completed! 🎉",
            message="Your collaboration is complete. You can now leave a review.",
            data={"collaboration_id": event.collaboration_id, **event.payload},
        )

    def notify_deliverable_submitted(self, event: LifecycleEvent):
        """Tell the brand owner there is work to review."""
        brand_user_ids = [event.brand_user_id] if event.brand_user_id else []
        return self.create_batch(
            brand_user_ids,
            type=NotificationType.DELIVERABLE_SUBMITTED,
            title="Deliverable Submitted! 📤",
            message=f"'{event.payload.get('title')}' was submitted for your review.",
            data={"collaboration_id": event.collaboration_id, "deliverable_id": event.entity_id},
        )

    def notify_payment_released(self, event: LifecycleEvent):
        """Tell the influencer their payout left escrow."""
        influencer_user_ids = [event.influencer_user_id] if event.influencer_user_id else []
        payout = event.payload.get("influencer_payout")
        return self.create_batch(
            influencer_user_ids,
            type=NotificationType.PAYMENT_RELEASED,
            title="Payment Released! 💰",
            message=f"{payout} has been released from escrow to you.",
            data={"collaboration_id": event.collaboration_id, "payment_id": event.entity_id, "amount": payout},
        )

    def notify_dispute_opened(self, event: LifecycleEvent):
        """Notify the other participant that a dispute was opened."""
        initiated_by = event.payload.get("initiated_by")
        others = [user_id for user_id in event.participants if user_id != initiated_by]
        return self.create_batch(
            others,
            type=NotificationType.DISPUTE_OPENED,
            title="Dispute Opened ⚠️",
            message=f"A dispute was opened on your collaboration: {event.payload.get('subject')}. Our team will review it.",
            data={"collaboration_id": event.collaboration_id, "dispute_id": event.entity_id},
        )

    def notify_dispute_resolved(self, event: LifecycleEvent):
        resolution = event.payload.get("resolution")
        return self.create_batch(
            event.participants,
            type=NotificationType.DISPUTE_RESOLVED,
            title="Dispute Resolved ✅",
            message=f"Your dispute has been resolved: {resolution}",
            data={"collaboration_id": event.collaboration_id, "dispute_id": event.entity_id, "resolution": resolution},
        )


class NotificationListener:
    """
    EventBus listener that writes notifications in its own session.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def __call__(self, event: LifecycleEvent) -> None:
        db = self.session_factory()
        try:
            created = NotificationService(db).handle(event)
            db.commit()
            logger.info("Sent %d notification(s) for %s", len(created), event.type.value)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


