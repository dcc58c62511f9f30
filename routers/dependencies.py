# Shared router dependencies

from fastapi import Depends
from sqlalchemy.orm import Session

from config.app_config import NOTIFICATIONS_ENABLED
from database.config import get_db, session_factory_for
from lifecycle import EventBus, LifecycleCoordinator
from services.notification_service import NotificationListener


def get_coordinator(db: Session = Depends(get_db)) -> LifecycleCoordinator:
    """
    Build a coordinator bound to the request session.
    Notifications are written through a separate session on the same engine.
    """
    events = EventBus()
    if NOTIFICATIONS_ENABLED:
        events.subscribe(NotificationListener(session_factory_for(db.get_bind())))
    return LifecycleCoordinator(db, events=events)
