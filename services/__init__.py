# Services Module
# Side effects driven by lifecycle events

from services.notification_service import NotificationService, NotificationType, NotificationListener

__all__ = [
    'NotificationService',
    'NotificationType',
    'NotificationListener',
]
