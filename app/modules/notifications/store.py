import logging
from typing import List, Optional

from app.database.records import RecordTable
from app.modules.notifications.models import Notification, NotificationType

logger = logging.getLogger(__name__)


class NotificationStore:
    def __init__(self):
        self._notifications: RecordTable[Notification] = RecordTable("notifications")

    def create_notification(self, user_id: str, type: NotificationType, message: str) -> Notification:
        notification = self._notifications.insert(Notification(
            id=self._notifications.next_id(),
            user_id=user_id,
            type=NotificationType(type),
            message=message,
        ))
        logger.debug(f"Notification {notification.id} ({notification.type.value}) for user {user_id}")
        return notification

    def get_notification(self, notification_id: int) -> Optional[Notification]:
        return self._notifications.get(notification_id)

    def list_for_user(self, user_id: str) -> List[Notification]:
        """Newest first"""
        notifications = self._notifications.filter(lambda n: n.user_id == user_id)
        return sorted(notifications, key=lambda n: (n.created_at, n.id), reverse=True)

    def mark_as_read(self, notification_id: int) -> bool:
        notification = self._notifications.get(notification_id)
        if notification is None:
            return False
        notification.read = True
        return True
