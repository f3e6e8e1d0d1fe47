from app.database.memory_store import Datastore
from app.modules.notifications.models import NotificationType
from app.modules.notifications.schemas import NotificationResponse, UnreadCountResponse
from typing import List
from fastapi import HTTPException


class NotificationService:
    def __init__(self, datastore: Datastore):
        self.notifications = datastore.notifications
        self.users = datastore.users

    def notify(self, user_id: str, type: NotificationType, message: str) -> NotificationResponse:
        """Record a notification for one user"""
        return NotificationResponse.model_validate(
            self.notifications.create_notification(user_id, type, message)
        )

    def notify_admins(self, type: NotificationType, message: str) -> List[NotificationResponse]:
        """Record the same notification for every admin"""
        return [self.notify(admin.id, type, message) for admin in self.users.list_admins()]

    def list_for_user(self, user_id: str, unread_only: bool = False) -> List[NotificationResponse]:
        """List a user's notifications, newest first"""
        notifications = self.notifications.list_for_user(user_id)
        if unread_only:
            notifications = [n for n in notifications if not n.read]
        return [NotificationResponse.model_validate(n) for n in notifications]

    def unread_count(self, user_id: str) -> UnreadCountResponse:
        return UnreadCountResponse(
            unread=sum(1 for n in self.notifications.list_for_user(user_id) if not n.read)
        )

    def mark_as_read(self, notification_id: int, user_id: str) -> bool:
        """Mark a notification as read; only its recipient may do so"""
        notification = self.notifications.get_notification(notification_id)
        if not notification:
            raise HTTPException(status_code=404, detail="Notification not found")
        if notification.user_id != user_id:
            raise HTTPException(status_code=403, detail="Forbidden")
        return self.notifications.mark_as_read(notification_id)
