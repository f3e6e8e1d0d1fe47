from datetime import datetime

from app.core.schemas import CamelModel
from app.modules.notifications.models import NotificationType


class NotificationResponse(CamelModel):
    id: int
    user_id: str
    type: NotificationType
    message: str
    read: bool
    created_at: datetime


class UnreadCountResponse(CamelModel):
    unread: int
