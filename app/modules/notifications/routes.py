from fastapi import APIRouter, Depends, Query
from app.database.memory_store import Datastore, get_datastore
from app.modules.notifications.schemas import NotificationResponse, UnreadCountResponse
from app.modules.notifications.service import NotificationService
from app.modules.users.models import User
from app.core.dependencies import require_permission
from typing import List

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(datastore: Datastore = Depends(get_datastore)) -> NotificationService:
    return NotificationService(datastore)


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    current_user: User = Depends(require_permission("notifications:read")),
    service: NotificationService = Depends(get_notification_service)
):
    """List the caller's notifications, newest first"""
    return service.list_for_user(current_user.id, unread_only=unread_only)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_notification_count(
    current_user: User = Depends(require_permission("notifications:read")),
    service: NotificationService = Depends(get_notification_service)
):
    return service.unread_count(current_user.id)


@router.patch("/{notification_id}/read")
async def mark_notification_read(
    notification_id: int,
    current_user: User = Depends(require_permission("notifications:update")),
    service: NotificationService = Depends(get_notification_service)
):
    """Mark one of the caller's notifications as read"""
    service.mark_as_read(notification_id, current_user.id)
    return {"success": True}
