"""Notifications API routes — per-user in-app feed."""

from fastapi import APIRouter, Depends

from buildhub.application.services.notification_service import NotificationCenter
from buildhub.core.exceptions import EntityNotFoundException
from buildhub.domain.models.user import User
from buildhub.interfaces.api.deps import get_current_user
from buildhub.interfaces.deps import get_notification_center

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("")
def list_notifications(
    user: User = Depends(get_current_user),
    notifications: NotificationCenter = Depends(get_notification_center),
):
    return {"notifications": notifications.for_user(user.id)}


@router.post("/read-all")
def mark_all_read(
    user: User = Depends(get_current_user),
    notifications: NotificationCenter = Depends(get_notification_center),
):
    return {"updated": notifications.mark_all_read(user.id)}


@router.post("/{notification_id}/read")
def mark_read(
    notification_id: str,
    user: User = Depends(get_current_user),
    notifications: NotificationCenter = Depends(get_notification_center),
):
    if not notifications.mark_read(user.id, notification_id):
        raise EntityNotFoundException("Notification not found")
    return {"message": "Notification marked as read"}
