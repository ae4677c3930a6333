"""Notification service — per-user in-app notification feeds."""

import threading
import uuid
from collections import defaultdict, deque
from datetime import datetime, timezone
from typing import Deque, Dict, List, Optional

from buildhub.domain.schemas.notification import Notification, NotificationType

MAX_NOTIFICATIONS_PER_USER = 50


class NotificationCenter:
    """Keeps the newest notifications of each user, oldest dropped past the cap."""

    def __init__(self, max_per_user: int = MAX_NOTIFICATIONS_PER_USER):
        self.max_per_user = max_per_user
        self._feeds: Dict[str, Deque[Notification]] = defaultdict(lambda: deque(maxlen=self.max_per_user))
        self._lock = threading.Lock()

    def create(
        self,
        user_id: str,
        type: NotificationType,
        title: str,
        message: str,
        project_id: Optional[int] = None,
        material_id: Optional[int] = None,
    ) -> Notification:
        notification = Notification(
            id=uuid.uuid4().hex,
            type=type,
            title=title,
            message=message,
            user_id=user_id,
            project_id=project_id,
            material_id=material_id,
            timestamp=datetime.now(timezone.utc),
        )
        with self._lock:
            self._feeds[user_id].appendleft(notification)
        return notification

    def for_user(self, user_id: str) -> List[Notification]:
        with self._lock:
            return list(self._feeds.get(user_id, ()))

    def mark_read(self, user_id: str, notification_id: str) -> bool:
        with self._lock:
            for notification in self._feeds.get(user_id, ()):
                if notification.id == notification_id:
                    notification.read = True
                    return True
        return False

    def mark_all_read(self, user_id: str) -> int:
        with self._lock:
            feed = self._feeds.get(user_id, ())
            for notification in feed:
                notification.read = True
            return len(feed)

    # Domain events

    def notify_welcome(self, user_id: str, user_name: str) -> Notification:
        return self.create(
            user_id, NotificationType.SUCCESS, "Welcome!",
            f"Welcome to BuildHub, {user_name}! Start by creating your first project.",
        )

    def notify_project_created(self, user_id: str, project_name: str, project_id: int) -> Notification:
        return self.create(
            user_id, NotificationType.SUCCESS, "Project Created",
            f'Project "{project_name}" has been created successfully.',
            project_id=project_id,
        )

    def notify_project_updated(self, user_id: str, project_name: str, project_id: int) -> Notification:
        return self.create(
            user_id, NotificationType.INFO, "Project Updated",
            f'Project "{project_name}" has been updated.',
            project_id=project_id,
        )

    def notify_project_progress(self, user_id: str, project_name: str, progress: int, project_id: int) -> Notification:
        return self.create(
            user_id, NotificationType.INFO, "Progress Update",
            f'Project "{project_name}" is now {progress}% complete.',
            project_id=project_id,
        )

    def notify_project_deleted(self, user_id: str, project_name: str) -> Notification:
        return self.create(
            user_id, NotificationType.WARNING, "Project Deleted",
            f'Project "{project_name}" has been deleted.',
        )

    def notify_material_added(self, user_id: str, material_name: str, project_name: str,
                              project_id: int, material_id: int) -> Notification:
        return self.create(
            user_id, NotificationType.SUCCESS, "Material Added",
            f'Material "{material_name}" has been added to project "{project_name}".',
            project_id=project_id, material_id=material_id,
        )

    def notify_material_low_stock(self, user_id: str, material_name: str, project_name: str,
                                  project_id: int, material_id: int) -> Notification:
        return self.create(
            user_id, NotificationType.WARNING, "Low Stock Alert",
            f'Material "{material_name}" in project "{project_name}" is running low.',
            project_id=project_id, material_id=material_id,
        )

    def notify_material_critical_stock(self, user_id: str, material_name: str, project_name: str,
                                       project_id: int, material_id: int) -> Notification:
        return self.create(
            user_id, NotificationType.ERROR, "Critical Stock Alert",
            f'Material "{material_name}" in project "{project_name}" is critically low!',
            project_id=project_id, material_id=material_id,
        )

    def notify_stock_status(self, user_id: str, status: str, material_name: str, project_name: str,
                            project_id: int, material_id: int) -> Optional[Notification]:
        """Raise the stock alert matching a material status, if any."""
        if status == "critical":
            return self.notify_material_critical_stock(user_id, material_name, project_name, project_id, material_id)
        if status == "low":
            return self.notify_material_low_stock(user_id, material_name, project_name, project_id, material_id)
        return None
