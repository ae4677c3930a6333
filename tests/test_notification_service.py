"""Tests for the in-app notification feed."""

from buildhub.application.services.notification_service import NotificationCenter
from buildhub.domain.schemas.notification import NotificationType


class TestNotificationCenter:
    def test_newest_first(self):
        center = NotificationCenter()
        center.notify_project_created("u1", "Tower", 1)
        center.notify_project_deleted("u1", "Tower")

        titles = [n.title for n in center.for_user("u1")]
        assert titles == ["Project Deleted", "Project Created"]

    def test_feed_is_capped(self):
        center = NotificationCenter()
        for i in range(60):
            center.create("u1", NotificationType.INFO, f"n{i}", "message")

        feed = center.for_user("u1")
        assert len(feed) == 50
        assert feed[0].title == "n59"
        assert feed[-1].title == "n10"

    def test_feeds_are_per_user(self):
        center = NotificationCenter()
        center.notify_welcome("u1", "Jane")

        assert center.for_user("u2") == []

    def test_mark_read(self):
        center = NotificationCenter()
        first = center.notify_welcome("u1", "Jane")
        center.notify_project_created("u1", "Tower", 1)

        assert center.mark_read("u1", first.id)
        assert not center.mark_read("u2", first.id)
        assert center.mark_all_read("u1") == 2
        assert all(n.read for n in center.for_user("u1"))

    def test_stock_status_alerts(self):
        center = NotificationCenter()

        assert center.notify_stock_status("u1", "critical", "Cement", "Tower", 1, 2).type == NotificationType.ERROR
        assert center.notify_stock_status("u1", "low", "Cement", "Tower", 1, 2).type == NotificationType.WARNING
        assert center.notify_stock_status("u1", "adequate", "Cement", "Tower", 1, 2) is None
