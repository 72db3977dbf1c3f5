"""Integration tests for notification API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.notifications.models import Notification

User = get_user_model()


class NotificationAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(username="nour", email="nour@example.com", password="pass")
        self.other = User.objects.create_user(username="omar", email="omar@example.com", password="pass")
        self.first = self._notify(self.user, "Booking Confirmed")
        self.second = self._notify(self.user, "Booking Cancelled")
        self.foreign = self._notify(self.other, "Welcome")
        self.client.force_authenticate(self.user)

    @staticmethod
    def _notify(user, title: str) -> Notification:
        return Notification.objects.create(
            recipient=user, category="system_announcement", title=title, message=title
        )

    def test_list_only_shows_own_notifications(self) -> None:
        response = self.client.get(reverse("notification-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["count"], 2)
        ids = {item["id"] for item in response.data["results"]}
        self.assertNotIn(self.foreign.pk, ids)

    def test_mark_read_then_unread_filter(self) -> None:
        response = self.client.post(reverse("notification-mark-read", args=[self.first.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["is_read"])

        response = self.client.get(reverse("notification-list"), {"unread_only": "true"})
        self.assertEqual([item["id"] for item in response.data["results"]], [self.second.pk])

        response = self.client.get(reverse("notification-unread-count"))
        self.assertEqual(response.data["unread_count"], 1)

    def test_cannot_mark_someone_elses_notification(self) -> None:
        response = self.client.post(reverse("notification-mark-read", args=[self.foreign.pk]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
        self.foreign.refresh_from_db()
        self.assertFalse(self.foreign.is_read)

    def test_mark_all_and_clear_read(self) -> None:
        response = self.client.post(reverse("notification-mark-all-read"))
        self.assertEqual(response.data["modified_count"], 2)

        response = self.client.post(reverse("notification-clear-read"))
        self.assertEqual(response.data["deleted_count"], 2)
        self.assertEqual(list(Notification.objects.all()), [self.foreign])

    def test_delete_own_notification(self) -> None:
        response = self.client.delete(reverse("notification-detail", args=[self.first.pk]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Notification.objects.filter(pk=self.first.pk).exists())

    def test_anonymous_is_rejected(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.get(reverse("notification-unread-count"))
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))
