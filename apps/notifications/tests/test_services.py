from __future__ import annotations

from datetime import timedelta
from unittest import mock
from uuid import uuid4

import pytest
from django.db import DatabaseError
from django.utils import timezone

from apps.notifications import services
from apps.notifications.catalog import EmailPayload, Recipient, TripReminder, Welcome
from apps.notifications.models import Notification
from apps.notifications.services import DispatchOptions, NotificationSink
from apps.notifications.tasks import purge_read_notifications
from shared.domain.exceptions import (
    AuthorizationError,
    NotFoundError,
    NotificationPersistenceError,
    ValidationError,
)

pytestmark = pytest.mark.django_db


class RecordingDispatcher:
    def __init__(self, result=True, error=None):
        self.result = result
        self.error = error
        self.sent = []

    def send(self, to, subject, html):
        self.sent.append((to, subject, html))
        if self.error:
            raise self.error
        return self.result


def _email(user) -> EmailPayload:
    return EmailPayload(to=user.email, subject="Hello", html="<p>Hi</p>")


def test_dispatch_persists_one_notification(tourist):
    dispatcher = RecordingDispatcher()
    notification = NotificationSink(dispatcher).dispatch(
        tourist.id,
        "system_announcement",
        "Maintenance",
        "Back at noon",
        DispatchOptions(priority="high", action_url="/status"),
    )

    stored = Notification.objects.get()
    assert stored.pk == notification.pk
    assert (stored.recipient_id, stored.priority, stored.is_read) == (tourist.id, "high", False)
    assert stored.action_url == "/status"
    assert dispatcher.sent == []


def test_dispatch_sends_email_when_asked(tourist):
    dispatcher = RecordingDispatcher()

    NotificationSink(dispatcher).dispatch(
        tourist.id, "system_announcement", "t", "m", DispatchOptions(email=_email(tourist))
    )

    assert dispatcher.sent == [(tourist.email, "Hello", "<p>Hi</p>")]


def test_send_email_flag_off_skips_email(tourist):
    dispatcher = RecordingDispatcher()

    NotificationSink(dispatcher).dispatch(
        tourist.id, "system_announcement", "t", "m", DispatchOptions(send_email=False, email=_email(tourist))
    )

    assert dispatcher.sent == []


@pytest.mark.parametrize("dispatcher", [RecordingDispatcher(result=False), RecordingDispatcher(error=OSError("smtp"))])
def test_email_failure_keeps_notification(tourist, dispatcher, caplog):
    NotificationSink(dispatcher).dispatch(
        tourist.id, "system_announcement", "t", "m", DispatchOptions(email=_email(tourist))
    )

    assert Notification.objects.count() == 1
    assert any(record.levelname in ("WARNING", "ERROR") for record in caplog.records)


def test_persistence_failure_propagates(tourist):
    dispatcher = RecordingDispatcher()
    with mock.patch.object(Notification.objects, "create", side_effect=DatabaseError("gone")):
        with pytest.raises(NotificationPersistenceError):
            NotificationSink(dispatcher).dispatch(
                tourist.id, "system_announcement", "t", "m", DispatchOptions(email=_email(tourist))
            )
    assert dispatcher.sent == []


def test_unknown_category_is_rejected(tourist):
    with pytest.raises(ValidationError):
        NotificationSink(RecordingDispatcher()).dispatch(tourist.id, "party", "t", "m")


def test_notify_renders_and_dispatches(tourist):
    dispatcher = RecordingDispatcher()
    recipient = Recipient(user_id=tourist.id, name="Nour", email=tourist.email)

    notification = NotificationSink(dispatcher).notify(Welcome(), recipient)

    assert notification.category == "system_announcement"
    assert notification.priority == "low"
    assert dispatcher.sent[0][0] == tourist.email


def test_notify_in_app_only_event_sends_nothing(tourist):
    dispatcher = RecordingDispatcher()
    recipient = Recipient(user_id=tourist.id, name="Nour", email=tourist.email)

    NotificationSink(dispatcher).notify(TripReminder(trip_id=uuid4(), trip_title="Karnak"), recipient)

    assert dispatcher.sent == []
    assert Notification.objects.get().category == "trip_reminder"


def _notification(user, **fields) -> Notification:
    return Notification.objects.create(recipient=user, category="system_announcement", title="t", message="m", **fields)


def test_mark_as_read_is_monotonic(tourist):
    notification = _notification(tourist)
    first = timezone.now()

    services.mark_as_read(notification.pk, tourist.id, now=first)
    services.mark_as_read(notification.pk, tourist.id, now=first + timedelta(hours=1))

    notification.refresh_from_db()
    assert notification.is_read is True
    assert notification.read_at == first


def test_mark_as_read_checks_recipient(tourist, other_tourist):
    notification = _notification(tourist)

    with pytest.raises(AuthorizationError):
        services.mark_as_read(notification.pk, other_tourist.id)
    with pytest.raises(NotFoundError):
        services.mark_as_read(notification.pk + 1000, tourist.id)


def test_unread_count_and_mark_all(tourist, other_tourist):
    _notification(tourist)
    _notification(tourist)
    _notification(tourist, is_read=True)
    _notification(other_tourist)

    assert services.unread_count(tourist.id) == 2
    assert services.mark_all_as_read(tourist.id) == 2
    assert services.unread_count(tourist.id) == 0
    assert services.unread_count(other_tourist.id) == 1


def test_delete_and_clear_read(tourist, other_tourist):
    keep = _notification(tourist)
    _notification(tourist, is_read=True)
    foreign = _notification(other_tourist, is_read=True)

    assert services.clear_read(tourist.id) == 1
    with pytest.raises(AuthorizationError):
        services.delete_notification(foreign.pk, tourist.id)

    services.delete_notification(keep.pk, tourist.id)
    assert list(Notification.objects.all()) == [foreign]


def test_purge_only_removes_old_read_notifications(tourist, settings):
    settings.NOTIFICATION_READ_RETENTION_DAYS = 30
    old_read = _notification(tourist, is_read=True)
    old_unread = _notification(tourist)
    recent_read = _notification(tourist, is_read=True)
    Notification.objects.filter(pk__in=[old_read.pk, old_unread.pk]).update(
        created_at=timezone.now() - timedelta(days=31)
    )

    deleted = purge_read_notifications.apply().get()

    assert deleted == 1
    assert set(Notification.objects.values_list("pk", flat=True)) == {old_unread.pk, recent_read.pk}


def test_retention_counts_from_when_it_was_read(tourist):
    now = timezone.now()
    read_recently = _notification(tourist, is_read=True, read_at=now - timedelta(minutes=1))
    read_long_ago = _notification(tourist, is_read=True, read_at=now - timedelta(days=31))
    Notification.objects.filter(pk__in=[read_recently.pk, read_long_ago.pk]).update(
        created_at=now - timedelta(days=40)
    )

    deleted = services.purge_expired_read_notifications(now=now)

    assert deleted == 1
    assert list(Notification.objects.values_list("pk", flat=True)) == [read_recently.pk]
