import pytest

from fakes import FakeTokenRepo, RecordingNotifier
from src.ojt_tracker.ojt_tracker.core.exceptions import ValidationError
from src.ojt_tracker.ojt_tracker.notifications.service import NotificationService


class BrokenTokenRepo(FakeTokenRepo):
    def get_token(self, intern_id):
        raise ConnectionError("db down")


def test_notify_sends_to_registered_token():
    notifier = RecordingNotifier()
    svc = NotificationService(FakeTokenRepo(), notifier)
    svc.register_token(intern_id=3, token="abc")

    assert svc.notify_intern(3, "Title", "Body") is True
    assert notifier.sent == [("abc", "Title", "Body")]


def test_notify_never_raises():
    assert NotificationService(FakeTokenRepo(), RecordingNotifier()).notify_intern(3, "T", "B") is False
    assert NotificationService(FakeTokenRepo({3: "abc"}), RecordingNotifier(fail=True)).notify_intern(3, "T", "B") is False
    assert NotificationService(BrokenTokenRepo(), RecordingNotifier()).notify_intern(3, "T", "B") is False


def test_register_requires_token():
    with pytest.raises(ValidationError):
        NotificationService(FakeTokenRepo(), RecordingNotifier()).register_token(intern_id=3, token=" ")
