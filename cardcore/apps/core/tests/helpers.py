from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Tuple

from django.contrib.auth import get_user_model

from cardcore.apps.accounts.models import Profile
from cardcore.apps.core.notifications import scorecard_event


def make_user(username: str, display_name: str = "", **extra):
    User = get_user_model()
    user = User.objects.create_user(username=username, email=f"{username}@example.com", password="Pass1234!", **extra)
    if display_name:
        Profile.objects.create(user=user, display_name=display_name)
    return user


@contextmanager
def capture_events() -> Iterator[List[Tuple[str, dict]]]:
    """Junta los (event_type, payload) emitidos por el motor dentro del bloque."""
    events: List[Tuple[str, dict]] = []

    def _receiver(sender, event_type, payload, **kwargs):
        events.append((event_type, payload))

    scorecard_event.connect(_receiver, weak=False, dispatch_uid="tests.capture_events")
    try:
        yield events
    finally:
        scorecard_event.disconnect(dispatch_uid="tests.capture_events")
