"""Test data builders."""

import itertools
from datetime import datetime, timedelta, timezone

from userbase.users.user_models import UserEntity

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

_counter = itertools.count(1)


def make_user(**overrides) -> UserEntity:
    """
    Build a valid UserEntity; any field can be overridden.

    Each call gets a unique email and a created_at one minute later than the
    previous call, so default ordering is predictable.
    """
    n = next(_counter)
    data = {
        "name": f"Test User {n}",
        "email": f"user{n}@example.com",
        "password": "123456",
        "created_at": BASE_TIME + timedelta(minutes=n),
    }
    data.update(overrides)
    return UserEntity(**data)
