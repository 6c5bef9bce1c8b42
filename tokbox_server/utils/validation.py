from __future__ import annotations

import math

from tokbox_server.exceptions import InvalidArgumentError
from tokbox_server.models.token_model import Role

DEFAULT_TOKEN_TTL = 24 * 60 * 60
MAX_TOKEN_TTL = 30 * 24 * 60 * 60
EXPIRE_GRACE_SECONDS = 1
MAX_CONNECTION_DATA_LENGTH = 1000


def validate_expire_time(expire_time: int | float | None, now: int) -> int:
    """Return the effective expiry for a token created at ``now``.

    ``0`` or ``None`` selects the default of 24 hours. Anything earlier than
    ``now - 1`` or later than 30 days from ``now`` is rejected.
    """
    if not expire_time:
        return now + DEFAULT_TOKEN_TTL
    if isinstance(expire_time, bool) or not isinstance(expire_time, (int, float)):
        raise InvalidArgumentError(f"Expire time must be a number of seconds since the epoch: {expire_time!r}")
    if not math.isfinite(expire_time):
        raise InvalidArgumentError(f"Expire time must be a finite number of seconds: {expire_time!r}")
    expire_time = int(expire_time)
    if expire_time < now - EXPIRE_GRACE_SECONDS:
        raise InvalidArgumentError(
            f"Expire time must be in the future: {expire_time} is {now - expire_time} seconds in the past"
        )
    latest = now + MAX_TOKEN_TTL
    if expire_time > latest:
        raise InvalidArgumentError(
            f"Expire time must be in the next 30 days: {expire_time} is {expire_time - latest} seconds too late"
        )
    return expire_time


def validate_connection_data(data: str | None) -> str | None:
    if data is None:
        return None
    if not isinstance(data, str):
        raise InvalidArgumentError(f"Connection data must be a string, got {type(data).__name__}")
    if len(data) > MAX_CONNECTION_DATA_LENGTH:
        raise InvalidArgumentError(
            f"The given connection data is too long, limit is {MAX_CONNECTION_DATA_LENGTH} characters: {len(data)}"
        )
    return data


def validate_role(role: Role | str | None) -> Role:
    if isinstance(role, Role):
        return role
    if isinstance(role, str):
        for candidate in Role:
            if candidate.value == role:
                return candidate
    raise InvalidArgumentError(f"{role} is not a recognized role")


def validate_layout_class_list(classes: tuple[str, ...] | list[str] | None) -> tuple[str, ...] | None:
    if classes is None:
        return None
    if isinstance(classes, str) or not all(isinstance(item, str) for item in classes):
        raise InvalidArgumentError("Initial layout classes must be a list of strings")
    return tuple(classes)
