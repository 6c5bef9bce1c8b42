from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class Role(str, Enum):
    """Capability level embedded in a client token."""

    SUBSCRIBER = "subscriber"
    PUBLISHER = "publisher"
    MODERATOR = "moderator"

    def __str__(self) -> str:
        return self.value


class TokenFormat(str, Enum):
    LEGACY = "legacy"
    JWT = "jwt"


class AccountCredentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: int
    api_secret: str

    @field_validator("api_secret", mode="before")
    @classmethod
    def strip_secret(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip()
        return value

    def __repr__(self) -> str:
        return f"AccountCredentials(api_key={self.api_key}, api_secret='***')"


class TokenOptions(BaseModel):
    """Options for a client token.

    Values are checked when a token is generated, not here, so an instance can be
    built once and reused. ``expire_time`` of ``0`` (or ``None``) means 24 hours after
    the token is created; ``data`` and ``initial_layout_class_list`` are left out of
    the token when unset.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: Role | str | None = Role.PUBLISHER
    expire_time: int | float | None = 0
    data: str | None = None
    initial_layout_class_list: tuple[str, ...] | None = None


class TokenClaims(BaseModel):
    """Validated claim set, ready to be signed."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    role: Role = Role.PUBLISHER
    create_time: int
    nonce: int
    expire_time: int
    connection_data: str | None = None
    initial_layout_class_list: tuple[str, ...] | None = None
