from __future__ import annotations

import ipaddress
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class MediaMode(str, Enum):
    # serialized as the platform's p2p.preference value
    ROUTED = "disabled"
    RELAYED = "enabled"


class ArchiveMode(str, Enum):
    MANUAL = "manual"
    ALWAYS = "always"


class SessionProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: str | None = None
    media_mode: MediaMode = MediaMode.RELAYED
    archive_mode: ArchiveMode = ArchiveMode.MANUAL

    @field_validator("location")
    @classmethod
    def check_location(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            ipaddress.IPv4Address(value)
        except ValueError as exc:
            raise ValueError(f"Location must be a valid IPv4 address. location = {value}") from exc
        return value

    def to_params(self) -> dict[str, str]:
        """Form fields for the session/create call."""
        params: dict[str, str] = {}
        if self.location is not None:
            params["location"] = self.location
        params["p2p.preference"] = self.media_mode.value
        params["archiveMode"] = self.archive_mode.value
        return params


class CreatedSession(BaseModel):
    model_config = ConfigDict(extra="ignore")

    session_id: str
    project_id: int | str | None = None
    partner_id: int | str | None = None
    create_dt: str | None = None
    media_server_url: str | None = None
