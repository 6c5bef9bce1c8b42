from __future__ import annotations

import json
import logging
from typing import Any

from tokbox_server.config import DEFAULT_API_URL, Settings, get_settings
from tokbox_server.exceptions import OpenTokError
from tokbox_server.models.session_model import CreatedSession, SessionProperties
from tokbox_server.models.token_model import AccountCredentials, TokenFormat, TokenOptions
from tokbox_server.services.http_client import OpenTokHttpClient
from tokbox_server.services.session_identity import Session
from tokbox_server.services.token_codec import TokenCodec

logger = logging.getLogger(__name__)


class OpenTokClient:
    def __init__(
        self,
        api_key: int,
        api_secret: str,
        api_url: str | None = None,
        token_format: TokenFormat = TokenFormat.JWT,
        timeout: float = 10.0,
        http_client: OpenTokHttpClient | None = None,
        codec: TokenCodec | None = None,
    ):
        self.credentials = AccountCredentials(api_key=api_key, api_secret=api_secret)
        self.token_format = TokenFormat(token_format)
        self.codec = codec or TokenCodec()
        self.http = http_client or OpenTokHttpClient(
            self.credentials,
            api_url=api_url or DEFAULT_API_URL,
            codec=self.codec,
            timeout=timeout,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> "OpenTokClient":
        settings = settings or get_settings()
        return cls(
            api_key=settings.opentok_api_key,
            api_secret=settings.opentok_api_secret,
            api_url=settings.opentok_api_url,
            token_format=settings.opentok_token_format,
            timeout=settings.opentok_request_timeout,
            **kwargs,
        )

    @property
    def api_key(self) -> int:
        return self.credentials.api_key

    def session(self, session_id: str, properties: SessionProperties | None = None) -> Session:
        return Session(
            session_id,
            self.credentials,
            properties=properties,
            codec=self.codec,
            token_format=self.token_format,
        )

    def create_session(self, properties: SessionProperties | None = None) -> Session:
        properties = properties or SessionProperties()
        body = self.http.create_session(properties.to_params())
        try:
            records = json.loads(body)
            sessions = [CreatedSession.model_validate(item) for item in records]
        except (ValueError, TypeError) as exc:
            raise OpenTokError(f"Cannot create session. Could not read the response: {body}") from exc
        # the API answers with an array holding exactly one session
        if len(sessions) != 1:
            raise OpenTokError(f"Unexpected number of sessions created {len(sessions)}")
        logger.info("Created session %s", sessions[0].session_id)
        return self.session(sessions[0].session_id, properties)

    def generate_token(
        self,
        session_id: str,
        options: TokenOptions | None = None,
        *,
        token_format: TokenFormat | None = None,
        **option_fields: Any,
    ) -> str:
        return self.session(session_id).generate_token(options, token_format=token_format, **option_fields)

    def close(self) -> None:
        self.http.close()
