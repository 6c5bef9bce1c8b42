from __future__ import annotations

import threading

from tokbox_server.models.token_model import TokenOptions
from tokbox_server.services.opentok_client import OpenTokClient
from tokbox_server.services.session_identity import Session


class SessionController:
    def __init__(self, client: OpenTokClient | None = None):
        self._client = client
        self._session: Session | None = None
        self._lock = threading.Lock()

    @property
    def client(self) -> OpenTokClient:
        if self._client is None:
            self._client = OpenTokClient.from_settings()
        return self._client

    def current_session(self) -> Session:
        # one platform session shared by every caller of the sample
        with self._lock:
            if self._session is None:
                self._session = self.client.create_session()
            return self._session

    def create_session_token(self, role: str = "publisher", data: str | None = None) -> dict:
        session = self.current_session()
        token = session.generate_token(TokenOptions(role=role, data=data))
        return {
            "api_key": session.api_key,
            "session_id": session.session_id,
            "token": token,
        }
