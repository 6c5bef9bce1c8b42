from __future__ import annotations

import logging
from typing import Any

import httpx

from tokbox_server.config import DEFAULT_API_URL, SDK_VERSION
from tokbox_server.exceptions import RequestError
from tokbox_server.models.token_model import AccountCredentials
from tokbox_server.services.token_codec import TokenCodec

AUTH_HEADER = "X-OPENTOK-AUTH"
USER_AGENT = f"tokbox-server/{SDK_VERSION}"

logger = logging.getLogger(__name__)


class OpenTokHttpClient:
    """Thin REST transport. Every request carries a fresh project token."""

    def __init__(
        self,
        credentials: AccountCredentials,
        api_url: str = DEFAULT_API_URL,
        codec: TokenCodec | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.credentials = credentials
        self.api_url = api_url.rstrip("/")
        self.codec = codec or TokenCodec()
        self._http = httpx.Client(
            base_url=self.api_url,
            timeout=timeout,
            transport=transport,
            headers={"User-Agent": USER_AGENT},
        )

    def _auth_headers(self) -> dict[str, str]:
        return {
            AUTH_HEADER: self.codec.encode_project_token(self.credentials),
            "Accept": "application/json",
        }

    def create_session(self, params: dict[str, str]) -> str:
        """POST /session/create and return the raw response body."""
        try:
            response = self._http.post("/session/create", data=params, headers=self._auth_headers())
        except httpx.HTTPError as exc:
            logger.warning("Session create request failed: %s", exc)
            raise RequestError("Could not create an OpenTok Session") from exc
        if response.status_code != 200:
            logger.warning("Session create returned status %s", response.status_code)
            raise RequestError(
                "Could not create an OpenTok Session. The server response was invalid."
                f" response code: {response.status_code}",
                status_code=response.status_code,
            )
        return response.text

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "OpenTokHttpClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
