from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from tokbox_server.exceptions import InvalidArgumentError
from tokbox_server.models.session_model import SessionProperties
from tokbox_server.models.token_model import AccountCredentials, TokenFormat, TokenOptions
from tokbox_server.services.token_codec import TokenCodec
from tokbox_server.utils.session_id import decode_session_id

logger = logging.getLogger(__name__)


class Session:
    """A platform session bound to the account credentials that mint its tokens."""

    def __init__(
        self,
        session_id: str,
        credentials: AccountCredentials,
        properties: SessionProperties | None = None,
        codec: TokenCodec | None = None,
        token_format: TokenFormat = TokenFormat.JWT,
    ):
        self.session_id = session_id
        self.credentials = credentials
        self.properties = properties or SessionProperties()
        self.codec = codec or TokenCodec()
        self.token_format = token_format

    @property
    def api_key(self) -> int:
        return self.credentials.api_key

    def generate_token(
        self,
        options: TokenOptions | None = None,
        *,
        token_format: TokenFormat | None = None,
        **option_fields: Any,
    ) -> str:
        """Mint a client token for this session.

        Either pass a ``TokenOptions`` or its fields as keyword arguments
        (``role``, ``expire_time``, ``data``, ``initial_layout_class_list``). The
        session id must decode and name this account's key, otherwise
        ``InvalidArgumentError`` is raised before anything is signed.
        """
        if options is not None and option_fields:
            raise InvalidArgumentError("Pass either a TokenOptions object or option keywords, not both")
        if option_fields:
            try:
                options = TokenOptions(**option_fields)
            except ValidationError as exc:
                raise InvalidArgumentError(f"Invalid token options: {exc}") from exc
        self.check_ownership()
        return self.codec.generate(
            self.session_id,
            self.credentials,
            options,
            token_format or self.token_format,
        )

    def check_ownership(self) -> None:
        if not self.session_id:
            raise InvalidArgumentError("Session not valid")
        parts = decode_session_id(self.session_id)
        if str(self.credentials.api_key) not in parts:
            logger.debug("Session %s does not belong to account %s", self.session_id, self.credentials.api_key)
            raise InvalidArgumentError("Session ID was not valid")

    def __repr__(self) -> str:
        return f"Session(session_id={self.session_id!r}, api_key={self.credentials.api_key})"
