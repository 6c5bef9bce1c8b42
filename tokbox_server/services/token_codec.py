"""Signed client-token encoding.

Two wire formats are produced from the same validated claim set:

* ``TokenFormat.LEGACY`` -- ``"T1==" + base64url("partner_id=<key>&sig=<hex>:<claims>")``
  where ``<hex>`` is HMAC-SHA1 of the ``&``-joined claims string. Field order and
  encoding are fixed; deployed verifiers depend on them.
* ``TokenFormat.JWT`` -- compact HS256 JWS, the default for new integrations.

The project token sent with REST calls is a JWS carrying only ``iss``/``iat``/``exp``.
"""
from __future__ import annotations

import base64
import logging
import secrets
import time
from typing import Callable
from urllib.parse import quote_plus

import jwt

from tokbox_server.exceptions import InvalidArgumentError, SigningError
from tokbox_server.models.token_model import AccountCredentials, TokenClaims, TokenFormat, TokenOptions
from tokbox_server.utils.signing import HMAC_SHA1, sign_hex
from tokbox_server.utils.time_utils import to_iso
from tokbox_server.utils.validation import (
    validate_connection_data,
    validate_expire_time,
    validate_layout_class_list,
    validate_role,
)

LEGACY_TOKEN_PREFIX = "T1=="
JWT_ALGORITHM = "HS256"
PROJECT_TOKEN_TTL = 5 * 60

logger = logging.getLogger(__name__)


def random_nonce() -> int:
    # signed 32-bit, as carried by deployed T1 tokens
    return secrets.randbits(32) - 2**31


def form_encode(value: str) -> str:
    """application/x-www-form-urlencoded, UTF-8, keeping only ``A-Za-z0-9.-*_`` literal."""
    return quote_plus(value, safe="*").replace("~", "%7E")


def legacy_claims_string(claims: TokenClaims) -> str:
    fields = [
        ("session_id", claims.session_id),
        ("create_time", str(claims.create_time)),
        ("nonce", str(claims.nonce)),
        ("role", claims.role.value),
        ("expire_time", str(claims.expire_time)),
    ]
    if claims.connection_data is not None:
        fields.append(("connection_data", form_encode(claims.connection_data)))
    return "&".join(f"{key}={value}" for key, value in fields)


class TokenCodec:
    def __init__(
        self,
        clock: Callable[[], float] | None = None,
        nonce_source: Callable[[], int] | None = None,
    ):
        self._clock = clock or time.time
        self._nonce_source = nonce_source or random_nonce
        self._encoders: dict[TokenFormat, Callable[[TokenClaims, AccountCredentials], str]] = {
            TokenFormat.LEGACY: self.encode_legacy,
            TokenFormat.JWT: self.encode_jwt,
        }

    def now(self) -> int:
        return int(self._clock())

    def build_claims(self, session_id: str, options: TokenOptions | None = None) -> TokenClaims:
        """Validate ``options`` against the current time and return the claims to sign."""
        options = options or TokenOptions()
        now = self.now()
        return TokenClaims(
            session_id=session_id,
            role=validate_role(options.role),
            create_time=now,
            nonce=self._nonce_source(),
            expire_time=validate_expire_time(options.expire_time, now),
            connection_data=validate_connection_data(options.data),
            initial_layout_class_list=validate_layout_class_list(options.initial_layout_class_list),
        )

    def encode(
        self,
        claims: TokenClaims,
        credentials: AccountCredentials,
        token_format: TokenFormat = TokenFormat.JWT,
    ) -> str:
        try:
            encoder = self._encoders[TokenFormat(token_format)]
        except ValueError as exc:
            raise InvalidArgumentError(f"Unknown token format: {token_format}") from exc
        logger.debug(
            "Minting %s token for session %s (role=%s, expires %s)",
            TokenFormat(token_format).value,
            claims.session_id,
            claims.role.value,
            to_iso(claims.expire_time),
        )
        return encoder(claims, credentials)

    def generate(
        self,
        session_id: str,
        credentials: AccountCredentials,
        options: TokenOptions | None = None,
        token_format: TokenFormat = TokenFormat.JWT,
    ) -> str:
        return self.encode(self.build_claims(session_id, options), credentials, token_format)

    def encode_legacy(self, claims: TokenClaims, credentials: AccountCredentials) -> str:
        data = legacy_claims_string(claims)
        signature = sign_hex(data, credentials.api_secret, HMAC_SHA1)
        inner = f"partner_id={credentials.api_key}&sig={signature}:{data}"
        return LEGACY_TOKEN_PREFIX + base64.urlsafe_b64encode(inner.encode("utf-8")).decode("ascii")

    def encode_jwt(self, claims: TokenClaims, credentials: AccountCredentials) -> str:
        payload = {
            "iss": str(credentials.api_key),
            "iat": claims.create_time,
            "exp": claims.expire_time,
            "nonce": claims.nonce,
            "sid": claims.session_id,
            "role": claims.role.value,
        }
        if claims.connection_data is not None:
            payload["connectionData"] = claims.connection_data
        if claims.initial_layout_class_list is not None:
            payload["initialLayoutClassList"] = " ".join(claims.initial_layout_class_list)
        return self._sign_jws(payload, credentials)

    def encode_project_token(
        self,
        credentials: AccountCredentials,
        ttl: int = PROJECT_TOKEN_TTL,
        issuer_type: str | None = None,
    ) -> str:
        now = self.now()
        payload = {"iss": str(credentials.api_key), "iat": now, "exp": now + ttl}
        # the hosted REST API also expects ist="project" and a unique jti
        if issuer_type is not None:
            payload["ist"] = issuer_type
            payload["jti"] = secrets.token_hex(16)
        return self._sign_jws(payload, credentials)

    def _sign_jws(self, payload: dict, credentials: AccountCredentials) -> str:
        try:
            return jwt.encode(payload, credentials.api_secret.encode("utf-8"), algorithm=JWT_ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            raise SigningError(f"Failed to sign token: {exc}") from exc
