from __future__ import annotations

import base64
import binascii
from urllib.parse import unquote_plus

import jwt

from tokbox_server.exceptions import InvalidArgumentError
from tokbox_server.models.token_model import AccountCredentials
from tokbox_server.services.token_codec import JWT_ALGORITHM, LEGACY_TOKEN_PREFIX
from tokbox_server.utils.signing import HMAC_SHA1, sign_hex, signatures_match

JWT_LEEWAY_SECONDS = 30


def _split_legacy_token(token: str) -> tuple[str, str]:
    if not isinstance(token, str) or not token.startswith(LEGACY_TOKEN_PREFIX):
        raise InvalidArgumentError("Token is not a T1 token")
    try:
        inner = base64.urlsafe_b64decode(token[len(LEGACY_TOKEN_PREFIX):]).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise InvalidArgumentError("Token could not be decoded") from exc
    header, sep, data = inner.partition(":")
    if not sep:
        raise InvalidArgumentError("Token is missing its claims section")
    return header, data


def _parse_fields(section: str) -> dict[str, str]:
    fields: dict[str, str] = {}
    for pair in section.split("&"):
        key, sep, value = pair.partition("=")
        if not sep:
            raise InvalidArgumentError(f"Malformed token field: {pair!r}")
        fields[key] = value
    return fields


def decode_legacy_token(token: str) -> dict[str, str]:
    """Return the header (``partner_id``, ``sig``) and claim fields of a T1 token."""
    header, data = _split_legacy_token(token)
    fields = _parse_fields(header)
    fields.update(_parse_fields(data))
    if "connection_data" in fields:
        fields["connection_data"] = unquote_plus(fields["connection_data"])
    return fields


def verify_legacy_token(token: str, api_secret: str) -> bool:
    try:
        header, data = _split_legacy_token(token)
        signature = _parse_fields(header).get("sig", "")
    except InvalidArgumentError:
        return False
    return signatures_match(sign_hex(data, api_secret.strip(), HMAC_SHA1), signature)


def decode_jwt(token: str, credentials: AccountCredentials) -> dict:
    return jwt.decode(
        token,
        credentials.api_secret.encode("utf-8"),
        algorithms=[JWT_ALGORITHM],
        issuer=str(credentials.api_key),
        leeway=JWT_LEEWAY_SECONDS,
        options={"require": ["exp", "iat", "iss"]},
    )


def verify_jwt(token: str, credentials: AccountCredentials) -> bool:
    try:
        decode_jwt(token, credentials)
        return True
    except jwt.PyJWTError:
        return False
