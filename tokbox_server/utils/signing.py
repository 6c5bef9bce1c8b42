from __future__ import annotations

import hmac

from tokbox_server.exceptions import SigningError

HMAC_SHA1 = "sha1"
HMAC_SHA256 = "sha256"


def hmac_digest(algorithm: str, key: bytes, data: bytes) -> bytes:
    try:
        return hmac.new(key, data, digestmod=algorithm).digest()
    except (TypeError, ValueError) as exc:
        raise SigningError(f"Failed to generate HMAC ({algorithm}): {exc}") from exc


def sign_hex(data: str, secret: str, algorithm: str = HMAC_SHA1) -> str:
    """Lowercase hex HMAC of ``data`` keyed with ``secret`` (both UTF-8 encoded)."""
    if not isinstance(data, str) or not isinstance(secret, str):
        raise SigningError("Failed to generate HMAC: data and secret must be strings")
    return hmac_digest(algorithm, secret.encode("utf-8"), data.encode("utf-8")).hex()


def signatures_match(expected: str, actual: str) -> bool:
    return hmac.compare_digest(expected.encode("utf-8"), actual.encode("utf-8"))
