from __future__ import annotations

import base64
import binascii

from tokbox_server.exceptions import InvalidArgumentError

# Session ids look like "1_<url-safe base64>", the payload being "~"-separated fields.
SESSION_ID_PREFIX_LENGTH = 2
FIELD_SEPARATOR = "~"


def decode_session_id(session_id: str) -> list[str]:
    if not session_id or not isinstance(session_id, str):
        raise InvalidArgumentError("Session ID was not valid")
    payload = session_id[SESSION_ID_PREFIX_LENGTH:].replace("-", "+").replace("_", "/")
    payload += "=" * (-len(payload) % 4)
    try:
        decoded = base64.b64decode(payload).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise InvalidArgumentError("Session ID was not valid") from exc
    return decoded.split(FIELD_SEPARATOR)
