import base64
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tokbox_server.config import get_settings  # noqa: E402
from tokbox_server.models.token_model import AccountCredentials  # noqa: E402
from tokbox_server.services.token_codec import TokenCodec  # noqa: E402

API_KEY = 123456
API_SECRET = "1234567890abcdef1234567890abcdef1234567890"
SESSION_ID = "1_MX4xMjM0NTZ-flNhdCBNYXIgMTUgMTQ6NDI6MjMgUERUIDIwMTR-MC40OTAxMzAyNX4"
NOW = 1700000000
NONCE = 12345


def make_session_id(api_key: int) -> str:
    payload = f"1~{api_key}~~Sat Mar 15 14:42:23 PDT 2014~0.49013025~".encode("utf-8")
    return "1_" + base64.urlsafe_b64encode(payload).decode("ascii").rstrip("=")


@pytest.fixture(autouse=True)
def _opentok_env(monkeypatch):
    monkeypatch.setenv("OPENTOK_API_KEY", str(API_KEY))
    monkeypatch.setenv("OPENTOK_API_SECRET", API_SECRET)
    monkeypatch.setenv("OPENTOK_API_URL", "https://api.example.test")
    monkeypatch.setenv("OPENTOK_TOKEN_FORMAT", "jwt")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def credentials():
    return AccountCredentials(api_key=API_KEY, api_secret=API_SECRET)


@pytest.fixture
def fixed_codec():
    return TokenCodec(clock=lambda: NOW, nonce_source=lambda: NONCE)
