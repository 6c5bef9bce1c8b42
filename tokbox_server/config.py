from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings

from tokbox_server.models.token_model import TokenFormat

SDK_VERSION = "0.1.0"
DEFAULT_API_URL = "https://api.opentok.com"


class Settings(BaseSettings):
    cors_origins: List[AnyHttpUrl] | List[str] = ["http://localhost:5173", "http://localhost:5174"]
    log_level: str = "INFO"

    opentok_api_key: int = 0
    opentok_api_secret: str = ""
    opentok_api_url: str = DEFAULT_API_URL
    opentok_token_format: TokenFormat = TokenFormat.JWT
    opentok_request_timeout: float = 10.0

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors(cls, value: str | list[str]) -> list[str] | list[AnyHttpUrl]:
        if isinstance(value, str):
            items = [item.strip() for item in value.split(",") if item.strip()]
            default_value = cls.model_fields["cors_origins"].default  # type: ignore[index]
            return items or default_value
        return value

    @field_validator("opentok_api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    class Config:
        env_file = str(Path(__file__).resolve().parents[1] / ".env")
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
