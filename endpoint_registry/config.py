"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - VALKEY_URL is required; the database index is the URL path segment
    - get_settings() is cached (lru_cache), single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - valkey:// and valkeys:// rewritten to the redis:// schemes redis-py understands
"""

from functools import lru_cache
from urllib.parse import urlsplit

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SCHEME_ALIASES = {"valkey": "redis", "valkeys": "rediss"}


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    valkey_url: str

    @field_validator("valkey_url")
    @classmethod
    def normalize_valkey_url(cls, v: str) -> str:
        """Map valkey schemes to redis ones and require host and db index."""
        scheme, sep, rest = v.partition("://")
        if not sep:
            raise ValueError(f"VALKEY_URL {v!r} has no scheme")
        scheme = _SCHEME_ALIASES.get(scheme.lower(), scheme.lower())
        if scheme not in ("redis", "rediss"):
            raise ValueError(f"unsupported VALKEY_URL scheme {scheme!r}")
        v = f"{scheme}://{rest}"
        parts = urlsplit(v)
        if not parts.hostname:
            raise ValueError("VALKEY_URL has no host")
        _parse_db_index(parts.path)
        return v

    @property
    def valkey_db(self) -> int:
        return _parse_db_index(urlsplit(self.valkey_url).path)

    # HTTP
    listen_addr: str = "0.0.0.0"
    listen_port: int = Field(8000, ge=0, le=65535)

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


def _parse_db_index(path: str) -> int:
    db = path[1:] if path.startswith("/") else path
    try:
        index = int(db)
    except ValueError:
        raise ValueError(f"parse DB from VALKEY_URL: {db!r} is not an integer")
    if index < 0:
        raise ValueError(f"parse DB from VALKEY_URL: {index} is negative")
    return index


@lru_cache
def get_settings() -> Settings:
    return Settings()
