"""
Runtime settings, read from the environment once per process.

Defaults:
- DATABASE_URL: sqlite:///./data/roster.db
- LOG_LEVEL: INFO
- WRITE_ALLOWLIST: "" (write gate disabled)
- API_HOST / API_PORT: 127.0.0.1:7000
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import FrozenSet

DEFAULT_DATABASE_URL = "sqlite:///./data/roster.db"
DEFAULT_EMAIL_HEADER = "X-Auth-Request-Email"


def _flag(raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "")


def _email_list(raw: str | None) -> FrozenSet[str]:
    if not raw:
        return frozenset()
    return frozenset(e.strip().lower() for e in raw.split(",") if e.strip())


@dataclass(frozen=True)
class Settings:
    app_version: str = "0.1.0"
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    write_allowlist: FrozenSet[str] = field(default_factory=frozenset)
    auth_email_header: str = DEFAULT_EMAIL_HEADER
    seed_factions: bool = True
    api_host: str = "127.0.0.1"
    api_port: int = 7000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            app_version=os.getenv("APP_VERSION", "0.1.0"),
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            write_allowlist=_email_list(os.getenv("WRITE_ALLOWLIST")),
            auth_email_header=os.getenv("AUTH_EMAIL_HEADER", DEFAULT_EMAIL_HEADER),
            seed_factions=_flag(os.getenv("SEED_FACTIONS"), True),
            api_host=os.getenv("API_HOST", "127.0.0.1"),
            api_port=int(os.getenv("API_PORT", "7000")),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
