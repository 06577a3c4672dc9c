"""
Central configuration for the toolbox backend.

Values come from the environment. A `.env` file in the project root (or the
current working directory) is loaded first, without overriding variables that
are already set in the shell.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


CRYPTO_RATES_MODES = {"upsert", "append"}

_config_file = Path(__file__).resolve()
_project_root = _config_file.parents[3]  # backend/toolbox/core -> project root


def _load_env_file() -> None:
    for env_path in (_project_root / ".env", Path.cwd() / ".env"):
        if env_path.exists():
            # Shell env vars win over .env
            load_dotenv(dotenv_path=env_path, override=False)
            return


def _build_database_url() -> str:
    """
    Priority:
      1) DATABASE_URL (full SQLAlchemy URL)
      2) PGHOST/PGPORT/PGDATABASE/PGUSER/PGPASSWORD (compose a URL)
    """
    url = (os.getenv("DATABASE_URL") or "").strip()
    if url:
        return url

    host = (os.getenv("PGHOST") or "localhost").strip()
    port = (os.getenv("PGPORT") or "5432").strip()
    db = (os.getenv("PGDATABASE") or "postgres").strip()
    user = (os.getenv("PGUSER") or "postgres").strip()
    pw = (os.getenv("PGPASSWORD") or "").strip()

    if pw:
        return f"postgresql://{user}:{pw}@{host}:{port}/{db}"
    return f"postgresql://{user}@{host}:{port}/{db}"


def _bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _int(value: str | None, default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    database_url: str
    db_echo: bool
    crypto_rates_mode: str
    crypto_rate_ttl_seconds: int
    strict_comment_rating: bool
    strict_regex_patterns: bool
    storage_debug: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    _load_env_file()

    mode = (os.getenv("CRYPTO_RATES_MODE") or "upsert").strip().lower()
    if mode not in CRYPTO_RATES_MODES:
        raise ValueError(f"CRYPTO_RATES_MODE must be one of {sorted(CRYPTO_RATES_MODES)}, got {mode!r}")

    return Settings(
        database_url=_build_database_url(),
        db_echo=_bool(os.getenv("DB_ECHO"), False),
        crypto_rates_mode=mode,
        crypto_rate_ttl_seconds=max(0, _int(os.getenv("CRYPTO_RATE_TTL_SECONDS"), 300)),
        strict_comment_rating=_bool(os.getenv("STRICT_COMMENT_RATING"), False),
        strict_regex_patterns=_bool(os.getenv("STRICT_REGEX_PATTERNS"), False),
        storage_debug=_bool(os.getenv("STORAGE_DEBUG"), False),
    )
