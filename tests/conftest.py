from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the backend package importable without installing it
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "backend") not in sys.path:
    sys.path.insert(0, str(ROOT / "backend"))

from toolbox.core import config as core_config  # noqa: E402
from toolbox.db import session as db_session  # noqa: E402
from toolbox.db.base import Base  # noqa: E402
from toolbox.db.init_db import init_db  # noqa: E402
from toolbox.services import storage as storage_module  # noqa: E402


_ENV_VARS = (
    "CRYPTO_RATES_MODE",
    "CRYPTO_RATE_TTL_SECONDS",
    "STRICT_COMMENT_RATING",
    "STRICT_REGEX_PATTERNS",
    "STORAGE_DEBUG",
    "DB_ECHO",
)


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session.get_sessionmaker.cache_clear()
    storage_module.get_storage.cache_clear()


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Temporary SQLite database with all toolbox tables; caches reset around it."""
    db_file = tmp_path / "toolbox.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    _clear_caches()

    engine = db_session.get_engine()
    init_db(engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    _clear_caches()


@pytest.fixture()
def storage(db_env):
    return storage_module.Storage(
        session_factory=db_session.get_sessionmaker(),
        settings=core_config.get_settings(),
    )
