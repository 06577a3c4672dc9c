from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from toolbox.core.config import get_settings


@lru_cache
def get_engine() -> Engine:
    """
    Engine for the configured DATABASE_URL.

    Built lazily so importing models/schemas never needs a database driver.
    """
    settings = get_settings()
    url = settings.database_url
    kwargs = {"pool_pre_ping": True, "echo": settings.db_echo}
    if url.startswith("sqlite"):
        # Sessions may be used from worker threads.
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(url, **kwargs)


@lru_cache
def get_sessionmaker() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
