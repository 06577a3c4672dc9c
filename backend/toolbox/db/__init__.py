"""Database helpers (metadata, engine/session export)."""

from .base import Base
from .session import get_engine, get_sessionmaker

__all__ = ["Base", "get_engine", "get_sessionmaker"]
