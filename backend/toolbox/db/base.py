import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_id() -> str:
    """Primary keys are uuid4 strings."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # Stamped in Python: SQLite's CURRENT_TIMESTAMP stops at whole seconds
    return datetime.now(timezone.utc)
