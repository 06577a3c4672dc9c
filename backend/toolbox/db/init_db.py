"""
Initialize database tables
Run this script to create all database tables
"""
from toolbox.db.base import Base
from toolbox.db.session import get_engine
from toolbox.models import comments  # noqa: F401  # Import models to register them
from toolbox.models import crypto_rates  # noqa: F401
from toolbox.models import file_jobs  # noqa: F401
from toolbox.models import shared_regex  # noqa: F401


def init_db(engine=None):
    """Create all database tables"""
    engine = engine or get_engine()
    print("[DB] Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print(f"[DB] Tables ready: {', '.join(sorted(Base.metadata.tables))}")


if __name__ == "__main__":
    init_db()
