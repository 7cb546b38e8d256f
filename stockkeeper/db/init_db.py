"""Check connectivity and create tables. Run on app startup."""
import logging

from sqlalchemy import text

from stockkeeper.db.base import Base
from stockkeeper.db.session import engine
from stockkeeper.models import user, inventory  # noqa: F401 - register models

logger = logging.getLogger(__name__)


def check_connection(bind=engine) -> bool:
    """Run a trivial query; log and return False instead of raising."""
    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
    logger.info("Database connection successful")
    return True


def init_db(bind=engine) -> bool:
    if not check_connection(bind):
        return False
    Base.metadata.create_all(bind=bind)
    logger.info("Tables created successfully")
    return True
