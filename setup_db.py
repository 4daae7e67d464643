"""
Setup script for creating the users and cars tables ahead of first start.
Existing tables are left untouched.
"""

import logging
from app.core.config import get_settings
from app.db.init_db import init_db
from app.db.session import build_engine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def setup_database():
    """Initialize database tables for the AutoRent API."""
    settings = get_settings()
    engine = build_engine(settings.DATABASE_URL, connect_timeout=settings.DB_CONNECT_TIMEOUT_SECONDS)
    logger.info("Creating AutoRent database tables...")
    try:
        init_db(engine)
        logger.info("Database tables created successfully!")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise
    finally:
        engine.dispose()

if __name__ == "__main__":
    setup_database()
