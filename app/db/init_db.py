import logging
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.models import Car, User

logger = logging.getLogger(__name__)

def init_db(engine: Engine) -> None:
    """
    Create the users and cars tables if they do not exist yet.
    Existing tables are left untouched.
    """
    try:
        for table in (User.__table__, Car.__table__):
            table.create(engine, checkfirst=True)
            logger.info(f"Table {table.name} ready")
    except SQLAlchemyError as e:
        logger.error(f"Error creating database tables: {e}")
        raise

