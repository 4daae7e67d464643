"""
Durable backing on top of SQLAlchemy.

Each repository call runs in its own session and transaction. Database
errors are not caught here; they propagate to the request handlers.
"""
import logging
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from app.core.exceptions import Conflict, ValidationError
from app.models.car import Car as CarRow
from app.models.user import User as UserRow
from app.schemas.car import Car, CarFields, MUTABLE_FIELDS, describe_validation_error
from app.storage.base import CarRepository, Record, StorageBackend, UserRepository

logger = logging.getLogger(__name__)


def _user_to_record(row: UserRow) -> Record:
    return {
        "id": row.id,
        "email": row.email,
        "passwordHash": row.passwordHash,
        "createdAt": row.createdAt,
        "updatedAt": row.updatedAt,
    }


def _car_to_record(row: CarRow) -> Record:
    return Car.model_validate(row).model_dump()


class SqlUserRepository(UserRepository):

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> Optional[Record]:
        with self._session_factory() as session:
            row = session.query(UserRow).filter(UserRow.email == email).first()
            return _user_to_record(row) if row is not None else None

    def add(self, email: str, password_hash: str) -> Record:
        try:
            with self._session_factory.begin() as session:
                row = UserRow(email=email, passwordHash=password_hash)
                session.add(row)
                session.flush()
                return _user_to_record(row)
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            raise Conflict()


class SqlCarRepository(CarRepository):
    """Car queries; merged updates are validated before they are written."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def list_all(self) -> List[Record]:
        with self._session_factory() as session:
            rows = session.query(CarRow).order_by(CarRow.createdAt.desc()).all()
            return [_car_to_record(row) for row in rows]

    def list_available(self) -> List[Record]:
        with self._session_factory() as session:
            rows = session.query(CarRow)\
                .filter(CarRow.status == "Available")\
                .order_by(CarRow.createdAt.desc())\
                .all()
            return [_car_to_record(row) for row in rows]

    def get(self, car_id: str) -> Optional[Record]:
        with self._session_factory() as session:
            row = session.get(CarRow, car_id)
            return _car_to_record(row) if row is not None else None

    def add(self, fields: Record) -> Record:
        with self._session_factory.begin() as session:
            row = CarRow(**fields)
            session.add(row)
            session.flush()
            return _car_to_record(row)

    def update(self, car_id: str, changes: Record) -> Optional[Record]:
        with self._session_factory.begin() as session:
            row = session.get(CarRow, car_id)
            if row is None:
                return None

            current = {name: getattr(row, name) for name in MUTABLE_FIELDS}
            try:
                merged = CarFields(**{**current, **changes})
            except PydanticValidationError as e:
                raise ValidationError(describe_validation_error(e), key="error")

            for name in changes:
                setattr(row, name, getattr(merged, name))
            session.flush()
            return _car_to_record(row)

    def delete(self, car_id: str) -> bool:
        with self._session_factory.begin() as session:
            row = session.get(CarRow, car_id)
            if row is None:
                return False
            session.delete(row)
            return True


def create_sql_backend(session_factory: sessionmaker, name: str = "SQL database (connected)") -> StorageBackend:
    return StorageBackend(
        name=name,
        users=SqlUserRepository(session_factory),
        cars=SqlCarRepository(session_factory),
        durable=True,
    )
