"""
Process-lifetime fallback backing used while the database is unreachable.
Everything stored here is lost on restart.
"""
import threading
from collections import OrderedDict
from typing import List, Optional

from app.core.exceptions import Conflict
from app.db.base_model import new_id, utcnow
from app.storage.base import CarRepository, Record, StorageBackend, UserRepository


class InMemoryUserRepository(UserRepository):

    def __init__(self) -> None:
        self._users: "OrderedDict[str, Record]" = OrderedDict()
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> Optional[Record]:
        with self._lock:
            for user in self._users.values():
                if user["email"] == email:
                    return dict(user)
        return None

    def add(self, email: str, password_hash: str) -> Record:
        with self._lock:
            if any(user["email"] == email for user in self._users.values()):
                raise Conflict()
            now = utcnow()
            user = {
                "id": new_id(),
                "email": email,
                "passwordHash": password_hash,
                "createdAt": now,
                "updatedAt": now,
            }
            self._users[user["id"]] = user
            return dict(user)


class InMemoryCarRepository(CarRepository):
    """
    Cars kept in insertion order, keyed by id.

    Updates are merged without re-validation: whatever the caller passes
    is stored as-is.
    """

    def __init__(self) -> None:
        self._cars: "OrderedDict[str, Record]" = OrderedDict()
        self._lock = threading.Lock()

    def _newest_first(self) -> List[Record]:
        with self._lock:
            return [dict(car) for car in reversed(self._cars.values())]

    def list_all(self) -> List[Record]:
        return self._newest_first()

    def list_available(self) -> List[Record]:
        return [car for car in self._newest_first() if car.get("status") == "Available"]

    def get(self, car_id: str) -> Optional[Record]:
        with self._lock:
            car = self._cars.get(car_id)
            return dict(car) if car is not None else None

    def add(self, fields: Record) -> Record:
        now = utcnow()
        car = {"id": new_id(), **fields, "createdAt": now, "updatedAt": now}
        with self._lock:
            self._cars[car["id"]] = car
        return dict(car)

    def update(self, car_id: str, changes: Record) -> Optional[Record]:
        with self._lock:
            car = self._cars.get(car_id)
            if car is None:
                return None
            merged = {**car, **changes, "updatedAt": utcnow()}
            self._cars[car_id] = merged
            return dict(merged)

    def delete(self, car_id: str) -> bool:
        with self._lock:
            return self._cars.pop(car_id, None) is not None


def create_memory_backend(name: str = "In-Memory Storage") -> StorageBackend:
    return StorageBackend(
        name=name,
        users=InMemoryUserRepository(),
        cars=InMemoryCarRepository(),
        durable=False,
    )
