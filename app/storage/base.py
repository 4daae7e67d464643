"""
Repository interfaces shared by the durable and in-memory backings.

Records cross this boundary as plain dicts using the API field names
(``id``, ``dailyRate``, ``createdAt`` ...). User records carry
``passwordHash`` and must never be returned to clients as-is.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


class UserRepository(ABC):

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[Record]:
        ...

    @abstractmethod
    def add(self, email: str, password_hash: str) -> Record:
        """Persist a new identity. Raises Conflict if the email is taken."""


class CarRepository(ABC):

    @abstractmethod
    def list_all(self) -> List[Record]:
        """All cars, newest-created first."""

    @abstractmethod
    def list_available(self) -> List[Record]:
        """Cars whose status is Available, newest-created first."""

    @abstractmethod
    def get(self, car_id: str) -> Optional[Record]:
        ...

    @abstractmethod
    def add(self, fields: Record) -> Record:
        ...

    @abstractmethod
    def update(self, car_id: str, changes: Record) -> Optional[Record]:
        """Merge changes over the stored record; None if it does not exist."""

    @abstractmethod
    def delete(self, car_id: str) -> bool:
        ...


@dataclass
class StorageBackend:
    """One complete backing: a user repository and a car repository."""
    name: str
    users: UserRepository
    cars: CarRepository
    durable: bool = False
