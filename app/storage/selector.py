import logging
from typing import Optional, Protocol

from app.db.session import ConnectionState
from app.storage.base import CarRepository, StorageBackend, UserRepository

logger = logging.getLogger(__name__)


class AvailabilityProbe(Protocol):
    state: ConnectionState

    def is_available(self) -> bool:
        ...


class StorageSelector:
    """
    Routes store operations to the durable backing when it is reachable
    and to the fallback backing otherwise.

    Availability is asked of the probe on every access. Nothing is copied
    between backings: records written to the fallback stay there.
    """

    def __init__(self, probe: AvailabilityProbe, durable: StorageBackend, fallback: StorageBackend):
        self.probe = probe
        self.durable = durable
        self.fallback = fallback
        self._last_used: Optional[StorageBackend] = None

    def is_durable_store_available(self) -> bool:
        return self.probe.is_available()

    @property
    def connection_state(self) -> ConnectionState:
        return self.probe.state

    @property
    def active(self) -> StorageBackend:
        backend = self.durable if self.is_durable_store_available() else self.fallback
        if backend is not self._last_used:
            logger.info(f"Storage backing is now: {backend.name}")
            self._last_used = backend
        return backend

    @property
    def users(self) -> UserRepository:
        return self.active.users

    @property
    def cars(self) -> CarRepository:
        return self.active.cars
