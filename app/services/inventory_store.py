import logging
from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import NotFound, ValidationError
from app.schemas.car import CarFields, MUTABLE_FIELDS, describe_validation_error, missing_required_fields
from app.storage.selector import StorageSelector

logger = logging.getLogger(__name__)


class InventoryStore:
    """
    Car inventory operations on top of whichever backing is active.

    Partial updates are restricted to MUTABLE_FIELDS; ``id`` and the
    timestamps cannot be overwritten by clients.
    """

    def __init__(self, storage: StorageSelector):
        self.storage = storage

    def list(self) -> List[Dict[str, Any]]:
        return self.storage.cars.list_all()

    def list_available(self) -> List[Dict[str, Any]]:
        return self.storage.cars.list_available()

    def get(self, car_id: str) -> Dict[str, Any]:
        car = self.storage.cars.get(car_id)
        if car is None:
            raise NotFound("Car not found", key="error")
        return car

    def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        missing = missing_required_fields(fields)
        if missing:
            logger.info(f"Rejected car without {', '.join(missing)}")
            raise ValidationError("Missing required car fields", key="error")

        try:
            car = CarFields(**{name: fields[name] for name in MUTABLE_FIELDS if name in fields})
        except PydanticValidationError as e:
            raise ValidationError(describe_validation_error(e), key="error")

        created = self.storage.cars.add(car.model_dump())
        logger.info(f"Created car {created['id']}")
        return created

    def update(self, car_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        allowed = {name: value for name, value in changes.items() if name in MUTABLE_FIELDS}
        ignored = sorted(set(changes) - set(allowed))
        if ignored:
            logger.warning(f"Ignoring non-editable fields on car {car_id}: {', '.join(ignored)}")

        updated = self.storage.cars.update(car_id, allowed)
        if updated is None:
            raise NotFound("Car not found", key="error")
        return updated

    def delete(self, car_id: str) -> None:
        if not self.storage.cars.delete(car_id):
            raise NotFound("Car not found", key="error")
        logger.info(f"Deleted car {car_id}")
