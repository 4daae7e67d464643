import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status

from app.api.deps import get_inventory_store
from app.core.security import TokenData, get_current_user
from app.schemas.car import MessageResponse
from app.services.inventory_store import InventoryStore

logger = logging.getLogger(__name__)

router = APIRouter()

# Bodies are taken as raw objects so that missing fields surface as
# "Missing required car fields" rather than a schema error.

@router.get("")
def list_cars(inventory: InventoryStore = Depends(get_inventory_store)) -> List[Dict[str, Any]]:
    """List every car, newest first."""
    return inventory.list()

@router.get("/available")
def list_available_cars(inventory: InventoryStore = Depends(get_inventory_store)) -> List[Dict[str, Any]]:
    """List cars whose status is Available, newest first."""
    return inventory.list_available()

@router.get("/{car_id}")
def get_car(car_id: str, inventory: InventoryStore = Depends(get_inventory_store)) -> Dict[str, Any]:
    return inventory.get(car_id)

@router.post("", status_code=status.HTTP_201_CREATED)
def create_car(
    fields: Dict[str, Any] = Body(...),
    current_user: TokenData = Depends(get_current_user),
    inventory: InventoryStore = Depends(get_inventory_store),
) -> Dict[str, Any]:
    """
    Add a car to the inventory.

    Requires a Bearer token. model, type, year, dailyRate and status are
    mandatory; description defaults to an empty string.
    """
    car = inventory.create(fields)
    logger.info(f"User '{current_user.email}' added car {car['id']}")
    return car

@router.put("/{car_id}")
def update_car(
    car_id: str,
    changes: Dict[str, Any] = Body(...),
    current_user: TokenData = Depends(get_current_user),
    inventory: InventoryStore = Depends(get_inventory_store),
) -> Dict[str, Any]:
    """
    Partially update a car. Only the supplied fields change.

    Requires a Bearer token.
    """
    return inventory.update(car_id, changes)

@router.delete("/{car_id}", response_model=MessageResponse)
def delete_car(
    car_id: str,
    current_user: TokenData = Depends(get_current_user),
    inventory: InventoryStore = Depends(get_inventory_store),
) -> MessageResponse:
    """Remove a car. Requires a Bearer token."""
    inventory.delete(car_id)
    logger.info(f"User '{current_user.email}' deleted car {car_id}")
    return MessageResponse(message="Car deleted successfully")
