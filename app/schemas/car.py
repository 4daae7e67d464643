from typing import Any, Dict, List, Literal
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError
from datetime import datetime

CarStatus = Literal["Available", "Rented", "Maintenance"]

# Fields a client may set on create or update; everything else is system-managed
REQUIRED_FIELDS = ("model", "type", "year", "dailyRate", "status")
MUTABLE_FIELDS = REQUIRED_FIELDS + ("description",)

class CarFields(BaseModel):
    """Client-settable car fields, validated on create and on durable updates."""
    model: str = Field(..., min_length=1, description="Car model, e.g. 'Toyota Corolla'")
    type: str = Field(..., min_length=1, description="Body type, e.g. 'Sedan'")
    year: int = Field(..., description="Model year")
    dailyRate: float = Field(..., ge=0, description="Rental price per day")
    status: CarStatus = Field(..., description="Availability status")
    description: str = Field("", description="Free-form description")

class Car(CarFields):
    """Schema for a stored car."""
    id: str = Field(..., description="Car ID")
    createdAt: datetime = Field(..., description="Creation timestamp")
    updatedAt: datetime = Field(..., description="Last update timestamp")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": "3f2b8c1e9d4a4c6f8e0b7a1d2c3e4f50",
                "model": "Toyota Corolla",
                "type": "Sedan",
                "year": 2022,
                "dailyRate": 45.0,
                "status": "Available",
                "description": "Automatic, 5 seats",
                "createdAt": "2025-01-10T09:30:00Z",
                "updatedAt": "2025-01-10T09:30:00Z"
            }
        }
    }

class MessageResponse(BaseModel):
    message: str


def missing_required_fields(fields: Dict[str, Any]) -> List[str]:
    """Names of required fields that are absent, null or blank."""
    missing = []
    for name in REQUIRED_FIELDS:
        value = fields.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


def describe_validation_error(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)
