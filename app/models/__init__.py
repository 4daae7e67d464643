"""
Import all models from their respective modules.
"""

from app.models.user import User
from app.models.car import Car, CAR_STATUSES

# Export all models
__all__ = [
    "User",
    "Car",
    "CAR_STATUSES",
]
