"""
SQLAlchemy model for the cars table.
"""

from sqlalchemy import CheckConstraint, Column, Float, Integer, String

from app.db.session import Base
from app.db.base_model import BaseModel

CAR_STATUSES = ("Available", "Rented", "Maintenance")

class Car(Base, BaseModel):
    """
    Inventory record for a rentable car.
    """
    __tablename__ = "cars"
    __table_args__ = (
        CheckConstraint("\"dailyRate\" >= 0", name="ck_cars_daily_rate_non_negative"),
    )

    model = Column(String, nullable=False)
    type = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    dailyRate = Column(Float, nullable=False)
    status = Column(String, nullable=False, index=True)  # one of CAR_STATUSES
    description = Column(String, nullable=False, default="")

    def __repr__(self):
        return f"<Car {self.model} ({self.year}) {self.status}>"
