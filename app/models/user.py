"""
SQLAlchemy model for the users table.
"""

from sqlalchemy import Column, String

from app.db.session import Base
from app.db.base_model import BaseModel

class User(Base, BaseModel):
    """
    Registered identity. The password is stored only as a bcrypt hash.
    """
    __tablename__ = "users"

    email = Column(String, nullable=False, unique=True, index=True)
    passwordHash = Column(String, nullable=False)

    def __repr__(self):
        return f"<User {self.email}>"
