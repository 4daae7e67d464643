import logging
from typing import Dict

from app.core.exceptions import Conflict, InvalidCredentials, ValidationError
from app.core.security import hash_password, password_fits, verify_password
from app.storage.selector import StorageSelector

logger = logging.getLogger(__name__)


def public_identity(user: Dict) -> Dict[str, str]:
    return {"id": user["id"], "email": user["email"]}


class CredentialStore:
    """Registers identities and checks login attempts against the active backing."""

    def __init__(self, storage: StorageSelector, bcrypt_rounds: int = 10):
        self.storage = storage
        self.bcrypt_rounds = bcrypt_rounds

    def create(self, email: str, password: str) -> Dict[str, str]:
        if not password_fits(password):
            raise ValidationError("Password must be at most 72 bytes")

        users = self.storage.users
        if users.find_by_email(email) is not None:
            raise Conflict("User already exists")

        user = users.add(email, hash_password(password, rounds=self.bcrypt_rounds))
        logger.info(f"Registered user {user['id']}")
        return public_identity(user)

    def verify(self, email: str, password: str) -> Dict[str, str]:
        user = self.storage.users.find_by_email(email)
        if user is None or not verify_password(password, user["passwordHash"]):
            raise InvalidCredentials("Invalid email or password")
        return public_identity(user)
