from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

import bcrypt
from jose import jwt
from jose.exceptions import JWTError
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.core.exceptions import Unauthenticated

# bcrypt ignores (or, in recent releases, rejects) input past this length
BCRYPT_MAX_PASSWORD_BYTES = 72

# Security scheme for Swagger UI; missing headers are reported by us, not FastAPI
security = HTTPBearer(auto_error=False)

class TokenPayload(BaseModel):
    """Model representing JWT token payload."""
    sub: str
    email: str
    exp: int
    iat: Optional[int] = None
    jti: Optional[str] = None

class TokenData(BaseModel):
    """Model representing the identity extracted from a verified token."""
    user_id: str
    email: str
    expires_at: datetime


def password_fits(password: str) -> bool:
    return len(password.encode("utf-8")) <= BCRYPT_MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with a fresh bcrypt salt."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of a password against a stored bcrypt hash."""
    if not password_fits(password):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


class TokenService:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24 * 7):
        if not secret_key:
            raise ValueError("A JWT secret key is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    def issue_token(self, user_id: str, email: str) -> str:
        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int((now + self.expires_delta).timestamp()),
            # Unique per issuance so two logins never share a token
            "jti": uuid4().hex,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: Optional[str]) -> TokenData:
        """Verify and decode a JWT token."""
        if not token:
            raise Unauthenticated("Authorization header missing or invalid")
        try:
            # jose checks the signature and the exp claim
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            token_data = TokenPayload(**payload)
        except (JWTError, PydanticValidationError):
            raise Unauthenticated("Invalid or expired token")

        return TokenData(
            user_id=token_data.sub,
            email=token_data.email,
            expires_at=datetime.fromtimestamp(token_data.exp, tz=timezone.utc),
        )


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> TokenData:
    """Dependency guarding protected routes; attaches the claim to request.state."""
    if credentials is None or credentials.scheme != "Bearer":
        raise Unauthenticated("Authorization header missing or invalid")

    current_user = tokens.verify_token(credentials.credentials.strip())
    request.state.user = current_user
    return current_user
