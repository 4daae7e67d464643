from fastapi import APIRouter, Depends, Request, status

from app.api.deps import get_credential_store
from app.core.exceptions import ValidationError
from app.core.security import TokenService, get_token_service
from app.schemas.auth import AuthResponse, Credentials, UserOut
from app.services.credential_store import CredentialStore

router = APIRouter()


def _require_credentials(body: Credentials) -> Credentials:
    if not body.email or not body.password:
        raise ValidationError("Email and password required")
    return body


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: Credentials,
    credentials: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
) -> AuthResponse:
    """
    Create an account and return a token for it.

    Fails with 400 when a field is missing or the email is already registered.
    """
    body = _require_credentials(body)
    user = credentials.create(body.email, body.password)
    return AuthResponse(
        message="User created successfully",
        token=tokens.issue_token(user["id"], user["email"]),
        user=UserOut(**user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: Credentials,
    credentials: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
) -> AuthResponse:
    """
    Exchange email and password for a fresh token.

    A wrong email and a wrong password both yield the same 400 response.
    """
    body = _require_credentials(body)
    user = credentials.verify(body.email, body.password)
    return AuthResponse(
        message="Login successful",
        token=tokens.issue_token(user["id"], user["email"]),
        user=UserOut(**user),
    )
