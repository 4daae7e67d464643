from typing import Optional
from pydantic import BaseModel, Field

class Credentials(BaseModel):
    """Register/login body. Fields are optional so absence is reported as 400, not 422."""
    email: Optional[str] = None
    password: Optional[str] = None

class UserOut(BaseModel):
    """Public view of an identity."""
    id: str
    email: str

class AuthResponse(BaseModel):
    message: str
    token: str = Field(..., description="Bearer token valid for 7 days")
    user: UserOut
