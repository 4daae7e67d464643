from typing import List
from pydantic import validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load .env without clobbering variables already set in the process environment
load_dotenv()

class Settings(BaseSettings):
    """Base settings for the AutoRent API."""

    # API settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "AutoRent API"

    # CORS settings, comma-separated
    BACKEND_CORS_ORIGINS: str = "*"

    # Database settings
    # No default: the connection string must come from the environment
    DATABASE_URL: str
    DB_CONNECT_TIMEOUT_SECONDS: int = 10
    DB_RECONNECT_INTERVAL_SECONDS: float = 1.0

    @validator("DATABASE_URL")
    def normalize_database_url(cls, v: str) -> str:
        # Hosted Postgres providers still hand out the legacy scheme
        if v.startswith("postgres://"):
            return "postgresql://" + v[len("postgres://"):]
        return v

    # JWT Authentication settings
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    # Password hashing work factor
    BCRYPT_ROUNDS: int = 10

    # Directory holding the frontend entry document
    FRONTEND_DIR: str = "frontend"

    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "extra": "ignore",
    }

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]

def get_settings() -> Settings:
    """Build settings from the environment and .env file."""
    return Settings()
