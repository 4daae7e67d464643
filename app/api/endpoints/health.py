from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.api.deps import get_storage
from app.schemas.health import HealthResponse
from app.storage.selector import StorageSelector

router = APIRouter()

@router.get("", response_model=HealthResponse)
def health_check(storage: StorageSelector = Depends(get_storage)) -> HealthResponse:
    """
    Health check endpoint reporting which storage backing is serving requests.

    Returns:
        HealthResponse: server status plus the database connection state
    """
    durable = storage.is_durable_store_available()
    backend = storage.durable if durable else storage.fallback

    return HealthResponse(
        status="OK",
        server="AutoRent API is running",
        database=backend.name,
        dbState=int(storage.connection_state),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
