from pydantic import BaseModel

class HealthResponse(BaseModel):
    status: str
    server: str
    database: str
    dbState: int
    timestamp: str
