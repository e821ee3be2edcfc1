from pydantic import BaseModel

from delivery_api.schemas.types import UtcDatetime


class ResetResponse(BaseModel):
    message: str = "Data reset successful"
    driversCreated: int
    ordersCreated: int


class HealthResponse(BaseModel):
    status: str
    database: str
    timestamp: UtcDatetime
