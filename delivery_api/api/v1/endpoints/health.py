from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from delivery_api.core.database import get_db, utcnow
from delivery_api.schemas.data import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(db: AsyncSession = Depends(get_db)):
    """Store connectivity probe."""
    try:
        await db.execute(text("SELECT 1"))
        database = "connected"
    except Exception:
        database = "disconnected"
    return HealthResponse(
        status="ok" if database == "connected" else "error",
        database=database,
        timestamp=utcnow(),
    )
