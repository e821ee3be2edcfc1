from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from delivery_api.core.config import settings
from delivery_api.core.database import get_db
from delivery_api.schemas.data import ResetResponse
from delivery_api.services.data import DataService

router = APIRouter()


@router.post("/reset", response_model=ResetResponse)
async def reset_data(db: AsyncSession = Depends(get_db)):
    """Delete every order and driver and regenerate demo data."""
    try:
        result = await DataService(db).reset_data()
    except Exception as exc:
        content = {"error": "Failed to reset data"}
        if not settings.is_production:
            content["message"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
        )
    return ResetResponse(**result)
