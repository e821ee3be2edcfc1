from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from delivery_api.core.database import get_db
from delivery_api.schemas.driver import DriverCreate, DriverResponse, DriverUpdate
from delivery_api.schemas.order import OrderResponse
from delivery_api.services.driver import DriverService
from delivery_api.services.order import OrderService

router = APIRouter()


@router.post("", response_model=DriverResponse, status_code=status.HTTP_201_CREATED)
async def create_driver(
    driver_data: DriverCreate,
    db: AsyncSession = Depends(get_db)
):
    """Register a driver, available unless isAvailable is false."""
    return await DriverService(db).register(driver_data.name, driver_data.is_available)


@router.get("", response_model=List[DriverResponse])
async def list_drivers(db: AsyncSession = Depends(get_db)):
    """All drivers, most recently added first."""
    return await DriverService(db).list()


@router.get("/{driver_id}", response_model=DriverResponse)
async def get_driver(
    driver_id: str,
    db: AsyncSession = Depends(get_db)
):
    return await DriverService(db).get_or_raise(driver_id)


@router.get("/{driver_id}/orders", response_model=List[OrderResponse])
async def get_driver_orders(
    driver_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Orders assigned to a driver, any status."""
    return await OrderService(db).get_by_driver(driver_id)


@router.patch("/{driver_id}", response_model=DriverResponse)
async def update_driver(
    driver_id: str,
    payload: DriverUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await DriverService(db).update(driver_id, payload.model_dump(exclude_unset=True))


@router.delete("/{driver_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_driver(
    driver_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Delete a driver. Its orders stay, without a driver."""
    await DriverService(db).remove(driver_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
