from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from delivery_api.core.database import get_db
from delivery_api.models.order import OrderStatus
from delivery_api.schemas.order import (
    OrderAssign,
    OrderCreate,
    OrderResponse,
    OrderStats,
    OrderUpdate,
)
from delivery_api.services.order import OrderService

router = APIRouter()


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create an order. Status is always PENDING."""
    return await OrderService(db).create(
        customer_name=order_data.customer_name,
        customer_phone=order_data.customer_phone,
        delivery_address=order_data.delivery_address,
        order_details=order_data.order_details,
    )


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    db: AsyncSession = Depends(get_db)
):
    """List orders newest first."""
    return await OrderService(db).list(status=status_filter, limit=limit, offset=offset)


@router.get("/stats", response_model=OrderStats)
async def order_stats(db: AsyncSession = Depends(get_db)):
    """Order count per status."""
    counts = await OrderService(db).count_by_status()
    return OrderStats.from_counts(counts)


# Must stay above the generic /{order_id} routes
@router.patch("/{order_id}/assign", response_model=OrderResponse)
async def assign_order(
    order_id: str,
    payload: OrderAssign,
    db: AsyncSession = Depends(get_db)
):
    """Assign an order to a driver, or hand it over to another driver."""
    return await OrderService(db).assign(order_id, payload.driver_id)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    db: AsyncSession = Depends(get_db)
):
    return await OrderService(db).get_or_raise(order_id)


@router.patch("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: str,
    payload: OrderUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update order fields. Writing a status stamps its milestone timestamp."""
    changes = payload.model_dump(exclude_unset=True)
    return await OrderService(db).update(order_id, changes)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(
    order_id: str,
    db: AsyncSession = Depends(get_db)
):
    await OrderService(db).delete(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
