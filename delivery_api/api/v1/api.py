from fastapi import APIRouter
from delivery_api.api.v1.endpoints import data, drivers, health, orders

api_router = APIRouter()
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(drivers.router, prefix="/drivers", tags=["drivers"])
api_router.include_router(data.router, prefix="/data", tags=["data"])
api_router.include_router(health.router, tags=["health"])
