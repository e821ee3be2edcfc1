from typing import Dict, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from delivery_api.models.order import OrderStatus
from delivery_api.schemas.driver import DriverResponse
from delivery_api.schemas.types import UtcDatetime


class OrderBase(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class OrderCreate(OrderBase):
    customer_name: str = Field(min_length=1, max_length=255)
    customer_phone: str = Field(min_length=1, max_length=50)
    delivery_address: str = Field(min_length=1, max_length=500)
    order_details: Optional[str] = Field(default=None, max_length=1000)


class OrderUpdate(OrderBase):
    customer_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    customer_phone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    delivery_address: Optional[str] = Field(default=None, min_length=1, max_length=500)
    order_details: Optional[str] = Field(default=None, max_length=1000)
    status: Optional[OrderStatus] = None


class OrderAssign(OrderBase):
    driver_id: str = Field(min_length=1, strict=True)


class OrderResponse(OrderBase):
    id: str
    customer_name: str
    customer_phone: str
    delivery_address: str
    order_details: Optional[str] = None
    status: OrderStatus
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    driver_id: Optional[str] = None
    driver: Optional[DriverResponse] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
    assigned_at: Optional[UtcDatetime] = None
    in_transit_at: Optional[UtcDatetime] = None
    delivered_at: Optional[UtcDatetime] = None

    model_config = {
        **OrderBase.model_config,
        "from_attributes": True,
    }


class OrderStats(BaseModel):
    PENDING: int = 0
    ASSIGNED: int = 0
    IN_TRANSIT: int = 0
    DELIVERED: int = 0

    @classmethod
    def from_counts(cls, counts: Dict[OrderStatus, int]) -> "OrderStats":
        return cls(**{status.value: count for status, count in counts.items()})
