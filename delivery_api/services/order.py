import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from delivery_api.core.config import settings
from delivery_api.core.database import utcnow
from delivery_api.core.errors import ConflictError, NotFoundError, ValidationError
from delivery_api.models.order import MILESTONE_FIELDS, Order, OrderStatus
from delivery_api.services.driver import DriverService
from delivery_api.services.geocoding import geocode_address

logger = logging.getLogger(__name__)

# field -> (max length, required)
ORDER_FIELD_LIMITS = {
    "customer_name": (255, True),
    "customer_phone": (50, True),
    "delivery_address": (500, True),
    "order_details": (1000, False),
}


def validate_order_field(field: str, value: Any) -> Optional[str]:
    max_length, required = ORDER_FIELD_LIMITS[field]
    if value is None and not required:
        return None
    if not isinstance(value, str) or (required and not value.strip()):
        raise ValidationError(f"{field} is required", details={"field": field})
    if len(value) > max_length:
        raise ValidationError(
            f"{field} must be at most {max_length} characters",
            details={"field": field},
        )
    return value


def parse_status(value: Any) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError(
            f"Invalid status: {value!r}",
            details={"field": "status", "allowed": [s.value for s in OrderStatus]},
        )


class OrderService:
    """Order lifecycle: creation, status updates with milestone stamping, driver assignment."""

    def __init__(self, db: AsyncSession, strict_transitions: Optional[bool] = None):
        self.db = db
        if strict_transitions is None:
            strict_transitions = settings.STRICT_STATUS_TRANSITIONS
        self.strict_transitions = strict_transitions

    def _select(self):
        return select(Order).options(selectinload(Order.driver))

    async def _load(self, order_id: str) -> Order | None:
        # populate_existing so the driver relationship reflects the latest write
        result = await self.db.execute(
            self._select()
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        customer_name: str,
        customer_phone: str,
        delivery_address: str,
        order_details: Optional[str] = None,
    ) -> Order:
        """Create a PENDING order with geocoded coordinates."""
        order = Order(
            customer_name=validate_order_field("customer_name", customer_name),
            customer_phone=validate_order_field("customer_phone", customer_phone),
            delivery_address=validate_order_field("delivery_address", delivery_address),
            order_details=validate_order_field("order_details", order_details),
            status=OrderStatus.PENDING.value,
        )
        location = geocode_address(order.delivery_address)
        order.latitude = location.latitude
        order.longitude = location.longitude

        self.db.add(order)
        await self.db.commit()
        logger.info("Created order %s (geocoded: %s)", order.id, location.source)
        return await self._load(order.id)

    async def list(
        self,
        status: Optional[OrderStatus] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Order]:
        """Orders newest first, optionally filtered by status and paginated."""
        stmt = self._select().order_by(Order.created_at.desc(), Order.id.desc())
        if status is not None:
            stmt = stmt.where(Order.status == parse_status(status).value)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get(self, order_id: str) -> Order | None:
        return await self._load(order_id)

    async def get_or_raise(self, order_id: str) -> Order:
        order = await self._load(order_id)
        if order is None:
            raise NotFoundError("Order not found", details={"id": order_id})
        return order

    async def get_by_driver(self, driver_id: str) -> List[Order]:
        result = await self.db.execute(
            self._select()
            .where(Order.driver_id == driver_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        return list(result.scalars().all())

    async def update(self, order_id: str, changes: Dict[str, Any]) -> Order:
        """
        Apply the fields present in ``changes``.

        Writing a status stamps its milestone timestamp with the current time,
        every time, whatever the previous status was. PENDING stamps nothing.
        """
        order = await self.get_or_raise(order_id)

        for field in ORDER_FIELD_LIMITS:
            if field in changes:
                setattr(order, field, validate_order_field(field, changes[field]))

        if "status" in changes:
            new_status = parse_status(changes["status"])
            current = OrderStatus(order.status)
            if self.strict_transitions and not current.can_transition_to(new_status):
                raise ConflictError(
                    f"Cannot move order from {current.value} to {new_status.value}",
                    details={"from": current.value, "to": new_status.value},
                )
            order.status = new_status.value
            milestone = MILESTONE_FIELDS.get(new_status)
            if milestone:
                setattr(order, milestone, utcnow())

        await self.db.commit()
        return await self._load(order.id)

    async def delete(self, order_id: str) -> None:
        order = await self.get_or_raise(order_id)
        await self.db.delete(order)
        await self.db.commit()

    async def count_by_status(self) -> Dict[OrderStatus, int]:
        """Order count per status; every status is present, zero when absent."""
        result = await self.db.execute(
            select(Order.status, func.count(Order.id)).group_by(Order.status)
        )
        counts = {status: 0 for status in OrderStatus}
        for status, count in result.all():
            counts[OrderStatus(status)] = count
        return counts

    async def assign(self, order_id: str, driver_id: str) -> Order:
        """
        Bind an order to a driver.

        An order without a driver becomes ASSIGNED with assigned_at stamped.
        An order that already has a driver only gets the new driver: its status
        and milestone timestamps stay as they are. Delivered orders are never
        (re)assigned and unavailable drivers never receive orders.
        """
        order = await self.get_or_raise(order_id)
        driver = await DriverService(self.db).get_or_raise(driver_id)

        if not driver.is_available:
            raise ValidationError(
                "Driver is not available for assignment", details={"driverId": driver_id}
            )
        if order.status == OrderStatus.DELIVERED.value:
            raise ConflictError("Cannot reassign a delivered order", details={"orderId": order_id})

        if order.driver_id is None:
            now = utcnow()
            # Only the first concurrent initial assignment matches this row.
            result = await self.db.execute(
                update(Order)
                .where(
                    Order.id == order.id,
                    Order.driver_id.is_(None),
                    Order.status != OrderStatus.DELIVERED.value,
                )
                .values(
                    driver_id=driver.id,
                    status=OrderStatus.ASSIGNED.value,
                    assigned_at=now,
                    updated_at=now,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 1:
                await self.db.commit()
                logger.info("Assigned order %s to driver %s", order.id, driver.id)
                return await self._load(order.id)

            # Someone else assigned or delivered it first
            order = await self.get_or_raise(order_id)
            if order.status == OrderStatus.DELIVERED.value:
                raise ConflictError("Cannot reassign a delivered order", details={"orderId": order_id})

        previous_driver_id = order.driver_id
        order.driver = driver
        await self.db.commit()
        logger.info(
            "Reassigned order %s from driver %s to driver %s",
            order.id, previous_driver_id, driver.id,
        )
        return await self._load(order.id)
