import logging
from typing import Any, Dict, List

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from delivery_api.core.errors import NotFoundError, ValidationError
from delivery_api.models.driver import Driver
from delivery_api.models.order import Order

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 255


def validate_driver_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Driver name is required", details={"field": "name"})
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"Driver name must be at most {NAME_MAX_LENGTH} characters",
            details={"field": "name"},
        )
    return name


class DriverService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, name: str, is_available: bool = True) -> Driver:
        """Create a driver, available by default."""
        driver = Driver(name=validate_driver_name(name), is_available=bool(is_available))

        self.db.add(driver)
        await self.db.commit()
        await self.db.refresh(driver)
        logger.info("Registered driver %s (%s)", driver.id, driver.name)
        return driver

    async def list(self) -> List[Driver]:
        """All drivers, most recently added first."""
        result = await self.db.execute(
            select(Driver).order_by(Driver.created_at.desc(), Driver.id.desc())
        )
        return list(result.scalars().all())

    async def get(self, driver_id: str) -> Driver | None:
        result = await self.db.execute(select(Driver).where(Driver.id == driver_id))
        return result.scalar_one_or_none()

    async def get_or_raise(self, driver_id: str) -> Driver:
        driver = await self.get(driver_id)
        if driver is None:
            raise NotFoundError("Driver not found", details={"id": driver_id})
        return driver

    async def update(self, driver_id: str, changes: Dict[str, Any]) -> Driver:
        """Apply only the fields present in ``changes`` (name, is_available)."""
        driver = await self.get_or_raise(driver_id)

        if "name" in changes:
            driver.name = validate_driver_name(changes["name"])
        if "is_available" in changes:
            if changes["is_available"] is None:
                raise ValidationError("isAvailable must be a boolean", details={"field": "isAvailable"})
            driver.is_available = bool(changes["is_available"])

        await self.db.commit()
        await self.db.refresh(driver)
        return driver

    async def remove(self, driver_id: str) -> None:
        """Delete a driver. Orders that referenced it keep their status but lose the driver link."""
        driver = await self.get_or_raise(driver_id)

        await self.db.execute(
            update(Order).where(Order.driver_id == driver_id).values(driver_id=None)
        )
        await self.db.delete(driver)
        await self.db.commit()
        logger.info("Removed driver %s", driver_id)
