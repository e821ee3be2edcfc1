"""
Demo data generation and reset.

The generator is a pure function of a random source and a reference time, so
the reset endpoint and the offline seed script produce the same distribution
and tests can pin the output with a seeded ``random.Random``.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from delivery_api.core.database import utcnow
from delivery_api.data.brooklyn_addresses import BROOKLYN_ADDRESSES
from delivery_api.models.driver import Driver, generate_id
from delivery_api.models.order import Order, OrderStatus

logger = logging.getLogger(__name__)

DRIVER_NAMES = [
    "Mike Chen",
    "Sarah Johnson",
    "David Rodriguez",
    "Emily Williams",
    "James Thompson",
    "Maria Garcia",
    "Alex Kim",
    "Jessica Martinez",
]

CUSTOMER_NAMES = [
    "John Smith",
    "Emma Davis",
    "Michael Brown",
    "Olivia Miller",
    "William Wilson",
    "Sophia Moore",
    "James Taylor",
    "Isabella Anderson",
    "Robert Thomas",
    "Mia Jackson",
    "Daniel White",
    "Charlotte Harris",
    "Matthew Martin",
    "Amelia Thompson",
    "Christopher Garcia",
    "Harper Martinez",
]

ORDER_DETAILS = [
    "2 Large Pepperoni Pizzas, 1 Garlic Knots",
    "General Tso Chicken, Fried Rice, Spring Rolls",
    "Burger Deluxe Meal with Fries",
    "Pad Thai, Tom Yum Soup, Spring Rolls",
    "Caesar Salad, Grilled Chicken Sandwich",
    "Sushi Combo (24 pieces), Miso Soup",
    "BBQ Ribs Platter, Mac & Cheese",
    "Vegetarian Bowl, Fresh Juice",
    "Tacos (6), Chips and Guacamole",
    "Chicken Tikka Masala, Naan Bread",
    "Margherita Pizza, Caprese Salad",
    "Philly Cheesesteak, Onion Rings",
    "Greek Gyro Platter with Fries",
    "Chicken Wings (20), Blue Cheese",
    "Seafood Pasta, Garlic Bread",
]

MIN_DRIVERS, MAX_DRIVERS = 5, 8
MIN_ORDERS, MAX_ORDERS = 15, 25
ALWAYS_AVAILABLE_DRIVERS = 3
DRIVER_AVAILABILITY = 0.6
ORDER_WINDOW_HOURS = 8
ORDER_DETAILS_PROBABILITY = 0.8
# A delivered order was handled by any driver this often, else by a still-available one
DELIVERED_BY_ANY_DRIVER = 0.7

# Cumulative status weights: 30% / 20% / 15% / 35%
STATUS_WEIGHTS = [
    (OrderStatus.PENDING, 0.30),
    (OrderStatus.ASSIGNED, 0.20),
    (OrderStatus.IN_TRANSIT, 0.15),
    (OrderStatus.DELIVERED, 0.35),
]


@dataclass
class DriverSeed:
    id: str
    name: str
    is_available: bool


@dataclass
class OrderSeed:
    customer_name: str
    customer_phone: str
    delivery_address: str
    latitude: float
    longitude: float
    order_details: Optional[str]
    status: OrderStatus
    created_at: datetime
    driver_id: Optional[str] = None
    assigned_at: Optional[datetime] = None
    in_transit_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None


@dataclass
class SeedData:
    drivers: List[DriverSeed] = field(default_factory=list)
    orders: List[OrderSeed] = field(default_factory=list)


def random_phone(rng: random.Random) -> str:
    area_code = rng.randint(100, 999)
    exchange = rng.randint(100, 999)
    number = rng.randint(1000, 9999)
    return f"+1{area_code}{exchange}{number}"


def random_offset(rng: random.Random, minutes: float) -> timedelta:
    return timedelta(milliseconds=rng.random() * minutes * 60 * 1000)


def pick_status(rng: random.Random) -> OrderStatus:
    roll = rng.random()
    threshold = 0.0
    for status, weight in STATUS_WEIGHTS:
        threshold += weight
        if roll < threshold:
            return status
    return STATUS_WEIGHTS[-1][0]


def generate_drivers(rng: random.Random) -> List[DriverSeed]:
    count = rng.randint(MIN_DRIVERS, MAX_DRIVERS)
    return [
        DriverSeed(
            id=generate_id(),
            name=name,
            is_available=index < ALWAYS_AVAILABLE_DRIVERS or rng.random() < DRIVER_AVAILABILITY,
        )
        for index, name in enumerate(DRIVER_NAMES[:count])
    ]


def generate_order(
    rng: random.Random,
    now: datetime,
    drivers: List[DriverSeed],
    available: List[DriverSeed],
) -> OrderSeed:
    address = rng.choice(BROOKLYN_ADDRESSES)
    created_at = now - random_offset(rng, ORDER_WINDOW_HOURS * 60)
    status = pick_status(rng)

    order = OrderSeed(
        customer_name=rng.choice(CUSTOMER_NAMES),
        customer_phone=random_phone(rng),
        delivery_address=address.address,
        latitude=address.latitude,
        longitude=address.longitude,
        order_details=None,
        status=status,
        created_at=created_at,
    )

    if status == OrderStatus.ASSIGNED:
        order.driver_id = rng.choice(available).id
        order.assigned_at = created_at + random_offset(rng, 30)
    elif status == OrderStatus.IN_TRANSIT:
        order.driver_id = rng.choice(available).id
        order.assigned_at = created_at + random_offset(rng, 20)
        order.in_transit_at = order.assigned_at + random_offset(rng, 15)
    elif status == OrderStatus.DELIVERED:
        pool = drivers if rng.random() < DELIVERED_BY_ANY_DRIVER else available
        order.driver_id = rng.choice(pool).id
        order.assigned_at = created_at + random_offset(rng, 15)
        order.in_transit_at = order.assigned_at + random_offset(rng, 10)
        order.delivered_at = order.in_transit_at + random_offset(rng, 30)

    if rng.random() < ORDER_DETAILS_PROBABILITY:
        order.order_details = rng.choice(ORDER_DETAILS)

    return order


def generate_seed_data(
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> SeedData:
    """Randomized drivers and orders whose driver links and milestones agree with their status."""
    rng = rng or random.Random()
    now = now or utcnow()

    drivers = generate_drivers(rng)
    available = [driver for driver in drivers if driver.is_available]
    order_count = rng.randint(MIN_ORDERS, MAX_ORDERS)
    orders = [generate_order(rng, now, drivers, available) for _ in range(order_count)]
    return SeedData(drivers=drivers, orders=orders)


class DataService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def reset_data(
        self,
        rng: Optional[random.Random] = None,
        now: Optional[datetime] = None,
    ) -> dict:
        """
        Wipe all orders and drivers and insert a freshly generated dataset.

        Runs as one transaction: on any failure everything is rolled back and
        the previous data stays in place.
        """
        logger.info("Resetting all data...")
        try:
            await self.db.execute(delete(Order))
            await self.db.execute(delete(Driver))

            seed = generate_seed_data(rng, now)
            self.db.add_all(
                Driver(id=d.id, name=d.name, is_available=d.is_available)
                for d in seed.drivers
            )
            # Drivers must exist before orders reference them
            await self.db.flush()
            self.db.add_all(
                Order(
                    customer_name=o.customer_name,
                    customer_phone=o.customer_phone,
                    delivery_address=o.delivery_address,
                    order_details=o.order_details,
                    status=o.status.value,
                    latitude=o.latitude,
                    longitude=o.longitude,
                    driver_id=o.driver_id,
                    created_at=o.created_at,
                    updated_at=o.delivered_at or o.in_transit_at or o.assigned_at or o.created_at,
                    assigned_at=o.assigned_at,
                    in_transit_at=o.in_transit_at,
                    delivered_at=o.delivered_at,
                )
                for o in seed.orders
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.exception("Data reset failed, previous data kept")
            raise

        result = {
            "driversCreated": len(seed.drivers),
            "ordersCreated": len(seed.orders),
        }
        logger.info(
            "Data reset complete: %s drivers, %s orders created",
            result["driversCreated"], result["ordersCreated"],
        )
        return result
