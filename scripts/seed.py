"""Wipe the database and fill it with demo drivers and orders.

Usage: python scripts/seed.py [--seed N]
"""

import argparse
import asyncio
import random

from sqlalchemy import func, select

from delivery_api.core.database import AsyncSessionLocal, engine
from delivery_api.core.init_db import init_db
from delivery_api.core.logging import setup_logging
from delivery_api.models.order import Order
from delivery_api.services.data import DataService


async def seed(seed_value: int | None = None) -> None:
    await init_db()
    rng = random.Random(seed_value)

    try:
        async with AsyncSessionLocal() as session:
            result = await DataService(session).reset_data(rng=rng)
            breakdown = await session.execute(
                select(Order.status, func.count(Order.id)).group_by(Order.status)
            )
            counts = dict(breakdown.all())
    finally:
        await engine.dispose()

    print(f"Created {result['driversCreated']} drivers")
    print(f"Created {result['ordersCreated']} orders")
    for status, count in sorted(counts.items()):
        print(f"  {status}: {count}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", type=int, default=None, help="random seed for a reproducible dataset")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(seed(args.seed))


if __name__ == "__main__":
    main()
