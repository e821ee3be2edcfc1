"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from delivery_api.core.database import Base, get_db, utcnow
from delivery_api.main import app
from delivery_api.models.driver import Driver
from delivery_api.models.order import Order, OrderStatus


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory: sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory: sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, backed by the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_driver(db: AsyncSession) -> Callable:
    async def _make_driver(name: str = "Test Driver", is_available: bool = True, **fields) -> Driver:
        driver = Driver(name=name, is_available=is_available, **fields)
        db.add(driver)
        await db.commit()
        return driver

    return _make_driver


@pytest.fixture
def make_order(db: AsyncSession) -> Callable:
    """Insert an order row directly, bypassing the service."""

    async def _make_order(
        customer_name: str = "Test Customer",
        status: OrderStatus = OrderStatus.PENDING,
        created_at: datetime | None = None,
        **fields,
    ) -> Order:
        order = Order(
            customer_name=customer_name,
            customer_phone="+11234567890",
            delivery_address="123 Main St, Brooklyn, NY 11201",
            status=status.value,
            created_at=created_at or utcnow(),
            **fields,
        )
        db.add(order)
        await db.commit()
        return order

    return _make_order


@pytest.fixture
def minutes_ago() -> Callable[[int], datetime]:
    now = utcnow()
    return lambda minutes: now - timedelta(minutes=minutes)
