from sqlalchemy.ext.asyncio import create_async_engine
from delivery_api.core.config import settings
from delivery_api.core.database import Base

# Models must be imported so they are registered in metadata
from delivery_api.models import driver  # noqa: F401
from delivery_api.models import order  # noqa: F401


async def init_db():
    """Create the database file directory and all tables."""
    if settings.DATABASE_URL.startswith("sqlite"):
        settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
    engine = create_async_engine(settings.DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await engine.dispose()
