import asyncio
import platform

import uvicorn
from delivery_api.core.config import settings
from delivery_api.core.init_db import init_db

# On Windows use SelectorEventLoop instead of ProactorEventLoop
if platform.system() == 'Windows':
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

if __name__ == "__main__":
    # Create tables before serving
    asyncio.run(init_db())

    uvicorn.run(
        "delivery_api.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=False
    )
