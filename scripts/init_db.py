# scripts/init_db.py
import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio

from sqlalchemy import text

from event_workflow.config.settings import get_settings
from event_workflow.infrastructure.database import create_engine, create_schema


async def init_db():
    engine = create_engine()
    await create_schema(engine)
    async with engine.begin() as conn:
        result = await conn.execute(text("SELECT COUNT(*) FROM events"))
        print("Schema ready at", get_settings().database_url, "- events:", result.scalar())
    await engine.dispose()


asyncio.run(init_db())
