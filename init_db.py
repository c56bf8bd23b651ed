"""Create (or recreate) the catalog tables"""
import argparse
import asyncio

from catalog_admin.database import engine, Base
from catalog_admin.models import Category, Product  # noqa: F401 - register tables
from catalog_admin.utils.logger import get_logger

logger = get_logger("init_db")


async def init(drop: bool = False):
    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
            logger.info("Dropped existing tables")
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created: %s", ", ".join(Base.metadata.tables))
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--drop", action="store_true", help="drop all tables first")
    args = parser.parse_args()
    asyncio.run(init(drop=args.drop))
