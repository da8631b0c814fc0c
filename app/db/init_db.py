"""
Create missing tables and report what the database contains.

Run standalone with ``python -m app.db.init_db``. Schema changes to an
existing database go through Alembic; this only fills in tables that do
not exist yet.
"""

from asyncio import run as asyncio_run

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from app.db.database import close_db, engine, init_db
from app.errors.database import DatabaseConnectionError
from app.monitoring import configure_logging, get_logger

logger = get_logger(__name__)


async def main() -> list[str]:
    """
    Check connectivity, create tables and return the table names.

    Raises:
        DatabaseConnectionError: If the database cannot be reached
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        await init_db()
        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    except (SQLAlchemyError, OSError) as e:
        logger.exception("Failed to connect to database")
        raise DatabaseConnectionError from e
    finally:
        await close_db()

    logger.info(f"Database ready with {len(tables)} tables: {', '.join(sorted(tables))}")
    return tables


if __name__ == "__main__":
    configure_logging()
    asyncio_run(main())
