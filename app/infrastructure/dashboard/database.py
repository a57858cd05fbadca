"""
Database access shared by the dashboard adapters.

Builds the async SQLAlchemy engine and runs read-only queries, translating
driver failures into RecordSourceError so the fetcher can name the source.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.domain.dashboard.errors import RecordSourceError

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Build an async engine, forcing the asyncpg driver for plain Postgres URLs."""
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True)


async def fetch_rows(
    engine: AsyncEngine,
    source: str,
    sql: str,
    params: Mapping[str, Any],
) -> list[Mapping[str, Any]]:
    """Run a read query and return its rows as mappings.

    Raises:
        RecordSourceError: If the query fails.
    """
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text(sql), dict(params))
            rows = list(result.mappings().all())
    except SQLAlchemyError as exc:
        raise RecordSourceError(source, type(exc).__name__) from exc

    logger.debug("Read %d rows from %s", len(rows), source)
    return rows


def to_decimal(value: Any) -> Optional[Decimal]:
    """Convert a column value to Decimal, keeping None for missing or junk values."""
    if value is None:
        return None
    try:
        return value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def to_int(value: Any) -> Optional[int]:
    amount = to_decimal(value)
    if amount is None or not amount.is_finite():
        return None
    return int(amount)


def to_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)
