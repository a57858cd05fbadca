"""
Adapter: Position records.

Implements PositionRepository port.
Reads the positions table owned by the positions service.
"""

from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncEngine

from app.domain.dashboard.entities import PositionRecord, PositionStatus
from app.domain.dashboard.ports import PositionRepository
from app.infrastructure.dashboard.database import fetch_rows, to_decimal, to_str

_SELECT_POSITIONS = """
    SELECT
        id, symbol, side, lots, entry_price, current_price,
        invested_amount, platform, pnl, status,
        created_at, closed_at, "timestamp"
    FROM positions
    WHERE user_id = :user_id
"""


def row_to_position(row: Mapping[str, Any]) -> PositionRecord:
    """Map a positions row to a PositionRecord."""
    return PositionRecord(
        id=str(row["id"]),
        symbol=row["symbol"] or "",
        side=(row["side"] or "").lower(),
        lots=to_decimal(row["lots"]),
        entry_price=to_decimal(row["entry_price"]),
        current_price=to_decimal(row.get("current_price")),
        invested_amount=to_decimal(row["invested_amount"]),
        platform=to_str(row.get("platform")),
        pnl=to_decimal(row.get("pnl")),
        status=(row.get("status") or PositionStatus.OPEN.value).lower(),
        created_at=row.get("created_at"),
        closed_at=row.get("closed_at"),
        timestamp=row.get("timestamp"),
    )


class PositionRepositoryAdapter(PositionRepository):
    """PostgreSQL adapter for the positions table."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def list_open_positions(self, user_id: str) -> list[PositionRecord]:
        rows = await fetch_rows(
            self._engine,
            "open_positions",
            _SELECT_POSITIONS
            + " AND COALESCE(LOWER(status), 'open') = 'open' ORDER BY created_at DESC",
            {"user_id": user_id},
        )
        return [row_to_position(row) for row in rows]

    async def list_all_positions(self, user_id: str) -> list[PositionRecord]:
        rows = await fetch_rows(
            self._engine,
            "all_positions",
            _SELECT_POSITIONS + " ORDER BY created_at DESC",
            {"user_id": user_id},
        )
        return [row_to_position(row) for row in rows]
