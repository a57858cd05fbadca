"""
Adapter: Daily trade P&L records.

Implements TradePnLRepository port.
Reads the trade_pnl table owned by the trade P&L service.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from app.domain.dashboard.entities import TradePnLRecord
from app.domain.dashboard.ports import TradePnLRepository
from app.infrastructure.dashboard.database import (
    fetch_rows,
    to_decimal,
    to_int,
    to_str,
)


def row_to_trade_pnl(row: Mapping[str, Any]) -> TradePnLRecord:
    return TradePnLRecord(
        id=str(row["id"]),
        date=row["date"],
        profit=to_decimal(row["profit"]),
        loss=to_decimal(row["loss"]),
        net_pnl=to_decimal(row["net_pnl"]),
        total_trades=to_int(row.get("total_trades")),
        winning_trades=to_int(row.get("winning_trades")),
        losing_trades=to_int(row.get("losing_trades")),
        symbol=to_str(row.get("symbol")),
    )


class TradePnLRepositoryAdapter(TradePnLRepository):
    """PostgreSQL adapter for the trade_pnl table."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def list_trade_pnl(
        self, user_id: str, days: Optional[int] = None
    ) -> list[TradePnLRecord]:
        """Return P&L days, newest first.

        Args:
            user_id: Owner of the records.
            days: When given, only records dated within the last N days.
        """
        sql = """
            SELECT id, "date", symbol, profit, loss, net_pnl,
                   total_trades, winning_trades, losing_trades
            FROM trade_pnl
            WHERE user_id = :user_id
        """
        params: dict[str, Any] = {"user_id": user_id}
        if days is not None:
            sql += ' AND "date" >= :since'
            params["since"] = datetime.now(timezone.utc).date() - timedelta(days=days)
        sql += ' ORDER BY "date" DESC'

        rows = await fetch_rows(self._engine, "trade_pnl", sql, params)
        return [row_to_trade_pnl(row) for row in rows]
