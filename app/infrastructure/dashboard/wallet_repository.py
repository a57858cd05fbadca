"""
Adapter: Wallets and wallet history.

Implements WalletRepository port.
Reads the wallets and wallet_history tables owned by the wallets service.
"""

from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncEngine

from app.domain.dashboard.entities import WalletHistoryEvent, WalletRecord
from app.domain.dashboard.ports import WalletRepository
from app.infrastructure.dashboard.database import fetch_rows, to_decimal, to_str


def row_to_wallet(row: Mapping[str, Any]) -> WalletRecord:
    return WalletRecord(
        id=str(row["id"]),
        name=row["name"] or "",
        balance=to_decimal(row.get("balance")),
        currency=to_str(row.get("currency")),
        platform=to_str(row.get("platform")),
        type=to_str(row.get("type")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def row_to_history_event(row: Mapping[str, Any]) -> WalletHistoryEvent:
    return WalletHistoryEvent(
        id=str(row["id"]),
        wallet_id=str(row["wallet_id"]),
        action=(row["action"] or "").lower(),
        created_at=row.get("created_at"),
        balance=to_decimal(row.get("balance")),
        currency=to_str(row.get("currency")),
    )


class WalletRepositoryAdapter(WalletRepository):
    """PostgreSQL adapter for wallets and their change log."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def list_wallets(self, user_id: str) -> list[WalletRecord]:
        rows = await fetch_rows(
            self._engine,
            "wallets",
            """
            SELECT id, name, type, platform, balance, currency, created_at, updated_at
            FROM wallets
            WHERE user_id = :user_id
            ORDER BY created_at ASC
            """,
            {"user_id": user_id},
        )
        return [row_to_wallet(row) for row in rows]

    async def list_wallet_history(
        self, user_id: str, limit: int
    ) -> list[WalletHistoryEvent]:
        rows = await fetch_rows(
            self._engine,
            "wallet_history",
            """
            SELECT id, wallet_id, action, balance, currency, created_at
            FROM wallet_history
            WHERE user_id = :user_id
            ORDER BY created_at DESC
            LIMIT :limit
            """,
            {"user_id": user_id, "limit": limit},
        )
        return [row_to_history_event(row) for row in rows]
