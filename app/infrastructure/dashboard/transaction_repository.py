"""
Adapter: Deposit and withdrawal requests.

Implements DepositRepository and WithdrawalRepository ports.
Both tables share the same columns.
"""

from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncEngine

from app.domain.dashboard.entities import TransactionRecord
from app.domain.dashboard.ports import DepositRepository, WithdrawalRepository
from app.infrastructure.dashboard.database import fetch_rows, to_decimal, to_str

_SELECT_TEMPLATE = """
    SELECT id, amount, status, method, requested_at, completed_at
    FROM {table}
    WHERE user_id = :user_id
    ORDER BY requested_at DESC
"""


def row_to_transaction(row: Mapping[str, Any]) -> TransactionRecord:
    return TransactionRecord(
        id=str(row["id"]),
        amount=to_decimal(row["amount"]),
        status=(row["status"] or "").lower(),
        requested_at=row.get("requested_at"),
        completed_at=row.get("completed_at"),
        method=to_str(row.get("method")),
    )


class DepositRepositoryAdapter(DepositRepository):
    """PostgreSQL adapter for the deposits table."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def list_deposits(self, user_id: str) -> list[TransactionRecord]:
        rows = await fetch_rows(
            self._engine,
            "deposits",
            _SELECT_TEMPLATE.format(table="deposits"),
            {"user_id": user_id},
        )
        return [row_to_transaction(row) for row in rows]


class WithdrawalRepositoryAdapter(WithdrawalRepository):
    """PostgreSQL adapter for the withdrawals table."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def list_withdrawals(self, user_id: str) -> list[TransactionRecord]:
        rows = await fetch_rows(
            self._engine,
            "withdrawals",
            _SELECT_TEMPLATE.format(table="withdrawals"),
            {"user_id": user_id},
        )
        return [row_to_transaction(row) for row in rows]
