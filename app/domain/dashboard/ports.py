"""
Port interfaces (ABCs) for the dashboard bounded context.

Ports define the read contracts the dashboard needs from the services that
own the records. Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.dashboard.entities import (
    PositionRecord,
    TradePnLRecord,
    TransactionRecord,
    WalletHistoryEvent,
    WalletRecord,
)


class PositionRepository(ABC):
    """Port for reading a user's positions."""

    @abstractmethod
    async def list_open_positions(self, user_id: str) -> list[PositionRecord]:
        """Return the user's open positions."""
        raise NotImplementedError

    @abstractmethod
    async def list_all_positions(self, user_id: str) -> list[PositionRecord]:
        """Return every position of the user, open or closed."""
        raise NotImplementedError


class WalletRepository(ABC):
    """Port for reading wallets and their change log."""

    @abstractmethod
    async def list_wallets(self, user_id: str) -> list[WalletRecord]:
        """Return the user's current wallets."""
        raise NotImplementedError

    @abstractmethod
    async def list_wallet_history(
        self, user_id: str, limit: int
    ) -> list[WalletHistoryEvent]:
        """Return the newest wallet history events.

        Args:
            user_id: Owner of the wallets.
            limit: Maximum number of events to return.

        Returns:
            Events ordered by created_at descending.
        """
        raise NotImplementedError


class DepositRepository(ABC):
    """Port for reading deposit requests."""

    @abstractmethod
    async def list_deposits(self, user_id: str) -> list[TransactionRecord]:
        raise NotImplementedError


class WithdrawalRepository(ABC):
    """Port for reading withdrawal requests."""

    @abstractmethod
    async def list_withdrawals(self, user_id: str) -> list[TransactionRecord]:
        raise NotImplementedError


class TradePnLRepository(ABC):
    """Port for reading daily trade P&L records."""

    @abstractmethod
    async def list_trade_pnl(
        self, user_id: str, days: Optional[int] = None
    ) -> list[TradePnLRecord]:
        """Return P&L records, optionally only those of the last N days."""
        raise NotImplementedError
