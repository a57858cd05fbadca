"""
Domain entities for the dashboard bounded context.

Records are read-only snapshots of facts owned by other services.
Timestamps keep the value as stored (datetime, date, ISO string or epoch
milliseconds); parsing is left to the period keyer so that one malformed
value never prevents a record from being read.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

RawTimestamp = Union[datetime, date, str, int, float, None]


class PositionStatus(str, Enum):
    """Lifecycle state of a position."""

    OPEN = "open"
    CLOSED = "closed"


class TransactionStatus(str, Enum):
    """Settlement state of a deposit or withdrawal."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class AccountType(str, Enum):
    """Wallet classification used for net worth."""

    DEMAT = "demat"
    BANK = "bank"


class WalletAction(str, Enum):
    """Kind of change recorded in the wallet history log."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class PositionRecord:
    """A trading position as persisted by the positions service."""

    id: str
    symbol: str
    side: str
    lots: Optional[Decimal]
    entry_price: Optional[Decimal]
    invested_amount: Optional[Decimal]
    platform: Optional[str]
    status: str
    created_at: RawTimestamp
    current_price: Optional[Decimal] = None
    pnl: Optional[Decimal] = None
    closed_at: RawTimestamp = None
    timestamp: RawTimestamp = None

    @property
    def is_open(self) -> bool:
        return self.status == PositionStatus.OPEN


@dataclass(frozen=True)
class WalletRecord:
    """A wallet or bank account balance snapshot."""

    id: str
    name: str
    balance: Optional[Decimal]
    currency: Optional[str]
    platform: Optional[str] = None
    type: Optional[str] = None
    created_at: RawTimestamp = None
    updated_at: RawTimestamp = None


@dataclass(frozen=True)
class WalletHistoryEvent:
    """One entry of the wallet change log.

    Attributes:
        wallet_id: Wallet the change applies to.
        action: create, update or delete.
        balance: Wallet balance after the change, when recorded.
        currency: Wallet currency after the change, when recorded.
        created_at: When the change happened.
    """

    id: str
    wallet_id: str
    action: str
    created_at: RawTimestamp
    balance: Optional[Decimal] = None
    currency: Optional[str] = None


@dataclass(frozen=True)
class TransactionRecord:
    """A deposit or withdrawal request."""

    id: str
    amount: Optional[Decimal]
    status: str
    requested_at: RawTimestamp
    completed_at: RawTimestamp = None
    method: Optional[str] = None


@dataclass(frozen=True)
class TradePnLRecord:
    """Profit and loss booked for a single trading day.

    The trade counters are optional; a day logged without them counts as
    zero trades for win-rate purposes.
    """

    id: str
    date: RawTimestamp
    profit: Optional[Decimal]
    loss: Optional[Decimal]
    net_pnl: Optional[Decimal]
    total_trades: Optional[int] = None
    winning_trades: Optional[int] = None
    losing_trades: Optional[int] = None
    symbol: Optional[str] = None
