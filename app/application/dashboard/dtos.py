"""
Data Transfer Objects for the dashboard application layer.

Queries carry request parameters from the interface layer; results carry
the per-domain detail views back. Summary sections are the domain
dataclasses themselves.
"""

from dataclasses import dataclass, field

from app.domain.dashboard.position_aggregator import (
    PositionBucket,
    PositionPerformance,
    PositionsSummary,
)
from app.domain.dashboard.timeframes import DEFAULT_TIMEFRAME
from app.domain.dashboard.trade_pnl_aggregator import (
    TradePnLBucket,
    TradePnLSummary,
)
from app.domain.dashboard.transaction_aggregator import (
    TransactionBucket,
    TransactionSummary,
)
from app.domain.dashboard.wallet_aggregator import (
    WalletActivityBucket,
    WalletsSummary,
)


@dataclass(frozen=True)
class GetDashboardSummaryQuery:
    """Input DTO for the full dashboard.

    Attributes:
        user_id: Owner of the records.
        days: Length of the trade P&L statistics window.
    """

    user_id: str
    days: int = 30


@dataclass(frozen=True)
class GetDomainDetailQuery:
    """Input DTO for a single-domain detail view.

    Attributes:
        user_id: Owner of the records.
        timeframe: Timeframe token; unknown tokens mean one month.
    """

    user_id: str
    timeframe: str = DEFAULT_TIMEFRAME.value


@dataclass
class PositionsDetailResult:
    timeframe: str
    summary: PositionsSummary = field(default_factory=PositionsSummary)
    performance: PositionPerformance = field(default_factory=PositionPerformance)
    totals_by_timeframe: dict[str, PositionBucket] = field(default_factory=dict)
    degraded_sources: list[str] = field(default_factory=list)


@dataclass
class WalletsDetailResult:
    timeframe: str
    summary: WalletsSummary = field(default_factory=WalletsSummary)
    totals_by_timeframe: dict[str, WalletActivityBucket] = field(default_factory=dict)
    degraded_sources: list[str] = field(default_factory=list)


@dataclass
class TradePnLDetailResult:
    """Trade P&L detail; ``summary.statistics`` covers the requested timeframe."""

    timeframe: str
    summary: TradePnLSummary = field(default_factory=TradePnLSummary)
    totals_by_timeframe: dict[str, TradePnLBucket] = field(default_factory=dict)
    degraded_sources: list[str] = field(default_factory=list)


@dataclass
class TransactionsDetailResult:
    timeframe: str
    deposits: TransactionSummary = field(default_factory=TransactionSummary)
    withdrawals: TransactionSummary = field(default_factory=TransactionSummary)
    deposit_totals_by_timeframe: dict[str, TransactionBucket] = field(
        default_factory=dict
    )
    withdrawal_totals_by_timeframe: dict[str, TransactionBucket] = field(
        default_factory=dict
    )
    degraded_sources: list[str] = field(default_factory=list)
