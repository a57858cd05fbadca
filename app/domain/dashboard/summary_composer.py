"""
Domain service: dashboard summary composition.

Runs every domain aggregator over a snapshot of records and merges the
results, plus the cross-domain net worth figures, into one document.
The dashboard must always render: if composition fails for any reason the
composer returns an all-zero document of the same shape.
No framework imports. No IO.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from app.domain.dashboard.entities import (
    PositionRecord,
    TradePnLRecord,
    TransactionRecord,
    WalletHistoryEvent,
    WalletRecord,
)
from app.domain.dashboard.position_aggregator import (
    PositionAggregator,
    PositionsSummary,
)
from app.domain.dashboard.timeframes import DateWindow
from app.domain.dashboard.trade_pnl_aggregator import (
    TradePnLAggregator,
    TradePnLSummary,
)
from app.domain.dashboard.transaction_aggregator import (
    TransactionAggregator,
    TransactionSummary,
)
from app.domain.dashboard.values import ZERO, round_cents
from app.domain.dashboard.wallet_aggregator import (
    DEFAULT_INR_PER_USD,
    WalletAggregator,
    WalletsSummary,
)

logger = logging.getLogger(__name__)

ALL_SOURCES = (
    "open_positions",
    "all_positions",
    "wallets",
    "wallet_history",
    "deposits",
    "withdrawals",
    "trade_pnl",
)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Records read for one dashboard request.

    Attributes:
        failed_sources: Names of the reads that failed; their lists are empty.
    """

    open_positions: list[PositionRecord] = field(default_factory=list)
    all_positions: list[PositionRecord] = field(default_factory=list)
    wallets: list[WalletRecord] = field(default_factory=list)
    wallet_history: list[WalletHistoryEvent] = field(default_factory=list)
    deposits: list[TransactionRecord] = field(default_factory=list)
    withdrawals: list[TransactionRecord] = field(default_factory=list)
    trade_pnl: list[TradePnLRecord] = field(default_factory=list)
    failed_sources: list[str] = field(default_factory=list)


@dataclass
class TransactionsSummary:
    deposits: TransactionSummary = field(default_factory=TransactionSummary)
    withdrawals: TransactionSummary = field(default_factory=TransactionSummary)


@dataclass
class NetWorth:
    """Cross-domain totals in approximate USD.

    Attributes:
        net_deposits: Completed deposits minus completed withdrawals.
    """

    demat_usd: Decimal = ZERO
    bank_usd: Decimal = ZERO
    total_usd: Decimal = ZERO
    net_deposits: Decimal = ZERO


@dataclass
class DashboardSummary:
    positions: PositionsSummary = field(default_factory=PositionsSummary)
    wallets: WalletsSummary = field(default_factory=WalletsSummary)
    transactions: TransactionsSummary = field(default_factory=TransactionsSummary)
    trade_pnl: TradePnLSummary = field(default_factory=TradePnLSummary)
    net_worth: NetWorth = field(default_factory=NetWorth)
    degraded_sources: list[str] = field(default_factory=list)


class SummaryComposer:
    """Composes the dashboard summary from a record snapshot."""

    def __init__(
        self,
        inr_per_usd: Decimal = DEFAULT_INR_PER_USD,
        recent_limit: int = 10,
    ) -> None:
        """Initialize the composer.

        Args:
            inr_per_usd: Fixed rate for the display-only USD estimates.
            recent_limit: Length of every recent-activity list.
        """
        self.positions = PositionAggregator()
        self.wallets = WalletAggregator(inr_per_usd=inr_per_usd)
        self.transactions = TransactionAggregator()
        self.trade_pnl = TradePnLAggregator()
        self._recent_limit = recent_limit

    def compose(
        self, snapshot: DashboardSnapshot, window: DateWindow, now: datetime
    ) -> DashboardSummary:
        """Build the dashboard summary.

        Args:
            snapshot: Records of every domain, empty where a read failed.
            window: Window for the trade P&L statistics.
            now: Current UTC moment.

        Returns:
            The composed summary, or the all-zero summary if composition fails.
        """
        try:
            return self._compose(snapshot, window, now)
        except Exception:
            logger.exception("Dashboard composition failed, returning empty summary")
            return self.empty()

    def empty(self) -> DashboardSummary:
        """All-zero summary marking every source as degraded."""
        return DashboardSummary(degraded_sources=list(ALL_SOURCES))

    def _compose(
        self, snapshot: DashboardSnapshot, window: DateWindow, now: datetime
    ) -> DashboardSummary:
        positions = self.positions.summarize(
            snapshot.open_positions, snapshot.all_positions
        )
        wallets = self.wallets.summarize(
            snapshot.wallets, snapshot.wallet_history, self._recent_limit
        )
        transactions = TransactionsSummary(
            deposits=self.transactions.summarize(snapshot.deposits, self._recent_limit),
            withdrawals=self.transactions.summarize(
                snapshot.withdrawals, self._recent_limit
            ),
        )
        trade_pnl = self.trade_pnl.summarize(
            snapshot.trade_pnl, window, now, self._recent_limit
        )

        return DashboardSummary(
            positions=positions,
            wallets=wallets,
            transactions=transactions,
            trade_pnl=trade_pnl,
            net_worth=self.net_worth(wallets, transactions),
            degraded_sources=[
                name for name in ALL_SOURCES if name in snapshot.failed_sources
            ],
        )

    def net_worth(
        self, wallets: WalletsSummary, transactions: TransactionsSummary
    ) -> NetWorth:
        demat = wallets.demat.approx_usd
        bank = wallets.bank.approx_usd
        return NetWorth(
            demat_usd=demat,
            bank_usd=bank,
            total_usd=round_cents(demat + bank),
            net_deposits=(
                transactions.deposits.completed_amount
                - transactions.withdrawals.completed_amount
            ),
        )
