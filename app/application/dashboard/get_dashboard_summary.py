"""
Use case: Build the full dashboard summary.

Input: GetDashboardSummaryQuery (user_id, days)
Output: DashboardSummary
Side effects: None (read-only query).
Failure cases: None. Failed sources degrade to zero and are listed in
    ``degraded_sources``; a composition failure yields the all-zero summary.
"""

import logging
from typing import Optional

from app.application.dashboard.clock import Clock, utc_now
from app.application.dashboard.dtos import GetDashboardSummaryQuery
from app.application.dashboard.fetcher import FaultIsolatedFetcher, failed_sources
from app.domain.dashboard.ports import (
    DepositRepository,
    PositionRepository,
    TradePnLRepository,
    WalletRepository,
    WithdrawalRepository,
)
from app.domain.dashboard.summary_composer import (
    DashboardSnapshot,
    DashboardSummary,
    SummaryComposer,
)
from app.domain.dashboard.timeframes import DateWindow

logger = logging.getLogger(__name__)


class GetDashboardSummaryUseCase:
    """Orchestrates the dashboard summary.

    Reads every record source concurrently through the fault-isolated
    fetcher, then lets the composer reduce the snapshot.
    """

    def __init__(
        self,
        position_repo: PositionRepository,
        wallet_repo: WalletRepository,
        deposit_repo: DepositRepository,
        withdrawal_repo: WithdrawalRepository,
        trade_pnl_repo: TradePnLRepository,
        composer: Optional[SummaryComposer] = None,
        fetcher: Optional[FaultIsolatedFetcher] = None,
        wallet_history_limit: int = 500,
        clock: Clock = utc_now,
    ) -> None:
        self._position_repo = position_repo
        self._wallet_repo = wallet_repo
        self._deposit_repo = deposit_repo
        self._withdrawal_repo = withdrawal_repo
        self._trade_pnl_repo = trade_pnl_repo
        self._composer = composer or SummaryComposer()
        self._fetcher = fetcher or FaultIsolatedFetcher()
        self._wallet_history_limit = wallet_history_limit
        self._clock = clock

    async def execute(self, query: GetDashboardSummaryQuery) -> DashboardSummary:
        """Run the dashboard summary use case.

        Args:
            query: The user and the statistics window length in days.

        Returns:
            The composed dashboard summary.
        """
        logger.info("Building dashboard summary: days=%d", query.days)
        now = self._clock()
        user_id = query.user_id

        outcomes = await self._fetcher.fetch_all(
            {
                "open_positions": lambda: self._position_repo.list_open_positions(user_id),
                "all_positions": lambda: self._position_repo.list_all_positions(user_id),
                "wallets": lambda: self._wallet_repo.list_wallets(user_id),
                "wallet_history": lambda: self._wallet_repo.list_wallet_history(
                    user_id, self._wallet_history_limit
                ),
                "deposits": lambda: self._deposit_repo.list_deposits(user_id),
                "withdrawals": lambda: self._withdrawal_repo.list_withdrawals(user_id),
                "trade_pnl": lambda: self._trade_pnl_repo.list_trade_pnl(user_id),
            }
        )

        snapshot = DashboardSnapshot(
            open_positions=outcomes["open_positions"].records,
            all_positions=outcomes["all_positions"].records,
            wallets=outcomes["wallets"].records,
            wallet_history=outcomes["wallet_history"].records,
            deposits=outcomes["deposits"].records,
            withdrawals=outcomes["withdrawals"].records,
            trade_pnl=outcomes["trade_pnl"].records,
            failed_sources=failed_sources(outcomes),
        )
        if snapshot.failed_sources:
            logger.warning(
                "Dashboard summary degraded: %s", ", ".join(snapshot.failed_sources)
            )

        return self._composer.compose(
            snapshot, DateWindow.trailing_days(query.days, now), now
        )
