"""
Dependency injection for the dashboard bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the dashboard context.
"""

from functools import lru_cache

from fastapi import Header
from sqlalchemy.ext.asyncio import AsyncEngine

from app.application.dashboard.get_dashboard_summary import GetDashboardSummaryUseCase
from app.application.dashboard.get_positions_detail import GetPositionsDetailUseCase
from app.application.dashboard.get_trade_pnl_detail import GetTradePnLDetailUseCase
from app.application.dashboard.get_transactions_detail import (
    GetTransactionsDetailUseCase,
)
from app.application.dashboard.get_wallets_detail import GetWalletsDetailUseCase
from app.core.config import settings
from app.domain.dashboard.summary_composer import SummaryComposer
from app.domain.dashboard.wallet_aggregator import WalletAggregator
from app.infrastructure.dashboard.database import build_engine
from app.infrastructure.dashboard.position_repository import PositionRepositoryAdapter
from app.infrastructure.dashboard.trade_pnl_repository import (
    TradePnLRepositoryAdapter,
)
from app.infrastructure.dashboard.transaction_repository import (
    DepositRepositoryAdapter,
    WithdrawalRepositoryAdapter,
)
from app.infrastructure.dashboard.wallet_repository import WalletRepositoryAdapter


@lru_cache
def get_db_engine() -> AsyncEngine:
    """Build the async engine once per process from application settings."""
    return build_engine(settings.database_url, echo=settings.database_echo)


def get_current_user_id(
    x_user_id: str = Header(..., min_length=1, max_length=128),
) -> str:
    """Return the caller's user id, set by the upstream auth gateway."""
    return x_user_id


def get_dashboard_summary_use_case() -> GetDashboardSummaryUseCase:
    """Build GetDashboardSummaryUseCase with its infrastructure dependencies."""
    engine = get_db_engine()
    return GetDashboardSummaryUseCase(
        position_repo=PositionRepositoryAdapter(engine=engine),
        wallet_repo=WalletRepositoryAdapter(engine=engine),
        deposit_repo=DepositRepositoryAdapter(engine=engine),
        withdrawal_repo=WithdrawalRepositoryAdapter(engine=engine),
        trade_pnl_repo=TradePnLRepositoryAdapter(engine=engine),
        composer=SummaryComposer(
            inr_per_usd=settings.inr_per_usd,
            recent_limit=settings.recent_activity_limit,
        ),
        wallet_history_limit=settings.wallet_history_limit,
    )


def get_positions_detail_use_case() -> GetPositionsDetailUseCase:
    """Build GetPositionsDetailUseCase with its infrastructure dependencies."""
    return GetPositionsDetailUseCase(
        position_repo=PositionRepositoryAdapter(engine=get_db_engine()),
    )


def get_wallets_detail_use_case() -> GetWalletsDetailUseCase:
    """Build GetWalletsDetailUseCase with its infrastructure dependencies."""
    return GetWalletsDetailUseCase(
        wallet_repo=WalletRepositoryAdapter(engine=get_db_engine()),
        aggregator=WalletAggregator(inr_per_usd=settings.inr_per_usd),
        recent_limit=settings.recent_activity_limit,
    )


def get_trade_pnl_detail_use_case() -> GetTradePnLDetailUseCase:
    """Build GetTradePnLDetailUseCase with its infrastructure dependencies."""
    return GetTradePnLDetailUseCase(
        trade_pnl_repo=TradePnLRepositoryAdapter(engine=get_db_engine()),
        recent_limit=settings.recent_activity_limit,
    )


def get_transactions_detail_use_case() -> GetTransactionsDetailUseCase:
    """Build GetTransactionsDetailUseCase with its infrastructure dependencies."""
    engine = get_db_engine()
    return GetTransactionsDetailUseCase(
        deposit_repo=DepositRepositoryAdapter(engine=engine),
        withdrawal_repo=WithdrawalRepositoryAdapter(engine=engine),
        recent_limit=settings.recent_activity_limit,
    )
