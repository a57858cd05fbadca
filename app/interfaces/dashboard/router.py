"""
FastAPI router for the dashboard bounded context.

All routes delegate to use cases. No business logic here.
Every route is read-only and scoped to the caller's user id.
Degraded record sources are reported in the body, never as HTTP errors.
"""

from fastapi import APIRouter, Depends, Query, Request

from app.application.dashboard.dtos import (
    GetDashboardSummaryQuery,
    GetDomainDetailQuery,
)
from app.application.dashboard.get_dashboard_summary import GetDashboardSummaryUseCase
from app.application.dashboard.get_positions_detail import GetPositionsDetailUseCase
from app.application.dashboard.get_trade_pnl_detail import GetTradePnLDetailUseCase
from app.application.dashboard.get_transactions_detail import (
    GetTransactionsDetailUseCase,
)
from app.application.dashboard.get_wallets_detail import GetWalletsDetailUseCase
from app.core.config import settings
from app.domain.dashboard.timeframes import DEFAULT_TIMEFRAME
from app.interfaces.dashboard.dependencies import (
    get_current_user_id,
    get_dashboard_summary_use_case,
    get_positions_detail_use_case,
    get_trade_pnl_detail_use_case,
    get_transactions_detail_use_case,
    get_wallets_detail_use_case,
)
from app.interfaces.dashboard.schemas import (
    DashboardSummaryResponse,
    ErrorResponse,
    PositionsDetailResponse,
    TradePnLDetailResponse,
    TransactionsDetailResponse,
    WalletsDetailResponse,
)
from app.shared.security.rate_limiting import limiter

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

TIMEFRAME_DESCRIPTION = "One of 1D, 1W, 1M, 3M, 6M, 1Y, ALL. Unknown values mean 1M."


@router.get(
    "",
    response_model=DashboardSummaryResponse,
    responses={422: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
    summary="Full dashboard summary",
    description=(
        "Aggregate positions, wallets, deposits, withdrawals and trade P&L "
        "for the caller. Trade P&L statistics cover the last `days` days."
    ),
)
@limiter.limit(settings.rate_limit_heavy)
async def get_dashboard_summary(
    request: Request,
    days: int = Query(default=settings.default_summary_days, ge=1, le=3650),
    user_id: str = Depends(get_current_user_id),
    use_case: GetDashboardSummaryUseCase = Depends(get_dashboard_summary_use_case),
) -> DashboardSummaryResponse:
    """Return the full dashboard summary for the caller."""
    result = await use_case.execute(GetDashboardSummaryQuery(user_id=user_id, days=days))
    return DashboardSummaryResponse.model_validate(result)


@router.get(
    "/positions",
    response_model=PositionsDetailResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Positions detail",
)
async def get_positions_detail(
    timeframe: str = Query(
        default=DEFAULT_TIMEFRAME.value, max_length=8, description=TIMEFRAME_DESCRIPTION
    ),
    user_id: str = Depends(get_current_user_id),
    use_case: GetPositionsDetailUseCase = Depends(get_positions_detail_use_case),
) -> PositionsDetailResponse:
    """Return position totals, performance and charts for the caller."""
    result = await use_case.execute(
        GetDomainDetailQuery(user_id=user_id, timeframe=timeframe)
    )
    return PositionsDetailResponse.model_validate(result)


@router.get(
    "/wallets",
    response_model=WalletsDetailResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Wallets detail",
)
async def get_wallets_detail(
    timeframe: str = Query(
        default=DEFAULT_TIMEFRAME.value, max_length=8, description=TIMEFRAME_DESCRIPTION
    ),
    user_id: str = Depends(get_current_user_id),
    use_case: GetWalletsDetailUseCase = Depends(get_wallets_detail_use_case),
) -> WalletsDetailResponse:
    """Return account balances and wallet activity for the caller."""
    result = await use_case.execute(
        GetDomainDetailQuery(user_id=user_id, timeframe=timeframe)
    )
    return WalletsDetailResponse.model_validate(result)


@router.get(
    "/trade-pnl",
    response_model=TradePnLDetailResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Trade P&L detail",
)
async def get_trade_pnl_detail(
    timeframe: str = Query(
        default=DEFAULT_TIMEFRAME.value, max_length=8, description=TIMEFRAME_DESCRIPTION
    ),
    user_id: str = Depends(get_current_user_id),
    use_case: GetTradePnLDetailUseCase = Depends(get_trade_pnl_detail_use_case),
) -> TradePnLDetailResponse:
    """Return trade P&L totals and statistics for the caller."""
    result = await use_case.execute(
        GetDomainDetailQuery(user_id=user_id, timeframe=timeframe)
    )
    return TradePnLDetailResponse.model_validate(result)


@router.get(
    "/transactions",
    response_model=TransactionsDetailResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Deposits and withdrawals detail",
)
async def get_transactions_detail(
    timeframe: str = Query(
        default=DEFAULT_TIMEFRAME.value, max_length=8, description=TIMEFRAME_DESCRIPTION
    ),
    user_id: str = Depends(get_current_user_id),
    use_case: GetTransactionsDetailUseCase = Depends(get_transactions_detail_use_case),
) -> TransactionsDetailResponse:
    """Return deposit and withdrawal totals for the caller."""
    result = await use_case.execute(
        GetDomainDetailQuery(user_id=user_id, timeframe=timeframe)
    )
    return TransactionsDetailResponse.model_validate(result)
