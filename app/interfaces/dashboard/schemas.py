"""
Pydantic schemas for dashboard API responses.

These schemas define the API contract and are validated straight from the
application result dataclasses (``from_attributes``). Every monetary field
goes through the same coercion as the aggregators, so responses never
carry null or non-finite numbers.
No business logic belongs here.
"""

import sys
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict

from app.domain.dashboard.entities import AccountType
from app.domain.dashboard.values import as_amount, as_count

_FLOAT_MAX = Decimal(sys.float_info.max)


def as_finite_float(value: Any) -> float:
    """Coerce to a float, clamping magnitudes beyond the float range."""
    amount = as_amount(value)
    if abs(amount) > _FLOAT_MAX:
        return sys.float_info.max if amount > 0 else -sys.float_info.max
    return float(amount)


Amount = Annotated[float, BeforeValidator(as_finite_float)]
Count = Annotated[int, BeforeValidator(as_count)]
RawTime = Union[datetime, date, str, int, float, None]


class DashboardSchema(BaseModel):
    """Base schema reading attributes from result dataclasses."""

    model_config = ConfigDict(from_attributes=True)


# ------------------------------------------------------------------
# Chart buckets
# ------------------------------------------------------------------


class BucketItem(DashboardSchema):
    """One period of a chart series; ``period`` sorts chronologically."""

    period: str
    count: Count


class PositionBucketItem(BucketItem):
    invested: Amount
    pnl: Amount


class WalletActivityBucketItem(BucketItem):
    created: Count
    updated: Count
    deleted: Count
    balance_change: Amount


class TransactionBucketItem(BucketItem):
    total_amount: Amount
    pending_amount: Amount
    completed_amount: Amount
    pending_count: Count
    completed_count: Count


class TradePnLBucketItem(BucketItem):
    profit: Amount
    loss: Amount
    net_pnl: Amount
    total_trades: Count
    winning_trades: Count
    losing_trades: Count


class PositionChart(DashboardSchema):
    daily: list[PositionBucketItem]
    weekly: list[PositionBucketItem]
    monthly: list[PositionBucketItem]
    yearly: list[PositionBucketItem]


class WalletActivityChart(DashboardSchema):
    daily: list[WalletActivityBucketItem]
    weekly: list[WalletActivityBucketItem]
    monthly: list[WalletActivityBucketItem]
    yearly: list[WalletActivityBucketItem]


class TransactionChart(DashboardSchema):
    daily: list[TransactionBucketItem]
    weekly: list[TransactionBucketItem]
    monthly: list[TransactionBucketItem]
    yearly: list[TransactionBucketItem]


class TradePnLChart(DashboardSchema):
    daily: list[TradePnLBucketItem]
    weekly: list[TradePnLBucketItem]
    monthly: list[TradePnLBucketItem]
    yearly: list[TradePnLBucketItem]


# ------------------------------------------------------------------
# Recent activity items
# ------------------------------------------------------------------


class WalletHistoryItem(DashboardSchema):
    id: str
    wallet_id: str
    action: str
    balance: Amount
    currency: str | None = None
    created_at: RawTime = None


class TransactionItem(DashboardSchema):
    id: str
    amount: Amount
    status: str
    method: str | None = None
    requested_at: RawTime = None
    completed_at: RawTime = None


class TradePnLItem(DashboardSchema):
    id: str
    date: RawTime = None
    symbol: str | None = None
    profit: Amount
    loss: Amount
    net_pnl: Amount
    total_trades: Count
    winning_trades: Count
    losing_trades: Count


# ------------------------------------------------------------------
# Domain sections
# ------------------------------------------------------------------


class PositionsSummarySchema(DashboardSchema):
    open_positions: Count
    total_positions: Count
    total_invested: Amount
    total_pnl: Amount
    pnl_percent: Amount
    chart: PositionChart


class PositionPerformanceSchema(DashboardSchema):
    day_change: Amount
    percent_change: Amount


class AccountSummarySchema(DashboardSchema):
    """Balances of one account class; ``approx_usd`` is display-only."""

    account_type: AccountType
    count: Count
    balances: dict[str, Amount]
    approx_usd: Amount


class WalletsSummarySchema(DashboardSchema):
    demat: AccountSummarySchema
    bank: AccountSummarySchema
    recent_activity: list[WalletHistoryItem]
    chart: WalletActivityChart


class TransactionSummarySchema(DashboardSchema):
    total_amount: Amount
    pending_amount: Amount
    completed_amount: Amount
    count: Count
    pending: Count
    completed: Count
    failed: Count
    recent_activity: list[TransactionItem]
    chart: TransactionChart


class TransactionsSummarySchema(DashboardSchema):
    deposits: TransactionSummarySchema
    withdrawals: TransactionSummarySchema


class TradePnLTotalsSchema(DashboardSchema):
    profit: Amount
    loss: Amount
    net_pnl: Amount
    total_trades: Count
    winning_trades: Count
    losing_trades: Count
    win_rate: Amount
    average_daily_pnl: Amount
    days_traded: Count


class TradePnLSummarySchema(DashboardSchema):
    total: TradePnLTotalsSchema
    today: TradePnLTotalsSchema
    statistics: TradePnLTotalsSchema
    recent: list[TradePnLItem]
    chart: TradePnLChart


class NetWorthSchema(DashboardSchema):
    demat_usd: Amount
    bank_usd: Amount
    total_usd: Amount
    net_deposits: Amount


# ------------------------------------------------------------------
# Responses
# ------------------------------------------------------------------


class DashboardSummaryResponse(DashboardSchema):
    """Response schema for the full dashboard.

    ``degraded_sources`` names the record sources that could not be read;
    their figures are zero in this response.
    """

    positions: PositionsSummarySchema
    wallets: WalletsSummarySchema
    transactions: TransactionsSummarySchema
    trade_pnl: TradePnLSummarySchema
    net_worth: NetWorthSchema
    degraded_sources: list[str]


class PositionsDetailResponse(DashboardSchema):
    timeframe: str
    summary: PositionsSummarySchema
    performance: PositionPerformanceSchema
    totals_by_timeframe: dict[str, PositionBucketItem]
    degraded_sources: list[str]


class WalletsDetailResponse(DashboardSchema):
    timeframe: str
    summary: WalletsSummarySchema
    totals_by_timeframe: dict[str, WalletActivityBucketItem]
    degraded_sources: list[str]


class TradePnLDetailResponse(DashboardSchema):
    timeframe: str
    summary: TradePnLSummarySchema
    totals_by_timeframe: dict[str, TradePnLBucketItem]
    degraded_sources: list[str]


class TransactionsDetailResponse(DashboardSchema):
    timeframe: str
    deposits: TransactionSummarySchema
    withdrawals: TransactionSummarySchema
    deposit_totals_by_timeframe: dict[str, TransactionBucketItem]
    withdrawal_totals_by_timeframe: dict[str, TransactionBucketItem]
    degraded_sources: list[str]


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
    detail: str | None = None
