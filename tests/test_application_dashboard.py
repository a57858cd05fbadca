"""
Tests for the dashboard application layer (fetcher and use cases).

Use cases run against in-memory ports and a pinned clock. No real
infrastructure needed.
"""

import asyncio
from decimal import Decimal

import pytest

from app.application.dashboard.dtos import (
    GetDashboardSummaryQuery,
    GetDomainDetailQuery,
)
from app.application.dashboard.fetcher import (
    FaultIsolatedFetcher,
    FetchOutcome,
    failed_sources,
)
from app.application.dashboard.get_dashboard_summary import GetDashboardSummaryUseCase
from app.application.dashboard.get_positions_detail import GetPositionsDetailUseCase
from app.application.dashboard.get_trade_pnl_detail import GetTradePnLDetailUseCase
from app.application.dashboard.get_transactions_detail import (
    GetTransactionsDetailUseCase,
)
from app.application.dashboard.get_wallets_detail import GetWalletsDetailUseCase
from app.domain.dashboard.summary_composer import ALL_SOURCES, SummaryComposer
from fakes import (
    FailingRepository,
    InMemoryDepositRepository,
    InMemoryPositionRepository,
    InMemoryTradePnLRepository,
    InMemoryWalletRepository,
    InMemoryWithdrawalRepository,
    fixed_clock,
    make_event,
    make_pnl,
    make_position,
    make_transaction,
    make_wallet,
)

USER = "user-123"


def _positions() -> InMemoryPositionRepository:
    return InMemoryPositionRepository(
        [
            make_position("p1", invested="100", pnl="10", created_at="2025-03-15T09:00:00Z"),
            make_position("p2", invested="300", pnl="-30", created_at="2025-03-02T09:00:00Z"),
            make_position(
                "p3", invested="50", pnl="5", created_at="2024-06-01", status="closed"
            ),
        ]
    )


def _wallets() -> InMemoryWalletRepository:
    return InMemoryWalletRepository(
        wallets=[
            make_wallet("w1", "8300", currency="INR", platform="Zerodha"),
            make_wallet("w2", "50", currency="USD", platform="HDFC Bank"),
        ],
        history=[
            make_event("e1", "w1", "create", "2025-03-10T00:00:00Z", "8300", "INR"),
            make_event("e2", "w2", "create", "2025-02-01T00:00:00Z", "50", "USD"),
        ],
    )


def _daily_balance_history() -> list:
    """w1 created at 1000 on 2025-03-01, then +1 each day until 2025-03-12."""
    events = [make_event("e1", "w1", "create", "2025-03-01", "1000", "USD")]
    for day in range(2, 13):
        events.append(
            make_event(f"e{day}", "w1", "update", f"2025-03-{day:02d}", str(999 + day), "USD")
        )
    return events


def _deposits() -> InMemoryDepositRepository:
    return InMemoryDepositRepository(
        [
            make_transaction("d1", "100", "completed", "2025-03-14T10:00:00Z"),
            make_transaction("d2", "25", "pending", "2025-03-15T10:00:00Z"),
        ]
    )


def _withdrawals() -> InMemoryWithdrawalRepository:
    return InMemoryWithdrawalRepository(
        [make_transaction("x1", "40", "completed", "2025-03-01T10:00:00Z")]
    )


def _trade_pnl() -> InMemoryTradePnLRepository:
    return InMemoryTradePnLRepository(
        [
            make_pnl("t1", "2025-03-14", profit="30", net="30", total_trades=2, winning_trades=2),
            make_pnl("t2", "2025-03-12", loss="10", net="-10", total_trades=2, losing_trades=2),
            make_pnl("t3", "2024-11-01", profit="500", net="500"),
        ]
    )


def _summary_use_case(**overrides) -> GetDashboardSummaryUseCase:
    ports = dict(
        position_repo=_positions(),
        wallet_repo=_wallets(),
        deposit_repo=_deposits(),
        withdrawal_repo=_withdrawals(),
        trade_pnl_repo=_trade_pnl(),
        clock=fixed_clock,
    )
    ports.update(overrides)
    return GetDashboardSummaryUseCase(**ports)


# ══════════════════════════════════════════════════════════════════════
# Fault-isolated fetcher
# ══════════════════════════════════════════════════════════════════════


class TestFaultIsolatedFetcher:
    @pytest.mark.asyncio
    async def test_failure_does_not_affect_siblings(self):
        async def ok():
            return [1, 2]

        async def broken():
            raise ConnectionError("down")

        outcomes = await FaultIsolatedFetcher().fetch_all({"a": ok, "b": broken})
        assert outcomes["a"].records == [1, 2]
        assert outcomes["b"].failed
        assert isinstance(outcomes["b"].error, ConnectionError)
        assert outcomes["b"].records == []
        assert failed_sources(outcomes) == ["b"]

    @pytest.mark.asyncio
    async def test_slow_sibling_is_not_cancelled(self):
        finished = []

        async def slow():
            await asyncio.sleep(0.01)
            finished.append("slow")
            return ["late"]

        async def fast_failure():
            raise RuntimeError("immediate")

        outcomes = await FaultIsolatedFetcher().fetch_all(
            {"slow": slow, "fast": fast_failure}
        )
        assert finished == ["slow"]
        assert outcomes["slow"].records == ["late"]

    @pytest.mark.asyncio
    async def test_synchronous_raise_is_captured(self):
        def raises_before_awaiting():
            raise ValueError("bad arguments")

        outcomes = await FaultIsolatedFetcher().fetch_all(
            {"sync": raises_before_awaiting}
        )
        assert outcomes["sync"].failed

    @pytest.mark.asyncio
    async def test_outcomes_keep_call_order(self):
        async def value(v):
            return [v]

        outcomes = await FaultIsolatedFetcher().fetch_all(
            {name: (lambda n=name: value(n)) for name in ("z", "a", "m")}
        )
        assert list(outcomes) == ["z", "a", "m"]

    def test_none_value_means_no_records(self):
        assert FetchOutcome(source="x", value=None).records == []


# ══════════════════════════════════════════════════════════════════════
# Dashboard summary use case
# ══════════════════════════════════════════════════════════════════════


class TestGetDashboardSummaryUseCase:
    @pytest.mark.asyncio
    async def test_full_summary(self):
        summary = await _summary_use_case().execute(GetDashboardSummaryQuery(USER))

        assert summary.degraded_sources == []
        assert summary.positions.open_positions == 2
        assert summary.positions.total_positions == 3
        assert summary.positions.total_invested == Decimal("400")
        assert summary.wallets.demat.approx_usd == Decimal("100.00")
        assert summary.net_worth.total_usd == Decimal("150.00")
        assert summary.net_worth.net_deposits == Decimal("60")
        assert summary.transactions.deposits.pending_amount == Decimal("25")
        assert summary.trade_pnl.total.net_pnl == Decimal("520")
        assert summary.trade_pnl.statistics.net_pnl == Decimal("20")
        assert summary.trade_pnl.statistics.win_rate == Decimal("50.00")

    @pytest.mark.asyncio
    async def test_days_narrows_statistics_window(self):
        summary = await _summary_use_case().execute(
            GetDashboardSummaryQuery(USER, days=2)
        )
        assert summary.trade_pnl.statistics.net_pnl == Decimal("30")
        assert [r.id for r in summary.trade_pnl.recent] == ["t1"]

    @pytest.mark.asyncio
    async def test_one_failed_domain_degrades_only_itself(self):
        use_case = _summary_use_case(wallet_repo=FailingRepository())
        summary = await use_case.execute(GetDashboardSummaryQuery(USER))

        assert summary.degraded_sources == ["wallets", "wallet_history"]
        assert summary.wallets.demat.count == 0
        assert summary.wallets.bank.approx_usd == Decimal("0")
        assert summary.positions.total_invested == Decimal("400")
        assert summary.net_worth.net_deposits == Decimal("60")

    @pytest.mark.asyncio
    async def test_every_source_failing_gives_zero_summary(self):
        failing = FailingRepository()
        use_case = GetDashboardSummaryUseCase(
            failing, failing, failing, failing, failing, clock=fixed_clock
        )
        summary = await use_case.execute(GetDashboardSummaryQuery(USER))

        assert summary.degraded_sources == list(ALL_SOURCES)
        assert summary.positions.total_positions == 0
        assert summary.trade_pnl.total.days_traded == 0
        assert summary.net_worth.total_usd == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_repeated_calls_give_equal_summaries(self):
        use_case = _summary_use_case()
        first = await use_case.execute(GetDashboardSummaryQuery(USER))
        second = await use_case.execute(GetDashboardSummaryQuery(USER))
        assert first == second

    @pytest.mark.asyncio
    async def test_settings_flow_into_reads_and_composition(self):
        wallets = _wallets()
        use_case = _summary_use_case(
            wallet_repo=wallets,
            composer=SummaryComposer(inr_per_usd=Decimal("83"), recent_limit=1),
            wallet_history_limit=7,
        )
        summary = await use_case.execute(GetDashboardSummaryQuery(USER))
        assert wallets.history_limits == [7]
        assert len(summary.transactions.deposits.recent_activity) == 1

    @pytest.mark.asyncio
    async def test_reads_are_scoped_to_the_user(self):
        positions = _positions()
        await _summary_use_case(position_repo=positions).execute(
            GetDashboardSummaryQuery("someone-else")
        )
        assert positions.calls == ["someone-else", "someone-else"]


# ══════════════════════════════════════════════════════════════════════
# Detail use cases
# ══════════════════════════════════════════════════════════════════════


class TestGetPositionsDetailUseCase:
    @pytest.mark.asyncio
    async def test_detail(self):
        use_case = GetPositionsDetailUseCase(_positions(), clock=fixed_clock)
        result = await use_case.execute(GetDomainDetailQuery(USER, "1W"))

        assert result.timeframe == "1W"
        assert result.performance.day_change == Decimal("10")
        assert result.performance.percent_change == Decimal("-5.00")
        assert result.totals_by_timeframe["1D"].count == 1
        assert result.totals_by_timeframe["1M"].count == 2
        assert result.totals_by_timeframe["ALL"].count == 3
        assert result.degraded_sources == []

    @pytest.mark.asyncio
    async def test_failed_source(self):
        use_case = GetPositionsDetailUseCase(FailingRepository(), clock=fixed_clock)
        result = await use_case.execute(GetDomainDetailQuery(USER))

        assert result.timeframe == "1M"
        assert result.degraded_sources == ["open_positions", "all_positions"]
        assert result.summary.open_positions == 0
        assert result.totals_by_timeframe["ALL"].count == 0

    @pytest.mark.asyncio
    async def test_aggregation_failure_returns_empty_view(self, monkeypatch):
        use_case = GetPositionsDetailUseCase(_positions(), clock=fixed_clock)

        def boom(*args, **kwargs):
            raise ArithmeticError("bad data")

        monkeypatch.setattr(use_case._aggregator, "summarize", boom)
        result = await use_case.execute(GetDomainDetailQuery(USER))

        assert result.degraded_sources == ["open_positions", "all_positions"]
        assert result.summary.total_invested == Decimal("0")
        assert set(result.totals_by_timeframe) == {
            "1D", "1W", "1M", "3M", "6M", "1Y", "ALL"
        }


class TestGetWalletsDetailUseCase:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "token, expected_timeframe, expected_events",
        [("1D", "1D", 10), ("1W", "1W", 12), ("all", "ALL", 12), ("bogus", "1M", 12)],
    )
    async def test_timeframe_limits_charted_events(
        self, token, expected_timeframe, expected_events
    ):
        wallets = InMemoryWalletRepository(history=_daily_balance_history())
        use_case = GetWalletsDetailUseCase(wallets, clock=fixed_clock)
        result = await use_case.execute(GetDomainDetailQuery(USER, token))

        assert result.timeframe == expected_timeframe
        assert wallets.history_limits == [500]
        assert sum(b.count for b in result.summary.chart.daily) == expected_events

    @pytest.mark.asyncio
    async def test_balance_changes_do_not_depend_on_timeframe(self):
        use_case = GetWalletsDetailUseCase(
            InMemoryWalletRepository(history=_daily_balance_history()),
            clock=fixed_clock,
        )
        short = await use_case.execute(GetDomainDetailQuery(USER, "1D"))
        full = await use_case.execute(GetDomainDetailQuery(USER, "ALL"))

        short_days = {b.period: b.balance_change for b in short.summary.chart.daily}
        full_days = {b.period: b.balance_change for b in full.summary.chart.daily}
        assert short_days["2025-03-03"] == Decimal("1.00")
        assert full_days["2025-03-03"] == Decimal("1.00")
        assert all(full_days[period] == change for period, change in short_days.items())
        assert short.totals_by_timeframe == full.totals_by_timeframe
        assert full.totals_by_timeframe["ALL"].balance_change == Decimal("1011.00")

    @pytest.mark.asyncio
    async def test_detail(self):
        use_case = GetWalletsDetailUseCase(_wallets(), clock=fixed_clock)
        result = await use_case.execute(GetDomainDetailQuery(USER))

        assert result.summary.demat.balances == {"INR": Decimal("8300")}
        assert result.totals_by_timeframe["1W"].created == 1
        assert result.totals_by_timeframe["1M"].created == 1
        assert result.totals_by_timeframe["3M"].created == 2
        assert result.totals_by_timeframe["3M"].balance_change == Decimal("150.00")


class TestGetTradePnLDetailUseCase:
    @pytest.mark.asyncio
    async def test_statistics_follow_timeframe(self):
        use_case = GetTradePnLDetailUseCase(_trade_pnl(), clock=fixed_clock)

        week = await use_case.execute(GetDomainDetailQuery(USER, "1W"))
        everything = await use_case.execute(GetDomainDetailQuery(USER, "ALL"))

        assert week.summary.statistics.net_pnl == Decimal("20")
        assert week.summary.statistics.days_traded == 2
        assert everything.summary.statistics.net_pnl == Decimal("520")
        assert week.totals_by_timeframe == everything.totals_by_timeframe

    @pytest.mark.asyncio
    async def test_failed_source(self):
        use_case = GetTradePnLDetailUseCase(FailingRepository(), clock=fixed_clock)
        result = await use_case.execute(GetDomainDetailQuery(USER))
        assert result.degraded_sources == ["trade_pnl"]
        assert result.summary.total.net_pnl == Decimal("0")


class TestGetTransactionsDetailUseCase:
    @pytest.mark.asyncio
    async def test_detail(self):
        use_case = GetTransactionsDetailUseCase(
            _deposits(), _withdrawals(), clock=fixed_clock
        )
        result = await use_case.execute(GetDomainDetailQuery(USER, "1D"))

        assert result.timeframe == "1D"
        assert result.deposits.total_amount == Decimal("125")
        assert result.withdrawals.completed_amount == Decimal("40")
        assert result.deposit_totals_by_timeframe["1D"].count == 1
        assert result.deposit_totals_by_timeframe["1W"].count == 2
        assert result.withdrawal_totals_by_timeframe["1D"].count == 0
        assert result.withdrawal_totals_by_timeframe["1M"].count == 1

    @pytest.mark.asyncio
    async def test_failed_deposits_keep_withdrawals(self):
        use_case = GetTransactionsDetailUseCase(
            FailingRepository(), _withdrawals(), clock=fixed_clock
        )
        result = await use_case.execute(GetDomainDetailQuery(USER))

        assert result.degraded_sources == ["deposits"]
        assert result.deposits.count == 0
        assert result.withdrawals.count == 1
