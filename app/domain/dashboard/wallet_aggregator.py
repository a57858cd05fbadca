"""
Domain service: wallet rollups.

Balances come from the current wallet snapshots. Charts come from the
wallet history log, because snapshots carry no past.

Account classification is a platform-name heuristic kept for compatibility
with existing data: a wallet without an explicit type is a bank account
when its platform mentions "bank" or is missing, otherwise a demat account.
No framework imports. No IO. No side effects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.domain.dashboard.bucketing import (
    Bucket,
    ChartSeries,
    build_chart,
    newest_first,
    totals_by_timeframe,
)
from app.domain.dashboard.entities import (
    AccountType,
    WalletAction,
    WalletHistoryEvent,
    WalletRecord,
)
from app.domain.dashboard.periods import parse_timestamp
from app.domain.dashboard.values import ZERO, as_amount, round_cents

DEFAULT_CURRENCY = "USD"
DEFAULT_INR_PER_USD = Decimal("83")


@dataclass(frozen=True)
class WalletMovement:
    """A history event paired with the USD-normalized balance change it caused."""

    event: WalletHistoryEvent
    moment: Optional[datetime]
    delta: Decimal


@dataclass
class WalletActivityBucket(Bucket):
    """Wallet history events in a period and their net balance change (USD)."""

    created: int = 0
    updated: int = 0
    deleted: int = 0
    balance_change: Decimal = ZERO

    def accumulate(self, record: WalletMovement) -> None:
        action = record.event.action
        if action == WalletAction.CREATE:
            self.created += 1
        elif action == WalletAction.UPDATE:
            self.updated += 1
        elif action == WalletAction.DELETE:
            self.deleted += 1
        self.balance_change += record.delta


@dataclass
class AccountSummary:
    """Balances of one account class.

    Attributes:
        balances: Balance per uppercased currency code.
        approx_usd: Display-only USD estimate of all balances.
    """

    account_type: AccountType
    count: int = 0
    balances: dict[str, Decimal] = field(default_factory=dict)
    approx_usd: Decimal = ZERO


@dataclass
class WalletsSummary:
    demat: AccountSummary = field(
        default_factory=lambda: AccountSummary(AccountType.DEMAT)
    )
    bank: AccountSummary = field(
        default_factory=lambda: AccountSummary(AccountType.BANK)
    )
    recent_activity: list[WalletHistoryEvent] = field(default_factory=list)
    chart: ChartSeries[WalletActivityBucket] = field(default_factory=ChartSeries)


def classify_wallet(wallet: WalletRecord) -> AccountType:
    """Return the account class of a wallet."""
    explicit = (wallet.type or "").strip().lower()
    if explicit in (AccountType.DEMAT.value, AccountType.BANK.value):
        return AccountType(explicit)
    platform = (wallet.platform or "").strip()
    if not platform or "bank" in platform.lower():
        return AccountType.BANK
    return AccountType.DEMAT


def currency_code(currency: Optional[str]) -> str:
    return (currency or "").strip().upper() or DEFAULT_CURRENCY


def movement_timestamp(movement: WalletMovement) -> Optional[datetime]:
    return movement.moment


class WalletAggregator:
    """Reduces wallets and their history into balances and activity charts."""

    def __init__(self, inr_per_usd: Decimal = DEFAULT_INR_PER_USD) -> None:
        """Initialize the aggregator.

        Args:
            inr_per_usd: Fixed rupee/dollar rate for the display estimate.
        """
        self._inr_per_usd = inr_per_usd

    def to_usd(self, amount: Decimal, currency: Optional[str]) -> Decimal:
        """Approximate an amount in USD. Non-INR currencies pass at face value."""
        if currency_code(currency) == "INR" and self._inr_per_usd:
            return amount / self._inr_per_usd
        return amount

    def summarize(
        self,
        wallets: list[WalletRecord],
        history: list[WalletHistoryEvent],
        recent_limit: int = 10,
        chart_limit: Optional[int] = None,
    ) -> WalletsSummary:
        """Build the wallets summary.

        Args:
            wallets: Current wallet snapshots.
            history: Wallet history log, any order.
            recent_limit: Number of newest history events to include.
            chart_limit: When given, only the newest N replayed events are
                charted. The replay itself always covers the whole log.
        """
        summary = WalletsSummary()
        for account in (summary.demat, summary.bank):
            members = [w for w in wallets if classify_wallet(w) is account.account_type]
            self._fill_account(account, members)

        summary.recent_activity = self.recent_activity(history, recent_limit)
        movements = self.movements(history)
        if chart_limit is not None:
            movements = newest_first(movements, movement_timestamp)[:chart_limit]
        summary.chart = build_chart(movements, movement_timestamp, WalletActivityBucket)
        return summary

    def _fill_account(
        self, account: AccountSummary, wallets: list[WalletRecord]
    ) -> None:
        usd = ZERO
        for wallet in wallets:
            code = currency_code(wallet.currency)
            balance = as_amount(wallet.balance)
            account.balances[code] = account.balances.get(code, ZERO) + balance
            usd += self.to_usd(balance, code)
        account.count = len(wallets)
        account.balances = dict(sorted(account.balances.items()))
        account.approx_usd = round_cents(usd)

    def movements(self, history: list[WalletHistoryEvent]) -> list[WalletMovement]:
        """Replay history in time order to get each event's balance change.

        Events with an unusable timestamp cannot be placed in time and are
        left out of the replay.

        The log may be truncated to its newest events. A wallet whose first
        visible event is not a ``create`` has an unknown earlier balance, so
        its events only set the baseline (delta 0) until a balance is known.
        """
        dated = []
        for index, event in enumerate(history):
            moment = parse_timestamp(event.created_at)
            if moment is not None:
                dated.append((moment, index, event))
        dated.sort(key=lambda item: (item[0], item[1]))

        balances: dict[str, Decimal] = {}
        tracked: set[str] = set()
        movements = []
        for moment, _, event in dated:
            wallet_id = event.wallet_id
            previous = balances.get(wallet_id, ZERO)
            if event.action == WalletAction.DELETE:
                balances.pop(wallet_id, None)
                current = ZERO
            elif event.balance is None:
                current = previous
            else:
                current = round_cents(
                    self.to_usd(as_amount(event.balance), event.currency)
                )
                balances[wallet_id] = current

            if wallet_id in tracked or event.action == WalletAction.CREATE:
                delta = current - previous
            else:
                delta = ZERO
            if event.action != WalletAction.UPDATE or wallet_id in balances:
                tracked.add(wallet_id)

            movements.append(WalletMovement(event=event, moment=moment, delta=delta))
        return movements

    def recent_activity(
        self, history: list[WalletHistoryEvent], limit: int
    ) -> list[WalletHistoryEvent]:
        """Newest history events first; undated events sort last."""
        return newest_first(history, lambda e: parse_timestamp(e.created_at))[:limit]

    def totals_by_timeframe(
        self, history: list[WalletHistoryEvent], now: datetime
    ) -> dict[str, WalletActivityBucket]:
        return totals_by_timeframe(
            self.movements(history), movement_timestamp, WalletActivityBucket, now
        )

