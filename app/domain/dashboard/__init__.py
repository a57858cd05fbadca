"""
Dashboard bounded context: domain layer.

Read-side rollups of a user's trading records:
- Timeframe and calendar period resolution
- Per-domain aggregation (positions, wallets, deposits, withdrawals, trade P&L)
- Dashboard summary composition
"""
