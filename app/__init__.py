"""
TradeZone Dashboard: read-side aggregation service for a personal trading tracker.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - dashboard: Rollups of positions, wallets, deposits, withdrawals and trade P&L.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, concurrent fetching.
    - infrastructure: Adapters (database) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
