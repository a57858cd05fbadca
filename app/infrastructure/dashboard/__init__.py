"""
Infrastructure adapters for the dashboard bounded context.

Each adapter implements a read port and queries the tables owned by the
record services through a shared async SQLAlchemy engine.
"""
