"""
Application layer for the dashboard bounded context.

Use cases fan out to the record ports, then hand the snapshot to the
domain aggregators. No framework or infrastructure imports allowed.
"""
