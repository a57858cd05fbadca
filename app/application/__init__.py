"""
Application layer package.

Read-only use cases that fan out to the domain ports, tolerate failed
sources and hand the records to the domain aggregators.
Depends on domain ports, never on infrastructure.
"""
