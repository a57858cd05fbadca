"""
Interfaces layer package.

HTTP surface of the service: the health probe and the dashboard routes,
their response schemas and the dependency wiring that builds use cases.
Routes validate query parameters, call a use case and serialize its result.
"""
