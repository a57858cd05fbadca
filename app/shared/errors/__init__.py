"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that domain errors
are translated into the same JSON error body everywhere.
"""
