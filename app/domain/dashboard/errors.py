"""
Domain-specific errors for the dashboard bounded context.

Dashboard reads degrade instead of failing, so these errors are mostly
raised by adapters and absorbed by the fetcher. They are mapped to HTTP
responses at the interface layer should one ever escape.
No framework imports allowed.
"""


class DashboardDomainError(Exception):
    """Base error for all dashboard domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class RecordSourceError(DashboardDomainError):
    """Raised when a record source cannot be read."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Record source '{source}' unavailable: {reason}")
        self.source = source
        self.reason = reason
