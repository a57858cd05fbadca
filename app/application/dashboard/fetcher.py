"""
Fault-isolated concurrent fetching.

Runs a fixed set of independent read calls at the same time and waits for
every one of them to settle. A failing call never cancels or delays its
siblings; it yields a failed outcome whose records are an empty list.
No retries and no timeout: a call that hangs holds up the whole fetch.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional

logger = logging.getLogger(__name__)

ReadCall = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one read call.

    Attributes:
        source: Name the call was registered under.
        value: What the call returned, when it succeeded.
        error: What the call raised, when it failed.
    """

    source: str
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def records(self) -> list:
        """The returned records, or an empty list on failure."""
        if self.failed or self.value is None:
            return []
        return list(self.value)


class FaultIsolatedFetcher:
    """Gathers independent read calls without letting one failure spread."""

    async def fetch_all(self, calls: Mapping[str, ReadCall]) -> dict[str, FetchOutcome]:
        """Run every call concurrently and collect each outcome.

        Args:
            calls: Zero-argument coroutine functions keyed by source name.

        Returns:
            One outcome per source, in the order the calls were given.
        """
        sources = list(calls)
        results = await asyncio.gather(
            *(self._run(calls[source]) for source in sources),
            return_exceptions=True,
        )

        outcomes = {}
        for source, result in zip(sources, results):
            if isinstance(result, BaseException):
                logger.warning(
                    "Dashboard source %s failed: %s: %s",
                    source,
                    type(result).__name__,
                    result,
                )
                outcomes[source] = FetchOutcome(source=source, error=result)
            else:
                outcomes[source] = FetchOutcome(source=source, value=result)
        return outcomes

    @staticmethod
    async def _run(call: ReadCall) -> Any:
        # Awaiting inside a coroutine turns synchronous raises into results too.
        return await call()


def failed_sources(outcomes: Mapping[str, FetchOutcome]) -> list[str]:
    return [source for source, outcome in outcomes.items() if outcome.failed]
