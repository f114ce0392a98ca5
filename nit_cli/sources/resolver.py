"""Template resolver - fetch, filter and merge all configured sources.

Fetches run concurrently, one task per source. Filtering happens inside each
task as soon as its fetch completes. Merging waits until every task is done
and then runs once, in configured order.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from .errors import FetchError
from .errors import InvalidSourceError
from .errors import NoSourcesError
from .fetchers import CollectionFetcher
from .filters import filter_identifiers
from .merger import SourceResult
from .merger import merge_results
from .models import OutcomeStatus
from .models import ResolutionReport
from .models import SourceOutcome
from .models import SourceSpec

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 8


class TemplateResolver:
    """
    Resolve an ordered list of template sources into one catalog.

    A failing source only degrades its own outcome. The run is never aborted
    because of a fetch failure; when every source fails the report says so
    through ``ResolutionReport.status``.

    Example:
        >>> resolver = TemplateResolver(NixFlakeFetcher())
        >>> report = resolver.resolve_sync(settings.to_source_specs())
        >>> [entry.reference for entry in report.catalog]
        ['github:NixOS/templates#default', ...]
    """

    def __init__(
        self,
        fetcher: CollectionFetcher,
        *,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        fetch_timeout: float | None = None,
    ):
        """Initialize resolver.

        Args:
            fetcher: Collection fetcher used for every source
            max_concurrency: Maximum number of fetches in flight
            fetch_timeout: Per-fetch timeout in seconds (None = no timeout)
        """
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        self.fetcher = fetcher
        self.max_concurrency = max_concurrency
        self.fetch_timeout = fetch_timeout

    async def resolve(self, sources: Sequence[SourceSpec]) -> ResolutionReport:
        """Run one resolution.

        Args:
            sources: Template sources in configured order

        Returns:
            ResolutionReport snapshot

        Raises:
            NoSourcesError: ``sources`` is empty
            InvalidSourceError: A source has an empty uri (raised before any fetch)
            asyncio.CancelledError: The run was cancelled; pending fetches are cancelled too
        """
        if not sources:
            raise NoSourcesError()

        for position, source in enumerate(sources):
            uri = getattr(source, "uri", None)
            if not isinstance(uri, str) or not uri.strip():
                raise InvalidSourceError(f"Template source at position {position} has an empty uri")

        logger.debug(f"[resolve] fetching {len(sources)} sources (max_concurrency={self.max_concurrency})")
        semaphore = asyncio.Semaphore(self.max_concurrency)
        results = await asyncio.gather(
            *(self._resolve_source(position, source, semaphore) for position, source in enumerate(sources))
        )

        logger.debug("[resolve] all sources settled, merging")
        report = merge_results(results)

        if report.all_sources_failed:
            logger.warning(f"All {len(sources)} template sources failed to fetch")
        logger.info(
            f"Resolved {len(report.catalog)} templates from {len(sources)} sources "
            f"({len(report.shadowed)} shadowed)",
            extra={"event": "resolve:done", "status": report.status.value},
        )
        return report

    def resolve_sync(self, sources: Sequence[SourceSpec]) -> ResolutionReport:
        """Blocking wrapper around :meth:`resolve` for CLI use."""
        return asyncio.run(self.resolve(sources))

    async def _resolve_source(
        self,
        position: int,
        source: SourceSpec,
        semaphore: asyncio.Semaphore,
    ) -> SourceResult:
        """Fetch and filter a single source, capturing failures as its outcome."""
        try:
            async with semaphore:
                offered = await self._fetch(source.uri)
        except Exception as e:
            # CancelledError is a BaseException and propagates to the caller
            logger.warning(f"Template source {source.label} failed: {e}")
            outcome = SourceOutcome(
                position=position,
                source=source,
                status=OutcomeStatus.FETCH_FAILED,
                cause=e,
            )
            return SourceResult(source=source, outcome=outcome)

        filtered = filter_identifiers(offered, source.includes, source.excludes)
        for missing in filtered.requested_but_missing:
            logger.warning(f"Template '{missing}' requested from {source.label} but not offered")

        status = OutcomeStatus.OK if filtered.kept else OutcomeStatus.EMPTY_AFTER_FILTER
        logger.debug(f"[resolve] {source.label}: {len(filtered.kept)}/{len(offered)} kept ({status.value})")
        outcome = SourceOutcome(
            position=position,
            source=source,
            status=status,
            fetched=len(offered),
            kept=len(filtered.kept),
            requested_but_missing=filtered.requested_but_missing,
        )
        return SourceResult(source=source, outcome=outcome, kept=filtered.kept)

    async def _fetch(self, uri: str) -> frozenset[str]:
        if self.fetch_timeout is None:
            offered = await self.fetcher.fetch(uri)
        else:
            try:
                offered = await asyncio.wait_for(self.fetcher.fetch(uri), timeout=self.fetch_timeout)
            except TimeoutError as e:
                raise FetchError(uri, f"timed out after {self.fetch_timeout}s") from e
        return frozenset(offered)

    def __repr__(self) -> str:
        return f"TemplateResolver({self.fetcher!r}, max_concurrency={self.max_concurrency})"
