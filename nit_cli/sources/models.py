"""Value types for template source resolution.

Everything here is immutable: a ResolutionReport is a snapshot handed to the
presentation layer and never changes after the resolver returns it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from enum import Enum

from .errors import InvalidSourceError


def _freeze(values: Iterable[str] | None) -> frozenset[str] | None:
    if values is None:
        return None
    return frozenset(values)


@dataclass(frozen=True)
class SourceSpec:
    """One configured template collection.

    Attributes:
        uri: Opaque collection locator (e.g. "github:NixOS/templates")
        name: Optional human label, defaults to the uri for display
        includes: Identifiers to keep (None = keep everything offered)
        excludes: Identifiers to drop, applied after includes (None = drop nothing)
    """

    uri: str
    name: str | None = None
    includes: frozenset[str] | None = None
    excludes: frozenset[str] | None = None

    def __post_init__(self):
        if not isinstance(self.uri, str) or not self.uri.strip():
            raise InvalidSourceError(f"Template source {self.name or '<unnamed>'!r} has an empty uri")
        # Accept any iterable for the filters but store frozensets
        object.__setattr__(self, "includes", _freeze(self.includes))
        object.__setattr__(self, "excludes", _freeze(self.excludes))

    @property
    def label(self) -> str:
        """Name used for all user-facing labelling."""
        return self.name if self.name is not None else self.uri


@dataclass(frozen=True)
class TemplateEntry:
    """A template that made it into the catalog."""

    identifier: str
    source_name: str
    uri: str

    @property
    def reference(self) -> str:
        """Flake template reference, e.g. ``github:NixOS/templates#rust``."""
        return f"{self.uri}#{self.identifier}"


@dataclass(frozen=True)
class ShadowedEntry:
    """An identifier offered by a later source that lost to an earlier one."""

    identifier: str
    source_name: str
    winner: str


class OutcomeStatus(str, Enum):
    """Terminal state of a single source within a resolution run."""

    OK = "ok"
    FETCH_FAILED = "fetch_failed"
    EMPTY_AFTER_FILTER = "empty_after_filter"


class ResolutionStatus(str, Enum):
    """Overall state of a resolution run."""

    COMPLETE = "complete"
    PARTIAL = "partial"
    ALL_SOURCES_FAILED = "all_sources_failed"


@dataclass(frozen=True)
class SourceOutcome:
    """What happened to one source during a run.

    Attributes:
        position: Index of the source in the configured order
        source: The source record
        status: Terminal state
        fetched: Number of identifiers the collection offered
        kept: Number of identifiers left after filtering
        cause: The fetch exception (fetch_failed only)
        requested_but_missing: Included identifiers the collection does not offer
    """

    position: int
    source: SourceSpec
    status: OutcomeStatus
    fetched: int = 0
    kept: int = 0
    cause: BaseException | None = None
    requested_but_missing: tuple[str, ...] = ()

    @property
    def failed(self) -> bool:
        return self.status == OutcomeStatus.FETCH_FAILED

    def describe(self) -> str:
        """Short human-readable summary for listings."""
        if self.status == OutcomeStatus.FETCH_FAILED:
            return f"fetch failed: {self.cause}"
        if self.status == OutcomeStatus.EMPTY_AFTER_FILTER:
            return f"nothing left after filtering ({self.fetched} offered)"
        return f"{self.kept} of {self.fetched} kept"


@dataclass(frozen=True)
class ResolutionReport:
    """Result of one resolution run."""

    catalog: tuple[TemplateEntry, ...] = ()
    outcomes: tuple[SourceOutcome, ...] = ()
    shadowed: tuple[ShadowedEntry, ...] = ()
    _index: dict[str, TemplateEntry] = field(default=None, init=False, repr=False, compare=False)  # type: ignore[assignment]

    def __post_init__(self):
        object.__setattr__(self, "_index", {entry.identifier: entry for entry in self.catalog})

    @property
    def status(self) -> ResolutionStatus:
        failures = sum(1 for outcome in self.outcomes if outcome.failed)
        if self.outcomes and failures == len(self.outcomes):
            return ResolutionStatus.ALL_SOURCES_FAILED
        if failures:
            return ResolutionStatus.PARTIAL
        return ResolutionStatus.COMPLETE

    @property
    def all_sources_failed(self) -> bool:
        return self.status == ResolutionStatus.ALL_SOURCES_FAILED

    def identifiers(self) -> list[str]:
        return [entry.identifier for entry in self.catalog]

    def lookup(self, identifier: str) -> TemplateEntry | None:
        """Return the catalog entry owning ``identifier``, if any."""
        return self._index.get(identifier)

    def shadows_of(self, identifier: str) -> list[ShadowedEntry]:
        return [shadow for shadow in self.shadowed if shadow.identifier == identifier]

    def missing_requests(self, identifier: str) -> list[SourceOutcome]:
        """Outcomes of sources that asked for ``identifier`` but do not offer it."""
        return [outcome for outcome in self.outcomes if identifier in outcome.requested_but_missing]
