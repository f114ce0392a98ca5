"""Catalog merging - folds filtered per-source results into one report.

The fold runs once, after every source has a terminal outcome, and always in
configured order. Ownership of an identifier therefore depends only on the
configuration and the fetched content, never on which fetch finished first.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .models import ResolutionReport
from .models import ShadowedEntry
from .models import SourceOutcome
from .models import SourceSpec
from .models import TemplateEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceResult:
    """Terminal state of one source, ready for merging."""

    source: SourceSpec
    outcome: SourceOutcome
    kept: frozenset[str] = frozenset()

    @property
    def position(self) -> int:
        return self.outcome.position


def merge_results(results: Sequence[SourceResult]) -> ResolutionReport:
    """
    Merge per-source results into a deduplicated catalog.

    Sources are walked by position (first configured wins), and each source's
    identifiers alphabetically. The first source to offer an identifier owns
    it; every later offer is recorded as a shadowed entry.

    Args:
        results: One result per configured source, in any order

    Returns:
        ResolutionReport with catalog, outcomes and shadowed entries
    """
    ordered = sorted(results, key=lambda result: result.position)

    catalog: list[TemplateEntry] = []
    owners: dict[str, TemplateEntry] = {}
    shadowed: list[ShadowedEntry] = []

    for result in ordered:
        label = result.source.label
        for identifier in sorted(result.kept):
            owner = owners.get(identifier)
            if owner is None:
                entry = TemplateEntry(identifier=identifier, source_name=label, uri=result.source.uri)
                owners[identifier] = entry
                catalog.append(entry)
                continue

            logger.debug(f"[merge] {identifier} from {label} shadowed by {owner.source_name}")
            shadowed.append(ShadowedEntry(identifier=identifier, source_name=label, winner=owner.source_name))

    return ResolutionReport(
        catalog=tuple(catalog),
        outcomes=tuple(result.outcome for result in ordered),
        shadowed=tuple(shadowed),
    )
