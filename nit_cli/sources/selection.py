"""Identifier selection - map a bare identifier to one catalog entry."""

from __future__ import annotations

from .errors import AmbiguousOrMissingError
from .models import ResolutionReport
from .models import TemplateEntry


def select_template(report: ResolutionReport, identifier: str) -> TemplateEntry:
    """
    Resolve ``identifier`` to the catalog entry that owns it.

    Shadowed entries are never selectable: an identifier offered by several
    sources always resolves to the earliest configured one.

    Args:
        report: Resolution report to select from
        identifier: Bare template identifier (e.g. "rust")

    Returns:
        The owning TemplateEntry

    Raises:
        AmbiguousOrMissingError: ``identifier`` is not in the catalog
    """
    entry = report.lookup(identifier)
    if entry is not None:
        return entry

    lines = [f"Template '{identifier}' not found in catalog"]

    missing = report.missing_requests(identifier)
    for outcome in missing:
        lines.append(f"  - listed in 'templates' for {outcome.source.label}, but that source does not offer it")

    for outcome in report.outcomes:
        if outcome.failed:
            lines.append(f"  - {outcome.source.label} could not be fetched: {outcome.cause}")

    if len(lines) == 1 and report.catalog:
        lines.append(f"  Available: {', '.join(report.identifiers())}")

    raise AmbiguousOrMissingError(identifier, "\n".join(lines))
