"""Per-source include/exclude filtering."""

from __future__ import annotations

from collections.abc import Set
from dataclasses import dataclass


@dataclass(frozen=True)
class FilterResult:
    """Identifiers kept for one source, plus includes it could not satisfy."""

    kept: frozenset[str]
    requested_but_missing: tuple[str, ...] = ()


def filter_identifiers(
    offered: Set[str],
    includes: Set[str] | None,
    excludes: Set[str] | None,
) -> FilterResult:
    """
    Apply a source's include and exclude lists to what it offers.

    Includes are applied first (intersection), then excludes are subtracted.
    An identifier named in both lists is therefore always dropped.

    Args:
        offered: Identifiers the collection actually offers
        includes: Identifiers to keep, or None to keep everything
        excludes: Identifiers to drop, or None to drop nothing

    Returns:
        FilterResult with the kept identifiers and the sorted list of
        included identifiers that the collection does not offer

    Example:
        >>> result = filter_identifiers({"rust", "go", "python"}, {"rust", "go"}, {"go"})
        >>> sorted(result.kept)
        ['rust']
    """
    kept = frozenset(offered)
    missing: tuple[str, ...] = ()

    if includes is not None:
        missing = tuple(sorted(set(includes) - kept))
        kept = kept & frozenset(includes)

    if excludes is not None:
        kept = kept - frozenset(excludes)

    return FilterResult(kept=kept, requested_but_missing=missing)
