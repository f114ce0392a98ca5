"""
Template sources - resolve configured collections into one catalog.

Public API:
- SourceSpec: One configured template collection
- TemplateResolver: Fetch, filter and merge sources into a ResolutionReport
- ResolutionReport: Catalog, per-source outcomes and shadowed entries
- filter_identifiers: Apply include/exclude lists
- merge_results: Deterministic fold of per-source results
- select_template: Look up a bare identifier in a report
- NixFlakeFetcher / CachingFetcher: Collection fetchers
"""

from .errors import AmbiguousOrMissingError
from .errors import ConfigurationError
from .errors import FetchError
from .errors import InvalidSourceError
from .errors import MaterializeError
from .errors import NitError
from .errors import NoSourcesError
from .fetchers import CachingFetcher
from .fetchers import CollectionFetcher
from .fetchers import NixFlakeFetcher
from .filters import FilterResult
from .filters import filter_identifiers
from .merger import SourceResult
from .merger import merge_results
from .models import OutcomeStatus
from .models import ResolutionReport
from .models import ResolutionStatus
from .models import ShadowedEntry
from .models import SourceOutcome
from .models import SourceSpec
from .models import TemplateEntry
from .resolver import TemplateResolver
from .selection import select_template

__all__ = [
    "SourceSpec",
    "TemplateEntry",
    "ShadowedEntry",
    "SourceOutcome",
    "OutcomeStatus",
    "ResolutionReport",
    "ResolutionStatus",
    "FilterResult",
    "filter_identifiers",
    "SourceResult",
    "merge_results",
    "TemplateResolver",
    "select_template",
    "CollectionFetcher",
    "NixFlakeFetcher",
    "CachingFetcher",
    "NitError",
    "InvalidSourceError",
    "FetchError",
    "NoSourcesError",
    "AmbiguousOrMissingError",
    "ConfigurationError",
    "MaterializeError",
]
