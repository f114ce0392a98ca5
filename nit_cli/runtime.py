"""Per-invocation CLI state shared by all commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from .paths import create_resolver
from .paths import get_config_path
from .settings import NitSettings
from .settings import load_settings
from .sources.models import ResolutionReport

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    """Options from the top-level ``nit`` group plus lazily loaded settings.

    Attributes:
        config_path: Settings file (None = default location)
        refresh: Re-fetch collection listings instead of using the cache
    """

    config_path: Path | None = None
    refresh: bool = False
    _settings: NitSettings | None = field(default=None, init=False, repr=False)

    @property
    def effective_config_path(self) -> Path:
        return self.config_path or get_config_path()

    def settings(self) -> NitSettings:
        if self._settings is None:
            self._settings = load_settings(self.effective_config_path)
        return self._settings

    def resolve(self) -> ResolutionReport:
        """Run one resolution over the configured sources.

        Raises:
            ConfigurationError: Settings missing or invalid
            NoSourcesError: Settings contain no ``[[template]]`` entries
        """
        settings = self.settings()
        resolver = create_resolver(settings, refresh=self.refresh)
        return resolver.resolve_sync(settings.to_source_specs())
