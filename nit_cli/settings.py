"""Settings loading for nit.

Reads the TOML config file and validates it into SourceSpecs for the
resolver. The loaded settings are passed explicitly to whatever needs them;
nothing here is cached globally.

File format::

    [[template]]
    name = "official"                 # optional
    uri = "github:NixOS/templates"
    templates = ["rust", "go"]        # optional, default: import all
    excludes = ["go"]                 # optional

    [resolver]                        # optional
    max_concurrency = 8
    fetch_timeout = 60
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import AliasChoices
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator

from .sources.errors import ConfigurationError
from .sources.models import SourceSpec
from .sources.resolver import DEFAULT_MAX_CONCURRENCY

logger = logging.getLogger(__name__)


class SourceConfig(BaseModel):
    """One ``[[template]]`` entry."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str | None = Field(None, description="Optional name for the template collection")
    uri: str = Field(..., description="Flake URI for templates (e.g. github:NixOS/templates)")
    templates: list[str] | None = Field(
        None, description="Templates to include. If omitted, imports all templates"
    )
    excludes: list[str] | None = Field(
        None,
        validation_alias=AliasChoices("excludes", "execludes"),
        description="Templates to exclude (applied after 'templates')",
    )

    @field_validator("uri")
    @classmethod
    def _uri_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("uri must not be empty")
        return value

    def to_source_spec(self) -> SourceSpec:
        return SourceSpec(
            uri=self.uri,
            name=self.name,
            includes=frozenset(self.templates) if self.templates is not None else None,
            excludes=frozenset(self.excludes) if self.excludes is not None else None,
        )


class ResolverConfig(BaseModel):
    """Optional ``[resolver]`` table."""

    model_config = ConfigDict(extra="forbid")

    max_concurrency: int = Field(DEFAULT_MAX_CONCURRENCY, ge=1, description="Maximum concurrent fetches")
    fetch_timeout: float | None = Field(None, gt=0, description="Per-source fetch timeout in seconds")


class NitSettings(BaseModel):
    """Complete nit configuration."""

    model_config = ConfigDict(extra="forbid")

    template: list[SourceConfig] = Field(default_factory=list, description="List of template sources")
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)

    def to_source_specs(self) -> list[SourceSpec]:
        """Source records in file order."""
        return [source.to_source_spec() for source in self.template]


def parse_settings(text: str, origin: str = "<string>") -> NitSettings:
    """Parse and validate TOML settings text.

    Raises:
        ConfigurationError: Invalid TOML or schema violation
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {origin}: {e}") from e

    try:
        return NitSettings.model_validate(data)
    except ValidationError as e:
        problems = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            problems.append(f"  - {location}: {error['msg']}")
        raise ConfigurationError(f"Invalid config in {origin}:\n" + "\n".join(problems)) from e


def load_settings(path: Path) -> NitSettings:
    """Load settings from ``path``.

    Raises:
        ConfigurationError: File missing, unreadable or invalid
    """
    if not path.exists():
        raise ConfigurationError(f"Couldn't find a config at {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Could not read {path}: {e}") from e

    settings = parse_settings(text, origin=str(path))
    logger.debug(f"Loaded {len(settings.template)} template sources from {path}")
    return settings
