"""CLI path policy and dependency injection helpers.

This module centralizes where nit reads its config and keeps its cache, and
builds the collaborators the commands need. Core code receives everything
through arguments.
"""

import os
from pathlib import Path

from .frecency import FrecencyStore
from .materialize import NixFlakeMaterializer
from .settings import NitSettings
from .sources.fetchers import CachingFetcher
from .sources.fetchers import NixFlakeFetcher
from .sources.resolver import TemplateResolver

APP_DIR_NAME = "nix-nit"

# ===== BASE DIRECTORIES =====


def get_config_dir() -> Path:
    """``$XDG_CONFIG_HOME/nix-nit`` (defaults to ``~/.config/nix-nit``)."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_DIR_NAME


def get_cache_dir() -> Path:
    """Cache directory, ``$NIT_CACHE_DIR`` or ``$XDG_CACHE_HOME/nix-nit``."""
    if override := os.environ.get("NIT_CACHE_DIR"):
        return Path(override)
    base = os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base) / APP_DIR_NAME


def get_config_path() -> Path:
    """Config file, ``$NIT_CONFIG_PATH`` or ``<config dir>/config.toml``."""
    if override := os.environ.get("NIT_CONFIG_PATH"):
        return Path(override)
    return get_config_dir() / "config.toml"


def get_listing_cache_path() -> Path:
    return get_cache_dir() / "cache.json"


def get_frecency_path() -> Path:
    return get_cache_dir() / "frecency.json"


def get_log_path() -> Path:
    return get_cache_dir() / "nit.log.jsonl"


# ===== FACTORIES =====


def create_fetcher(*, refresh: bool = False) -> CachingFetcher:
    """Nix fetcher behind the listing cache.

    Timeouts are enforced by the resolver, not here.
    """
    return CachingFetcher(NixFlakeFetcher(), get_listing_cache_path(), refresh=refresh)


def create_resolver(settings: NitSettings, *, refresh: bool = False) -> TemplateResolver:
    """Resolver configured from the ``[resolver]`` settings table.

    A refresh also drops cached listings for sources no longer configured.
    """
    fetcher = create_fetcher(refresh=refresh)
    if refresh:
        fetcher.prune(source.uri for source in settings.template)
    return TemplateResolver(
        fetcher,
        max_concurrency=settings.resolver.max_concurrency,
        fetch_timeout=settings.resolver.fetch_timeout,
    )


def create_frecency_store() -> FrecencyStore:
    return FrecencyStore(get_frecency_path())


def create_materializer() -> NixFlakeMaterializer:
    return NixFlakeMaterializer()
