"""Shared fixtures for nit tests."""

import asyncio
import logging
from collections.abc import Iterable

import pytest
from nit_cli.logging_setup import JsonlHandler
from rich.logging import RichHandler


class FakeFetcher:
    """In-memory CollectionFetcher with per-uri delays and failures."""

    def __init__(
        self,
        listings: dict[str, Iterable[str]] | None = None,
        delays: dict[str, float] | None = None,
        failures: dict[str, Exception] | None = None,
    ):
        self.listings = {uri: set(ids) for uri, ids in (listings or {}).items()}
        self.delays = delays or {}
        self.failures = failures or {}
        self.calls: list[str] = []
        self.completed: list[str] = []
        self.cancelled: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, uri: str) -> set[str]:
        self.calls.append(uri)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(uri, 0))
        except asyncio.CancelledError:
            self.cancelled.append(uri)
            raise
        finally:
            self.in_flight -= 1

        self.completed.append(uri)
        if uri in self.failures:
            raise self.failures[uri]
        return set(self.listings[uri])


@pytest.fixture
def fake_fetcher():
    """Factory for FakeFetcher instances."""
    return FakeFetcher


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point config, cache and log locations at a temporary directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.delenv("NIT_CACHE_DIR", raising=False)
    monkeypatch.delenv("NIT_CONFIG_PATH", raising=False)
    monkeypatch.delenv("NIT_LOG_PATH", raising=False)
    yield tmp_path

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, (JsonlHandler, RichHandler)):
            root.removeHandler(handler)
