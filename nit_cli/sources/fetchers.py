"""Collection fetchers - list the templates a collection offers.

The resolver only depends on the CollectionFetcher protocol. Concrete
fetchers:
- NixFlakeFetcher: asks ``nix flake show`` for a flake's templates
- CachingFetcher: JSON snapshot of listings in front of another fetcher
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable
from datetime import UTC
from datetime import datetime
from pathlib import Path
from typing import Protocol
from typing import runtime_checkable

from .errors import FetchError

logger = logging.getLogger(__name__)

CACHE_SCHEMA_VERSION = 1


@runtime_checkable
class CollectionFetcher(Protocol):
    """Lists the template identifiers offered by a collection.

    Implementations raise on failure (FetchError by convention). How the uri
    is interpreted and whether anything is cached is up to the implementation.
    """

    async def fetch(self, uri: str) -> set[str]: ...


class NixFlakeFetcher:
    """Fetch template listings with ``nix flake show --json``."""

    def __init__(self, nix: str = "nix", timeout: float | None = None):
        """Initialize fetcher.

        Args:
            nix: Nix executable name or path
            timeout: Seconds to wait for ``nix`` before giving up (None = wait forever)
        """
        self.nix = nix
        self.timeout = timeout

    async def fetch(self, uri: str) -> set[str]:
        """List templates offered by the flake at ``uri``.

        Raises:
            FetchError: nix is missing, fails, times out or prints invalid JSON
        """
        cmd = [self.nix, "flake", "show", uri, "--json", "--no-pretty"]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise FetchError(uri, f"command not found: {self.nix}") from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except TimeoutError as e:
            proc.kill()
            await proc.wait()
            raise FetchError(uri, f"nix flake show timed out after {self.timeout}s") from e
        except asyncio.CancelledError:
            if proc.returncode is None:
                proc.kill()
                await asyncio.shield(proc.wait())
            raise

        if proc.returncode != 0:
            error_msg = stderr.decode(errors="replace").strip() or f"exit code {proc.returncode}"
            raise FetchError(uri, error_msg)

        return self.parse_listing(uri, stdout.decode(errors="replace"))

    @staticmethod
    def parse_listing(uri: str, output: str) -> set[str]:
        """Extract template identifiers from ``nix flake show --json`` output.

        Identifiers are the keys of ``templates``, plus ``default`` when the
        flake declares a ``defaultTemplate``.
        """
        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise FetchError(uri, f"invalid JSON from nix flake show: {e}") from e

        if not isinstance(data, dict):
            raise FetchError(uri, "unexpected nix flake show output (not an object)")

        templates = data.get("templates") or {}
        if not isinstance(templates, dict):
            raise FetchError(uri, "unexpected 'templates' value in nix flake show output")

        identifiers = set(templates)
        if data.get("defaultTemplate") is not None:
            identifiers.add("default")
        return identifiers

    def __repr__(self) -> str:
        return f"NixFlakeFetcher({self.nix})"


class CachingFetcher:
    """Serve listings from a JSON cache, falling back to another fetcher.

    Cache format::

        {"version": 1, "collections": {"<uri>": {"templates": [...], "cached_at": "..."}}}

    Only successful listings are cached.
    """

    def __init__(self, inner: CollectionFetcher, cache_path: Path, refresh: bool = False):
        """Initialize caching fetcher.

        Args:
            inner: Fetcher used on cache misses
            cache_path: Location of the JSON cache file
            refresh: Ignore cached listings and re-fetch every uri
        """
        self.inner = inner
        self.cache_path = cache_path
        self.refresh = refresh
        self._entries: dict[str, dict] | None = None

    async def fetch(self, uri: str) -> set[str]:
        entries = self._load()

        if not self.refresh and uri in entries:
            logger.debug(f"Using cached listing for {uri}")
            return set(entries[uri]["templates"])

        identifiers = await self.inner.fetch(uri)
        entries[uri] = {
            "templates": sorted(identifiers),
            "cached_at": datetime.now(UTC).isoformat(timespec="seconds"),
        }
        self._save()
        return set(identifiers)

    def prune(self, keep: Iterable[str]) -> list[str]:
        """Drop cached listings for uris not in ``keep``.

        Returns:
            The removed uris, sorted
        """
        keep = set(keep)
        entries = self._load()
        removed = sorted(uri for uri in entries if uri not in keep)
        if removed:
            for uri in removed:
                del entries[uri]
            logger.info(f"Pruned {len(removed)} stale listings from template cache")
            self._save()
        return removed

    def clear(self) -> bool:
        """Delete the cache file. Returns True if a file was removed."""
        self._entries = None
        if self.cache_path.exists():
            self.cache_path.unlink()
            logger.info(f"Cleared template cache at {self.cache_path}")
            return True
        return False

    def _load(self) -> dict[str, dict]:
        if self._entries is not None:
            return self._entries

        self._entries = {}
        if not self.cache_path.exists():
            return self._entries

        try:
            data = json.loads(self.cache_path.read_text(encoding="utf-8"))
            if data.get("version") != CACHE_SCHEMA_VERSION:
                logger.info(f"Ignoring template cache with unknown version at {self.cache_path}")
                return self._entries
            for uri, entry in data.get("collections", {}).items():
                if _valid_entry(entry):
                    self._entries[uri] = entry
                else:
                    logger.warning(f"Corrupt template cache entry for {uri} at {self.cache_path}, ignoring")
        except (OSError, json.JSONDecodeError, AttributeError) as e:
            logger.warning(f"Corrupt template cache at {self.cache_path}: {e}")

        return self._entries

    def _save(self) -> None:
        """Write the cache; a write failure is logged and the listing still served."""
        payload = {"version": CACHE_SCHEMA_VERSION, "collections": self._entries or {}}
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            self.cache_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not write template cache at {self.cache_path}: {e}")

    def __repr__(self) -> str:
        return f"CachingFetcher({self.inner!r}, {self.cache_path})"


def _valid_entry(entry: object) -> bool:
    if not isinstance(entry, dict):
        return False
    templates = entry.get("templates")
    return isinstance(templates, list) and all(isinstance(t, str) for t in templates)
