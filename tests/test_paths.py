"""Tests for path policy and collaborator factories."""

import json

from nit_cli.paths import create_resolver
from nit_cli.paths import get_listing_cache_path
from nit_cli.settings import parse_settings

SETTINGS = parse_settings('[[template]]\nuri = "github:NixOS/templates"\n')


def write_cache(uris):
    path = get_listing_cache_path()
    path.parent.mkdir(parents=True)
    collections = {uri: {"templates": ["default"], "cached_at": "2026-01-01T00:00:00+00:00"} for uri in uris}
    path.write_text(json.dumps({"version": 1, "collections": collections}))
    return path


def test_listing_cache_under_xdg_cache(isolated_dirs):
    assert get_listing_cache_path() == isolated_dirs / "cache" / "nix-nit" / "cache.json"


def test_refresh_prunes_unconfigured_listings(isolated_dirs):
    path = write_cache(["github:NixOS/templates", "github:old/removed"])

    create_resolver(SETTINGS, refresh=True)

    assert list(json.loads(path.read_text())["collections"]) == ["github:NixOS/templates"]


def test_plain_run_keeps_cache_untouched(isolated_dirs):
    path = write_cache(["github:NixOS/templates", "github:old/removed"])

    create_resolver(SETTINGS)

    assert sorted(json.loads(path.read_text())["collections"]) == ["github:NixOS/templates", "github:old/removed"]
