"""Tests for the JSONL logging sink."""

import json
import logging

from nit_cli.logging_setup import JsonlHandler
from nit_cli.logging_setup import init_json_logging


def test_writes_structured_records(tmp_path):
    path = tmp_path / "logs" / "nit.log.jsonl"
    init_json_logging(path=path, level="debug")

    logging.getLogger("nit_cli.test").info("Resolved 3 templates", extra={"event": "resolve:done", "status": "ok"})

    record = json.loads(path.read_text().splitlines()[-1])
    assert record["lvl"] == "INFO"
    assert record["logger"] == "nit_cli.test"
    assert record["message"] == "Resolved 3 templates"
    assert record["event"] == "resolve:done"
    assert record["status"] == "ok"
    assert record["schema"]["name"] == "nit.log"


def test_reinit_replaces_handler(tmp_path):
    init_json_logging(path=tmp_path / "one.jsonl")
    init_json_logging(path=tmp_path / "two.jsonl")

    handlers = [h for h in logging.getLogger().handlers if isinstance(h, JsonlHandler)]
    assert len(handlers) == 1
    assert handlers[0].path == tmp_path / "two.jsonl"


def test_default_path_under_cache_dir(isolated_dirs, monkeypatch):
    monkeypatch.setenv("NIT_CACHE_DIR", str(isolated_dirs / "nit-cache"))
    init_json_logging()

    handler = next(h for h in logging.getLogger().handlers if isinstance(h, JsonlHandler))
    assert handler.path == isolated_dirs / "nit-cache" / "nit.log.jsonl"
