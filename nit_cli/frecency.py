"""Frecency ranking for the template picker.

Each use of a template is stored as a timestamp. A use is worth ``bonus``
points when fresh and loses half its weight every ``half_life_days``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import UTC
from datetime import datetime
from pathlib import Path

from .sources.models import TemplateEntry

logger = logging.getLogger(__name__)

DEFAULT_HALF_LIFE_DAYS = 30.0
DEFAULT_BONUS = 15.0
SECONDS_PER_DAY = 60 * 60 * 24


def frecency_key(entry: TemplateEntry) -> str:
    return f"{entry.uri}-{entry.identifier}"


class FrecencyStore:
    """Persisted template usage history."""

    def __init__(
        self,
        path: Path,
        half_life_days: float = DEFAULT_HALF_LIFE_DAYS,
        bonus: float = DEFAULT_BONUS,
    ):
        self.path = path
        self.half_life_days = half_life_days
        self.bonus = bonus
        self._uses: dict[str, list[float]] | None = None

    def score(self, key: str, now: datetime | None = None) -> float:
        """Decayed usage score for ``key``."""
        current = (now or datetime.now(UTC)).timestamp()
        total = 0.0
        for used_at in self._load().get(key, []):
            age_days = max(current - used_at, 0.0) / SECONDS_PER_DAY
            total += 0.5 ** (age_days / self.half_life_days)
        return self.bonus * total

    def record(self, key: str, now: datetime | None = None) -> None:
        """Record one use of ``key`` and persist."""
        used_at = (now or datetime.now(UTC)).timestamp()
        self._load().setdefault(key, []).append(used_at)
        self._save()

    def rank(self, entries: Iterable[TemplateEntry], now: datetime | None = None) -> list[TemplateEntry]:
        """Entries by descending score; equal scores keep their catalog order."""
        moment = now or datetime.now(UTC)
        return sorted(entries, key=lambda entry: -self.score(frecency_key(entry), moment))

    def clear(self) -> bool:
        self._uses = None
        if self.path.exists():
            self.path.unlink()
            return True
        return False

    def _load(self) -> dict[str, list[float]]:
        if self._uses is not None:
            return self._uses

        self._uses = {}
        if not self.path.exists():
            return self._uses

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            for key, uses in data.items():
                self._uses[key] = [float(used_at) for used_at in uses]
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable frecency data at {self.path}: {e}")
            self._uses = {}

        return self._uses

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._uses or {}, indent=2, sort_keys=True), encoding="utf-8")
