"""Freshness-aware JSON store and the in-process prediction cache.

``DataStore`` manages JSON files organized into tiers by update frequency:
  - historical/: Slow-changing, hours TTL (per-region GDD accumulations)
  - live/: Ephemeral, 30 min TTL (the computed prediction snapshot)

Every file is wrapped in a metadata envelope with ``valid_until`` so the
refresh flow can skip work that is still fresh.

``PredictionCache`` holds the distance-independent prediction set for the
current UTC hour. It takes an injected clock so expiry is testable, and
guards check-then-set with a lock so concurrent first requests never see a
half-written entry.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from harvest_planner.schemas import DiscoveryItem

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

PREDICTIONS_PATH = Path("live/predictions.json")
ACCUMULATIONS_PATH = Path("historical/gdd/accumulations.json")

DEFAULT_TTL = timedelta(minutes=30)


def utc_now() -> datetime:
    return datetime.now(UTC)


class DataStore:
    """Manages read/write of cached data files with TTL."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.historical = base_dir / "historical"
        self.live = base_dir / "live"

    def read(self, path: Path) -> Any:
        """Read data payload from a metadata-enveloped JSON file.

        Returns the ``data`` field, or None if the file doesn't exist.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        return envelope.get("data", envelope)

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Read the full envelope (meta + data) from a JSON file."""
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            result: dict[str, Any] = json.load(f)
        return result

    def write(
        self,
        path: Path,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``live/predictions.json``).
            data: Payload to store under the ``data`` key.
            source: Data source identifier (e.g. ``"open-meteo.com"``).
            valid_until: Expiry timestamp. None means never fresh.
            **params: Extra metadata fields (cache bucket, counts, etc.).

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        meta: dict[str, Any] = {
            "source": source,
            "fetched_at": utc_now().isoformat(),
        }
        if valid_until is not None:
            meta["valid_until"] = valid_until.isoformat()
        if params:
            meta.update(params)

        envelope = {"meta": meta, "data": data}
        with full.open("w") as f:
            json.dump(envelope, f, indent=2)

        return full

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full

    def is_fresh(self, path: Path, now: datetime | None = None) -> bool:
        """Check if a file exists and hasn't expired.

        Returns False if the file is missing, has no ``valid_until``, or
        the expiry time has passed.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return False

        valid_until = envelope.get("meta", {}).get("valid_until")
        if valid_until is None:
            return False

        expiry = datetime.fromisoformat(valid_until)
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return (now or utc_now()) < expiry


# =============================================================================
# Prediction cache
# =============================================================================


def bucket_key(now: datetime) -> str:
    """Hour-granularity cache key in UTC, e.g. ``2026-10-18T14``."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(UTC).strftime("%Y-%m-%dT%H")


@dataclass(frozen=True)
class CacheEntry:
    key: str
    computed_at: datetime
    items: list[DiscoveryItem]


@dataclass(frozen=True)
class CacheLookup:
    """Result of ``get_or_compute``: the items and whether they were cached."""

    items: list[DiscoveryItem]
    hit: bool
    computed_at: datetime


class PredictionCache:
    """In-process cache of the prediction set for the current hour bucket.

    An entry is valid while its bucket matches the clock's current hour and
    it is younger than ``ttl``. When a ``store`` is given, computed sets are
    also written to ``live/predictions.json`` and a fresh snapshot there is
    loaded on a cold cache.
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = utc_now,
        store: DataStore | None = None,
        path: Path = PREDICTIONS_PATH,
    ) -> None:
        self.ttl = ttl
        self.clock = clock
        self.store = store
        self.path = path
        self._entry: CacheEntry | None = None
        self._lock = threading.Lock()

    def _is_valid(self, entry: CacheEntry, now: datetime) -> bool:
        return entry.key == bucket_key(now) and now - entry.computed_at < self.ttl

    def get(self) -> list[DiscoveryItem] | None:
        """Return cached items if still valid, else None."""
        now = self.clock()
        with self._lock:
            entry = self._entry or self._load_snapshot(now)
            if entry is not None and self._is_valid(entry, now):
                self._entry = entry
                return entry.items
        return None

    def put(self, items: list[DiscoveryItem], computed_at: datetime | None = None) -> None:
        """Store a freshly computed set (and persist it when a store is set)."""
        with self._lock:
            self._set(items, computed_at or self.clock())

    def get_or_compute(self, compute: Callable[[], list[DiscoveryItem]]) -> CacheLookup:
        """Return the cached set, computing and storing it on a miss.

        The check and the set happen under one lock, so concurrent first
        requests compute once and never observe a partial entry. Exceptions
        from ``compute`` propagate and nothing is cached.
        """
        with self._lock:
            now = self.clock()
            entry = self._entry or self._load_snapshot(now)
            if entry is not None and self._is_valid(entry, now):
                self._entry = entry
                return CacheLookup(entry.items, hit=True, computed_at=entry.computed_at)

            items = compute()
            entry = self._set(items, self.clock())
            return CacheLookup(entry.items, hit=False, computed_at=entry.computed_at)

    def clear(self) -> None:
        with self._lock:
            self._entry = None

    def _set(self, items: list[DiscoveryItem], computed_at: datetime) -> CacheEntry:
        entry = CacheEntry(key=bucket_key(computed_at), computed_at=computed_at, items=list(items))
        self._entry = entry
        if self.store is not None:
            write_snapshot(self.store, entry.items, computed_at, self.ttl, self.path)
        return entry

    def _load_snapshot(self, now: datetime) -> CacheEntry | None:
        if self.store is None or not self.store.is_fresh(self.path, now=now):
            return None
        envelope = self.store.read_raw(self.path) or {}
        meta = envelope.get("meta", {})
        try:
            items = [DiscoveryItem.model_validate(d) for d in envelope.get("data", [])]
            computed_at = datetime.fromisoformat(meta["computed_at"])
        except (KeyError, ValueError, ValidationError) as e:
            logger.warning("Ignoring unreadable prediction snapshot %s: %s", self.path, e)
            return None
        return CacheEntry(key=meta.get("bucket", ""), computed_at=computed_at, items=items)


def write_snapshot(
    store: DataStore,
    items: list[DiscoveryItem],
    computed_at: datetime,
    ttl: timedelta = DEFAULT_TTL,
    path: Path = PREDICTIONS_PATH,
) -> Path:
    """Persist a prediction set with its cache bucket and expiry."""
    return store.write(
        path,
        [item.model_dump(mode="json") for item in items],
        source="harvest-planner",
        valid_until=computed_at + ttl,
        bucket=bucket_key(computed_at),
        computed_at=computed_at.isoformat(),
        count=len(items),
    )
