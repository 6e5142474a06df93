"""Tests for the DataStore module and the prediction cache."""

from __future__ import annotations

import json
import threading
import time
from datetime import UTC, datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from harvest_planner.schemas import DiscoveryItem
from harvest_planner.store import (
    PREDICTIONS_PATH,
    DataStore,
    PredictionCache,
    bucket_key,
    write_snapshot,
)

from conftest import NOW, FakeClock, make_item


class TestDataStoreInit:
    """Test DataStore initialization."""

    def test_creates_tier_paths(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        assert store.base == tmp_path
        assert store.historical == tmp_path / "historical"
        assert store.live == tmp_path / "live"


class TestDataStoreWrite:
    """Test writing data with metadata envelopes."""

    def test_write_creates_file(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        path = store.write(Path("live/predictions.json"), [], source="test")
        assert path.exists()

    def test_write_envelope_format(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        valid = datetime(2026, 3, 1, tzinfo=UTC)
        store.write(
            Path("historical/gdd/accumulations.json"),
            {"georgia": {}},
            source="open-meteo.com",
            valid_until=valid,
        )

        data = json.loads((tmp_path / "historical" / "gdd" / "accumulations.json").read_text())
        assert data["meta"]["source"] == "open-meteo.com"
        assert "fetched_at" in data["meta"]
        assert data["meta"]["valid_until"] == valid.isoformat()
        assert data["data"] == {"georgia": {}}

    def test_write_extra_params(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("live/test.json"), {}, source="test", reference_date="2026-01-01")
        data = json.loads((tmp_path / "live" / "test.json").read_text())
        assert data["meta"]["reference_date"] == "2026-01-01"

    def test_write_no_valid_until(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("live/output.json"), {}, source="test")
        data = json.loads((tmp_path / "live" / "output.json").read_text())
        assert "valid_until" not in data["meta"]

    def test_path_escape_rejected(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path / "data")
        with pytest.raises(ValueError, match="escapes"):
            store.write(Path("../outside.json"), {}, source="test")


class TestDataStoreRead:
    """Test reading data from the store."""

    def test_read_returns_data_payload(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("live/test.json"), {"key": "value"}, source="test")
        assert store.read(Path("live/test.json")) == {"key": "value"}

    def test_read_missing_file(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        assert store.read(Path("nonexistent.json")) is None

    def test_read_raw_returns_full_envelope(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("live/test.json"), {"key": "value"}, source="test")
        result = store.read_raw(Path("live/test.json"))
        assert result is not None
        assert set(result) == {"meta", "data"}


class TestDataStoreIsFresh:
    """Test freshness checking."""

    def test_missing_file_not_fresh(self, tmp_path: Path) -> None:
        assert DataStore(tmp_path).is_fresh(Path("nonexistent.json")) is False

    def test_expired_file_not_fresh(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        past = datetime.now(UTC) - timedelta(hours=1)
        store.write(Path("live/test.json"), {}, source="test", valid_until=past)
        assert store.is_fresh(Path("live/test.json")) is False

    def test_future_valid_until_is_fresh(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        future = datetime.now(UTC) + timedelta(hours=6)
        store.write(Path("live/test.json"), {}, source="test", valid_until=future)
        assert store.is_fresh(Path("live/test.json")) is True

    def test_explicit_now(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("live/test.json"), {}, source="test", valid_until=NOW)
        assert store.is_fresh(Path("live/test.json"), now=NOW - timedelta(seconds=1))
        assert not store.is_fresh(Path("live/test.json"), now=NOW)

    def test_no_valid_until_not_fresh(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(Path("live/test.json"), {}, source="test")
        assert store.is_fresh(Path("live/test.json")) is False


# =============================================================================
# Prediction cache
# =============================================================================


class TestBucketKey:
    def test_hour_granularity(self) -> None:
        assert bucket_key(datetime(2026, 10, 18, 14, 59, tzinfo=UTC)) == "2026-10-18T14"

    def test_converted_to_utc(self) -> None:
        eastern = datetime(2026, 10, 18, 10, 0, tzinfo=UTC).astimezone(ZoneInfo("America/New_York"))
        assert bucket_key(eastern) == "2026-10-18T10"

    def test_naive_treated_as_utc(self) -> None:
        assert bucket_key(datetime(2026, 10, 18, 3)) == "2026-10-18T03"


class TestPredictionCache:
    """Hour-bucketed, TTL-bounded, lock-guarded cache."""

    def test_empty(self, clock: FakeClock) -> None:
        assert PredictionCache(clock=clock).get() is None

    def test_put_then_get(self, clock: FakeClock) -> None:
        cache = PredictionCache(clock=clock)
        cache.put([make_item()])
        items = cache.get()
        assert items is not None
        assert items[0].id == "brandywine_georgia"

    def test_expires_after_ttl(self, clock: FakeClock) -> None:
        cache = PredictionCache(clock=clock)
        cache.put([make_item()])
        clock.now = NOW + timedelta(minutes=29)
        assert cache.get() is not None
        clock.now = NOW + timedelta(minutes=30)
        assert cache.get() is None

    def test_expires_on_hour_change(self, clock: FakeClock) -> None:
        clock.now = NOW.replace(minute=55)
        cache = PredictionCache(clock=clock)
        cache.put([make_item()])
        clock.now = NOW.replace(hour=16, minute=1)
        assert cache.get() is None

    def test_clear(self, clock: FakeClock) -> None:
        cache = PredictionCache(clock=clock)
        cache.put([make_item()])
        cache.clear()
        assert cache.get() is None

    def test_get_or_compute_miss_then_hit(self, clock: FakeClock) -> None:
        cache = PredictionCache(clock=clock)
        calls: list[int] = []

        def compute() -> list[DiscoveryItem]:
            calls.append(1)
            return [make_item()]

        first = cache.get_or_compute(compute)
        second = cache.get_or_compute(compute)
        assert (first.hit, second.hit) == (False, True)
        assert second.computed_at == NOW
        assert len(calls) == 1

    def test_failed_compute_not_cached(self, clock: FakeClock) -> None:
        cache = PredictionCache(clock=clock)

        def boom() -> list[DiscoveryItem]:
            raise RuntimeError("upstream down")

        with pytest.raises(RuntimeError):
            cache.get_or_compute(boom)
        assert cache.get() is None
        assert cache.get_or_compute(lambda: [make_item()]).hit is False

    def test_concurrent_first_requests_compute_once(self, clock: FakeClock) -> None:
        cache = PredictionCache(clock=clock)
        calls: list[int] = []
        results: list[bool] = []
        lock = threading.Lock()

        def slow() -> list[DiscoveryItem]:
            calls.append(1)
            time.sleep(0.05)
            return [make_item()]

        def worker() -> None:
            lookup = cache.get_or_compute(slow)
            with lock:
                results.append(lookup.hit)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert sorted(results) == [False] + [True] * 7


class TestPredictionSnapshot:
    """Persisted prediction sets survive a process restart."""

    def test_put_writes_snapshot(self, tmp_path: Path, clock: FakeClock) -> None:
        store = DataStore(tmp_path)
        PredictionCache(clock=clock, store=store).put([make_item()])

        envelope = store.read_raw(PREDICTIONS_PATH)
        assert envelope is not None
        assert envelope["meta"]["bucket"] == "2026-12-15T15"
        assert envelope["meta"]["count"] == 1
        assert envelope["data"][0]["offering_id"] == "brandywine_georgia"

    def test_cold_cache_loads_fresh_snapshot(self, tmp_path: Path, clock: FakeClock) -> None:
        store = DataStore(tmp_path)
        write_snapshot(store, [make_item()], NOW)

        cache = PredictionCache(clock=clock, store=store)
        lookup = cache.get_or_compute(lambda: pytest.fail("should not recompute"))
        assert lookup.hit
        assert lookup.items == [make_item()]

    def test_stale_snapshot_ignored(self, tmp_path: Path, clock: FakeClock) -> None:
        store = DataStore(tmp_path)
        write_snapshot(store, [make_item()], NOW - timedelta(hours=2))
        assert PredictionCache(clock=clock, store=store).get() is None

    def test_unreadable_snapshot_ignored(self, tmp_path: Path, clock: FakeClock) -> None:
        store = DataStore(tmp_path)
        store.write(
            PREDICTIONS_PATH,
            [{"id": "broken"}],
            source="test",
            valid_until=NOW + timedelta(minutes=10),
            computed_at=NOW.isoformat(),
            bucket=bucket_key(NOW),
        )
        assert PredictionCache(clock=clock, store=store).get() is None
