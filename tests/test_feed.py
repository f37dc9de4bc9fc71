import logging
import time

import numpy as np
import pytest

from geotrack.errors import NoValidData
from geotrack.feed import RealtimeFeed, synthesize_point
from geotrack.models import Point
from geotrack.pipeline import GeotrackAnalyzer

BASE = Point(id="base", lat=51.1, lng=71.4, alt=350.0, speed=30.0, heading=10.0)


def _loaded_analyzer():
    analyzer = GeotrackAnalyzer()
    analyzer.process([BASE])
    return analyzer


def test_synthesized_point_stays_within_jitter():
    rng = np.random.default_rng(0)
    for _ in range(200):
        point = synthesize_point(BASE, rng)
        assert abs(point.lat - BASE.lat) <= 0.0005
        assert abs(point.lng - BASE.lng) <= 0.0005
        assert abs(point.alt - BASE.alt) <= 5.0
        assert 10.0 <= point.speed < 60.0
        assert 0.0 <= point.heading < 360.0
        assert point.id.startswith("rt_")


def test_seeded_feed_is_reproducible():
    first = synthesize_point(BASE, np.random.default_rng(5))
    second = synthesize_point(BASE, np.random.default_rng(5))
    assert (first.lat, first.lng, first.speed) == (second.lat, second.lng, second.speed)


def test_tick_appends_to_analyzer():
    analyzer = _loaded_analyzer()
    feed = RealtimeFeed(analyzer, seed=1)
    snapshot = feed.tick()
    assert snapshot.version == 2
    assert len(snapshot.cleaned) == 2
    assert snapshot.cleaned[-1].id.startswith("rt_")


def test_tick_without_data_raises():
    with pytest.raises(NoValidData):
        RealtimeFeed(GeotrackAnalyzer(), seed=1).tick()


def test_background_feed_publishes_snapshots():
    analyzer = _loaded_analyzer()
    feed = RealtimeFeed(analyzer, interval_sec=0.01, seed=2)
    feed.start()
    try:
        deadline = time.monotonic() + 5.0
        while analyzer.snapshot.version < 3 and time.monotonic() < deadline:
            time.sleep(0.01)
    finally:
        feed.stop(timeout=5.0)
    assert analyzer.snapshot.version >= 3
    assert not feed.running


class _FailingAnalyzer(GeotrackAnalyzer):
    def append_point(self, point):
        raise RuntimeError("boom")


def test_feed_logs_unexpected_tick_errors(caplog):
    analyzer = _FailingAnalyzer()
    analyzer.process([BASE])
    feed = RealtimeFeed(analyzer, interval_sec=0.01, seed=3)
    with caplog.at_level(logging.ERROR, logger="RealtimeFeed"):
        feed.start()
        deadline = time.monotonic() + 5.0
        while feed.running and time.monotonic() < deadline:
            time.sleep(0.01)
        feed.stop(timeout=5.0)
    assert not feed.running
    assert any("tick failed" in r.getMessage() and r.exc_info for r in caplog.records)
