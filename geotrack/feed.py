"""Synthetic real-time point feed.

Every interval a new point is derived from the last cleaned point by jittering
its position and altitude and drawing a fresh speed and heading. The point is
appended to the analyzer, which re-runs the whole pipeline.
"""

from __future__ import annotations

import threading
import time
from typing import Optional

import numpy as np

from .base import PipelineComponent
from .config import AnalyzerConfig
from .errors import NoValidData
from .models import AnalysisSnapshot, Point
from .pipeline import GeotrackAnalyzer


def synthesize_point(last: Point, rng: np.random.Generator, config: AnalyzerConfig | None = None) -> Point:
    """Derive a new point near ``last``; speed is drawn directly in km/h."""

    config = config or AnalyzerConfig()
    lat_offset, lng_offset, alt_offset = rng.random(3) - 0.5
    return Point(
        id=f"rt_{int(time.time() * 1000)}",
        lat=last.lat + lat_offset * config.position_jitter_deg,
        lng=last.lng + lng_offset * config.position_jitter_deg,
        alt=last.alt + alt_offset * config.altitude_jitter_m,
        speed=float(rng.uniform(config.feed_min_speed_kmh, config.feed_max_speed_kmh)),
        heading=float(rng.uniform(0.0, 360.0)),
    )


class RealtimeFeed(PipelineComponent):
    """Append a synthetic point to an analyzer on a fixed interval."""

    def __init__(
        self,
        analyzer: GeotrackAnalyzer,
        interval_sec: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(analyzer.config)
        self.analyzer = analyzer
        self.interval_sec = float(interval_sec if interval_sec is not None else self.config.feed_interval_sec)
        self.rng = np.random.default_rng(seed)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def tick(self) -> AnalysisSnapshot:
        """Generate one point from the latest snapshot and append it."""

        snapshot = self.analyzer.snapshot
        if snapshot is None or not snapshot.cleaned:
            raise NoValidData("Real-time feed needs a loaded dataset to extend.")
        point = synthesize_point(snapshot.cleaned[-1], self.rng, self.config)
        return self.analyzer.append_point(point)

    def _run(self) -> None:
        while not self._stop.wait(self.interval_sec):
            try:
                self.tick()
            except NoValidData as exc:
                self.logger.warning("Stopping real-time feed: %s", exc)
                return
            except Exception:
                self.logger.exception("Real-time feed tick failed; stopping feed")
                return

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="realtime-feed", daemon=True)
        self._thread.start()
        self.logger.info("Real-time feed started (interval=%.1fs)", self.interval_sec)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        self.logger.info("Real-time feed stopped")
