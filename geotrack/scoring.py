"""Safety score from anomaly counts."""

from __future__ import annotations

from .metrics import round_half_up


def safety_score(anomaly_count: int, total_count: int) -> int:
    """Percentage of non-anomalous points, clamped at 0 and rounded half up."""

    if total_count <= 0:
        raise ValueError("total_count must be positive")
    raw = 100.0 - (anomaly_count / total_count * 100.0)
    if raw <= 0:
        return 0
    return round_half_up(raw)
