"""Stage 3 — Derive the y-axis maximum and tick step from a series."""

import math

from ein_chart.config import TARGET_GRIDLINES, TOP_TICK_LABEL
from ein_chart.models import AxisScale, ObservationRecord


def compute_scale(series: list[ObservationRecord]) -> AxisScale:
    """
    Return an ``AxisScale`` covering every estimate and bound in *series*.

    ``step = ceil(ceil(peak) / 5 + 1)`` is always at least 1, and ``max`` is
    the smallest multiple of ``step`` at or above the peak.  An empty series
    gives ``AxisScale(max=0, step=1)``.
    """
    peak = max((r.peak for r in series), default=0.0)
    peak = max(peak, 0.0)
    step = max(1, math.ceil(math.ceil(peak) / TARGET_GRIDLINES + 1))
    return AxisScale(max=math.ceil(peak / step) * step, step=step)


def y_tick_labels(scale: AxisScale) -> list[str]:
    """Tick labels from 0 to ``scale.max``; the top tick reads ``Days``."""
    labels: list[str] = []
    for value in range(0, int(scale.max) + 1, scale.step):
        labels.append(tick_label(value, scale))
    return labels


def tick_label(value, scale: AxisScale) -> str:
    if value is None:
        return str(value)
    if value >= scale.max:
        return TOP_TICK_LABEL
    return str(value)
