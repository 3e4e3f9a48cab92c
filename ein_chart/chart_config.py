"""Stage 4 — Build the renderer-facing chart data and options."""

import math

from ein_chart.config import (
    AXIS_FONT,
    BAND_STYLES,
    ESTIMATE_COLUMN,
    HIGH_COLUMN,
    HOVER_STYLE,
    LEGEND_FONT,
    LOW_COLUMN,
    TOOLTIP_DEFAULT_BODY,
    TOOLTIP_DEFAULT_TITLE,
    TOOLTIP_FONT,
)
from ein_chart.csv_parser import parse
from ein_chart.models import AxisScale, ObservationRecord
from ein_chart.normalizer import normalize
from ein_chart.scale import compute_scale, tick_label, y_tick_labels
from ein_chart.tooltip import select_anchor

# Legend / draw order of the datasets.
DATASET_ORDER = (LOW_COLUMN, HIGH_COLUMN, ESTIMATE_COLUMN)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _values(series: list[ObservationRecord], title: str) -> list[float]:
    if title == ESTIMATE_COLUMN:
        return [r.estimate for r in series]
    if title == LOW_COLUMN:
        return [r.low for r in series]
    return [r.high for r in series]


# ── Data ─────────────────────────────────────────────────────────────────────

def build_chart_data(series: list[ObservationRecord], labels: list[str]) -> dict:
    """
    Return ``{"labels": [...], "datasets": [...], "rawData": [...]}``.

    The 95th percentile dataset fills down to the 5th, drawing the band
    between them; the estimate line is drawn on top.
    """
    datasets = []
    for title in DATASET_ORDER:
        dataset = {"label": title, "data": _values(series, title)}
        dataset.update(BAND_STYLES[title])
        dataset.update(HOVER_STYLE)
        datasets.append(dataset)
    return {
        "labels": list(labels),
        "datasets": datasets,
        "rawData": [r.as_dict() for r in series],
    }


# ── Tooltip text ─────────────────────────────────────────────────────────────

def tooltip_title(series: list[ObservationRecord], index: int) -> str:
    """Long-form date of the hovered record, e.g. ``January 15, 2024``."""
    if not 0 <= index < len(series):
        return TOOLTIP_DEFAULT_TITLE
    day = series[index].date
    return f"{day:%B} {day.day}, {day.year}"


def tooltip_body(series: list[ObservationRecord], index: int) -> list[str]:
    if not 0 <= index < len(series):
        return [TOOLTIP_DEFAULT_BODY]
    record = series[index]
    low = _round_half_up(record.low)
    high = _round_half_up(record.high)
    estimate = _round_half_up(record.estimate)
    return [
        f"Most people receive their EIN in {low}-{high}",
        f"days, with the average being {estimate} days.",
    ]


# ── Options ──────────────────────────────────────────────────────────────────

def build_chart_options(
    scale: AxisScale,
    series: list[ObservationRecord],
    labels: list[str],
    anchor=select_anchor,
) -> dict:
    """
    Renderer options for *scale*.

    Callbacks are plain callables bound to this series; *anchor* is passed
    straight through as the tooltip ``position`` rather than registered
    globally with the renderer.
    """
    titles = set(DATASET_ORDER)

    def x_tick(index: int) -> str:
        if 0 <= index < len(labels):
            return labels[index] or ""
        return ""

    return {
        "responsive": True,
        "maintainAspectRatio": False,
        "plugins": {
            "legend": {
                "display": True,
                "position": "top",
                "labels": {
                    "color": "#666666",
                    "font": LEGEND_FONT,
                    "filter": lambda text: text in titles,
                    "usePointStyle": True,
                    "padding": 20,
                },
            },
            "tooltip": {
                "mode": "index",
                "intersect": False,
                "position": anchor,
                "backgroundColor": "rgba(255, 255, 255, 1.0)",
                "titleColor": "#000000",
                "bodyColor": "#000000",
                "borderColor": "rgba(211, 210, 210, 0.8)",
                "borderWidth": 1,
                "displayColors": True,
                "xAlign": "center",
                "yAlign": "bottom",
                "padding": 12,
                "font": TOOLTIP_FONT,
                "titleMarginBottom": 2,
                "callbacks": {
                    "title": lambda index: tooltip_title(series, index),
                    "afterBody": lambda index: tooltip_body(series, index),
                },
            },
        },
        "scales": {
            "x": {
                "display": True,
                "grid": {"display": False},
                "ticks": {
                    "color": "#666666",
                    "font": AXIS_FONT,
                    "maxRotation": 0,
                    "minRotation": 0,
                    "autoSkip": False,
                    "callback": x_tick,
                },
            },
            "y": {
                "display": True,
                "beginAtZero": True,
                "max": scale.max,
                "grid": {"display": False, "color": "rgba(0, 0, 0, 0.1)"},
                "ticks": {
                    "color": "#999999",
                    "font": AXIS_FONT,
                    "stepSize": scale.step,
                    "callback": lambda value: tick_label(value, scale),
                },
            },
        },
        "interaction": {"intersect": False, "mode": "index"},
        "elements": {
            "point": {"radius": 0, "hoverRadius": 6},
            "line": {"tension": 0.0},
        },
    }


# ── End-to-end ───────────────────────────────────────────────────────────────

def build_payload(text: str) -> dict:
    """
    parse → normalise → scale → chart data, as a JSON-serialisable dict.

    Raises ``ParseError`` for text without a header and data line.
    """
    series, labels = normalize(parse(text))
    scale = compute_scale(series)
    payload = build_chart_data(series, labels)
    payload["scale"] = scale.as_dict()
    payload["yTicks"] = y_tick_labels(scale)
    return payload
