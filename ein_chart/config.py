"""Configuration for EIN processing-time chart data."""

import os

# Google Sheets CSV export
SHEET_ID = os.environ.get("EIN_CHART_SHEET_ID", "")
GID = int(os.environ.get("EIN_CHART_GID", "0"))
EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv&gid={gid}"

# Tried in order after the direct export URL fails.
CORS_PROXIES = [
    "https://api.allorigins.win/raw?url=",
    "https://corsproxy.io/?",
    "https://cors-anywhere.herokuapp.com/",
]

USER_AGENT = os.environ.get(
    "EIN_CHART_USER_AGENT",
    "EinChart/1.0 (contact@example.com)",
)

# Retry / backoff
REQUEST_TIMEOUT = float(os.environ.get("EIN_CHART_TIMEOUT", "15"))
MAX_RETRIES = 2
BACKOFF_BASE = 1  # seconds; doubles each retry

# CSV columns
DATE_COLUMN = "Date"
ESTIMATE_COLUMN = "Estimate"
LOW_COLUMN = "5th Percentile"
HIGH_COLUMN = "95th Percentile"

MONTH_NAMES = [
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
]

# Records older than (latest - WINDOW_MONTHS), floored to the 1st, are dropped.
WINDOW_MONTHS = 2

# Axis: aim for roughly this many gridlines.
TARGET_GRIDLINES = 5
TOP_TICK_LABEL = "Days"

# Tooltip anchor bias in pixels
ANCHOR_X_OFFSET = 0
ANCHOR_Y_OFFSET = -10

TOOLTIP_DEFAULT_TITLE = "EIN Processing Time"
TOOLTIP_DEFAULT_BODY = "Range shows typical processing time variation"

# ── Chart styles ─────────────────────────────────────────────────────────────

HOVER_STYLE = {
    "pointHoverBackgroundColor": "#BEE4F7",
    "pointHoverBorderColor": "#5FB9E6",
    "pointHoverBorderWidth": 1,
}

BAND_STYLES = {
    LOW_COLUMN: {
        "borderColor": "rgba(190, 228, 247, 0.8)",
        "backgroundColor": "rgba(237, 249, 255, 0.3)",
        "borderWidth": 1,
        "fill": False,
        "tension": 0.5,
        "pointRadius": 0,
        "pointHoverRadius": 0,
        "order": 3,
    },
    HIGH_COLUMN: {
        "borderColor": "rgba(190, 228, 247, 0.8)",
        "backgroundColor": "rgba(237, 249, 255, 0.4)",
        "borderWidth": 1,
        "fill": "-1",  # down to the 5th percentile line
        "tension": 0.5,
        "pointRadius": 0,
        "pointHoverRadius": 0,
        "order": 2,
    },
    ESTIMATE_COLUMN: {
        "borderColor": "#4A90E2",
        "backgroundColor": "#008FD5",
        "borderWidth": 1.3,
        "fill": False,
        "tension": 0.5,
        "opacity": 0.75,
        "pointBackgroundColor": "#008FD5",
        "pointBorderColor": "#008FD5",
        "pointRadius": 0,
        "pointHoverRadius": 6,
        "order": 1,
    },
}

AXIS_FONT = {"size": 12, "family": "Roboto Mono"}
LEGEND_FONT = {"size": 12, "family": "Arial, sans-serif"}
TOOLTIP_FONT = {"size": 12, "family": "Graphik"}
