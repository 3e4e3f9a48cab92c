"""Output writers — CSV and JSON."""

import csv
import json
import os

from ein_chart.config import DATE_COLUMN, ESTIMATE_COLUMN, HIGH_COLUMN, LOW_COLUMN
from ein_chart.models import ObservationRecord


# ── CSV ──────────────────────────────────────────────────────────────────────

def write_csv(series: list[ObservationRecord], labels: list[str], path: str) -> str:
    """Write the normalised series, one row per day, with its axis label."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fieldnames = [DATE_COLUMN, ESTIMATE_COLUMN, LOW_COLUMN, HIGH_COLUMN, "Label"]
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for record, label in zip(series, labels):
            writer.writerow({
                DATE_COLUMN: record.date.isoformat(),
                ESTIMATE_COLUMN: record.estimate,
                LOW_COLUMN: record.low,
                HIGH_COLUMN: record.high,
                "Label": label,
            })
    return path


# ── JSON ─────────────────────────────────────────────────────────────────────

def write_json(data, path: str) -> str:
    """Write any JSON-serialisable *data* to a file. Returns the path."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2, default=str)
    return path
