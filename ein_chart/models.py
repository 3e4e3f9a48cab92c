"""Typed records shared by the normalizer, scale calculator and tooltip."""

import datetime
from dataclasses import dataclass
from enum import Enum

from ein_chart.config import ESTIMATE_COLUMN, HIGH_COLUMN, LOW_COLUMN


class Band(str, Enum):
    """One of the three rendered series."""

    ESTIMATE = "Estimate"
    LOW = "LowBound"
    HIGH = "HighBound"

    @property
    def dataset_label(self) -> str:
        """Legend / dataset label shown to viewers."""
        return _BAND_TITLES[self]

    @classmethod
    def lookup(cls, name) -> "Band | None":
        """
        Resolve *name* to a band.

        Accepts a ``Band``, its value (``"LowBound"``) or its dataset title
        (``"5th Percentile"``).  Returns ``None`` for anything else.
        """
        if isinstance(name, Band):
            return name
        for band in cls:
            if name == band.value or name == band.dataset_label:
                return band
        return None


_BAND_TITLES = {
    Band.ESTIMATE: ESTIMATE_COLUMN,
    Band.LOW: LOW_COLUMN,
    Band.HIGH: HIGH_COLUMN,
}


@dataclass(frozen=True, slots=True)
class ObservationRecord:
    date: datetime.date
    estimate: float
    low: float
    high: float

    @property
    def peak(self) -> float:
        return max(self.estimate, self.low, self.high)

    def as_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "estimate": self.estimate,
            "fifthPercentile": self.low,
            "ninetyFifthPercentile": self.high,
        }


@dataclass(frozen=True, slots=True)
class AxisScale:
    max: float
    step: int

    def as_dict(self) -> dict:
        return {"max": self.max, "step": self.step}


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class ChartElement:
    """
    A rendered point active under the cursor.

    *series* is whatever the renderer reports for the owning dataset; it is
    resolved with ``Band.lookup``.  *x* / *y* are ``None`` until the renderer
    has laid the point out.
    """

    series: object
    x: float | None
    y: float | None
