"""Pick the pixel position a hover tooltip is anchored to."""

from ein_chart.config import ANCHOR_X_OFFSET, ANCHOR_Y_OFFSET
from ein_chart.models import Band, ChartElement, Point


def _biased(x: float, y: float) -> Point:
    return Point(x + ANCHOR_X_OFFSET, y + ANCHOR_Y_OFFSET)


def _laid_out(el: ChartElement) -> bool:
    return el.x is not None and el.y is not None


def select_anchor(elements: list[ChartElement], cursor: Point) -> Point:
    """
    Anchor for the elements active under *cursor*.

    Bands can be hidden independently, so the tooltip follows whichever
    line is showing:

    1. nothing active: the cursor itself;
    2. the Estimate point, once it has been laid out;
    3. the 5th/95th percentile points: midway between the first two, or
       on the only one;
    4. otherwise the centroid of all active elements.

    Elements without both coordinates are ignored from step 3 on; if none
    are left the cursor is used.  Every result is shifted by
    ``(ANCHOR_X_OFFSET, ANCHOR_Y_OFFSET)``.
    """
    if not elements:
        return _biased(cursor.x, cursor.y)

    estimate = next(
        (el for el in elements if Band.lookup(el.series) is Band.ESTIMATE), None
    )
    if estimate is not None and _laid_out(estimate):
        return _biased(estimate.x, estimate.y)

    placed = [el for el in elements if _laid_out(el)]
    bounds = [el for el in placed if Band.lookup(el.series) in (Band.LOW, Band.HIGH)]
    if len(bounds) >= 2:
        first, second = bounds[0], bounds[1]
        return _biased(first.x, (first.y + second.y) / 2)
    if len(bounds) == 1:
        return _biased(bounds[0].x, bounds[0].y)

    if not placed:
        return _biased(cursor.x, cursor.y)
    x = sum(el.x for el in placed) / len(placed)
    y = sum(el.y for el in placed) / len(placed)
    return _biased(x, y)
