import datetime

import pytest

from ein_chart.csv_parser import parse
from ein_chart.models import ObservationRecord
from ein_chart.normalizer import (
    build_labels,
    deduplicate,
    normalize,
    parse_date,
    parse_number,
    to_rows,
    window_floor,
)
from ein_chart.sample import SAMPLE_CSV


def _row(date, estimate="1", low="0", high="2"):
    return {"Date": date, "Estimate": estimate, "5th Percentile": low, "95th Percentile": high}


def test_two_month_example(csv_text):
    series, labels = normalize(parse(csv_text("1/15/2024,45,28,65", "2/15/2024,48,32,68")))
    assert series == [
        ObservationRecord(datetime.date(2024, 1, 15), 45.0, 28.0, 65.0),
        ObservationRecord(datetime.date(2024, 2, 15), 48.0, 32.0, 68.0),
    ]
    assert labels == ["JAN", "FEB"]


def test_sample_keeps_last_three_months():
    series, labels = normalize(parse(SAMPLE_CSV))
    assert [r.date for r in series] == [
        datetime.date(2025, 1, 15),
        datetime.date(2025, 2, 15),
        datetime.date(2025, 3, 15),
    ]
    assert labels == ["JAN", "FEB", "MAR"]


@pytest.mark.parametrize(
    "latest, floor",
    [
        (datetime.date(2024, 2, 15), datetime.date(2023, 12, 1)),
        (datetime.date(2024, 3, 31), datetime.date(2024, 1, 1)),
        (datetime.date(2024, 4, 30), datetime.date(2024, 2, 1)),
        (datetime.date(2024, 1, 1), datetime.date(2023, 11, 1)),
    ],
)
def test_window_floor(latest, floor):
    assert window_floor(latest) == floor


def test_records_before_window_are_dropped():
    rows = [_row("11/30/2023"), _row("12/1/2023"), _row("2/15/2024")]
    series, labels = normalize(rows)
    assert [r.date for r in series] == [datetime.date(2023, 12, 1), datetime.date(2024, 2, 15)]
    assert labels == ["DEC", "FEB"]


def test_output_is_sorted():
    rows = [_row("2/3/2024"), _row("1/20/2024"), _row("2/1/2024")]
    series, _ = normalize(rows)
    assert [r.date.day for r in series] == [20, 1, 3]


def test_same_day_keeps_first_seen():
    rows = [_row("2/1/2024", "10"), _row("1/31/2024", "5"), _row("2/1/2024", "99")]
    series, _ = normalize(rows)
    assert [(r.date.day, r.estimate) for r in series] == [(31, 5.0), (1, 10.0)]


def test_textual_dates_are_accepted():
    rows = [_row("January 15, 2024"), _row("2024-02-15"), _row("15 Feb 2024")]
    series, _ = normalize(rows)
    assert [r.date for r in series] == [datetime.date(2024, 1, 15), datetime.date(2024, 2, 15)]


def test_unparsable_dates_are_dropped():
    rows = [_row("not a date"), _row("2/15/2024")]
    series, labels = normalize(rows)
    assert [r.date for r in series] == [datetime.date(2024, 2, 15)]
    assert labels == ["FEB"]


def test_all_invalid_dates_give_empty_result():
    assert normalize([_row("soon"), _row("??")]) == ([], [])


def test_empty_input():
    assert normalize([]) == ([], [])


def test_rows_missing_date_or_estimate_are_ignored():
    rows = [_row(""), _row("2/15/2024", estimate=""), _row("2/16/2024")]
    series, _ = normalize(rows)
    assert [r.date.day for r in series] == [16]


def test_bad_numbers_default_to_zero():
    series, _ = normalize([_row("2/15/2024", estimate="n/a", low="", high="abc")])
    assert (series[0].estimate, series[0].low, series[0].high) == (0.0, 0.0, 0.0)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("45", 45.0),
        ("45.5", 45.5),
        (" 7 ", 7.0),
        ("45 days", 45.0),
        ("5,000", 5.0),
        (".5", 0.5),
        ("1e2", 100.0),
        ("-3", -3.0),
        ("abc", 0.0),
        ("", 0.0),
        (None, 0.0),
        ("1e999", 0.0),
    ],
)
def test_parse_number(text, expected):
    assert parse_number(text) == expected


def test_ambiguous_dates_read_month_first():
    assert parse_date("3/4/2024") == datetime.date(2024, 3, 4)


def test_parse_date_rejects_garbage():
    assert parse_date("whenever") is None


def test_labels_repeat_month_in_new_year():
    series = [
        ObservationRecord(datetime.date(2023, 12, 1), 1, 1, 1),
        ObservationRecord(datetime.date(2023, 12, 20), 1, 1, 1),
        ObservationRecord(datetime.date(2024, 1, 3), 1, 1, 1),
        ObservationRecord(datetime.date(2024, 1, 4), 1, 1, 1),
        ObservationRecord(datetime.date(2024, 2, 1), 1, 1, 1),
    ]
    assert build_labels(series) == ["DEC", "", "JAN", "", "FEB"]


def test_deduplicate_preserves_order():
    a = ObservationRecord(datetime.date(2024, 1, 1), 1, 1, 1)
    b = ObservationRecord(datetime.date(2024, 1, 1), 2, 2, 2)
    c = ObservationRecord(datetime.date(2024, 1, 2), 3, 3, 3)
    assert deduplicate([a, b, c]) == [a, c]


def test_series_is_strictly_increasing_with_one_label_per_month():
    rows = [_row(f"{m}/{d}/2024") for m in (3, 1, 2) for d in (28, 1, 15, 1)]
    series, labels = normalize(rows)
    dates = [r.date for r in series]
    assert all(a < b for a, b in zip(dates, dates[1:]))
    assert len(labels) == len(series)
    months = {(d.month, d.year) for d in dates}
    assert len([label for label in labels if label]) == len(months)


def test_normalize_is_idempotent():
    rows = [_row("2/15/2024", "48.5", "32", "68.25"), _row("1/15/2024", "45"), _row("1/15/2024", "9")]
    series, labels = normalize(rows)
    again, again_labels = normalize(to_rows(series))
    assert again == series
    assert again_labels == labels
