from __future__ import annotations

from datetime import date

from diary_dashboard.preprocess.time import (
    format_day_month,
    format_long,
    format_short,
    format_week_label,
    month_key,
    month_label,
    parse_source_date,
    week_start,
)


def test_parse_source_date_accepts_iso_and_rejects_garbage() -> None:
    assert parse_source_date("1849-03-01") == date(1849, 3, 1)
    assert parse_source_date(" 1849-03-01T10:30:00 ") == date(1849, 3, 1)
    assert parse_source_date(date(1849, 3, 1)) == date(1849, 3, 1)
    assert parse_source_date("") is None
    assert parse_source_date("вчера") is None
    assert parse_source_date(None) is None
    assert parse_source_date({"year": 1849}) is None


def test_week_start_is_monday_and_sunday_belongs_to_previous_monday() -> None:
    assert week_start(date(1849, 1, 1)) == date(1849, 1, 1)
    assert week_start(date(1849, 3, 1)) == date(1849, 2, 26)
    assert week_start(date(1849, 3, 4)) == date(1849, 2, 26)
    assert week_start(date(1849, 3, 5)) == date(1849, 3, 5)


def test_month_helpers() -> None:
    assert month_key(date(1849, 3, 1)) == "1849-03"
    assert month_label("1849-03") == "Март 1849"
    assert month_label("1849-13") == "1849-13"


def test_russian_date_formats() -> None:
    day = date(1849, 3, 1)
    assert format_short(day) == "01.03.1849"
    assert format_long(day) == "1 марта 1849 г."
    assert format_day_month(day) == "1 мар."
    assert format_week_label(date(1849, 2, 26)) == "26.02–04.03"
