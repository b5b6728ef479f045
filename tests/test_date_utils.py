"""
Тесты утилит дат
"""

from datetime import date, datetime

from core.date_utils import (
    add_months, format_date_id, format_month_short, iter_months, month_end, month_start, parse_date
)


def test_add_months_clamps_day():
    assert add_months(date(2026, 8, 31), 6) == date(2027, 2, 28)
    assert add_months(date(2027, 8, 31), 6) == date(2028, 2, 29)
    assert add_months(datetime(2026, 10, 17, 10, 30), -12) == datetime(2025, 10, 17, 10, 30)
    assert add_months(date(2026, 1, 15), -1) == date(2025, 12, 15)


def test_month_boundaries():
    assert month_start(date(2026, 2, 14)) == datetime(2026, 2, 1)
    end = month_end(date(2026, 2, 14))
    assert end.date() == date(2026, 2, 28)
    assert end.hour == 23 and end.minute == 59


def test_iter_months():
    months = list(iter_months(datetime(2026, 11, 20), datetime(2027, 2, 1)))
    assert months == [date(2026, 11, 1), date(2026, 12, 1), date(2027, 1, 1), date(2027, 2, 1)]


def test_parse_date():
    assert parse_date("2027-05-01") == date(2027, 5, 1)
    assert parse_date("2027-05-01T00:00:00Z") == date(2027, 5, 1)
    assert parse_date(datetime(2027, 5, 1, 8, 0)) == date(2027, 5, 1)
    assert parse_date("bukan tanggal") is None
    assert parse_date("") is None
    assert parse_date(None) is None


def test_indonesian_formatting():
    assert format_date_id(date(2026, 10, 17)) == "17 Oktober 2026"
    assert format_date_id(date(2026, 10, 17), with_weekday=True) == "Sabtu, 17 Oktober 2026"
    assert format_date_id(None) == "-"
    assert format_month_short(date(2026, 8, 1)) == "Agu 26"
