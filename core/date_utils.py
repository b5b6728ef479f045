"""
Утилиты работы с датами: сдвиг на месяцы, границы месяцев,
форматирование на индонезийском.
"""

import calendar
from datetime import date, datetime, time
from typing import Iterator, Optional, TypeVar, Union

DateLike = TypeVar("DateLike", date, datetime)

MONTHS_ID = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]

MONTHS_ID_SHORT = [
    "Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
    "Jul", "Agu", "Sep", "Okt", "Nov", "Des",
]

WEEKDAYS_ID = ["Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu"]


def add_months(value: DateLike, months: int) -> DateLike:
    """
    Сдвиг даты на число месяцев (отрицательное число сдвигает назад).

    День ограничивается последним днем целевого месяца: 31.08 + 6 мес. = 28/29.02.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def month_start(value: DateLike) -> datetime:
    return datetime.combine(date(value.year, value.month, 1), time.min)


def month_end(value: DateLike) -> datetime:
    last_day = calendar.monthrange(value.year, value.month)[1]
    return datetime.combine(date(value.year, value.month, last_day), time.max)


def iter_months(start: DateLike, end: DateLike) -> Iterator[date]:
    """Первые числа всех календарных месяцев от start до end включительно"""
    current = date(start.year, start.month, 1)
    last = date(end.year, end.month, 1)
    while current <= last:
        yield current
        current = add_months(current, 1)


def parse_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """Дата из строки ISO (или объекта date/datetime); None для пустых и некорректных значений"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def format_date_id(value: Optional[Union[date, datetime]], with_weekday: bool = False) -> str:
    """17 Oktober 2026 (или Sabtu, 17 Oktober 2026)"""
    if value is None:
        return "-"
    text = f"{value.day} {MONTHS_ID[value.month - 1]} {value.year}"
    if with_weekday:
        text = f"{WEEKDAYS_ID[value.weekday()]}, {text}"
    return text


def format_month_short(value: Union[date, datetime]) -> str:
    """Okt 26"""
    return f"{MONTHS_ID_SHORT[value.month - 1]} {value.strftime('%y')}"

