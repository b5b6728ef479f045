"""
Форматирование сумм, номеров и дат для документов
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from core.date_utils import format_date_id

LETTER_ORG_CODE = "UHT"


def format_rupiah(amount: Union[int, float, Decimal, None]) -> str:
    """Сумма в рупиях без дробной части: 1234567 -> 'Rp 1.234.567'"""
    if amount is None:
        return "-"
    value = int(Decimal(str(amount)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    digits = f"{abs(value):,}".replace(",", ".")
    sign = "-" if value < 0 else ""
    return f"{sign}Rp {digits}"


def letter_number(prefix: str, sequence: int, when: date) -> str:
    """Номер письма: '007/PASPOR/UHT/10/2026'"""
    return f"{sequence:03d}/{prefix}/{LETTER_ORG_CODE}/{when.month:02d}/{when.year}"


def display(value: Optional[object]) -> str:
    """Пустые значения печатаются прочерком"""
    if value is None:
        return "-"
    if isinstance(value, date):
        return format_date_id(value)
    text = str(value).strip()
    return text or "-"
