"""
Проверка срока действия паспорта клиента.

Паспорт должен действовать не менее 6 месяцев после даты каждого
предстоящего отправления клиента.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Sequence, Union

from loguru import logger

from core.date_utils import add_months, format_date_id, parse_date
from modules.customers.models import UpcomingDeparture

MIN_VALIDITY_MONTHS = 6


class PassportCheckSeverity(Enum):
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"


@dataclass
class PassportViolation:
    """Отправление, для которого паспорт действует меньше 6 месяцев"""
    departure_date: date
    package_name: str
    min_valid_date: date
    shortfall_days: int


@dataclass
class PassportCheckResult:
    severity: PassportCheckSeverity
    message: str
    violation: Optional[PassportViolation] = None
    other_affected: int = 0
    violations: List[PassportViolation] = field(default_factory=list)


def check_passport_validity(
    passport_expiry: Union[str, date, None],
    upcoming_departures: Sequence[UpcomingDeparture],
    today: date
) -> Optional[PassportCheckResult]:
    """
    Классификация срока действия паспорта.

    Returns:
        None, если срок не указан или нет предстоящих отправлений;
        error: паспорт уже просрочен;
        warning: нарушение по первому (в порядке входа) отправлению,
        плюс число остальных затронутых отправлений;
        success: паспорт годен для всех отправлений.
    """
    expiry = parse_date(passport_expiry)
    if expiry is None or not upcoming_departures:
        return None

    if expiry < today:
        return PassportCheckResult(
            severity=PassportCheckSeverity.ERROR,
            message=f"Paspor sudah kedaluwarsa sejak {format_date_id(expiry)}",
        )

    violations: List[PassportViolation] = []
    for departure in upcoming_departures:
        min_valid = add_months(departure.departure_date, MIN_VALIDITY_MONTHS)
        if expiry < min_valid:
            violations.append(PassportViolation(
                departure_date=departure.departure_date,
                package_name=departure.package_name,
                min_valid_date=min_valid,
                shortfall_days=(min_valid - expiry).days,
            ))

    if violations:
        first = violations[0]
        logger.debug(
            f"Паспорт {expiry} не покрывает {len(violations)} отправлений, "
            f"первое {first.departure_date}, не хватает {first.shortfall_days} дн."
        )
        return PassportCheckResult(
            severity=PassportCheckSeverity.WARNING,
            message=(
                f"Paspor harus berlaku minimal {MIN_VALIDITY_MONTHS} bulan setelah keberangkatan "
                f"{format_date_id(first.departure_date)} ({first.package_name}). "
                f"Kurang {first.shortfall_days} hari."
            ),
            violation=first,
            other_affected=len(violations) - 1,
            violations=violations,
        )

    return PassportCheckResult(
        severity=PassportCheckSeverity.SUCCESS,
        message="Paspor berlaku untuk semua keberangkatan yang terdaftar",
    )
