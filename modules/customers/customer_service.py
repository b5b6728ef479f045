"""
Сервис редактирования клиента
"""

from datetime import date
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from core.exceptions import CustomerValidationError
from modules.customers.customer_repository import CustomerRepository
from modules.customers.models import Customer, UpcomingDeparture
from modules.customers.passport_checker import PassportCheckResult, check_passport_validity


class CustomerService:
    """
    Сессия редактирования клиента: отправления загружаются один раз,
    проверка паспорта пересчитывается при каждом изменении даты.
    """

    def __init__(self, customer_repo: CustomerRepository):
        self.customer_repo = customer_repo
        self._departures_cache: Dict[str, List[UpcomingDeparture]] = {}

    def upcoming_departures(self, customer_id: str, today: date) -> List[UpcomingDeparture]:
        if customer_id not in self._departures_cache:
            self._departures_cache[customer_id] = self.customer_repo.get_upcoming_departures(customer_id, today)
        return self._departures_cache[customer_id]

    def check_passport(
        self,
        customer_id: str,
        passport_expiry: Union[str, date, None],
        today: date
    ) -> Optional[PassportCheckResult]:
        departures = self.upcoming_departures(customer_id, today)
        return check_passport_validity(passport_expiry, departures, today)

    def save(self, customer_id: str, values: Dict[str, Any]) -> Optional[Customer]:
        full_name = values.get("full_name")
        if full_name is not None and not str(full_name).strip():
            raise CustomerValidationError("Nama lengkap wajib diisi", field="full_name")
        customer = self.customer_repo.update_customer(customer_id, values)
        logger.info(f"Клиент {customer_id} обновлен: {', '.join(sorted(values))}")
        self._departures_cache.pop(customer_id, None)
        return customer
