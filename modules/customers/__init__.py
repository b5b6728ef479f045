"""
Модуль клиентов
"""

from modules.customers.models import Customer, UpcomingDeparture
from modules.customers.customer_repository import CustomerRepository
from modules.customers.customer_service import CustomerService
from modules.customers.passport_checker import (
    PassportCheckResult,
    PassportCheckSeverity,
    PassportViolation,
    check_passport_validity,
)

__all__ = [
    'Customer',
    'UpcomingDeparture',
    'CustomerRepository',
    'CustomerService',
    'PassportCheckResult',
    'PassportCheckSeverity',
    'PassportViolation',
    'check_passport_validity',
]
