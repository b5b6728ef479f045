"""
Модели клиентов (jamaah)
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass
class Customer:
    """Клиент агентства"""
    id: Optional[str]
    full_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    nik: Optional[str] = None
    passport_number: Optional[str] = None
    passport_expiry: Optional[date] = None
    birth_date: Optional[date] = None
    birth_place: Optional[str] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class UpcomingDeparture:
    """Предстоящее отправление клиента (для проверки паспорта)"""
    departure_date: date
    package_name: str
    booking_id: Optional[str] = None
