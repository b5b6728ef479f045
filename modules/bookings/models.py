"""
Модели пакетов, отправлений и бронирований
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class RoomType(Enum):
    """Тип размещения"""
    QUAD = "quad"
    TRIPLE = "triple"
    DOUBLE = "double"
    SINGLE = "single"


class DepartureStatus(Enum):
    """Статус отправления"""
    OPEN = "open"
    CLOSED = "closed"
    FULL = "full"
    DEPARTED = "departed"
    CANCELLED = "cancelled"


@dataclass
class Package:
    """Пакет тура"""
    id: str
    name: str
    code: Optional[str] = None
    price_quad: Optional[float] = None
    is_active: bool = True


@dataclass
class Departure:
    """Отправление (конкретная дата пакета)"""
    id: str
    package_id: str
    departure_date: date
    status: str = DepartureStatus.OPEN.value
    quota: int = 0
    booked_count: int = 0
    package_name: Optional[str] = None

    @property
    def seats_left(self) -> int:
        return max(self.quota - self.booked_count, 0)

    def is_open_on(self, today: date) -> bool:
        return self.status == DepartureStatus.OPEN.value and self.departure_date >= today


@dataclass
class Booking:
    """Бронирование"""
    id: Optional[str]
    booking_code: str
    customer_id: str
    departure_id: str
    base_price: float
    total_price: float
    room_type: RoomType = RoomType.QUAD
    total_pax: int = 1
    adult_count: int = 1
    status: Optional[str] = None
    created_at: Optional[datetime] = None
