"""
Модуль пакетов, отправлений и бронирований
"""

from modules.bookings.models import Booking, Departure, DepartureStatus, Package, RoomType
from modules.bookings.booking_repository import BookingRepository
from modules.bookings.departure_repository import DepartureRepository

__all__ = [
    'Booking',
    'Departure',
    'DepartureStatus',
    'Package',
    'RoomType',
    'BookingRepository',
    'DepartureRepository',
]
