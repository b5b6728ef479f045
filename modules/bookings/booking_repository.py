"""
Репозиторий бронирований
"""

from typing import Any, Dict

from loguru import logger

from core.database import DatabaseManager
from core.exceptions import DatabaseError, DatabaseQueryError
from modules.bookings.models import Booking, RoomType


class BookingRepository:
    """Создание бронирований и генерация кодов бронирования"""

    TABLE = "bookings"

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    @staticmethod
    def _row_to_booking(row: Dict[str, Any]) -> Booking:
        return Booking(
            id=str(row['id']),
            booking_code=row['booking_code'],
            customer_id=str(row['customer_id']),
            departure_id=str(row['departure_id']),
            base_price=float(row.get('base_price') or 0),
            total_price=float(row.get('total_price') or 0),
            room_type=RoomType(row.get('room_type') or RoomType.QUAD.value),
            total_pax=int(row.get('total_pax') or 1),
            adult_count=int(row.get('adult_count') or 1),
            status=row.get('status'),
            created_at=row.get('created_at'),
        )

    def generate_booking_code(self) -> str:
        """Код бронирования генерирует серверная функция бэкенда"""
        code = self.db_manager.call_function("generate_booking_code")
        if not code:
            raise DatabaseQueryError("generate_booking_code не вернула код")
        return str(code)

    def create_booking(self, booking: Booking) -> Booking:
        """Вставка бронирования, возвращает строку с id сервера"""
        try:
            row = self.db_manager.insert(
                self.TABLE,
                {
                    "booking_code": booking.booking_code,
                    "customer_id": booking.customer_id,
                    "departure_id": booking.departure_id,
                    "base_price": booking.base_price,
                    "total_price": booking.total_price,
                    "room_type": booking.room_type.value,
                    "total_pax": booking.total_pax,
                    "adult_count": booking.adult_count,
                },
            )
        except DatabaseError as e:
            logger.error(f"Ошибка при создании бронирования {booking.booking_code}: {e}")
            raise
        created = self._row_to_booking(row)
        logger.info(f"Бронирование создано: id={created.id}, code={created.booking_code}")
        return created
