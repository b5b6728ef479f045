"""
Репозиторий клиентов
"""

from datetime import date
from typing import Any, Dict, List, Optional

from loguru import logger

from core.database import DatabaseManager
from core.exceptions import CustomerValidationError, DatabaseError
from modules.customers.models import Customer, UpcomingDeparture

# Поля, которые можно менять через форму редактирования клиента
EDITABLE_FIELDS = (
    "full_name", "phone", "email", "nik", "passport_number", "passport_expiry",
    "birth_date", "birth_place", "gender", "address", "city", "province",
)


class CustomerRepository:
    """Репозиторий клиентов"""

    TABLE = "customers"

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    @staticmethod
    def _row_to_customer(row: Dict[str, Any]) -> Customer:
        return Customer(
            id=str(row['id']),
            full_name=row['full_name'],
            phone=row.get('phone'),
            email=row.get('email'),
            nik=row.get('nik'),
            passport_number=row.get('passport_number'),
            passport_expiry=row.get('passport_expiry'),
            birth_date=row.get('birth_date'),
            birth_place=row.get('birth_place'),
            gender=row.get('gender'),
            address=row.get('address'),
            city=row.get('city'),
            province=row.get('province'),
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at'),
        )

    def create_customer(self, full_name: str, phone: Optional[str], email: Optional[str]) -> Customer:
        """Создание клиента с минимальным набором полей"""
        try:
            row = self.db_manager.insert(
                self.TABLE,
                {"full_name": full_name, "phone": phone, "email": email},
            )
        except DatabaseError as e:
            logger.error(f"Ошибка при создании клиента {full_name}: {e}")
            raise
        customer = self._row_to_customer(row)
        logger.info(f"Клиент создан: id={customer.id}")
        return customer

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        try:
            rows = self.db_manager.execute_query(
                "SELECT * FROM customers WHERE id = %s",
                (customer_id,),
            )
        except DatabaseError as e:
            logger.error(f"Ошибка при загрузке клиента {customer_id}: {e}")
            raise
        return self._row_to_customer(rows[0]) if rows else None

    def search_customers(self, term: Optional[str] = None, limit: int = 200) -> List[Customer]:
        """Клиенты по алфавиту; поиск по имени, телефону и номеру паспорта"""
        query = "SELECT * FROM customers"
        params: List[Any] = []
        if term and term.strip():
            pattern = f"%{term.strip()}%"
            query += " WHERE full_name ILIKE %s OR phone ILIKE %s OR passport_number ILIKE %s"
            params.extend([pattern, pattern, pattern])
        query += " ORDER BY full_name ASC LIMIT %s"
        params.append(limit)
        try:
            rows = self.db_manager.execute_query(query, tuple(params))
        except DatabaseError as e:
            logger.error(f"Ошибка при поиске клиентов: {e}")
            raise
        return [self._row_to_customer(row) for row in rows]

    def update_customer(self, customer_id: str, values: Dict[str, Any]) -> Optional[Customer]:
        unknown = set(values) - set(EDITABLE_FIELDS)
        if unknown:
            raise CustomerValidationError(f"Недопустимые поля клиента: {', '.join(sorted(unknown))}")
        try:
            rows = self.db_manager.update(self.TABLE, dict(values), {"id": customer_id})
        except DatabaseError as e:
            logger.error(f"Ошибка при обновлении клиента {customer_id}: {e}")
            raise
        return self._row_to_customer(rows[0]) if rows else None

    def get_upcoming_departures(self, customer_id: str, today: date) -> List[UpcomingDeparture]:
        """Отправления по бронированиям клиента с датой не раньше сегодняшней"""
        try:
            rows = self.db_manager.execute_query(
                """
                SELECT b.id AS booking_id, d.departure_date, p.name AS package_name
                FROM bookings b
                JOIN departures d ON d.id = b.departure_id
                JOIN packages p ON p.id = d.package_id
                WHERE b.customer_id = %s
                  AND d.departure_date >= %s
                ORDER BY d.departure_date ASC
                """,
                (customer_id, today),
            )
        except DatabaseError as e:
            logger.error(f"Ошибка при загрузке отправлений клиента {customer_id}: {e}")
            raise
        return [
            UpcomingDeparture(
                departure_date=row['departure_date'],
                package_name=row.get('package_name') or '-',
                booking_id=str(row['booking_id']) if row.get('booking_id') else None,
            )
            for row in rows
        ]
