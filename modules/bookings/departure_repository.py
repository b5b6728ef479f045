"""
Репозиторий пакетов и отправлений
"""

from datetime import date
from typing import Any, Dict, List, Optional

from loguru import logger

from core.database import DatabaseManager
from core.exceptions import DatabaseError
from modules.bookings.models import Departure, DepartureStatus, Package


class DepartureRepository:
    """Чтение пакетов и отправлений (в этом модуле только чтение)"""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    @staticmethod
    def _row_to_package(row: Dict[str, Any]) -> Package:
        return Package(
            id=str(row['id']),
            name=row['name'],
            code=row.get('code'),
            price_quad=float(row['price_quad']) if row.get('price_quad') is not None else None,
            is_active=bool(row.get('is_active', True)),
        )

    @staticmethod
    def _row_to_departure(row: Dict[str, Any]) -> Departure:
        return Departure(
            id=str(row['id']),
            package_id=str(row['package_id']),
            departure_date=row['departure_date'],
            status=row.get('status') or DepartureStatus.OPEN.value,
            quota=int(row.get('quota') or 0),
            booked_count=int(row.get('booked_count') or 0),
            package_name=row.get('package_name'),
        )

    def get_package(self, package_id: str) -> Optional[Package]:
        try:
            rows = self.db_manager.execute_query(
                """
                SELECT id, name, code, price_quad, is_active
                FROM packages
                WHERE id = %s
                """,
                (package_id,),
            )
        except DatabaseError as e:
            logger.error(f"Ошибка при загрузке пакета {package_id}: {e}")
            raise
        return self._row_to_package(rows[0]) if rows else None

    def get_active_packages(self) -> List[Package]:
        try:
            rows = self.db_manager.execute_query(
                """
                SELECT id, name, code, price_quad, is_active
                FROM packages
                WHERE is_active = TRUE
                ORDER BY name
                """
            )
        except DatabaseError as e:
            logger.error(f"Ошибка при загрузке активных пакетов: {e}")
            raise
        return [self._row_to_package(row) for row in rows]

    def get_eligible_departures(self, package_id: str, today: date) -> List[Departure]:
        """Открытые отправления пакета начиная с сегодняшней даты, по возрастанию даты"""
        try:
            rows = self.db_manager.execute_query(
                """
                SELECT d.id, d.package_id, d.departure_date, d.status,
                       d.quota, d.booked_count, p.name AS package_name
                FROM departures d
                JOIN packages p ON p.id = d.package_id
                WHERE d.package_id = %s
                  AND d.status = %s
                  AND d.departure_date >= %s
                ORDER BY d.departure_date ASC
                """,
                (package_id, DepartureStatus.OPEN.value, today),
            )
        except DatabaseError as e:
            logger.error(f"Ошибка при загрузке отправлений пакета {package_id}: {e}")
            raise
        departures = [self._row_to_departure(row) for row in rows]
        logger.debug(f"Доступных отправлений для пакета {package_id}: {len(departures)}")
        return departures

    def get_departure(self, departure_id: str) -> Optional[Departure]:
        try:
            rows = self.db_manager.execute_query(
                """
                SELECT d.id, d.package_id, d.departure_date, d.status,
                       d.quota, d.booked_count, p.name AS package_name
                FROM departures d
                JOIN packages p ON p.id = d.package_id
                WHERE d.id = %s
                """,
                (departure_id,),
            )
        except DatabaseError as e:
            logger.error(f"Ошибка при загрузке отправления {departure_id}: {e}")
            raise
        return self._row_to_departure(rows[0]) if rows else None
