"""
Репозиторий лидов
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from loguru import logger

from core.database import DatabaseManager
from core.exceptions import DatabaseError, LeadNotFoundError, LeadValidationError
from modules.crm.leads.models import Lead, LeadStatus
from modules.crm.leads.notes import format_notes, parse_notes

LEAD_SELECT = """
    SELECT l.id, l.full_name, l.phone, l.email, l.source, l.package_interest,
           l.assigned_to, l.branch_id, l.status, l.notes, l.follow_up_date,
           l.converted_at, l.converted_booking_id, l.created_at, l.updated_at,
           p.name AS package_name
    FROM leads l
    LEFT JOIN packages p ON p.id = l.package_interest
"""


class LeadRepository:
    """Репозиторий для работы с лидами"""

    TABLE = "leads"

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    @staticmethod
    def _optional_str(value: Any) -> Optional[str]:
        return str(value) if value is not None else None

    @classmethod
    def _row_to_lead(cls, row: Dict[str, Any]) -> Lead:
        lead = Lead(
            id=cls._optional_str(row['id']),
            full_name=row['full_name'],
            status=LeadStatus(row.get('status') or LeadStatus.NEW.value),
            phone=row.get('phone'),
            email=row.get('email'),
            source=row.get('source'),
            package_interest=cls._optional_str(row.get('package_interest')),
            package_name=row.get('package_name'),
            assigned_to=cls._optional_str(row.get('assigned_to')),
            branch_id=cls._optional_str(row.get('branch_id')),
            notes=parse_notes(row.get('notes')),
            follow_up_date=row.get('follow_up_date'),
            converted_at=row.get('converted_at'),
            converted_booking_id=cls._optional_str(row.get('converted_booking_id')),
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at'),
        )
        if lead.is_unlinked_won:
            logger.warning(f"Лид {lead.id} в статусе won без converted_booking_id")
        return lead

    @staticmethod
    def _to_db_values(values: Dict[str, Any]) -> Dict[str, Any]:
        """Приведение значений модели к значениям колонок"""
        db_values = {}
        for key, value in values.items():
            if isinstance(value, LeadStatus):
                value = value.value
            elif key == 'notes' and isinstance(value, list):
                value = format_notes(value)
            db_values[key] = value
        return db_values

    def get_leads(
        self,
        status: Optional[LeadStatus] = None,
        assigned_to: Optional[str] = None
    ) -> List[Lead]:
        """Получение лидов, новые первыми"""
        conditions = []
        params: List[Any] = []
        if status is not None:
            conditions.append("l.status = %s")
            params.append(status.value)
        if assigned_to is not None:
            conditions.append("l.assigned_to = %s")
            params.append(assigned_to)

        query = LEAD_SELECT
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY l.created_at DESC"

        try:
            rows = self.db_manager.execute_query(query, tuple(params) or None)
        except DatabaseError as e:
            logger.error(f"Ошибка при получении лидов: {e}")
            raise

        leads = []
        for row in rows:
            try:
                leads.append(self._row_to_lead(row))
            except (ValueError, KeyError) as e:
                logger.error(f"Ошибка при преобразовании строки в Lead: {e}, id={row.get('id')}")
        logger.debug(f"Преобразовано лидов: {len(leads)} из {len(rows)}")
        return leads

    def get_lead(self, lead_id: str) -> Lead:
        try:
            rows = self.db_manager.execute_query(LEAD_SELECT + " WHERE l.id = %s", (lead_id,))
        except DatabaseError as e:
            logger.error(f"Ошибка при получении лида {lead_id}: {e}")
            raise
        if not rows:
            raise LeadNotFoundError(lead_id)
        try:
            return self._row_to_lead(rows[0])
        except (ValueError, KeyError) as e:
            logger.error(f"Ошибка при преобразовании строки в Lead: {e}, id={lead_id}")
            raise LeadValidationError(f"Data lead {lead_id} tidak valid: {e}") from e

    def create_lead(self, lead: Lead) -> Lead:
        values = self._to_db_values({
            "full_name": lead.full_name,
            "phone": lead.phone,
            "email": lead.email,
            "source": lead.source,
            "package_interest": lead.package_interest,
            "assigned_to": lead.assigned_to,
            "branch_id": lead.branch_id,
            "status": lead.status,
            "notes": lead.notes,
            "follow_up_date": lead.follow_up_date,
        })
        try:
            row = self.db_manager.insert(self.TABLE, values)
        except DatabaseError as e:
            logger.error(f"Ошибка при создании лида {lead.full_name}: {e}")
            raise
        created = self._row_to_lead(row)
        logger.info(f"Лид создан: id={created.id}, source={created.source}")
        return created

    def update_lead(self, lead_id: str, values: Dict[str, Any]) -> Lead:
        """Частичное обновление лида; updated_at выставляется всегда"""
        db_values = self._to_db_values(values)
        db_values["updated_at"] = datetime.now(timezone.utc)
        try:
            rows = self.db_manager.update(self.TABLE, db_values, {"id": lead_id})
        except DatabaseError as e:
            logger.error(f"Ошибка при обновлении лида {lead_id}: {e}")
            raise
        if not rows:
            raise LeadNotFoundError(lead_id)
        logger.debug(f"Лид {lead_id} обновлен: {', '.join(sorted(values))}")
        # RETURNING * не содержит имени пакета из JOIN
        return self.get_lead(lead_id)
