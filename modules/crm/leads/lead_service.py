"""
Сервис работы с лидами: список, карточка, заметки и переходы по этапам
"""

from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from core.exceptions import LeadValidationError
from modules.bookings.departure_repository import DepartureRepository
from modules.bookings.models import Departure
from modules.crm.leads import status_machine
from modules.crm.leads.analytics import percent
from modules.crm.leads.lead_repository import LeadRepository
from modules.crm.leads.models import Lead, LeadStatus
from modules.crm.leads.notes import prepend_note

EDITABLE_FIELDS = (
    "full_name",
    "phone",
    "email",
    "source",
    "package_interest",
    "assigned_to",
    "branch_id",
    "follow_up_date",
)


class LeadService:
    """Операции над лидами поверх LeadRepository"""

    def __init__(
        self,
        lead_repo: LeadRepository,
        departure_repo: DepartureRepository,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.lead_repo = lead_repo
        self.departure_repo = departure_repo
        self.clock = clock

    @staticmethod
    def _require_name(full_name: Optional[str]) -> str:
        name = (full_name or "").strip()
        if not name:
            raise LeadValidationError("Nama lengkap wajib diisi", field="full_name")
        return name

    @staticmethod
    def _clean(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def list_leads(
        self,
        status: Optional[LeadStatus] = None,
        assigned_to: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[Lead]:
        """Лиды, новые первыми; поиск по имени, телефону и email без учета регистра"""
        leads = self.lead_repo.get_leads(status=status, assigned_to=assigned_to)
        term = (search or "").strip().lower()
        if not term:
            return leads
        return [
            lead for lead in leads
            if any(term in (value or "").lower() for value in (lead.full_name, lead.phone, lead.email))
        ]

    def get_lead(self, lead_id: str) -> Lead:
        return self.lead_repo.get_lead(lead_id)

    def create_lead(
        self,
        full_name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        source: Optional[str] = None,
        package_interest: Optional[str] = None,
        assigned_to: Optional[str] = None,
        branch_id: Optional[str] = None,
        notes: Optional[str] = None
    ) -> Lead:
        name = self._require_name(full_name)
        entries = []
        notes = self._clean(notes)
        if notes:
            entries = prepend_note([], notes, self.clock())
        lead = Lead(
            id=None,
            full_name=name,
            phone=self._clean(phone),
            email=self._clean(email),
            source=self._clean(source),
            package_interest=package_interest or None,
            assigned_to=assigned_to or None,
            branch_id=branch_id or None,
            notes=entries,
        )
        return self.lead_repo.create_lead(lead)

    def update_lead(self, lead_id: str, **fields: Any) -> Lead:
        """Редактирование полей лида; статус меняется только переходами"""
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise LeadValidationError(
                f"Поля нельзя изменить: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        if "full_name" in fields:
            fields["full_name"] = self._require_name(fields["full_name"])
        for key in ("phone", "email", "source"):
            if key in fields:
                fields[key] = self._clean(fields[key])
        if not fields:
            return self.get_lead(lead_id)
        return self.lead_repo.update_lead(lead_id, fields)

    def add_follow_up(
        self,
        lead_id: str,
        text: str,
        follow_up_date: Optional[date] = None,
        author: Optional[str] = None
    ) -> Lead:
        """
        Добавление заметки follow-up.

        Заметка встает в начало журнала, дата follow-up сохраняется,
        новый лид переходит в contacted.
        """
        text = (text or "").strip()
        if not text:
            raise LeadValidationError("Catatan follow-up wajib diisi", field="notes")

        lead = self.get_lead(lead_id)
        changes: Dict[str, Any] = {
            "notes": prepend_note(lead.notes, text, self.clock(), author=author),
            "follow_up_date": follow_up_date,
        }
        new_status = status_machine.status_after_follow_up(lead)
        if new_status != lead.status:
            changes["status"] = new_status
        updated = self.lead_repo.update_lead(lead_id, changes)
        logger.info(f"Follow-up добавлен к лиду {lead_id}, статус {updated.status.value}")
        return updated

    def _apply(self, lead: Lead, changes: Dict[str, Any], action: str) -> Lead:
        if not changes:
            logger.debug(f"Лид {lead.id} уже в статусе {lead.status.value}, {action} пропущен")
            return lead
        updated = self.lead_repo.update_lead(lead.id, changes)
        logger.info(f"Лид {lead.id}: {action} {lead.status.value} -> {updated.status.value}")
        return updated

    def move_to_stage(self, lead_id: str, target: LeadStatus) -> Lead:
        lead = self.get_lead(lead_id)
        return self._apply(lead, status_machine.move_to_stage(lead, target), "move_to_stage")

    def advance(self, lead_id: str) -> Lead:
        lead = self.get_lead(lead_id)
        return self._apply(lead, status_machine.advance(lead), "advance")

    def mark_lost(self, lead_id: str) -> Lead:
        lead = self.get_lead(lead_id)
        return self._apply(lead, status_machine.mark_lost(lead), "mark_lost")

    def reactivate(self, lead_id: str) -> Lead:
        lead = self.get_lead(lead_id)
        return self._apply(lead, status_machine.reactivate(lead), "reactivate")

    def pipeline_counts(self, leads: Optional[List[Lead]] = None) -> Dict[str, Any]:
        """
        Счетчики для заголовков канбана.

        Returns:
            {"total": int, "by_status": {LeadStatus: int}, "conversion_rate": float}
        """
        if leads is None:
            leads = self.lead_repo.get_leads()
        by_status = {status: 0 for status in LeadStatus}
        for lead in leads:
            by_status[lead.status] += 1
        total = len(leads)
        won = by_status[LeadStatus.WON]
        return {
            "total": total,
            "by_status": by_status,
            "conversion_rate": percent(won, total, 1),
        }

    def eligible_departures(self, lead: Lead, today: Optional[date] = None) -> List[Departure]:
        """Открытые будущие отправления пакета, интересующего лид"""
        if not lead.package_interest:
            return []
        today = today or self.clock().date()
        return self.departure_repo.get_eligible_departures(lead.package_interest, today)
