"""
Модели данных лидов
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


class LeadStatus(Enum):
    """Статус лида"""
    NEW = "new"
    CONTACTED = "contacted"
    FOLLOW_UP = "follow_up"
    NEGOTIATION = "negotiation"
    CLOSING = "closing"
    WON = "won"
    LOST = "lost"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @property
    def is_terminal(self) -> bool:
        return self in (LeadStatus.WON, LeadStatus.LOST)

    @property
    def funnel_index(self) -> int:
        """Позиция в воронке; -1 для lost (вне воронки)"""
        try:
            return FUNNEL_STAGES.index(self)
        except ValueError:
            return -1


# Этапы воронки в порядке продвижения, lost идёт боковой веткой
FUNNEL_STAGES: List[LeadStatus] = [
    LeadStatus.NEW,
    LeadStatus.CONTACTED,
    LeadStatus.FOLLOW_UP,
    LeadStatus.NEGOTIATION,
    LeadStatus.CLOSING,
    LeadStatus.WON,
]

# Этапы, между которыми сотрудник переключает лид вручную (колонки канбана)
PIPELINE_STAGES: List[LeadStatus] = FUNNEL_STAGES[:-1]

IN_PROGRESS_STATUSES = (
    LeadStatus.CONTACTED,
    LeadStatus.FOLLOW_UP,
    LeadStatus.NEGOTIATION,
    LeadStatus.CLOSING,
)

STATUS_LABELS = {
    LeadStatus.NEW: "Baru",
    LeadStatus.CONTACTED: "Dihubungi",
    LeadStatus.FOLLOW_UP: "Follow Up",
    LeadStatus.NEGOTIATION: "Negosiasi",
    LeadStatus.CLOSING: "Closing",
    LeadStatus.WON: "Won",
    LeadStatus.LOST: "Lost",
}

STATUS_COLORS = {
    LeadStatus.NEW: "#3B82F6",
    LeadStatus.CONTACTED: "#A855F7",
    LeadStatus.FOLLOW_UP: "#EAB308",
    LeadStatus.NEGOTIATION: "#F97316",
    LeadStatus.CLOSING: "#10B981",
    LeadStatus.WON: "#16A34A",
    LeadStatus.LOST: "#EF4444",
}

LEAD_SOURCES = {
    "website": "Website",
    "whatsapp": "WhatsApp",
    "instagram": "Instagram",
    "facebook": "Facebook",
    "referral": "Referral",
    "walk-in": "Walk-in",
    "phone": "Telepon",
}


@dataclass
class NoteEntry:
    """Запись журнала заметок лида"""
    text: str
    timestamp: Optional[datetime] = None
    author: Optional[str] = None


@dataclass
class Lead:
    """
    Лид (потенциальный клиент)

    Новые переходы в won идут только через конвертацию (status_machine.mark_won),
    поэтому won сопровождается ссылкой на бронирование. Строки в базе этого
    не гарантируют: старый won без бронирования загружается как есть
    и помечается is_unlinked_won.
    """
    id: Optional[str]
    full_name: str
    status: LeadStatus = LeadStatus.NEW
    phone: Optional[str] = None
    email: Optional[str] = None
    source: Optional[str] = None
    package_interest: Optional[str] = None
    package_name: Optional[str] = None
    assigned_to: Optional[str] = None
    branch_id: Optional[str] = None
    notes: List[NoteEntry] = field(default_factory=list)
    follow_up_date: Optional[date] = None
    converted_at: Optional[datetime] = None
    converted_booking_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_converted(self) -> bool:
        return self.status == LeadStatus.WON

    @property
    def is_lost(self) -> bool:
        return self.status == LeadStatus.LOST

    @property
    def is_unlinked_won(self) -> bool:
        """won без бронирования (проставлен в обход конвертации)"""
        return self.status == LeadStatus.WON and not self.converted_booking_id
