"""
Переходы статусов лида.

Каждая функция проверяет допустимость перехода и возвращает набор полей
для обновления строки лида. Запись выполняет репозиторий.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from core.exceptions import InvalidTransitionError
from modules.crm.leads.models import Lead, LeadStatus, PIPELINE_STAGES

ChangeSet = Dict[str, Any]


def _ensure_open(lead: Lead, target: LeadStatus) -> None:
    if lead.status.is_terminal:
        raise InvalidTransitionError(
            lead.status.value, target.value, "лид уже в конечном статусе"
        )


def ensure_convertible(lead: Lead) -> None:
    """
    Конвертировать можно открытый лид и won без бронирования:
    для последнего конвертация дописывает недостающую ссылку.
    """
    if lead.is_unlinked_won:
        return
    _ensure_open(lead, LeadStatus.WON)


def move_to_stage(lead: Lead, target: LeadStatus) -> ChangeSet:
    """
    Прямой переход на любой этап канбана (new..closing).

    Переход в won через этот путь запрещен: won ставится только конвертацией.
    Пустой набор означает, что лид уже на этом этапе.
    """
    if target == LeadStatus.WON:
        raise InvalidTransitionError(
            lead.status.value, target.value, "используйте конвертацию в бронирование"
        )
    if target == LeadStatus.LOST:
        return mark_lost(lead)
    _ensure_open(lead, target)
    if target not in PIPELINE_STAGES:
        raise InvalidTransitionError(lead.status.value, target.value)
    if lead.status == target:
        return {}
    return {"status": target.value}


def next_stage(status: LeadStatus) -> Optional[LeadStatus]:
    """Следующий этап канбана или None для closing и конечных статусов"""
    if status not in PIPELINE_STAGES:
        return None
    index = PIPELINE_STAGES.index(status)
    if index + 1 >= len(PIPELINE_STAGES):
        return None
    return PIPELINE_STAGES[index + 1]


def advance(lead: Lead) -> ChangeSet:
    target = next_stage(lead.status)
    if target is None:
        raise InvalidTransitionError(lead.status.value, "next", "нет следующего этапа")
    return {"status": target.value}


def mark_lost(lead: Lead) -> ChangeSet:
    _ensure_open(lead, LeadStatus.LOST)
    return {"status": LeadStatus.LOST.value}


def reactivate(lead: Lead) -> ChangeSet:
    """lost -> new, остальные поля не трогаются"""
    if lead.status != LeadStatus.LOST:
        raise InvalidTransitionError(
            lead.status.value, LeadStatus.NEW.value, "реактивировать можно только lost"
        )
    return {"status": LeadStatus.NEW.value}


def mark_won(lead: Lead, booking_id: str, now: datetime) -> ChangeSet:
    """Единственный путь в won: вместе со ссылкой на бронирование"""
    if not booking_id:
        raise InvalidTransitionError(
            lead.status.value, LeadStatus.WON.value, "нет бронирования"
        )
    ensure_convertible(lead)
    return {
        "status": LeadStatus.WON.value,
        "converted_at": now,
        "converted_booking_id": booking_id,
    }


def status_after_follow_up(lead: Lead) -> LeadStatus:
    """Заметка по новому лиду переводит его в contacted"""
    if lead.status == LeadStatus.NEW:
        return LeadStatus.CONTACTED
    return lead.status
