"""
Модуль лидов: воронка, конвертация в бронирование, аналитика
"""

from modules.crm.leads.models import (
    FUNNEL_STAGES,
    LEAD_SOURCES,
    PIPELINE_STAGES,
    Lead,
    LeadStatus,
    NoteEntry,
)
from modules.crm.leads.lead_repository import LeadRepository
from modules.crm.leads.lead_service import LeadService
from modules.crm.leads.conversion_service import LeadConversionService
from modules.crm.leads.analytics import FunnelAnalytics, FunnelReport

__all__ = [
    'FUNNEL_STAGES',
    'LEAD_SOURCES',
    'PIPELINE_STAGES',
    'Lead',
    'LeadStatus',
    'NoteEntry',
    'LeadRepository',
    'LeadService',
    'LeadConversionService',
    'FunnelAnalytics',
    'FunnelReport',
]
