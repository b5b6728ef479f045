"""
Тесты моделей лидов
"""

from modules.crm.leads.models import (
    FUNNEL_STAGES, PIPELINE_STAGES, Lead, LeadStatus
)


class TestLeadStatus:
    def test_terminal_statuses(self):
        assert LeadStatus.WON.is_terminal
        assert LeadStatus.LOST.is_terminal
        assert not LeadStatus.CLOSING.is_terminal

    def test_funnel_index(self):
        assert LeadStatus.NEW.funnel_index == 0
        assert LeadStatus.WON.funnel_index == len(FUNNEL_STAGES) - 1
        assert LeadStatus.LOST.funnel_index == -1

    def test_pipeline_stages_exclude_terminal(self):
        assert LeadStatus.WON not in PIPELINE_STAGES
        assert LeadStatus.LOST not in PIPELINE_STAGES
        assert PIPELINE_STAGES[0] == LeadStatus.NEW
        assert PIPELINE_STAGES[-1] == LeadStatus.CLOSING

    def test_labels(self):
        assert LeadStatus.NEW.label == "Baru"
        assert LeadStatus.NEGOTIATION.label == "Negosiasi"


class TestLead:
    def test_defaults(self):
        lead = Lead(id=None, full_name="Ahmad")
        assert lead.status == LeadStatus.NEW
        assert lead.notes == []
        assert not lead.is_converted
        assert not lead.is_lost

    def test_won_without_booking_is_flagged(self):
        lead = Lead(id="1", full_name="Ahmad", status=LeadStatus.WON)
        assert lead.is_converted
        assert lead.is_unlinked_won

    def test_won_with_booking(self):
        lead = Lead(id="1", full_name="Ahmad", status=LeadStatus.WON, converted_booking_id="b-1")
        assert lead.is_converted
        assert not lead.is_unlinked_won
