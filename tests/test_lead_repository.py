"""
Тесты репозитория лидов
"""

from datetime import datetime

import pytest

from core.exceptions import DatabaseQueryError, LeadNotFoundError, LeadValidationError
from modules.crm.leads.analytics import FunnelAnalytics
from modules.crm.leads.lead_repository import LeadRepository
from modules.crm.leads.models import Lead, LeadStatus, NoteEntry


def lead_row(**overrides):
    row = {
        'id': 1,
        'full_name': 'Ahmad Fauzi',
        'phone': '0812',
        'email': None,
        'source': 'website',
        'package_interest': 7,
        'assigned_to': None,
        'branch_id': None,
        'status': 'new',
        'notes': '[17/10/2026 10:30] Minta brosur',
        'follow_up_date': None,
        'converted_at': None,
        'converted_booking_id': None,
        'created_at': datetime(2026, 10, 1, 9, 0),
        'updated_at': None,
        'package_name': 'Umrah Reguler 9 Hari',
    }
    row.update(overrides)
    return row


@pytest.fixture
def lead_repo(mock_db_manager):
    return LeadRepository(mock_db_manager)


class TestGetLeads:
    def test_rows_to_leads(self, lead_repo, mock_db_manager):
        mock_db_manager.execute_query.return_value = [lead_row()]

        leads = lead_repo.get_leads()

        assert len(leads) == 1
        lead = leads[0]
        assert lead.id == "1"
        assert lead.status == LeadStatus.NEW
        assert lead.package_interest == "7"
        assert lead.package_name == "Umrah Reguler 9 Hari"
        assert lead.notes[0].text == "Minta brosur"

    def test_unknown_status_skipped(self, lead_repo, mock_db_manager):
        mock_db_manager.execute_query.return_value = [
            lead_row(),
            lead_row(id=2, status='unknown'),
        ]

        leads = lead_repo.get_leads()

        assert [lead.id for lead in leads] == ["1"]

    def test_won_without_booking_loaded_and_counted(self, lead_repo, mock_db_manager):
        created = datetime(2026, 10, 10, 9, 0)
        mock_db_manager.execute_query.return_value = [
            lead_row(id=1, status='won', created_at=created),
            lead_row(id=2, status='new', created_at=created),
            lead_row(id=3, status='won', converted_booking_id='b3', created_at=created),
        ]

        leads = lead_repo.get_leads()

        assert [lead.id for lead in leads] == ["1", "2", "3"]
        assert leads[0].is_unlinked_won
        assert not leads[2].is_unlinked_won

        summary = FunnelAnalytics(leads).build_report(1, datetime(2026, 10, 17, 12, 0)).summary
        assert summary.total == 3
        assert summary.won == 2
        assert summary.conversion_rate == 66.7

    def test_filters_passed_as_params(self, lead_repo, mock_db_manager):
        lead_repo.get_leads(status=LeadStatus.CLOSING, assigned_to="u-1")

        query, params = mock_db_manager.execute_query.call_args[0]
        assert "l.status = %s" in query
        assert "l.assigned_to = %s" in query
        assert "ORDER BY l.created_at DESC" in query
        assert params == ("closing", "u-1")

    def test_database_error_propagates(self, lead_repo, mock_db_manager):
        mock_db_manager.execute_query.side_effect = DatabaseQueryError("boom")
        with pytest.raises(DatabaseQueryError):
            lead_repo.get_leads()


class TestGetLead:
    def test_found(self, lead_repo, mock_db_manager):
        mock_db_manager.execute_query.return_value = [lead_row(id=5)]
        assert lead_repo.get_lead("5").id == "5"

    def test_not_found(self, lead_repo, mock_db_manager):
        mock_db_manager.execute_query.return_value = []
        with pytest.raises(LeadNotFoundError):
            lead_repo.get_lead("404")

    def test_won_without_booking(self, lead_repo, mock_db_manager):
        mock_db_manager.execute_query.return_value = [lead_row(id=1, status='won')]

        lead = lead_repo.get_lead("1")

        assert lead.status == LeadStatus.WON
        assert lead.is_unlinked_won

    def test_malformed_row(self, lead_repo, mock_db_manager):
        mock_db_manager.execute_query.return_value = [lead_row(id=9, status='unknown')]
        with pytest.raises(LeadValidationError):
            lead_repo.get_lead("9")


class TestWrite:
    def test_create_lead(self, lead_repo, mock_db_manager):
        mock_db_manager.insert.return_value = lead_row(id=10, notes=None)
        lead = Lead(
            id=None,
            full_name="Ahmad Fauzi",
            source="website",
            notes=[NoteEntry(text="Minta brosur", timestamp=datetime(2026, 10, 17, 10, 30))],
        )

        created = lead_repo.create_lead(lead)

        table, values = mock_db_manager.insert.call_args[0]
        assert table == "leads"
        assert values["status"] == "new"
        assert values["notes"] == "[17/10/2026 10:30] Minta brosur"
        assert created.id == "10"

    def test_update_lead(self, lead_repo, mock_db_manager):
        mock_db_manager.update.return_value = [{'id': 1}]
        mock_db_manager.execute_query.return_value = [lead_row(status='contacted')]

        updated = lead_repo.update_lead("1", {"status": LeadStatus.CONTACTED, "follow_up_date": None})

        table, values, where = mock_db_manager.update.call_args[0]
        assert table == "leads"
        assert where == {"id": "1"}
        assert values["status"] == "contacted"
        assert "updated_at" in values
        assert updated.status == LeadStatus.CONTACTED

    def test_update_missing_lead(self, lead_repo, mock_db_manager):
        mock_db_manager.update.return_value = []
        with pytest.raises(LeadNotFoundError):
            lead_repo.update_lead("404", {"status": "lost"})
