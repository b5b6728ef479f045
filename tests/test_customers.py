"""
Тесты репозитория и сервиса клиентов
"""

from datetime import date
from unittest.mock import Mock

import pytest

from core.exceptions import AppError, CustomerValidationError, DatabaseQueryError
from modules.customers.customer_repository import CustomerRepository
from modules.customers.customer_service import CustomerService
from modules.customers.models import Customer, UpcomingDeparture
from modules.customers.passport_checker import PassportCheckSeverity

TODAY = date(2026, 10, 17)


def customer_row(**overrides):
    row = {'id': 42, 'full_name': 'Siti Aminah', 'phone': '0813', 'email': None}
    row.update(overrides)
    return row


class TestCustomerRepository:
    @pytest.fixture
    def repo(self, mock_db_manager):
        return CustomerRepository(mock_db_manager)

    def test_create_customer(self, repo, mock_db_manager):
        mock_db_manager.insert.return_value = customer_row()

        customer = repo.create_customer("Siti Aminah", "0813", None)

        mock_db_manager.insert.assert_called_once_with(
            "customers", {"full_name": "Siti Aminah", "phone": "0813", "email": None}
        )
        assert customer.id == "42"

    def test_create_customer_error_propagates(self, repo, mock_db_manager):
        mock_db_manager.insert.side_effect = DatabaseQueryError("boom")
        with pytest.raises(DatabaseQueryError):
            repo.create_customer("Siti", None, None)

    def test_get_customer(self, repo, mock_db_manager):
        mock_db_manager.execute_query.return_value = []
        assert repo.get_customer("1") is None

        mock_db_manager.execute_query.return_value = [customer_row(passport_expiry=date(2027, 1, 1))]
        assert repo.get_customer("42").passport_expiry == date(2027, 1, 1)

    def test_search_customers(self, repo, mock_db_manager):
        mock_db_manager.execute_query.return_value = [customer_row()]

        customers = repo.search_customers(" siti ")

        query, params = mock_db_manager.execute_query.call_args[0]
        assert "ILIKE" in query
        assert params == ("%siti%", "%siti%", "%siti%", 200)
        assert customers[0].full_name == "Siti Aminah"

    def test_search_without_term(self, repo, mock_db_manager):
        repo.search_customers()
        query, params = mock_db_manager.execute_query.call_args[0]
        assert "WHERE" not in query
        assert params == (200,)

    def test_update_rejects_unknown_fields(self, repo, mock_db_manager):
        with pytest.raises(CustomerValidationError):
            repo.update_customer("42", {"id": "43"})
        mock_db_manager.update.assert_not_called()

    def test_update_customer(self, repo, mock_db_manager):
        mock_db_manager.update.return_value = [customer_row(city="Bandung")]

        customer = repo.update_customer("42", {"city": "Bandung"})

        mock_db_manager.update.assert_called_once_with("customers", {"city": "Bandung"}, {"id": "42"})
        assert customer.city == "Bandung"

    def test_upcoming_departures(self, repo, mock_db_manager):
        mock_db_manager.execute_query.return_value = [
            {'booking_id': 7, 'departure_date': date(2026, 12, 1), 'package_name': 'Umrah Desember'},
            {'booking_id': 8, 'departure_date': date(2027, 3, 1), 'package_name': None},
        ]

        departures = repo.get_upcoming_departures("42", TODAY)

        assert mock_db_manager.execute_query.call_args[0][1] == ("42", TODAY)
        assert departures[0] == UpcomingDeparture(date(2026, 12, 1), "Umrah Desember", "7")
        assert departures[1].package_name == "-"


class TestCustomerService:
    @pytest.fixture
    def repo(self):
        repo = Mock()
        repo.get_upcoming_departures.return_value = [
            UpcomingDeparture(departure_date=date(2026, 12, 1), package_name="Umrah Desember"),
        ]
        repo.update_customer.return_value = Customer(id="42", full_name="Siti")
        return repo

    def test_departures_loaded_once(self, repo):
        service = CustomerService(repo)

        first = service.check_passport("42", date(2027, 1, 1), TODAY)
        second = service.check_passport("42", date(2028, 1, 1), TODAY)

        assert first.severity == PassportCheckSeverity.WARNING
        assert second.severity == PassportCheckSeverity.SUCCESS
        repo.get_upcoming_departures.assert_called_once_with("42", TODAY)

    def test_save_requires_name(self, repo):
        with pytest.raises(CustomerValidationError) as exc_info:
            CustomerService(repo).save("42", {"full_name": "  "})
        assert exc_info.value.field == "full_name"
        assert isinstance(exc_info.value, AppError)
        repo.update_customer.assert_not_called()

    def test_save_resets_cache(self, repo):
        service = CustomerService(repo)
        service.check_passport("42", date(2027, 1, 1), TODAY)

        service.save("42", {"passport_expiry": date(2028, 1, 1)})
        service.check_passport("42", date(2028, 1, 1), TODAY)

        repo.update_customer.assert_called_once_with("42", {"passport_expiry": date(2028, 1, 1)})
        assert repo.get_upcoming_departures.call_count == 2
