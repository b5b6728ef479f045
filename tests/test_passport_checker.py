"""
Тесты проверки срока действия паспорта
"""

from datetime import date

from modules.customers.models import UpcomingDeparture
from modules.customers.passport_checker import PassportCheckSeverity, check_passport_validity

TODAY = date(2026, 10, 17)

DEPARTURES = [
    UpcomingDeparture(departure_date=date(2026, 12, 1), package_name="Umrah Desember"),
    UpcomingDeparture(departure_date=date(2027, 3, 1), package_name="Umrah Ramadhan"),
]


class TestPassportCheck:
    def test_no_expiry(self):
        assert check_passport_validity(None, DEPARTURES, TODAY) is None
        assert check_passport_validity("", DEPARTURES, TODAY) is None

    def test_no_departures(self):
        assert check_passport_validity(date(2026, 1, 1), [], TODAY) is None

    def test_expired(self):
        result = check_passport_validity(date(2026, 10, 1), DEPARTURES, TODAY)

        assert result.severity == PassportCheckSeverity.ERROR
        assert "1 Oktober 2026" in result.message
        assert result.violation is None

    def test_warning_for_first_departure(self):
        result = check_passport_validity(date(2027, 5, 1), DEPARTURES, TODAY)

        assert result.severity == PassportCheckSeverity.WARNING
        assert result.violation.departure_date == date(2026, 12, 1)
        assert result.violation.min_valid_date == date(2027, 6, 1)
        assert result.violation.shortfall_days == 31
        assert result.other_affected == 1
        assert [v.shortfall_days for v in result.violations] == [31, 123]
        assert "Umrah Desember" in result.message
        assert "Kurang 31 hari" in result.message

    def test_warning_only_for_later_departure(self):
        result = check_passport_validity(date(2027, 7, 1), DEPARTURES, TODAY)

        assert result.severity == PassportCheckSeverity.WARNING
        assert result.violation.package_name == "Umrah Ramadhan"
        assert result.other_affected == 0

    def test_exactly_six_months_is_valid(self):
        result = check_passport_validity(date(2027, 9, 1), DEPARTURES, TODAY)
        assert result.severity == PassportCheckSeverity.SUCCESS

    def test_valid_for_all(self):
        result = check_passport_validity("2028-01-01", DEPARTURES, TODAY)
        assert result.severity == PassportCheckSeverity.SUCCESS

    def test_expiry_today_is_not_expired(self):
        departures = [UpcomingDeparture(departure_date=TODAY, package_name="Umrah")]
        result = check_passport_validity(TODAY, departures, TODAY)

        assert result.severity == PassportCheckSeverity.WARNING
        assert result.violation.shortfall_days > 0
