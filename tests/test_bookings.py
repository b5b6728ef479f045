"""
Тесты репозиториев пакетов, отправлений и бронирований
"""

from datetime import date

import pytest

from core.exceptions import DatabaseQueryError
from modules.bookings.booking_repository import BookingRepository
from modules.bookings.departure_repository import DepartureRepository
from modules.bookings.models import Booking, Departure, RoomType

TODAY = date(2026, 10, 17)


class TestDeparture:
    def test_is_open_on(self):
        departure = Departure(id="d-1", package_id="p-1", departure_date=TODAY)
        assert departure.is_open_on(TODAY)
        assert not departure.is_open_on(date(2026, 10, 18))

    def test_closed_departure(self):
        departure = Departure(id="d-1", package_id="p-1", departure_date=date(2027, 1, 1), status="closed")
        assert not departure.is_open_on(TODAY)

    def test_seats_left(self):
        departure = Departure(id="d-1", package_id="p-1", departure_date=TODAY, quota=45, booked_count=50)
        assert departure.seats_left == 0


class TestDepartureRepository:
    @pytest.fixture
    def repo(self, mock_db_manager):
        return DepartureRepository(mock_db_manager)

    def test_eligible_departures(self, repo, mock_db_manager):
        mock_db_manager.execute_query.return_value = [
            {'id': 3, 'package_id': 1, 'departure_date': date(2026, 12, 1), 'status': 'open',
             'quota': 45, 'booked_count': 10, 'package_name': 'Umrah Desember'},
        ]

        departures = repo.get_eligible_departures("1", TODAY)

        params = mock_db_manager.execute_query.call_args[0][1]
        assert params == ("1", "open", TODAY)
        assert departures[0].id == "3"
        assert departures[0].package_id == "1"
        assert departures[0].seats_left == 35

    def test_get_package(self, repo, mock_db_manager):
        mock_db_manager.execute_query.return_value = [
            {'id': 1, 'name': 'Umrah Desember', 'code': 'UMR-12', 'price_quad': 28500000, 'is_active': True},
        ]
        package = repo.get_package("1")
        assert package.price_quad == 28500000.0

        mock_db_manager.execute_query.return_value = []
        assert repo.get_package("404") is None

    def test_get_departure_missing(self, repo, mock_db_manager):
        assert repo.get_departure("404") is None


class TestBookingRepository:
    @pytest.fixture
    def repo(self, mock_db_manager):
        return BookingRepository(mock_db_manager)

    def test_generate_booking_code(self, repo, mock_db_manager):
        mock_db_manager.call_function.return_value = "UHT-2026-0001"
        assert repo.generate_booking_code() == "UHT-2026-0001"
        mock_db_manager.call_function.assert_called_once_with("generate_booking_code")

    def test_generate_booking_code_empty(self, repo, mock_db_manager):
        mock_db_manager.call_function.return_value = None
        with pytest.raises(DatabaseQueryError):
            repo.generate_booking_code()

    def test_create_booking(self, repo, mock_db_manager):
        mock_db_manager.insert.return_value = {
            'id': 9, 'booking_code': 'UHT-2026-0001', 'customer_id': 4, 'departure_id': 3,
            'base_price': 28500000, 'total_price': 28500000, 'room_type': 'quad',
            'total_pax': 1, 'adult_count': 1, 'status': 'pending',
        }
        booking = Booking(
            id=None, booking_code="UHT-2026-0001", customer_id="4", departure_id="3",
            base_price=28500000.0, total_price=28500000.0,
        )

        created = repo.create_booking(booking)

        table, values = mock_db_manager.insert.call_args[0]
        assert table == "bookings"
        assert values["room_type"] == "quad"
        assert values["total_pax"] == 1
        assert created.id == "9"
        assert created.room_type == RoomType.QUAD
