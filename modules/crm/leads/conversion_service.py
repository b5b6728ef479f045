"""
Конвертация лида в клиента и бронирование
"""

from datetime import datetime
from typing import Callable, List, TypeVar

from loguru import logger

from core.database import DatabaseManager
from core.exceptions import LeadConversionError, LeadValidationError
from modules.bookings.booking_repository import BookingRepository
from modules.bookings.departure_repository import DepartureRepository
from modules.bookings.models import Booking, Departure, RoomType
from modules.crm.leads import status_machine
from modules.crm.leads.lead_repository import LeadRepository
from modules.crm.leads.models import Lead
from modules.customers.customer_repository import CustomerRepository

T = TypeVar("T")


class LeadConversionService:
    """
    Конвертация лида: клиент -> цена пакета -> код бронирования ->
    бронирование -> лид won.

    Все шаги выполняются в одной транзакции: ошибка на любом шаге
    откатывает уже сделанные записи.
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        lead_repo: LeadRepository,
        customer_repo: CustomerRepository,
        departure_repo: DepartureRepository,
        booking_repo: BookingRepository,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.db_manager = db_manager
        self.lead_repo = lead_repo
        self.customer_repo = customer_repo
        self.departure_repo = departure_repo
        self.booking_repo = booking_repo
        self.clock = clock

    def eligible_departures(self, lead: Lead) -> List[Departure]:
        if not lead.package_interest:
            return []
        return self.departure_repo.get_eligible_departures(lead.package_interest, self.clock().date())

    def _check_preconditions(self, lead: Lead, departure_id: str) -> Departure:
        status_machine.ensure_convertible(lead)
        if not lead.package_interest:
            raise LeadValidationError("Lead belum memilih paket", field="package_interest")

        departure = self.departure_repo.get_departure(departure_id)
        if departure is None:
            raise LeadValidationError("Keberangkatan tidak ditemukan", field="departure_id")
        if departure.package_id != lead.package_interest:
            raise LeadValidationError(
                "Keberangkatan tidak sesuai dengan paket yang diminati", field="departure_id"
            )
        if not departure.is_open_on(self.clock().date()):
            raise LeadValidationError("Keberangkatan sudah ditutup atau lewat", field="departure_id")
        return departure

    @staticmethod
    def _step(name: str, action: Callable[[], T]) -> T:
        logger.debug(f"Конвертация: шаг {name}")
        try:
            return action()
        except Exception as e:
            logger.error(f"Конвертация: ошибка на шаге {name}: {e}", exc_info=True)
            raise LeadConversionError(name, e) from e

    def _resolve_price(self, package_id: str) -> float:
        package = self.departure_repo.get_package(package_id)
        if package is None:
            raise LeadValidationError("Paket tidak ditemukan", field="package_interest")
        return float(package.price_quad or 0)

    def convert(self, lead_id: str, departure_id: str) -> Booking:
        """
        Конвертация лида в бронирование по выбранному отправлению.

        Returns:
            Созданное бронирование

        Raises:
            InvalidTransitionError: лид lost или уже won с бронированием
            LeadValidationError: не выбран пакет или отправление не подходит
            LeadConversionError: ошибка на одном из шагов (с именем шага)
        """
        lead = self.lead_repo.get_lead(lead_id)
        departure = self._check_preconditions(lead, departure_id)
        logger.info(f"Конвертация лида {lead_id} на отправление {departure.id} ({departure.departure_date})")

        with self.db_manager.transaction():
            customer = self._step(
                "create_customer",
                lambda: self.customer_repo.create_customer(lead.full_name, lead.phone, lead.email),
            )
            price = self._step("resolve_price", lambda: self._resolve_price(lead.package_interest))
            booking_code = self._step("generate_booking_code", self.booking_repo.generate_booking_code)
            booking = self._step(
                "create_booking",
                lambda: self.booking_repo.create_booking(Booking(
                    id=None,
                    booking_code=booking_code,
                    customer_id=customer.id,
                    departure_id=departure.id,
                    base_price=price,
                    total_price=price,
                    room_type=RoomType.QUAD,
                    total_pax=1,
                    adult_count=1,
                )),
            )
            changes = status_machine.mark_won(lead, booking.id, self.clock())
            self._step("update_lead", lambda: self.lead_repo.update_lead(lead.id, changes))

        logger.info(
            f"Лид {lead_id} конвертирован: клиент {customer.id}, "
            f"бронирование {booking.id} ({booking.booking_code})"
        )
        return booking
