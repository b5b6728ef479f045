"""
Подготовка данных документов из клиентов и бронирований, сохранение PDF
"""

from datetime import date, timedelta
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from config.settings import config
from modules.bookings.models import Booking
from modules.customers.models import Customer
from modules.documents.formatters import letter_number
from modules.documents.models import InvoiceData, InvoiceItem, PassportLetterData

DEFAULT_DUE_DAYS = 7
DEFAULT_INVOICE_NOTES = (
    "Pembayaran dapat dilakukan secara bertahap. "
    "Pelunasan paling lambat 2 minggu sebelum keberangkatan."
)


class DocumentService:
    """Сборка данных для шаблонов и запись готовых файлов"""

    def __init__(self, output_directory: Optional[Path] = None):
        self.output_directory = Path(output_directory or config.export_dir)
        self._sequences: Dict[str, int] = {}

    def next_letter_number(self, prefix: str, today: Optional[date] = None) -> str:
        """Порядковый номер письма в рамках сессии: 001/PASPOR/UHT/10/2026"""
        self._sequences[prefix] = self._sequences.get(prefix, 0) + 1
        return letter_number(prefix, self._sequences[prefix], today or date.today())

    @staticmethod
    def invoice_for_booking(
        booking: Booking,
        customer: Customer,
        package_name: Optional[str],
        today: Optional[date] = None,
        due_date: Optional[date] = None,
        discount: float = 0.0,
        notes: Optional[str] = None
    ) -> InvoiceData:
        today = today or date.today()
        pax = booking.total_pax or 1
        return InvoiceData(
            invoice_number=f"INV-{booking.booking_code}",
            invoice_date=today,
            due_date=due_date or today + timedelta(days=DEFAULT_DUE_DAYS),
            customer_name=customer.full_name,
            customer_address=customer.address,
            customer_phone=customer.phone,
            customer_email=customer.email,
            items=[InvoiceItem(
                description=f"Paket {package_name or 'Umrah'} - {booking.room_type.value}",
                quantity=pax,
                unit_price=booking.base_price / pax,
            )],
            discount=discount,
            notes=notes or DEFAULT_INVOICE_NOTES,
        )

    @staticmethod
    def passport_letter_for_customer(
        customer: Customer,
        departure_date: Optional[date] = None,
        purpose: str = "Umrah"
    ) -> PassportLetterData:
        return PassportLetterData(
            customer_name=customer.full_name,
            nik=customer.nik,
            birth_place=customer.birth_place,
            birth_date=customer.birth_date,
            address=customer.address,
            phone=customer.phone,
            purpose=purpose,
            departure_date=departure_date,
        )

    def save_pdf(self, pdf: bytes, filename: str) -> Path:
        self.output_directory.mkdir(parents=True, exist_ok=True)
        if not filename.lower().endswith(".pdf"):
            filename = f"{filename}.pdf"
        output_path = self.output_directory / filename
        output_path.write_bytes(pdf)
        logger.info(f"Документ сохранен: {output_path}")
        return output_path
