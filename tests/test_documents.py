"""
Тесты формирования документов
"""

from datetime import date, datetime
from unittest.mock import patch

import pytest

from config.settings import CompanyConfig
from core.exceptions import DocumentGenerationError
from modules.bookings.models import Booking, RoomType
from modules.customers.models import Customer
from modules.documents import (
    DocumentService,
    ETicketData,
    EmployeeLeaveLetterData,
    GeneralLetterData,
    InvoiceData,
    InvoiceItem,
    JamaahLeaveLetterData,
    LetterRecipient,
    PassportLetterData,
    UmrahCertificateData,
    e_ticket,
    employee_leave_letter,
    format_rupiah,
    general_letter,
    invoice,
    jamaah_leave_letter,
    letter_number,
    passport_request_letter,
    umrah_certificate,
)
from modules.documents.formatters import display

TODAY = date(2026, 10, 17)
COMPANY = CompanyConfig(name="PT. Barokah Travel", city="Bandung")


class TestFormatters:
    def test_format_rupiah(self):
        assert format_rupiah(1234567) == "Rp 1.234.567"
        assert format_rupiah(0) == "Rp 0"
        assert format_rupiah(999.5) == "Rp 1.000"
        assert format_rupiah(-2500000) == "-Rp 2.500.000"
        assert format_rupiah(None) == "-"

    def test_letter_number(self):
        assert letter_number("PASPOR", 7, TODAY) == "007/PASPOR/UHT/10/2026"

    def test_display(self):
        assert display(None) == "-"
        assert display("  ") == "-"
        assert display(date(2026, 1, 5)) == "5 Januari 2026"
        assert display(3) == "3"


class TestInvoiceData:
    def test_totals_without_ppn(self):
        data = InvoiceData(
            invoice_number="INV-1",
            invoice_date=TODAY,
            due_date=TODAY,
            customer_name="Ahmad",
            items=[InvoiceItem("Paket Umrah", 2, 25000000), InvoiceItem("Perlengkapan", 2, 500000)],
            discount=1000000,
        )
        assert data.subtotal == 51000000
        assert data.tax == 0
        assert data.total == 50000000

    def test_ppn_after_discount(self):
        data = InvoiceData(
            invoice_number="INV-1",
            invoice_date=TODAY,
            due_date=TODAY,
            customer_name="Ahmad",
            items=[InvoiceItem("Paket Umrah", 1, 10000000)],
            discount=1000000,
            include_ppn=True,
        )
        assert data.tax == 990000
        assert data.total == 9990000


class TestTemplates:
    def test_passport_request_letter(self):
        data = PassportLetterData(
            customer_name="Siti Aminah",
            nik="3273010101900001",
            birth_place="Bandung",
            birth_date=date(1990, 1, 1),
            address="Jl. Merdeka No. 1\nBandung",
            departure_date=date(2026, 12, 1),
        )
        pdf = passport_request_letter(data, "001/PASPOR/UHT/10/2026", COMPANY, TODAY)
        assert pdf.startswith(b"%PDF")

    def test_jamaah_leave_letter(self):
        data = JamaahLeaveLetterData(
            jamaah_name="Budi & Co <test>",
            employer_name="Bapak Direktur",
            employer_institution="PT. Maju Jaya",
            employer_address="Jakarta",
            start_date=date(2026, 12, 1),
            end_date=date(2026, 12, 12),
        )
        assert jamaah_leave_letter(data, "002/CUTI/UHT/10/2026", COMPANY, TODAY).startswith(b"%PDF")

    @pytest.mark.parametrize("destination", [None, "Yogyakarta"])
    def test_employee_leave_letter(self, destination):
        data = EmployeeLeaveLetterData(
            employee_name="Rina Marlina",
            employee_position="Staf Ticketing",
            employee_nik="3273010101900001",
            start_date=date(2026, 11, 2),
            end_date=date(2026, 11, 6),
            reason="Keperluan keluarga",
            destination=destination,
        )
        pdf = employee_leave_letter(data, "003/CUTI-K/UHT/10/2026", COMPANY, TODAY)
        assert pdf.startswith(b"%PDF")

    def test_invoice(self):
        data = InvoiceData(
            invoice_number="INV-UHT-001",
            invoice_date=TODAY,
            due_date=date(2026, 10, 24),
            customer_name="Ahmad",
            items=[InvoiceItem("Paket Umrah - quad", 1, 28500000)],
            include_ppn=True,
            notes="Lunas H-14",
        )
        assert invoice(data, COMPANY).startswith(b"%PDF")

    def test_general_letter(self):
        data = GeneralLetterData(
            letter_number="003/UMUM/UHT/10/2026",
            letter_date=TODAY,
            recipient=LetterRecipient(name="Kepala Dinas", address="Bandung"),
            subject="Pemberitahuan",
            content="Baris satu\nBaris dua",
            signatory_name="H. Ahmad",
            signatory_position="Direktur",
        )
        assert general_letter(data, COMPANY).startswith(b"%PDF")

    def test_e_ticket(self):
        data = ETicketData(
            booking_code="UHT-2026-0001",
            passenger_name="Siti Aminah",
            package_name="Umrah Desember",
            departure_date=date(2026, 12, 1),
            return_date=date(2026, 12, 12),
            departure_airport="CGK",
            arrival_airport="JED",
            airline="Saudia",
        )
        pdf = e_ticket(data, COMPANY, printed_at=datetime(2026, 10, 17, 9, 0))
        assert pdf.startswith(b"%PDF")

    def test_umrah_certificate(self):
        data = UmrahCertificateData(
            certificate_number="CERT-001",
            participant_name="Siti Aminah",
            package_name="Umrah Desember",
            departure_date=date(2026, 12, 1),
            return_date=date(2026, 12, 12),
        )
        assert umrah_certificate(data, COMPANY, TODAY).startswith(b"%PDF")

    def test_build_failure_wrapped(self):
        data = UmrahCertificateData(
            certificate_number="CERT-001",
            participant_name="Siti",
            package_name="Umrah",
            departure_date=date(2026, 12, 1),
            return_date=date(2026, 12, 12),
        )
        with patch("modules.documents.pdf_builder.SimpleDocTemplate.build", side_effect=ValueError("layout")):
            with pytest.raises(DocumentGenerationError):
                umrah_certificate(data, COMPANY, TODAY)


class TestDocumentService:
    def test_letter_numbers_are_sequential_per_prefix(self, tmp_path):
        service = DocumentService(tmp_path)

        assert service.next_letter_number("PASPOR", TODAY) == "001/PASPOR/UHT/10/2026"
        assert service.next_letter_number("PASPOR", TODAY) == "002/PASPOR/UHT/10/2026"
        assert service.next_letter_number("CUTI", TODAY) == "001/CUTI/UHT/10/2026"

    def test_invoice_for_booking(self):
        booking = Booking(
            id="b-1",
            booking_code="UHT-2026-0001",
            customer_id="c-1",
            departure_id="d-1",
            base_price=57000000,
            total_price=57000000,
            room_type=RoomType.DOUBLE,
            total_pax=2,
            adult_count=2,
        )
        customer = Customer(id="c-1", full_name="Ahmad", phone="0812")

        data = DocumentService.invoice_for_booking(booking, customer, "Umrah Desember", today=TODAY)

        assert data.invoice_number == "INV-UHT-2026-0001"
        assert data.due_date == date(2026, 10, 24)
        assert data.items[0].description == "Paket Umrah Desember - double"
        assert data.items[0].quantity == 2
        assert data.subtotal == 57000000
        assert data.notes

    def test_passport_letter_for_customer(self):
        customer = Customer(id="c-1", full_name="Siti", nik="327301", birth_place="Bandung")
        data = DocumentService.passport_letter_for_customer(customer, date(2026, 12, 1))
        assert data.customer_name == "Siti"
        assert data.nik == "327301"
        assert data.purpose == "Umrah"

    def test_save_pdf(self, tmp_path):
        service = DocumentService(tmp_path / "out")
        path = service.save_pdf(b"%PDF-1.4 test", "surat")

        assert path.name == "surat.pdf"
        assert path.read_bytes() == b"%PDF-1.4 test"
