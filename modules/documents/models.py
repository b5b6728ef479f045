"""
Данные шаблонов документов
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

PPN_RATE = 0.11


@dataclass
class BankInfo:
    bank_name: str = "Bank Syariah Indonesia (BSI)"
    account_number: str = "1234567890"
    account_name: str = "PT. Umrah Haji Travel"


@dataclass
class PassportLetterData:
    """Письмо в иммиграционную службу на оформление паспорта"""
    customer_name: str
    nik: Optional[str] = None
    birth_place: Optional[str] = None
    birth_date: Optional[date] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    purpose: str = "Umrah"
    departure_date: Optional[date] = None


@dataclass
class EmployeeLeaveLetterData:
    """Заявление сотрудника агентства на отпуск"""
    employee_name: str
    employee_position: str
    employee_nik: str
    start_date: date
    end_date: date
    reason: str
    destination: Optional[str] = None


@dataclass
class JamaahLeaveLetterData:
    """Справка работодателю паломника об отпуске на время поездки"""
    jamaah_name: str
    employer_name: str
    employer_institution: str
    employer_address: str
    start_date: date
    end_date: date
    nik: Optional[str] = None
    birth_place: Optional[str] = None
    birth_date: Optional[date] = None
    address: Optional[str] = None
    employer_position: Optional[str] = None
    purpose: str = "Umrah"


@dataclass
class InvoiceItem:
    description: str
    quantity: int
    unit_price: float

    @property
    def total(self) -> float:
        return self.quantity * self.unit_price


@dataclass
class InvoiceData:
    """
    Счет клиенту.

    Если include_ppn, налог PPN 11% начисляется на сумму после скидки.
    """
    invoice_number: str
    invoice_date: date
    due_date: date
    customer_name: str
    items: List[InvoiceItem] = field(default_factory=list)
    customer_address: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    discount: float = 0.0
    include_ppn: bool = False
    notes: Optional[str] = None
    bank_info: Optional[BankInfo] = field(default_factory=BankInfo)

    @property
    def subtotal(self) -> float:
        return sum(item.total for item in self.items)

    @property
    def tax(self) -> float:
        if not self.include_ppn:
            return 0.0
        return round((self.subtotal - self.discount) * PPN_RATE)

    @property
    def total(self) -> float:
        return self.subtotal - self.discount + self.tax


@dataclass
class LetterRecipient:
    name: str
    position: Optional[str] = None
    institution: Optional[str] = None
    address: Optional[str] = None


@dataclass
class GeneralLetterData:
    letter_number: str
    letter_date: date
    recipient: LetterRecipient
    subject: str
    content: str
    signatory_name: str
    signatory_position: str


@dataclass
class ETicketData:
    booking_code: str
    passenger_name: str
    package_name: str
    departure_date: date
    return_date: date
    departure_airport: str
    arrival_airport: str
    room_type: str = "Quad"
    passport_number: Optional[str] = None
    airline: Optional[str] = None
    flight_number: Optional[str] = None
    departure_time: Optional[str] = None
    hotel_makkah: Optional[str] = None
    hotel_madinah: Optional[str] = None


@dataclass
class UmrahCertificateData:
    certificate_number: str
    participant_name: str
    package_name: str
    departure_date: date
    return_date: date
    passport_number: Optional[str] = None
    birth_place: Optional[str] = None
    birth_date: Optional[date] = None
