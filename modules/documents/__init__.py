"""
Модуль документов: письма, счета, билеты и сертификаты в PDF
"""

from modules.documents.document_service import DocumentService
from modules.documents.formatters import format_rupiah, letter_number
from modules.documents.models import (
    BankInfo,
    ETicketData,
    EmployeeLeaveLetterData,
    GeneralLetterData,
    InvoiceData,
    InvoiceItem,
    JamaahLeaveLetterData,
    LetterRecipient,
    PassportLetterData,
    UmrahCertificateData,
)
from modules.documents.templates import (
    e_ticket,
    employee_leave_letter,
    general_letter,
    invoice,
    jamaah_leave_letter,
    passport_request_letter,
    umrah_certificate,
)

__all__ = [
    'DocumentService',
    'format_rupiah',
    'letter_number',
    'BankInfo',
    'ETicketData',
    'EmployeeLeaveLetterData',
    'GeneralLetterData',
    'InvoiceData',
    'InvoiceItem',
    'JamaahLeaveLetterData',
    'LetterRecipient',
    'PassportLetterData',
    'UmrahCertificateData',
    'e_ticket',
    'employee_leave_letter',
    'general_letter',
    'invoice',
    'jamaah_leave_letter',
    'passport_request_letter',
    'umrah_certificate',
]
