"""
Шаблоны документов: письма, счет, электронный билет, сертификат.

Каждый шаблон возвращает байты PDF.
"""

from datetime import date, datetime
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.platypus import Table, TableStyle

from config.settings import CompanyConfig
from core.date_utils import format_date_id
from modules.documents.formatters import format_rupiah
from modules.documents.models import (
    ETicketData,
    EmployeeLeaveLetterData,
    GeneralLetterData,
    InvoiceData,
    JamaahLeaveLetterData,
    PPN_RATE,
    PassportLetterData,
    UmrahCertificateData,
)
from modules.documents.pdf_builder import ACCENT_COLOR, DocumentBuilder, text

CLOSING_SENTENCE = (
    "Demikian surat ini kami sampaikan. Atas perhatian dan kerjasamanya, "
    "kami ucapkan terima kasih."
)

PASSPORT_ATTACHMENTS = [
    "Fotokopi KTP",
    "Fotokopi Kartu Keluarga",
    "Fotokopi Akta Kelahiran",
    "Pas Foto 4x6 (latar belakang putih)",
]

ETICKET_NOTES = [
    "Harap tiba di bandara minimal 4 jam sebelum keberangkatan",
    "Pastikan paspor masih berlaku minimal 6 bulan dari tanggal keberangkatan",
    "Bawa dokumen asli: Paspor, Visa, Buku Kuning (Vaksin Meningitis)",
    "E-Ticket ini wajib dicetak dan dibawa saat keberangkatan",
]


def _birth(place: Optional[str], birth_date: Optional[date]) -> str:
    return f"{place or '-'}, {format_date_id(birth_date)}"


def passport_request_letter(
    data: PassportLetterData,
    number: str,
    company: Optional[CompanyConfig] = None,
    today: Optional[date] = None
) -> bytes:
    """Письмо в иммиграционную службу с просьбой оформить паспорт паломнику"""
    today = today or date.today()
    builder = DocumentBuilder(company)
    company = builder.company

    rows = [
        ("Nama Lengkap", data.customer_name),
        ("NIK", data.nik),
        ("Tempat/Tgl Lahir", _birth(data.birth_place, data.birth_date)),
        ("Alamat", data.address),
        ("No. Telepon", data.phone),
        ("Tujuan Perjalanan", data.purpose),
    ]
    if data.departure_date:
        rows.append(("Rencana Berangkat", format_date_id(data.departure_date)))

    attachments = "<br/>".join(f"{index}. {item}" for index, item in enumerate(PASSPORT_ATTACHMENTS, start=1))
    story = [
        builder.letter_meta(number, today, "Fotokopi KTP, KK, Akta Lahir", "Permohonan Pembuatan Paspor"),
        builder.spacer(),
        *builder.recipient(["Kepala Kantor Imigrasi", "di Tempat"]),
        builder.paragraph("Dengan hormat,"),
        builder.paragraph(
            f"Yang bertanda tangan di bawah ini, Direktur {escape(company.name)}, dengan ini mengajukan "
            f"permohonan pembuatan paspor untuk keperluan perjalanan ibadah Umrah/Haji atas nama:"
        ),
        builder.field_table(rows),
        builder.spacer(4),
        builder.paragraph(
            f"Yang bersangkutan adalah calon jamaah yang telah terdaftar di {escape(company.name)} dan "
            f"memerlukan paspor untuk keperluan perjalanan ibadah ke Tanah Suci."
        ),
        builder.paragraph(f"Bersama ini kami lampirkan dokumen pendukung:<br/>{attachments}"),
        builder.paragraph(CLOSING_SENTENCE),
        builder.signature(today, "Hormat kami,", company.name, "Direktur"),
    ]
    return builder.build(story, "Surat Permohonan Paspor")


def employee_leave_letter(
    data: EmployeeLeaveLetterData,
    number: str,
    company: Optional[CompanyConfig] = None,
    today: Optional[date] = None
) -> bytes:
    """Заявление сотрудника на отпуск с местом для визы руководителя"""
    today = today or date.today()
    builder = DocumentBuilder(company)

    rows = [
        ("Tanggal Mulai", format_date_id(data.start_date)),
        ("Tanggal Selesai", format_date_id(data.end_date)),
        ("Alasan Cuti", data.reason),
    ]
    if data.destination:
        rows.append(("Tujuan/Alamat", data.destination))

    story = [
        builder.letter_meta(number, today, "-", "Permohonan Cuti Karyawan"),
        builder.spacer(),
        builder.title("SURAT PERMOHONAN CUTI KARYAWAN"),
        builder.paragraph("Yang bertanda tangan di bawah ini:"),
        builder.field_table([
            ("Nama", data.employee_name),
            ("NIK/NIP", data.employee_nik),
            ("Jabatan", data.employee_position),
        ]),
        builder.spacer(4),
        builder.paragraph("Dengan ini mengajukan permohonan cuti kerja terhitung mulai:"),
        builder.field_table(rows),
        builder.spacer(4),
        builder.paragraph(
            "Demikian surat permohonan cuti ini saya ajukan. Atas perhatian dan persetujuan "
            "Bapak/Ibu, saya ucapkan terima kasih."
        ),
        builder.signature(today, "Hormat saya,", data.employee_name, None),
        builder.spacer(),
        builder.paragraph("Disetujui oleh:", 'Normal'),
        builder.spacer(12),
        builder.paragraph("_______________________<br/>Atasan Langsung", 'Normal'),
    ]
    return builder.build(story, "Surat Permohonan Cuti Karyawan")


def jamaah_leave_letter(
    data: JamaahLeaveLetterData,
    number: str,
    company: Optional[CompanyConfig] = None,
    today: Optional[date] = None
) -> bytes:
    """Справка работодателю паломника для отпуска на время ибадата"""
    today = today or date.today()
    builder = DocumentBuilder(company)
    company = builder.company
    purpose = escape(data.purpose)

    story = [
        builder.letter_meta(number, today, "Fotokopi KTP, Paspor", f"Permohonan Izin Cuti {data.purpose}"),
        builder.spacer(),
        *builder.recipient([
            data.employer_name,
            data.employer_position,
            data.employer_institution,
            f"di {data.employer_address}",
        ]),
        builder.title("SURAT KETERANGAN CUTI IBADAH"),
        builder.paragraph("Dengan hormat,"),
        builder.paragraph(
            f"Yang bertanda tangan di bawah ini, Direktur {escape(company.name)}, "
            f"dengan ini menerangkan bahwa:"
        ),
        builder.field_table([
            ("Nama Lengkap", data.jamaah_name),
            ("NIK", data.nik),
            ("Tempat/Tgl Lahir", _birth(data.birth_place, data.birth_date)),
            ("Alamat", data.address),
        ]),
        builder.spacer(4),
        builder.paragraph(
            f"Adalah calon jamaah {purpose} yang terdaftar di {escape(company.name)} dan akan "
            f"menunaikan ibadah {purpose} ke Tanah Suci dengan jadwal sebagai berikut:"
        ),
        builder.field_table([
            ("Tanggal Berangkat", format_date_id(data.start_date)),
            ("Tanggal Kembali", format_date_id(data.end_date)),
        ]),
        builder.spacer(4),
        builder.paragraph(
            f"Sehubungan dengan hal tersebut, kami mohon kesediaan Bapak/Ibu untuk dapat memberikan "
            f"izin cuti kepada yang bersangkutan selama menunaikan ibadah {purpose}."
        ),
        builder.paragraph(CLOSING_SENTENCE),
        builder.signature(today, "Hormat kami,", company.name, "Direktur"),
    ]
    return builder.build(story, "Surat Keterangan Cuti Ibadah")


def _items_table(data: InvoiceData) -> Table:
    rows = [["No", "Deskripsi", "Qty", "Harga Satuan", "Total"]]
    for index, item in enumerate(data.items, start=1):
        rows.append([
            str(index),
            item.description,
            str(item.quantity),
            format_rupiah(item.unit_price),
            format_rupiah(item.total),
        ])
    table = Table(rows, colWidths=[12 * mm, None, 15 * mm, 35 * mm, 35 * mm], repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), ACCENT_COLOR),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('ALIGN', (0, 0), (0, -1), 'CENTER'),
        ('ALIGN', (2, 0), (2, -1), 'CENTER'),
        ('ALIGN', (3, 1), (-1, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.lightgrey),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
    ]))
    return table


def _totals_table(data: InvoiceData) -> Table:
    rows = [["Subtotal:", format_rupiah(data.subtotal)]]
    if data.discount:
        rows.append(["Diskon:", f"-{format_rupiah(data.discount)}"])
    if data.include_ppn:
        rows.append([f"PPN ({int(PPN_RATE * 100)}%):", format_rupiah(data.tax)])
    rows.append(["TOTAL:", format_rupiah(data.total)])
    table = Table(rows, colWidths=[35 * mm, 40 * mm], hAlign='RIGHT')
    table.setStyle(TableStyle([
        ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
        ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ('LINEABOVE', (0, -1), (-1, -1), 0.8, colors.black),
    ]))
    return table


def invoice(data: InvoiceData, company: Optional[CompanyConfig] = None) -> bytes:
    """Счет: позиции, подытог, скидка, PPN, итог, реквизиты банка и примечания"""
    builder = DocumentBuilder(company)

    header_left = [
        builder.paragraph(f"No. Invoice: {escape(data.invoice_number)}", 'Normal'),
        builder.paragraph(f"Tanggal: {format_date_id(data.invoice_date)}", 'Normal'),
        builder.paragraph(f"Jatuh Tempo: {format_date_id(data.due_date)}", 'Normal'),
    ]
    header_right = [
        builder.paragraph("Kepada:", 'Normal'),
        builder.paragraph(f"<b>{text(data.customer_name)}</b>", 'Normal'),
        builder.paragraph(text(data.customer_address), 'Normal'),
        builder.paragraph(f"Telp: {text(data.customer_phone)}", 'Normal'),
    ]
    if data.customer_email:
        header_right.append(builder.paragraph(f"Email: {text(data.customer_email)}", 'Normal'))
    header = Table([[header_left, header_right]], colWidths=[None, 75 * mm])
    header.setStyle(TableStyle([('VALIGN', (0, 0), (-1, -1), 'TOP')]))

    story = [
        builder.title("INVOICE"),
        header,
        builder.spacer(),
        _items_table(data),
        builder.spacer(4),
        _totals_table(data),
    ]
    if data.bank_info:
        story.extend([
            builder.paragraph("Pembayaran dapat ditransfer ke:", 'SectionHeading'),
            builder.field_table([
                ("Bank", data.bank_info.bank_name),
                ("No. Rekening", data.bank_info.account_number),
                ("Atas Nama", data.bank_info.account_name),
            ], label_width=30 * mm),
        ])
    if data.notes:
        story.extend([
            builder.paragraph("Catatan:", 'SectionHeading'),
            builder.paragraph(text(data.notes)),
        ])
    return builder.build(story, f"Invoice {data.invoice_number}")


def general_letter(data: GeneralLetterData, company: Optional[CompanyConfig] = None) -> bytes:
    builder = DocumentBuilder(company)
    recipient = data.recipient
    story = [
        builder.letter_meta(data.letter_number, data.letter_date, "-", data.subject),
        builder.spacer(),
        *builder.recipient([
            recipient.name,
            recipient.position,
            recipient.institution,
            f"di {recipient.address}" if recipient.address else None,
        ]),
        builder.paragraph("Dengan hormat,"),
        builder.paragraph(text(data.content)),
        builder.paragraph(CLOSING_SENTENCE),
        builder.signature(data.letter_date, "Hormat kami,", data.signatory_name, data.signatory_position),
    ]
    return builder.build(story, data.subject)


def e_ticket(
    data: ETicketData,
    company: Optional[CompanyConfig] = None,
    printed_at: Optional[datetime] = None
) -> bytes:
    """Электронный билет паломника: пассажир, перелет, проживание, памятка"""
    builder = DocumentBuilder(company, printed_at=printed_at, letterhead=False)
    company = builder.company

    departure_rows = [
        ("Tanggal", format_date_id(data.departure_date)),
        ("Waktu", data.departure_time),
        ("Dari", data.departure_airport),
        ("Ke", data.arrival_airport),
    ]
    if data.airline:
        departure_rows.append(("Maskapai", data.airline))
    if data.flight_number:
        departure_rows.append(("No. Penerbangan", data.flight_number))

    accommodation_rows = []
    if data.hotel_makkah:
        accommodation_rows.append(("Hotel Makkah", data.hotel_makkah))
    if data.hotel_madinah:
        accommodation_rows.append(("Hotel Madinah", data.hotel_madinah))
    accommodation_rows.append(("Tipe Kamar", data.room_type))

    notes = "<br/>".join(f"&bull; {escape(note)}" for note in ETICKET_NOTES)
    story = [
        builder.paragraph("E-TICKET", 'DocTitle'),
        builder.paragraph(escape(company.name), 'Centered'),
        builder.paragraph(f"Booking Code: <b>{escape(data.booking_code)}</b>", 'Centered'),
        builder.spacer(),
        builder.paragraph("INFORMASI PENUMPANG", 'SectionHeading'),
        builder.field_table([
            ("Nama Penumpang", data.passenger_name),
            ("No. Paspor", data.passport_number),
            ("Paket", data.package_name),
        ]),
        builder.paragraph("KEBERANGKATAN", 'SectionHeading'),
        builder.field_table(departure_rows),
        builder.paragraph("KEPULANGAN", 'SectionHeading'),
        builder.field_table([("Tanggal", format_date_id(data.return_date))]),
        builder.paragraph("INFORMASI AKOMODASI", 'SectionHeading'),
        builder.field_table(accommodation_rows),
        builder.paragraph("CATATAN PENTING:", 'SectionHeading'),
        builder.paragraph(notes),
        builder.paragraph(f"{escape(company.phone)} | {escape(company.email)}", 'RightAligned'),
    ]
    return builder.build(story, f"E-Ticket {data.booking_code}")


def umrah_certificate(
    data: UmrahCertificateData,
    company: Optional[CompanyConfig] = None,
    today: Optional[date] = None
) -> bytes:
    today = today or date.today()
    builder = DocumentBuilder(company, letterhead=False)
    company = builder.company

    period = (
        f"Periode: {format_date_id(data.departure_date).rsplit(' ', 1)[0]} - "
        f"{format_date_id(data.return_date)}"
    )
    story = [
        builder.spacer(20),
        builder.paragraph('<font size="28"><b>SERTIFIKAT</b></font>', 'Centered'),
        builder.spacer(8),
        builder.paragraph('<font size="18">IBADAH UMRAH</font>', 'Centered'),
        builder.spacer(4),
        builder.paragraph(f"No. {escape(data.certificate_number)}", 'Centered'),
        builder.spacer(10),
        builder.paragraph("Dengan ini menerangkan bahwa:", 'Centered'),
        builder.spacer(6),
        builder.paragraph(f'<font size="20"><b>{escape(data.participant_name.upper())}</b></font>', 'Centered'),
        builder.spacer(8),
        builder.paragraph(f"No. Paspor: {text(data.passport_number)}", 'Centered'),
        builder.paragraph(
            f"Tempat/Tanggal Lahir: {escape(_birth(data.birth_place, data.birth_date))}", 'Centered'
        ),
        builder.spacer(8),
        builder.paragraph(
            "Telah menunaikan Ibadah Umrah ke Tanah Suci Makkah Al-Mukarramah "
            "dan Madinah Al-Munawwarah",
            'Centered',
        ),
        builder.paragraph(period, 'Centered'),
        builder.paragraph(f"Paket: {escape(data.package_name)}", 'Centered'),
        builder.spacer(8),
        builder.paragraph(
            "Semoga Ibadah Umrah yang telah dilaksanakan menjadi Umrah yang Mabrur<br/>"
            "dan diterima di sisi Allah SWT. Aamiin.",
            'Centered',
        ),
        builder.spacer(10),
        builder.signature(today, company.name, "Direktur", None),
        builder.spacer(6),
        builder.paragraph(
            f"{escape(company.address)} | {escape(company.phone)} | {escape(company.email)}", 'Centered'
        ),
    ]
    return builder.build(story, f"Sertifikat Umrah {data.certificate_number}")
