"""
Раздел «Dokumen»: формирование сопроводительного письма в PDF
"""

from datetime import date

from loguru import logger
from PyQt5.QtWidgets import (
    QFormLayout, QHBoxLayout, QLabel, QLineEdit, QMessageBox, QPushButton,
    QTextEdit, QVBoxLayout, QWidget
)

from config.settings import config
from core.exceptions import AppError
from modules.documents.document_service import DocumentService
from modules.documents.models import GeneralLetterData, LetterRecipient
from modules.documents.templates import general_letter
from modules.styles.general_styles import (
    apply_button_style, apply_input_style, apply_label_style
)

LETTER_PREFIX = "UMUM"


class DocumentsWidget(QWidget):
    def __init__(self, document_service: DocumentService, parent=None):
        super().__init__(parent)
        self.document_service = document_service
        self.init_ui()

    def init_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(20, 20, 20, 20)

        header = QLabel("Surat Umum")
        apply_label_style(header, 'h1')
        main_layout.addWidget(header)

        form = QFormLayout()
        self.recipient_name = QLineEdit()
        self.recipient_position = QLineEdit()
        self.recipient_institution = QLineEdit()
        self.recipient_address = QLineEdit()
        self.subject_input = QLineEdit()
        self.signatory_name = QLineEdit()
        self.signatory_position = QLineEdit("Direktur")
        self.content_input = QTextEdit()
        for widget in (
            self.recipient_name, self.recipient_position, self.recipient_institution,
            self.recipient_address, self.subject_input, self.signatory_name,
            self.signatory_position, self.content_input,
        ):
            apply_input_style(widget)

        form.addRow("Kepada *", self.recipient_name)
        form.addRow("Jabatan", self.recipient_position)
        form.addRow("Instansi", self.recipient_institution)
        form.addRow("Alamat", self.recipient_address)
        form.addRow("Perihal *", self.subject_input)
        form.addRow("Isi Surat *", self.content_input)
        form.addRow("Penandatangan *", self.signatory_name)
        form.addRow("Jabatan Penandatangan", self.signatory_position)
        main_layout.addLayout(form)

        buttons = QHBoxLayout()
        buttons.addStretch()
        btn_generate = QPushButton("📄 Buat PDF")
        apply_button_style(btn_generate, 'primary')
        btn_generate.clicked.connect(self.generate)
        buttons.addWidget(btn_generate)
        main_layout.addLayout(buttons)

    def generate(self):
        required = (self.recipient_name, self.subject_input, self.signatory_name)
        if any(not widget.text().strip() for widget in required) or not self.content_input.toPlainText().strip():
            QMessageBox.warning(self, "Validasi", "Lengkapi kolom bertanda *")
            return

        today = date.today()
        data = GeneralLetterData(
            letter_number=self.document_service.next_letter_number(LETTER_PREFIX, today),
            letter_date=today,
            recipient=LetterRecipient(
                name=self.recipient_name.text().strip(),
                position=self.recipient_position.text().strip() or None,
                institution=self.recipient_institution.text().strip() or None,
                address=self.recipient_address.text().strip() or None,
            ),
            subject=self.subject_input.text().strip(),
            content=self.content_input.toPlainText().strip(),
            signatory_name=self.signatory_name.text().strip(),
            signatory_position=self.signatory_position.text().strip() or "Direktur",
        )
        try:
            pdf = general_letter(data, config.company)
            path = self.document_service.save_pdf(pdf, f"surat-{today:%Y%m%d}-{data.letter_number.split('/')[0]}")
        except (AppError, OSError) as e:
            logger.error(f"Ошибка формирования письма: {e}", exc_info=True)
            QMessageBox.critical(self, "Gagal membuat surat", str(e))
            return
        QMessageBox.information(self, "Surat Umum", f"File disimpan: {path}")
