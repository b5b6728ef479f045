"""
Раздел «Jamaah»: список клиентов, редактирование и письмо на паспорт
"""

from typing import List, Optional

from loguru import logger
from PyQt5.QtWidgets import (
    QDialog, QHBoxLayout, QLabel, QLineEdit, QMessageBox, QPushButton,
    QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget
)

from core.date_utils import format_date_id
from core.exceptions import AppError
from modules.customers.customer_edit_dialog import CustomerEditDialog
from modules.customers.customer_repository import CustomerRepository
from modules.customers.customer_service import CustomerService
from modules.customers.models import Customer
from modules.documents.document_service import DocumentService
from modules.documents.templates import passport_request_letter
from modules.styles.general_styles import (
    apply_button_style, apply_input_style, apply_label_style, apply_table_style
)

COLUMNS = ["Nama", "Telepon", "Email", "No. Paspor", "Berlaku s/d", "Kota"]


class CustomersWidget(QWidget):
    def __init__(
        self,
        customer_repo: CustomerRepository,
        customer_service: CustomerService,
        document_service: DocumentService,
        parent=None
    ):
        super().__init__(parent)
        self.customer_repo = customer_repo
        self.customer_service = customer_service
        self.document_service = document_service
        self.customers: List[Customer] = []
        self.init_ui()
        self.load_customers()

    def init_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(20, 20, 20, 20)
        main_layout.setSpacing(10)

        header = QLabel("Data Jamaah")
        apply_label_style(header, 'h1')
        main_layout.addWidget(header)

        toolbar = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Cari nama, telepon, no. paspor...")
        apply_input_style(self.search_input)
        self.search_input.returnPressed.connect(self.load_customers)
        toolbar.addWidget(self.search_input)

        btn_refresh = QPushButton("Muat Ulang")
        apply_button_style(btn_refresh, 'outline')
        btn_refresh.clicked.connect(self.load_customers)
        toolbar.addWidget(btn_refresh)

        btn_edit = QPushButton("Edit")
        apply_button_style(btn_edit, 'primary')
        btn_edit.clicked.connect(self.edit_selected)
        toolbar.addWidget(btn_edit)

        btn_letter = QPushButton("📄 Surat Paspor")
        apply_button_style(btn_letter, 'outline')
        btn_letter.clicked.connect(self.passport_letter_for_selected)
        toolbar.addWidget(btn_letter)
        main_layout.addLayout(toolbar)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setSelectionMode(QTableWidget.SingleSelection)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.doubleClicked.connect(lambda _: self.edit_selected())
        apply_table_style(self.table)
        main_layout.addWidget(self.table)

    def load_customers(self):
        try:
            self.customers = self.customer_repo.search_customers(self.search_input.text())
        except AppError as e:
            logger.error(f"Ошибка загрузки клиентов: {e}", exc_info=True)
            QMessageBox.critical(self, "Gagal memuat jamaah", str(e))
            return

        self.table.setRowCount(len(self.customers))
        for row, customer in enumerate(self.customers):
            values = [
                customer.full_name,
                customer.phone,
                customer.email,
                customer.passport_number,
                format_date_id(customer.passport_expiry) if customer.passport_expiry else None,
                customer.city,
            ]
            for col, value in enumerate(values):
                self.table.setItem(row, col, QTableWidgetItem(value or "-"))

    def _selected_customer(self) -> Optional[Customer]:
        row = self.table.currentRow()
        if row < 0 or row >= len(self.customers):
            QMessageBox.information(self, "Jamaah", "Pilih jamaah terlebih dahulu")
            return None
        return self.customers[row]

    def edit_selected(self):
        customer = self._selected_customer()
        if customer is None:
            return
        dialog = CustomerEditDialog(customer, self.customer_service, parent=self)
        if dialog.exec_() == QDialog.Accepted:
            self.load_customers()

    def passport_letter_for_selected(self):
        customer = self._selected_customer()
        if customer is None:
            return
        try:
            number = self.document_service.next_letter_number("PASPOR")
            data = self.document_service.passport_letter_for_customer(customer)
            path = self.document_service.save_pdf(
                passport_request_letter(data, number), f"surat-paspor-{customer.id}"
            )
        except (AppError, OSError) as e:
            logger.error(f"Ошибка формирования письма для клиента {customer.id}: {e}", exc_info=True)
            QMessageBox.critical(self, "Gagal membuat surat", str(e))
            return
        QMessageBox.information(self, "Surat Paspor", f"File disimpan: {path}")
