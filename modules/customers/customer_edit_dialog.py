"""
Форма редактирования клиента с проверкой срока действия паспорта
"""

from datetime import date
from typing import Any, Dict, Optional

from loguru import logger
from PyQt5.QtCore import QDate
from PyQt5.QtWidgets import (
    QCheckBox, QComboBox, QDateEdit, QDialog, QFormLayout, QHBoxLayout, QLabel,
    QLineEdit, QMessageBox, QPushButton, QVBoxLayout
)

from core.exceptions import AppError
from modules.customers.customer_service import CustomerService
from modules.customers.models import Customer
from modules.styles.general_styles import (
    apply_button_style, apply_combobox_style, apply_input_style, apply_label_style,
    apply_notice_style
)
from modules.styles.ui_config import configure_dialog

TEXT_FIELDS = (
    ("full_name", "Nama Lengkap *"),
    ("phone", "Telepon"),
    ("email", "Email"),
    ("nik", "NIK"),
    ("passport_number", "No. Paspor"),
    ("birth_place", "Tempat Lahir"),
    ("address", "Alamat"),
    ("city", "Kota"),
    ("province", "Provinsi"),
)

GENDERS = {"L": "Laki-laki", "P": "Perempuan"}


def _to_qdate(value: Optional[date]) -> QDate:
    if value is None:
        return QDate.currentDate()
    return QDate(value.year, value.month, value.day)


class CustomerEditDialog(QDialog):
    """
    Редактирование клиента. Предупреждение о паспорте пересчитывается
    при каждом изменении даты окончания срока действия.
    """

    def __init__(self, customer: Customer, customer_service: CustomerService, parent=None):
        super().__init__(parent)
        self.customer = customer
        self.customer_service = customer_service
        self.saved_customer: Optional[Customer] = None
        self.inputs: Dict[str, QLineEdit] = {}
        configure_dialog(self, f"Edit Jamaah — {customer.full_name}", size_preset="large")
        self.init_ui()
        self.update_passport_notice()

    def init_ui(self):
        layout = QVBoxLayout(self)
        title = QLabel("Data Jamaah")
        apply_label_style(title, 'h2')
        layout.addWidget(title)

        form = QFormLayout()
        for name, label in TEXT_FIELDS:
            line_edit = QLineEdit(getattr(self.customer, name) or "")
            apply_input_style(line_edit)
            self.inputs[name] = line_edit
            form.addRow(label, line_edit)

        self.gender_combo = QComboBox()
        self.gender_combo.addItem("-", None)
        for key, label in GENDERS.items():
            self.gender_combo.addItem(label, key)
        index = self.gender_combo.findData(self.customer.gender)
        if index >= 0:
            self.gender_combo.setCurrentIndex(index)
        apply_combobox_style(self.gender_combo)
        form.addRow("Jenis Kelamin", self.gender_combo)

        self.birth_date_enabled, self.birth_date_edit = self._date_row(self.customer.birth_date)
        form.addRow("Tanggal Lahir", self._wrap(self.birth_date_enabled, self.birth_date_edit))

        self.expiry_enabled, self.expiry_edit = self._date_row(self.customer.passport_expiry)
        self.expiry_edit.dateChanged.connect(self.update_passport_notice)
        self.expiry_enabled.toggled.connect(self.update_passport_notice)
        form.addRow("Masa Berlaku Paspor", self._wrap(self.expiry_enabled, self.expiry_edit))
        layout.addLayout(form)

        self.passport_notice = QLabel()
        self.passport_notice.setWordWrap(True)
        layout.addWidget(self.passport_notice)
        layout.addStretch()

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch()
        btn_cancel = QPushButton("Batal")
        apply_button_style(btn_cancel, 'outline')
        btn_cancel.clicked.connect(self.reject)
        buttons_layout.addWidget(btn_cancel)
        btn_save = QPushButton("Simpan")
        apply_button_style(btn_save, 'primary')
        btn_save.clicked.connect(self.save)
        buttons_layout.addWidget(btn_save)
        layout.addLayout(buttons_layout)

    @staticmethod
    def _date_row(value: Optional[date]):
        enabled = QCheckBox()
        enabled.setChecked(value is not None)
        edit = QDateEdit(_to_qdate(value))
        edit.setCalendarPopup(True)
        edit.setDisplayFormat("dd/MM/yyyy")
        edit.setEnabled(value is not None)
        enabled.toggled.connect(edit.setEnabled)
        apply_input_style(edit)
        return enabled, edit

    @staticmethod
    def _wrap(checkbox: QCheckBox, edit: QDateEdit) -> QHBoxLayout:
        row = QHBoxLayout()
        row.addWidget(checkbox)
        row.addWidget(edit)
        row.addStretch()
        return row

    def _passport_expiry(self) -> Optional[date]:
        if not self.expiry_enabled.isChecked():
            return None
        return self.expiry_edit.date().toPyDate()

    def update_passport_notice(self, *args):
        try:
            result = self.customer_service.check_passport(
                self.customer.id, self._passport_expiry(), date.today()
            )
        except AppError as e:
            logger.error(f"Не удалось проверить паспорт клиента {self.customer.id}: {e}")
            result = None

        if result is None:
            self.passport_notice.hide()
            return
        text = result.message
        if result.other_affected:
            text += f" (+{result.other_affected} keberangkatan lain terdampak)"
        self.passport_notice.setText(text)
        apply_notice_style(self.passport_notice, result.severity.value)
        self.passport_notice.show()

    def get_values(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {
            name: (line_edit.text().strip() or None) for name, line_edit in self.inputs.items()
        }
        values["full_name"] = self.inputs["full_name"].text().strip()
        values["gender"] = self.gender_combo.currentData()
        values["birth_date"] = (
            self.birth_date_edit.date().toPyDate() if self.birth_date_enabled.isChecked() else None
        )
        values["passport_expiry"] = self._passport_expiry()
        return values

    def save(self):
        try:
            self.saved_customer = self.customer_service.save(self.customer.id, self.get_values())
        except AppError as e:
            QMessageBox.warning(self, "Gagal menyimpan", str(e))
            return
        self.accept()
