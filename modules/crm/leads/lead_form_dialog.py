"""
Форма создания и редактирования лида
"""

from typing import Any, Dict, List, Optional

from PyQt5.QtWidgets import (
    QComboBox, QDialog, QFormLayout, QHBoxLayout, QLineEdit, QMessageBox,
    QPushButton, QTextEdit, QVBoxLayout
)

from modules.bookings.models import Package
from modules.crm.leads.models import LEAD_SOURCES, Lead
from modules.styles.general_styles import (
    apply_button_style, apply_combobox_style, apply_input_style
)
from modules.styles.ui_config import configure_dialog


class LeadFormDialog(QDialog):
    """
    Форма лида. Без lead: создание (с первой заметкой),
    с lead: редактирование контактных полей.
    """

    def __init__(self, packages: List[Package], lead: Optional[Lead] = None, parent=None):
        super().__init__(parent)
        self.packages = packages
        self.lead = lead
        self.init_ui()

    def init_ui(self):
        title = "Edit Lead" if self.lead else "Tambah Lead"
        configure_dialog(self, title, size_preset="medium")

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.name_input = QLineEdit(self.lead.full_name if self.lead else "")
        self.phone_input = QLineEdit((self.lead.phone if self.lead else None) or "")
        self.email_input = QLineEdit((self.lead.email if self.lead else None) or "")
        for widget in (self.name_input, self.phone_input, self.email_input):
            apply_input_style(widget)

        self.source_combo = QComboBox()
        self.source_combo.addItem("-", None)
        for key, label in LEAD_SOURCES.items():
            self.source_combo.addItem(label, key)
        apply_combobox_style(self.source_combo)

        self.package_combo = QComboBox()
        self.package_combo.addItem("-", None)
        for package in self.packages:
            self.package_combo.addItem(package.name, package.id)
        apply_combobox_style(self.package_combo)

        if self.lead:
            self._select(self.source_combo, self.lead.source)
            self._select(self.package_combo, self.lead.package_interest)

        form.addRow("Nama Lengkap *", self.name_input)
        form.addRow("Telepon", self.phone_input)
        form.addRow("Email", self.email_input)
        form.addRow("Sumber", self.source_combo)
        form.addRow("Paket Diminati", self.package_combo)

        self.notes_input = None
        if self.lead is None:
            self.notes_input = QTextEdit()
            apply_input_style(self.notes_input)
            form.addRow("Catatan", self.notes_input)

        layout.addLayout(form)
        layout.addStretch()

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch()
        btn_cancel = QPushButton("Batal")
        apply_button_style(btn_cancel, 'outline')
        btn_cancel.clicked.connect(self.reject)
        buttons_layout.addWidget(btn_cancel)

        btn_save = QPushButton("Simpan")
        apply_button_style(btn_save, 'primary')
        btn_save.clicked.connect(self.accept_form)
        buttons_layout.addWidget(btn_save)
        layout.addLayout(buttons_layout)

    @staticmethod
    def _select(combo: QComboBox, value: Optional[str]):
        index = combo.findData(value)
        if index >= 0:
            combo.setCurrentIndex(index)

    def accept_form(self):
        if not self.name_input.text().strip():
            QMessageBox.warning(self, "Validasi", "Nama lengkap wajib diisi")
            return
        self.accept()

    def get_values(self) -> Dict[str, Any]:
        values = {
            "full_name": self.name_input.text(),
            "phone": self.phone_input.text(),
            "email": self.email_input.text(),
            "source": self.source_combo.currentData(),
            "package_interest": self.package_combo.currentData(),
        }
        if self.notes_input is not None:
            values["notes"] = self.notes_input.toPlainText()
        return values
