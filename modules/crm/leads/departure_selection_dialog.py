"""
Диалог выбора отправления для конвертации лида в бронирование
"""

from typing import List, Optional

from PyQt5.QtWidgets import (
    QButtonGroup, QDialog, QHBoxLayout, QLabel, QPushButton, QRadioButton, QVBoxLayout
)

from core.date_utils import format_date_id
from modules.bookings.models import Departure
from modules.documents.formatters import format_rupiah
from modules.styles.general_styles import COLORS, apply_button_style, apply_label_style
from modules.styles.ui_config import configure_dialog


class DepartureSelectionDialog(QDialog):
    """Выбор открытого отправления пакета (по дате, ближайшие первыми)"""

    def __init__(
        self,
        departures: List[Departure],
        package_price: Optional[float] = None,
        parent=None
    ):
        super().__init__(parent)
        self.departures = departures
        self.package_price = package_price
        self.selected_departure: Optional[Departure] = None
        self.button_group = QButtonGroup(self)
        self.init_ui()

    def init_ui(self):
        configure_dialog(self, "Konversi ke Booking", size_preset="medium")

        layout = QVBoxLayout(self)
        layout.setSpacing(12)
        layout.setContentsMargins(24, 24, 24, 24)

        header = QLabel("Pilih keberangkatan untuk booking:")
        apply_label_style(header, 'h2')
        layout.addWidget(header)

        if self.package_price is not None:
            price = QLabel(f"Harga paket (Quad): {format_rupiah(self.package_price)}")
            apply_label_style(price, 'normal')
            layout.addWidget(price)

        if not self.departures:
            empty = QLabel("Tidak ada keberangkatan yang tersedia untuk paket ini")
            apply_label_style(empty, 'small')
            layout.addWidget(empty)

        for index, departure in enumerate(self.departures):
            radio = QRadioButton(
                f"{format_date_id(departure.departure_date)} — sisa kursi {departure.seats_left}"
            )
            radio.setStyleSheet(f"""
                QRadioButton {{
                    padding: 8px;
                }}
                QRadioButton:hover {{
                    background-color: {COLORS['secondary']};
                }}
            """)
            self.button_group.addButton(radio, index)
            layout.addWidget(radio)

        if self.button_group.buttons():
            self.button_group.buttons()[0].setChecked(True)

        layout.addStretch()

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch()

        btn_cancel = QPushButton("Batal")
        apply_button_style(btn_cancel, 'outline')
        btn_cancel.clicked.connect(self.reject)
        buttons_layout.addWidget(btn_cancel)

        self.btn_convert = QPushButton("Konversi")
        apply_button_style(self.btn_convert, 'primary')
        self.btn_convert.setEnabled(bool(self.departures))
        self.btn_convert.clicked.connect(self.accept_selection)
        buttons_layout.addWidget(self.btn_convert)

        layout.addLayout(buttons_layout)

    def accept_selection(self):
        checked_button = self.button_group.checkedButton()
        if checked_button is None:
            self.reject()
            return
        self.selected_departure = self.departures[self.button_group.id(checked_button)]
        self.accept()

    def get_selected_departure(self) -> Optional[Departure]:
        return self.selected_departure
