"""
Детальная карточка лида: контакты, журнал заметок, follow-up,
переходы по этапам и конвертация в бронирование.
"""

from typing import Callable, Optional

from loguru import logger
from PyQt5.QtCore import QDate, Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QCheckBox, QDateEdit, QDialog, QHBoxLayout, QLabel, QListWidget, QMessageBox,
    QPushButton, QTextEdit, QVBoxLayout, QWidget
)

from core.date_utils import format_date_id
from core.exceptions import AppError
from modules.crm.leads.conversion_service import LeadConversionService
from modules.crm.leads.departure_selection_dialog import DepartureSelectionDialog
from modules.crm.leads.lead_form_dialog import LeadFormDialog
from modules.crm.leads.lead_service import LeadService
from modules.crm.leads.models import LEAD_SOURCES, PIPELINE_STAGES, STATUS_COLORS, Lead
from modules.crm.leads.notes import NOTE_TIMESTAMP_FORMAT
from modules.styles.general_styles import (
    apply_badge_style, apply_button_style, apply_input_style, apply_label_style
)
from modules.styles.ui_config import configure_dialog


class LeadDetailDialog(QDialog):
    """Окно лида; после каждого изменения перечитывает лид и испускает lead_changed"""

    lead_changed = pyqtSignal(object)

    def __init__(
        self,
        lead: Lead,
        lead_service: LeadService,
        conversion_service: LeadConversionService,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)
        self.lead = lead
        self.lead_service = lead_service
        self.conversion_service = conversion_service
        configure_dialog(self, f"Lead — {lead.full_name}", size_preset="large")
        self._init_ui()
        self._refresh()

    def _init_ui(self) -> None:
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(16, 16, 16, 16)
        main_layout.setSpacing(10)

        header = QHBoxLayout()
        self.title_label = QLabel()
        apply_label_style(self.title_label, 'h2')
        header.addWidget(self.title_label)
        self.status_badge = QLabel()
        header.addWidget(self.status_badge)
        header.addStretch()
        btn_edit = QPushButton("Edit")
        apply_button_style(btn_edit, 'outline')
        btn_edit.clicked.connect(self._edit)
        header.addWidget(btn_edit)
        main_layout.addLayout(header)

        self.info_label = QLabel()
        self.info_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        apply_label_style(self.info_label, 'normal')
        main_layout.addWidget(self.info_label)

        # Этапы пайплайна, последним шагом идёт конвертация
        self.stage_buttons = {}
        stages_layout = QHBoxLayout()
        for status in PIPELINE_STAGES:
            button = QPushButton(status.label)
            button.clicked.connect(lambda checked, s=status: self._run(
                lambda: self.lead_service.move_to_stage(self.lead.id, s)
            ))
            stages_layout.addWidget(button)
            self.stage_buttons[status] = button
        self.btn_convert = QPushButton("Konversi ke Booking")
        apply_button_style(self.btn_convert, 'primary')
        self.btn_convert.clicked.connect(self._convert)
        stages_layout.addWidget(self.btn_convert)
        main_layout.addLayout(stages_layout)

        actions = QHBoxLayout()
        self.btn_lost = QPushButton("Tandai Lost")
        apply_button_style(self.btn_lost, 'danger')
        self.btn_lost.clicked.connect(self._mark_lost)
        actions.addWidget(self.btn_lost)
        self.btn_reactivate = QPushButton("Aktifkan Kembali")
        apply_button_style(self.btn_reactivate, 'outline')
        self.btn_reactivate.clicked.connect(lambda: self._run(
            lambda: self.lead_service.reactivate(self.lead.id)
        ))
        actions.addWidget(self.btn_reactivate)
        actions.addStretch()
        main_layout.addLayout(actions)

        follow_up_title = QLabel("Tambah Follow Up")
        apply_label_style(follow_up_title, 'h3')
        main_layout.addWidget(follow_up_title)

        self.follow_up_text = QTextEdit()
        self.follow_up_text.setFixedHeight(70)
        apply_input_style(self.follow_up_text)
        main_layout.addWidget(self.follow_up_text)

        follow_up_row = QHBoxLayout()
        self.follow_up_date_enabled = QCheckBox("Jadwal follow up")
        follow_up_row.addWidget(self.follow_up_date_enabled)
        self.follow_up_date = QDateEdit(QDate.currentDate())
        self.follow_up_date.setCalendarPopup(True)
        self.follow_up_date.setDisplayFormat("dd/MM/yyyy")
        follow_up_row.addWidget(self.follow_up_date)
        follow_up_row.addStretch()
        btn_follow_up = QPushButton("Simpan Follow Up")
        apply_button_style(btn_follow_up, 'primary')
        btn_follow_up.clicked.connect(self._add_follow_up)
        follow_up_row.addWidget(btn_follow_up)
        main_layout.addLayout(follow_up_row)

        notes_title = QLabel("Riwayat Catatan")
        apply_label_style(notes_title, 'h3')
        main_layout.addWidget(notes_title)
        self.notes_list = QListWidget()
        self.notes_list.setWordWrap(True)
        main_layout.addWidget(self.notes_list)

        btn_close = QPushButton("Tutup")
        apply_button_style(btn_close, 'outline')
        btn_close.clicked.connect(self.accept)
        main_layout.addWidget(btn_close, alignment=Qt.AlignRight)

    def _refresh(self) -> None:
        lead = self.lead
        self.title_label.setText(lead.full_name)
        self.status_badge.setText(lead.status.label)
        apply_badge_style(self.status_badge, STATUS_COLORS[lead.status])

        source = LEAD_SOURCES.get(lead.source, lead.source) if lead.source else None
        rows = [
            ("Telepon", lead.phone),
            ("Email", lead.email),
            ("Sumber", source),
            ("Paket", lead.package_name),
            ("Follow up", format_date_id(lead.follow_up_date) if lead.follow_up_date else None),
            ("Dibuat", format_date_id(lead.created_at) if lead.created_at else None),
        ]
        if lead.is_converted and lead.converted_at:
            rows.append(("Dikonversi", format_date_id(lead.converted_at)))
        if lead.is_unlinked_won:
            rows.append(("Perhatian", "status Won tanpa booking, lakukan konversi"))
        self.info_label.setText("<br>".join(f"<b>{label}:</b> {value or '-'}" for label, value in rows))

        is_open = not lead.status.is_terminal
        for status, button in self.stage_buttons.items():
            button.setEnabled(is_open)
            apply_button_style(button, 'primary' if status == lead.status else 'outline')
        self.btn_convert.setEnabled(
            (is_open or lead.is_unlinked_won) and bool(lead.package_interest)
        )
        self.btn_lost.setEnabled(is_open)
        self.btn_reactivate.setVisible(lead.is_lost)

        self.notes_list.clear()
        for entry in lead.notes:
            if entry.timestamp:
                author = f" | {entry.author}" if entry.author else ""
                self.notes_list.addItem(
                    f"[{entry.timestamp.strftime(NOTE_TIMESTAMP_FORMAT)}{author}] {entry.text}"
                )
            else:
                self.notes_list.addItem(entry.text)

    def _run(self, action: Callable[[], Lead]) -> bool:
        """Выполняет операцию над лидом; ошибку показывает пользователю"""
        try:
            self.lead = action()
        except AppError as e:
            logger.error(f"Ошибка операции над лидом {self.lead.id}: {e}", exc_info=True)
            QMessageBox.critical(self, "Gagal", str(e))
            return False
        self._refresh()
        self.lead_changed.emit(self.lead)
        return True

    def _edit(self) -> None:
        packages = self.conversion_service.departure_repo.get_active_packages()
        dialog = LeadFormDialog(packages, lead=self.lead, parent=self)
        if dialog.exec_() == QDialog.Accepted:
            values = dialog.get_values()
            self._run(lambda: self.lead_service.update_lead(self.lead.id, **values))

    def _add_follow_up(self) -> None:
        follow_up_date = None
        if self.follow_up_date_enabled.isChecked():
            follow_up_date = self.follow_up_date.date().toPyDate()
        if self._run(lambda: self.lead_service.add_follow_up(
            self.lead.id, self.follow_up_text.toPlainText(), follow_up_date
        )):
            self.follow_up_text.clear()

    def _mark_lost(self) -> None:
        answer = QMessageBox.question(self, "Konfirmasi", f"Tandai {self.lead.full_name} sebagai Lost?")
        if answer == QMessageBox.Yes:
            self._run(lambda: self.lead_service.mark_lost(self.lead.id))

    def _convert(self) -> None:
        try:
            departures = self.conversion_service.eligible_departures(self.lead)
            package = self.conversion_service.departure_repo.get_package(self.lead.package_interest)
        except AppError as e:
            QMessageBox.critical(self, "Gagal", str(e))
            return

        dialog = DepartureSelectionDialog(
            departures, package.price_quad if package else None, parent=self
        )
        if dialog.exec_() != QDialog.Accepted or dialog.get_selected_departure() is None:
            return
        departure = dialog.get_selected_departure()
        try:
            booking = self.conversion_service.convert(self.lead.id, departure.id)
        except AppError as e:
            QMessageBox.critical(self, "Konversi gagal", str(e))
            return

        QMessageBox.information(
            self, "Berhasil", f"Lead berhasil dikonversi. Kode booking: {booking.booking_code}"
        )
        self._run(lambda: self.lead_service.get_lead(self.lead.id))
