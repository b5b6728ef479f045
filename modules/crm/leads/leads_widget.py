"""
Раздел «Лиды»: канбан по этапам воронки, поиск и создание лидов
"""

from typing import Dict, List

from loguru import logger
from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QDialog, QHBoxLayout, QLabel, QLineEdit, QMessageBox, QPushButton, QScrollArea,
    QVBoxLayout, QWidget
)

from core.exceptions import AppError
from modules.crm.leads.conversion_service import LeadConversionService
from modules.crm.leads.kanban_column import LeadKanbanColumn
from modules.crm.leads.lead_card import LeadCard
from modules.crm.leads.lead_detail_dialog import LeadDetailDialog
from modules.crm.leads.lead_form_dialog import LeadFormDialog
from modules.crm.leads.lead_service import LeadService
from modules.crm.leads.models import PIPELINE_STAGES, Lead, LeadStatus
from modules.styles.general_styles import (
    COLORS, apply_button_style, apply_input_style, apply_label_style
)


class LeadsWidget(QWidget):
    """Канбан лидов: колонки new..closing, счетчики won/lost и конверсия"""

    def __init__(
        self,
        lead_service: LeadService,
        conversion_service: LeadConversionService,
        parent=None
    ):
        super().__init__(parent)
        self.lead_service = lead_service
        self.conversion_service = conversion_service
        self.leads: List[Lead] = []
        self.columns: Dict[LeadStatus, LeadKanbanColumn] = {}
        self.init_ui()
        self.load_leads()

    def init_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(20, 20, 20, 20)
        main_layout.setSpacing(10)

        header = QLabel("Pipeline Lead")
        apply_label_style(header, 'h1')
        main_layout.addWidget(header)

        toolbar = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Cari nama, telepon, email...")
        apply_input_style(self.search_input)
        self.search_input.returnPressed.connect(self.load_leads)
        toolbar.addWidget(self.search_input)

        btn_refresh = QPushButton("Muat Ulang")
        apply_button_style(btn_refresh, 'outline')
        btn_refresh.clicked.connect(self.load_leads)
        toolbar.addWidget(btn_refresh)

        btn_new = QPushButton("➕ Tambah Lead")
        apply_button_style(btn_new, 'primary')
        btn_new.clicked.connect(self.create_lead)
        toolbar.addWidget(btn_new)

        # won без бронирования не попадает в колонки, доступ к нему через эту кнопку
        self.btn_unlinked = QPushButton()
        apply_button_style(self.btn_unlinked, 'danger')
        self.btn_unlinked.clicked.connect(self.open_unlinked_won)
        self.btn_unlinked.setVisible(False)
        toolbar.addWidget(self.btn_unlinked)
        main_layout.addLayout(toolbar)

        self.stats_label = QLabel()
        apply_label_style(self.stats_label, 'small')
        main_layout.addWidget(self.stats_label)

        scroll_area = QScrollArea()
        scroll_area.setWidgetResizable(True)
        scroll_area.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        scroll_area.setStyleSheet("QScrollArea { border: none; }")

        columns_container = QWidget()
        columns_layout = QHBoxLayout(columns_container)
        columns_layout.setSpacing(12)
        columns_layout.setContentsMargins(0, 0, 0, 0)
        for status in PIPELINE_STAGES:
            column = LeadKanbanColumn(status, self)
            column.lead_dropped.connect(self.on_lead_dropped)
            self.columns[status] = column
            columns_layout.addWidget(column)
        columns_layout.addStretch()

        scroll_area.setWidget(columns_container)
        main_layout.addWidget(scroll_area)

    def load_leads(self):
        try:
            self.leads = self.lead_service.list_leads(search=self.search_input.text())
        except AppError as e:
            logger.error(f"Ошибка загрузки лидов: {e}", exc_info=True)
            QMessageBox.critical(self, "Gagal memuat lead", str(e))
            return

        for column in self.columns.values():
            column.clear()
        for lead in self.leads:
            column = self.columns.get(lead.status)
            if column is None:
                continue
            card = LeadCard(lead, column)
            card.clicked.connect(self.open_lead)
            column.add_card(card)
        self._update_stats()
        unlinked = self._unlinked_won()
        self.btn_unlinked.setText(f"⚠ Won tanpa booking ({len(unlinked)})")
        self.btn_unlinked.setVisible(bool(unlinked))
        logger.debug(f"На доске лидов: {len(self.leads)}")

    def _unlinked_won(self) -> List[Lead]:
        return [lead for lead in self.leads if lead.is_unlinked_won]

    def open_unlinked_won(self):
        unlinked = self._unlinked_won()
        if unlinked:
            self.open_lead(unlinked[0])

    def _update_stats(self):
        counts = self.lead_service.pipeline_counts(self.leads)
        by_status = counts["by_status"]
        self.stats_label.setText(
            f"Total: {counts['total']}  |  Won: {by_status[LeadStatus.WON]}  |  "
            f"Lost: {by_status[LeadStatus.LOST]}  |  Konversi: {counts['conversion_rate']}%"
        )
        self.stats_label.setStyleSheet(self.stats_label.styleSheet() + f" color: {COLORS['text_dark']};")

    def on_lead_dropped(self, lead_id: str, status: LeadStatus):
        try:
            self.lead_service.move_to_stage(lead_id, status)
        except AppError as e:
            QMessageBox.warning(self, "Tidak dapat memindahkan lead", str(e))
            return
        self.load_leads()

    def create_lead(self):
        try:
            packages = self.conversion_service.departure_repo.get_active_packages()
        except AppError as e:
            QMessageBox.critical(self, "Gagal", str(e))
            return
        dialog = LeadFormDialog(packages, parent=self)
        if dialog.exec_() != QDialog.Accepted:
            return
        try:
            self.lead_service.create_lead(**dialog.get_values())
        except AppError as e:
            QMessageBox.critical(self, "Gagal menyimpan lead", str(e))
            return
        self.load_leads()

    def open_lead(self, lead: Lead):
        dialog = LeadDetailDialog(lead, self.lead_service, self.conversion_service, parent=self)
        dialog.lead_changed.connect(lambda _: self.load_leads())
        dialog.exec_()
