"""
Раздел «Аналитика лидов»: сводка, динамика, воронка и источники
"""

from datetime import datetime
from typing import List, Optional, Sequence

from loguru import logger
from PyQt5.QtWidgets import (
    QComboBox, QFrame, QGridLayout, QHBoxLayout, QLabel, QMessageBox, QPushButton,
    QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget
)

from config.settings import config
from core.exceptions import AppError
from modules.crm.leads.analytics import PERIOD_CHOICES, FunnelAnalytics, FunnelReport
from modules.crm.leads.analytics_export import LeadAnalyticsExcelExporter
from modules.crm.leads.lead_service import LeadService
from modules.crm.leads.models import Lead
from modules.styles.general_styles import (
    COLORS, apply_button_style, apply_combobox_style, apply_frame_style,
    apply_label_style, apply_table_style
)

PERIOD_LABELS = {1: "1 Bulan", 3: "3 Bulan", 6: "6 Bulan", 12: "12 Bulan"}


class MetricCard(QFrame):
    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        apply_frame_style(self, 'card')
        layout = QVBoxLayout(self)
        title_label = QLabel(title)
        apply_label_style(title_label, 'small')
        layout.addWidget(title_label)
        self.value_label = QLabel("-")
        apply_label_style(self.value_label, 'metric')
        layout.addWidget(self.value_label)
        self.subtitle_label = QLabel("")
        apply_label_style(self.subtitle_label, 'small')
        layout.addWidget(self.subtitle_label)

    def set_values(self, value: str, subtitle: str = "", change: Optional[float] = None):
        self.value_label.setText(value)
        if change:
            color = COLORS['success'] if change > 0 else COLORS['error']
            sign = "+" if change > 0 else ""
            subtitle = f"<span style='color:{color}'>{sign}{change}%</span> {subtitle}"
        self.subtitle_label.setText(subtitle)


class LeadAnalyticsWidget(QWidget):
    """Аналитика воронки по всем лидам, пересчитывается при смене периода"""

    def __init__(self, lead_service: LeadService, parent=None):
        super().__init__(parent)
        self.lead_service = lead_service
        self.leads: List[Lead] = []
        self.report: Optional[FunnelReport] = None
        self.init_ui()
        self.load_leads()

    def init_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(20, 20, 20, 20)
        main_layout.setSpacing(12)

        header_row = QHBoxLayout()
        header = QLabel("Analitik Lead")
        apply_label_style(header, 'h1')
        header_row.addWidget(header)
        header_row.addStretch()

        self.period_combo = QComboBox()
        for months in PERIOD_CHOICES:
            self.period_combo.addItem(PERIOD_LABELS[months], months)
        self.period_combo.setCurrentIndex(
            PERIOD_CHOICES.index(config.analytics.default_period_months)
        )
        apply_combobox_style(self.period_combo)
        self.period_combo.currentIndexChanged.connect(self.rebuild)
        header_row.addWidget(self.period_combo)

        btn_refresh = QPushButton("Muat Ulang")
        apply_button_style(btn_refresh, 'outline')
        btn_refresh.clicked.connect(self.load_leads)
        header_row.addWidget(btn_refresh)

        btn_export = QPushButton("📄 Export Excel")
        apply_button_style(btn_export, 'primary')
        btn_export.clicked.connect(self.export_report)
        header_row.addWidget(btn_export)
        main_layout.addLayout(header_row)

        cards = QGridLayout()
        self.card_total = MetricCard("Total Lead")
        self.card_conversion = MetricCard("Conversion Rate")
        self.card_won = MetricCard("Won")
        self.card_lost = MetricCard("Lost")
        for index, card in enumerate((self.card_total, self.card_conversion, self.card_won, self.card_lost)):
            cards.addWidget(card, 0, index)
        main_layout.addLayout(cards)

        tables = QGridLayout()
        self.trend_table = self._create_table(["Bulan", "Total", "Won", "Lost", "Konversi"])
        self.funnel_table = self._create_table(["Tahap", "Jumlah", "Dari Awal", "Drop-off"])
        self.status_table = self._create_table(["Status", "Jumlah"])
        self.source_table = self._create_table(["Sumber", "Total", "Won", "Konversi", "Rating"])
        tables.addWidget(self._titled("Tren Bulanan", self.trend_table), 0, 0)
        tables.addWidget(self._titled("Funnel Konversi", self.funnel_table), 0, 1)
        tables.addWidget(self._titled("Distribusi Status", self.status_table), 1, 0)
        tables.addWidget(self._titled("Performa Sumber Lead", self.source_table), 1, 1)
        main_layout.addLayout(tables)

    @staticmethod
    def _create_table(headers: List[str]) -> QTableWidget:
        table = QTableWidget(0, len(headers))
        table.setHorizontalHeaderLabels(headers)
        table.verticalHeader().setVisible(False)
        table.setEditTriggers(QTableWidget.NoEditTriggers)
        table.horizontalHeader().setStretchLastSection(True)
        apply_table_style(table)
        return table

    @staticmethod
    def _titled(title: str, widget: QWidget) -> QWidget:
        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        label = QLabel(title)
        apply_label_style(label, 'h3')
        layout.addWidget(label)
        layout.addWidget(widget)
        return container

    @staticmethod
    def _fill(table: QTableWidget, rows: Sequence[Sequence]):
        table.setRowCount(len(rows))
        for row_index, row in enumerate(rows):
            for col_index, value in enumerate(row):
                table.setItem(row_index, col_index, QTableWidgetItem("" if value is None else str(value)))

    def load_leads(self):
        try:
            self.leads = self.lead_service.list_leads()
        except AppError as e:
            logger.error(f"Ошибка загрузки лидов для аналитики: {e}", exc_info=True)
            QMessageBox.critical(self, "Gagal memuat data", str(e))
            return
        self.rebuild()

    def rebuild(self):
        period = self.period_combo.currentData()
        self.report = FunnelAnalytics(self.leads).build_report(period, datetime.now())
        report = self.report
        summary = report.summary
        comparison = report.comparison

        self.card_total.set_values(
            str(summary.total), "vs periode sebelumnya", comparison.leads_change if comparison else None
        )
        self.card_conversion.set_values(
            f"{summary.conversion_rate}%",
            f"Periode sebelumnya: {comparison.previous_conversion_rate}%" if comparison else "",
            comparison.conversion_change if comparison else None,
        )
        self.card_won.set_values(str(summary.won), f"{summary.in_progress} dalam proses")
        self.card_lost.set_values(str(summary.lost), f"{summary.loss_rate}% loss rate")

        self._fill(self.trend_table, [
            (point.label, point.total, point.won, point.lost, f"{point.conversion}%")
            for point in report.monthly_trend
        ])
        self._fill(self.funnel_table, [
            (stage.label, stage.count, f"{stage.share}%", f"-{stage.drop_off}%" if stage.show_drop_off else "")
            for stage in report.funnel
        ])
        self._fill(self.status_table, [(item.label, item.count) for item in report.status_distribution])
        self._fill(self.source_table, [
            (source.label, source.total, source.won, f"{source.conversion}%", source.rating)
            for source in report.source_conversion
        ])

    def export_report(self):
        if self.report is None:
            return
        filename = f"analitik-lead-{datetime.now():%Y%m%d-%H%M}.xlsx"
        path = LeadAnalyticsExcelExporter(config.export_dir).export(self.report, filename)
        QMessageBox.information(self, "Export", f"File disimpan: {path}")
