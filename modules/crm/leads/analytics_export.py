"""Экспорт аналитики воронки лидов в Excel."""

from pathlib import Path
from typing import List, Sequence

from loguru import logger
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from core.date_utils import format_date_id
from modules.crm.leads.analytics import FunnelReport

HEADER_FILL = "BDD7EE"


class LeadAnalyticsExcelExporter:
    """Экспорт отчета аналитики лидов: сводка, динамика, воронка, источники."""

    def __init__(self, output_directory: Path) -> None:
        """
        Args:
            output_directory: Каталог, в который будет сохранен Excel-файл.
        """
        self.output_directory = Path(output_directory)

    def export(self, report: FunnelReport, filename: str) -> Path:
        """
        Экспортирует отчет в Excel-файл.

        Returns:
            Путь к созданному файлу.
        """
        self.output_directory.mkdir(parents=True, exist_ok=True)
        output_path = self.output_directory / filename

        wb = Workbook()
        self._write_summary(wb.active, report)
        self._write_trend(wb.create_sheet("Tren Bulanan"), report)
        self._write_funnel(wb.create_sheet("Funnel"), report)
        self._write_sources(wb.create_sheet("Sumber Lead"), report)

        wb.save(output_path)
        logger.info(f"Аналитика лидов экспортирована: {output_path}")
        return output_path

    def _write_summary(self, ws, report: FunnelReport) -> None:
        ws.title = "Ringkasan"
        ws["A1"] = "Analitik Lead"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:C1")
        ws["A1"].alignment = Alignment(horizontal="center")

        ws["A3"] = "Periode:"
        ws["B3"] = f"{format_date_id(report.start)} - {format_date_id(report.end)}"

        summary = report.summary
        rows = [
            ("Total Lead", summary.total),
            ("Baru", summary.new),
            ("Dalam Proses", summary.in_progress),
            ("Won", summary.won),
            ("Lost", summary.lost),
            ("Conversion Rate (%)", summary.conversion_rate),
            ("Loss Rate (%)", summary.loss_rate),
        ]
        if report.comparison is not None:
            rows.extend([
                ("Lead Periode Sebelumnya", report.comparison.previous_total),
                ("Konversi Periode Sebelumnya (%)", report.comparison.previous_conversion_rate),
                ("Perubahan Jumlah Lead (%)", report.comparison.leads_change),
                ("Perubahan Konversi (%)", report.comparison.conversion_change),
            ])

        self._write_table_headers(ws, 5, ["Metrik", "Nilai"])
        self._write_rows(ws, 6, rows)
        self._set_column_widths(ws, [34, 18])

    def _write_trend(self, ws, report: FunnelReport) -> None:
        self._write_table_headers(ws, 1, ["Bulan", "Total", "Won", "Lost", "Konversi (%)"])
        self._write_rows(ws, 2, [
            (point.label, point.total, point.won, point.lost, point.conversion)
            for point in report.monthly_trend
        ])
        self._set_column_widths(ws, [14, 10, 10, 10, 14])

    def _write_funnel(self, ws, report: FunnelReport) -> None:
        self._write_table_headers(ws, 1, ["Tahap", "Jumlah", "Dari Tahap Awal (%)", "Drop-off (%)"])
        self._write_rows(ws, 2, [
            (stage.label, stage.count, stage.share, stage.drop_off if stage.show_drop_off else None)
            for stage in report.funnel
        ])
        self._set_column_widths(ws, [16, 10, 20, 14])

    def _write_sources(self, ws, report: FunnelReport) -> None:
        self._write_table_headers(ws, 1, ["Sumber", "Total", "Won", "Konversi (%)", "Rating"])
        self._write_rows(ws, 2, [
            (source.label, source.total, source.won, source.conversion, source.rating)
            for source in report.source_conversion
        ])
        self._set_column_widths(ws, [20, 10, 10, 14, 12])

    def _write_table_headers(self, ws, row: int, headers: List[str]) -> None:
        header_fill = PatternFill("solid", fgColor=HEADER_FILL)
        thin_border = self._get_thin_border()
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.font = Font(bold=True)
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.fill = header_fill
            cell.border = thin_border

    def _write_rows(self, ws, start_row: int, rows: Sequence[Sequence]) -> int:
        thin_border = self._get_thin_border()
        current_row = start_row
        for values in rows:
            for col, value in enumerate(values, start=1):
                cell = ws.cell(row=current_row, column=col, value=value)
                cell.border = thin_border
            current_row += 1
        return current_row

    @staticmethod
    def _set_column_widths(ws, widths: List[int]) -> None:
        for index, width in enumerate(widths):
            ws.column_dimensions[chr(ord("A") + index)].width = width

    @staticmethod
    def _get_thin_border() -> Border:
        return Border(
            left=Side(style="thin", color="000000"),
            right=Side(style="thin", color="000000"),
            top=Side(style="thin", color="000000"),
            bottom=Side(style="thin", color="000000"),
        )
