"""
Тесты экспорта аналитики в Excel
"""

from datetime import datetime

from openpyxl import load_workbook

from modules.crm.leads.analytics import FunnelAnalytics
from modules.crm.leads.analytics_export import LeadAnalyticsExcelExporter
from modules.crm.leads.models import Lead, LeadStatus

NOW = datetime(2026, 10, 17, 10, 30)


def test_export_writes_all_sheets(tmp_path):
    leads = [
        Lead(id="1", full_name="A", source="website", status=LeadStatus.WON,
             converted_booking_id="b-1", created_at=datetime(2026, 10, 1)),
        Lead(id="2", full_name="B", source="whatsapp", created_at=datetime(2026, 10, 2)),
    ]
    report = FunnelAnalytics(leads).build_report(1, NOW)

    path = LeadAnalyticsExcelExporter(tmp_path / "exports").export(report, "analitik.xlsx")

    assert path.exists()
    wb = load_workbook(path)
    assert wb.sheetnames == ["Ringkasan", "Tren Bulanan", "Funnel", "Sumber Lead"]

    summary = wb["Ringkasan"]
    assert summary["A6"].value == "Total Lead"
    assert summary["B6"].value == 2
    assert summary["A11"].value == "Conversion Rate (%)"
    assert summary["B11"].value == 50.0

    funnel = wb["Funnel"]
    assert funnel["A2"].value == "Baru"
    assert funnel["B2"].value == 2
    assert funnel["D2"].value is None

    sources = wb["Sumber Lead"]
    assert sources["A2"].value == "Website"
    assert sources["E2"].value == "Excellent"
    assert sources["A3"].value == "Whatsapp"
