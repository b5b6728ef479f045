"""
Тесты аналитики воронки лидов
"""

from datetime import date, datetime, timezone
from itertools import count

import pytest

from modules.crm.leads.analytics import (
    FunnelAnalytics, percent, rating_for, round_half_up, source_label
)
from modules.crm.leads.models import FUNNEL_STAGES, Lead, LeadStatus

NOW = datetime(2026, 10, 17, 10, 30)
_ids = count(1)


def make_lead(status, source, created_at):
    lead_id = str(next(_ids))
    booking_id = f"b-{lead_id}" if status == LeadStatus.WON else None
    return Lead(
        id=lead_id,
        full_name=f"Lead {lead_id}",
        status=status,
        source=source,
        converted_booking_id=booking_id,
        created_at=created_at,
    )


@pytest.fixture
def scenario_leads():
    """10 лидов за сентябрь-октябрь: website 6, whatsapp 4, 3 won, 2 lost"""
    september = datetime(2026, 9, 10, 9, 0)
    october = datetime(2026, 10, 5, 14, 0)
    return [
        make_lead(LeadStatus.WON, "website", september),
        make_lead(LeadStatus.WON, "website", october),
        make_lead(LeadStatus.LOST, "website", september),
        make_lead(LeadStatus.NEW, "website", october),
        make_lead(LeadStatus.CONTACTED, "website", october),
        make_lead(LeadStatus.NEGOTIATION, "website", october),
        make_lead(LeadStatus.WON, "whatsapp", september),
        make_lead(LeadStatus.LOST, "whatsapp", october),
        make_lead(LeadStatus.FOLLOW_UP, "whatsapp", september),
        make_lead(LeadStatus.CLOSING, "whatsapp", october),
    ]


class TestHelpers:
    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(-2.5) == -3
        assert round_half_up(14.25, 1) == 14.3
        assert isinstance(round_half_up(2.4), int)

    def test_percent(self):
        assert percent(1, 3) == 33
        assert percent(2, 3) == 67
        assert percent(1, 8, 1) == 12.5
        assert percent(5, 0) == 0
        assert percent(5, 0, 1) == 0.0

    @pytest.mark.parametrize("conversion, rating", [
        (100, "Excellent"), (30, "Excellent"), (29, "Good"), (20, "Good"),
        (19, "Average"), (10, "Average"), (9, "Poor"), (0, "Poor"),
    ])
    def test_rating_bands(self, conversion, rating):
        assert rating_for(conversion) == rating

    def test_source_label(self):
        assert source_label("website") == "Website"
        assert source_label("walk-in") == "Walk-in"
        assert source_label("unknown") == "Tidak Diketahui"


class TestScenario:
    def test_summary(self, scenario_leads):
        report = FunnelAnalytics(scenario_leads).build_report(3, NOW)
        summary = report.summary

        assert summary.total == 10
        assert summary.new == 1
        assert summary.in_progress == 4
        assert summary.won == 3
        assert summary.lost == 2
        assert summary.conversion_rate == 30.0
        assert summary.loss_rate == 20.0

    def test_sources(self, scenario_leads):
        report = FunnelAnalytics(scenario_leads).build_report(3, NOW)
        by_source = {item.source: item for item in report.source_conversion}

        assert by_source["website"].conversion == 33
        assert by_source["website"].rating == "Excellent"
        assert by_source["whatsapp"].conversion == 25
        assert by_source["whatsapp"].rating == "Good"
        assert [item.source for item in report.source_distribution] == ["website", "whatsapp"]
        assert sum(item.total for item in report.source_distribution) == report.summary.total

    def test_cumulative_funnel(self, scenario_leads):
        funnel = FunnelAnalytics(scenario_leads).build_report(3, NOW).funnel

        assert [stage.status for stage in funnel] == FUNNEL_STAGES
        assert [stage.count for stage in funnel] == [8, 7, 6, 5, 4, 3]
        assert [stage.drop_off for stage in funnel] == [0.0, 12.5, 14.3, 16.7, 20.0, 25.0]
        assert funnel[0].share == 100.0
        assert funnel[-1].share == 37.5
        assert not funnel[0].show_drop_off
        assert all(stage.show_drop_off for stage in funnel[1:])

    def test_status_distribution(self, scenario_leads):
        slices = FunnelAnalytics(scenario_leads).build_report(3, NOW).status_distribution
        counts = {item.status: item.count for item in slices}

        assert counts[LeadStatus.WON] == 3
        assert counts[LeadStatus.LOST] == 2
        assert sum(counts.values()) == 10
        assert all(item.count > 0 for item in slices)

    def test_monthly_trend(self, scenario_leads):
        trend = FunnelAnalytics(scenario_leads).build_report(3, NOW).monthly_trend

        assert [point.label for point in trend] == ["Jul 26", "Agu 26", "Sep 26", "Okt 26"]
        september, october = trend[2], trend[3]
        assert (september.total, september.won, september.lost) == (4, 2, 1)
        assert september.conversion == 50
        assert (october.total, october.won, october.lost) == (6, 1, 1)
        assert october.conversion == 17
        assert trend[0].total == 0 and trend[0].conversion == 0


class TestPeriods:
    def test_period_window(self):
        start, end = FunnelAnalytics.period_window(6, NOW)
        assert start == datetime(2026, 4, 17, 10, 30)
        assert end == NOW

    def test_invalid_period(self):
        with pytest.raises(ValueError):
            FunnelAnalytics.period_window(2, NOW)

    def test_window_is_inclusive(self):
        start = datetime(2026, 9, 17, 10, 30)
        leads = [
            make_lead(LeadStatus.NEW, "website", start),
            make_lead(LeadStatus.NEW, "website", NOW),
            make_lead(LeadStatus.NEW, "website", datetime(2026, 9, 17, 10, 29)),
        ]
        report = FunnelAnalytics(leads).build_report(1, NOW)
        assert report.summary.total == 2

    def test_comparison_with_previous_period(self, scenario_leads):
        previous = [
            make_lead(LeadStatus.WON, "referral", datetime(2026, 5, 20)),
            make_lead(LeadStatus.NEW, "referral", datetime(2026, 6, 2)),
        ]
        report = FunnelAnalytics(scenario_leads + previous).build_report(3, NOW)
        comparison = report.comparison

        assert report.summary.total == 10
        assert comparison.previous_total == 2
        assert comparison.previous_conversion_rate == 50.0
        assert comparison.conversion_change == -40.0
        assert comparison.leads_change == 400.0

    def test_comparison_without_previous_leads(self, scenario_leads):
        comparison = FunnelAnalytics(scenario_leads).build_report(3, NOW).comparison
        assert comparison.previous_total == 0
        assert comparison.conversion_change == 0
        assert comparison.leads_change == 0


class TestEdgeCases:
    def test_empty_leads(self):
        report = FunnelAnalytics([]).build_report(1, NOW)

        assert report.summary.total == 0
        assert report.summary.conversion_rate == 0
        assert all(stage.count == 0 and stage.drop_off == 0 for stage in report.funnel)
        assert report.status_distribution == []
        assert report.source_distribution == []

    def test_unknown_source(self):
        leads = [
            make_lead(LeadStatus.NEW, None, datetime(2026, 10, 1)),
            make_lead(LeadStatus.NEW, "  ", datetime(2026, 10, 2)),
        ]
        sources = FunnelAnalytics(leads).build_report(1, NOW).source_distribution

        assert len(sources) == 1
        assert sources[0].source == "unknown"
        assert sources[0].label == "Tidak Diketahui"
        assert sources[0].total == 2

    def test_leads_without_created_at_ignored(self):
        leads = [
            make_lead(LeadStatus.NEW, "website", None),
            make_lead(LeadStatus.NEW, "website", datetime(2026, 10, 1)),
        ]
        assert FunnelAnalytics(leads).build_report(1, NOW).summary.total == 1

    def test_aware_and_date_timestamps(self):
        leads = [
            make_lead(LeadStatus.NEW, "website", datetime(2026, 10, 10, 12, 0, tzinfo=timezone.utc)),
            make_lead(LeadStatus.NEW, "website", date(2026, 10, 11)),
        ]
        assert FunnelAnalytics(leads).build_report(1, NOW).summary.total == 2

    def test_funnel_is_non_increasing(self, scenario_leads):
        counts = [stage.count for stage in FunnelAnalytics.cumulative_funnel(scenario_leads)]
        assert counts == sorted(counts, reverse=True)
