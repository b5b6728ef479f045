"""
Аналитика воронки лидов.

Все показатели считаются в памяти по одному набору лидов, загруженному
целиком: фильтрация по периоду, группировка по месяцам, этапам и источникам.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from loguru import logger

from core.date_utils import add_months, format_month_short, iter_months, month_end, month_start
from modules.crm.leads.models import (
    FUNNEL_STAGES,
    IN_PROGRESS_STATUSES,
    STATUS_COLORS,
    Lead,
    LeadStatus,
)

PERIOD_CHOICES = (1, 3, 6, 12)
UNKNOWN_SOURCE = "unknown"
UNKNOWN_SOURCE_LABEL = "Tidak Diketahui"

# Нижние границы рейтинга источника, проверяются сверху вниз
RATING_BANDS: Tuple[Tuple[int, str], ...] = (
    (30, "Excellent"),
    (20, "Good"),
    (10, "Average"),
)
RATING_FALLBACK = "Poor"

Number = Union[int, float]


def round_half_up(value: float, digits: int = 0) -> Number:
    """Округление половины от нуля (2.5 -> 3, -2.5 -> -3)"""
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def percent(part: Number, whole: Number, digits: int = 0) -> Number:
    """part / whole * 100 с округлением; 0 при нулевом знаменателе"""
    if not whole:
        return 0 if digits == 0 else 0.0
    return round_half_up(part / whole * 100, digits)


def rating_for(conversion: Number) -> str:
    for threshold, label in RATING_BANDS:
        if conversion >= threshold:
            return label
    return RATING_FALLBACK


def source_label(source: str) -> str:
    if source == UNKNOWN_SOURCE:
        return UNKNOWN_SOURCE_LABEL
    return source[:1].upper() + source[1:]


def _as_local(value: Union[date, datetime]) -> datetime:
    """Наивное локальное время для сравнения с now"""
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


@dataclass
class SummaryStats:
    total: int = 0
    new: int = 0
    in_progress: int = 0
    won: int = 0
    lost: int = 0
    conversion_rate: float = 0.0
    loss_rate: float = 0.0


@dataclass
class MonthlyTrendPoint:
    month: date
    label: str
    total: int
    won: int
    lost: int
    conversion: int


@dataclass
class FunnelStage:
    """Этап кумулятивной воронки"""
    status: LeadStatus
    label: str
    count: int
    share: float
    drop_off: float = 0.0
    color: str = ""

    @property
    def show_drop_off(self) -> bool:
        return self.drop_off > 0


@dataclass
class StatusSlice:
    status: LeadStatus
    label: str
    count: int
    color: str


@dataclass
class SourceStats:
    source: str
    label: str
    total: int
    won: int
    conversion: int

    @property
    def rating(self) -> str:
        return rating_for(self.conversion)


@dataclass
class PeriodComparison:
    previous_start: datetime
    previous_end: datetime
    previous_total: int
    previous_conversion_rate: float
    conversion_change: float
    leads_change: float


@dataclass
class FunnelReport:
    period_months: int
    start: datetime
    end: datetime
    summary: SummaryStats
    monthly_trend: List[MonthlyTrendPoint] = field(default_factory=list)
    funnel: List[FunnelStage] = field(default_factory=list)
    status_distribution: List[StatusSlice] = field(default_factory=list)
    source_distribution: List[SourceStats] = field(default_factory=list)
    source_conversion: List[SourceStats] = field(default_factory=list)
    comparison: Optional[PeriodComparison] = None


class FunnelAnalytics:
    """Агрегатор аналитики воронки по набору лидов"""

    def __init__(self, leads: Iterable[Lead]):
        self.leads: List[Lead] = [lead for lead in leads if lead.created_at is not None]

    @staticmethod
    def period_window(period_months: int, now: datetime) -> Tuple[datetime, datetime]:
        if period_months not in PERIOD_CHOICES:
            raise ValueError(f"Период должен быть одним из {PERIOD_CHOICES}: {period_months}")
        return add_months(now, -period_months), now

    def leads_between(self, start: datetime, end: datetime) -> List[Lead]:
        """Лиды, созданные в интервале [start, end] включительно"""
        return [lead for lead in self.leads if start <= _as_local(lead.created_at) <= end]

    @staticmethod
    def summary(leads: Sequence[Lead]) -> SummaryStats:
        stats = SummaryStats(total=len(leads))
        for lead in leads:
            if lead.status == LeadStatus.NEW:
                stats.new += 1
            elif lead.status in IN_PROGRESS_STATUSES:
                stats.in_progress += 1
            elif lead.status == LeadStatus.WON:
                stats.won += 1
            elif lead.status == LeadStatus.LOST:
                stats.lost += 1
        stats.conversion_rate = percent(stats.won, stats.total, 1)
        stats.loss_rate = percent(stats.lost, stats.total, 1)
        return stats

    def monthly_trend(self, start: datetime, end: datetime) -> List[MonthlyTrendPoint]:
        """Помесячная динамика: все лиды по границам календарных месяцев"""
        points = []
        for month in iter_months(start, end):
            first, last = month_start(month), month_end(month)
            in_month = [lead for lead in self.leads if first <= _as_local(lead.created_at) <= last]
            won = sum(1 for lead in in_month if lead.status == LeadStatus.WON)
            lost = sum(1 for lead in in_month if lead.status == LeadStatus.LOST)
            points.append(MonthlyTrendPoint(
                month=month,
                label=format_month_short(month),
                total=len(in_month),
                won=won,
                lost=lost,
                conversion=percent(won, len(in_month)),
            ))
        return points

    @staticmethod
    def cumulative_funnel(leads: Sequence[Lead]) -> List[FunnelStage]:
        """
        Кумулятивная воронка: на этапе i считаются лиды с индексом статуса >= i.

        lost вне воронки (индекс -1) и не учитывается ни на одном этапе.
        """
        counts = [
            sum(1 for lead in leads if lead.status.funnel_index >= index)
            for index in range(len(FUNNEL_STAGES))
        ]
        first = counts[0] if counts else 0
        stages = []
        for index, status in enumerate(FUNNEL_STAGES):
            count = counts[index]
            drop_off = 0.0
            if index > 0:
                drop_off = percent(counts[index - 1] - count, counts[index - 1], 1)
            stages.append(FunnelStage(
                status=status,
                label=status.label,
                count=count,
                share=percent(count, first, 1),
                drop_off=drop_off,
                color=STATUS_COLORS[status],
            ))
        return stages

    @staticmethod
    def status_distribution(leads: Sequence[Lead]) -> List[StatusSlice]:
        counts: Dict[LeadStatus, int] = {status: 0 for status in LeadStatus}
        for lead in leads:
            counts[lead.status] += 1
        return [
            StatusSlice(status=status, label=status.label, count=count, color=STATUS_COLORS[status])
            for status, count in counts.items()
            if count > 0
        ]

    @staticmethod
    def source_stats(leads: Sequence[Lead]) -> List[SourceStats]:
        """Статистика по источникам в порядке первого появления"""
        grouped: Dict[str, List[int]] = {}
        for lead in leads:
            source = (lead.source or "").strip() or UNKNOWN_SOURCE
            totals = grouped.setdefault(source, [0, 0])
            totals[0] += 1
            if lead.status == LeadStatus.WON:
                totals[1] += 1
        return [
            SourceStats(
                source=source,
                label=source_label(source),
                total=total,
                won=won,
                conversion=percent(won, total),
            )
            for source, (total, won) in grouped.items()
        ]

    def compare(
        self,
        current: SummaryStats,
        start: datetime,
        end: datetime,
        period_months: int
    ) -> PeriodComparison:
        previous_start = add_months(start, -period_months)
        previous_end = add_months(end, -period_months)
        previous = self.summary(self.leads_between(previous_start, previous_end))
        previous_conversion = previous.won / previous.total * 100 if previous.total else 0.0

        conversion_change = 0.0
        if previous_conversion > 0:
            conversion_change = round_half_up(
                (current.conversion_rate - previous_conversion) / previous_conversion * 100, 1
            )
        leads_change = percent(current.total - previous.total, previous.total, 1)

        return PeriodComparison(
            previous_start=previous_start,
            previous_end=previous_end,
            previous_total=previous.total,
            previous_conversion_rate=round_half_up(previous_conversion, 1),
            conversion_change=conversion_change,
            leads_change=leads_change,
        )

    def build_report(self, period_months: int, now: datetime) -> FunnelReport:
        """Полный отчет аналитики за период (1, 3, 6 или 12 месяцев до now)"""
        now = _as_local(now)
        start, end = self.period_window(period_months, now)
        filtered = self.leads_between(start, end)
        summary = self.summary(filtered)
        sources = self.source_stats(filtered)

        report = FunnelReport(
            period_months=period_months,
            start=start,
            end=end,
            summary=summary,
            monthly_trend=self.monthly_trend(start, end),
            funnel=self.cumulative_funnel(filtered),
            status_distribution=self.status_distribution(filtered),
            source_distribution=sorted(sources, key=lambda item: item.total, reverse=True),
            source_conversion=sorted(sources, key=lambda item: item.conversion, reverse=True),
            comparison=self.compare(summary, start, end, period_months),
        )
        logger.debug(
            f"Аналитика за {period_months} мес.: лидов {summary.total}, "
            f"конверсия {summary.conversion_rate}%, потери {summary.loss_rate}%"
        )
        return report
