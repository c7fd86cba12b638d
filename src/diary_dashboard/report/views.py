from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

import numpy as np

from diary_dashboard.config import AppConfig, ViewsConfig
from diary_dashboard.features.aggregates import (
    build_category_counts,
    build_confidence_counts,
    build_keyword_counts,
    build_location_counts,
    build_source_counts,
    build_weekly_counts,
)
from diary_dashboard.features.filters import FilterState, apply_filters
from diary_dashboard.features.sorting import SortState, collation_key, sort_events
from diary_dashboard.io.schema import EventRecord
from diary_dashboard.pipeline.dataset import Dataset
from diary_dashboard.preprocess.labels import LabelCatalog
from diary_dashboard.preprocess.time import (
    format_day_month,
    format_long,
    format_short,
    format_week_label,
    month_key,
    month_label,
)

ELLIPSIS = "..."


@dataclass(frozen=True)
class StatsSummary:
    total_count: int
    filtered_count: int
    date_range: str


@dataclass(frozen=True)
class ChartSeries:
    chart_id: str
    labels: list[str]
    values: list[int]

    @classmethod
    def from_counts(cls, chart_id: str, counts: dict[str, int]) -> ChartSeries:
        return cls(chart_id=chart_id, labels=list(counts), values=list(counts.values()))


@dataclass(frozen=True)
class TimelinePoint:
    week_start: date
    label: str
    count: int


@dataclass(frozen=True)
class TableRow:
    unique_id: str
    source_date: date
    date_display: str
    event_name: str
    location: str
    source: str
    source_short: str
    confidence: str
    confidence_label: str
    description: str


@dataclass(frozen=True)
class KeywordCloudEntry:
    word: str
    count: int
    font_px: float


@dataclass(frozen=True)
class ChronologyItem:
    unique_id: str
    source_date: date
    date_display: str
    type_label: str
    quote: str


@dataclass(frozen=True)
class FilterOption:
    value: str
    label: str


@dataclass(frozen=True)
class FilterOptions:
    months: list[FilterOption]
    categories: list[FilterOption]
    locations: list[FilterOption]
    sources: list[FilterOption]
    confidence: list[FilterOption]


@dataclass(frozen=True)
class ActiveFilterTag:
    key: str
    name: str
    value: str


@dataclass(frozen=True)
class EventDetail:
    unique_id: str
    title: str
    date_display: str
    description: str
    text_fragment: str
    location: str
    source: str
    brief_context: str
    keywords: list[str]


@dataclass(frozen=True)
class DashboardViews:
    stats: StatsSummary
    filters: FilterState
    sort: SortState
    active_filters: list[ActiveFilterTag]
    timeline: list[TimelinePoint]
    charts: dict[str, ChartSeries]
    table: list[TableRow]
    keyword_cloud: list[KeywordCloudEntry]
    chronology: list[ChronologyItem]

    def as_payload(self) -> dict[str, Any]:
        return asdict(self)


def build_stats(dataset: Dataset, filtered: Sequence[EventRecord]) -> StatsSummary:
    full_range = dataset.full_range
    date_range = ""
    if full_range is not None:
        date_range = f"{format_short(full_range[0])} - {format_short(full_range[1])}"
    return StatsSummary(
        total_count=len(dataset),
        filtered_count=len(filtered),
        date_range=date_range,
    )


def build_timeline(dataset: Dataset, filtered: Sequence[EventRecord]) -> list[TimelinePoint]:
    weekly = build_weekly_counts(filtered, dataset.full_range)
    points: list[TimelinePoint] = []
    for row in weekly.itertuples(index=False):
        start = row.week_start.date()
        points.append(
            TimelinePoint(week_start=start, label=format_week_label(start), count=int(row.n_events))
        )
    return points


def build_table_rows(
    filtered: Sequence[EventRecord],
    sort: SortState,
    labels: LabelCatalog,
) -> list[TableRow]:
    return [
        TableRow(
            unique_id=event.unique_id,
            source_date=event.source_date,
            date_display=format_short(event.source_date),
            event_name=event.event_name,
            location=labels.or_not_specified(event.location_normalized),
            source=event.information_source_type,
            source_short=labels.short_source(event.information_source_type),
            confidence=event.confidence,
            confidence_label=labels.confidence_label(event.confidence),
            description=event.description,
        )
        for event in sort_events(filtered, sort)
    ]


def keyword_font_size(count: int, min_count: int, max_count: int, config: ViewsConfig) -> float:
    if max_count == min_count:
        return float(config.keyword_min_font_px)
    return float(
        np.interp(
            count,
            [min_count, max_count],
            [config.keyword_min_font_px, config.keyword_max_font_px],
        )
    )


def build_keyword_cloud(
    filtered: Sequence[EventRecord],
    config: ViewsConfig,
) -> list[KeywordCloudEntry]:
    counts = build_keyword_counts(filtered)
    if not counts:
        return []
    min_count = min(counts.values())
    max_count = max(counts.values())
    top = sorted(counts.items(), key=lambda item: item[1], reverse=True)[: config.keyword_cloud_limit]
    top.sort(key=lambda item: collation_key(item[0]))
    return [
        KeywordCloudEntry(
            word=word,
            count=count,
            font_px=keyword_font_size(count, min_count, max_count, config),
        )
        for word, count in top
    ]


def _is_emotional(event: EventRecord, config: ViewsConfig) -> bool:
    if config.perception_prefix and event.event_id.startswith(config.perception_prefix):
        return True
    haystack = f"{event.event_subtype_custom} {event.text_fragment}".lower()
    return any(keyword.lower() in haystack for keyword in config.emotion_keywords if keyword)


def truncate_quote(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + ELLIPSIS


def build_chronology(
    filtered: Sequence[EventRecord],
    config: ViewsConfig,
) -> list[ChronologyItem]:
    emotional = [event for event in filtered if _is_emotional(event, config)]
    return [
        ChronologyItem(
            unique_id=event.unique_id,
            source_date=event.source_date,
            date_display=format_day_month(event.source_date),
            type_label=event.event_subtype_custom or event.event_name,
            quote=truncate_quote(event.text_fragment, config.quote_max_chars),
        )
        for event in sorted(emotional, key=lambda event: event.source_date)
    ]


def build_filter_options(dataset: Dataset, labels: LabelCatalog) -> FilterOptions:
    events = dataset.events
    months = sorted({month_key(event.source_date) for event in events})
    prefixes = sorted({event.category_prefix for event in events if event.event_id})
    locations = sorted(
        {event.location_normalized for event in events if event.location_normalized},
        key=collation_key,
    )
    sources = sorted(
        {event.information_source_type for event in events if event.information_source_type},
        key=collation_key,
    )
    return FilterOptions(
        months=[FilterOption(value=key, label=month_label(key)) for key in months],
        categories=[
            FilterOption(value=prefix, label=labels.category_option_label(prefix))
            for prefix in prefixes
        ],
        locations=[FilterOption(value=value, label=value) for value in locations],
        sources=[FilterOption(value=value, label=value) for value in sources],
        confidence=[
            FilterOption(value=level, label=labels.confidence_label(level))
            for level in labels.confidence_levels
        ],
    )


def active_filter_tags(filters: FilterState, labels: LabelCatalog) -> list[ActiveFilterTag]:
    if filters.is_empty():
        return []
    tags: list[ActiveFilterTag] = []
    for key, value in filters.active_items():
        display = value
        if key == "confidence":
            display = labels.confidence_label(value)
        elif key == "month":
            display = month_label(value)
        elif key == "category":
            display = labels.category_option_label(value)
        tags.append(ActiveFilterTag(key=key, name=labels.filter_name(key), value=display))
    return tags


def event_detail(dataset: Dataset, unique_id: str, labels: LabelCatalog) -> EventDetail | None:
    event = dataset.find(unique_id)
    if event is None:
        return None
    return EventDetail(
        unique_id=event.unique_id,
        title=event.event_name,
        date_display=format_long(event.source_date),
        description=event.description,
        text_fragment=labels.or_missing(event.text_fragment),
        location=labels.or_not_specified(event.location_normalized),
        source=event.information_source_type,
        brief_context=labels.or_missing(event.brief_context),
        keywords=list(event.keywords),
    )


def build_views(
    dataset: Dataset,
    filters: FilterState,
    sort: SortState,
    config: AppConfig,
) -> DashboardViews:
    """Derive every dashboard view from the base dataset and the current filter/sort state."""
    labels = LabelCatalog.from_config(config.labels)
    filtered = apply_filters(dataset.events, filters)

    charts = {
        "category": ChartSeries.from_counts("category", build_category_counts(filtered, labels)),
        "location": ChartSeries.from_counts(
            "location",
            build_location_counts(filtered, top_n=config.views.top_locations),
        ),
        "source": ChartSeries.from_counts("source", build_source_counts(filtered, labels)),
        "confidence": ChartSeries.from_counts(
            "confidence", build_confidence_counts(filtered, labels)
        ),
    }
    timeline = build_timeline(dataset, filtered)
    charts["timeline"] = ChartSeries(
        chart_id="timeline",
        labels=[point.label for point in timeline],
        values=[point.count for point in timeline],
    )

    return DashboardViews(
        stats=build_stats(dataset, filtered),
        filters=filters,
        sort=sort,
        active_filters=active_filter_tags(filters, labels),
        timeline=timeline,
        charts=charts,
        table=build_table_rows(filtered, sort, labels),
        keyword_cloud=build_keyword_cloud(filtered, config.views),
        chronology=build_chronology(filtered, config.views),
    )
