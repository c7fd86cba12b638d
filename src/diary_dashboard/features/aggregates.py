from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Callable

import pandas as pd

from diary_dashboard.io.schema import EventRecord
from diary_dashboard.preprocess.labels import LabelCatalog
from diary_dashboard.preprocess.time import week_start

NOT_SPECIFIED = "Не указано"

KeyFn = Callable[[EventRecord], str | None]


def _counts_in_first_seen_order(keys: pd.Series) -> dict[str, int]:
    if keys.empty:
        return {}
    grouped = keys.groupby(keys, sort=False).size()
    return {str(key): int(count) for key, count in grouped.items()}


def group_and_count(
    records: Sequence[EventRecord],
    key_fn: KeyFn,
    fallback: str = NOT_SPECIFIED,
) -> dict[str, int]:
    """Count records per derived key; blank keys fall into the ``fallback`` bucket."""
    keys = pd.Series([key_fn(record) or fallback for record in records], dtype="object")
    return _counts_in_first_seen_order(keys)


def build_category_counts(
    records: Sequence[EventRecord],
    labels: LabelCatalog,
) -> dict[str, int]:
    return group_and_count(records, labels.event_category, fallback=labels.not_specified)


def build_location_counts(
    records: Sequence[EventRecord],
    top_n: int | None = None,
) -> dict[str, int]:
    located = [record for record in records if record.location_normalized]
    counts = group_and_count(located, lambda record: record.location_normalized)
    if top_n is None:
        return counts
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:top_n]
    return dict(ranked)


def build_source_counts(
    records: Sequence[EventRecord],
    labels: LabelCatalog,
) -> dict[str, int]:
    return group_and_count(
        records,
        lambda record: labels.short_source(record.information_source_type),
        fallback=labels.not_specified,
    )


def build_confidence_counts(
    records: Sequence[EventRecord],
    labels: LabelCatalog,
) -> dict[str, int]:
    return group_and_count(
        records,
        lambda record: labels.confidence_label(record.confidence),
        fallback=labels.not_specified,
    )


def build_keyword_counts(records: Sequence[EventRecord]) -> dict[str, int]:
    keywords = pd.Series([list(record.keywords) for record in records], dtype="object")
    if keywords.empty:
        return {}
    exploded = keywords.explode().dropna()
    return _counts_in_first_seen_order(exploded.astype(str))


def build_weekly_counts(
    records: Sequence[EventRecord],
    full_range: tuple[date, date] | None,
) -> pd.DataFrame:
    """Events per Monday-aligned week across the whole dataset range, zero-filled."""
    if full_range is None:
        return pd.DataFrame({"week_start": pd.Series([], dtype="datetime64[ns]"), "n_events": []})

    frame = pd.DataFrame(
        {"week_start": pd.to_datetime([week_start(record.source_date) for record in records])}
    )
    grouped = frame.groupby("week_start").size()

    full_index = pd.date_range(
        start=pd.Timestamp(week_start(full_range[0])),
        end=pd.Timestamp(week_start(full_range[1])),
        freq="7D",
        name="week_start",
    )
    grouped = grouped.reindex(full_index, fill_value=0)
    return grouped.rename("n_events").astype(int).reset_index()
