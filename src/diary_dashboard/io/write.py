from __future__ import annotations

import csv
import logging
from collections.abc import Sequence
from datetime import date
from pathlib import Path

import pandas as pd

from diary_dashboard.io.schema import EventRecord
from diary_dashboard.preprocess.labels import LabelCatalog

LOGGER = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "Дата",
    "Событие",
    "Локация",
    "Источник",
    "Достоверность",
    "Описание",
    "Фрагмент текста",
]


def export_file_name(prefix: str, today: date | None = None) -> str:
    today = today or date.today()
    return f"{prefix}_{today.isoformat()}.csv"


def build_export_frame(events: Sequence[EventRecord], labels: LabelCatalog) -> pd.DataFrame:
    rows = [
        [
            event.source_date.isoformat(),
            event.event_name,
            labels.or_not_specified(event.location_normalized),
            event.information_source_type,
            event.confidence,
            event.description,
            event.text_fragment,
        ]
        for event in events
    ]
    return pd.DataFrame(rows, columns=EXPORT_HEADERS)


def write_events_csv(
    events: Sequence[EventRecord],
    out_dir: Path,
    labels: LabelCatalog,
    *,
    prefix: str = "historical_diary_data",
    today: date | None = None,
) -> Path | None:
    """Write the filtered events as CSV; returns None when there is nothing to export."""
    if not events:
        LOGGER.warning("Nothing to export: filtered selection is empty")
        return None

    path = out_dir / export_file_name(prefix, today)
    path.parent.mkdir(parents=True, exist_ok=True)
    # utf-8-sig prepends the BOM spreadsheet tools need to detect UTF-8.
    build_export_frame(events, labels).to_csv(
        path,
        index=False,
        encoding="utf-8-sig",
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )
    LOGGER.info("Exported %d events to %s", len(events), path)
    return path
