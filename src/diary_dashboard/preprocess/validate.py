from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from diary_dashboard.config import ValidationConfig
from diary_dashboard.io.schema import EventRecord
from diary_dashboard.preprocess.time import parse_source_date

LOGGER = logging.getLogger(__name__)

REQUIRED_FIELDS = ("source_date", "event_name", "description")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _keywords(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(text for text in (_text(item) for item in value) if text)


def validate_events(
    raw_events: list[Any],
    config: ValidationConfig,
) -> tuple[EventRecord, ...]:
    """Keep well-formed, in-range records; everything else is dropped silently."""
    kept: list[EventRecord] = []
    for raw in raw_events:
        if not isinstance(raw, Mapping):
            continue
        if any(not _text(raw.get(field)) for field in REQUIRED_FIELDS):
            continue
        source_date = parse_source_date(raw.get("source_date"))
        if source_date is None:
            continue
        if source_date < config.valid_start or source_date > config.valid_end:
            continue

        entry_id = _text(raw.get("entry_id"))
        kept.append(
            EventRecord(
                source_date=source_date,
                event_name=_text(raw.get("event_name")),
                description=_text(raw.get("description")),
                unique_id=f"{entry_id}_{len(kept)}",
                entry_id=entry_id,
                event_id=_text(raw.get("event_id")),
                location_normalized=_text(raw.get("location_normalized")),
                information_source_type=_text(raw.get("information_source_type")),
                confidence=_text(raw.get("confidence")),
                keywords=_keywords(raw.get("keywords")),
                text_fragment=_text(raw.get("text_fragment")),
                brief_context=_text(raw.get("brief_context")),
                event_subtype_custom=_text(raw.get("event_subtype_custom")),
            )
        )

    dropped = len(raw_events) - len(kept)
    LOGGER.info("Validated %d events (%d dropped)", len(kept), dropped)
    return tuple(kept)
