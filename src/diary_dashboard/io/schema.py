from __future__ import annotations

from dataclasses import dataclass
from datetime import date

DATE_FIELD = "source_date"

SORTABLE_COLUMNS = (
    "source_date",
    "event_name",
    "location_normalized",
    "information_source_type",
    "confidence",
    "description",
)


@dataclass(frozen=True)
class EventRecord:
    """One validated diary/event entry of the base dataset."""

    source_date: date
    event_name: str
    description: str
    unique_id: str
    entry_id: str = ""
    event_id: str = ""
    location_normalized: str = ""
    information_source_type: str = ""
    confidence: str = ""
    keywords: tuple[str, ...] = ()
    text_fragment: str = ""
    brief_context: str = ""
    event_subtype_custom: str = ""

    @property
    def category_prefix(self) -> str:
        if not self.event_id:
            return ""
        return self.event_id.split("_", 1)[0] + "_"

    def field_text(self, column: str) -> str:
        if column not in SORTABLE_COLUMNS:
            raise ValueError(f"Unknown event column: {column}")
        value = getattr(self, column)
        if isinstance(value, date):
            return value.isoformat()
        return value or ""
