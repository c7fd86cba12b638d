from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Callable

from diary_dashboard.io.schema import EventRecord
from diary_dashboard.preprocess.time import month_key

FILTER_KEYS = ("month", "category", "location", "source", "confidence", "search")

Predicate = Callable[[EventRecord], bool]


@dataclass(frozen=True)
class FilterState:
    month: str = ""
    category: str = ""
    location: str = ""
    source: str = ""
    confidence: str = ""
    search: str = ""

    def __post_init__(self) -> None:
        # matched against lower-cased event text
        object.__setattr__(self, "search", self.search.lower())

    def is_empty(self) -> bool:
        return not any(self.as_dict().values())

    def as_dict(self) -> dict[str, str]:
        return asdict(self)

    def active_items(self) -> list[tuple[str, str]]:
        return [(key, value) for key, value in self.as_dict().items() if value]


def normalize_filters(raw: Mapping[str, object] | None) -> FilterState:
    raw = raw or {}
    unknown = sorted(set(raw) - set(FILTER_KEYS))
    if unknown:
        raise ValueError(f"Unknown filters: {', '.join(unknown)}")
    values = {key: str(raw.get(key) or "") for key in FILTER_KEYS}
    # select values are trimmed; search text is matched as typed
    for key in FILTER_KEYS:
        if key != "search":
            values[key] = values[key].strip()
    return FilterState(**values)


def search_text(event: EventRecord) -> str:
    parts = [
        event.event_name,
        event.description,
        event.location_normalized,
        event.information_source_type,
        event.text_fragment,
        *event.keywords,
    ]
    return " ".join(part or "" for part in parts).lower()


def _predicates(filters: FilterState) -> list[Predicate]:
    predicates: list[Predicate] = []
    if filters.month:
        predicates.append(lambda event: month_key(event.source_date) == filters.month)
    if filters.category:
        predicates.append(
            lambda event: bool(event.event_id) and event.event_id.startswith(filters.category)
        )
    if filters.location:
        predicates.append(lambda event: event.location_normalized == filters.location)
    if filters.source:
        predicates.append(lambda event: event.information_source_type == filters.source)
    if filters.confidence:
        predicates.append(lambda event: event.confidence == filters.confidence)
    if filters.search:
        predicates.append(lambda event: filters.search in search_text(event))
    return predicates


def apply_filters(base: Iterable[EventRecord], filters: FilterState) -> list[EventRecord]:
    """Return the records of ``base`` passing every active filter, in base order."""
    predicates = _predicates(filters)
    return [event for event in base if all(predicate(event) for predicate in predicates)]
