from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from diary_dashboard.io.schema import DATE_FIELD, SORTABLE_COLUMNS, EventRecord

SortDirection = Literal["asc", "desc"]

COMBINING_BREVE = "\u0306"


@dataclass(frozen=True)
class SortState:
    column: str = DATE_FIELD
    direction: SortDirection = "asc"

    def __post_init__(self) -> None:
        if self.column not in SORTABLE_COLUMNS:
            raise ValueError(f"Unsupported sort column: {self.column}")
        if self.direction not in ("asc", "desc"):
            raise ValueError(f"Unsupported sort direction: {self.direction}")

    def clicked(self, column: str) -> SortState:
        if column == self.column:
            return SortState(column=column, direction="desc" if self.direction == "asc" else "asc")
        return SortState(column=column, direction="asc")


def collation_key(value: str) -> tuple[str, str, str]:
    """Case-insensitive Russian-aware ordering with deterministic tie levels."""
    decomposed = unicodedata.normalize("NFD", value.casefold())
    # diacritics drop out of the primary level (ё sorts with е) but й keeps its breve
    base = "".join(
        char
        for char in decomposed
        if not unicodedata.combining(char) or char == COMBINING_BREVE
    )
    primary = unicodedata.normalize("NFC", base)
    # lower case before upper case on otherwise equal values
    return primary, value.casefold(), value.swapcase()


def sort_events(records: Iterable[EventRecord], sort: SortState) -> list[EventRecord]:
    """Stable sort on a copy; ``desc`` reverses the ordering but keeps ties in input order."""
    reverse = sort.direction == "desc"
    if sort.column == DATE_FIELD:
        return sorted(records, key=lambda event: event.source_date, reverse=reverse)
    return sorted(
        records,
        key=lambda event: collation_key(event.field_text(sort.column)),
        reverse=reverse,
    )
