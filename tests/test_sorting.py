from __future__ import annotations

from datetime import date

import pytest

from diary_dashboard.features.sorting import SortState, collation_key, sort_events
from diary_dashboard.io.schema import EventRecord


def _event(name: str, day: int, **overrides: object) -> EventRecord:
    fields: dict[str, object] = {
        "source_date": date(1849, 5, day),
        "event_name": name,
        "description": "d",
        "unique_id": f"{name}_{day}",
    }
    fields.update(overrides)
    return EventRecord(**fields)  # type: ignore[arg-type]


def test_default_sort_is_date_ascending() -> None:
    assert SortState() == SortState(column="source_date", direction="asc")


def test_sort_by_date_round_trip_for_distinct_dates() -> None:
    records = [_event("c", 3), _event("a", 1), _event("d", 4), _event("b", 2)]

    ascending = sort_events(records, SortState())
    descending = sort_events(records, SortState(direction="desc"))

    assert [event.event_name for event in ascending] == ["a", "b", "c", "d"]
    assert list(reversed(ascending)) == descending
    assert [event.event_name for event in records] == ["c", "a", "d", "b"]


def test_sort_is_stable_for_ties_in_both_directions() -> None:
    records = [
        _event("first", 1, confidence="High"),
        _event("second", 2, confidence="Low"),
        _event("third", 3, confidence="High"),
        _event("fourth", 4, confidence="High"),
    ]

    ascending = sort_events(records, SortState(column="confidence"))
    descending = sort_events(records, SortState(column="confidence", direction="desc"))

    assert [event.event_name for event in ascending] == ["first", "third", "fourth", "second"]
    assert [event.event_name for event in descending] == ["second", "first", "third", "fourth"]


def test_text_sort_uses_russian_collation_and_empty_values_first() -> None:
    records = [
        _event("n1", 1, location_normalized="яблоня"),
        _event("n2", 2, location_normalized="Ёлкино"),
        _event("n3", 3, location_normalized=""),
        _event("n4", 4, location_normalized="ель"),
        _event("n5", 5, location_normalized="Берлин"),
    ]

    ordered = sort_events(records, SortState(column="location_normalized"))
    assert [event.location_normalized for event in ordered] == [
        "",
        "Берлин",
        "Ёлкино",
        "ель",
        "яблоня",
    ]


def test_collation_key_keeps_short_i_distinct() -> None:
    assert collation_key("йод")[0] != collation_key("иод")[0]
    assert collation_key("иод") < collation_key("йод")
    assert collation_key("Москва")[0] == collation_key("москва")[0]


def test_case_only_ties_put_lower_case_first() -> None:
    records = [
        _event("upper", 1, location_normalized="Вена"),
        _event("lower", 2, location_normalized="вена"),
    ]

    ordered = sort_events(records, SortState(column="location_normalized"))
    assert [event.location_normalized for event in ordered] == ["вена", "Вена"]
    assert sorted(["Ель", "ель", "ЕЛЬ"], key=collation_key) == ["ель", "Ель", "ЕЛЬ"]


def test_clicked_toggles_direction_or_resets_to_ascending() -> None:
    state = SortState()
    assert state.clicked("source_date") == SortState(direction="desc")
    assert state.clicked("source_date").clicked("source_date") == SortState()
    assert SortState(direction="desc").clicked("event_name") == SortState(column="event_name")


def test_sort_state_rejects_unknown_column_and_direction() -> None:
    with pytest.raises(ValueError, match="column"):
        SortState(column="unique_id")
    with pytest.raises(ValueError, match="direction"):
        SortState(direction="up")  # type: ignore[arg-type]
