from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from diary_dashboard.config import AppConfig
from diary_dashboard.io.read import load_raw_events
from diary_dashboard.io.schema import EventRecord
from diary_dashboard.preprocess.validate import validate_events

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dataset:
    """Validated base records; written once at load time and read-only afterwards."""

    events: tuple[EventRecord, ...]

    @property
    def full_range(self) -> tuple[date, date] | None:
        if not self.events:
            return None
        dates = [event.source_date for event in self.events]
        return min(dates), max(dates)

    def find(self, unique_id: str) -> EventRecord | None:
        for event in self.events:
            if event.unique_id == unique_id:
                return event
        return None

    def __len__(self) -> int:
        return len(self.events)


def build_dataset(raw_events: list[object], config: AppConfig) -> Dataset:
    return Dataset(events=validate_events(raw_events, config.validation))


def load_dataset(config: AppConfig) -> Dataset:
    dataset = build_dataset(load_raw_events(config.input), config)
    LOGGER.info("Dataset ready: %d events, range %s", len(dataset), dataset.full_range)
    return dataset
