from __future__ import annotations

from dataclasses import dataclass, field

from diary_dashboard.config import LabelsConfig
from diary_dashboard.io.schema import EventRecord


@dataclass(frozen=True)
class LabelCatalog:
    """Display-name lookups with explicit fallbacks."""

    categories: dict[str, str] = field(default_factory=dict)
    category_fallback: str = "Прочее"
    not_specified: str = "Не указано"
    missing_text: str = "Нет данных"
    source_short_labels: dict[str, str] = field(default_factory=dict)
    confidence_labels: dict[str, str] = field(default_factory=dict)
    confidence_levels: tuple[str, ...] = ()
    filter_names: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: LabelsConfig) -> LabelCatalog:
        return cls(
            categories=dict(config.categories),
            category_fallback=config.category_fallback,
            not_specified=config.not_specified,
            missing_text=config.missing_text,
            source_short_labels=dict(config.source_short_labels),
            confidence_labels=dict(config.confidence_labels),
            confidence_levels=tuple(config.confidence_levels),
            filter_names=dict(config.filter_names),
        )

    def category_name(self, prefix: str) -> str:
        return self.categories.get(prefix, self.category_fallback)

    def category_option_label(self, prefix: str) -> str:
        return self.categories.get(prefix, prefix)

    def event_category(self, event: EventRecord) -> str:
        if not event.event_id:
            return ""
        return self.category_name(event.category_prefix)

    def short_source(self, source: str) -> str:
        return self.source_short_labels.get(source, source)

    def confidence_label(self, confidence: str) -> str:
        return self.confidence_labels.get(confidence, confidence)

    def filter_name(self, key: str) -> str:
        return self.filter_names.get(key, key)

    def or_not_specified(self, value: str) -> str:
        return value or self.not_specified

    def or_missing(self, value: str) -> str:
        return value or self.missing_text
