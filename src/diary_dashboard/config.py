from __future__ import annotations

import os
from datetime import date
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

DATA_SOURCE_ENV_VAR = "DIARY_DASHBOARD_DATA_SOURCE"

DEFAULT_CATEGORIES = {
    "REV1848_": "Революции 1848-49",
    "RU_": "Российские реакции",
    "AUTHOR_": "Авторские восприятия",
    "IDEOLOGIES_": "Идеологии и причины",
    "OTHER_": "Прочее",
}

DEFAULT_SOURCE_SHORT_LABELS = {
    "Официальные источники (газеты, манифесты)": "Офиц. источники",
    "Личные наблюдения и опыт автора": "Личн. опыт",
    "Неофициальные сведения (слухи, разговоры в обществе)": "Слухи",
    "Информация от конкретного лица (именованный источник)": "Именов. источник",
    "Источник неясен/не указан": "Неясный источник",
}

DEFAULT_CONFIDENCE_LABELS = {
    "High": "Высокий",
    "Medium": "Средний",
    "Low": "Низкий",
}

DEFAULT_FILTER_NAMES = {
    "month": "Месяц",
    "category": "Категория",
    "location": "Локация",
    "source": "Источник",
    "confidence": "Достоверность",
    "search": "Поиск",
}

DEFAULT_EMOTION_KEYWORDS = [
    "страх",
    "тревог",
    "надежд",
    "радост",
    "печал",
    "гнев",
    "беспокой",
    "восторг",
]


class InputConfig(BaseModel):
    source: str = "data/dashboard_data.json"
    timeout_seconds: float = Field(default=30.0, gt=0.0)


class ValidationConfig(BaseModel):
    valid_start: date = date(1849, 1, 1)
    valid_end: date = date(1849, 12, 31)

    @model_validator(mode="after")
    def _check_range(self) -> ValidationConfig:
        if self.valid_start > self.valid_end:
            raise ValueError("validation.valid_start must be <= validation.valid_end")
        return self


class LabelsConfig(BaseModel):
    categories: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_CATEGORIES))
    category_fallback: str = "Прочее"
    not_specified: str = "Не указано"
    missing_text: str = "Нет данных"
    source_short_labels: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_SOURCE_SHORT_LABELS)
    )
    confidence_labels: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CONFIDENCE_LABELS)
    )
    confidence_levels: list[str] = Field(default_factory=lambda: ["High", "Medium", "Low"])
    filter_names: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_FILTER_NAMES))


class ViewsConfig(BaseModel):
    top_locations: int = Field(default=10, ge=1)
    keyword_cloud_limit: int = Field(default=40, ge=1)
    keyword_min_font_px: float = Field(default=12.0, gt=0.0)
    keyword_max_font_px: float = Field(default=24.0, gt=0.0)
    perception_prefix: str = "AUTHOR_PERCEPTION_"
    emotion_keywords: list[str] = Field(default_factory=lambda: list(DEFAULT_EMOTION_KEYWORDS))
    quote_max_chars: int = Field(default=120, ge=1)

    @model_validator(mode="after")
    def _check_font_range(self) -> ViewsConfig:
        if self.keyword_min_font_px >= self.keyword_max_font_px:
            raise ValueError("views.keyword_min_font_px must be < views.keyword_max_font_px")
        return self


class OutputsConfig(BaseModel):
    figures_format: str = "png"
    render_figures: bool = True


class ExportConfig(BaseModel):
    file_prefix: str = "historical_diary_data"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    input: InputConfig = Field(default_factory=InputConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    labels: LabelsConfig = Field(default_factory=LabelsConfig)
    views: ViewsConfig = Field(default_factory=ViewsConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def is_remote_source(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _resolve_source(source: str, base_dir: Path) -> str:
    if not source or is_remote_source(source):
        return source
    candidate = Path(source)
    if candidate.is_absolute():
        return str(candidate)
    return str((base_dir / candidate).resolve())


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    base_dir = path.resolve().parent

    config.input.source = os.getenv(DATA_SOURCE_ENV_VAR) or _resolve_source(
        config.input.source, base_dir
    )
    return config
