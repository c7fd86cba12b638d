from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import pandas as pd

MONTHS_NOMINATIVE = (
    "Январь",
    "Февраль",
    "Март",
    "Апрель",
    "Май",
    "Июнь",
    "Июль",
    "Август",
    "Сентябрь",
    "Октябрь",
    "Ноябрь",
    "Декабрь",
)
MONTHS_GENITIVE = (
    "января",
    "февраля",
    "марта",
    "апреля",
    "мая",
    "июня",
    "июля",
    "августа",
    "сентября",
    "октября",
    "ноября",
    "декабря",
)
MONTHS_SHORT = (
    "янв.",
    "февр.",
    "мар.",
    "апр.",
    "мая",
    "июн.",
    "июл.",
    "авг.",
    "сент.",
    "окт.",
    "нояб.",
    "дек.",
)


def parse_source_date(value: Any) -> date | None:
    if not isinstance(value, (str, date)):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def month_key(value: date) -> str:
    return f"{value.year}-{value.month:02d}"


def month_label(key: str) -> str:
    year, _, month = key.partition("-")
    try:
        return f"{MONTHS_NOMINATIVE[int(month) - 1]} {int(year)}"
    except (ValueError, IndexError):
        return key


def week_start(value: date) -> date:
    """Monday of the ISO week containing ``value``."""
    return value - timedelta(days=value.isoweekday() - 1)


def format_short(value: date) -> str:
    return f"{value.day:02d}.{value.month:02d}.{value.year}"


def format_long(value: date) -> str:
    return f"{value.day} {MONTHS_GENITIVE[value.month - 1]} {value.year} г."


def format_day_month(value: date) -> str:
    return f"{value.day} {MONTHS_SHORT[value.month - 1]}"


def format_week_label(start: date) -> str:
    end = start + timedelta(days=6)
    return f"{start.day:02d}.{start.month:02d}–{end.day:02d}.{end.month:02d}"
