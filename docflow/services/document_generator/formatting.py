"""Label tables and Japanese calendar helpers used by mapping tables."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

SSW_FIELD_LABELS = {
    "NURSING_CARE": "介護",
    "ACCOMMODATION": "宿泊",
    "FOOD_SERVICE": "外食業",
    "FOOD_MANUFACTURING": "飲食料品製造業",
    "AUTO_TRANSPORT": "自動車運送業",
}

GENDER_LABELS = {
    "MALE": "男",
    "FEMALE": "女",
}

# Student records store nationality in English; unknown names pass through unchanged.
NATIONALITY_LABELS = {
    "Vietnam": "ベトナム",
    "Cambodia": "カンボジア",
    "Myanmar": "ミャンマー",
    "Indonesia": "インドネシア",
    "Philippines": "フィリピン",
    "Thailand": "タイ",
    "Nepal": "ネパール",
    "China": "中国",
    "South Korea": "韓国",
    "Taiwan": "台湾",
    "Mongolia": "モンゴル",
    "India": "インド",
    "Bangladesh": "バングラデシュ",
    "Sri Lanka": "スリランカ",
    "Pakistan": "パキスタン",
    "Uzbekistan": "ウズベキスタン",
}


def to_japanese_nationality(nationality: str) -> str:
    return NATIONALITY_LABELS.get(nationality, nationality)


def ssw_field_label(field: str) -> str:
    return SSW_FIELD_LABELS.get(field, "")


def gender_label(gender: str) -> str:
    return GENDER_LABELS.get(gender, "")


@dataclass(frozen=True, slots=True)
class Era:
    name: str
    start: date

    def year_of(self, day: date) -> int:
        return day.year - self.start.year + 1


# Newest first; each era begins on the day after the previous one ended.
ERAS: Tuple[Era, ...] = (
    Era("令和", date(2019, 5, 1)),
    Era("平成", date(1989, 1, 8)),
    Era("昭和", date(1926, 12, 25)),
)


@dataclass(frozen=True, slots=True)
class DateParts:
    """Gregorian and era components of a date, for templates that split them into cells."""

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    wareki_year: Optional[int] = None
    era_name: Optional[str] = None


def _as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def era_for(value: date) -> Optional[Era]:
    day = _as_date(value)
    for era in ERAS:
        if day >= era.start:
            return era
    return None


def date_parts(value: Optional[date]) -> DateParts:
    if value is None:
        return DateParts()
    day = _as_date(value)
    era = era_for(day)
    return DateParts(
        year=day.year,
        month=day.month,
        day=day.day,
        wareki_year=era.year_of(day) if era else None,
        era_name=era.name if era else None,
    )


def to_wareki(value: Optional[date]) -> str:
    """Format a date in the Japanese era calendar, e.g. ``令和 7年 4月 15日``.

    Dates before the Showa era fall back to the Gregorian year.
    """

    if value is None:
        return ""
    parts = date_parts(value)
    if parts.era_name is None:
        return f"{parts.year}年 {parts.month}月 {parts.day}日"
    return f"{parts.era_name} {parts.wareki_year}年 {parts.month}月 {parts.day}日"


def split_passport_name(name_en: str) -> Tuple[str, str]:
    """Split a passport name into (family, given); the family name is the last word."""

    parts = name_en.split()
    if len(parts) <= 1:
        return name_en.strip(), ""
    return parts[-1], " ".join(parts[:-1])
