"""Japanese calendar and label helpers used by mapping tables."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from docflow.services.document_generator.formatting import (
    date_parts,
    gender_label,
    split_passport_name,
    ssw_field_label,
    to_japanese_nationality,
    to_wareki,
)


def test_to_wareki_reiwa() -> None:
    assert to_wareki(date(2025, 4, 15)) == "令和 7年 4月 15日"
    assert to_wareki(None) == ""


@pytest.mark.parametrize(
    ("day", "era", "year"),
    [
        (date(2019, 5, 1), "令和", 1),
        (date(2019, 4, 30), "平成", 31),
        (date(1989, 1, 8), "平成", 1),
        (date(1989, 1, 7), "昭和", 64),
        (date(1926, 12, 25), "昭和", 1),
    ],
)
def test_era_boundaries_are_exact(day: date, era: str, year: int) -> None:
    parts = date_parts(day)
    assert (parts.era_name, parts.wareki_year) == (era, year)


def test_dates_before_showa_fall_back_to_gregorian() -> None:
    assert date_parts(date(1926, 12, 24)).era_name is None
    assert to_wareki(date(1926, 12, 24)) == "1926年 12月 24日"


def test_date_parts_accepts_datetime_and_none() -> None:
    parts = date_parts(datetime(2001, 2, 3, 10, 30))
    assert (parts.year, parts.month, parts.day, parts.wareki_year) == (2001, 2, 3, 13)
    assert date_parts(None).wareki_year is None


def test_labels() -> None:
    assert to_japanese_nationality("Vietnam") == "ベトナム"
    assert to_japanese_nationality("Atlantis") == "Atlantis"
    assert ssw_field_label("FOOD_SERVICE") == "外食業"
    assert ssw_field_label("UNKNOWN") == ""
    assert gender_label("FEMALE") == "女"


def test_split_passport_name() -> None:
    assert split_passport_name("NGUYEN VAN  AN") == ("AN", "NGUYEN VAN")
    assert split_passport_name("MINH") == ("MINH", "")
