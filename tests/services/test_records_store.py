from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from docflow.core.errors import ConfigError
from docflow.services.records import load_record_store

RECORDS = """\
projects:
  P1:
    name: 変更申請
    context:
      student_id: S1
      company_id: C1
      ssw_field: ACCOMMODATION
students:
  S1:
    name_en: RAI BIKASH
    name_kanji: ライ ビカス
    date_of_birth: 1999-12-31
    gender: MALE
    nationality: Nepal
    residence_expiry: 2026-01-15
    certifications:
      - exam_type: JLPT
        exam_date: 2024-07-07
        result: PASS
        level: N4
companies:
  C1:
    name: 筑波ホテル株式会社
    representative: 筑波花子
    address: 茨城県つくば市吾妻1-1
    phone: 029-123-4567
    ssw_field: ACCOMMODATION
    corporate_number: 9050001000000
    capital_amount: 30000000
    officers:
      - name: 筑波花子
        position: 代表取締役
      - name: 筑波次郎
        position: 取締役
        sort_order: 5
    financials:
      - fiscal_year: 2022
        revenue: 100
      - fiscal_year: 2024
        revenue: 300
        ordinary_income: 30
"""


def test_load_record_store(tmp_path: Path) -> None:
    path = tmp_path / "records.yaml"
    path.write_text(RECORDS, encoding="utf-8")

    store = load_record_store(path)

    project = store.get_project("P1")
    assert project.link("company_id") == "C1"
    assert project.link("nationality") is None
    student = store.get_student("S1")
    assert student.date_of_birth == date(1999, 12, 31)
    assert student.display_name == "ライ ビカス"
    assert student.certifications[0].level == "N4"
    company = store.get_company("C1")
    assert company.corporate_number == "9050001000000"
    assert company.capital_amount == 30_000_000
    assert [o.name for o in store.get_officers("C1")] == ["筑波花子", "筑波次郎"]
    assert [f.fiscal_year for f in store.get_financials("C1")] == [2024, 2022]
    assert store.get_company("C404") is None
    assert list(store.get_officers("C404")) == []


def test_invalid_records_raise_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_record_store(tmp_path / "absent.yaml")

    path = tmp_path / "records.yaml"
    path.write_text("students:\n  S1:\n    name_en: X\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_record_store(path)
