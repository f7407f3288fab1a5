from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Callable

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from docflow.config import Settings, SupportOrganization, SurveySettings
from docflow.services.document_generator import DocumentContext, build_context
from docflow.services.document_generator.mappings.doc_001 import (
    APPLICANT_SHEET,
    APPLICANT_SIGNATURE_SHEET,
    APPLICANT_SSW_SHEET,
    DOC_001,
    EMPLOYMENT_SHEET,
    ORGANIZATION_SHEET,
    SUPPORT_ORG_SHEET,
)
from docflow.services.records import (
    CompanyRecord,
    FinancialRecord,
    InMemoryRecordStore,
    OfficerRecord,
    ProjectRecord,
    StudentRecord,
)

AS_OF = date(2025, 4, 15)


@pytest.fixture()
def support_org() -> SupportOrganization:
    return SupportOrganization(
        name="常南交通株式会社",
        registration_number="19登-001334",
        corporate_number="8050001018046",
        address="茨城県つくば市榎戸433-2",
        postal_code="305-0853",
        phone="029-438-1271",
        representative="笹目博",
        support_manager="笹目瑛司",
        bank_account="足利銀行 つくば支店 普通 5033625",
    )


@pytest.fixture()
def student() -> StudentRecord:
    return StudentRecord(
        id="S1",
        name_en="NGUYEN VAN AN",
        date_of_birth=date(2001, 2, 3),
        gender="MALE",
        nationality="Vietnam",
        name_kanji="グエン ヴァン アン",
        address_japan="茨城県土浦市大和町1-1",
        phone="080-1234-5678",
        passport_number="C1234567",
        residence_card_number="AB12345678CD",
        residence_status="留学",
        residence_expiry=date(2025, 10, 1),
    )


@pytest.fixture()
def company() -> CompanyRecord:
    return CompanyRecord(
        id="C1",
        name="株式会社つくば介護",
        representative="山田太郎",
        address="茨城県つくば市竹園1-2-3",
        phone="029-111-2222",
        ssw_field="NURSING_CARE",
        corporate_number="1234567890123",
        business_description="介護老人福祉施設の運営",
        capital_amount=50_000_000,
        full_time_employees=120,
        contact_person="佐藤花子",
        contact_email="sato@example.jp",
        fax_number="029-111-2223",
    )


@pytest.fixture()
def store(student: StudentRecord, company: CompanyRecord) -> InMemoryRecordStore:
    return InMemoryRecordStore(
        projects={
            "P1": ProjectRecord(
                id="P1",
                name="グエン 介護 変更申請",
                context={"student_id": "S1", "company_id": "C1", "ssw_field": "NURSING_CARE"},
            ),
            "P2": ProjectRecord(
                id="P2",
                name="会社未定",
                context={"student_id": "S1", "ssw_field": "NURSING_CARE"},
            ),
            "P3": ProjectRecord(
                id="P3",
                name="学生不明",
                context={"student_id": "S9", "company_id": "C1", "ssw_field": "NURSING_CARE"},
            ),
        },
        students={"S1": student},
        companies={"C1": company},
        officers={
            "C1": [
                OfficerRecord(name="鈴木一郎", name_kana="すずきいちろう", position="取締役", sort_order=1),
                OfficerRecord(name="山田太郎", name_kana="やまだたろう", position="代表取締役", sort_order=0),
            ]
        },
        financials={
            "C1": [
                FinancialRecord(fiscal_year=2023, revenue=780_000_000, ordinary_income=31_000_000),
                FinancialRecord(fiscal_year=2024, revenue=810_000_000, ordinary_income=-5_000_000),
            ]
        },
    )


@pytest.fixture()
def context(store: InMemoryRecordStore, support_org: SupportOrganization) -> DocumentContext:
    return build_context("P1", store, support_org=support_org, as_of=AS_OF)


def build_doc001_template(path: Path) -> Path:
    """Write a reduced copy of the official form: same sheet names, labels and merges."""

    wb = Workbook()
    applicant = wb.active
    applicant.title = APPLICANT_SHEET
    applicant["A1"] = "在留資格変更許可申請書"
    applicant["A15"] = "国籍・地域"
    applicant.merge_cells("B15:X15")
    applicant["A20"] = "氏名"
    applicant.merge_cells("B20:M20")
    applicant["A51"] = "変更の理由"
    applicant.merge_cells("B51:AH53")

    wb.create_sheet("申請人用（変更）１V")["A1"] = "写真"
    for name in (
        APPLICANT_SSW_SHEET,
        APPLICANT_SIGNATURE_SHEET,
        EMPLOYMENT_SHEET,
        ORGANIZATION_SHEET,
        SUPPORT_ORG_SHEET,
    ):
        ws = wb.create_sheet(name)
        ws["A1"] = name.strip()

    wb[APPLICANT_SIGNATURE_SHEET]["V59"] = "令和"
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


@pytest.fixture()
def template_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "templates"
    build_doc001_template(directory / DOC_001.template_file_name)
    return directory


@pytest.fixture()
def settings(template_dir: Path, support_org: SupportOrganization) -> Settings:
    return Settings(
        template_dir=template_dir,
        support_org=support_org,
        survey=SurveySettings(title="常南国際学院 企業情報アンケート"),
        manual_templates={"DOC-006": "DOC-006_所属機関概要書.xlsx"},
    )


@pytest.fixture()
def make_workbook(tmp_path: Path) -> Callable[..., Path]:
    """Save a single-sheet workbook built by ``populate`` and return its path."""

    def _make(name: str, populate: Callable[[Workbook], None]) -> Path:
        wb = Workbook()
        populate(wb)
        path = tmp_path / "templates" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(path)
        return path

    return _make
