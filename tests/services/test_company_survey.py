"""Survey form export and upload parsing share one layout contract."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from io import BytesIO

import pytest
from openpyxl import Workbook, load_workbook
from openpyxl.cell.rich_text import CellRichText, TextBlock
from openpyxl.cell.text import InlineFont

from docflow.config import Settings
from docflow.core.errors import (
    MalformedSurveyError,
    MissingCorrelationKeyError,
    NotFoundError,
    SurveyMismatchError,
    SurveyParseError,
    UnrecognizedFormatError,
    UploadRejectedError,
)
from docflow.services.company_survey import (
    DEFAULT_LAYOUT,
    SurveyInput,
    build_survey_form,
    build_survey_workbook,
    parse_survey_form,
    parse_survey_workbook,
    survey_file_name,
    validate_upload,
)
from docflow.services.records import OfficerRecord

AS_OF = date(2025, 4, 15)


@pytest.fixture()
def survey_bytes(store, settings: Settings) -> bytes:
    return build_survey_form("C1", store=store, settings=settings, as_of=AS_OF)


def _edit(content: bytes, edit) -> bytes:
    wb = load_workbook(BytesIO(content))
    edit(wb[DEFAULT_LAYOUT.sheet_name])
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def test_round_trip_preserves_collected_values(survey_bytes: bytes) -> None:
    survey = parse_survey_form(survey_bytes, expected_company_id="C1")

    assert survey.company_id == "C1"
    assert survey.business_description == "介護老人福祉施設の運営"
    assert survey.capital_amount == 50_000_000
    assert survey.full_time_employees == 120
    assert survey.contact_person == "佐藤花子"
    assert survey.contact_email == "sato@example.jp"
    assert survey.fax_number == "029-111-2223"
    assert [(o.name, o.name_kana, o.position, o.sort_order) for o in survey.officers] == [
        ("山田太郎", "やまだたろう", "代表取締役", 0),
        ("鈴木一郎", "すずきいちろう", "取締役", 1),
    ]
    assert [(f.fiscal_year, f.revenue, f.ordinary_income) for f in survey.financials] == [
        (2024, 810_000_000, -5_000_000),
        (2023, 780_000_000, 31_000_000),
    ]


def test_form_follows_layout_contract(survey_bytes: bytes) -> None:
    wb = load_workbook(BytesIO(survey_bytes))
    ws = wb[DEFAULT_LAYOUT.sheet_name]

    assert wb.sheetnames == ["アンケート"]
    assert ws["Z1"].value == "C1"
    assert ws.column_dimensions["Z"].hidden is True
    assert ws.sheet_view.showGridLines is False
    assert "A1:C1" in {str(r) for r in ws.merged_cells.ranges}
    assert ws["A1"].value == "常南国際学院 企業情報アンケート"
    assert ws["A2"].value == "企業名: 株式会社つくば介護"
    assert ws["A3"].value == "法人番号: 1234567890123"
    assert ws["B7"].number_format == "#,##0"
    assert ws["B7"].fill.fgColor.rgb == "FFFFF8E1"
    assert [ws[f"A{row}"].value for row in (28, 29, 30)] == ["2024年度", "2023年度", "2022年度"]
    assert ws["B30"].value is None
    assert ws["A15"].value == "山田太郎"
    assert ws["A17"].value is None
    assert ws["A17"].fill.fgColor.rgb == "FFFFF8E1"


def test_officers_are_bounded(company) -> None:
    officers = tuple(OfficerRecord(name=f"役員{i}", sort_order=i) for i in range(12))
    wb = build_survey_workbook(SurveyInput(company=company, officers=officers), as_of=AS_OF)
    ws = wb[DEFAULT_LAYOUT.sheet_name]

    assert ws["A24"].value == "役員9"
    assert ws["A25"].value is None
    buffer = BytesIO()
    wb.save(buffer)
    parsed = parse_survey_workbook(buffer.getvalue())
    assert [o.name for o in parsed.officers] == [f"役員{i}" for i in range(10)]


def test_numeric_cells_tolerate_typed_text(survey_bytes: bytes) -> None:
    def edit(ws) -> None:
        ws["B7"] = "12,345,000"
        ws["B8"] = "—"
        ws["B28"] = "１，２００，０００円"
        ws["C28"] = " "

    survey = parse_survey_form(_edit(survey_bytes, edit))

    assert survey.capital_amount == 12_345_000
    assert survey.full_time_employees is None
    assert (survey.financials[0].revenue, survey.financials[0].ordinary_income) == (1_200_000, None)


def test_oversized_numbers_parse_as_integers(survey_bytes: bytes) -> None:
    def edit(ws) -> None:
        ws["B7"] = "1e30"
        ws["B28"] = 1.5e30

    survey = parse_survey_form(_edit(survey_bytes, edit))

    assert survey.capital_amount == 10**30
    assert survey.financials[0].revenue == 15 * 10**29


def test_text_starting_with_equals_survives_round_trip(company) -> None:
    data = SurveyInput(
        company=replace(company, business_description="=介護事業"),
        officers=(OfficerRecord(name="=山田", position="=代表"),),
    )
    buffer = BytesIO()
    build_survey_workbook(data, as_of=AS_OF).save(buffer)

    survey = parse_survey_workbook(buffer.getvalue())

    assert survey.business_description == "=介護事業"
    assert [(o.name, o.position) for o in survey.officers] == [("=山田", "=代表")]


def test_financial_rows_need_a_year_and_a_value(survey_bytes: bytes) -> None:
    def edit(ws) -> None:
        ws["A28"] = "FY?"
        ws["B28"] = 5_000
        ws["A29"] = "2024年度"
        ws["B29"] = None
        ws["C29"] = None
        ws["A30"] = "2022年度"
        ws["C30"] = "1,000"

    survey = parse_survey_form(_edit(survey_bytes, edit))

    assert [(f.fiscal_year, f.revenue, f.ordinary_income) for f in survey.financials] == [(2022, None, 1000)]


def test_officer_rows_keep_their_offset(survey_bytes: bytes) -> None:
    def edit(ws) -> None:
        ws["A16"] = None
        ws["A18"] = CellRichText(["高橋", TextBlock(InlineFont(b=True), "三郎")])
        ws["C18"] = "監査役"

    survey = parse_survey_form(_edit(survey_bytes, edit))

    assert [(o.name, o.sort_order, o.position, o.name_kana) for o in survey.officers] == [
        ("山田太郎", 0, "代表取締役", "やまだたろう"),
        ("高橋三郎", 3, "監査役", ""),
    ]


def test_missing_correlation_key(survey_bytes: bytes) -> None:
    def edit(ws) -> None:
        ws["Z1"] = None

    with pytest.raises(MissingCorrelationKeyError):
        parse_survey_form(_edit(survey_bytes, edit))


def test_wrong_workbook_is_unrecognized() -> None:
    wb = Workbook()
    wb.active.title = "Sheet1"
    wb.active["Z1"] = "C1"
    buffer = BytesIO()
    wb.save(buffer)

    with pytest.raises(UnrecognizedFormatError):
        parse_survey_form(buffer.getvalue())


@pytest.mark.parametrize("payload", [b"", b"plain text, not a workbook"])
def test_unreadable_upload_is_malformed(payload: bytes) -> None:
    with pytest.raises(MalformedSurveyError):
        parse_survey_form(payload)


def test_survey_for_another_company_is_rejected(survey_bytes: bytes) -> None:
    with pytest.raises(SurveyMismatchError) as excinfo:
        parse_survey_form(survey_bytes, expected_company_id="C2")
    assert (excinfo.value.expected, excinfo.value.actual) == ("C2", "C1")
    assert isinstance(excinfo.value, SurveyParseError)


def test_unknown_company_cannot_be_exported(store, settings: Settings) -> None:
    with pytest.raises(NotFoundError):
        build_survey_form("C404", store=store, settings=settings)


def test_validate_upload() -> None:
    xlsx = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    validate_upload("survey.xlsx", None, 1024)
    validate_upload("upload", xlsx, 1024)

    with pytest.raises(UploadRejectedError):
        validate_upload("survey.xlsx", xlsx, 4 * 1024 * 1024 + 1)
    with pytest.raises(UploadRejectedError):
        validate_upload("survey.csv", "text/csv", 10)
    with pytest.raises(UploadRejectedError):
        validate_upload("survey.xlsx", xlsx, 0)
    validate_upload("survey.xlsx", xlsx, 2048, max_bytes=2048)


def test_survey_file_name() -> None:
    assert survey_file_name("株式会社つくば介護") == "株式会社つくば介護_アンケート.xlsx"
    assert survey_file_name("A/B商事") == "A_B商事_アンケート.xlsx"
