"""Survey reader: recover structured answers from an uploaded survey workbook."""

from __future__ import annotations

from typing import Any, Dict, List
import logging

from docflow.core.errors import (
    MalformedSurveyError,
    MissingCorrelationKeyError,
    UnrecognizedFormatError,
)
from docflow_io import WorkbookReadError, cell_text, extract_year, load_workbook_bytes, parse_int

from .layout import DEFAULT_LAYOUT, FieldKind, SurveyLayout
from .models import ParsedFinancial, ParsedOfficer, ParsedSurvey

LOGGER = logging.getLogger(__name__)


def _read_field(value: Any, kind: FieldKind) -> Any:
    if kind is FieldKind.TEXT:
        return cell_text(value)
    return parse_int(value)


def _read_officers(ws, layout: SurveyLayout) -> List[ParsedOfficer]:
    section = layout.officers
    officers: List[ParsedOfficer] = []
    for offset, row in enumerate(section.rows()):
        name = cell_text(ws[f"{section.column(0)}{row}"].value)
        if not name:
            continue
        officers.append(
            ParsedOfficer(
                name=name,
                name_kana=cell_text(ws[f"{section.column(1)}{row}"].value) or "",
                position=cell_text(ws[f"{section.column(2)}{row}"].value) or "",
                sort_order=offset,
            )
        )
    return officers


def _read_financials(ws, layout: SurveyLayout) -> List[ParsedFinancial]:
    section = layout.financials
    financials: List[ParsedFinancial] = []
    for row in section.rows():
        label = ws[f"{section.column(0)}{row}"].value
        revenue = parse_int(ws[f"{section.column(1)}{row}"].value)
        income = parse_int(ws[f"{section.column(2)}{row}"].value)
        if revenue is None and income is None:
            continue
        year = extract_year(label)
        if year is None:
            LOGGER.warning("Dropping financial row %s: no fiscal year in label %r", row, cell_text(label))
            continue
        financials.append(ParsedFinancial(fiscal_year=year, revenue=revenue, ordinary_income=income))
    return financials


def parse_survey_workbook(content: bytes, *, layout: SurveyLayout = DEFAULT_LAYOUT) -> ParsedSurvey:
    """Parse an uploaded survey.

    Raises:
        MalformedSurveyError: When ``content`` is not a readable xlsx workbook.
        UnrecognizedFormatError: When the survey sheet is absent.
        MissingCorrelationKeyError: When the hidden company id cell is empty.
    """

    try:
        wb = load_workbook_bytes(content, data_only=True, rich_text=True)
    except WorkbookReadError as exc:
        raise MalformedSurveyError(f"upload is not a readable xlsx workbook: {exc}") from exc

    if layout.sheet_name not in wb.sheetnames:
        raise UnrecognizedFormatError(
            f"sheet {layout.sheet_name!r} not found; upload the survey form that was downloaded"
        )
    ws = wb[layout.sheet_name]

    company_id = cell_text(ws[layout.key_cell].value)
    if not company_id:
        raise MissingCorrelationKeyError(
            "company id not found; upload the survey form that was downloaded"
        )

    fields: Dict[str, Any] = {
        field.key: _read_field(ws[layout.value_cell(field)].value, field.kind)
        for field in layout.company_fields
    }
    survey = ParsedSurvey(
        company_id=company_id,
        officers=_read_officers(ws, layout),
        financials=_read_financials(ws, layout),
        **fields,
    )
    LOGGER.info(
        "Parsed survey for company %s: %s officers, %s fiscal years",
        company_id,
        len(survey.officers),
        len(survey.financials),
    )
    return survey
