"""Survey writer: render a pre-filled, styled survey workbook."""

from __future__ import annotations

from datetime import date, datetime
import logging
import re

from openpyxl import Workbook
from openpyxl.cell.cell import Cell
from openpyxl.styles import Border, Font, PatternFill, Side

from docflow_io import set_value

from .layout import DEFAULT_LAYOUT, FieldKind, SurveyLayout
from .models import SurveyInput

LOGGER = logging.getLogger(__name__)

DEFAULT_TITLE = "企業情報アンケート"
AMOUNT_FORMAT = "#,##0"

_FONT_NAME = "Yu Gothic"
TITLE_FONT = Font(name=_FONT_NAME, size=14, bold=True)
HEADER_FONT = Font(name=_FONT_NAME, size=11, bold=True)
LABEL_FONT = Font(name=_FONT_NAME, size=10)
LABEL_BOLD_FONT = Font(name=_FONT_NAME, size=10, bold=True)
INPUT_FONT = Font(name=_FONT_NAME, size=10)
INPUT_FILL = PatternFill(start_color="FFFFF8E1", end_color="FFFFF8E1", fill_type="solid")
HEADER_FILL = PatternFill(start_color="FFE3F2FD", end_color="FFE3F2FD", fill_type="solid")
_THIN = Side(style="thin", color="FFB0BEC5")
THIN_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)

_UNSAFE_FILE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def survey_file_name(company_name: str) -> str:
    safe = _UNSAFE_FILE_CHARS.sub("_", company_name).strip() or "company"
    return f"{safe}_アンケート.xlsx"


def _style_input(cell: Cell) -> None:
    cell.font = INPUT_FONT
    cell.fill = INPUT_FILL
    cell.border = THIN_BORDER


def _style_header(cell: Cell) -> None:
    cell.font = HEADER_FONT
    cell.fill = HEADER_FILL
    cell.border = THIN_BORDER


def _banner(ws, layout: SurveyLayout, row: int, text: str) -> None:
    ws.merge_cells(layout.banner_range(row))
    cell = ws[f"{layout.first_column}{row}"]
    cell.value = text
    cell.font = HEADER_FONT


def _write_title(ws, data: SurveyInput, layout: SurveyLayout, title: str) -> None:
    ws.merge_cells(layout.banner_range(layout.title_row))
    title_cell = ws[f"{layout.first_column}{layout.title_row}"]
    set_value(title_cell, title)
    title_cell.font = TITLE_FONT

    name_cell = ws[layout.company_name_cell]
    name_cell.value = f"企業名: {data.company.name}"
    name_cell.font = LABEL_BOLD_FONT

    if data.company.corporate_number:
        corp_cell = ws[layout.corporate_number_cell]
        corp_cell.value = f"法人番号: {data.company.corporate_number}"
        corp_cell.font = LABEL_FONT


def _write_company_section(ws, data: SurveyInput, layout: SurveyLayout) -> None:
    _banner(ws, layout, layout.company_section_row, layout.company_section_label)
    for field in layout.company_fields:
        label_cell = ws[f"{layout.label_column}{field.row}"]
        label_cell.value = field.label
        label_cell.font = LABEL_FONT
        label_cell.border = THIN_BORDER

        value_cell = ws[layout.value_cell(field)]
        value = getattr(data.company, field.key, None)
        if value is not None:
            set_value(value_cell, value if field.kind is not FieldKind.TEXT else str(value))
        _style_input(value_cell)
        if field.kind is not FieldKind.TEXT:
            value_cell.number_format = AMOUNT_FORMAT


def _write_officers(ws, data: SurveyInput, layout: SurveyLayout) -> None:
    section = layout.officers
    _banner(ws, layout, section.section_row, section.section_label)
    for column, label in section.columns:
        cell = ws[f"{column}{section.header_row}"]
        cell.value = label
        _style_header(cell)

    if len(data.officers) > section.max_rows:
        LOGGER.warning(
            "Company %s has %s officers; only the first %s fit the form",
            data.company.id,
            len(data.officers),
            section.max_rows,
        )
    officers = data.officers[: section.max_rows]
    for offset, row in enumerate(section.rows()):
        for column, _ in section.columns:
            _style_input(ws[f"{column}{row}"])
        if offset < len(officers):
            officer = officers[offset]
            set_value(ws[f"{section.column(0)}{row}"], officer.name)
            set_value(ws[f"{section.column(1)}{row}"], officer.name_kana)
            set_value(ws[f"{section.column(2)}{row}"], officer.position)


def _write_financials(ws, data: SurveyInput, layout: SurveyLayout, as_of: date) -> None:
    section = layout.financials
    _banner(ws, layout, section.section_row, section.section_label)
    for column, label in section.columns:
        cell = ws[f"{column}{section.header_row}"]
        cell.value = label
        _style_header(cell)

    for offset, row in enumerate(section.rows()):
        year = as_of.year - 1 - offset
        record = data.financial_for(year)

        year_cell = ws[f"{section.column(0)}{row}"]
        year_cell.value = f"{year}年度"
        year_cell.font = LABEL_FONT
        year_cell.border = THIN_BORDER

        revenue_cell = ws[f"{section.column(1)}{row}"]
        income_cell = ws[f"{section.column(2)}{row}"]
        if record is not None:
            if record.revenue is not None:
                revenue_cell.value = record.revenue
            if record.ordinary_income is not None:
                income_cell.value = record.ordinary_income
        for cell in (revenue_cell, income_cell):
            _style_input(cell)
            cell.number_format = AMOUNT_FORMAT


def build_survey_workbook(
    data: SurveyInput,
    *,
    layout: SurveyLayout = DEFAULT_LAYOUT,
    as_of: date,
    title: str = DEFAULT_TITLE,
    creator: str = "",
) -> Workbook:
    """Render the survey form for ``data.company``.

    The company id goes into the hidden correlation cell so an uploaded copy
    can be matched back to its company.
    """

    wb = Workbook()
    ws = wb.active
    ws.title = layout.sheet_name
    ws.sheet_view.showGridLines = False
    for column, width in layout.column_widths:
        ws.column_dimensions[column].width = width
    if creator:
        wb.properties.creator = creator
    wb.properties.created = datetime(as_of.year, as_of.month, as_of.day)

    _write_title(ws, data, layout, title)
    _write_company_section(ws, data, layout)
    _write_officers(ws, data, layout)
    _write_financials(ws, data, layout, as_of)

    set_value(ws[layout.key_cell], data.company.id)
    ws.column_dimensions[layout.key_column].hidden = True
    return wb
