"""Layout contract shared by the survey writer and reader.

Every address the writer fills and the reader consumes is derived from one
``SurveyLayout`` value, so the two sides cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class FieldKind(str, Enum):
    TEXT = "text"
    AMOUNT = "amount"
    INTEGER = "integer"


@dataclass(frozen=True, slots=True)
class SurveyField:
    """One key/value row of the company section; ``key`` names the company attribute."""

    key: str
    row: int
    label: str
    kind: FieldKind = FieldKind.TEXT


@dataclass(frozen=True, slots=True)
class TableSection:
    """Repeating rows with a section banner, a header row and a bounded body."""

    section_row: int
    section_label: str
    header_row: int
    start_row: int
    max_rows: int
    columns: Tuple[Tuple[str, str], ...]

    def rows(self) -> range:
        return range(self.start_row, self.start_row + self.max_rows)

    def column(self, index: int) -> str:
        return self.columns[index][0]


@dataclass(frozen=True, slots=True)
class SurveyLayout:
    sheet_name: str
    key_column: str
    key_row: int
    first_column: str
    last_column: str
    label_column: str
    value_column: str
    title_row: int
    company_name_cell: str
    corporate_number_cell: str
    company_section_row: int
    company_section_label: str
    company_fields: Tuple[SurveyField, ...]
    officers: TableSection
    financials: TableSection
    column_widths: Tuple[Tuple[str, float], ...] = ()

    @property
    def key_cell(self) -> str:
        return f"{self.key_column}{self.key_row}"

    def banner_range(self, row: int) -> str:
        return f"{self.first_column}{row}:{self.last_column}{row}"

    def value_cell(self, field: SurveyField) -> str:
        return f"{self.value_column}{field.row}"


DEFAULT_LAYOUT = SurveyLayout(
    sheet_name="アンケート",
    key_column="Z",
    key_row=1,
    first_column="A",
    last_column="C",
    label_column="A",
    value_column="B",
    title_row=1,
    company_name_cell="A2",
    corporate_number_cell="A3",
    company_section_row=5,
    company_section_label="■ 企業情報",
    company_fields=(
        SurveyField("business_description", 6, "事業内容"),
        SurveyField("capital_amount", 7, "資本金（円）", FieldKind.AMOUNT),
        SurveyField("full_time_employees", 8, "常勤職員数", FieldKind.INTEGER),
        SurveyField("contact_person", 9, "担当者名"),
        SurveyField("contact_email", 10, "担当者メールアドレス"),
        SurveyField("fax_number", 11, "FAX番号"),
    ),
    officers=TableSection(
        section_row=13,
        section_label="■ 役員情報（代表取締役を含むすべての役員を記入してください）",
        header_row=14,
        start_row=15,
        max_rows=10,
        columns=(("A", "氏名"), ("B", "ふりがな"), ("C", "役職")),
    ),
    financials=TableSection(
        section_row=26,
        section_label="■ 決算状況（直近3年分）",
        header_row=27,
        start_row=28,
        max_rows=3,
        columns=(("A", "年度"), ("B", "売上高（円）"), ("C", "経常利益（円）")),
    ),
    column_widths=(("A", 20), ("B", 30), ("C", 25)),
)
