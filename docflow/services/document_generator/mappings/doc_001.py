"""DOC-001: application for change of status of residence (form No. 30).

The official workbook has ten sheets; values are written to six of them. Cell
addresses point at the blank input cell beside each printed label, located
with ``docflow inspect``. Checkbox questions and free-form answers are left
for the applicant to fill by hand.
"""

from __future__ import annotations

from typing import Tuple

from ..context import DocumentContext
from ..definitions import CellFormat, CellMapping, DocumentDefinition
from ..formatting import (
    date_parts,
    gender_label,
    split_passport_name,
    ssw_field_label,
    to_japanese_nationality,
)

# Sheet names match the official template exactly, trailing spaces included.
APPLICANT_SHEET = "申請人用（変更）"
APPLICANT_SSW_SHEET = "申請人用（変更）２V "
APPLICANT_SIGNATURE_SHEET = "申請人用（変更）３V "
EMPLOYMENT_SHEET = "所属機関用（変更）V1 "
ORGANIZATION_SHEET = "所属機関用（変更）V2 "
SUPPORT_ORG_SHEET = "所属機関用（変更）V4 "

NUMBER = CellFormat.NUMBER


def _change_reason(ctx: DocumentContext) -> str:
    return f"{ssw_field_label(ctx.project.ssw_field)}分野の特定技能外国人として就労するため"


APPLICANT_MAPPINGS: Tuple[CellMapping, ...] = (
    CellMapping(APPLICANT_SHEET, "B15", lambda ctx: to_japanese_nationality(ctx.student.nationality)),
    # birth date, split into era year / month / day
    CellMapping(APPLICANT_SHEET, "Y15", lambda ctx: date_parts(ctx.student.date_of_birth).wareki_year, NUMBER),
    CellMapping(APPLICANT_SHEET, "AC15", lambda ctx: date_parts(ctx.student.date_of_birth).month, NUMBER),
    CellMapping(APPLICANT_SHEET, "AG15", lambda ctx: date_parts(ctx.student.date_of_birth).day, NUMBER),
    CellMapping(APPLICANT_SHEET, "B20", lambda ctx: split_passport_name(ctx.student.name_en)[0]),
    CellMapping(APPLICANT_SHEET, "N20", lambda ctx: split_passport_name(ctx.student.name_en)[1]),
    CellMapping(APPLICANT_SHEET, "C21", lambda ctx: gender_label(ctx.student.gender)),
    # place of birth; only the country is on record
    CellMapping(APPLICANT_SHEET, "K21", lambda ctx: to_japanese_nationality(ctx.student.nationality)),
    CellMapping(APPLICANT_SHEET, "B24", lambda ctx: "留学"),
    CellMapping(APPLICANT_SHEET, "N24", lambda ctx: ctx.student.address_japan),
    CellMapping(APPLICANT_SHEET, "B27", lambda ctx: ctx.student.address_japan),
    CellMapping(APPLICANT_SHEET, "H30", lambda ctx: ctx.student.phone),
    CellMapping(APPLICANT_SHEET, "Z30", lambda ctx: ctx.student.phone),
    CellMapping(APPLICANT_SHEET, "H33", lambda ctx: ctx.student.passport_number),
    CellMapping(APPLICANT_SHEET, "B36", lambda ctx: ctx.student.residence_status or "留学"),
    CellMapping(APPLICANT_SHEET, "I39", lambda ctx: date_parts(ctx.student.residence_expiry).wareki_year, NUMBER),
    CellMapping(APPLICANT_SHEET, "O39", lambda ctx: date_parts(ctx.student.residence_expiry).month, NUMBER),
    CellMapping(APPLICANT_SHEET, "S39", lambda ctx: date_parts(ctx.student.residence_expiry).day, NUMBER),
    CellMapping(APPLICANT_SHEET, "B42", lambda ctx: ctx.student.residence_card_number),
    CellMapping(APPLICANT_SHEET, "B45", lambda ctx: "特定技能1号"),
    CellMapping(APPLICANT_SHEET, "B51", _change_reason),
)

APPLICANT_SSW_MAPPINGS: Tuple[CellMapping, ...] = (
    CellMapping(APPLICANT_SSW_SHEET, "E6", lambda ctx: ctx.company.name),
    CellMapping(APPLICANT_SSW_SHEET, "B9", lambda ctx: ctx.company.address),
    CellMapping(APPLICANT_SSW_SHEET, "V9", lambda ctx: ctx.company.phone),
)

# Date the application is prepared.
APPLICANT_SIGNATURE_MAPPINGS: Tuple[CellMapping, ...] = (
    CellMapping(APPLICANT_SIGNATURE_SHEET, "W59", lambda ctx: date_parts(ctx.as_of).wareki_year, NUMBER),
    CellMapping(APPLICANT_SIGNATURE_SHEET, "AA59", lambda ctx: date_parts(ctx.as_of).month, NUMBER),
    CellMapping(APPLICANT_SIGNATURE_SHEET, "AF59", lambda ctx: date_parts(ctx.as_of).day, NUMBER),
)

EMPLOYMENT_MAPPINGS: Tuple[CellMapping, ...] = (
    CellMapping(EMPLOYMENT_SHEET, "B4", lambda ctx: ctx.student.display_name),
    CellMapping(EMPLOYMENT_SHEET, "C15", lambda ctx: ssw_field_label(ctx.project.ssw_field)),
    # placement agency
    CellMapping(EMPLOYMENT_SHEET, "C95", lambda ctx: ctx.support_org.name),
    CellMapping(EMPLOYMENT_SHEET, "V95", lambda ctx: ctx.support_org.corporate_number),
    CellMapping(EMPLOYMENT_SHEET, "C103", lambda ctx: ctx.support_org.address),
    CellMapping(EMPLOYMENT_SHEET, "Z103", lambda ctx: ctx.support_org.phone),
)

ORGANIZATION_MAPPINGS: Tuple[CellMapping, ...] = (
    CellMapping(ORGANIZATION_SHEET, "C15", lambda ctx: ctx.company.name),
    CellMapping(ORGANIZATION_SHEET, "U15", lambda ctx: ctx.company.corporate_number),
    CellMapping(ORGANIZATION_SHEET, "B29", lambda ctx: ctx.company.address),
    CellMapping(ORGANIZATION_SHEET, "Z31", lambda ctx: ctx.company.phone),
    CellMapping(ORGANIZATION_SHEET, "S37", lambda ctx: ctx.company.representative),
)

# The support office and support staff are the head office and its manager.
SUPPORT_ORG_MAPPINGS: Tuple[CellMapping, ...] = (
    CellMapping(SUPPORT_ORG_SHEET, "C85", lambda ctx: ctx.support_org.name),
    CellMapping(SUPPORT_ORG_SHEET, "U85", lambda ctx: ctx.support_org.corporate_number),
    CellMapping(SUPPORT_ORG_SHEET, "C90", lambda ctx: ctx.support_org.address),
    CellMapping(SUPPORT_ORG_SHEET, "AA90", lambda ctx: ctx.support_org.phone),
    CellMapping(SUPPORT_ORG_SHEET, "C92", lambda ctx: ctx.support_org.representative),
    CellMapping(SUPPORT_ORG_SHEET, "F93", lambda ctx: ctx.support_org.registration_number),
    CellMapping(SUPPORT_ORG_SHEET, "C96", lambda ctx: ctx.support_org.name),
    CellMapping(SUPPORT_ORG_SHEET, "X96", lambda ctx: ctx.support_org.address),
    CellMapping(SUPPORT_ORG_SHEET, "C98", lambda ctx: ctx.support_org.support_manager),
    CellMapping(SUPPORT_ORG_SHEET, "U98", lambda ctx: ctx.support_org.support_manager),
)


def _output_file_name(ctx: DocumentContext) -> str:
    return f"DOC-001_在留資格変更許可申請書_{ctx.display_name}.xlsx"


DOC_001 = DocumentDefinition(
    doc_code="DOC-001",
    doc_name="在留資格変更許可申請書（申請人等作成用）",
    template_file_name="DOC-001_別記第30号_在留資格変更許可申請書.xlsx",
    output_file_name=_output_file_name,
    mappings=(
        APPLICANT_MAPPINGS
        + APPLICANT_SSW_MAPPINGS
        + APPLICANT_SIGNATURE_MAPPINGS
        + EMPLOYMENT_MAPPINGS
        + ORGANIZATION_MAPPINGS
        + SUPPORT_ORG_MAPPINGS
    ),
)
