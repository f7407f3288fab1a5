"""Company survey service package."""

from .api import XLSX_CONTENT_TYPE, build_survey_form, parse_survey_form, validate_upload
from .layout import DEFAULT_LAYOUT, FieldKind, SurveyField, SurveyLayout, TableSection
from .models import ParsedFinancial, ParsedOfficer, ParsedSurvey, SurveyInput
from .reader import parse_survey_workbook
from .writer import build_survey_workbook, survey_file_name

__all__ = [
    "DEFAULT_LAYOUT",
    "FieldKind",
    "ParsedFinancial",
    "ParsedOfficer",
    "ParsedSurvey",
    "SurveyField",
    "SurveyInput",
    "SurveyLayout",
    "TableSection",
    "XLSX_CONTENT_TYPE",
    "build_survey_form",
    "build_survey_workbook",
    "parse_survey_form",
    "parse_survey_workbook",
    "survey_file_name",
    "validate_upload",
]
