"""Public API for the company survey service."""

from __future__ import annotations

from datetime import date
from pathlib import PurePath
from typing import Optional
import logging

from docflow.config import DEFAULT_MAX_UPLOAD_BYTES, Settings, default_settings
from docflow.core.errors import NotFoundError, SurveyMismatchError, UploadRejectedError
from docflow.services.records import RecordStore
from docflow_io import workbook_to_bytes

from .layout import DEFAULT_LAYOUT, SurveyLayout
from .models import ParsedSurvey, SurveyInput
from .reader import parse_survey_workbook
from .writer import build_survey_workbook

LOGGER = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def build_survey_form(
    company_id: str,
    *,
    store: RecordStore,
    as_of: Optional[date] = None,
    settings: Optional[Settings] = None,
    layout: SurveyLayout = DEFAULT_LAYOUT,
) -> bytes:
    """Render the survey form for a company, pre-filled with what is already on record."""

    settings = settings or default_settings()
    company = store.get_company(company_id)
    if company is None:
        raise NotFoundError("company", company_id)

    data = SurveyInput(
        company=company,
        officers=tuple(store.get_officers(company_id)),
        financials=tuple(store.get_financials(company_id)),
    )
    wb = build_survey_workbook(
        data,
        layout=layout,
        as_of=as_of or date.today(),
        title=settings.survey.title,
        creator=settings.survey.creator,
    )
    LOGGER.info("Survey form built for company %s", company_id)
    return workbook_to_bytes(wb)


def validate_upload(
    file_name: str,
    content_type: Optional[str],
    size: int,
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> None:
    """Reject uploads that are empty, too large or not an xlsx workbook."""

    if size <= 0:
        raise UploadRejectedError("a file is required")
    if size > max_bytes:
        raise UploadRejectedError(f"file is too large ({size} bytes; limit {max_bytes} bytes)")
    is_xlsx = PurePath(file_name).suffix.lower() == ".xlsx" or content_type == XLSX_CONTENT_TYPE
    if not is_xlsx:
        raise UploadRejectedError("upload an Excel workbook (.xlsx)")


def parse_survey_form(
    content: bytes,
    *,
    expected_company_id: Optional[str] = None,
    layout: SurveyLayout = DEFAULT_LAYOUT,
) -> ParsedSurvey:
    """Parse an uploaded survey, optionally checking it belongs to ``expected_company_id``."""

    survey = parse_survey_workbook(content, layout=layout)
    if expected_company_id is not None and survey.company_id != expected_company_id:
        raise SurveyMismatchError(expected_company_id, survey.company_id)
    return survey
