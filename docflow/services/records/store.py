"""Record lookup collaborator: protocol plus in-memory and YAML-backed stores."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

import yaml

from docflow.core.errors import ConfigError

from .models import (
    CertificationRecord,
    CompanyRecord,
    FinancialRecord,
    OfficerRecord,
    ProjectRecord,
    StudentRecord,
)


class RecordStore(Protocol):
    """Read-only record lookup used by document generation and the survey export."""

    def get_project(self, project_id: str) -> Optional[ProjectRecord]:  # pragma: no cover - interface definition
        ...

    def get_student(self, student_id: str) -> Optional[StudentRecord]:  # pragma: no cover - interface definition
        ...

    def get_company(self, company_id: str) -> Optional[CompanyRecord]:  # pragma: no cover - interface definition
        ...

    def get_officers(self, company_id: str) -> Sequence[OfficerRecord]:  # pragma: no cover - interface definition
        ...

    def get_financials(self, company_id: str) -> Sequence[FinancialRecord]:  # pragma: no cover - interface definition
        ...


@dataclass(slots=True)
class InMemoryRecordStore:
    """Dictionary backed store used by the CLI and tests."""

    projects: Mapping[str, ProjectRecord] = field(default_factory=dict)
    students: Mapping[str, StudentRecord] = field(default_factory=dict)
    companies: Mapping[str, CompanyRecord] = field(default_factory=dict)
    officers: Mapping[str, Sequence[OfficerRecord]] = field(default_factory=dict)
    financials: Mapping[str, Sequence[FinancialRecord]] = field(default_factory=dict)

    def get_project(self, project_id: str) -> Optional[ProjectRecord]:
        return self.projects.get(project_id)

    def get_student(self, student_id: str) -> Optional[StudentRecord]:
        return self.students.get(student_id)

    def get_company(self, company_id: str) -> Optional[CompanyRecord]:
        return self.companies.get(company_id)

    def get_officers(self, company_id: str) -> Sequence[OfficerRecord]:
        return sorted(self.officers.get(company_id, ()), key=lambda o: o.sort_order)

    def get_financials(self, company_id: str) -> Sequence[FinancialRecord]:
        return sorted(self.financials.get(company_id, ()), key=lambda f: f.fiscal_year, reverse=True)


def load_record_store(path: str | Path) -> InMemoryRecordStore:
    """Load a records YAML file with ``projects``, ``students`` and ``companies`` maps.

    Companies may carry nested ``officers`` and ``financials`` lists.
    """

    records_path = Path(path)
    if not records_path.exists():
        raise ConfigError(f"records file not found: {records_path}")
    with records_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ConfigError("records file must be a mapping")

    projects: Dict[str, ProjectRecord] = {}
    students: Dict[str, StudentRecord] = {}
    companies: Dict[str, CompanyRecord] = {}
    officers: Dict[str, List[OfficerRecord]] = {}
    financials: Dict[str, List[FinancialRecord]] = {}

    for key, raw in (data.get("projects") or {}).items():
        try:
            projects[str(key)] = ProjectRecord(
                id=str(key),
                name=str(raw.get("name", key)),
                context=dict(raw.get("context") or {}),
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"invalid project {key}: {e}") from e

    for key, raw in (data.get("students") or {}).items():
        try:
            students[str(key)] = _build_student(str(key), raw)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"invalid student {key}: {e}") from e

    for key, raw in (data.get("companies") or {}).items():
        company_id = str(key)
        try:
            companies[company_id] = _build_company(company_id, raw)
            officers[company_id] = [
                OfficerRecord(
                    name=str(o["name"]),
                    name_kana=str(o.get("name_kana") or ""),
                    position=str(o.get("position") or ""),
                    sort_order=int(o.get("sort_order", idx)),
                )
                for idx, o in enumerate(raw.get("officers") or [])
            ]
            financials[company_id] = [
                FinancialRecord(
                    fiscal_year=int(f["fiscal_year"]),
                    revenue=_optional_int(f.get("revenue")),
                    ordinary_income=_optional_int(f.get("ordinary_income")),
                )
                for f in raw.get("financials") or []
            ]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"invalid company {key}: {e}") from e

    return InMemoryRecordStore(
        projects=projects,
        students=students,
        companies=companies,
        officers=officers,
        financials=financials,
    )


def _build_student(student_id: str, raw: Mapping[str, Any]) -> StudentRecord:
    certifications = tuple(
        CertificationRecord(
            exam_type=str(c["exam_type"]),
            exam_date=_required_date(c["exam_date"]),
            result=str(c["result"]),
            level=_optional_str(c.get("level")),
            certificate_number=_optional_str(c.get("certificate_number")),
        )
        for c in raw.get("certifications") or []
    )
    return StudentRecord(
        id=student_id,
        name_en=str(raw["name_en"]),
        date_of_birth=_required_date(raw["date_of_birth"]),
        gender=str(raw["gender"]),
        nationality=str(raw["nationality"]),
        name_kanji=_optional_str(raw.get("name_kanji")),
        name_kana=_optional_str(raw.get("name_kana")),
        address_japan=_optional_str(raw.get("address_japan")),
        phone=_optional_str(raw.get("phone")),
        passport_number=_optional_str(raw.get("passport_number")),
        residence_card_number=_optional_str(raw.get("residence_card_number")),
        residence_status=_optional_str(raw.get("residence_status")),
        residence_expiry=_optional_date(raw.get("residence_expiry")),
        entry_date=_optional_date(raw.get("entry_date")),
        certifications=certifications,
    )


def _build_company(company_id: str, raw: Mapping[str, Any]) -> CompanyRecord:
    return CompanyRecord(
        id=company_id,
        name=str(raw["name"]),
        representative=str(raw.get("representative") or ""),
        address=str(raw.get("address") or ""),
        phone=str(raw.get("phone") or ""),
        ssw_field=str(raw.get("ssw_field") or ""),
        postal_code=_optional_str(raw.get("postal_code")),
        business_license=_optional_str(raw.get("business_license")),
        corporate_number=_optional_str(raw.get("corporate_number")),
        established_date=_optional_date(raw.get("established_date")),
        business_description=_optional_str(raw.get("business_description")),
        capital_amount=_optional_int(raw.get("capital_amount")),
        full_time_employees=_optional_int(raw.get("full_time_employees")),
        contact_person=_optional_str(raw.get("contact_person")),
        contact_email=_optional_str(raw.get("contact_email")),
        fax_number=_optional_str(raw.get("fax_number")),
    )


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _required_date(value: Any) -> date:
    parsed = _optional_date(value)
    if parsed is None:
        raise ValueError("date value is required")
    return parsed


def _optional_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


__all__ = ["InMemoryRecordStore", "RecordStore", "load_record_store"]
