"""Read-only record snapshots supplied by the record store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True, slots=True)
class CertificationRecord:
    """Exam result held by a student (JLPT, SSW skill test, ...)."""

    exam_type: str
    exam_date: date
    result: str
    level: Optional[str] = None
    certificate_number: Optional[str] = None


@dataclass(frozen=True, slots=True)
class StudentRecord:
    id: str
    name_en: str
    date_of_birth: date
    gender: str
    nationality: str
    name_kanji: Optional[str] = None
    name_kana: Optional[str] = None
    address_japan: Optional[str] = None
    phone: Optional[str] = None
    passport_number: Optional[str] = None
    residence_card_number: Optional[str] = None
    residence_status: Optional[str] = None
    residence_expiry: Optional[date] = None
    entry_date: Optional[date] = None
    certifications: Tuple[CertificationRecord, ...] = ()

    @property
    def display_name(self) -> str:
        """Kanji name when present, otherwise the passport name."""

        return self.name_kanji or self.name_en


@dataclass(frozen=True, slots=True)
class CompanyRecord:
    """Receiving company, including answers collected through the survey."""

    id: str
    name: str
    representative: str
    address: str
    phone: str
    ssw_field: str
    postal_code: Optional[str] = None
    business_license: Optional[str] = None
    corporate_number: Optional[str] = None
    established_date: Optional[date] = None
    business_description: Optional[str] = None
    capital_amount: Optional[int] = None
    full_time_employees: Optional[int] = None
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    fax_number: Optional[str] = None


@dataclass(frozen=True, slots=True)
class OfficerRecord:
    name: str
    name_kana: str = ""
    position: str = ""
    sort_order: int = 0


@dataclass(frozen=True, slots=True)
class FinancialRecord:
    fiscal_year: int
    revenue: Optional[int] = None
    ordinary_income: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ProjectRecord:
    """Application case; ``context`` carries the links set by earlier workflow steps."""

    id: str
    name: str
    context: Mapping[str, object] = field(default_factory=dict)

    def link(self, key: str) -> Optional[str]:
        value = self.context.get(key)
        if value is None:
            return None
        text = str(value).strip()
        return text or None


__all__ = [
    "CertificationRecord",
    "CompanyRecord",
    "FinancialRecord",
    "OfficerRecord",
    "ProjectRecord",
    "StudentRecord",
]
