"""Survey payloads: what the writer pre-fills and what the reader returns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from docflow.services.records import CompanyRecord, FinancialRecord, OfficerRecord


@dataclass(frozen=True, slots=True)
class SurveyInput:
    """Previously collected values used to pre-fill a fresh survey form."""

    company: CompanyRecord
    officers: Tuple[OfficerRecord, ...] = ()
    financials: Tuple[FinancialRecord, ...] = ()

    def financial_for(self, fiscal_year: int) -> Optional[FinancialRecord]:
        for record in self.financials:
            if record.fiscal_year == fiscal_year:
                return record
        return None


class ParsedOfficer(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    name_kana: str = ""
    position: str = ""
    sort_order: int


class ParsedFinancial(BaseModel):
    model_config = ConfigDict(frozen=True)

    fiscal_year: int
    revenue: Optional[int] = None
    ordinary_income: Optional[int] = None


class ParsedSurvey(BaseModel):
    """Structured answers read back from an uploaded survey."""

    model_config = ConfigDict(frozen=True)

    company_id: str
    business_description: Optional[str] = None
    capital_amount: Optional[int] = None
    full_time_employees: Optional[int] = None
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    fax_number: Optional[str] = None
    officers: List[ParsedOfficer] = Field(default_factory=list)
    financials: List[ParsedFinancial] = Field(default_factory=list)
