"""Record snapshots and the record lookup collaborator."""

from .models import (
    CertificationRecord,
    CompanyRecord,
    FinancialRecord,
    OfficerRecord,
    ProjectRecord,
    StudentRecord,
)
from .store import InMemoryRecordStore, RecordStore, load_record_store

__all__ = [
    "CertificationRecord",
    "CompanyRecord",
    "FinancialRecord",
    "InMemoryRecordStore",
    "OfficerRecord",
    "ProjectRecord",
    "RecordStore",
    "StudentRecord",
    "load_record_store",
]
