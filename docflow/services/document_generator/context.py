"""Context builder assembling the immutable snapshot consumed by mapping tables."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional
import logging

from docflow.config import SupportOrganization
from docflow.core.errors import MissingPrerequisiteError, NotFoundError
from docflow.services.records import CompanyRecord, RecordStore, StudentRecord

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProjectData:
    """Case level data taken from the project's context links."""

    project_id: str
    project_name: str
    student_id: str
    company_id: str
    ssw_field: str
    nationality: str


@dataclass(frozen=True, slots=True)
class DocumentContext:
    """Everything a mapping accessor may read; built once per generation request."""

    student: StudentRecord
    company: CompanyRecord
    project: ProjectData
    support_org: SupportOrganization
    as_of: date

    @property
    def display_name(self) -> str:
        return self.student.display_name


def build_context(
    project_id: str,
    store: RecordStore,
    *,
    support_org: SupportOrganization,
    as_of: Optional[date] = None,
) -> DocumentContext:
    """Resolve a project and its linked student and company into a context.

    Raises:
        NotFoundError: When the project, student or company id does not resolve.
        MissingPrerequisiteError: When the project lacks a student, field or company link.
    """

    project = store.get_project(project_id)
    if project is None:
        raise NotFoundError("project", project_id)

    student_id = project.link("student_id")
    if not student_id:
        raise MissingPrerequisiteError(
            f"project {project_id} has no student assigned", link="student_id"
        )
    ssw_field = project.link("ssw_field")
    if not ssw_field:
        raise MissingPrerequisiteError(
            f"project {project_id} has no specified skilled worker field", link="ssw_field"
        )
    company_id = project.link("company_id")
    if not company_id:
        raise MissingPrerequisiteError(
            f"project {project_id} has no receiving company yet", link="company_id"
        )

    student = store.get_student(student_id)
    if student is None:
        raise NotFoundError("student", student_id)
    company = store.get_company(company_id)
    if company is None:
        raise NotFoundError("company", company_id)

    LOGGER.info("Context built for project %s (student=%s company=%s)", project_id, student_id, company_id)
    return DocumentContext(
        student=student,
        company=company,
        project=ProjectData(
            project_id=project.id,
            project_name=project.name,
            student_id=student_id,
            company_id=company_id,
            ssw_field=ssw_field,
            nationality=project.link("nationality") or student.nationality,
        ),
        support_org=support_org,
        as_of=as_of or date.today(),
    )
