from __future__ import annotations

from datetime import date

import pytest

from docflow.core.errors import MissingPrerequisiteError, NotFoundError, RecordLookupError
from docflow.services.document_generator import build_context
from docflow.services.records import InMemoryRecordStore, ProjectRecord


def test_build_context_resolves_links(store, support_org) -> None:
    ctx = build_context("P1", store, support_org=support_org, as_of=date(2025, 4, 15))

    assert ctx.student.id == "S1"
    assert ctx.company.id == "C1"
    assert ctx.project.ssw_field == "NURSING_CARE"
    assert ctx.project.nationality == "Vietnam"
    assert ctx.display_name == "グエン ヴァン アン"
    assert ctx.as_of == date(2025, 4, 15)
    assert ctx.support_org.name == "常南交通株式会社"


def test_context_defaults_as_of_to_today(store, support_org) -> None:
    assert build_context("P1", store, support_org=support_org).as_of == date.today()


def test_project_nationality_overrides_student(store: InMemoryRecordStore, support_org) -> None:
    store.projects["P4"] = ProjectRecord(
        id="P4",
        name="override",
        context={"student_id": "S1", "company_id": "C1", "ssw_field": "FOOD_SERVICE", "nationality": "Nepal"},
    )

    assert build_context("P4", store, support_org=support_org).project.nationality == "Nepal"


def test_missing_company_link_is_a_prerequisite_error(store, support_org) -> None:
    with pytest.raises(MissingPrerequisiteError) as excinfo:
        build_context("P2", store, support_org=support_org)
    assert excinfo.value.link == "company_id"


def test_unknown_ids_raise_not_found(store, support_org) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        build_context("P404", store, support_org=support_org)
    assert excinfo.value.kind == "project"

    with pytest.raises(NotFoundError) as excinfo:
        build_context("P3", store, support_org=support_org)
    assert (excinfo.value.kind, excinfo.value.record_id) == ("student", "S9")
    assert isinstance(excinfo.value, RecordLookupError)
