"""Public API for the document generator service."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional
import logging

from pydantic import BaseModel, ConfigDict

from docflow.config import Settings, default_settings
from docflow.services.records import RecordStore

from .archive import generate_set
from .context import build_context
from .registry import DocumentRegistry, build_default_registry

LOGGER = logging.getLogger(__name__)


class ManifestItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    doc_code: str
    file_name: str


class DocumentSetResult(BaseModel):
    """Archive and manifest returned to the caller of a generation request."""

    model_config = ConfigDict(frozen=True)

    archive: bytes
    archive_name: str
    manifest: List[ManifestItem]
    failed: Dict[str, str] = {}
    unfilled_cells: Dict[str, List[str]] = {}


def generate_document_set(
    project_id: str,
    *,
    store: RecordStore,
    registry: Optional[DocumentRegistry] = None,
    settings: Optional[Settings] = None,
    as_of: Optional[date] = None,
) -> DocumentSetResult:
    """Build the full application document set for one project."""

    settings = settings or default_settings()
    registry = registry or build_default_registry()

    context = build_context(project_id, store, support_org=settings.support_org, as_of=as_of)
    LOGGER.info("Generating %s documents for project %s", len(registry), project_id)
    document_set = generate_set(
        list(registry),
        context,
        template_dir=settings.template_dir,
        compression_level=settings.archive.compression_level,
    )

    unfilled = {
        doc.doc_code: [f"{o.sheet_name.strip()}!{o.cell}: {o.status.value}" for o in doc.problems]
        for doc in document_set.documents
        if doc.problems
    }
    return DocumentSetResult(
        archive=document_set.archive,
        archive_name=document_set.archive_name,
        manifest=[ManifestItem(doc_code=m.doc_code, file_name=m.file_name) for m in document_set.manifest],
        failed={f.doc_code: f.reason for f in document_set.failures},
        unfilled_cells=unfilled,
    )
