"""Document generator service package."""

from .api import DocumentSetResult, ManifestItem, generate_document_set
from .archive import (
    DocumentSet,
    FailedDocument,
    ManifestEntry,
    archive_name,
    build_archive,
    generate_set,
)
from .context import DocumentContext, ProjectData, build_context
from .definitions import CellFormat, CellMapping, DocumentDefinition
from .registry import (
    DocumentRegistry,
    ManualTemplate,
    build_default_registry,
    read_manual_template,
)
from .writer import GeneratedDocument, MappingOutcome, MappingStatus, generate_document

__all__ = [
    "CellFormat",
    "CellMapping",
    "DocumentContext",
    "DocumentDefinition",
    "DocumentRegistry",
    "DocumentSet",
    "DocumentSetResult",
    "FailedDocument",
    "GeneratedDocument",
    "ManifestEntry",
    "ManifestItem",
    "ManualTemplate",
    "MappingOutcome",
    "MappingStatus",
    "ProjectData",
    "archive_name",
    "build_archive",
    "build_context",
    "build_default_registry",
    "generate_document",
    "generate_document_set",
    "generate_set",
    "read_manual_template",
]
