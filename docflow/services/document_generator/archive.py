"""Batch writer: run several definitions and bundle the results into one ZIP."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from io import BytesIO
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Sequence, Set, Tuple
import logging
import re
import zipfile

from docflow.core.errors import DocumentGenerationError, NoDocumentsGeneratedError

from .context import DocumentContext
from .definitions import DocumentDefinition
from .writer import GeneratedDocument, generate_document

LOGGER = logging.getLogger(__name__)

DEFAULT_COMPRESSION_LEVEL = 6
_UNSAFE_NAME_CHARS = re.compile(r'[\\/\x00-\x1f]')


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    doc_code: str
    file_name: str


@dataclass(frozen=True, slots=True)
class FailedDocument:
    doc_code: str
    reason: str


@dataclass(frozen=True, slots=True)
class DocumentSet:
    archive: bytes
    archive_name: str
    manifest: Tuple[ManifestEntry, ...]
    documents: Tuple[GeneratedDocument, ...]
    failures: Tuple[FailedDocument, ...] = ()


def sanitize_entry_name(name: str, fallback: str = "document.xlsx") -> str:
    """Strip path separators and control characters from an archive entry name."""

    cleaned = _UNSAFE_NAME_CHARS.sub("_", name).strip().lstrip(".")
    return cleaned or fallback


def _unique_name(name: str, used: Set[str]) -> str:
    if name not in used:
        return name
    path = PurePosixPath(name)
    counter = 2
    while True:
        candidate = f"{path.stem} ({counter}){path.suffix}"
        if candidate not in used:
            return candidate
        counter += 1


def archive_name(display_name: str, on: date) -> str:
    return f"{sanitize_entry_name(display_name, 'documents')}_{on:%Y%m%d}.zip"


def build_archive(
    documents: Sequence[GeneratedDocument],
    *,
    timestamp: date,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
) -> Tuple[bytes, List[ManifestEntry]]:
    """Deflate ``documents`` into a ZIP payload, one entry each, in order.

    Entry timestamps come from ``timestamp`` so identical inputs produce
    identical archives.
    """

    used: Set[str] = set()
    manifest: List[ManifestEntry] = []
    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for document in documents:
            entry = _unique_name(
                sanitize_entry_name(document.file_name, f"{document.doc_code}.xlsx"), used
            )
            used.add(entry)
            info = zipfile.ZipInfo(entry, date_time=(timestamp.year, timestamp.month, timestamp.day, 0, 0, 0))
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = 0o644 << 16
            zf.writestr(info, document.content, compresslevel=compression_level)
            manifest.append(ManifestEntry(doc_code=document.doc_code, file_name=entry))
    return buffer.getvalue(), manifest


def generate_documents(
    definitions: Iterable[DocumentDefinition],
    context: DocumentContext,
    *,
    template_dir: Path,
) -> Tuple[List[GeneratedDocument], List[FailedDocument]]:
    """Run the writer for each definition; one failure never stops the batch."""

    documents: List[GeneratedDocument] = []
    failures: List[FailedDocument] = []
    for definition in definitions:
        try:
            documents.append(generate_document(definition, context, template_dir=template_dir))
        except DocumentGenerationError as exc:
            LOGGER.error("Skipping %s: %s", definition.doc_code, exc)
            failures.append(FailedDocument(definition.doc_code, str(exc)))
        except Exception as exc:  # noqa: BLE001 - isolate each document in the batch
            LOGGER.exception("Unexpected failure generating %s", definition.doc_code)
            failures.append(FailedDocument(definition.doc_code, f"{type(exc).__name__}: {exc}"))
    return documents, failures


def generate_set(
    definitions: Iterable[DocumentDefinition],
    context: DocumentContext,
    *,
    template_dir: Path,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
) -> DocumentSet:
    """Generate every definition and archive the successful documents.

    Raises:
        NoDocumentsGeneratedError: When not a single document could be produced.
    """

    documents, failures = generate_documents(definitions, context, template_dir=template_dir)
    if not documents:
        reasons = "; ".join(f"{f.doc_code}: {f.reason}" for f in failures) or "no definitions"
        raise NoDocumentsGeneratedError(f"no documents could be generated ({reasons})")

    payload, manifest = build_archive(
        documents, timestamp=context.as_of, compression_level=compression_level
    )
    name = archive_name(context.display_name, context.as_of)
    LOGGER.info(
        "Archive %s: %s documents, %s failed, %s bytes",
        name,
        len(documents),
        len(failures),
        len(payload),
    )
    return DocumentSet(
        archive=payload,
        archive_name=name,
        manifest=tuple(manifest),
        documents=tuple(documents),
        failures=tuple(failures),
    )
