"""Registry of auto-filled document definitions and the manual template catalog."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Iterator, List, NamedTuple

from docflow.config import Settings
from docflow.core.errors import RegistryFrozenError, TemplateNotFoundError, UnknownDocumentError

from .definitions import DocumentDefinition
from .mappings import BUILTIN_DEFINITIONS

_CONTENT_TYPES = {
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".doc": "application/msword",
}
_DEFAULT_CONTENT_TYPE = "application/octet-stream"


class DocumentRegistry:
    """Ordered, append-only collection of document definitions.

    Populated at start-up and then frozen; a frozen registry is safe to share
    between concurrent generation requests.
    """

    def __init__(self, definitions: Iterable[DocumentDefinition] = ()) -> None:
        self._definitions: Dict[str, DocumentDefinition] = {}
        self._frozen = False
        for definition in definitions:
            self.register(definition)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, definition: DocumentDefinition) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"registry is frozen; cannot add {definition.doc_code}")
        if definition.doc_code in self._definitions:
            raise ValueError(f"duplicate document code: {definition.doc_code}")
        self._definitions[definition.doc_code] = definition

    def freeze(self) -> "DocumentRegistry":
        self._frozen = True
        return self

    def get(self, doc_code: str) -> DocumentDefinition:
        try:
            return self._definitions[doc_code]
        except KeyError:
            raise UnknownDocumentError(doc_code) from None

    def codes(self) -> List[str]:
        return list(self._definitions)

    def __iter__(self) -> Iterator[DocumentDefinition]:
        return iter(list(self._definitions.values()))

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, doc_code: object) -> bool:
        return doc_code in self._definitions


def build_default_registry() -> DocumentRegistry:
    return DocumentRegistry(BUILTIN_DEFINITIONS).freeze()


class ManualTemplate(NamedTuple):
    """Blank template handed out for documents that are filled in by hand."""

    file_name: str
    content: bytes
    content_type: str


def content_type_for(file_name: str) -> str:
    return _CONTENT_TYPES.get(Path(file_name).suffix.lower(), _DEFAULT_CONTENT_TYPE)


def read_manual_template(doc_code: str, settings: Settings) -> ManualTemplate:
    """Read the blank template configured for ``doc_code``.

    Raises:
        UnknownDocumentError: When no manual template is configured for the code.
        TemplateNotFoundError: When the configured file is missing on disk.
    """

    file_name = settings.manual_templates.get(doc_code)
    if not file_name:
        raise UnknownDocumentError(doc_code)
    path = settings.template_dir / file_name
    if not path.is_file():
        raise TemplateNotFoundError(f"template file not found: {path}")
    return ManualTemplate(file_name=file_name, content=path.read_bytes(), content_type=content_type_for(file_name))
