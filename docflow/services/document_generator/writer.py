"""Document writer: fill one template workbook from a mapping table."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple
import logging

from openpyxl import Workbook
from openpyxl.utils.exceptions import IllegalCharacterError

from docflow.core.errors import TemplateNotFoundError, TemplateUnreadableError
from docflow_io import (
    WorkbookReadError,
    coerce_date,
    load_template,
    parse_number,
    resolve_anchor,
    set_value,
    workbook_to_bytes,
)

from .context import DocumentContext
from .definitions import CellFormat, CellMapping, DocumentDefinition

LOGGER = logging.getLogger(__name__)


class MappingStatus(str, Enum):
    WRITTEN = "written"
    SKIPPED_EMPTY = "skipped_empty"
    MISSING_SHEET = "missing_sheet"
    INVALID_ADDRESS = "invalid_address"
    ACCESSOR_FAILED = "accessor_failed"
    COERCION_FAILED = "coercion_failed"


@dataclass(frozen=True, slots=True)
class MappingOutcome:
    sheet_name: str
    cell: str
    status: MappingStatus
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in (MappingStatus.WRITTEN, MappingStatus.SKIPPED_EMPTY)


@dataclass(frozen=True, slots=True)
class GeneratedDocument:
    doc_code: str
    doc_name: str
    file_name: str
    content: bytes
    outcomes: Tuple[MappingOutcome, ...] = ()

    @property
    def written_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status is MappingStatus.WRITTEN)

    @property
    def problems(self) -> Tuple[MappingOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.ok)


class CoercionError(ValueError):
    """Raised when a mapped value does not fit the cell's declared format."""


def _plain_number(number: Decimal) -> int | float:
    if number == number.to_integral_value():
        return int(number)
    return float(number)


def coerce_value(value: Any, fmt: CellFormat) -> Any:
    """Convert an accessor result into the value stored in the cell."""

    if fmt is CellFormat.DATE:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        if isinstance(value, str):
            parsed = coerce_date(value)
            if parsed is not None:
                return parsed
        raise CoercionError(f"not a date: {value!r}")

    if fmt is CellFormat.NUMBER:
        if isinstance(value, bool):
            raise CoercionError(f"not a number: {value!r}")
        if isinstance(value, (int, float, Decimal, str)):
            number = parse_number(value)
            if number is not None:
                return value if isinstance(value, int) else _plain_number(number)
        raise CoercionError(f"not a number: {value!r}")

    return str(value)


def write_mapping(wb: Workbook, mapping: CellMapping, context: DocumentContext) -> MappingOutcome:
    """Apply a single mapping; failures are reported, never raised."""

    def outcome(status: MappingStatus, detail: Optional[str] = None) -> MappingOutcome:
        return MappingOutcome(mapping.sheet_name, mapping.cell, status, detail)

    if mapping.sheet_name not in wb.sheetnames:
        return outcome(MappingStatus.MISSING_SHEET)
    ws = wb[mapping.sheet_name]
    try:
        cell = resolve_anchor(ws, mapping.cell)
    except ValueError as exc:
        return outcome(MappingStatus.INVALID_ADDRESS, str(exc))

    try:
        value = mapping.get_value(context)
    except Exception as exc:  # noqa: BLE001 - accessors are arbitrary callables
        return outcome(MappingStatus.ACCESSOR_FAILED, f"{type(exc).__name__}: {exc}")

    if value is None or value == "":
        return outcome(MappingStatus.SKIPPED_EMPTY)

    try:
        set_value(cell, coerce_value(value, mapping.format))
    except (CoercionError, IllegalCharacterError, TypeError, ValueError) as exc:
        return outcome(MappingStatus.COERCION_FAILED, str(exc))
    return outcome(MappingStatus.WRITTEN)


def apply_mappings(
    wb: Workbook, mappings: Iterable[CellMapping], context: DocumentContext
) -> List[MappingOutcome]:
    outcomes = [write_mapping(wb, mapping, context) for mapping in mappings]
    for item in outcomes:
        if not item.ok:
            LOGGER.warning(
                "Mapping %s!%s %s%s",
                item.sheet_name.strip(),
                item.cell,
                item.status.value,
                f" ({item.detail})" if item.detail else "",
            )
    return outcomes


def generate_document(
    definition: DocumentDefinition,
    context: DocumentContext,
    *,
    template_dir: Path,
) -> GeneratedDocument:
    """Fill ``definition``'s template with values from ``context``.

    The template on disk is never modified; every call loads a fresh copy.

    Raises:
        TemplateNotFoundError: When the template file is absent.
        TemplateUnreadableError: When the template is not a readable xlsx workbook.
    """

    path = Path(template_dir) / definition.template_file_name
    try:
        wb = load_template(path)
    except FileNotFoundError as exc:
        raise TemplateNotFoundError(f"{definition.doc_code}: template not found: {path}") from exc
    except WorkbookReadError as exc:
        raise TemplateUnreadableError(f"{definition.doc_code}: {exc}") from exc

    outcomes = apply_mappings(wb, definition.mappings, context)
    document = GeneratedDocument(
        doc_code=definition.doc_code,
        doc_name=definition.doc_name,
        file_name=definition.output_file_name(context),
        content=workbook_to_bytes(wb),
        outcomes=tuple(outcomes),
    )
    LOGGER.info(
        "Generated %s: %s/%s cells written",
        definition.doc_code,
        document.written_count,
        len(outcomes),
    )
    return document
