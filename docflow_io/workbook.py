"""Workbook load/save helpers working on paths and in-memory buffers."""

# Module responsibilities:
# - Open template workbooks from disk and uploaded workbooks from bytes with explicit failures.
# - Serialize workbooks back to bytes without touching the filesystem.

from __future__ import annotations

import logging
import zipfile
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

logger = logging.getLogger(__name__)

_READ_ERRORS = (zipfile.BadZipFile, InvalidFileException, KeyError, OSError, ValueError)


class WorkbookReadError(ValueError):
    """Raised when a payload is not a readable xlsx workbook."""


def load_template(path: Path) -> Workbook:
    """Load a template workbook keeping styles and merged regions intact.

    Raises:
        FileNotFoundError: When the template does not exist.
        WorkbookReadError: When the file cannot be parsed as a workbook.
    """

    if not path.exists():
        raise FileNotFoundError(f"Template workbook not found: {path}")
    try:
        wb = load_workbook(path)
    except _READ_ERRORS as exc:
        raise WorkbookReadError(f"Failed to read template {path.name}: {exc}") from exc
    logger.debug("Template loaded: %s (%s sheets)", path.name, len(wb.sheetnames))
    return wb


def load_workbook_bytes(content: bytes, *, data_only: bool = True, rich_text: bool = False) -> Workbook:
    """Load a workbook from an in-memory payload such as an upload."""

    if not content:
        raise WorkbookReadError("Workbook payload is empty")
    try:
        return load_workbook(BytesIO(content), data_only=data_only, rich_text=rich_text)
    except _READ_ERRORS as exc:
        raise WorkbookReadError(f"Failed to read workbook: {exc}") from exc


def workbook_to_bytes(wb: Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
