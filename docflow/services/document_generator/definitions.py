"""Declarative document definitions: one template plus its cell mapping table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Tuple

from .context import DocumentContext

ValueGetter = Callable[[DocumentContext], Any]


class CellFormat(str, Enum):
    TEXT = "text"
    DATE = "date"
    NUMBER = "number"


@dataclass(frozen=True, slots=True)
class CellMapping:
    """Binds one context value to one fixed template cell."""

    sheet_name: str
    cell: str
    get_value: ValueGetter
    format: CellFormat = CellFormat.TEXT


@dataclass(frozen=True, slots=True)
class DocumentDefinition:
    doc_code: str
    doc_name: str
    template_file_name: str
    output_file_name: Callable[[DocumentContext], str]
    mappings: Tuple[CellMapping, ...]
