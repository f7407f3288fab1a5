"""`docflow_io` top-level package exports the workbook IO helpers."""

# Module responsibilities:
# - Re-export workbook loading/serialization, cell coercion and template inspection helpers.

from __future__ import annotations

from .cells import (
    cell_text,
    coerce_date,
    extract_year,
    normalize_address,
    parse_int,
    parse_number,
    resolve_anchor,
    set_value,
)
from .template_inspect import inspect_template
from .workbook import WorkbookReadError, load_template, load_workbook_bytes, workbook_to_bytes

__all__ = [
    "WorkbookReadError",
    "cell_text",
    "coerce_date",
    "extract_year",
    "inspect_template",
    "load_template",
    "load_workbook_bytes",
    "normalize_address",
    "parse_int",
    "parse_number",
    "resolve_anchor",
    "set_value",
    "workbook_to_bytes",
]

__version__ = "0.1.0"
