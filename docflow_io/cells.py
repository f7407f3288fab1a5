"""Cell addressing and value coercion helpers."""

# Module responsibilities:
# - Resolve A1 addresses to writable cells, redirecting merged covered cells to their anchor.
# - Coerce raw cell values (rich text, locale formatted numbers, date strings) into Python types.

from __future__ import annotations

import math
import re
import unicodedata
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

import pandas as pd
from openpyxl.cell.cell import Cell, MergedCell
from openpyxl.cell.rich_text import CellRichText
from openpyxl.utils.cell import coordinate_from_string
from openpyxl.utils.exceptions import CellCoordinatesException
from openpyxl.worksheet.worksheet import Worksheet

# Thousands separators seen in Japanese and western spreadsheets, plus currency marks.
_NUMBER_NOISE = re.compile(r"[,，、'’_\s¥￥円]")
_EMPTY_MARKERS = {"-", "－", "—", "–", "―", "ー", "n/a", "N/A"}
_YEAR_PATTERN = re.compile(r"(\d{4})")


def normalize_address(address: str) -> str:
    """Return the canonical upper-case A1 address.

    Raises:
        ValueError: When ``address`` is not a single-cell A1 reference.
    """

    try:
        column, row = coordinate_from_string(address.strip())
    except CellCoordinatesException as exc:
        raise ValueError(f"invalid cell address: {address!r}") from exc
    return f"{column.upper()}{row}"


def resolve_anchor(ws: Worksheet, address: str) -> Cell:
    """Return the writable cell for ``address``.

    A covered cell inside a merged region resolves to the region's top-left
    anchor. Merged regions themselves are left untouched.
    """

    coordinate = normalize_address(address)
    cell = ws[coordinate]
    if not isinstance(cell, MergedCell):
        return cell
    for merged in ws.merged_cells.ranges:
        if coordinate in merged:
            return ws.cell(row=merged.min_row, column=merged.min_col)
    return cell


def set_value(cell: Cell, value: Any) -> None:
    """Assign ``value``; text starting with ``=`` stays literal text, not a formula."""

    cell.value = value
    if isinstance(value, str) and value.startswith("="):
        cell.data_type = "s"


def cell_text(value: Any) -> str | None:
    """Flatten a cell value to trimmed text; empty becomes ``None``."""

    if value is None:
        return None
    if isinstance(value, CellRichText):
        text = "".join(str(block) for block in value)
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    elif isinstance(value, datetime):
        text = value.date().isoformat() if value.time() == datetime.min.time() else value.isoformat()
    else:
        text = str(value)
    text = text.strip()
    return text or None


def parse_number(value: Any) -> Decimal | None:
    """Parse a numeric cell tolerant of separators; blanks and dashes give ``None``."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, Decimal)):
        number = Decimal(value)
    elif isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        number = Decimal(str(value))
    else:
        text = cell_text(value)
        if text is None:
            return None
        text = unicodedata.normalize("NFKC", text)
        if text in _EMPTY_MARKERS:
            return None
        text = _NUMBER_NOISE.sub("", text)
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    if not number.is_finite():
        return None
    return number


def parse_int(value: Any) -> int | None:
    number = parse_number(value)
    if number is None:
        return None
    return int(number.to_integral_value(rounding=ROUND_HALF_UP))


def coerce_date(value: Any) -> datetime | None:
    """Coerce a date-like value to ``datetime``; unparseable input gives ``None``."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    parsed = pd.to_datetime(value.strip(), errors="coerce")
    if pd.isna(parsed):
        return None
    # Excel cells carry no timezone.
    if parsed.tzinfo is not None:
        parsed = parsed.tz_localize(None)
    return parsed.to_pydatetime()


def extract_year(value: Any) -> int | None:
    """Extract a 4-digit year from a label such as ``2024年度``."""

    text = cell_text(value)
    if text is None:
        return None
    match = _YEAR_PATTERN.search(unicodedata.normalize("NFKC", text))
    return int(match.group(1)) if match else None
