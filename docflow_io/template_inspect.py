"""Template inspection used when authoring cell mapping tables."""

# Module responsibilities:
# - List every non-empty anchor cell of a template so target addresses can be located.
# - Skip covered cells inside merged regions and report the region an anchor spans.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd
from openpyxl.cell.cell import MergedCell

from .cells import cell_text
from .workbook import load_template

logger = logging.getLogger(__name__)

INSPECT_COLUMNS = ["sheet", "cell", "value", "merged_range"]


def inspect_template(path: Path, sheets: List[str] | None = None) -> pd.DataFrame:
    """Return a frame of non-empty anchor cells for each sheet of ``path``.

    Args:
        path: Template workbook.
        sheets: Optional subset of sheet names; unknown names are ignored.

    Returns:
        DataFrame with ``sheet``, ``cell``, ``value`` and ``merged_range`` columns.
    """

    wb = load_template(path)
    records: List[Dict[str, object]] = []
    for ws in wb.worksheets:
        if sheets and ws.title not in sheets:
            continue
        anchors = {merged.start_cell.coordinate: merged.coord for merged in ws.merged_cells.ranges}
        for row in ws.iter_rows():
            for cell in row:
                if isinstance(cell, MergedCell):
                    continue
                text = cell_text(cell.value)
                if text is None:
                    continue
                records.append(
                    {
                        "sheet": ws.title,
                        "cell": cell.coordinate,
                        "value": text,
                        "merged_range": anchors.get(cell.coordinate),
                    }
                )
        logger.info("Inspected sheet %s: %s merged regions", ws.title, len(anchors))
    frame = pd.DataFrame.from_records(records, columns=INSPECT_COLUMNS).astype(object)
    # Unmerged anchors report None, never NaN.
    return frame.where(frame.notna(), None)
