from __future__ import annotations

import io
from typing import Any, Iterable, Mapping, Optional, Sequence

import pandas as pd

from ..tables.columns import ColumnSpec
from ..tables.renderer import CellRenderer

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def rows_to_frame(
    columns: Sequence[ColumnSpec],
    records: Iterable[Mapping[str, Any]],
    *,
    renderer: Optional[CellRenderer] = None,
) -> pd.DataFrame:
    """One column per ColumnSpec, cells as the text the table shows."""
    renderer = renderer or CellRenderer()
    data = [{c.label: renderer.plain_text(c, r) for c in columns} for r in records]
    return pd.DataFrame(data, columns=[c.label for c in columns])


def to_excel_bytes(df: pd.DataFrame, *, sheet_name: str = "Sheet1") -> io.BytesIO:
    # Ghi vào file Excel trong bộ nhớ (không lưu ra ổ cứng)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    output.seek(0)
    return output
