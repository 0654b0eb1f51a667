from __future__ import annotations

import calendar
import io
from typing import Any, List

import pandas as pd

from .model import ScheduleLayout

SAMPLE_ROWS = (
    ("001", "Sample Employee", ("S", "S", "A", "OF", "Ç", "S", "OF")),
    ("002", "Sample Employee 2", ("A", "A", "S", "OF", "A", "İzin", "OF")),
)


def build_template(month: int, year: int, *, layout: ScheduleLayout | None = None) -> bytes:
    """Empty monthly schedule in the layout the importer reads, with two sample rows."""

    layout = layout or ScheduleLayout()
    days = calendar.monthrange(year, month)[1]
    width = layout.first_day_column + days

    def blank_row() -> List[Any]:
        return [None] * width

    titles = [
        f"Shift Schedule {year}-{month:02d}",
        "Codes: S = Morning, A = Evening, OF = Off, Ç = Working. Leave notes (izin, rapor) are skipped.",
        "Fill one code per day; leave a cell empty when nothing is planned.",
    ]
    rows: List[List[Any]] = []
    for i in range(layout.header_row):
        row = blank_row()
        if i < len(titles):
            row[0] = titles[i]
        rows.append(row)

    header = blank_row()
    header[layout.number_column] = "Employee No"
    header[layout.name_column] = "Name"
    for day in range(1, days + 1):
        header[layout.first_day_column + day - 1] = day
    rows.append(header)

    for number, name, pattern in SAMPLE_ROWS:
        row = blank_row()
        row[layout.number_column] = number
        row[layout.name_column] = name
        for day in range(days):
            row[layout.first_day_column + day] = pattern[day % len(pattern)]
        rows.append(row)

    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, index=False, header=False, sheet_name="Schedule")
    return out.getvalue()
