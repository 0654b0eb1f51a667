from __future__ import annotations

import io
import logging
import numbers
from pathlib import PurePosixPath
from typing import Any, List, Optional

import pandas as pd

from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
CSV_SUFFIXES = {".csv"}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def read_schedule_rows(content: bytes, *, filename: str = "") -> List[List[Any]]:
    """Read the first sheet of an uploaded schedule as a header-less grid.

    Blank cells come back as ``None``; everything else keeps the type the
    reader produced (ints, floats, datetimes, strings).
    """

    if not content:
        raise ValidationError("Uploaded file is empty")

    suffix = PurePosixPath(filename or "").suffix.lower()
    if suffix and suffix not in EXCEL_SUFFIXES | CSV_SUFFIXES:
        raise ValidationError(f"Unsupported file type: {suffix}")

    try:
        if suffix in CSV_SUFFIXES:
            df = pd.read_csv(io.BytesIO(content), header=None, dtype=object, skip_blank_lines=False)
        else:
            df = pd.read_excel(io.BytesIO(content), sheet_name=0, header=None, dtype=object, engine="openpyxl")
    except Exception as e:
        logger.warning("Could not read schedule file %r: %s", filename, e)
        raise ValidationError(f"Could not read spreadsheet: {e}") from e

    return [[None if _is_blank(v) else v for v in row] for row in df.itertuples(index=False, name=None)]


def normalize_employee_number(value: Any) -> Optional[str]:
    """Employee numbers are matched as text: ``7.0`` becomes ``"7"``, text is only stripped."""

    if _is_blank(value):
        return None
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return str(value).strip()
