from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class Shift:
    """Domain entity: a named Shift Catalog definition."""

    shift_id: int
    shift_name: str
    start_time: time
    end_time: time
    branch_id: Optional[int] = None
    is_active: bool = True
