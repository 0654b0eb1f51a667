from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: a Personnel Directory entry.

    Matching against imported schedules is by ``employee_number`` only.
    """

    employee_id: int
    employee_number: str
    first_name: str
    last_name: str
    branch_id: Optional[int] = None
    default_shift_id: Optional[int] = None
    is_active: bool = True
