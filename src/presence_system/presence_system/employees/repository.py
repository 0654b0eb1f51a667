from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for the Personnel Directory.

    Services depend on this protocol, never on a concrete database.
    """

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def update_default_shift(self, employee_id: int, shift_id: int) -> bool:
        raise NotImplementedError
