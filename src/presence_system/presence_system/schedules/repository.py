from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AssignmentDraft, ShiftAssignment


class ShiftAssignmentRepository(Protocol):
    def create(self, draft: AssignmentDraft) -> ShiftAssignment:
        """Insert one assignment. Never merges with an existing row for the same day."""

        raise NotImplementedError

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[ShiftAssignment]:
        raise NotImplementedError
