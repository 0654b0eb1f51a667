from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Branch:
    branch_id: int
    name: str
