from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AccessCode:
    """Short-lived token shown by a kiosk (``screen_id``) or issued manually (``screen_id is None``)."""

    code_id: int
    code: str
    screen_id: Optional[str]
    branch_id: Optional[int]
    expires_at: datetime
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def is_manual(self) -> bool:
        return self.screen_id is None

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class Kiosk:
    kiosk_id: int
    screen_id: str
    branch_id: Optional[int]
    display_name: str
    active: bool = True
    last_activity_at: Optional[datetime] = None


@dataclass(frozen=True)
class ValidatedCode:
    code: AccessCode
    kiosk: Optional[Kiosk]


@dataclass(frozen=True)
class KioskCode:
    """What a polling kiosk receives: its current code and the owning branch's name."""

    code: AccessCode
    kiosk: Kiosk
    branch_name: str
