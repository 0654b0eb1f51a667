from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AccessCode, Kiosk


class AccessCodeRepository(Protocol):
    def get_by_code(self, code: str) -> Optional[AccessCode]:
        """Most recent code row with this value, active or not."""

        raise NotImplementedError

    def get_active_for_screen(self, screen_id: str, *, now: datetime) -> Optional[AccessCode]:
        raise NotImplementedError

    def list_active(self, *, now: datetime, screen_id: Optional[str] = None, manual_only: bool = False) -> Sequence[AccessCode]:
        raise NotImplementedError

    def create(
        self,
        *,
        code: str,
        screen_id: Optional[str],
        branch_id: Optional[int],
        expires_at: datetime,
        created_at: datetime,
    ) -> AccessCode:
        raise NotImplementedError

    def rotate_for_screen(
        self,
        *,
        screen_id: str,
        code: str,
        branch_id: Optional[int],
        expires_at: datetime,
        created_at: datetime,
    ) -> AccessCode:
        """Deactivate the screen's active codes and insert the new one in a single transaction."""

        raise NotImplementedError

    def deactivate_if_active(self, code_id: int) -> bool:
        """Conditional update: returns True only for the caller that flipped the code inactive."""

        raise NotImplementedError

    def deactivate_expired(self, *, now: datetime) -> int:
        raise NotImplementedError

    def deactivate_all(self) -> int:
        raise NotImplementedError


class KioskRepository(Protocol):
    def get_by_screen_id(self, screen_id: str) -> Optional[Kiosk]:
        raise NotImplementedError

    def create(self, *, screen_id: str, branch_id: Optional[int], display_name: str, now: datetime) -> Kiosk:
        """Insert a kiosk; an existing row with the same screen id is returned unchanged."""

        raise NotImplementedError

    def touch_activity(self, screen_id: str, *, at: datetime) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Kiosk]:
        raise NotImplementedError
