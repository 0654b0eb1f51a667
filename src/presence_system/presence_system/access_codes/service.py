from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..branches.repository import BranchRepository
from ..core.constants import (
    CODE_ALPHABET,
    DEFAULT_BRANCH_NAME,
    DEFAULT_CODE_LENGTH,
    DEFAULT_CODE_TTL_SECONDS,
    DEFAULT_MANUAL_CODE_TTL_MINUTES,
)
from ..core.exceptions import ExpiredError, NotFoundError, StorageError
from ..common.validators import require_non_empty, require_positive_int
from .model import AccessCode, Kiosk, KioskCode, ValidatedCode
from .qr import render_qr_png
from .repository import AccessCodeRepository, KioskRepository

logger = logging.getLogger(__name__)


def generate_code(length: int = DEFAULT_CODE_LENGTH) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


class AccessCodeService:
    """Code Lifecycle Manager.

    Kiosk codes rotate: at most one active code per screen, each valid for
    ``ttl_seconds``. Manual codes have no screen and live for whole minutes.
    A code is single-use; :meth:`consume` is the atomic claim.
    """

    def __init__(
        self,
        codes: AccessCodeRepository,
        kiosks: KioskRepository,
        branches: BranchRepository | None = None,
        *,
        ttl_seconds: int = DEFAULT_CODE_TTL_SECONDS,
        code_length: int = DEFAULT_CODE_LENGTH,
        manual_ttl_minutes: int = DEFAULT_MANUAL_CODE_TTL_MINUTES,
        default_branch_id: int | None = 1,
        default_branch_name: str = DEFAULT_BRANCH_NAME,
    ):
        self._codes = codes
        self._kiosks = kiosks
        self._branches = branches
        self._ttl = timedelta(seconds=int(ttl_seconds))
        self._code_length = int(code_length)
        self._manual_ttl_minutes = int(manual_ttl_minutes)
        self._default_branch_id = default_branch_id
        self._default_branch_name = default_branch_name

    # ---- kiosks ----

    def get_kiosk(self, screen_id: str, *, now: datetime | None = None) -> Kiosk:
        """Return the kiosk for ``screen_id``, registering it on first sight."""

        now = now or datetime.now()
        screen_id = require_non_empty(screen_id, "screen_id")

        kiosk = self._kiosks.get_by_screen_id(screen_id)
        if kiosk:
            return kiosk

        kiosk = self._kiosks.create(
            screen_id=screen_id,
            branch_id=self._default_branch_id,
            display_name=f"Screen {screen_id}",
            now=now,
        )
        logger.info("Registered kiosk %s (branch %s)", screen_id, kiosk.branch_id)
        return kiosk

    def list_kiosks(self) -> Sequence[Kiosk]:
        return self._kiosks.list_all()

    def touch_kiosk(self, screen_id: str, *, now: datetime | None = None) -> None:
        now = now or datetime.now()
        try:
            self._kiosks.touch_activity(screen_id, at=now)
        except StorageError:
            logger.warning("Could not record activity for kiosk %s", screen_id, exc_info=True)

    # ---- codes ----

    def create_for_kiosk(self, screen_id: str, *, now: datetime | None = None) -> AccessCode:
        now = now or datetime.now()
        kiosk = self.get_kiosk(screen_id, now=now)

        code = self._codes.rotate_for_screen(
            screen_id=kiosk.screen_id,
            code=generate_code(self._code_length),
            branch_id=kiosk.branch_id,
            expires_at=now + self._ttl,
            created_at=now,
        )
        logger.info("Rotated access code for kiosk %s (expires %s)", kiosk.screen_id, code.expires_at.isoformat())
        return code

    def get_or_create_for_kiosk(self, screen_id: str, *, now: datetime | None = None) -> AccessCode:
        now = now or datetime.now()
        screen_id = require_non_empty(screen_id, "screen_id")

        current = self._codes.get_active_for_screen(screen_id, now=now)
        if current and not current.is_expired(now):
            return current
        return self.create_for_kiosk(screen_id, now=now)

    def poll_kiosk(self, screen_id: str, *, now: datetime | None = None) -> KioskCode:
        """What a kiosk display calls every few seconds."""

        now = now or datetime.now()
        kiosk = self.get_kiosk(screen_id, now=now)
        self.touch_kiosk(kiosk.screen_id, now=now)
        code = self.get_or_create_for_kiosk(kiosk.screen_id, now=now)
        return KioskCode(code=code, kiosk=kiosk, branch_name=self._branch_name(kiosk.branch_id))

    def _branch_name(self, branch_id: Optional[int]) -> str:
        if self._branches is None or branch_id is None:
            return self._default_branch_name
        branch = self._branches.get_by_id(branch_id)
        return branch.name if branch else self._default_branch_name

    def create_manual(
        self,
        branch_id: int | None = None,
        ttl_minutes: int | None = None,
        *,
        now: datetime | None = None,
    ) -> AccessCode:
        now = now or datetime.now()
        minutes = self._manual_ttl_minutes if ttl_minutes is None else require_positive_int(ttl_minutes, "expiryMinutes")
        if branch_id is not None:
            branch_id = require_positive_int(branch_id, "branchId")

        self.cleanup_expired(now=now)

        code = self._codes.create(
            code=generate_code(self._code_length),
            screen_id=None,
            branch_id=branch_id,
            expires_at=now + timedelta(minutes=minutes),
            created_at=now,
        )
        logger.info("Issued manual access code %s valid for %s minute(s)", code.code_id, minutes)
        return code

    def validate(self, code_value: str, *, now: datetime | None = None) -> ValidatedCode:
        now = now or datetime.now()
        code_value = require_non_empty(code_value, "code")

        code = self._codes.get_by_code(code_value)
        if code is None:
            raise NotFoundError("Access code not found")
        # Expiry wins over the active flag: a rotated-out code past its TTL reports expired.
        if code.is_expired(now):
            raise ExpiredError("Access code has expired")
        if not code.is_active:
            raise NotFoundError("Access code is no longer active")

        kiosk = self._kiosks.get_by_screen_id(code.screen_id) if code.screen_id else None
        return ValidatedCode(code=code, kiosk=kiosk)

    def consume(self, code_id: int) -> bool:
        return self._codes.deactivate_if_active(code_id)

    def cleanup_expired(self, *, now: datetime | None = None) -> int:
        now = now or datetime.now()
        count = self._codes.deactivate_expired(now=now)
        if count:
            logger.info("Deactivated %s expired access code(s)", count)
        return count

    def list_active(self, screen_id: str | None = None, *, now: datetime | None = None) -> Sequence[AccessCode]:
        now = now or datetime.now()
        if screen_id:
            return self._codes.list_active(now=now, screen_id=screen_id)
        return self._codes.list_active(now=now, manual_only=True)

    def expire_all(self) -> int:
        count = self._codes.deactivate_all()
        logger.info("Expired all active access codes (%s)", count)
        return count

    def render_qr_png(self, code_value: str) -> bytes:
        return render_qr_png(require_non_empty(code_value, "code"))
