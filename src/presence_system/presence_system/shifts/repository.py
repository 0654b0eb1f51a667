from __future__ import annotations

from typing import Protocol, Sequence

from .model import Shift


class ShiftRepository(Protocol):
    """Read side of the Shift Catalog; the importer snapshots ``list_all`` once per call."""

    def list_all(self) -> Sequence[Shift]:
        raise NotImplementedError
