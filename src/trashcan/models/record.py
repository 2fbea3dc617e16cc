"""Trash record dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


@dataclass(frozen=True, slots=True)
class TrashRecord:
    """Metadata kept for one trashed item.

    ``trash_name`` is the key shared by the item's content under
    ``files/`` and its record under ``info/``.
    """

    trash_name: str
    origin_path: str
    deletion_date: str

    @property
    def deleted_at(self) -> datetime:
        """Deletion date as a naive local datetime."""
        return datetime.strptime(self.deletion_date, DATE_FORMAT)
