"""trashcan data models."""

from trashcan.models.check_result import CheckResult
from trashcan.models.record import TrashRecord

__all__ = [
    "CheckResult",
    "TrashRecord",
]
