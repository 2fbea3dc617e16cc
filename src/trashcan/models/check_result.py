"""Reconciliation result dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class CheckResult:
    """Result of comparing the content store against the metadata store."""

    orphaned_content: list[str] = field(default_factory=list)
    orphaned_records: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.orphaned_content and not self.orphaned_records
