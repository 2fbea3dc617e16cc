"""Trash operations over the content and metadata stores.

The trash root holds two directories kept in lockstep:

- ``files/<name>``: the trashed file or directory tree
- ``info/<name>.trashinfo``: its record (origin path, deletion date)

Operations that touch both stores do so in two steps and never roll back
the first step when the second fails. The failure surfaces as an error and
the stores are left as they are; ``check()`` reports such leftovers.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable

from trashcan.config import TrashConfig
from trashcan.core import info
from trashcan.core.errors import (
    DestinationExistsError,
    EmptyTrashError,
    NotFoundError,
    RecursiveRequiredError,
    TrashError,
    TrashIOError,
)
from trashcan.models.check_result import CheckResult
from trashcan.models.record import TrashRecord
from trashcan.utils import is_real_dir, remove_path

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class TrashManager:
    """Moves items into the trash and back out of it."""

    def __init__(self, config: TrashConfig, clock: Clock = datetime.now) -> None:
        self.config = config
        self._clock = clock

    @property
    def files_dir(self) -> Path:
        return self.config.files_dir

    @property
    def info_dir(self) -> Path:
        return self.config.info_dir

    # ── put ──────────────────────────────────────────────────────────────

    def put(self, path: str | os.PathLike[str], recursive: bool = False) -> str:
        """Move *path* into the trash and record where it came from.

        Returns:
            The trash name the item was stored under.

        Raises:
            NotFoundError: If *path* does not exist.
            RecursiveRequiredError: If *path* is a directory and *recursive* is False.
            TrashIOError: If the move or the record write fails. In the
                latter case the item is already in the trash without a record.
        """
        origin = Path(path)
        if not os.path.lexists(origin):
            raise NotFoundError(f"No such file or directory: '{path}'")
        if is_real_dir(origin) and not recursive:
            raise RecursiveRequiredError(f"'{path}' is a directory, use recursive to trash it")

        base = origin.name
        if base in ("", ".", ".."):
            raise TrashError(f"Cannot trash '{path}'")

        self._ensure_stores()
        name = self._pick_name(base)
        target = self.files_dir / name

        record = TrashRecord(
            trash_name=name,
            origin_path=os.fspath(path),
            deletion_date=info.format_date(self._clock()),
        )
        text = info.render(record)

        try:
            os.rename(origin, target)
        except OSError as exc:
            raise TrashIOError(f"Cannot move '{path}' to trash: {exc}") from exc

        info.write_record(self.info_dir, record, text)

        log.info("Trashed %s as %s", path, name)
        return name

    def _ensure_stores(self) -> None:
        try:
            self.files_dir.mkdir(parents=True, exist_ok=True)
            self.info_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise TrashIOError(f"Cannot create trash at {self.config.root}: {exc}") from exc

    def _pick_name(self, base: str) -> str:
        """Choose the trash name for an item with base name *base*."""
        if self.config.on_collision == "overwrite" or not self._name_taken(base):
            return base

        stem, suffix = _split_name(base)
        n = 2
        while self._name_taken(f"{stem}_{n}{suffix}"):
            n += 1
        name = f"{stem}_{n}{suffix}"
        log.debug("Trash name %s is taken, using %s", base, name)
        return name

    def _name_taken(self, name: str) -> bool:
        return os.path.lexists(self.files_dir / name) or os.path.lexists(
            self.info_dir / info.info_name(name)
        )

    # ── list ─────────────────────────────────────────────────────────────

    def list(self) -> list[TrashRecord]:
        """Return every record in the trash, ordered by trash name.

        Raises:
            MalformedRecordError: If any record cannot be parsed.
            TrashIOError: If the metadata store cannot be read.
        """
        records: list[TrashRecord] = []
        for info_file in self._iter_dir(self.info_dir):
            if info.trash_name_of(info_file) is None:
                log.debug("Skipping non-record entry %s", info_file)
                continue
            records.append(info.read_record(info_file))
        return records

    def get(self, trash_name: str) -> TrashRecord:
        """Return the record for *trash_name*.

        Raises:
            NotFoundError: If there is no such record.
        """
        return info.read_record(self._info_path(trash_name))

    # ── restore ──────────────────────────────────────────────────────────

    def restore(self, trash_name: str, overwrite: bool = False) -> str:
        """Move a trashed item back to where it came from.

        Returns:
            The origin path the item was restored to.

        Raises:
            NotFoundError: If there is no record for *trash_name*.
            DestinationExistsError: If the origin path is occupied and
                *overwrite* is False.
            TrashIOError: If the move or the record removal fails.
        """
        record = self.get(trash_name)
        destination = Path(record.origin_path)
        occupied = os.path.lexists(destination)

        if occupied and not overwrite:
            raise DestinationExistsError(f"'{record.origin_path}' already exists")

        source = self._content_path(trash_name)
        if not os.path.lexists(source):
            raise TrashIOError(f"Cannot restore '{trash_name}': trashed item is missing")

        try:
            if occupied and (is_real_dir(destination) or is_real_dir(source)):
                # rename() cannot replace a directory, or replace anything with one
                remove_path(destination, recursive=True)
            destination.parent.mkdir(parents=True, exist_ok=True)
            os.rename(source, destination)
        except OSError as exc:
            raise TrashIOError(f"Cannot restore '{trash_name}' to '{record.origin_path}': {exc}") from exc

        self._remove_record(trash_name)
        log.info("Restored %s to %s", trash_name, record.origin_path)
        return record.origin_path

    # ── delete ───────────────────────────────────────────────────────────

    def delete(self, trash_name: str, recursive: bool = False) -> None:
        """Permanently delete one trashed item and its record.

        Raises:
            NotFoundError: If *trash_name* is not in the trash.
            TrashIOError: If the content or the record cannot be removed.
                A non-empty directory without *recursive* fails here and
                nothing is removed.
        """
        content = self._content_path(trash_name)
        if not os.path.lexists(content):
            raise NotFoundError(f"'{trash_name}' not found in trash")

        try:
            remove_path(content, recursive=recursive)
        except OSError as exc:
            raise TrashIOError(f"Cannot delete '{trash_name}': {exc}") from exc

        self._remove_record(trash_name)
        log.info("Deleted %s", trash_name)

    # ── empty ────────────────────────────────────────────────────────────

    def empty(self) -> list[str]:
        """Permanently delete everything in the trash.

        Content is removed first, then every record, whether or not it had
        matching content.

        Returns:
            Names removed from the content store.

        Raises:
            EmptyTrashError: If a removal fails. ``removed`` on the error
                lists what was deleted before the failure.
        """
        removed: list[str] = []
        try:
            for item in self._iter_dir(self.files_dir):
                try:
                    remove_path(item, recursive=True)
                except OSError as exc:
                    raise EmptyTrashError(f"Cannot delete '{item.name}': {exc}", removed) from exc
                log.debug("Deleted %s", item.name)
                removed.append(item.name)

            for info_file in self._iter_dir(self.info_dir):
                try:
                    remove_path(info_file, recursive=True)
                except OSError as exc:
                    raise EmptyTrashError(f"Cannot delete record '{info_file.name}': {exc}", removed) from exc
        except EmptyTrashError:
            raise
        except TrashIOError as exc:
            raise EmptyTrashError(str(exc), removed) from exc

        log.info("Emptied trash: %d items removed", len(removed))
        return removed

    # ── check ────────────────────────────────────────────────────────────

    def check(self) -> CheckResult:
        """Report content without a record and records without content.

        Nothing is modified.
        """
        content = {item.name for item in self._iter_dir(self.files_dir)}
        records = {
            name
            for name in (info.trash_name_of(f) for f in self._iter_dir(self.info_dir))
            if name is not None
        }

        result = CheckResult(
            orphaned_content=sorted(content - records),
            orphaned_records=sorted(records - content),
        )
        for name in result.orphaned_content:
            log.warning("Trashed item without record: %s", name)
        for name in result.orphaned_records:
            log.warning("Record without trashed item: %s", name)
        return result

    # ── helpers ──────────────────────────────────────────────────────────

    def _content_path(self, trash_name: str) -> Path:
        _check_name(trash_name)
        return self.files_dir / trash_name

    def _info_path(self, trash_name: str) -> Path:
        _check_name(trash_name)
        return self.info_dir / info.info_name(trash_name)

    def _remove_record(self, trash_name: str) -> None:
        info_file = self._info_path(trash_name)
        try:
            info_file.unlink()
        except OSError as exc:
            raise TrashIOError(f"Cannot remove record for '{trash_name}': {exc}") from exc

    @staticmethod
    def _iter_dir(directory: Path) -> list[Path]:
        """Sorted entries of *directory*; a missing directory is empty."""
        try:
            return sorted(directory.iterdir())
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise TrashIOError(f"Cannot read {directory}: {exc}") from exc


def _check_name(trash_name: str) -> None:
    """Reject names that would escape the trash directories."""
    if not trash_name or trash_name in (".", "..") or "/" in trash_name or "\0" in trash_name:
        raise NotFoundError(f"'{trash_name}' not found in trash")


def _split_name(name: str) -> tuple[str, str]:
    """Split ``report.pdf`` into ``("report", ".pdf")``; dotfiles keep their dot."""
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return name, ""
    return stem, "." + ext
