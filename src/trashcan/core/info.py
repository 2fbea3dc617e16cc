"""Reading and writing ``.trashinfo`` records.

A record is a small INI file in the format used by freedesktop.org
desktop trash implementations::

    [Trash Info]
    Path=/home/user/notes%20old.txt
    DeletionDate=2026-10-19T12:00:00

``Path`` is stored percent-encoded and decoded again on read.
"""

from __future__ import annotations

import configparser
import io
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from urllib.parse import quote, unquote

from trashcan.core.errors import MalformedRecordError, NotFoundError, TrashIOError
from trashcan.models.record import DATE_FORMAT, TrashRecord

log = logging.getLogger(__name__)

SECTION = "Trash Info"
PATH_KEY = "Path"
DATE_KEY = "DeletionDate"
INFO_SUFFIX = ".trashinfo"


def info_name(trash_name: str) -> str:
    """File name of the record for *trash_name*."""
    return trash_name + INFO_SUFFIX


def trash_name_of(info_file: Path) -> str | None:
    """Trash name encoded in a record's file name, or None if it is not a record."""
    name = info_file.name
    if not name.endswith(INFO_SUFFIX) or name == INFO_SUFFIX:
        return None
    return name[: -len(INFO_SUFFIX)]


def format_date(moment: datetime) -> str:
    return moment.strftime(DATE_FORMAT)


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


def dumps(record: TrashRecord) -> str:
    """Serialize a record to ``.trashinfo`` text."""
    parser = _new_parser()
    parser[SECTION] = {
        PATH_KEY: quote(record.origin_path, safe="/", errors="surrogateescape"),
        DATE_KEY: record.deletion_date,
    }
    buf = io.StringIO()
    parser.write(buf, space_around_delimiters=False)
    return buf.getvalue()


def render(record: TrashRecord) -> str:
    """Serialize *record*, reporting an unencodable path as a write failure.

    Raises:
        TrashIOError: If the record cannot be serialized.
    """
    try:
        return dumps(record)
    except ValueError as exc:
        raise TrashIOError(f"Cannot encode record for '{record.trash_name}': {exc}") from exc


def loads(text: str, trash_name: str) -> TrashRecord:
    """Parse ``.trashinfo`` text into a record.

    Raises:
        MalformedRecordError: If the text is not a valid record.
    """
    parser = _new_parser()
    try:
        parser.read_string(text)
    except configparser.Error as exc:
        raise MalformedRecordError(f"{trash_name}: invalid record: {exc}") from exc

    if not parser.has_section(SECTION):
        raise MalformedRecordError(f"{trash_name}: missing [{SECTION}] section")
    section = parser[SECTION]

    missing = [key for key in (PATH_KEY, DATE_KEY) if not section.get(key)]
    if missing:
        raise MalformedRecordError(f"{trash_name}: missing {', '.join(missing)}")

    deletion_date = section[DATE_KEY].strip()
    try:
        datetime.strptime(deletion_date, DATE_FORMAT)
    except ValueError as exc:
        raise MalformedRecordError(f"{trash_name}: bad {DATE_KEY} {deletion_date!r}") from exc

    return TrashRecord(
        trash_name=trash_name,
        origin_path=unquote(section[PATH_KEY], errors="surrogateescape"),
        deletion_date=deletion_date,
    )


def read_record(info_file: Path) -> TrashRecord:
    """Load the record stored at *info_file*.

    Raises:
        NotFoundError: If the record does not exist.
        TrashIOError: If it cannot be read.
        MalformedRecordError: If it cannot be parsed.
    """
    trash_name = trash_name_of(info_file) or info_file.name
    try:
        text = info_file.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise NotFoundError(f"No trash record for '{trash_name}'") from exc
    except UnicodeDecodeError as exc:
        raise MalformedRecordError(f"{trash_name}: record is not valid UTF-8") from exc
    except OSError as exc:
        raise TrashIOError(f"Cannot read record {info_file}: {exc}") from exc
    return loads(text, trash_name)


def write_record(info_dir: Path, record: TrashRecord, text: str | None = None) -> Path:
    """Write *record* into *info_dir*, replacing any existing one.

    The record is written to a temporary file first and renamed into
    place, so readers never see a partial record. *text* is the already
    rendered record, if the caller has it.

    Raises:
        TrashIOError: If the record cannot be written.
    """
    target = info_dir / info_name(record.trash_name)
    if text is None:
        text = render(record)
    try:
        fd, tmp_name = tempfile.mkstemp(dir=info_dir, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except (OSError, ValueError) as exc:
        raise TrashIOError(f"Cannot write record {target}: {exc}") from exc
    log.debug("Wrote record %s", target)
    return target
