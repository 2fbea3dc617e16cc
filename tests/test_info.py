"""Tests for .trashinfo record reading and writing."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import pytest

from trashcan.core import info
from trashcan.core.errors import MalformedRecordError, NotFoundError
from trashcan.models.record import TrashRecord


class TestDumps:
    def test_format(self):
        text = info.dumps(TrashRecord("a.txt", "/tmp/a.txt", "2026-10-19T12:30:45"))

        assert text.splitlines()[:3] == [
            "[Trash Info]",
            "Path=/tmp/a.txt",
            "DeletionDate=2026-10-19T12:30:45",
        ]

    def test_path_is_percent_encoded(self):
        text = info.dumps(TrashRecord("x", "/tmp/100% new file.txt", "2026-10-19T12:30:45"))

        assert "Path=/tmp/100%25%20new%20file.txt" in text.splitlines()

    def test_undecodable_filename_bytes_are_kept(self):
        path = os.fsdecode(b"/tmp/caf\xe9.txt")
        text = info.dumps(TrashRecord("x", path, "2026-10-19T12:30:45"))

        assert "Path=/tmp/caf%E9.txt" in text.splitlines()
        assert info.loads(text, "x").origin_path == path


class TestLoads:
    def test_decodes_path(self):
        text = "[Trash Info]\nPath=/tmp/my%20file.txt\nDeletionDate=2026-01-02T03:04:05\n"

        record = info.loads(text, "my file.txt")

        assert record.trash_name == "my file.txt"
        assert record.origin_path == "/tmp/my file.txt"
        assert record.deleted_at == datetime(2026, 1, 2, 3, 4, 5)

    def test_tolerates_spaces_and_extra_keys(self):
        text = "[Trash Info]\nPath = /tmp/a\nDeletionDate = 2026-01-02T03:04:05\nOther=1\n"

        record = info.loads(text, "a")

        assert record.origin_path == "/tmp/a"

    def test_round_trip_unusual_path(self):
        original = TrashRecord("r", "relative/dir/ünïcode & #hash%.txt", "2026-10-19T12:30:45")

        assert info.loads(info.dumps(original), "r") == original

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "Path=/tmp/a\n",
            "[Other]\nPath=/tmp/a\nDeletionDate=2026-01-02T03:04:05\n",
            "[Trash Info]\nDeletionDate=2026-01-02T03:04:05\n",
            "[Trash Info]\nPath=/tmp/a\n",
            "[Trash Info]\npath=/tmp/a\ndeletiondate=2026-01-02T03:04:05\n",
            "[Trash Info]\nPath=/tmp/a\nDeletionDate=yesterday\n",
            "[Trash Info]\nPath=/tmp/a\nDeletionDate=2026-01-02 03:04:05\n",
            "[Trash Info]\nPath=/tmp/a\nPath=/tmp/b\nDeletionDate=2026-01-02T03:04:05\n",
        ],
    )
    def test_malformed(self, text):
        with pytest.raises(MalformedRecordError):
            info.loads(text, "a")


class TestFiles:
    def test_write_then_read(self, tmp_path):
        record = TrashRecord("a.txt", "/tmp/a.txt", "2026-10-19T12:30:45")

        path = info.write_record(tmp_path, record)

        assert path == tmp_path / "a.txt.trashinfo"
        assert info.read_record(path) == record
        assert [p.name for p in tmp_path.iterdir()] == ["a.txt.trashinfo"]

    def test_write_replaces_existing(self, tmp_path):
        info.write_record(tmp_path, TrashRecord("a", "/old", "2026-10-19T12:30:45"))
        info.write_record(tmp_path, TrashRecord("a", "/new", "2026-10-19T12:30:46"))

        assert info.read_record(tmp_path / "a.trashinfo").origin_path == "/new"

    def test_read_missing(self, tmp_path):
        with pytest.raises(NotFoundError):
            info.read_record(tmp_path / "gone.trashinfo")

    def test_read_binary_garbage(self, tmp_path):
        path = tmp_path / "bin.trashinfo"
        path.write_bytes(b"\xff\xfe\x00garbage")

        with pytest.raises(MalformedRecordError):
            info.read_record(path)


class TestNames:
    def test_info_name(self):
        assert info.info_name("a.txt") == "a.txt.trashinfo"

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("a.txt.trashinfo", "a.txt"),
            (".hidden.trashinfo", ".hidden"),
            (".trashinfo", None),
            ("README", None),
            (".tmpabc.tmp", None),
        ],
    )
    def test_trash_name_of(self, filename, expected):
        assert info.trash_name_of(Path("/trash/info") / filename) == expected

    def test_format_date(self):
        assert info.format_date(datetime(2026, 3, 4, 5, 6, 7, 999)) == "2026-03-04T05:06:07"
