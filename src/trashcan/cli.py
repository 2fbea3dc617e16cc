"""CLI interface for trashcan."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import NoReturn

import click

from trashcan import __version__
from trashcan.config import load_config
from trashcan.core.errors import EmptyTrashError, TrashError
from trashcan.core.manager import TrashManager
from trashcan.settings import Settings
from trashcan.utils import bytes_to_human, entry_size


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _fail(exc: TrashError) -> NoReturn:
    click.echo(f"{click.style('Error:', fg='red', bold=True)} {exc}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(__version__, prog_name="trashcan")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="TRASHCAN_ROOT",
    default=None,
    help="Trash directory to use instead of ~/.local/share/Trash",
)
@click.pass_context
def main(ctx: click.Context, verbose: int, root: Path | None) -> None:
    """trashcan: move files to the trash instead of deleting them."""
    _setup_logging(verbose)
    settings = Settings()
    try:
        config = load_config(root, settings)
    except ValueError as exc:
        raise click.UsageError(f"Bad setting in {settings.path}: {exc}")
    ctx.obj = {"manager": TrashManager(config), "settings": settings}


# ── put ──────────────────────────────────────────────────────────────────

@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.option("--recursive", "-r", is_flag=True, help="Required to move directories and their contents")
@click.option("--verbose", "-v", is_flag=True, help="Print names while moving them to the trash")
@click.pass_obj
def put(obj: dict, paths: tuple[str, ...], recursive: bool, verbose: bool) -> None:
    """Move files or directories to the trash."""
    manager: TrashManager = obj["manager"]
    for path in paths:
        try:
            name = manager.put(os.path.abspath(path), recursive=recursive)
        except TrashError as exc:
            _fail(exc)
        if verbose:
            click.echo(f"Moved {name} to trash")


# ── list ─────────────────────────────────────────────────────────────────

@main.command("list")
@click.option("--long", "-l", "long_format", is_flag=True, help="Also show trash names and sizes")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_cmd(obj: dict, long_format: bool, as_json: bool) -> None:
    """List everything currently in the trash, oldest deletion first."""
    manager: TrashManager = obj["manager"]
    try:
        records = manager.list()
    except TrashError as exc:
        _fail(exc)

    if as_json:
        data = [
            {
                "trash_name": r.trash_name,
                "path": r.origin_path,
                "deletion_date": r.deletion_date,
            }
            for r in records
        ]
        click.echo(json.dumps(data, indent=2))
        return

    if not records:
        click.echo("Trash is empty.")
        return

    for record in sorted(records, key=lambda r: r.deleted_at):
        line = f"{record.deletion_date} {record.origin_path}"
        if long_format:
            size = _content_size(manager, record.trash_name)
            line = (
                f"{record.deletion_date}  {size:>10s}  "
                f"{click.style(record.trash_name, fg='cyan', bold=True)}  {record.origin_path}"
            )
        elif record.trash_name != os.path.basename(record.origin_path):
            line += click.style(f" ({record.trash_name})", fg="bright_black")
        click.echo(line)


def _content_size(manager: TrashManager, trash_name: str) -> str:
    try:
        return bytes_to_human(entry_size(manager.files_dir / trash_name))
    except OSError:
        return "missing"


# ── restore ──────────────────────────────────────────────────────────────

@main.command()
@click.argument("name")
@click.option("--overwrite", "-o", is_flag=True, help="Replace an existing file at the original location")
@click.option("--verbose", "-v", is_flag=True, help="Print names while restoring them")
@click.pass_obj
def restore(obj: dict, name: str, overwrite: bool, verbose: bool) -> None:
    """Restore an item from the trash to its original location."""
    manager: TrashManager = obj["manager"]
    try:
        origin = manager.restore(name, overwrite=overwrite)
    except TrashError as exc:
        _fail(exc)
    if verbose:
        click.echo(f"Restored {origin} from trash")


# ── delete ───────────────────────────────────────────────────────────────

@main.command()
@click.argument("name")
@click.option("--recursive", "-r", is_flag=True, help="Required to delete directories and their contents")
@click.option("--verbose", "-v", is_flag=True, help="Print names while deleting them")
@click.pass_obj
def delete(obj: dict, name: str, recursive: bool, verbose: bool) -> None:
    """Permanently delete an item from the trash."""
    manager: TrashManager = obj["manager"]
    try:
        manager.delete(name, recursive=recursive)
    except TrashError as exc:
        _fail(exc)
    if verbose:
        click.echo(f"Deleted {name} from trash")


# ── empty ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--confirm", "-c", is_flag=True, help="Ask for confirmation before emptying the trash")
@click.option("--yes", "-y", is_flag=True, help="Never ask for confirmation")
@click.option("--verbose", "-v", is_flag=True, help="Print names while deleting them")
@click.pass_obj
def empty(obj: dict, confirm: bool, yes: bool, verbose: bool) -> None:
    """Permanently delete everything in the trash."""
    manager: TrashManager = obj["manager"]
    settings: Settings = obj["settings"]

    ask = (confirm or settings.confirm_empty) and not yes
    if ask and not click.confirm("Are you sure you want to empty the trash?", default=False):
        click.echo("Aborted.")
        return

    try:
        removed = manager.empty()
    except EmptyTrashError as exc:
        if verbose:
            for name in exc.removed:
                click.echo(f"Deleted {name}")
        _fail(exc)

    if verbose:
        for name in removed:
            click.echo(f"Deleted {name}")


# ── check ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def check(obj: dict, as_json: bool) -> None:
    """Report trashed items without records and records without items.

    Nothing is repaired. Exits with status 1 if anything is out of step.
    """
    manager: TrashManager = obj["manager"]
    try:
        result = manager.check()
    except TrashError as exc:
        _fail(exc)

    if as_json:
        click.echo(json.dumps(
            {
                "orphaned_content": result.orphaned_content,
                "orphaned_records": result.orphaned_records,
            },
            indent=2,
        ))
    elif result.is_clean:
        click.echo(f"  {click.style('✓', fg='green')} Trash is consistent")
    else:
        for name in result.orphaned_content:
            click.echo(f"  {click.style('!', fg='yellow')} {name:35s} — no record")
        for name in result.orphaned_records:
            click.echo(f"  {click.style('!', fg='yellow')} {name:35s} — record without item")

    if not result.is_clean:
        sys.exit(1)
