"""Trash location and policy, resolved once per invocation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from trashcan.settings import Settings
from trashcan.utils import xdg_data_home

log = logging.getLogger(__name__)

COLLISION_POLICIES = ("rename", "overwrite")


@dataclass(frozen=True)
class TrashConfig:
    """Where the trash lives and how name collisions are handled.

    ``on_collision`` is ``"rename"`` to give a new item a free
    ``<stem>_<n><suffix>`` name, or ``"overwrite"`` to let it replace the
    trashed item of the same name.
    """

    root: Path
    on_collision: str = "rename"

    def __post_init__(self) -> None:
        if self.on_collision not in COLLISION_POLICIES:
            raise ValueError(
                f"on_collision must be one of {', '.join(COLLISION_POLICIES)}, got {self.on_collision!r}"
            )

    @property
    def files_dir(self) -> Path:
        return self.root / "files"

    @property
    def info_dir(self) -> Path:
        return self.root / "info"


def default_trash_root() -> Path:
    """The user's home trash, ``$XDG_DATA_HOME/Trash``."""
    return xdg_data_home() / "Trash"


def load_config(root: Path | str | None = None, settings: Settings | None = None) -> TrashConfig:
    """Build the configuration from an explicit root, user settings and defaults."""
    settings = settings or Settings()

    if root is None:
        root = settings.trash_root or default_trash_root()

    config = TrashConfig(
        root=Path(root),
        on_collision=settings.on_collision,
    )
    log.debug("Using trash at %s (collisions: %s)", config.root, config.on_collision)
    return config
