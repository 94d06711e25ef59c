"""Static file lookup under a fixed content root."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from config import CONFINE_STATIC_PATHS, STATIC_DIR

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StaticFile:
    path: Path
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def is_within_root(root: Path, candidate: Path) -> bool:
    """Return True when ``candidate`` resolves to a location inside ``root``."""
    static_root = root.resolve()
    try:
        candidate.resolve().relative_to(static_root)
    except ValueError:
        return False
    return True


class StaticContentResolver:
    """Maps served sub-paths such as ``/foo.txt`` to files under ``root``.

    The sub-path is appended to the root as a plain string, with no decoding
    or normalization. With ``confine`` enabled, a result that escapes the root
    (for example through ``..`` segments) is reported as missing; with it
    disabled, the concatenated path is opened as-is.
    """

    def __init__(self, root: str | Path = STATIC_DIR, *, confine: bool = CONFINE_STATIC_PATHS) -> None:
        self.root = Path(root)
        self.confine = confine

    def resolve(self, sub_path: str) -> Path | None:
        candidate = Path(f"{self.root}{sub_path}")
        if self.confine and not is_within_root(self.root, candidate):
            logger.debug("Rejected static path outside content root: %r", sub_path)
            return None
        return candidate

    def load(self, sub_path: str) -> StaticFile | None:
        """Read the whole file for ``sub_path`` or return None if unavailable."""
        try:
            file_path = self.resolve(sub_path)
            if file_path is None:
                return None
            with file_path.open("rb") as handle:
                data = handle.read()
        except (OSError, ValueError) as exc:
            # ValueError covers paths with embedded NUL bytes.
            logger.debug("Static lookup failed for %r: %s", sub_path, exc)
            return None
        return StaticFile(path=file_path, data=data)
