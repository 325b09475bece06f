"""Timestamped backups of document files.

Every successful update of an existing document copies the previous bytes to
`<backup_dir>/<base>.<YYYYMMDD-HHMMSS>.json` and writes a `.sha256` sidecar
next to it. `rotate` keeps the newest `max_backups` files per document.

Backups are never modified after creation; they are only removed by rotation
or an explicit `delete`.
"""
from __future__ import annotations
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .checksum import (
    SIDECAR_SUFFIX,
    fingerprint,
    sidecar_path,
    verify_integrity_sidecar,
    write_integrity_sidecar,
)
from .errors import BackupError, BackupNotFound

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
BACKUP_EXTENSION = ".json"


def strip_extension(name: str) -> str:
    if name.endswith(BACKUP_EXTENSION):
        return name[: -len(BACKUP_EXTENSION)]
    return name


def _timestamp_key(filename: str) -> str:
    # <base>.<timestamp>.json; the timestamp is fixed width so string order works
    parts = filename.split(".")
    if len(parts) < 3:
        return filename
    return parts[1]


class BackupManager:
    """Create, list, rotate, read and remove backups in one directory.

    Parameters
    - backup_dir: directory holding backup files and their sidecars. It is
      created if missing.
    - clock: callable returning the current time; tests pass a fake to get
      distinct timestamps without sleeping.
    """

    def __init__(self, backup_dir: str | Path, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.backup_dir = Path(backup_dir)
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        self._clock = clock or datetime.now

    def sanitize(self, filename: str) -> str:
        """Return the last path component of `filename`."""
        return os.path.basename(filename.replace("\\", "/"))

    def _safe_path(self, filename: str) -> Path:
        # Drop any directory component so callers cannot escape backup_dir
        name = self.sanitize(filename)
        if not name or name in (".", ".."):
            raise BackupNotFound(filename)
        return self.backup_dir / name

    def backup_name(self, base_name: str, when: Optional[datetime] = None) -> str:
        stamp = (when or self._clock()).strftime(TIMESTAMP_FORMAT)
        return f"{strip_extension(base_name)}.{stamp}{BACKUP_EXTENSION}"

    def snapshot(self, base_name: str, content: bytes) -> str:
        """Write `content` as a new backup of `base_name` and return its filename.

        Two snapshots in the same second share a name; the later one wins.
        Raises OSError if the backup file cannot be written. A failing sidecar
        is only logged.
        """
        filename = self.backup_name(base_name)
        path = self.backup_dir / filename
        path.write_bytes(content)
        logger.info("Created backup: %s", path)
        write_integrity_sidecar(path)
        return filename

    def list(self, prefix: str) -> List[str]:
        """Return backup filenames starting with `prefix`, sorted by name.

        Integrity sidecars are not part of the listing.
        """
        try:
            entries = list(self.backup_dir.iterdir())
        except OSError as e:
            raise BackupError(f"failed to read backup directory: {e}") from e
        return sorted(
            p.name
            for p in entries
            if p.is_file() and p.name.startswith(prefix) and not p.name.endswith(SIDECAR_SUFFIX)
        )

    def rotate(self, base_name: str, max_backups: int) -> List[str]:
        """Delete all but the newest `max_backups` backups of `base_name`.

        Returns the deleted filenames. Sidecars of rotated backups are removed
        as well.
        """
        backups = self.list(strip_extension(base_name) + ".")
        if len(backups) <= max_backups:
            return []

        backups.sort(key=_timestamp_key, reverse=True)
        deleted: List[str] = []
        for name in backups[max(max_backups, 0):]:
            path = self.backup_dir / name
            logger.info("Deleting old backup: %s", path)
            try:
                # Another writer may have rotated it away already
                path.unlink(missing_ok=True)
            except OSError as e:
                raise BackupError(f"failed to delete backup {path}: {e}") from e
            sidecar_path(path).unlink(missing_ok=True)
            deleted.append(name)
        return deleted

    def fetch(self, filename: str) -> Tuple[bytes, str]:
        """Return the raw bytes of a backup and their fingerprint."""
        path = self._safe_path(filename)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise BackupNotFound(path.name)
        except OSError as e:
            raise BackupError(f"Error reading backup: {e}") from e
        return data, fingerprint(data)

    def delete(self, filename: str) -> str:
        """Remove a single backup file and return its sanitised name.

        The sidecar is left in place.
        """
        path = self._safe_path(filename)
        try:
            path.unlink()
        except FileNotFoundError:
            raise BackupNotFound(path.name)
        except OSError as e:
            raise BackupError(f"Error deleting backup: {e}") from e
        logger.info("Deleted backup: %s", path)
        return path.name

    def verify(self, filename: str) -> Optional[bool]:
        """Check a backup against its sidecar; None when no sidecar exists."""
        path = self._safe_path(filename)
        if not path.is_file():
            raise BackupNotFound(path.name)
        try:
            return verify_integrity_sidecar(path)
        except OSError as e:
            raise BackupError(f"Error verifying backup: {e}") from e
