"""File-backed store for the named JSON documents served by the API.

Each document lives at `<data_dir>/<name>.json`. Writes follow an optimistic
concurrency protocol: a caller may pass the fingerprint it last read as
`precondition`; when the file changed in the meantime the write is refused
with `PreconditionFailed` carrying the current fingerprint. Without a
precondition the last writer wins. No locks are taken and nothing is cached
in memory, so every read reflects the file on disk.
"""
from __future__ import annotations
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Tuple

from .backup_manager import BackupManager
from .checksum import EMPTY_ETAG, fingerprint
from .errors import BackupError, DocumentWriteError, InvalidJSON, PreconditionFailed, SchemaInvalid
from .serializer import JSONSerializer, Serializer
from .validation import validate

logger = logging.getLogger(__name__)

DEFAULT_MAX_BACKUPS = 10
EMPTY_DOCUMENT = b"{}"


class DocumentStore:
    def __init__(
        self,
        data_dir: str | Path,
        backups: BackupManager,
        serializer: Optional[Serializer] = None,
    ) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.backups = backups
        self.serializer = serializer or JSONSerializer()

    def path_for(self, name: str) -> Path:
        safe = os.path.basename(name.replace("\\", "/"))
        return self.data_dir / f"{safe}.json"

    def _current(self, name: str) -> Optional[bytes]:
        try:
            return self.path_for(name).read_bytes()
        except FileNotFoundError:
            return None

    def read(self, name: str) -> bytes:
        """Return the stored bytes, or `{}` when the document was never written."""
        data = self._current(name)
        if data is None:
            return EMPTY_DOCUMENT
        logger.debug("Read document %s (%d bytes)", name, len(data))
        return data

    def etag(self, name: str) -> str:
        """Fingerprint of the stored bytes; `EMPTY_ETAG` when absent."""
        return fingerprint(self._current(name))

    def read_with_etag(self, name: str) -> Tuple[bytes, str]:
        """Content and fingerprint from a single read of the file."""
        data = self._current(name)
        return (EMPTY_DOCUMENT if data is None else data), fingerprint(data)

    def write(
        self,
        name: str,
        raw_body: bytes,
        precondition: Optional[str] = None,
        max_backups: int = DEFAULT_MAX_BACKUPS,
    ) -> str:
        """Validate and persist `raw_body` as document `name`.

        Returns the fingerprint of the written bytes.

        Raises:
            InvalidJSON: body is not JSON
            SchemaInvalid: body does not have the shape required for `name`
            PreconditionFailed: `precondition` does not match the stored file
            DocumentWriteError: the live file could not be replaced
        """
        try:
            value = self.serializer.load(raw_body)
        except ValueError as e:
            raise InvalidJSON("Invalid JSON") from e

        problem = validate(name, value)
        if problem:
            raise SchemaInvalid(f"Schema validation failed: {problem}")

        pretty = self.serializer.dump(value)
        path = self.path_for(name)

        try:
            current = self._current(name)
        except OSError as e:
            logger.error("Error reading %s: %s", path, e)
            raise DocumentWriteError("Error reading current file") from e
        if current is not None:
            if precondition:
                current_etag = fingerprint(current)
                if current_etag != precondition:
                    logger.info("Precondition failed for %s: expected %s, current %s",
                                name, precondition, current_etag)
                    raise PreconditionFailed(current_etag)
            self._backup(path.name, current, max_backups)

        # One temp file per write; concurrent writers only race on the rename
        tmp: Optional[str] = None
        try:
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=path.name + ".", suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(pretty)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            logger.error("Error writing %s: %s", path, e)
            if tmp is not None:
                Path(tmp).unlink(missing_ok=True)
            raise DocumentWriteError("Error writing file") from e

        new_etag = fingerprint(pretty)
        logger.info("Updated %s (%d bytes, etag %s)", path, len(pretty), new_etag)
        return new_etag

    def _backup(self, base_name: str, content: bytes, max_backups: int) -> None:
        # A failed backup never blocks the primary write
        try:
            self.backups.snapshot(base_name, content)
        except OSError as e:
            logger.warning("Could not create backup of %s: %s", base_name, e)
            return
        try:
            self.backups.rotate(base_name, max_backups)
        except BackupError as e:
            logger.warning("Error cleaning up old backups for %s: %s", base_name, e)


__all__ = ["DocumentStore", "DEFAULT_MAX_BACKUPS", "EMPTY_DOCUMENT", "EMPTY_ETAG"]
