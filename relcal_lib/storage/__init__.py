"""Document storage package: live JSON documents plus their backups."""

from pathlib import Path

from .backup_manager import BackupManager
from .checksum import EMPTY_ETAG, fingerprint, write_integrity_sidecar
from .document_store import DEFAULT_MAX_BACKUPS, DocumentStore
from .errors import (
    BackupError,
    BackupNotFound,
    DocumentStoreError,
    DocumentWriteError,
    InvalidJSON,
    PreconditionFailed,
    SchemaInvalid,
)


def create_store(data_dir, backup_dir=None, clock=None) -> DocumentStore:
    """Compose a `DocumentStore` with a `BackupManager` under `data_dir/backups`."""
    backups = BackupManager(backup_dir or Path(data_dir) / "backups", clock=clock)
    return DocumentStore(data_dir, backups)


__all__ = [
    "BackupManager",
    "DocumentStore",
    "create_store",
    "fingerprint",
    "write_integrity_sidecar",
    "EMPTY_ETAG",
    "DEFAULT_MAX_BACKUPS",
    "DocumentStoreError",
    "InvalidJSON",
    "SchemaInvalid",
    "PreconditionFailed",
    "DocumentWriteError",
    "BackupError",
    "BackupNotFound",
]
