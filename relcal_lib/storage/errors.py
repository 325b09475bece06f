"""Exceptions raised by the document store and backup manager.

Routers translate these into HTTP responses; see `relcal_lib.documents.api`
and `relcal_lib.backups.api`.
"""
from __future__ import annotations


class DocumentStoreError(Exception):
    """Base class for all store failures scoped to a single request."""


class InvalidJSON(DocumentStoreError):
    """Request body could not be parsed as JSON."""


class SchemaInvalid(DocumentStoreError):
    """Parsed document does not have the minimal shape for its name."""


class PreconditionFailed(DocumentStoreError):
    """The client's If-Match fingerprint no longer matches the stored file.

    `current_etag` is the fingerprint of the bytes on disk so the caller can
    re-read and retry.
    """

    def __init__(self, current_etag: str) -> None:
        super().__init__("Precondition Failed")
        self.current_etag = current_etag


class DocumentWriteError(DocumentStoreError):
    """Writing the live document file failed."""


class BackupError(DocumentStoreError):
    """Listing, reading or removing backups failed."""


class BackupNotFound(BackupError):
    def __init__(self, filename: str) -> None:
        super().__init__(f"Backup not found: {filename}")
        self.filename = filename
