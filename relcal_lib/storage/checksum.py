"""Content fingerprints and integrity sidecars.

`fingerprint` produces the short quoted digest used as the HTTP ETag and
If-Match token. `write_integrity_sidecar` stores the full SHA-256 next to a
backup file as `<file>.sha256`.
"""
from __future__ import annotations
import hashlib
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Fingerprint for "no content yet": an absent file or an empty buffer.
EMPTY_ETAG = '"0"'
SIDECAR_SUFFIX = ".sha256"
# Bytes of the SHA-256 digest kept in a fingerprint
FINGERPRINT_BYTES = 8


def fingerprint(content: Optional[bytes]) -> str:
    """Return the quoted short digest of `content`.

    `None` and `b""` both map to `EMPTY_ETAG`. Any real JSON value, including
    `{}`, yields an ordinary digest.
    """
    if not content:
        return EMPTY_ETAG
    digest = hashlib.sha256(content).digest()[:FINGERPRINT_BYTES]
    return f'"{digest.hex()}"'


def content_hash(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


def sidecar_path(path: str | Path) -> Path:
    p = Path(path)
    return p.with_name(p.name + SIDECAR_SUFFIX)


def write_integrity_sidecar(path: str | Path) -> Optional[Path]:
    """Write the hex SHA-256 of `path` to `<path>.sha256`.

    Best-effort: failures are logged and `None` is returned so the caller's
    operation continues.
    """
    target = sidecar_path(path)
    try:
        data = Path(path).read_bytes()
        target.write_text(content_hash(data) + "\n", encoding="utf-8")
    except OSError as e:
        logger.warning("Could not write integrity sidecar for %s: %s", path, e)
        return None
    logger.debug("Wrote integrity sidecar %s", target)
    return target


def verify_integrity_sidecar(path: str | Path) -> Optional[bool]:
    """Compare `path` against its sidecar.

    Returns None when there is no sidecar to compare with.
    """
    side = sidecar_path(path)
    if not side.exists():
        return None
    expected = side.read_text(encoding="utf-8").strip()
    return content_hash(Path(path).read_bytes()) == expected
