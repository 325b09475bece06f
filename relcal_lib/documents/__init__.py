"""HTTP endpoints for the named JSON documents."""

# Logical document names; each is served at /api/<name>.json
DOCUMENT_NAMES = ("environments", "releases", "holidays")

__all__ = ["DOCUMENT_NAMES"]
