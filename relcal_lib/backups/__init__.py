"""HTTP endpoints for listing, fetching, verifying and deleting backups."""
