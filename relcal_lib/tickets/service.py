"""Ticket lookup backed by an external tracker.

Credentials come from a side-configuration JSON document in the data
directory. When no username/token is configured the service returns an empty
list without contacting the tracker.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .interfaces import TrackerClientProtocol, TrackerConfigError, TrackerCredentials

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "jira-config.json"


class TicketService:
    def __init__(self, config_path: str | Path, client: TrackerClientProtocol) -> None:
        self.config_path = Path(config_path)
        self._client = client

    def load_credentials(self) -> Optional[TrackerCredentials]:
        """Return configured credentials, or None when none are set.

        Raises TrackerConfigError if the document exists but cannot be used.
        """
        try:
            raw = self.config_path.read_bytes()
        except FileNotFoundError:
            logger.debug("No tracker config at %s", self.config_path)
            return None
        except OSError as e:
            raise TrackerConfigError(f"Failed to read Jira config: {e}") from e
        try:
            creds = TrackerCredentials.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            raise TrackerConfigError("Invalid Jira config") from e
        if not creds.is_configured():
            return None
        if not creds.base_url:
            raise TrackerConfigError("Invalid Jira config: baseUrl missing")
        return creds

    def list_tickets(self) -> List[dict]:
        creds = self.load_credentials()
        if creds is None:
            return []
        return self._client.search_issues(creds.jql, creds)
