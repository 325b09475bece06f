"""Jira implementation of `TrackerClientProtocol` using `requests`.

Authenticates with a session cookie (username + password/token) and runs a
JQL search through the REST API v2.
"""
from __future__ import annotations
import logging
from typing import Any, List, Optional

import requests

from .interfaces import TrackerAuthError, TrackerCredentials, TrackerSearchError

logger = logging.getLogger(__name__)

SEARCH_FIELDS = "summary,status,assignee,priority"


class JiraClient:
    def __init__(self, timeout: float = 30.0, session_factory=requests.Session) -> None:
        self.timeout = timeout
        self._session_factory = session_factory

    def _url(self, credentials: TrackerCredentials, path: str) -> str:
        return credentials.base_url.rstrip('/') + path

    def _login(self, session: requests.Session, credentials: TrackerCredentials) -> None:
        try:
            resp = session.post(
                self._url(credentials, '/rest/auth/1/session'),
                json={'username': credentials.username, 'password': credentials.api_token},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TrackerAuthError(f"Failed to connect to Jira: {e}") from e
        if not resp.ok:
            logger.warning("Jira authentication failed for %s: HTTP %s", credentials.username, resp.status_code)
            raise TrackerAuthError("Jira authentication failed - check username and password")
        logger.info("Jira authentication successful with username: %s", credentials.username)

    def search_issues(self, query: str, credentials: TrackerCredentials) -> List[dict]:
        logger.info("Connecting to Jira at: %s with user: %s", credentials.base_url, credentials.username)
        with self._session_factory() as session:
            self._login(session, credentials)
            try:
                resp = session.get(
                    self._url(credentials, '/rest/api/2/search'),
                    params={'jql': query, 'maxResults': credentials.max_results, 'fields': SEARCH_FIELDS},
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                logger.warning("Jira search failed: %s (JQL: %s)", e, query)
                raise TrackerSearchError("Failed to connect to Jira server") from e
            if not resp.ok:
                logger.warning("Jira search failed: HTTP %s, body: %s (JQL: %s)", resp.status_code, resp.text, query)
                raise TrackerSearchError(f"Jira API error: {resp.status_code}", status_code=resp.status_code)
            try:
                payload = resp.json() or {}
            except ValueError as e:
                logger.warning("Jira returned a non-JSON response: %.200s", resp.text)
                raise TrackerSearchError("Invalid response from Jira") from e

        tickets = [normalize_issue(issue) for issue in payload.get('issues') or []]
        logger.info("Successfully fetched %d tickets from Jira", len(tickets))
        return tickets


def _name(value: Any, attr: str) -> Optional[str]:
    if isinstance(value, dict):
        return value.get(attr)
    return None


def normalize_issue(issue: dict) -> dict:
    """Reduce a Jira issue payload to the fields the calendar UI shows."""
    fields = issue.get('fields') or {}
    ticket = {
        'key': issue.get('key'),
        'summary': fields.get('summary'),
        'status': _name(fields.get('status'), 'name'),
    }
    assignee = _name(fields.get('assignee'), 'displayName')
    if assignee is not None:
        ticket['assignee'] = assignee
    priority = _name(fields.get('priority'), 'name')
    if priority is not None:
        ticket['priority'] = priority
    return ticket
