from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class TrackerCredentials(BaseModel):
    """Connection settings read from the tracker side-configuration document.

    Field aliases match the camelCase keys of `jira-config.json`.
    """
    model_config = ConfigDict(populate_by_name=True)

    base_url: str = Field(default='', alias='baseUrl')
    username: str = ''
    api_token: str = Field(default='', alias='apiToken')
    jql: str = ''
    max_results: int = Field(default=50, alias='maxResults')

    def is_configured(self) -> bool:
        return bool(self.username and self.api_token)


class TrackerError(Exception):
    """Base class for failures talking to the issue tracker."""


class TrackerConfigError(TrackerError):
    """The side-configuration document is unreadable or incomplete."""


class TrackerAuthError(TrackerError):
    """The tracker rejected the configured credentials."""


class TrackerSearchError(TrackerError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class TrackerClientProtocol(Protocol):
    """Read-only issue search against an external tracker.

    Implementations return normalized ticket dicts with at least `key`,
    `summary` and `status`; `assignee` and `priority` are included when the
    tracker provides them.
    """

    def search_issues(self, query: str, credentials: TrackerCredentials) -> List[dict]:
        ...
