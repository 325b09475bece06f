import json
from types import SimpleNamespace

import pytest
import requests

from relcal_lib.tickets import TicketService, TrackerConfigError, TrackerCredentials
from relcal_lib.tickets.interfaces import TrackerAuthError, TrackerClientProtocol, TrackerSearchError
from relcal_lib.tickets.jira_client import JiraClient, normalize_issue


class FakeTracker:
    def __init__(self, tickets=None):
        self.tickets = tickets or []
        self.calls = []

    def search_issues(self, query, credentials):
        self.calls.append((query, credentials))
        return self.tickets


CONFIG = {
    "baseUrl": "https://jira.example.com",
    "username": "bot",
    "apiToken": "secret",
    "jql": "project = REL",
    "maxResults": 20,
}


def _write(tmp_path, payload):
    p = tmp_path / "jira-config.json"
    p.write_text(payload if isinstance(payload, str) else json.dumps(payload))
    return p


def test_fake_tracker_satisfies_protocol():
    assert isinstance(FakeTracker(), TrackerClientProtocol)
    assert isinstance(JiraClient(), TrackerClientProtocol)


def test_missing_config_returns_empty_list(tmp_path):
    tracker = FakeTracker([{"key": "REL-1"}])
    svc = TicketService(tmp_path / "jira-config.json", tracker)
    assert svc.list_tickets() == []
    assert tracker.calls == []


@pytest.mark.parametrize("override", [{"username": ""}, {"apiToken": ""}])
def test_unconfigured_credentials_return_empty_list(tmp_path, override):
    tracker = FakeTracker([{"key": "REL-1"}])
    svc = TicketService(_write(tmp_path, {**CONFIG, **override}), tracker)
    assert svc.list_tickets() == []
    assert tracker.calls == []


def test_configured_credentials_search_with_jql(tmp_path):
    tracker = FakeTracker([{"key": "REL-1", "summary": "Release 3.44.0", "status": "Open"}])
    svc = TicketService(_write(tmp_path, CONFIG), tracker)
    assert svc.list_tickets() == tracker.tickets
    query, creds = tracker.calls[0]
    assert query == "project = REL"
    assert creds.base_url == "https://jira.example.com"
    assert creds.max_results == 20


def test_invalid_config_raises(tmp_path):
    svc = TicketService(_write(tmp_path, "{not json"), FakeTracker())
    with pytest.raises(TrackerConfigError):
        svc.list_tickets()


def test_config_without_base_url_raises(tmp_path):
    cfg = dict(CONFIG)
    del cfg["baseUrl"]
    svc = TicketService(_write(tmp_path, cfg), FakeTracker())
    with pytest.raises(TrackerConfigError):
        svc.list_tickets()


def test_normalize_issue_optional_fields():
    full = normalize_issue({
        "key": "REL-2",
        "fields": {
            "summary": "Release 3.44.0 / 1.125.0",
            "status": {"name": "In Progress"},
            "assignee": {"displayName": "Dana"},
            "priority": {"name": "High"},
        },
    })
    assert full == {
        "key": "REL-2",
        "summary": "Release 3.44.0 / 1.125.0",
        "status": "In Progress",
        "assignee": "Dana",
        "priority": "High",
    }
    bare = normalize_issue({"key": "REL-3", "fields": {"summary": "x", "status": {"name": "Open"}, "assignee": None}})
    assert "assignee" not in bare and "priority" not in bare


class FakeSession:
    def __init__(self, login_status=200, search_status=200, issues=None, raise_on_get=False, html_body=False):
        self.html_body = html_body
        self.login_status = login_status
        self.search_status = search_status
        self.issues = issues or []
        self.raise_on_get = raise_on_get
        self.posts = []
        self.gets = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def post(self, url, json=None, timeout=None):
        self.posts.append((url, json))
        return SimpleNamespace(ok=self.login_status < 400, status_code=self.login_status)

    def get(self, url, params=None, timeout=None):
        if self.raise_on_get:
            raise requests.ConnectionError("unreachable")
        self.gets.append((url, params))
        body = {"issues": self.issues}

        def decode():
            if self.html_body:
                raise ValueError("Expecting value: line 1 column 1 (char 0)")
            return body

        return SimpleNamespace(
            ok=self.search_status < 400,
            status_code=self.search_status,
            text="<html>Log in</html>" if self.html_body else "error",
            json=decode,
        )


def _creds():
    return TrackerCredentials.model_validate(CONFIG)


def test_jira_client_login_and_search():
    session = FakeSession(issues=[{"key": "REL-9", "fields": {"summary": "s", "status": {"name": "Done"}}}])
    client = JiraClient(session_factory=lambda: session)
    tickets = client.search_issues("project = REL", _creds())
    assert tickets == [{"key": "REL-9", "summary": "s", "status": "Done"}]
    assert session.posts[0] == (
        "https://jira.example.com/rest/auth/1/session",
        {"username": "bot", "password": "secret"},
    )
    url, params = session.gets[0]
    assert url == "https://jira.example.com/rest/api/2/search"
    assert params["jql"] == "project = REL"
    assert params["maxResults"] == 20


def test_jira_client_auth_failure():
    client = JiraClient(session_factory=lambda: FakeSession(login_status=401))
    with pytest.raises(TrackerAuthError):
        client.search_issues("project = REL", _creds())


def test_jira_client_search_failure_carries_status():
    client = JiraClient(session_factory=lambda: FakeSession(search_status=403))
    with pytest.raises(TrackerSearchError) as exc:
        client.search_issues("project = REL", _creds())
    assert exc.value.status_code == 403


def test_jira_client_connection_failure():
    client = JiraClient(session_factory=lambda: FakeSession(raise_on_get=True))
    with pytest.raises(TrackerSearchError) as exc:
        client.search_issues("project = REL", _creds())
    assert exc.value.status_code is None


def test_jira_client_non_json_response():
    client = JiraClient(session_factory=lambda: FakeSession(html_body=True))
    with pytest.raises(TrackerSearchError) as exc:
        client.search_issues("project = REL", _creds())
    assert str(exc.value) == "Invalid response from Jira"
    assert exc.value.status_code is None
