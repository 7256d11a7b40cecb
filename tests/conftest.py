"""
Shared pytest fixtures for the jirate test suite.

Fixture Categories:
- Payloads: Jira REST response bodies as the server returns them
- Mocks: JiraApiClient doubles with canned responses
- Adapters: Normalizer and converter instances
- Configuration: TrackerConfig / AppConfig
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from jirate.adapters.formatters import ContentConverter
from jirate.adapters.jira import ApiResponse, EntityNormalizer, JiraApiClient
from jirate.core.ports.config_provider import AppConfig, TrackerConfig


# =============================================================================
# Payload builders
# =============================================================================


def user_payload(account_id: str = "acc-1", email: str | None = "dev@example.com", name: str = "Dev") -> dict:
    payload: dict[str, Any] = {
        "accountId": account_id,
        "displayName": name,
        "self": f"https://test.atlassian.net/rest/api/3/user?accountId={account_id}",
    }
    if email is not None:
        payload["emailAddress"] = email
    return payload


def issue_payload(
    key: str = "ABC-42",
    summary: str = "Fix login",
    status: str = "In Progress",
    assignee: dict | None = None,
    rendered_comments: list[dict] | None = None,
    raw_comments: list[dict] | None = None,
    rendered: bool = True,
) -> dict:
    """An issue as returned by ``issue/{id}?expand=renderedFields``."""
    fields: dict[str, Any] = {
        "summary": summary,
        "status": {"name": status},
        "creator": user_payload("acc-creator", "creator@example.com", "Creator"),
        "assignee": assignee,
        "created": "2024-05-01T10:00:00.000+0000",
        "updated": "2024-05-02T11:00:00.000+0000",
        "description": {"type": "doc", "version": 1, "content": []},
    }
    if raw_comments is not None:
        fields["comment"] = {"comments": raw_comments, "total": len(raw_comments)}

    payload: dict[str, Any] = {"id": "10042", "key": key, "fields": fields}
    if rendered:
        payload["renderedFields"] = {
            "created": "01/May/24 10:00 AM",
            "updated": "02/May/24 11:00 AM",
            "description": "<p>Users cannot <b>log in</b></p>",
            "comment": {"comments": rendered_comments or [], "total": len(rendered_comments or [])},
        }
    return payload


def comment_payload(comment_id: str = "100", html: str = "<p>Looks good</p>", **extra: Any) -> dict:
    """A comment as embedded in ``renderedFields.comment.comments``."""
    payload = {
        "id": comment_id,
        "author": user_payload(),
        "body": html,
        "created": "01/May/24 12:00 PM",
        "updated": "01/May/24 12:00 PM",
    }
    payload.update(extra)
    return payload


def response(status_code: int, body: Any = None, text: str = "") -> ApiResponse:
    return ApiResponse(status_code=status_code, body=body, text=text)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def normalizer() -> EntityNormalizer:
    return EntityNormalizer()


@pytest.fixture
def converter() -> ContentConverter:
    return ContentConverter()


@pytest.fixture
def mock_client() -> MagicMock:
    """A JiraApiClient double; configure ``get``/``post``/``put``/``delete`` per test."""
    return MagicMock(spec=JiraApiClient)


@pytest.fixture
def tracker_config() -> TrackerConfig:
    return TrackerConfig(
        url="https://test.atlassian.net",
        email="test@example.com",
        api_token="test_token_123",
        project_key="ABC",
    )


@pytest.fixture
def app_config(tracker_config: TrackerConfig) -> AppConfig:
    return AppConfig(tracker=tracker_config)


@pytest.fixture
def make_user():
    return user_payload


@pytest.fixture
def make_issue():
    return issue_payload


@pytest.fixture
def make_comment():
    return comment_payload


@pytest.fixture
def make_response():
    return response
