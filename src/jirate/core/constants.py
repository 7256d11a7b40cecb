"""
Constants - Jira field names, REST paths, and expected status codes.
"""

from __future__ import annotations


class JiraField:
    """Field and key names used in Jira REST payloads."""

    ID = "id"
    KEY = "key"
    NAME = "name"
    SELF = "self"
    FIELDS = "fields"
    RENDERED_FIELDS = "renderedFields"
    EXPAND = "expand"

    SUMMARY = "summary"
    STATUS = "status"
    CREATOR = "creator"
    ASSIGNEE = "assignee"
    CREATED = "created"
    UPDATED = "updated"
    DESCRIPTION = "description"
    COMMENT = "comment"
    COMMENTS = "comments"

    BODY = "body"
    RENDERED_BODY = "renderedBody"
    AUTHOR = "author"

    ACCOUNT_ID = "accountId"
    EMAIL_ADDRESS = "emailAddress"
    DISPLAY_NAME = "displayName"

    ISSUES = "issues"
    VALUES = "values"
    STATE = "state"
    LOCATION = "location"
    PROJECT_KEY = "projectKey"
    ORIGIN_BOARD_ID = "originBoardId"

    TRANSITIONS = "transitions"
    TO = "to"


class Expand:
    """Values for the ``expand`` query parameter."""

    RENDERED_FIELDS = "renderedFields"
    RENDERED_BODY = "renderedBody"


class SprintState:
    ACTIVE = "active"


class ExpectedStatus:
    """Exact status codes a write must return to count as a success."""

    CREATE_COMMENT = 201
    UPDATE_COMMENT = 200
    DELETE_COMMENT = 204
    TRANSITION_ISSUE = 204


UNASSIGNED = "Unassigned"
DEFAULT_MY_ISSUES_STATUS = "In Progress"
CONFIG_DIR = "~/.config/jirate"
CONFIG_TXT = "config.txt"
