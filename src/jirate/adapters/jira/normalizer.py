"""
Entity Normalizer - Converts raw Jira JSON payloads into domain entities.

Jira responses are loosely typed and differ by endpoint: issues fetched with
``expand=renderedFields`` carry HTML twins of their rich-text fields, agile
endpoints wrap lists in ``values``, and a single comment fetched with
``expand=renderedBody`` carries both a raw and a rendered body.

Required fields (keys and ids) missing from a payload raise
MalformedResponse. Optional fields are probed before access and fall back to
the entity's default.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from ...core.constants import JiraField
from ...core.domain.entities import (
    Board,
    Comment,
    CommentBody,
    Description,
    Identity,
    Issue,
    Project,
    Sprint,
    Transition,
)
from ...core.exceptions import MalformedResponse, MissingRenderedBody


class EntityKind(Enum):
    ISSUE = "issue"
    ISSUES = "issues"
    COMMENT = "comment"
    PROJECT = "project"
    BOARDS = "boards"
    SPRINTS = "sprints"
    USER = "user"
    TRANSITIONS = "transitions"


class CommentSource(Enum):
    """Endpoint a comment payload came from."""

    ISSUE_EMBEDDED = "issue-embedded"  # issue/{id}?expand=renderedFields
    SINGLE = "single"  # issue/{id}/comment/{cid}?expand=renderedBody


class EntityNormalizer:
    """
    Builds domain entities from decoded REST bodies.

    Stateless; one instance can be shared by every service.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger("EntityNormalizer")

    def normalize(self, payload: Any, kind: EntityKind, **kwargs: Any) -> Any:
        """
        Dispatch to the normalizer for ``kind``.

        Args:
            payload: Decoded JSON body
            kind: Target entity kind
            **kwargs: Extra arguments for the specific normalizer

        Raises:
            MalformedResponse: If a required field is missing
        """
        handlers = {
            EntityKind.ISSUE: self.issue,
            EntityKind.ISSUES: self.issues,
            EntityKind.COMMENT: self.comment,
            EntityKind.PROJECT: self.project,
            EntityKind.BOARDS: self.boards,
            EntityKind.SPRINTS: self.sprints,
            EntityKind.USER: self.user,
            EntityKind.TRANSITIONS: self.transitions,
        }
        return handlers[kind](payload, **kwargs)

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def user(self, payload: Any) -> Identity:
        data = _require_mapping(payload, "user")
        return Identity(
            account_id=str(_require(data, JiraField.ACCOUNT_ID, "user")),
            email_address=data.get(JiraField.EMAIL_ADDRESS),
            display_name=data.get(JiraField.DISPLAY_NAME),
            self_link=data.get(JiraField.SELF),
        )

    def optional_user(self, payload: Any) -> Identity | None:
        """Identity, or None when the field is absent, null or anonymous."""
        if not isinstance(payload, dict) or JiraField.ACCOUNT_ID not in payload:
            return None
        return self.user(payload)

    # -------------------------------------------------------------------------
    # Issues
    # -------------------------------------------------------------------------

    def issue(self, payload: Any) -> Issue:
        """
        Normalize an issue body.

        Rendered timestamps and description are preferred when the response
        includes ``renderedFields``.
        """
        data = _require_mapping(payload, "issue")
        key = str(_require(data, JiraField.KEY, "issue"))
        fields = _mapping(data.get(JiraField.FIELDS))
        rendered = _mapping(data.get(JiraField.RENDERED_FIELDS))

        status = _mapping(fields.get(JiraField.STATUS)).get(JiraField.NAME, "")

        return Issue(
            id=str(data.get(JiraField.ID) or ""),
            key=key,
            summary=fields.get(JiraField.SUMMARY) or "",
            status=status or "",
            creator=self.optional_user(fields.get(JiraField.CREATOR)),
            assignee=self.optional_user(fields.get(JiraField.ASSIGNEE)),
            created=rendered.get(JiraField.CREATED) or fields.get(JiraField.CREATED) or "",
            updated=rendered.get(JiraField.UPDATED) or fields.get(JiraField.UPDATED) or "",
            description=Description(
                rendered=rendered.get(JiraField.DESCRIPTION),
                raw=fields.get(JiraField.DESCRIPTION),
            ),
            comments=tuple(self.comments_from_issue(data)),
        )

    def issues(self, payload: Any) -> list[Issue]:
        """Normalize a search or sprint-issue envelope (``{"issues": [...]}``)."""
        data = _require_mapping(payload, "issue list")
        raw_issues = _require(data, JiraField.ISSUES, "issue list")
        if not isinstance(raw_issues, list):
            raise MalformedResponse("'issues' is not a list", entity="issue list")
        return [self.issue(item) for item in raw_issues]

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    def comments_from_issue(self, payload: Any) -> list[Comment]:
        """
        Comments embedded in an issue body, in server order.

        Uses the rendered collection when present. Without
        ``renderedFields`` the raw collection is used and bodies are tagged
        RAW.
        """
        data = _require_mapping(payload, "issue")
        issue_id = str(data.get(JiraField.KEY) or data.get(JiraField.ID) or "")

        rendered = _mapping(data.get(JiraField.RENDERED_FIELDS))
        rendered_comments = _mapping(rendered.get(JiraField.COMMENT)).get(JiraField.COMMENTS)
        if isinstance(rendered_comments, list):
            return [
                self.comment(c, issue_id=issue_id, source=CommentSource.ISSUE_EMBEDDED)
                for c in rendered_comments
            ]

        fields = _mapping(data.get(JiraField.FIELDS))
        raw_comments = _mapping(fields.get(JiraField.COMMENT)).get(JiraField.COMMENTS)
        if not isinstance(raw_comments, list):
            return []

        self.logger.debug(f"Issue {issue_id} has no rendered comments; using raw bodies")
        return [
            self._comment(c, issue_id, CommentBody.raw(_mapping(c).get(JiraField.BODY)))
            for c in raw_comments
        ]

    def comment(
        self,
        payload: Any,
        issue_id: str,
        source: CommentSource = CommentSource.ISSUE_EMBEDDED,
    ) -> Comment:
        """
        Normalize a comment body according to the endpoint it came from.

        Args:
            payload: Decoded comment object
            issue_id: Parent issue id or key
            source: Endpoint the payload came from

        Raises:
            MissingRenderedBody: SINGLE source without ``renderedBody``
            MalformedResponse: If the comment has no id
        """
        data = _require_mapping(payload, "comment")

        if source is CommentSource.SINGLE:
            # The raw body is discarded; only the rendered body is kept.
            if JiraField.RENDERED_BODY not in data:
                raise MissingRenderedBody(
                    f"Comment {data.get(JiraField.ID, '?')} on {issue_id} was returned "
                    f"without renderedBody (expand=renderedBody was not honored)",
                    issue_key=issue_id,
                    comment_id=str(data.get(JiraField.ID, "")),
                )
            body = CommentBody.rendered(data.get(JiraField.RENDERED_BODY) or "")
        else:
            body = CommentBody.rendered(data.get(JiraField.BODY) or "")

        return self._comment(data, issue_id, body)

    def _comment(self, payload: Any, issue_id: str, body: CommentBody) -> Comment:
        data = _require_mapping(payload, "comment")
        return Comment(
            id=str(_require(data, JiraField.ID, "comment")),
            issue_id=issue_id,
            body=body,
            author=self.optional_user(data.get(JiraField.AUTHOR)),
            created=data.get(JiraField.CREATED) or "",
            updated=data.get(JiraField.UPDATED) or "",
        )

    # -------------------------------------------------------------------------
    # Agile hierarchy
    # -------------------------------------------------------------------------

    def project(self, payload: Any) -> Project:
        data = _require_mapping(payload, "project")
        return Project(
            id=str(_require(data, JiraField.ID, "project")),
            key=str(_require(data, JiraField.KEY, "project")),
            name=data.get(JiraField.NAME),
        )

    def boards(self, payload: Any) -> list[Board]:
        """Boards from an agile ``{"values": [...]}`` page, in server order."""
        boards = []
        for item in _values(payload, "board list"):
            item = _require_mapping(item, "board")
            location = _mapping(item.get(JiraField.LOCATION))
            boards.append(Board(
                id=_as_int(_require(item, JiraField.ID, "board"), JiraField.ID, "board"),
                project_key=location.get(JiraField.PROJECT_KEY),
                name=item.get(JiraField.NAME),
            ))
        return boards

    def sprints(self, payload: Any) -> list[Sprint]:
        sprints = []
        for item in _values(payload, "sprint list"):
            item = _require_mapping(item, "sprint")
            board_id = item.get(JiraField.ORIGIN_BOARD_ID)
            if board_id is not None:
                board_id = _as_int(board_id, JiraField.ORIGIN_BOARD_ID, "sprint")
            sprints.append(Sprint(
                id=_as_int(_require(item, JiraField.ID, "sprint"), JiraField.ID, "sprint"),
                state=item.get(JiraField.STATE) or "",
                name=item.get(JiraField.NAME),
                board_id=board_id,
            ))
        return sprints

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def transitions(self, payload: Any) -> list[Transition]:
        data = _require_mapping(payload, "transition list")
        items = data.get(JiraField.TRANSITIONS) or []
        return [
            Transition(
                id=str(_require(t, JiraField.ID, "transition")),
                name=_mapping(t).get(JiraField.NAME) or "",
                to_status=_mapping(_mapping(t).get(JiraField.TO)).get(JiraField.NAME) or "",
            )
            for t in items
        ]


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _mapping(value: Any) -> dict[str, Any]:
    """The value if it is a dict, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def _require_mapping(payload: Any, entity: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise MalformedResponse(
            f"Expected a JSON object for {entity}, got {type(payload).__name__}",
            entity=entity,
        )
    return payload


def _require(data: Any, key: str, entity: str) -> Any:
    data = _require_mapping(data, entity)
    value = data.get(key)
    if value is None or value == "":
        raise MalformedResponse(f"{entity} is missing required field '{key}'", entity=entity)
    return value


def _as_int(value: Any, key: str, entity: str) -> int:
    if isinstance(value, bool):
        raise MalformedResponse(f"{entity} field '{key}' is not an integer: {value!r}", entity=entity)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise MalformedResponse(
            f"{entity} field '{key}' is not an integer: {value!r}",
            entity=entity,
            cause=e,
        ) from e


def _values(payload: Any, entity: str) -> list[dict[str, Any]]:
    data = _require_mapping(payload, entity)
    if JiraField.VALUES not in data:
        raise MalformedResponse(f"{entity} is missing required field 'values'", entity=entity)
    values = data[JiraField.VALUES]
    if not isinstance(values, list):
        raise MalformedResponse(f"'values' of {entity} is not a list", entity=entity)
    return values
