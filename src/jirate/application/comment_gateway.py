"""
Comment Gateway - Reads and writes comments on a single issue.

Reads return normalized Comment entities with rendered HTML bodies. Writes
take an already converted document (JSON bytes), wrap it in the
``{"body": ...}`` envelope and succeed only on the exact status code the
endpoint documents.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..adapters.formatters.adf import ADFFormatter
from ..adapters.jira.client import ApiResponse, JiraApiClient
from ..adapters.jira.normalizer import CommentSource, EntityNormalizer
from ..core.constants import ExpectedStatus, Expand, JiraField
from ..core.domain.entities import Comment
from ..core.exceptions import InvalidDocument, InvalidQuery, RejectedByServer


class CommentGateway:
    """
    Comment operations addressed by issue id and comment id.

    Example:
        >>> gateway = CommentGateway(client)
        >>> for comment in gateway.fetch_all("ABC-42"):
        ...     print(comment.author_label)
    """

    def __init__(self, client: JiraApiClient, normalizer: EntityNormalizer | None = None):
        self.client = client
        self.normalizer = normalizer or EntityNormalizer()
        self.logger = logging.getLogger("CommentGateway")

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def fetch_all(self, issue_id: str) -> list[Comment]:
        """
        All comments of an issue, in server order.

        Raises:
            NotFound: If the issue does not exist
        """
        _require_id(issue_id, "Issue id")
        payload = self.client.get(
            f"issue/{issue_id}",
            params={JiraField.EXPAND: Expand.RENDERED_FIELDS},
        )
        comments = self.normalizer.comments_from_issue(payload)
        self.logger.debug(f"Issue {issue_id} has {len(comments)} comments")
        return comments

    def fetch_one(self, issue_id: str, comment_id: str) -> Comment:
        """
        A single comment with its rendered body.

        Raises:
            NotFound: If the issue or comment does not exist
            MissingRenderedBody: If the response has no ``renderedBody``
        """
        _require_id(issue_id, "Issue id")
        _require_id(comment_id, "Comment id")
        payload = self.client.get(
            f"issue/{issue_id}/comment/{comment_id}",
            params={JiraField.EXPAND: Expand.RENDERED_BODY},
        )
        return self.normalizer.comment(payload, issue_id=issue_id, source=CommentSource.SINGLE)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, issue_id: str, document: bytes) -> None:
        """
        Add a comment to an issue.

        Args:
            issue_id: Issue id or key
            document: JSON-encoded rich-text document

        Raises:
            InvalidDocument: If ``document`` is not a JSON object
            RejectedByServer: Unless the tracker answers 201
        """
        _require_id(issue_id, "Issue id")
        body = self._envelope(document)
        response = self.client.post(f"issue/{issue_id}/comment", json=body)
        self._expect(response, ExpectedStatus.CREATE_COMMENT, f"Creating comment on {issue_id}", issue_id)
        self.logger.info(f"Added comment to {issue_id}")

    def create_plain(self, issue_id: str, text: str) -> None:
        """Add a plain text comment, sent as a single paragraph without markup."""
        document = ADFFormatter().format_plain(text)
        self.create(issue_id, json.dumps(document).encode("utf-8"))

    def update(self, issue_id: str, comment_id: str, document: bytes) -> None:
        """
        Replace a comment's body.

        Raises:
            InvalidDocument: If ``document`` is not a JSON object
            RejectedByServer: Unless the tracker answers 200
        """
        _require_id(issue_id, "Issue id")
        _require_id(comment_id, "Comment id")
        body = self._envelope(document)
        response = self.client.put(f"issue/{issue_id}/comment/{comment_id}", json=body)
        self._expect(
            response,
            ExpectedStatus.UPDATE_COMMENT,
            f"Updating comment {comment_id} on {issue_id}",
            issue_id,
        )
        self.logger.info(f"Updated comment {comment_id} on {issue_id}")

    def delete(self, issue_id: str, comment_id: str) -> None:
        """
        Delete a comment.

        Raises:
            RejectedByServer: Unless the tracker answers 204
        """
        _require_id(issue_id, "Issue id")
        _require_id(comment_id, "Comment id")
        response = self.client.delete(f"issue/{issue_id}/comment/{comment_id}")
        self._expect(
            response,
            ExpectedStatus.DELETE_COMMENT,
            f"Deleting comment {comment_id} on {issue_id}",
            issue_id,
        )
        self.logger.info(f"Deleted comment {comment_id} on {issue_id}")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _envelope(self, document: bytes) -> dict[str, Any]:
        try:
            decoded = json.loads(document)
        except (TypeError, ValueError) as e:
            raise InvalidDocument("Comment document is not valid JSON", entity="document", cause=e) from e
        if not isinstance(decoded, dict):
            raise InvalidDocument(
                f"Comment document must be a JSON object, got {type(decoded).__name__}",
                entity="document",
            )
        return {JiraField.BODY: decoded}

    def _expect(self, response: ApiResponse, expected: int, action: str, issue_id: str) -> None:
        if response.status_code != expected:
            self.logger.debug(f"{action}: HTTP {response.status_code} body={response.text!r}")
            raise RejectedByServer(
                action,
                expected=expected,
                actual=response.status_code,
                issue_key=issue_id,
                body=response.text,
            )


def _require_id(value: str, label: str) -> None:
    if not value or not str(value).strip():
        raise InvalidQuery(f"{label} must not be empty")
