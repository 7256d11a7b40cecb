"""
Centralized exception hierarchy for jirate.

Hierarchy:

    JirateError
    ├── TransportError
    ├── TrackerError
    │   ├── AuthenticationError
    │   ├── AccessDeniedError
    │   └── NotFound
    ├── InvalidQuery
    ├── MalformedResponse
    │   ├── MissingRenderedBody
    │   └── InvalidDocument
    ├── ResolutionError
    │   ├── ProjectNotFound
    │   ├── NoBoardsFound
    │   ├── NoActiveSprint
    │   └── SprintIssuesUnavailable
    ├── RejectedByServer
    └── ConfigError

Every error carries enough context (issue key, stage, status code) to be
shown to the user verbatim.
"""

from __future__ import annotations


class JirateError(Exception):
    """Base exception for all jirate errors."""

    def __init__(
        self,
        message: str,
        issue_key: str | None = None,
        cause: Exception | None = None,
    ):
        self.message = message
        self.issue_key = issue_key
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.cause is not None:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


# =============================================================================
# Transport / HTTP errors
# =============================================================================


class TransportError(JirateError):
    """Network-level failure (connection refused, DNS, TLS, timeout)."""


class TrackerError(JirateError):
    """The tracker answered a read with an unexpected HTTP status."""

    def __init__(
        self,
        message: str,
        issue_key: str | None = None,
        cause: Exception | None = None,
        status_code: int | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, issue_key=issue_key, cause=cause)


class AuthenticationError(TrackerError):
    """Credentials were rejected (HTTP 401)."""


class AccessDeniedError(TrackerError):
    """Authenticated but not allowed (HTTP 403)."""


class NotFound(TrackerError):
    """The requested entity does not exist (HTTP 404)."""


# =============================================================================
# Caller errors
# =============================================================================


class InvalidQuery(JirateError):
    """A caller precondition was violated; no network call was made."""


# =============================================================================
# Response shape errors
# =============================================================================


class MalformedResponse(JirateError):
    """A response body did not have the expected shape."""

    def __init__(
        self,
        message: str,
        issue_key: str | None = None,
        cause: Exception | None = None,
        entity: str | None = None,
    ):
        self.entity = entity
        super().__init__(message, issue_key=issue_key, cause=cause)


class MissingRenderedBody(MalformedResponse):
    """A single-comment response came back without ``renderedBody``.

    The ``expand=renderedBody`` parameter was dropped somewhere upstream.
    """

    def __init__(
        self,
        message: str,
        issue_key: str | None = None,
        comment_id: str | None = None,
    ):
        self.comment_id = comment_id
        super().__init__(message, issue_key=issue_key, entity="comment")


class InvalidDocument(MalformedResponse):
    """A comment document to be written is not a JSON object."""


# =============================================================================
# Sprint resolution errors
# =============================================================================


class ResolutionError(JirateError):
    """A stage of the project -> board -> sprint -> issues chain failed."""

    stage = "resolve"

    def __init__(
        self,
        message: str,
        subject: str | None = None,
        cause: Exception | None = None,
    ):
        self.subject = subject
        super().__init__(f"[{self.stage}] {message}", cause=cause)


class ProjectNotFound(ResolutionError):
    stage = "project"


class NoBoardsFound(ResolutionError):
    stage = "boards"


class NoActiveSprint(ResolutionError):
    stage = "sprint"


class SprintIssuesUnavailable(ResolutionError):
    stage = "sprint-issues"


# =============================================================================
# Write errors
# =============================================================================


class RejectedByServer(JirateError):
    """A write returned anything other than its exact expected status code."""

    def __init__(
        self,
        message: str,
        expected: int,
        actual: int,
        issue_key: str | None = None,
        body: str = "",
    ):
        self.expected = expected
        self.actual = actual
        self.body = body
        super().__init__(
            f"{message}: expected HTTP {expected}, got HTTP {actual}",
            issue_key=issue_key,
        )


# =============================================================================
# Configuration errors
# =============================================================================


class ConfigError(JirateError):
    """Configuration is missing or unreadable."""

    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        cause: Exception | None = None,
    ):
        self.errors = errors or []
        super().__init__(message, cause=cause)


__all__ = [
    "AccessDeniedError",
    "AuthenticationError",
    "ConfigError",
    "InvalidDocument",
    "InvalidQuery",
    "JirateError",
    "MalformedResponse",
    "MissingRenderedBody",
    "NoActiveSprint",
    "NoBoardsFound",
    "NotFound",
    "ProjectNotFound",
    "RejectedByServer",
    "ResolutionError",
    "SprintIssuesUnavailable",
    "TrackerError",
    "TransportError",
]
