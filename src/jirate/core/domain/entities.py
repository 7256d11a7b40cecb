"""
Domain Entities - Read models for issues, comments and the agile hierarchy.

Entities are rebuilt from REST responses on every call and are never
constructed by hand for writes. They are immutable so a normalized entity
cannot drift from the response it came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..constants import UNASSIGNED
from ..exceptions import MissingRenderedBody


@dataclass(frozen=True)
class Identity:
    """A Jira user as it appears on issues and comments."""

    account_id: str
    email_address: str | None = None
    display_name: str | None = None
    self_link: str | None = None

    @property
    def label(self) -> str:
        """Best human-readable label for this user."""
        return self.email_address or self.display_name or self.account_id


class BodyKind(Enum):
    """Representation a comment body arrived in."""

    RENDERED = "rendered"  # server-rendered HTML
    RAW = "raw"  # structured document or plain text


@dataclass(frozen=True)
class CommentBody:
    """
    Tagged comment body.

    The tag records which representation the content is in. Only RENDERED
    bodies may be fed to HTML consumers.
    """

    kind: BodyKind
    content: str | dict | None

    @classmethod
    def rendered(cls, html: str) -> CommentBody:
        return cls(BodyKind.RENDERED, html)

    @classmethod
    def raw(cls, content: str | dict | None) -> CommentBody:
        return cls(BodyKind.RAW, content)

    @property
    def is_rendered(self) -> bool:
        return self.kind is BodyKind.RENDERED


@dataclass(frozen=True)
class Comment:
    """A comment on an issue, addressed independently of its parent."""

    id: str
    issue_id: str
    body: CommentBody
    author: Identity | None = None
    created: str = ""
    updated: str = ""

    @property
    def rendered_html(self) -> str:
        """
        HTML form of the body.

        Raises:
            MissingRenderedBody: If the body is in raw form.
        """
        if not self.body.is_rendered:
            raise MissingRenderedBody(
                f"Comment {self.id} on {self.issue_id} has no rendered body",
                issue_key=self.issue_id,
                comment_id=self.id,
            )
        return self.body.content or ""

    @property
    def author_label(self) -> str:
        return self.author.label if self.author else "Unknown"


@dataclass(frozen=True)
class Description:
    """Issue description in both of the forms Jira can return."""

    rendered: str | None = None
    raw: str | dict | None = None

    @property
    def is_empty(self) -> bool:
        return not self.rendered and not self.raw


@dataclass(frozen=True)
class Issue:
    """A Jira issue."""

    id: str
    key: str
    summary: str = ""
    status: str = ""
    creator: Identity | None = None
    assignee: Identity | None = None
    created: str = ""
    updated: str = ""
    description: Description = field(default_factory=Description)
    comments: tuple[Comment, ...] = ()

    @property
    def assignee_label(self) -> str:
        """Assignee for display; ``Unassigned`` when there is none."""
        return self.assignee.label if self.assignee else UNASSIGNED

    @property
    def creator_label(self) -> str:
        return self.creator.label if self.creator else "Unknown"

    @property
    def project_key(self) -> str:
        return self.key.rsplit("-", 1)[0] if "-" in self.key else ""


@dataclass(frozen=True)
class Project:
    id: str
    key: str
    name: str | None = None


@dataclass(frozen=True)
class Board:
    """A board; parent of sprints."""

    id: int
    project_key: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class Sprint:
    id: int
    state: str
    name: str | None = None
    board_id: int | None = None


@dataclass(frozen=True)
class Transition:
    """A workflow transition available on an issue."""

    id: str
    name: str
    to_status: str = ""
