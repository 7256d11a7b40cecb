"""
Domain layer - entities and value objects.
"""

from .entities import (
    Board,
    BodyKind,
    Comment,
    CommentBody,
    Description,
    Identity,
    Issue,
    Project,
    Sprint,
    Transition,
)
from .value_objects import IssueSearchOptions, escape_jql

__all__ = [
    "Board",
    "BodyKind",
    "Comment",
    "CommentBody",
    "Description",
    "Identity",
    "Issue",
    "IssueSearchOptions",
    "escape_jql",
    "Project",
    "Sprint",
    "Transition",
]
