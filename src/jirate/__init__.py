"""
jirate - Jira issues and comments from the command line.

Fetches issues directly or through a project's active sprint, and reads,
writes and deletes rich-text comments.

Architecture:
- core/: Domain entities, value objects, ports and exceptions
- adapters/: Jira HTTP client, normalizer, formatters, editor, config
- application/: Query engine, sprint resolver, comment gateway, transitions
- cli/: Command line interface
"""

__version__ = "0.3.0"

from .adapters import ContentConverter, EntityNormalizer, JiraApiClient
from .application import CommentGateway, QueryEngine, SprintResolver, TransitionService
from .core.domain import Comment, Issue, IssueSearchOptions
from .core.exceptions import JirateError

__all__ = [
    "Comment",
    "CommentGateway",
    "ContentConverter",
    "EntityNormalizer",
    "Issue",
    "IssueSearchOptions",
    "JiraApiClient",
    "JirateError",
    "QueryEngine",
    "SprintResolver",
    "TransitionService",
    "__version__",
]
