"""
Jira Adapter - HTTP transport and response normalization for Atlassian Jira.

- JiraApiClient: synchronous HTTP client (platform + agile APIs)
- EntityNormalizer: raw JSON payloads -> domain entities
"""

from .client import ApiResponse, JiraApiClient
from .normalizer import CommentSource, EntityKind, EntityNormalizer

__all__ = [
    "ApiResponse",
    "CommentSource",
    "EntityKind",
    "EntityNormalizer",
    "JiraApiClient",
]
