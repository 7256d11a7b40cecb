"""
Adapters - Concrete implementations of the core ports and the Jira transport.

- jira/: HTTP client and entity normalizer
- formatters/: markdown, ADF and rendered-HTML conversion
- editor/: external editor for comment bodies
- config/: configuration loading
"""

from .config import EnvironmentConfigProvider
from .editor import ExternalEditor
from .formatters import ADFFormatter, ContentConverter, HtmlToMarkdown
from .jira import ApiResponse, CommentSource, EntityKind, EntityNormalizer, JiraApiClient

__all__ = [
    "ADFFormatter",
    "ApiResponse",
    "CommentSource",
    "ContentConverter",
    "EntityKind",
    "EntityNormalizer",
    "EnvironmentConfigProvider",
    "ExternalEditor",
    "HtmlToMarkdown",
    "JiraApiClient",
]
