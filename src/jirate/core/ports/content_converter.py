"""
Content Converter Port - Abstract interface for comment body conversion.

Implementations:
- ContentConverter: markdown -> Atlassian Document Format, HTML -> markdown
"""

from abc import ABC, abstractmethod


class ContentConverterPort(ABC):
    """Converts between locally authored markdown and Jira's formats."""

    @abstractmethod
    def render_to_document(self, markdown: bytes) -> bytes:
        """
        Convert markdown into the tracker's structured document format.

        Args:
            markdown: UTF-8 markdown source

        Returns:
            JSON-encoded document, ready to be sent as a comment body
        """
        ...

    @abstractmethod
    def convert_to_markdown(self, html: str) -> str:
        """
        Convert a server-rendered HTML body into markdown.

        Args:
            html: Rendered HTML (``renderedFields`` / ``renderedBody``)

        Returns:
            Markdown text
        """
        ...
