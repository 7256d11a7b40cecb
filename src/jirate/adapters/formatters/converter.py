"""
Content Converter - Implements ContentConverterPort.

Bridges locally authored markdown and Jira's two comment representations:
ADF documents for writes and rendered HTML for reads.
"""

import json

from ...core.ports.content_converter import ContentConverterPort
from .adf import ADFFormatter
from .html_markdown import HtmlToMarkdown


class ContentConverter(ContentConverterPort):
    """Markdown <-> Jira content conversion."""

    def __init__(
        self,
        formatter: ADFFormatter | None = None,
        html_converter: HtmlToMarkdown | None = None,
    ):
        self.formatter = formatter or ADFFormatter()
        self.html_converter = html_converter or HtmlToMarkdown()

    def render_to_document(self, markdown: bytes) -> bytes:
        document = self.formatter.format_text(markdown.decode("utf-8"))
        return json.dumps(document).encode("utf-8")

    def convert_to_markdown(self, html: str) -> str:
        return self.html_converter.convert(html)
