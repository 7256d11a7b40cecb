"""
Document Formatters - Convert between markdown, ADF and rendered HTML.
"""

from .adf import ADFFormatter
from .converter import ContentConverter
from .html_markdown import HtmlToMarkdown

__all__ = ["ADFFormatter", "ContentConverter", "HtmlToMarkdown"]
