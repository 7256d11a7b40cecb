"""
HTML to Markdown - Converts Jira's rendered HTML back into markdown.

Jira returns rich-text fields as server-rendered HTML when asked for
``renderedFields`` / ``renderedBody``. The conversion itself is done by
markdownify; this module fixes the output dialect (ATX headings, ``-``
bullets, fenced code) and tidies the whitespace Jira's templates leave
behind.
"""

from __future__ import annotations

import re
from typing import Any

from markdownify import ATX, MarkdownConverter


# Jira renders {code:java} macros as <pre class="code-java">
CODE_CLASS_PREFIX = "code-"

BLANK_RUN = re.compile(r"\n{3,}")


def code_language(el: Any) -> str:
    """Language hint for a ``<pre>`` element, taken from its ``code-*`` class."""
    for css_class in el.get("class") or []:
        if css_class.startswith(CODE_CLASS_PREFIX) and css_class != "code-none":
            return css_class[len(CODE_CLASS_PREFIX) :]
    return ""


DEFAULT_OPTIONS: dict[str, Any] = {
    "heading_style": ATX,
    "bullets": "-",
    "autolinks": False,
    "escape_asterisks": True,
    "escape_underscores": True,
    "escape_misc": False,
    "code_language_callback": code_language,
}


class HtmlToMarkdown:
    """
    Converts a fragment of rendered HTML into markdown.

    Literal ``*`` and ``_`` in the text are backslash-escaped so that the
    markdown can be parsed back into the same document.

    Example:
        >>> HtmlToMarkdown().convert("<p>Hello <b>world</b></p>")
        'Hello **world**'
    """

    def __init__(self, **options: Any) -> None:
        self.options = {**DEFAULT_OPTIONS, **options}
        self._converter = MarkdownConverter(**self.options)

    def convert(self, html: str) -> str:
        if not html or not html.strip():
            return ""
        return self._tidy(self._converter.convert(html))

    def _tidy(self, markdown: str) -> str:
        # Hard breaks come back as two trailing spaces; drop them with the rest
        lines = [line.rstrip() for line in markdown.splitlines()]
        return BLANK_RUN.sub("\n\n", "\n".join(lines)).strip()
