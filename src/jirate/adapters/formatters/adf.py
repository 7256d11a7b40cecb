"""
ADF Formatter - Converts markdown to Atlassian Document Format.

ADF is the JSON rich-text format Jira Cloud expects for comment bodies.
Supported markdown: ATX headings, paragraphs, bullet and ordered lists,
fenced code blocks, block quotes, horizontal rules, and the inline marks
bold, italic, strikethrough, inline code and links. Backslash escapes
(``\\*``, ``\\_``) produce the literal character.
"""

from __future__ import annotations

import re
from typing import Any


# Emphasis delimiters must not touch a word character, so snake_case
# identifiers and arithmetic like ``2 * 3 * 4`` stay plain text.
INLINE_PATTERN = re.compile(
    r"(?P<code>`[^`]+`)"
    r"|(?P<escape>\\[\\`*_{}\[\]()#+\-.!|~<>])"
    r"|(?P<link>\[(?:\\.|[^\]\\])+\]\([^)\s]+\))"
    r"|(?P<strong>\*\*(?=\S)(?:\\.|[^\\])+?(?<=\S)\*\*"
    r"|(?<!\w)__(?=\S)(?:\\.|[^\\])+?(?<=\S)__(?!\w))"
    r"|(?P<strike>~~(?=\S)(?:\\.|[^\\~])+?(?<=\S)~~)"
    r"|(?P<em>(?<![\w*])\*(?=[^\s*])(?:\\.|[^\\*])+?(?<=\S)\*(?![\w*])"
    r"|(?<!\w)_(?=[^\s_])(?:\\.|[^\\_])+?(?<=\S)_(?!\w))"
)
ESCAPE_PATTERN = re.compile(r"\\([\\`*_{}\[\]()#+\-.!|~<>])")
LINK_PATTERN = re.compile(r"\[(?P<text>(?:\\.|[^\]\\])+)\]\((?P<href>[^)\s]+)\)")
HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
BULLET_PATTERN = re.compile(r"^\s*[-*+]\s+(.*)$")
ORDERED_PATTERN = re.compile(r"^\s*\d+[.)]\s+(.*)$")
RULE_PATTERN = re.compile(r"^\s*([-*_])(\s*\1){2,}\s*$")
FENCE_PATTERN = re.compile(r"^\s*```\s*([\w+-]*)\s*$")


class ADFFormatter:
    """
    Markdown to ADF converter.

    Example:
        >>> ADFFormatter().format_text("Hello **world**")["content"][0]["type"]
        'paragraph'
    """

    VERSION = 1

    def format_text(self, markdown: str) -> dict[str, Any]:
        """
        Convert markdown text into an ADF document.

        Args:
            markdown: Markdown source

        Returns:
            ADF ``doc`` node
        """
        return {
            "type": "doc",
            "version": self.VERSION,
            "content": self._blocks(markdown.replace("\r\n", "\n").split("\n")),
        }

    def format_plain(self, text: str) -> dict[str, Any]:
        """Wrap plain text in a single-paragraph document, without markdown parsing."""
        paragraph: dict[str, Any] = {"type": "paragraph", "content": []}
        if text:
            paragraph["content"].append({"type": "text", "text": text})
        return {"type": "doc", "version": self.VERSION, "content": [paragraph]}

    # -------------------------------------------------------------------------
    # Block level
    # -------------------------------------------------------------------------

    def _blocks(self, lines: list[str]) -> list[dict[str, Any]]:
        blocks: list[dict[str, Any]] = []
        paragraph: list[str] = []
        i = 0

        def flush() -> None:
            if paragraph:
                blocks.append(self._paragraph(" ".join(s.strip() for s in paragraph)))
                paragraph.clear()

        while i < len(lines):
            line = lines[i]

            fence = FENCE_PATTERN.match(line)
            if fence:
                flush()
                code: list[str] = []
                i += 1
                while i < len(lines) and not FENCE_PATTERN.match(lines[i]):
                    code.append(lines[i])
                    i += 1
                blocks.append(self._code_block("\n".join(code), fence.group(1)))
                i += 1
                continue

            if not line.strip():
                flush()
                i += 1
                continue

            heading = HEADING_PATTERN.match(line)
            if heading:
                flush()
                blocks.append({
                    "type": "heading",
                    "attrs": {"level": len(heading.group(1))},
                    "content": self._inline(heading.group(2)),
                })
                i += 1
                continue

            if RULE_PATTERN.match(line):
                flush()
                blocks.append({"type": "rule"})
                i += 1
                continue

            if line.lstrip().startswith(">"):
                flush()
                quoted = []
                while i < len(lines) and lines[i].lstrip().startswith(">"):
                    quoted.append(lines[i].lstrip()[1:].removeprefix(" "))
                    i += 1
                blocks.append({"type": "blockquote", "content": self._blocks(quoted)})
                continue

            for pattern, node_type in ((BULLET_PATTERN, "bulletList"), (ORDERED_PATTERN, "orderedList")):
                if pattern.match(line):
                    flush()
                    items = []
                    while i < len(lines) and pattern.match(lines[i]):
                        items.append(pattern.match(lines[i]).group(1))
                        i += 1
                    blocks.append({
                        "type": node_type,
                        "content": [
                            {"type": "listItem", "content": [self._paragraph(item)]}
                            for item in items
                        ],
                    })
                    break
            else:
                paragraph.append(line)
                i += 1

        flush()
        return blocks

    def _paragraph(self, text: str) -> dict[str, Any]:
        return {"type": "paragraph", "content": self._inline(text)}

    def _code_block(self, code: str, language: str = "") -> dict[str, Any]:
        node: dict[str, Any] = {"type": "codeBlock", "content": []}
        if language:
            node["attrs"] = {"language": language}
        if code:
            node["content"].append({"type": "text", "text": code})
        return node

    # -------------------------------------------------------------------------
    # Inline level
    # -------------------------------------------------------------------------

    def _inline(self, text: str) -> list[dict[str, Any]]:
        nodes: list[dict[str, Any]] = []
        pos = 0
        for match in INLINE_PATTERN.finditer(text):
            if match.start() > pos:
                _append(nodes, _text(text[pos:match.start()]))
            token = match.group(0)
            kind = match.lastgroup
            if kind == "code":
                _append(nodes, _text(token[1:-1], [{"type": "code"}]))
            elif kind == "escape":
                _append(nodes, _text(token[1]))
            elif kind == "link":
                link = LINK_PATTERN.match(token)
                _append(nodes, _text(
                    _unescape(link.group("text")),
                    [{"type": "link", "attrs": {"href": link.group("href")}}],
                ))
            elif kind == "strong":
                _append(nodes, _text(_unescape(token[2:-2]), [{"type": "strong"}]))
            elif kind == "strike":
                _append(nodes, _text(_unescape(token[2:-2]), [{"type": "strike"}]))
            else:
                _append(nodes, _text(_unescape(token[1:-1]), [{"type": "em"}]))
            pos = match.end()
        if pos < len(text):
            _append(nodes, _text(text[pos:]))
        return nodes


def _unescape(value: str) -> str:
    return ESCAPE_PATTERN.sub(r"\1", value)


def _append(nodes: list[dict[str, Any]], node: dict[str, Any]) -> None:
    """Append a text node, merging it into a preceding unmarked one."""
    if nodes and "marks" not in node and "marks" not in nodes[-1]:
        nodes[-1]["text"] += node["text"]
    else:
        nodes.append(node)


def _text(value: str, marks: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    node: dict[str, Any] = {"type": "text", "text": value}
    if marks:
        node["marks"] = marks
    return node
