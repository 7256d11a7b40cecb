"""
Output - Console rendering of issues and comments.

Provides pretty-printed output with colors and formatting.
"""

from __future__ import annotations

import sys

from ..adapters.formatters.converter import ContentConverter
from ..core.domain.entities import Comment, Issue
from ..core.ports.content_converter import ContentConverterPort


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"


class Symbols:
    """Unicode symbols for terminal output."""

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"

    BOX_H = "─"


class Console:
    """
    Console output helper with colors and formatting.

    Attributes:
        color: Whether to use ANSI color codes.
        verbose: Whether to print debug messages.
        quiet: Whether to suppress everything but errors and entity output.
        converter: Turns rendered HTML bodies into markdown for display.
    """

    def __init__(
        self,
        color: bool = True,
        verbose: bool = False,
        quiet: bool = False,
        converter: ContentConverterPort | None = None,
    ):
        """
        Initialize the console output helper.

        Args:
            color: Enable colored output. Automatically disabled if stdout is not a TTY.
            verbose: Enable verbose debug output.
            quiet: Suppress status messages.
            converter: HTML to markdown converter (defaults to ContentConverter)
        """
        self.color = color and sys.stdout.isatty()
        self.verbose = verbose and not quiet
        self.quiet = quiet
        self.converter = converter or ContentConverter()

    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text, or return it unchanged when color is off."""
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "", force: bool = False) -> None:
        """
        Print text to stdout.

        Args:
            text: Text to print. Defaults to empty string for blank line.
            force: Print even in quiet mode.
        """
        if self.quiet and not force:
            return
        print(text)

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def header(self, text: str) -> None:
        """Print a prominent header with borders."""
        if self.quiet:
            return
        width = max(len(text) + 4, 50)
        border = self._c(Symbols.BOX_H * width, Colors.CYAN) if self.color else "-" * width

        self.print()
        self.print(border)
        self.print(self._c(f"  {text}", Colors.BOLD, Colors.CYAN))
        self.print(border)
        self.print()

    def section(self, text: str) -> None:
        if self.quiet:
            return
        self.print()
        self.print(self._c(f"{Symbols.ARROW} {text}", Colors.BOLD, Colors.BLUE))

    def success(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        """
        Print an error message with cross symbol.

        Always prints, even in quiet mode.
        """
        print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED))

    def config_errors(self, errors: list[str]) -> None:
        """Print each configuration problem; always prints."""
        self.error("Configuration errors:")
        for message in errors:
            print(self._c(f"    {Symbols.DOT} {message}", Colors.RED))

    def warning(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))

    def info(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))

    def detail(self, text: str) -> None:
        if self.quiet:
            return
        self.print(self._c(f"    {text}", Colors.DIM))

    def debug(self, text: str) -> None:
        """Print debug message (only visible in verbose mode)."""
        if self.verbose:
            self.print(self._c(f"  [DEBUG] {text}", Colors.DIM))

    def item(self, text: str, status: str | None = None) -> None:
        """Print a list item with an optional dimmed status label."""
        if self.quiet:
            return
        status_str = self._c(f" [{status}]", Colors.DIM) if status else ""
        self.print(f"    {Symbols.DOT} {text}{status_str}")

    def confirm(self, message: str) -> bool:
        """
        Ask the user for confirmation.

        Returns:
            True if user confirmed (y/yes), False otherwise or on interrupt.
        """
        prompt = self._c(f"\n{Symbols.WARN} {message} (y/N): ", Colors.YELLOW)
        try:
            response = input(prompt).strip().lower()
            return response in ("y", "yes")
        except (EOFError, KeyboardInterrupt):
            self.print()
            return False

    # -------------------------------------------------------------------------
    # Entities
    # -------------------------------------------------------------------------

    def issue_line(self, issue: Issue) -> None:
        """One-line issue summary: key, status, assignee and summary."""
        key = self._c(f"{issue.key:<12}", Colors.BOLD, Colors.CYAN)
        status = self._c(f"[{issue.status or '?'}]", Colors.YELLOW)
        assignee = self._c(issue.assignee_label, Colors.DIM)
        self.print(f"{key} {status} {issue.summary} ({assignee})", force=True)

    def issue(self, issue: Issue, with_comments: bool = True) -> None:
        """Full issue view with description and, optionally, comments."""
        self.print(self._c(f"{issue.key}: {issue.summary}", Colors.BOLD, Colors.CYAN), force=True)
        self.print(f"  Status:   {issue.status or '?'}", force=True)
        self.print(f"  Assignee: {issue.assignee_label}", force=True)
        if issue.creator is not None:
            self.print(f"  Creator:  {issue.creator_label}", force=True)
        if issue.created:
            self.print(f"  Created:  {issue.created}", force=True)
        if issue.updated:
            self.print(f"  Updated:  {issue.updated}", force=True)

        self.print(force=True)
        if issue.description.rendered:
            self.print(self.converter.convert_to_markdown(issue.description.rendered), force=True)
        elif isinstance(issue.description.raw, str) and issue.description.raw:
            self.print(issue.description.raw, force=True)
        else:
            self.print(self._c("(no description)", Colors.DIM), force=True)

        if with_comments and issue.comments:
            self.print(force=True)
            self.print(self._c(f"Comments ({len(issue.comments)})", Colors.BOLD, Colors.BLUE), force=True)
            for comment in issue.comments:
                self.comment(comment)

    def comment(self, comment: Comment) -> None:
        """A comment: id, author and timestamp line, then the body as markdown."""
        heading = f"#{comment.id} {comment.author_label}"
        if comment.created:
            heading += f" at {comment.created}"
        self.print(force=True)
        self.print(self._c(heading, Colors.BOLD, Colors.MAGENTA), force=True)
        self.print(self.comment_markdown(comment), force=True)

    def comment_markdown(self, comment: Comment) -> str:
        """Markdown form of a comment body; raw bodies are shown as text."""
        if comment.body.is_rendered:
            return self.converter.convert_to_markdown(comment.rendered_html)
        content = comment.body.content
        if isinstance(content, str):
            return content
        return self._c("(body not rendered)", Colors.DIM)
