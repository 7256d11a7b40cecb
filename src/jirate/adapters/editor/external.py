"""
External Editor - Implements EditorPort with the user's terminal editor.

Writes the initial text to a temporary file, launches ``$VISUAL`` or
``$EDITOR`` (falling back to ``vi``) on it, and reads the result back once
the editor exits.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile
from collections.abc import Callable, Mapping
from pathlib import Path

from ...core.ports.editor import EditorPort


DEFAULT_EDITOR = "vi"
INSTRUCTIONS = (
    "# Write your comment above. These two lines are removed.\n"
    "# Save and quit to submit; leave it empty or exit with an error to cancel.\n"
)


class ExternalEditor(EditorPort):
    """
    Blocking editor session on a temporary markdown file.

    Returns None when the editor exits non-zero or the saved text is empty
    once instruction lines are stripped.
    """

    def __init__(
        self,
        command: str | None = None,
        env: Mapping[str, str] | None = None,
        runner: Callable[[list[str]], int] = subprocess.call,
        suffix: str = ".md",
    ):
        """
        Args:
            command: Editor command; defaults to $VISUAL, $EDITOR, then vi
            env: Environment to read the editor from (defaults to os.environ)
            runner: Runs the command and returns its exit status
            suffix: Temporary file suffix, for editor syntax highlighting
        """
        env = os.environ if env is None else env
        self.command = command or env.get("VISUAL") or env.get("EDITOR") or DEFAULT_EDITOR
        self.runner = runner
        self.suffix = suffix
        self.logger = logging.getLogger("ExternalEditor")

    def edit(self, initial: str = "") -> str | None:
        with tempfile.NamedTemporaryFile(
            mode="w",
            delete=False,
            suffix=self.suffix,
            encoding="utf-8",
        ) as handle:
            if initial:
                handle.write(initial.rstrip("\n") + "\n\n")
            else:
                handle.write("\n")
            handle.write(INSTRUCTIONS)
            path = Path(handle.name)

        try:
            argv = [*shlex.split(self.command), str(path)]
            self.logger.debug(f"Launching editor: {argv}")
            status = self.runner(argv)
            if status != 0:
                self.logger.info(f"Editor exited with status {status}; cancelled")
                return None

            lines = path.read_text(encoding="utf-8").splitlines(keepends=True)
        finally:
            path.unlink(missing_ok=True)

        instructions = set(INSTRUCTIONS.splitlines())
        text = "".join(line for line in lines if line.rstrip("\n") not in instructions).strip()
        if not text:
            self.logger.info("Editor returned empty text; cancelled")
            return None
        return text
