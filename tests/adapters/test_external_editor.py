"""
Tests for ExternalEditor.

The editor process is replaced by a runner that edits the file in place.
"""

from pathlib import Path

from jirate.adapters.editor import ExternalEditor


def fake_editor(write: str | None = None, status: int = 0, seen: list | None = None):
    """Runner that optionally rewrites the temp file and returns ``status``."""

    def run(argv):
        path = Path(argv[-1])
        if seen is not None:
            seen.append((argv, path.read_text(encoding="utf-8")))
        if write is not None:
            path.write_text(write, encoding="utf-8")
        return status

    return run


class TestExternalEditor:
    """Tests for the editor adapter."""

    def test_command_from_environment(self):
        assert ExternalEditor(env={"VISUAL": "code -w", "EDITOR": "nano"}).command == "code -w"
        assert ExternalEditor(env={"EDITOR": "nano"}).command == "nano"
        assert ExternalEditor(env={}).command == "vi"

    def test_returns_written_text(self):
        seen = []
        editor = ExternalEditor(command="code -w", env={}, runner=fake_editor("# Heading\n\nBody\n", seen=seen))

        assert editor.edit() == "# Heading\n\nBody"
        argv, _ = seen[0]
        assert argv[:2] == ["code", "-w"]
        assert argv[-1].endswith(".md")

    def test_initial_text_is_prefilled(self):
        seen = []
        editor = ExternalEditor(command="vi", env={}, runner=fake_editor(seen=seen))

        assert editor.edit("Existing **comment**") == "Existing **comment**"
        assert seen[0][1].startswith("Existing **comment**\n")

    def test_instruction_lines_are_removed(self):
        editor = ExternalEditor(command="vi", env={}, runner=fake_editor(seen=[]))
        assert editor.edit() is None

    def test_nonzero_exit_cancels(self):
        editor = ExternalEditor(command="vi", env={}, runner=fake_editor("text", status=1))
        assert editor.edit() is None

    def test_empty_text_cancels(self):
        editor = ExternalEditor(command="vi", env={}, runner=fake_editor("   \n\n"))
        assert editor.edit() is None

    def test_temp_file_is_removed(self):
        seen = []
        editor = ExternalEditor(command="vi", env={}, runner=fake_editor("x", seen=seen))
        editor.edit()

        assert not Path(seen[0][0][-1]).exists()
