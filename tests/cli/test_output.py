"""
Tests for CLI output module.
"""

from unittest.mock import patch

import pytest

from jirate.cli.output import Colors, Console, Symbols


@pytest.fixture
def console(converter):
    return Console(color=False, converter=converter)


class TestColors:
    """Tests for Colors class."""

    def test_color_codes_defined(self):
        assert Colors.RESET == "\033[0m"
        assert Colors.BOLD == "\033[1m"
        assert Colors.RED == "\033[31m"
        assert Colors.CYAN == "\033[36m"

    def test_symbols_defined(self):
        assert Symbols.CHECK == "✓"
        assert Symbols.CROSS == "✗"


class TestConsole:
    """Tests for Console status messages."""

    def test_color_disabled_without_tty(self):
        with patch("sys.stdout.isatty", return_value=False):
            assert Console(color=True).color is False

    def test_color_applied_with_tty(self):
        with patch("sys.stdout.isatty", return_value=True):
            console = Console(color=True)
        assert console._c("x", Colors.RED) == f"{Colors.RED}x{Colors.RESET}"

    def test_success(self, console, capsys):
        console.success("Done")
        assert f"{Symbols.CHECK} Done" in capsys.readouterr().out

    def test_quiet_suppresses_status(self, converter, capsys):
        console = Console(color=False, quiet=True, converter=converter)
        console.success("Done")
        console.info("Info")
        console.section("Section")
        assert capsys.readouterr().out == ""

    def test_error_prints_in_quiet_mode(self, converter, capsys):
        Console(color=False, quiet=True, converter=converter).error("Failed")
        assert f"{Symbols.CROSS} Failed" in capsys.readouterr().out

    def test_config_errors(self, console, capsys):
        console.config_errors(["Missing URL", "Missing token"])
        out = capsys.readouterr().out
        assert "Configuration errors" in out
        assert "Missing URL" in out
        assert "Missing token" in out

    def test_debug_only_when_verbose(self, converter, capsys):
        Console(color=False, converter=converter).debug("hidden")
        Console(color=False, verbose=True, converter=converter).debug("shown")
        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "[DEBUG] shown" in out

    def test_item_with_status(self, console, capsys):
        console.item("21: Resolve", "Done")
        assert "21: Resolve [Done]" in capsys.readouterr().out

    @pytest.mark.parametrize(("answer", "expected"), [("y", True), ("YES", True), ("n", False), ("", False)])
    def test_confirm(self, console, answer, expected):
        with patch("builtins.input", return_value=answer):
            assert console.confirm("Delete?") is expected

    def test_confirm_eof(self, console):
        with patch("builtins.input", side_effect=EOFError):
            assert console.confirm("Delete?") is False


class TestEntityOutput:
    """Tests for issue and comment rendering."""

    def test_issue(self, console, normalizer, make_issue, make_user, make_comment, capsys):
        issue = normalizer.issue(make_issue(
            assignee=make_user("acc-2", "dana@example.com"),
            rendered_comments=[make_comment("100", "<p>Ship <code>v2</code></p>")],
        ))

        console.issue(issue)

        out = capsys.readouterr().out
        assert "ABC-42: Fix login" in out
        assert "Status:   In Progress" in out
        assert "Assignee: dana@example.com" in out
        assert "Created:  01/May/24 10:00 AM" in out
        assert "Users cannot **log in**" in out
        assert "Comments (1)" in out
        assert "#100 dev@example.com at 01/May/24 12:00 PM" in out
        assert "Ship `v2`" in out

    def test_issue_without_comments(self, console, normalizer, make_issue, make_comment, capsys):
        issue = normalizer.issue(make_issue(rendered_comments=[make_comment()]))

        console.issue(issue, with_comments=False)

        assert "Looks good" not in capsys.readouterr().out

    def test_issue_printed_in_quiet_mode(self, converter, normalizer, make_issue, capsys):
        Console(color=False, quiet=True, converter=converter).issue(normalizer.issue(make_issue()))
        assert "ABC-42" in capsys.readouterr().out

    def test_issue_line_unassigned(self, console, normalizer, make_issue, capsys):
        console.issue_line(normalizer.issue(make_issue(status="To Do")))

        out = capsys.readouterr().out
        assert "[To Do]" in out
        assert "(Unassigned)" in out

    def test_raw_comment_body(self, console, normalizer, make_issue, make_comment, capsys):
        issue = normalizer.issue(make_issue(rendered=False, raw_comments=[make_comment("100", "plain words")]))

        console.comment(issue.comments[0])

        assert "plain words" in capsys.readouterr().out

    def test_unrendered_document_body(self, console, normalizer, make_issue, make_comment):
        issue = normalizer.issue(make_issue(rendered=False, raw_comments=[make_comment("100", {"type": "doc"})]))

        assert console.comment_markdown(issue.comments[0]) == "(body not rendered)"
