"""
CLI App - Main entry point for the jirate command line tool.
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..adapters.config import EnvironmentConfigProvider
from ..adapters.editor import ExternalEditor
from ..adapters.formatters import ContentConverter
from ..adapters.jira import EntityNormalizer, JiraApiClient
from ..application import CommentGateway, QueryEngine, TransitionService
from ..core.constants import DEFAULT_MY_ISSUES_STATUS
from ..core.domain.value_objects import IssueSearchOptions
from ..core.exceptions import ConfigError
from ..core.ports.config_provider import AppConfig
from .exit_codes import ExitCode
from .logging import setup_logging
from .output import Console


def create_parser() -> argparse.ArgumentParser:
    """
    Create the command-line argument parser for jirate.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="jirate",
        description="Read Jira issues and manage their comments from the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show an issue with its comments
  jirate issue get ABC-42

  # Issues "In Review" in the active sprint of project ABC
  jirate issue list --project ABC --status "In Review"

  # Issues assigned to me that are in progress
  jirate issue mine

  # Write a comment in $EDITOR
  jirate comment add ABC-42

  # Quick plain text comment
  jirate comment add ABC-42 Deployed to staging
""",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose (debug) output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print results and errors")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default=None,
        help="Log output format (default: text, or the configured one)",
    )
    parser.add_argument("--log-file", metavar="PATH", help="Also write logs to this file")
    parser.add_argument("--config", "-c", metavar="PATH", help="YAML config file")
    parser.add_argument("--url", dest="jira_url", help="Jira URL (overrides JIRA_URL)")
    parser.add_argument("--email", dest="jira_email", help="Account email (overrides JIRA_EMAIL)")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds (default: none)")

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    # issue ------------------------------------------------------------------
    issue = commands.add_parser("issue", help="Read and transition issues")
    issue_commands = issue.add_subparsers(dest="action", metavar="ACTION")

    issue_get = issue_commands.add_parser("get", help="Show one issue")
    issue_get.add_argument("issue_id", help="Issue key or id (e.g. ABC-42)")
    issue_get.add_argument("--no-comments", action="store_true", help="Do not show comments")
    issue_get.set_defaults(handler=run_issue_get)

    issue_list = issue_commands.add_parser("list", help="Issues in a project's active sprint")
    issue_list.add_argument("--project", "-p", dest="jira_project", help="Project key")
    issue_list.add_argument("--status", "-s", help="Status filter (e.g. 'To Do')")
    issue_list.add_argument("--assignee", "-a", help="Assignee filter (account id)")
    issue_list.add_argument("--sprint", type=int, help="Use this sprint id instead of the active one")
    issue_list.set_defaults(handler=run_issue_list)

    issue_mine = issue_commands.add_parser("mine", help="Issues assigned to me")
    issue_mine.add_argument(
        "--status",
        "-s",
        default=DEFAULT_MY_ISSUES_STATUS,
        help=f"Status filter (default: {DEFAULT_MY_ISSUES_STATUS})",
    )
    issue_mine.set_defaults(handler=run_issue_mine)

    issue_transition = issue_commands.add_parser(
        "transition",
        help="List or apply workflow transitions",
    )
    issue_transition.add_argument("issue_id", help="Issue key or id")
    issue_transition.add_argument(
        "transition",
        nargs="?",
        help="Transition id, name or target status (omit to list them)",
    )
    issue_transition.set_defaults(handler=run_issue_transition)

    # comment ----------------------------------------------------------------
    comment = commands.add_parser("comment", help="Read and write issue comments")
    comment_commands = comment.add_subparsers(dest="action", metavar="ACTION")

    comment_list = comment_commands.add_parser("list", help="All comments of an issue")
    comment_list.add_argument("issue_id", help="Issue key or id")
    comment_list.set_defaults(handler=run_comment_list)

    comment_get = comment_commands.add_parser("get", help="Show one comment")
    comment_get.add_argument("issue_id", help="Issue key or id")
    comment_get.add_argument("comment_id", help="Comment id")
    comment_get.set_defaults(handler=run_comment_get)

    comment_add = comment_commands.add_parser("add", help="Add a comment")
    comment_add.add_argument("issue_id", help="Issue key or id")
    comment_add.add_argument(
        "text",
        nargs="*",
        help="Plain text comment (omit to write markdown in $EDITOR)",
    )
    comment_add.add_argument("--file", "-f", metavar="PATH", help="Read the markdown body from a file")
    comment_add.set_defaults(handler=run_comment_add)

    comment_update = comment_commands.add_parser("update", help="Edit a comment")
    comment_update.add_argument("issue_id", help="Issue key or id")
    comment_update.add_argument("comment_id", help="Comment id")
    comment_update.add_argument("--file", "-f", metavar="PATH", help="Read the new markdown body from a file")
    comment_update.set_defaults(handler=run_comment_update)

    comment_delete = comment_commands.add_parser("delete", help="Delete a comment")
    comment_delete.add_argument("issue_id", help="Issue key or id")
    comment_delete.add_argument("comment_id", help="Comment id")
    comment_delete.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    comment_delete.set_defaults(handler=run_comment_delete)

    return parser


# =============================================================================
# Issue commands
# =============================================================================


def run_issue_get(args, console: Console, client: JiraApiClient, config: AppConfig) -> int:
    engine = QueryEngine(client, EntityNormalizer())
    for issue in engine.resolve(args.issue_id):
        console.issue(issue, with_comments=not args.no_comments)
    return ExitCode.SUCCESS


def run_issue_list(args, console: Console, client: JiraApiClient, config: AppConfig) -> int:
    options = IssueSearchOptions(
        status=args.status,
        assignee=args.assignee,
        sprint_id=args.sprint,
        project_key=config.tracker.project_key,
    )
    engine = QueryEngine(client, EntityNormalizer())
    issues = engine.resolve(options)

    title = f"Issues in {options.project_key}"
    if options.status:
        title += f" with status '{options.status}'"
    console.section(title)
    if not issues:
        console.info("No matching issues")
    for issue in issues:
        console.issue_line(issue)
    return ExitCode.SUCCESS


def run_issue_mine(args, console: Console, client: JiraApiClient, config: AppConfig) -> int:
    engine = QueryEngine(client, EntityNormalizer())
    issues = engine.my_issues(status=args.status)

    console.section(f"My issues with status '{args.status}'")
    if not issues:
        console.info("No matching issues")
    for issue in issues:
        console.issue_line(issue)
    return ExitCode.SUCCESS


def run_issue_transition(args, console: Console, client: JiraApiClient, config: AppConfig) -> int:
    service = TransitionService(client, EntityNormalizer())

    if not args.transition:
        console.section(f"Transitions available for {args.issue_id}")
        for transition in service.available(args.issue_id):
            console.item(f"{transition.id}: {transition.name}", transition.to_status or None)
        return ExitCode.SUCCESS

    applied = service.apply(args.issue_id, args.transition)
    console.success(f"{args.issue_id} moved to '{applied.to_status or applied.name}'")
    return ExitCode.SUCCESS


# =============================================================================
# Comment commands
# =============================================================================


def run_comment_list(args, console: Console, client: JiraApiClient, config: AppConfig) -> int:
    gateway = CommentGateway(client, EntityNormalizer())
    comments = gateway.fetch_all(args.issue_id)
    if not comments:
        console.info(f"{args.issue_id} has no comments")
    for comment in comments:
        console.comment(comment)
    return ExitCode.SUCCESS


def run_comment_get(args, console: Console, client: JiraApiClient, config: AppConfig) -> int:
    gateway = CommentGateway(client, EntityNormalizer())
    console.comment(gateway.fetch_one(args.issue_id, args.comment_id))
    return ExitCode.SUCCESS


def run_comment_add(args, console: Console, client: JiraApiClient, config: AppConfig) -> int:
    gateway = CommentGateway(client, EntityNormalizer())

    if args.text:
        gateway.create_plain(args.issue_id, " ".join(args.text))
        console.success(f"Comment added to {args.issue_id}")
        return ExitCode.SUCCESS

    markdown = _read_body(args)
    if markdown is None:
        console.warning("No comment text; nothing was sent")
        return ExitCode.CANCELLED

    document = ContentConverter().render_to_document(markdown.encode("utf-8"))
    gateway.create(args.issue_id, document)
    console.success(f"Comment added to {args.issue_id}")
    return ExitCode.SUCCESS


def run_comment_update(args, console: Console, client: JiraApiClient, config: AppConfig) -> int:
    gateway = CommentGateway(client, EntityNormalizer())
    converter = ContentConverter()

    if args.file:
        markdown = _read_body(args)
    else:
        current = gateway.fetch_one(args.issue_id, args.comment_id)
        original = converter.convert_to_markdown(current.rendered_html)
        markdown = ExternalEditor().edit(original)
        if markdown is not None and markdown.strip() == original.strip():
            console.info("Comment unchanged; nothing was sent")
            return ExitCode.CANCELLED

    if markdown is None:
        console.warning("No comment text; nothing was sent")
        return ExitCode.CANCELLED

    gateway.update(args.issue_id, args.comment_id, converter.render_to_document(markdown.encode("utf-8")))
    console.success(f"Comment {args.comment_id} on {args.issue_id} updated")
    return ExitCode.SUCCESS


def run_comment_delete(args, console: Console, client: JiraApiClient, config: AppConfig) -> int:
    if not args.yes and not console.confirm(f"Delete comment {args.comment_id} on {args.issue_id}?"):
        console.warning("Cancelled by user")
        return ExitCode.CANCELLED

    CommentGateway(client, EntityNormalizer()).delete(args.issue_id, args.comment_id)
    console.success(f"Comment {args.comment_id} on {args.issue_id} deleted")
    return ExitCode.SUCCESS


def _read_body(args: argparse.Namespace) -> str | None:
    """Markdown from --file, or from the editor; None when empty or cancelled."""
    if getattr(args, "file", None):
        text = Path(args.file).read_text(encoding="utf-8").strip()
        return text or None
    return ExternalEditor().edit()


# =============================================================================
# Entry points
# =============================================================================


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides = {
        "jira_url": args.jira_url,
        "jira_email": args.jira_email,
        "jira_project": getattr(args, "jira_project", None),
        "timeout": args.timeout,
        "log_format": args.log_format,
        "log_file": args.log_file,
    }
    if args.verbose:
        overrides["verbose"] = True
    if args.no_color:
        overrides["color"] = False
    return overrides


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the jirate CLI.

    Parses arguments, loads configuration, opens one HTTP session and runs
    the selected command.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return ExitCode.ERROR

    config_provider = EnvironmentConfigProvider(
        config_file=Path(args.config) if args.config else None,
        cli_overrides=_cli_overrides(args),
    )
    errors = config_provider.validate()
    if errors:
        Console(color=not args.no_color, quiet=args.quiet).config_errors(errors)
        return ExitCode.CONFIG_ERROR

    try:
        config = config_provider.load()
    except ConfigError as e:
        Console(color=not args.no_color, quiet=args.quiet).error(str(e))
        return ExitCode.CONFIG_ERROR

    output = config.output
    setup_logging(
        level=logging.DEBUG if output.verbose else logging.WARNING,
        log_format=output.log_format,
        log_file=output.log_file,
        use_colors=None if output.color else False,
    )
    console = Console(color=output.color, verbose=output.verbose, quiet=args.quiet)

    try:
        console.debug(f"Using {config.tracker.url} as {config.tracker.email}")

        with JiraApiClient(
            base_url=config.tracker.url,
            email=config.tracker.email,
            api_token=config.tracker.api_token,
            timeout=config.tracker.timeout,
        ) as client:
            return handler(args, console, client, config)

    except KeyboardInterrupt:
        console.print()
        console.warning("Interrupted by user")
        return ExitCode.SIGINT

    except Exception as e:
        console.error(str(e))
        if output.verbose:
            console.print()
            traceback.print_exc()
        return ExitCode.from_exception(e)


def run() -> None:
    """
    Entry point for the console script.

    Calls main() and exits with its return code.
    """
    sys.exit(main())


if __name__ == "__main__":
    run()
