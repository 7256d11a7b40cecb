"""
Sprint Resolver - Resolves "issues in a project's active sprint".

The lookup is a strictly ordered chain of REST calls, each depending on the
previous one's output:

    project -> boards -> first board -> active sprint -> sprint issues

Every stage is a fallible transformation returning a Result; the stages are
composed with ``and_then`` so the first Err ends the chain and no later
request is issued. Transport failures during stages 1-4 are not stage
failures and propagate unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..adapters.jira.client import JiraApiClient
from ..adapters.jira.normalizer import EntityNormalizer
from ..core.constants import Expand, SprintState
from ..core.domain.entities import Board, Issue, Project, Sprint
from ..core.domain.value_objects import IssueSearchOptions
from ..core.exceptions import (
    InvalidQuery,
    NoActiveSprint,
    NoBoardsFound,
    NotFound,
    ProjectNotFound,
    ResolutionError,
    SprintIssuesUnavailable,
    TrackerError,
    TransportError,
)
from ..core.result import Err, Ok, Result


# Boards without sprint support (kanban) answer the sprint lookup with 400.
SPRINTS_UNSUPPORTED_STATUS = 400


@dataclass(frozen=True)
class BoardSelection:
    """Output of the board selection stage."""

    project: Project
    board: Board
    candidates: int


class SprintResolver:
    """
    Runs the project -> board -> sprint -> issues resolution chain.

    Example:
        >>> resolver = SprintResolver(client)
        >>> result = resolver.resolve(IssueSearchOptions(project_key="ABC", status="To Do"))
        >>> issues = result.unwrap()
    """

    def __init__(self, client: JiraApiClient, normalizer: EntityNormalizer | None = None):
        self.client = client
        self.normalizer = normalizer or EntityNormalizer()
        self.logger = logging.getLogger("SprintResolver")

    def resolve(self, options: IssueSearchOptions) -> Result[list[Issue], ResolutionError]:
        """
        Resolve the issues matching ``options`` in the active sprint.

        When ``options.sprint_id`` is set the project, board and sprint
        lookups are skipped and that sprint is queried directly.

        Args:
            options: Search options; ``project_key`` is required unless a
                sprint id is given

        Returns:
            Ok(list of issues, possibly empty) or Err(stage failure)

        Raises:
            InvalidQuery: If neither a project nor a sprint id is given
            TransportError: On network failures before the last stage
        """
        if options.sprint_id is not None:
            self.logger.debug(f"Using explicit sprint {options.sprint_id}")
            return self.fetch_sprint_issues(options.sprint_id, options)

        if not options.has_project:
            raise InvalidQuery("A project key is required to resolve the active sprint")

        project_key = options.project_key.strip()
        return (
            self.resolve_project(project_key)
            .and_then(self.resolve_boards)
            .and_then(self.select_board)
            .and_then(self.resolve_active_sprint)
            .and_then(lambda sprint: self.fetch_sprint_issues(sprint.id, options))
        )

    def resolve_or_raise(self, options: IssueSearchOptions) -> list[Issue]:
        """Like ``resolve`` but raises the stage error instead of returning Err."""
        return self.resolve(options).to_exception()

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def resolve_project(self, project_key: str) -> Result[Project, ResolutionError]:
        """Stage 1: project key -> Project."""
        self.logger.debug(f"[project] Looking up project {project_key}")
        try:
            payload = self.client.get(f"project/{project_key}")
        except NotFound as e:
            return Err(ProjectNotFound(
                f"Project {project_key} does not exist or is not visible",
                subject=project_key,
                cause=e,
            ))
        return Ok(self.normalizer.project(payload))

    def resolve_boards(self, project: Project) -> Result[tuple[Project, list[Board]], ResolutionError]:
        """Stage 2: Project -> boards of that project, in server order."""
        self.logger.debug(f"[boards] Listing boards of project {project.key}")
        try:
            payload = self.client.get(
                "board",
                agile=True,
                params={"projectKeyOrId": project.key},
            )
        except NotFound as e:
            return Err(NoBoardsFound(
                f"Project {project.key} has no boards",
                subject=project.key,
                cause=e,
            ))

        boards = self.normalizer.boards(payload)
        if not boards:
            return Err(NoBoardsFound(f"Project {project.key} has no boards", subject=project.key))
        return Ok((project, boards))

    def select_board(
        self,
        found: tuple[Project, list[Board]],
    ) -> Result[BoardSelection, ResolutionError]:
        """
        Stage 3: pick the board whose active sprint is used.

        The first board in server order wins. Projects with several boards
        may resolve a different sprint than the user expects.
        """
        project, boards = found
        board = boards[0]
        if len(boards) > 1:
            self.logger.debug(
                f"[boards] Project {project.key} has {len(boards)} boards; using first board {board.id}"
            )
        return Ok(BoardSelection(project=project, board=board, candidates=len(boards)))

    def resolve_active_sprint(self, selection: BoardSelection) -> Result[Sprint, ResolutionError]:
        """Stage 4: board -> its active sprint."""
        board = selection.board
        self.logger.debug(f"[sprint] Looking up active sprint of board {board.id}")
        try:
            payload = self.client.get(
                f"board/{board.id}/sprint",
                agile=True,
                params={"state": SprintState.ACTIVE, "maxResults": 1},
            )
        except TrackerError as e:
            if isinstance(e, NotFound) or e.status_code == SPRINTS_UNSUPPORTED_STATUS:
                return Err(NoActiveSprint(
                    f"Board {board.id} of project {selection.project.key} has no sprints",
                    subject=str(board.id),
                    cause=e,
                ))
            raise

        sprints = self.normalizer.sprints(payload)
        if not sprints:
            return Err(NoActiveSprint(
                f"Board {board.id} of project {selection.project.key} has no active sprint",
                subject=str(board.id),
            ))
        return Ok(sprints[0])

    def fetch_sprint_issues(
        self,
        sprint_id: int,
        options: IssueSearchOptions,
    ) -> Result[list[Issue], ResolutionError]:
        """Stage 5: sprint -> issues matching the status/assignee filter."""
        params: dict[str, Any] = {"expand": Expand.RENDERED_FIELDS}
        jql = options.jql()
        if jql:
            params["jql"] = jql

        self.logger.debug(f"[sprint-issues] Fetching issues of sprint {sprint_id} jql={jql!r}")
        try:
            payload = self.client.get(f"sprint/{sprint_id}/issue", agile=True, params=params)
        except (TransportError, TrackerError) as e:
            return Err(SprintIssuesUnavailable(
                f"Could not fetch issues of sprint {sprint_id}",
                subject=str(sprint_id),
                cause=e,
            ))

        issues = self.normalizer.issues(payload)
        self.logger.debug(f"[sprint-issues] Sprint {sprint_id} returned {len(issues)} issues")
        return Ok(issues)
