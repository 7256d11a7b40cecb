"""
Value Objects - Immutable query parameters.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IssueSearchOptions:
    """
    Parameters of an issue list query.

    Every field is optional here; the query engine enforces that list
    queries name a project.
    """

    status: str | None = None
    assignee: str | None = None
    sprint_id: int | None = None
    project_key: str | None = None

    @property
    def has_project(self) -> bool:
        return bool(self.project_key and self.project_key.strip())

    def jql(self) -> str:
        """
        JQL filter for the sprint issue search.

        Values are quoted; embedded double quotes are escaped.
        """
        clauses = []
        if self.status:
            clauses.append(f'status="{escape_jql(self.status)}"')
        if self.assignee:
            clauses.append(f'assignee="{escape_jql(self.assignee)}"')
        return " AND ".join(clauses)


def escape_jql(value: str) -> str:
    """Escape a value for use inside a double-quoted JQL string."""
    return value.replace("\\", "\\\\").replace('"', '\\"')
