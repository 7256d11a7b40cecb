"""
Query Engine - Single entry point for issue reads.

A query is either an issue id or key (direct fetch) or an
IssueSearchOptions naming a project (sprint resolution). Anything else is
rejected before a request is made.
"""

from __future__ import annotations

import logging
from typing import Any

from ..adapters.jira.client import JiraApiClient
from ..adapters.jira.normalizer import EntityNormalizer
from ..core.constants import DEFAULT_MY_ISSUES_STATUS, Expand, JiraField
from ..core.domain.entities import Issue
from ..core.domain.value_objects import IssueSearchOptions, escape_jql
from ..core.exceptions import InvalidQuery
from .sprint_resolver import SprintResolver


class QueryEngine:
    """
    Decides between a direct issue fetch and the sprint resolution chain.

    Results are never cached; every call goes to the tracker.
    """

    def __init__(
        self,
        client: JiraApiClient,
        normalizer: EntityNormalizer | None = None,
        resolver: SprintResolver | None = None,
    ):
        self.client = client
        self.normalizer = normalizer or EntityNormalizer()
        self.resolver = resolver or SprintResolver(client, self.normalizer)
        self.logger = logging.getLogger("QueryEngine")

    def resolve(self, query: Any) -> list[Issue]:
        """
        Resolve a query into issues.

        Args:
            query: Issue id/key, or IssueSearchOptions with a project key

        Returns:
            One issue for a direct fetch; the sprint's matching issues
            (possibly none) for a search

        Raises:
            InvalidQuery: Empty id, missing project key, or unsupported query
                type; raised before any network call
            NotFound: The issue does not exist
            ResolutionError: A sprint resolution stage failed
        """
        if isinstance(query, str):
            issue_id = query.strip()
            if not issue_id:
                raise InvalidQuery("Issue id must not be empty")
            return [self.get_issue(issue_id)]

        if isinstance(query, IssueSearchOptions):
            if not query.has_project:
                raise InvalidQuery(
                    "Listing issues requires a project key (use --project or set it in config)"
                )
            self.logger.debug(f"Resolving sprint issues for {query}")
            return self.resolver.resolve_or_raise(query)

        raise InvalidQuery(f"Unsupported query type: {type(query).__name__}")

    def get_issue(self, issue_id: str) -> Issue:
        """Fetch one issue with its rendered fields and embedded comments."""
        payload = self.client.get(
            f"issue/{issue_id}",
            params={JiraField.EXPAND: Expand.RENDERED_FIELDS},
        )
        return self.normalizer.issue(payload)

    def my_issues(self, status: str = DEFAULT_MY_ISSUES_STATUS) -> list[Issue]:
        """
        Issues assigned to the authenticated user with the given status.

        Args:
            status: Status name to filter on

        Returns:
            Matching issues from the first search page
        """
        me = self.normalizer.user(self.client.get_myself())
        jql = f'assignee={me.account_id} AND status="{escape_jql(status)}"'
        self.logger.debug(f"Searching my issues: {jql}")
        payload = self.client.search_jql(jql, expand=Expand.RENDERED_FIELDS)
        return self.normalizer.issues(payload)
