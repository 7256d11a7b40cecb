"""
Property-based tests for issue queries.

Tests invariants for:
- Project key validation before any request
- JQL value escaping
- HTML to markdown text preservation
"""

import re
from unittest.mock import MagicMock

from hypothesis import given
from hypothesis import strategies as st

from jirate.adapters.formatters import HtmlToMarkdown
from jirate.adapters.jira import JiraApiClient
from jirate.application import QueryEngine
from jirate.core.domain import IssueSearchOptions
from jirate.core.exceptions import InvalidQuery


blank_keys = st.one_of(st.none(), st.text(alphabet=" \t\n\r", max_size=5))
optional_text = st.one_of(st.none(), st.text(max_size=30))


class TestQueryValidationProperties:
    """A list query without a project never reaches the tracker."""

    @given(
        project_key=blank_keys,
        status=optional_text,
        assignee=optional_text,
        sprint_id=st.one_of(st.none(), st.integers(min_value=1, max_value=10**6)),
    )
    def test_blank_project_is_rejected(self, project_key, status, assignee, sprint_id):
        client = MagicMock(spec=JiraApiClient)
        engine = QueryEngine(client)
        options = IssueSearchOptions(
            status=status,
            assignee=assignee,
            sprint_id=sprint_id,
            project_key=project_key,
        )

        try:
            engine.resolve(options)
        except InvalidQuery:
            pass
        else:
            raise AssertionError("blank project key was accepted")

        assert client.method_calls == []

    @given(st.text(alphabet=" \t\n", max_size=10))
    def test_blank_issue_id_is_rejected(self, issue_id):
        client = MagicMock(spec=JiraApiClient)

        try:
            QueryEngine(client).resolve(issue_id)
        except InvalidQuery:
            pass
        else:
            raise AssertionError("blank issue id was accepted")

        assert client.method_calls == []


class TestJqlProperties:
    """Status values survive quoting."""

    @given(st.text(min_size=1, max_size=40))
    def test_status_round_trips_through_quoting(self, status):
        jql = IssueSearchOptions(status=status).jql()

        assert jql.startswith('status="')
        assert jql.endswith('"')
        inner = jql[len('status="'):-1]
        assert re.sub(r"\\(.)", r"\1", inner, flags=re.DOTALL) == status


class TestHtmlToMarkdownProperties:
    """Plain paragraph text is preserved modulo whitespace."""

    @given(st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789 ", max_size=60))
    def test_paragraph_text_preserved(self, text):
        markdown = HtmlToMarkdown().convert(f"<p>{text}</p>")
        assert markdown == " ".join(text.split())
