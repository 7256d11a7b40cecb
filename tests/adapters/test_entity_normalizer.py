"""
Tests for EntityNormalizer.
"""

import pytest

from jirate.adapters.jira.normalizer import CommentSource, EntityKind
from jirate.core.domain import BodyKind
from jirate.core.exceptions import MalformedResponse, MissingRenderedBody


class TestIssueNormalization:
    """Tests for issue payloads."""

    def test_full_issue(self, normalizer, make_issue, make_user, make_comment):
        payload = make_issue(
            assignee=make_user("acc-2", "assignee@example.com"),
            rendered_comments=[make_comment("100"), make_comment("101", "<p>Second</p>")],
        )

        issue = normalizer.issue(payload)

        assert issue.id == "10042"
        assert issue.key == "ABC-42"
        assert issue.summary == "Fix login"
        assert issue.status == "In Progress"
        assert issue.assignee_label == "assignee@example.com"
        assert issue.creator_label == "creator@example.com"
        assert issue.created == "01/May/24 10:00 AM"
        assert issue.description.rendered == "<p>Users cannot <b>log in</b></p>"
        assert [c.id for c in issue.comments] == ["100", "101"]
        assert all(c.issue_id == "ABC-42" for c in issue.comments)

    def test_missing_assignee_is_unassigned(self, normalizer, make_issue):
        payload = make_issue()
        del payload["fields"]["assignee"]

        issue = normalizer.issue(payload)

        assert issue.assignee is None
        assert issue.assignee_label == "Unassigned"

    def test_null_assignee_is_unassigned(self, normalizer, make_issue):
        assert normalizer.issue(make_issue(assignee=None)).assignee_label == "Unassigned"

    def test_without_rendered_fields_uses_raw_values(self, normalizer, make_issue):
        issue = normalizer.issue(make_issue(rendered=False))

        assert issue.created == "2024-05-01T10:00:00.000+0000"
        assert issue.description.rendered is None
        assert issue.description.raw == {"type": "doc", "version": 1, "content": []}

    def test_bare_issue(self, normalizer):
        issue = normalizer.issue({"key": "ABC-1"})

        assert issue.key == "ABC-1"
        assert issue.summary == ""
        assert issue.status == ""
        assert issue.comments == ()

    @pytest.mark.parametrize("payload", [{"id": "1", "fields": {}}, {"key": ""}, [], "ABC-1", None])
    def test_missing_key_or_wrong_type(self, normalizer, payload):
        with pytest.raises(MalformedResponse):
            normalizer.issue(payload)

    def test_issue_list(self, normalizer, make_issue):
        issues = normalizer.issues({"issues": [make_issue("ABC-1"), make_issue("ABC-2")]})
        assert [i.key for i in issues] == ["ABC-1", "ABC-2"]

    def test_issue_list_requires_issues(self, normalizer):
        with pytest.raises(MalformedResponse):
            normalizer.issues({"total": 0})
        with pytest.raises(MalformedResponse):
            normalizer.issues({"issues": {"not": "a list"}})


class TestCommentNormalization:
    """Tests for the two comment sources."""

    def test_embedded_comments_are_rendered(self, normalizer, make_issue, make_comment):
        comments = normalizer.comments_from_issue(make_issue(rendered_comments=[make_comment("100")]))

        assert len(comments) == 1
        assert comments[0].body.kind is BodyKind.RENDERED
        assert comments[0].rendered_html == "<p>Looks good</p>"
        assert comments[0].author_label == "dev@example.com"

    def test_embedded_comments_fall_back_to_raw(self, normalizer, make_issue, make_comment):
        raw = make_comment("100", {"type": "doc", "version": 1, "content": []})
        comments = normalizer.comments_from_issue(make_issue(rendered=False, raw_comments=[raw]))

        assert comments[0].body.kind is BodyKind.RAW
        with pytest.raises(MissingRenderedBody):
            _ = comments[0].rendered_html

    def test_no_comment_collection(self, normalizer):
        assert normalizer.comments_from_issue({"key": "ABC-1", "fields": {}}) == []

    def test_single_comment_uses_rendered_body(self, normalizer, make_comment):
        payload = make_comment("100", {"type": "doc"}, renderedBody="<p>Rendered</p>")

        comment = normalizer.comment(payload, issue_id="ABC-42", source=CommentSource.SINGLE)

        assert comment.body.is_rendered
        assert comment.rendered_html == "<p>Rendered</p>"

    def test_single_comment_without_rendered_body(self, normalizer, make_comment):
        payload = make_comment("100", {"type": "doc", "content": [{"type": "paragraph"}]})

        with pytest.raises(MissingRenderedBody) as exc:
            normalizer.comment(payload, issue_id="ABC-42", source=CommentSource.SINGLE)

        assert exc.value.comment_id == "100"
        assert exc.value.issue_key == "ABC-42"

    def test_comment_requires_id(self, normalizer):
        with pytest.raises(MalformedResponse):
            normalizer.comment({"body": "<p>x</p>"}, issue_id="ABC-1")


class TestAgileNormalization:
    """Tests for projects, boards and sprints."""

    def test_project(self, normalizer):
        project = normalizer.project({"id": "10000", "key": "ABC", "name": "Alphabet"})
        assert (project.id, project.key, project.name) == ("10000", "ABC", "Alphabet")

    def test_project_requires_key(self, normalizer):
        with pytest.raises(MalformedResponse):
            normalizer.project({"id": "10000"})

    def test_boards_in_server_order(self, normalizer):
        boards = normalizer.boards({
            "values": [
                {"id": 7, "name": "Team B", "location": {"projectKey": "ABC"}},
                {"id": 1, "name": "Team A"},
            ]
        })

        assert [b.id for b in boards] == [7, 1]
        assert boards[0].project_key == "ABC"
        assert boards[1].project_key is None

    def test_boards_require_values(self, normalizer):
        with pytest.raises(MalformedResponse):
            normalizer.boards({"total": 0})

    def test_empty_board_list(self, normalizer):
        assert normalizer.boards({"values": []}) == []

    def test_sprints(self, normalizer):
        sprints = normalizer.sprints({
            "values": [{"id": 5, "state": "active", "name": "Sprint 5", "originBoardId": 1}]
        })

        assert sprints[0].id == 5
        assert sprints[0].state == "active"
        assert sprints[0].board_id == 1

    @pytest.mark.parametrize("board_id", ["abc", [1], {"id": 1}, True])
    def test_non_integer_board_id(self, normalizer, board_id):
        with pytest.raises(MalformedResponse) as exc:
            normalizer.boards({"values": [{"id": board_id}]})

        assert exc.value.entity == "board"

    def test_numeric_string_ids_are_accepted(self, normalizer):
        sprints = normalizer.sprints({"values": [{"id": "12", "state": "active", "originBoardId": "3"}]})
        assert (sprints[0].id, sprints[0].board_id) == (12, 3)

    @pytest.mark.parametrize(
        "sprint",
        [
            {"id": "next", "state": "active"},
            {"id": 5, "state": "active", "originBoardId": "board-1"},
            {"id": 5, "state": "active", "originBoardId": {}},
        ],
    )
    def test_non_integer_sprint_ids(self, normalizer, sprint):
        with pytest.raises(MalformedResponse) as exc:
            normalizer.sprints({"values": [sprint]})

        assert exc.value.entity == "sprint"
        assert isinstance(exc.value.__cause__, (TypeError, ValueError))

    def test_transitions(self, normalizer):
        transitions = normalizer.transitions({
            "transitions": [{"id": "31", "name": "Done", "to": {"name": "Closed"}}]
        })

        assert transitions[0].id == "31"
        assert transitions[0].to_status == "Closed"

    def test_user_requires_account_id(self, normalizer):
        with pytest.raises(MalformedResponse):
            normalizer.user({"displayName": "Anonymous"})


class TestDispatch:
    """Tests for normalize()."""

    def test_dispatch_by_kind(self, normalizer):
        project = normalizer.normalize({"id": "1", "key": "ABC"}, EntityKind.PROJECT)
        assert project.key == "ABC"

    def test_dispatch_passes_arguments(self, normalizer, make_comment):
        comment = normalizer.normalize(
            make_comment("100", renderedBody="<p>R</p>"),
            EntityKind.COMMENT,
            issue_id="ABC-1",
            source=CommentSource.SINGLE,
        )
        assert comment.rendered_html == "<p>R</p>"
