"""
Tests for CommentGateway.
"""

import json

import pytest

from jirate.application import CommentGateway
from jirate.core.domain import BodyKind
from jirate.core.exceptions import (
    InvalidDocument,
    InvalidQuery,
    MissingRenderedBody,
    NotFound,
    RejectedByServer,
)


DOCUMENT = json.dumps({"type": "doc", "version": 1, "content": []}).encode()


@pytest.fixture
def gateway(mock_client, normalizer):
    return CommentGateway(mock_client, normalizer)


class TestReads:
    """Tests for comment reads."""

    def test_fetch_all(self, gateway, mock_client, make_issue, make_comment):
        mock_client.get.return_value = make_issue(
            rendered_comments=[make_comment("100"), make_comment("101", "<p>Second</p>")]
        )

        comments = gateway.fetch_all("ABC-42")

        assert [c.id for c in comments] == ["100", "101"]
        assert comments[1].rendered_html == "<p>Second</p>"
        assert all(c.issue_id == "ABC-42" for c in comments)
        mock_client.get.assert_called_once_with("issue/ABC-42", params={"expand": "renderedFields"})

    def test_fetch_all_without_rendered_fields(self, gateway, mock_client, make_issue, make_comment):
        raw = make_comment("100", {"type": "doc", "version": 1, "content": []})
        mock_client.get.return_value = make_issue(rendered=False, raw_comments=[raw])

        comments = gateway.fetch_all("ABC-42")

        assert comments[0].body.kind is BodyKind.RAW
        with pytest.raises(MissingRenderedBody):
            comments[0].rendered_html

    def test_fetch_one(self, gateway, mock_client, make_comment):
        mock_client.get.return_value = make_comment(
            "100",
            {"type": "doc"},
            renderedBody="<p>Looks <em>good</em></p>",
        )

        comment = gateway.fetch_one("ABC-42", "100")

        assert comment.rendered_html == "<p>Looks <em>good</em></p>"
        assert comment.author_label == "dev@example.com"
        mock_client.get.assert_called_once_with(
            "issue/ABC-42/comment/100",
            params={"expand": "renderedBody"},
        )

    def test_fetch_one_without_rendered_body(self, gateway, mock_client, make_comment):
        mock_client.get.return_value = make_comment("100", {"type": "doc"})

        with pytest.raises(MissingRenderedBody) as exc:
            gateway.fetch_one("ABC-42", "100")

        assert exc.value.comment_id == "100"

    def test_fetch_one_missing(self, gateway, mock_client):
        mock_client.get.side_effect = NotFound("gone", status_code=404)

        with pytest.raises(NotFound):
            gateway.fetch_one("ABC-42", "999")


class TestWrites:
    """Tests for create, update and delete."""

    def test_create(self, gateway, mock_client, make_response):
        mock_client.post.return_value = make_response(201, {"id": "102"})

        gateway.create("ABC-42", DOCUMENT)

        mock_client.post.assert_called_once_with(
            "issue/ABC-42/comment",
            json={"body": {"type": "doc", "version": 1, "content": []}},
        )

    @pytest.mark.parametrize("status", [200, 204, 400, 500])
    def test_create_requires_201(self, gateway, mock_client, make_response, status):
        mock_client.post.return_value = make_response(status, text="nope")

        with pytest.raises(RejectedByServer) as exc:
            gateway.create("ABC-42", DOCUMENT)

        assert exc.value.expected == 201
        assert exc.value.actual == status
        assert exc.value.body == "nope"

    @pytest.mark.parametrize("document", [b"not json", b"[1, 2]", b'"text"', b""])
    def test_invalid_document_makes_no_request(self, gateway, mock_client, document):
        with pytest.raises(InvalidDocument):
            gateway.create("ABC-42", document)
        mock_client.post.assert_not_called()

    def test_create_plain(self, gateway, mock_client, make_response):
        mock_client.post.return_value = make_response(201)

        gateway.create_plain("ABC-42", "Deployed **today**")

        body = mock_client.post.call_args.kwargs["json"]["body"]
        assert body["type"] == "doc"
        assert body["content"][0]["content"][0]["text"] == "Deployed **today**"

    def test_update(self, gateway, mock_client, make_response):
        mock_client.put.return_value = make_response(200, {"id": "100"})

        gateway.update("ABC-42", "100", DOCUMENT)

        assert mock_client.put.call_args.args[0] == "issue/ABC-42/comment/100"

    def test_update_requires_200(self, gateway, mock_client, make_response):
        mock_client.put.return_value = make_response(204)

        with pytest.raises(RejectedByServer):
            gateway.update("ABC-42", "100", DOCUMENT)

    def test_delete(self, gateway, mock_client, make_response):
        mock_client.delete.return_value = make_response(204)

        gateway.delete("ABC-42", "100")

        mock_client.delete.assert_called_once_with("issue/ABC-42/comment/100")

    def test_delete_rejects_200(self, gateway, mock_client, make_response):
        mock_client.delete.return_value = make_response(200)

        with pytest.raises(RejectedByServer) as exc:
            gateway.delete("ABC-42", "100")

        assert "Deleting comment 100 on ABC-42" in str(exc.value)
        assert exc.value.issue_key == "ABC-42"

    @pytest.mark.parametrize(("issue_id", "comment_id"), [("", "100"), ("ABC-42", " ")])
    def test_blank_ids(self, gateway, mock_client, issue_id, comment_id):
        with pytest.raises(InvalidQuery):
            gateway.delete(issue_id, comment_id)
        mock_client.delete.assert_not_called()
