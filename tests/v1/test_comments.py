# tests/v1/test_comments.py
"""Tests for comments and the rules for editing and deleting them."""

import pytest

from mingle.models import Comment
from mingle.services.comment_service import can_delete_comment, can_edit_comment


@pytest.fixture()
def make_comment(db_session):
    def _make_comment(post, author, text="nice"):
        comment = Comment(post_id=post.id, user_id=author.id, text=text)
        db_session.add(comment)
        db_session.commit()
        db_session.refresh(comment)
        return comment

    return _make_comment


class TestCapabilities:
    def test_only_author_can_edit(self):
        comment = Comment(post_id=1, user_id=10, text="x")

        assert can_edit_comment(10, comment)
        assert not can_edit_comment(20, comment)

    def test_author_can_delete_without_post(self):
        comment = Comment(post_id=1, user_id=10, text="x")

        assert can_delete_comment(10, comment, None)

    def test_post_owner_can_delete(self, test_post, other_user):
        comment = Comment(post_id=test_post.id, user_id=other_user.id, text="x")

        assert can_delete_comment(test_post.user_id, comment, test_post)

    def test_stranger_cannot_delete(self, test_post, other_user, third_user):
        comment = Comment(post_id=test_post.id, user_id=other_user.id, text="x")

        assert not can_delete_comment(third_user.id, comment, test_post)
        assert not can_delete_comment(third_user.id, comment, None)


class TestAddComment:
    def test_add_comment(self, client, test_post, other_user, other_headers):
        response = client.post(
            "/api/v1/comments",
            headers=other_headers,
            json={"post_id": test_post.id, "text": "Lovely"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["post_id"] == test_post.id
        assert body["text"] == "Lovely"
        assert body["author"]["username"] == "bob"
        assert body["author"]["profile"]["full_name"] == "Bob Builder"

    def test_missing_text(self, client, test_post, other_headers):
        response = client.post(
            "/api/v1/comments", headers=other_headers, json={"post_id": test_post.id}
        )

        assert response.status_code == 400

    def test_missing_post(self, client, other_headers):
        response = client.post(
            "/api/v1/comments", headers=other_headers, json={"post_id": 9999, "text": "hi"}
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "Post not found"}

    def test_requires_auth(self, client, test_post):
        response = client.post("/api/v1/comments", json={"post_id": test_post.id, "text": "hi"})

        assert response.status_code == 401


def test_list_comments_newest_first(client, test_post, other_user, third_user, make_comment):
    first = make_comment(test_post, other_user, "first")
    second = make_comment(test_post, third_user, "second")

    response = client.get(f"/api/v1/comments/post/{test_post.id}")

    assert response.status_code == 200
    assert [c["id"] for c in response.json()["data"]] == [second.id, first.id]


class TestUpdateComment:
    def test_author_edits(self, client, test_post, other_user, other_headers, make_comment):
        comment = make_comment(test_post, other_user)

        response = client.put(
            f"/api/v1/comments/{comment.id}", headers=other_headers, json={"text": "edited"}
        )

        assert response.status_code == 200
        assert response.json()["text"] == "edited"

    def test_post_owner_cannot_edit(
        self, client, test_post, other_user, auth_headers, make_comment
    ):
        comment = make_comment(test_post, other_user)

        response = client.put(
            f"/api/v1/comments/{comment.id}", headers=auth_headers, json={"text": "hijack"}
        )

        assert response.status_code == 401
        assert response.json() == {"detail": "Not authorized to update this comment"}

    def test_missing_comment(self, client, auth_headers):
        response = client.put("/api/v1/comments/9999", headers=auth_headers, json={"text": "x"})

        assert response.status_code == 404


class TestDeleteComment:
    @pytest.mark.parametrize(
        ("actor", "expected_status"),
        [("author", 200), ("post_owner", 200), ("stranger", 401)],
    )
    def test_delete_matrix(
        self,
        client,
        db_session,
        test_post,
        test_user,
        other_user,
        third_user,
        auth_headers_for,
        make_comment,
        actor,
        expected_status,
    ):
        comment = make_comment(test_post, other_user)
        comment_id = comment.id
        actors = {"author": other_user, "post_owner": test_user, "stranger": third_user}

        response = client.delete(
            f"/api/v1/comments/{comment_id}", headers=auth_headers_for(actors[actor])
        )

        assert response.status_code == expected_status
        remaining = db_session.query(Comment).filter_by(id=comment_id).count()
        assert remaining == (0 if expected_status == 200 else 1)

    def test_missing_comment(self, client, auth_headers):
        assert client.delete("/api/v1/comments/9999", headers=auth_headers).status_code == 404
