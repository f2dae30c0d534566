# tests/v1/test_follows.py
"""Tests for following and unfollowing users."""

import pytest

from mingle.core.exceptions import ConflictError, InvalidStateError, ValidationFailedError
from mingle.models import Follow, User
from mingle.services import follow_service


def _reload(db_session, user_id: int) -> User:
    db_session.expire_all()
    return db_session.get(User, user_id)


class TestFollowEndpoint:
    def test_follow_updates_both_sides(
        self, client, db_session, test_user, other_user, auth_headers
    ):
        response = client.post(f"/api/v1/follows/{other_user.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "User followed successfully"}
        assert other_user.id in _reload(db_session, test_user.id).following_ids
        assert test_user.id in _reload(db_session, other_user.id).follower_ids

    def test_follow_twice_is_conflict_without_duplicates(
        self, client, db_session, test_user, other_user, auth_headers
    ):
        client.post(f"/api/v1/follows/{other_user.id}", headers=auth_headers)

        response = client.post(f"/api/v1/follows/{other_user.id}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"detail": "Already following this user"}
        assert _reload(db_session, test_user.id).following_ids == [other_user.id]
        assert _reload(db_session, other_user.id).follower_ids == [test_user.id]

    def test_follow_self_is_rejected(self, client, test_user, auth_headers):
        response = client.post(f"/api/v1/follows/{test_user.id}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"detail": "You cannot follow yourself"}

    def test_follow_missing_user(self, client, auth_headers):
        response = client.post("/api/v1/follows/9999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"detail": "User not found"}

    def test_follow_requires_auth(self, client, other_user):
        assert client.post(f"/api/v1/follows/{other_user.id}").status_code == 401


class TestUnfollowEndpoint:
    def test_unfollow_restores_state(
        self, client, db_session, test_user, other_user, auth_headers
    ):
        client.post(f"/api/v1/follows/{other_user.id}", headers=auth_headers)

        response = client.delete(f"/api/v1/follows/{other_user.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "User unfollowed successfully"}
        assert _reload(db_session, test_user.id).following_ids == []
        assert _reload(db_session, other_user.id).follower_ids == []
        assert db_session.query(Follow).count() == 0

    def test_unfollow_without_edge(self, client, other_user, auth_headers):
        response = client.delete(f"/api/v1/follows/{other_user.id}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"detail": "Not following this user"}

    def test_unfollow_self(self, client, test_user, auth_headers):
        response = client.delete(f"/api/v1/follows/{test_user.id}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"detail": "You cannot unfollow yourself"}

    def test_unfollow_missing_user(self, client, auth_headers):
        assert client.delete("/api/v1/follows/9999", headers=auth_headers).status_code == 404


class TestListings:
    def test_followers_scenario(
        self, client, test_user, other_user, third_user, auth_headers, other_headers,
        auth_headers_for,
    ):
        # bob and carol follow alice
        client.post(f"/api/v1/follows/{test_user.id}", headers=other_headers)
        client.post(f"/api/v1/follows/{test_user.id}", headers=auth_headers_for(third_user))

        followers = client.get(f"/api/v1/follows/{test_user.id}/followers").json()["data"]
        following = client.get(f"/api/v1/follows/{other_user.id}/following").json()["data"]

        assert [u["username"] for u in followers] == ["bob", "carol"]
        assert followers[0]["profile"]["full_name"] == "Bob Builder"
        assert [u["id"] for u in following] == [test_user.id]

    def test_listing_missing_user(self, client):
        assert client.get("/api/v1/follows/9999/followers").status_code == 404
        assert client.get("/api/v1/follows/9999/following").status_code == 404


class TestFollowService:
    def test_is_following_is_directional(self, db_session, test_user, other_user):
        follow_service.follow_user(db_session, test_user, other_user.id)

        assert follow_service.is_following(db_session, test_user.id, other_user.id)
        assert not follow_service.is_following(db_session, other_user.id, test_user.id)

    def test_follow_unfollow_follow_round_trip(self, db_session, test_user, other_user):
        follow_service.follow_user(db_session, test_user, other_user.id)
        follow_service.unfollow_user(db_session, test_user, other_user.id)
        follow_service.follow_user(db_session, test_user, other_user.id)

        assert _reload(db_session, test_user.id).following_ids == [other_user.id]
        assert db_session.query(Follow).count() == 1

    def test_service_errors(self, db_session, test_user, other_user):
        with pytest.raises(ValidationFailedError):
            follow_service.follow_user(db_session, test_user, test_user.id)
        with pytest.raises(InvalidStateError):
            follow_service.unfollow_user(db_session, test_user, other_user.id)

        follow_service.follow_user(db_session, test_user, other_user.id)
        with pytest.raises(ConflictError):
            follow_service.follow_user(db_session, test_user, other_user.id)
