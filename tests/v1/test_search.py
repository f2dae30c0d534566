# tests/v1/test_search.py
"""Tests for user and post search."""

import pytest

from mingle.core.exceptions import ValidationFailedError
from mingle.services import search_service


class TestSearchUsers:
    def test_case_insensitive_substring(self, client, make_user):
        alice = make_user("Alice123")
        make_user("bob")

        response = client.get("/api/v1/search/users", params={"query": "ali"})

        assert response.status_code == 200
        assert [u["id"] for u in response.json()["data"]] == [alice.id]

    def test_username_matches_come_first_without_duplicates(self, client, make_user):
        by_name = make_user("zara", full_name="Someone Else")
        by_profile = make_user("bob", full_name="Zara Fan")
        both = make_user("zarafan", full_name="Zara Zara")

        results = client.get("/api/v1/search/users", params={"query": "zara"}).json()["data"]

        ids = [u["id"] for u in results]
        assert ids == [by_name.id, both.id, by_profile.id]
        assert results[2]["profile"]["full_name"] == "Zara Fan"

    def test_wildcards_are_literal(self, client, make_user):
        make_user("plain")
        underscored = make_user("with_underscore")

        results = client.get("/api/v1/search/users", params={"query": "_"}).json()["data"]
        assert [u["id"] for u in results] == [underscored.id]

        assert client.get("/api/v1/search/users", params={"query": "%"}).json()["data"] == []

    def test_missing_query(self, client):
        response = client.get("/api/v1/search/users")

        assert response.status_code == 400
        assert response.json() == {"detail": "Search query is required"}

    def test_blank_query(self, db_session):
        with pytest.raises(ValidationFailedError):
            search_service.search_users(db_session, "   ")


class TestSearchPosts:
    def test_matches_description_or_location(self, client, test_user, make_post):
        by_description = make_post(test_user, "Trip to the Beach")
        by_location = make_post(test_user, "Morning", location="beachfront")
        make_post(test_user, "Mountains")

        results = client.get("/api/v1/search/posts", params={"query": "BEACH"}).json()["data"]

        assert [p["id"] for p in results] == [by_location.id, by_description.id]
        assert results[0]["author"]["username"] == "alice"

    def test_missing_query(self, client):
        response = client.get("/api/v1/search/posts", params={"query": ""})

        assert response.status_code == 400
        assert response.json() == {"detail": "Search query is required"}
