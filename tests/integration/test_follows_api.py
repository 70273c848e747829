"""
Integration tests for the follows HTTP endpoints.

The app runs without its lifespan; the graph client dependency is
overridden with the in-memory FakeGraphClient.
"""

import pytest
from fastapi.testclient import TestClient

from follows_graph_service.config import RecommendationSettings, Settings
from follows_graph_service.web.app import create_app
from follows_graph_service.web.dependencies import get_graph_client


@pytest.fixture
def app(fake_client):
    app = create_app(Settings(recommendation=RecommendationSettings(target_count=10)))
    app.dependency_overrides[get_graph_client] = lambda: fake_client
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


class TestUserEndpoints:
    def test_add_user(self, client, fake_client):
        r = client.post("/user", json={"Id": 1, "Username": "ada"})
        assert r.status_code == 201
        assert fake_client.users == [(1, "ada")]

    def test_add_user_long_username(self, client, fake_client):
        name = "a" * 300
        r = client.post("/user", json={"Id": 1, "Username": name})
        assert r.status_code == 201
        assert fake_client.users == [(1, name)]

    def test_add_user_invalid_body(self, client):
        r = client.post("/user", json={"Username": "no id"})
        assert r.status_code == 422

    def test_add_user_store_error(self, client, fake_client):
        fake_client.failing.add("add user")
        r = client.post("/user", json={"Id": 1, "Username": "ada"})
        assert r.status_code == 500


class TestFollowEndpoints:
    def test_follow_returns_created_edge(self, client, fake_client):
        fake_client.seed([1, 2])
        r = client.post("/follows", json={"followerID": 1, "followedID": 2})
        assert r.status_code == 201
        assert r.json() == {"followerID": 1, "followedID": 2}

    def test_duplicate_follow_is_400(self, client, fake_client):
        fake_client.seed([1, 2], edges=[(1, 2)])
        r = client.post("/follows", json={"followerID": 1, "followedID": 2})
        assert r.status_code == 400
        assert "already follows" in r.json()["detail"]

    def test_follow_missing_user_is_400(self, client, fake_client):
        fake_client.seed([1])
        r = client.post("/follows", json={"followerID": 1, "followedID": 2})
        assert r.status_code == 400
        assert fake_client.edges == set()

    def test_self_follow_is_400(self, client, fake_client):
        fake_client.seed([1])
        r = client.post("/follows", json={"followerID": 1, "followedID": 1})
        assert r.status_code == 400

    def test_follow_store_error_is_500(self, client, fake_client):
        fake_client.seed([1, 2])
        fake_client.failing.add("follow user")
        r = client.post("/follows", json={"followerID": 1, "followedID": 2})
        assert r.status_code == 500

    def test_unfollow_path_order(self, client, fake_client):
        """Path is /unfollow/{followed}/{follower}."""
        fake_client.seed([1, 2], edges=[(1, 2)])
        r = client.delete("/unfollow/2/1")
        assert r.status_code == 200
        assert fake_client.edges == set()

    def test_unfollow_missing_edge_is_ok(self, client, fake_client):
        fake_client.seed([1, 2])
        assert client.delete("/unfollow/2/1").status_code == 200
        assert client.delete("/unfollow/2/1").status_code == 200

    def test_unfollow_store_error_is_400(self, client, fake_client):
        fake_client.failing.add("unfollow user")
        assert client.delete("/unfollow/2/1").status_code == 400

    def test_check_following(self, client, fake_client):
        fake_client.seed([1, 2], edges=[(1, 2)])

        r = client.request("GET", "/check-following", json={"followerID": 1, "followedID": 2})
        assert r.status_code == 200
        assert r.text == "User is following"

        r = client.request("GET", "/check-following", json={"followerID": 2, "followedID": 1})
        assert r.status_code == 404
        assert r.text == "User is not following"

    def test_check_following_store_error(self, client, fake_client):
        fake_client.failing.add("check follow")
        r = client.request("GET", "/check-following", json={"followerID": 1, "followedID": 2})
        assert r.status_code == 500


class TestListEndpoints:
    @pytest.fixture(autouse=True)
    def _graph(self, fake_client):
        fake_client.seed([1, 2, 3, 4], edges=[(1, 2), (1, 3), (4, 1)])

    def test_following(self, client):
        r = client.get("/user/following/1")
        assert r.status_code == 200
        assert sorted(e["followedID"] for e in r.json()) == [2, 3]
        assert all(e["followerID"] == 1 for e in r.json())

    def test_following_alias(self, client):
        assert client.get("/user/1").json() == client.get("/user/following/1").json()

    def test_following_ids(self, client):
        r = client.get("/user/following-ids/1")
        assert r.status_code == 200
        assert sorted(r.json()) == [2, 3]

    def test_followers(self, client):
        r = client.get("/user/followers/1")
        assert r.status_code == 200
        assert r.json() == [{"followerID": 4, "followedID": 1}]

    def test_empty_list(self, client):
        r = client.get("/user/following/2")
        assert r.status_code == 200
        assert r.json() == []

    def test_non_integer_user_id(self, client):
        assert client.get("/user/following/abc").status_code == 422

    @pytest.mark.parametrize(
        "path,operation",
        [
            ("/user/following/1", "get following"),
            ("/user/following-ids/1", "get following ids"),
            ("/user/followers/1", "get followers"),
        ],
    )
    def test_store_error_surfaces_as_500(self, client, fake_client, path, operation):
        fake_client.failing.add(operation)
        assert client.get(path).status_code == 500


class TestRecommendationEndpoint:
    def test_recommendations(self, client, fake_client):
        fake_client.seed([1, 2, 3, 4], edges=[(1, 2), (2, 3), (2, 4)])
        r = client.get("/recommendation/1")
        assert r.status_code == 200
        assert set(r.json()) == {3, 4}

    def test_recommendations_store_error(self, client, fake_client):
        fake_client.seed([1])
        fake_client.failing.add("backfill recommendations")
        assert client.get("/recommendation/1").status_code == 500


class TestSystemEndpoints:
    def test_liveness(self, client):
        assert client.get("/test").status_code == 200

    def test_health(self, client, fake_client):
        fake_client.seed([1, 2], edges=[(1, 2)])
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["graph"]["follow_count"] == 1

    def test_health_store_down(self, client, fake_client):
        fake_client.failing.add("connectivity check")
        assert client.get("/health").status_code == 503

    def test_cors_allows_any_origin(self, client):
        r = client.get("/test", headers={"Origin": "http://example.com"})
        assert r.headers["access-control-allow-origin"] == "*"


def test_uninitialized_graph_is_503():
    client = TestClient(create_app(Settings()))
    assert client.get("/user/following/1").status_code == 503
