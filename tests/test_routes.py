"""Error responses are JSON with a single message field."""

from conftest import auth_header


def test_unknown_route_returns_json_404(client) -> None:
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert list(resp.get_json()) == ["error"]


def test_non_integer_id_returns_json_404(client) -> None:
    resp = client.get("/api/festivals/abc")
    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_wrong_method_returns_json(client) -> None:
    resp = client.patch("/api/festivals")
    assert resp.status_code == 405
    assert "error" in resp.get_json()


def test_non_object_body_is_rejected(client, user_token) -> None:
    resp = client.put("/api/users/subscriptions/regions", json=["bayern"], headers=auth_header(user_token))
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Request body must be a JSON object"}


def test_unhandled_error_returns_500(app, client, monkeypatch) -> None:
    import modules.festivals.routes as festival_routes

    def boom(**_kwargs):
        raise RuntimeError("database is gone")

    monkeypatch.setattr(festival_routes, "query_festivals", boom)
    resp = client.get("/api/festivals")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error"}
