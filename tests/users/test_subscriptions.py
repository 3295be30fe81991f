"""Region and festival subscriptions."""

from conftest import auth_header, register
from extensions import db
from models import FestivalSubscription
from modules.users import subscriptions as subscriptions_module
from modules.users.subscriptions import list_subscribed_festivals


def _user_id(client, token) -> int:
    return client.get("/api/users/me", headers=auth_header(token)).get_json()["id"]


def test_region_update_filters_unknown_regions(client, user_token) -> None:
    resp = client.put(
        "/api/users/subscriptions/regions",
        json={"regions": ["tirol", "schwaben", "bayern", "tirol"]},
        headers=auth_header(user_token),
    )
    assert resp.status_code == 200
    assert resp.get_json()["subscriptions"]["regions"] == ["bayern", "tirol"]


def test_region_update_replaces_previous_set(client, user_token) -> None:
    headers = auth_header(user_token)
    client.put("/api/users/subscriptions/regions", json={"regions": ["bayern"]}, headers=headers)
    resp = client.put("/api/users/subscriptions/regions", json={"regions": ["oesterreich"]}, headers=headers)
    assert resp.get_json()["subscriptions"]["regions"] == ["oesterreich"]


def test_region_update_requires_list(client, user_token) -> None:
    resp = client.put(
        "/api/users/subscriptions/regions", json={"regions": "bayern"}, headers=auth_header(user_token)
    )
    assert resp.status_code == 400


def test_region_update_strict_mode_rejects(client, app, user_token) -> None:
    app.config["STRICT_REGION_SUBSCRIPTIONS"] = True
    resp = client.put(
        "/api/users/subscriptions/regions",
        json={"regions": ["bayern", "schwaben"]},
        headers=auth_header(user_token),
    )
    assert resp.status_code == 400
    assert "schwaben" in resp.get_json()["error"]


def test_subscription_endpoints_require_token(client) -> None:
    assert client.get("/api/users/subscriptions/festivals").status_code == 401
    assert client.post("/api/users/subscriptions/festivals/1").status_code == 401
    assert client.put("/api/users/subscriptions/regions", json={"regions": []}).status_code == 401


def test_subscribe_twice_fails(client, user_token, make_festival) -> None:
    festival = make_festival()
    headers = auth_header(user_token)

    first = client.post(f"/api/users/subscriptions/festivals/{festival['id']}", headers=headers)
    assert first.status_code == 200
    assert first.get_json()["subscriptions"]["festivals"] == [festival["id"]]

    second = client.post(f"/api/users/subscriptions/festivals/{festival['id']}", headers=headers)
    assert second.status_code == 400
    assert second.get_json() == {"error": "Festival already subscribed"}


def test_subscribe_unknown_festival(client, user_token) -> None:
    resp = client.post("/api/users/subscriptions/festivals/999", headers=auth_header(user_token))
    assert resp.status_code == 404


def test_unsubscribe_is_idempotent(client, user_token, make_festival) -> None:
    festival = make_festival()
    headers = auth_header(user_token)
    client.post(f"/api/users/subscriptions/festivals/{festival['id']}", headers=headers)

    first = client.delete(f"/api/users/subscriptions/festivals/{festival['id']}", headers=headers)
    second = client.delete(f"/api/users/subscriptions/festivals/{festival['id']}", headers=headers)
    assert first.status_code == second.status_code == 200
    assert second.get_json()["subscriptions"]["festivals"] == []


def test_list_subscribed_festivals_sorted(client, user_token, make_festival) -> None:
    late = make_festival(name="Christkindlesmarkt", startDate="2025-11-28", endDate="2025-12-24")
    early = make_festival(name="Opernball", region="oesterreich", startDate="2025-02-20", endDate="2025-02-20")
    make_festival(name="Almabtrieb", region="tirol", startDate="2025-09-26", endDate="2025-09-26")
    headers = auth_header(user_token)
    for fest in (late, early):
        client.post(f"/api/users/subscriptions/festivals/{fest['id']}", headers=headers)

    resp = client.get("/api/users/subscriptions/festivals", headers=headers)
    assert resp.status_code == 200
    assert [f["name"] for f in resp.get_json()] == ["Opernball", "Christkindlesmarkt"]


def test_delete_festival_cascades_to_subscriptions(client, admin_token, make_festival) -> None:
    keep = make_festival(name="Keep")
    gone = make_festival(name="Gone")
    tokens = [register(client, username=f"u{i}", email=f"u{i}@example.com").get_json()["token"] for i in range(2)]
    for token in tokens:
        for fest in (keep, gone):
            client.post(f"/api/users/subscriptions/festivals/{fest['id']}", headers=auth_header(token))

    resp = client.delete(f"/api/festivals/{gone['id']}", headers=auth_header(admin_token))
    assert resp.status_code == 200

    for token in tokens:
        me = client.get("/api/users/me", headers=auth_header(token)).get_json()
        assert me["subscriptions"]["festivals"] == [keep["id"]]
        listed = client.get("/api/users/subscriptions/festivals", headers=auth_header(token)).get_json()
        assert [f["name"] for f in listed] == ["Keep"]


def test_orphaned_subscriptions_are_skipped(client, app, user_token, make_festival) -> None:
    festival = make_festival()
    user_id = _user_id(client, user_token)
    with app.app_context():
        db.session.add(FestivalSubscription(user_id=user_id, festival_id=festival["id"]))
        db.session.add(FestivalSubscription(user_id=user_id, festival_id=4242))
        db.session.commit()
        assert [f.id for f in list_subscribed_festivals(user_id)] == [festival["id"]]


def test_subscribe_race_on_unique_index(client, app, user_token, make_festival, monkeypatch) -> None:
    festival = make_festival()
    headers = auth_header(user_token)
    client.post(f"/api/users/subscriptions/festivals/{festival['id']}", headers=headers)
    # a parallel request inserted the row after our existence check
    monkeypatch.setattr(subscriptions_module, "_find_subscription", lambda user_id, festival_id: None)

    resp = client.post(f"/api/users/subscriptions/festivals/{festival['id']}", headers=headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Festival already subscribed"}
    with app.app_context():
        assert FestivalSubscription.query.filter_by(festival_id=festival["id"]).count() == 1
