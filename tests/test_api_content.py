import pytest

from family_registry.services.credential_service import create_credential


@pytest.fixture
def vansh_users(db, add_members, auth_headers, test_settings):
    add_members(
        {"ser_no": 1, "first_name": "Kiran", "last_name": "More", "vansh": "1"},
        {"ser_no": 2, "first_name": "Neha", "last_name": "Shinde", "vansh": "2"},
    )
    one = create_credential(db, settings=test_settings, username="kiran", password="pw-one", subject_id=1)
    two = create_credential(db, settings=test_settings, username="neha", password="pw-two", subject_id=2)
    return auth_headers(one), auth_headers(two)


def titles(res):
    assert res.status_code == 200
    return sorted(item["title"] for item in res.json())


def test_news_visibility_by_vansh(client, admin_headers, vansh_users):
    one, two = vansh_users
    client.post("/news/", json={"title": "Everyone", "content": "all vansh"}, headers=admin_headers)
    client.post("/news/", json={"title": "Vansh 1 only", "content": "scoped",
                                "visible_to_all_vansh": False, "visible_vansh_numbers": ["1"]},
                headers=admin_headers)
    client.post("/news/", json={"title": "Draft", "content": "unpublished", "is_published": False},
                headers=admin_headers)

    assert titles(client.get("/news/", headers=one)) == ["Everyone", "Vansh 1 only"]
    assert titles(client.get("/news/", headers=two)) == ["Everyone"]
    assert titles(client.get("/news/", headers=admin_headers)) == ["Draft", "Everyone", "Vansh 1 only"]


def test_news_requires_login(client):
    assert client.get("/news/").status_code == 401


def test_member_authored_news(client, vansh_users):
    one, _ = vansh_users
    res = client.post("/news/", json={"title": "Wedding", "content": "invite", "category": "family"},
                      headers=one)
    assert res.status_code == 201
    assert res.json()["author_ser_no"] == 1
    assert res.json()["author_name"] == "Kiran More"
    assert res.json()["priority"] == "low"

    assert titles(client.get("/news/", params={"category": "family"}, headers=one)) == ["Wedding"]
    assert titles(client.get("/news/", params={"category": "other"}, headers=one)) == []


def test_news_update_and_delete_are_admin_only(client, admin_headers, vansh_users):
    one, _ = vansh_users
    news_id = client.post("/news/", json={"title": "Old", "content": "x"}, headers=one).json()["id"]

    assert client.put(f"/news/{news_id}", json={"title": "New"}, headers=one).status_code == 403
    assert client.delete(f"/news/{news_id}", headers=one).status_code == 403

    res = client.put(f"/news/{news_id}", json={"title": "New"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["title"] == "New"
    assert res.json()["content"] == "x"

    assert client.delete(f"/news/{news_id}", headers=admin_headers).status_code == 204
    assert client.delete(f"/news/{news_id}", headers=admin_headers).status_code == 404
    assert client.put(f"/news/{news_id}", json={"title": "x"}, headers=admin_headers).status_code == 404


def test_event_visibility_and_admin_edits(client, admin_headers, vansh_users):
    one, two = vansh_users
    res = client.post("/events/", json={
        "title": "Puja", "event_date": "2026-11-01T10:00:00Z", "event_type": "religious",
        "visible_to_all_vansh": False, "visible_vansh_numbers": ["2"],
    }, headers=two)
    assert res.status_code == 201
    event = res.json()
    assert event["created_by_ser_no"] == 2
    assert event["priority"] == "medium"

    assert titles(client.get("/events/", headers=one)) == []
    assert titles(client.get("/events/", headers=two)) == ["Puja"]
    assert titles(client.get("/events/", params={"event_type": "religious"}, headers=admin_headers)) == ["Puja"]

    res = client.put(f"/events/{event['id']}", json={"visible_to_all_vansh": True}, headers=admin_headers)
    assert res.json()["visible_to_all_vansh"] is True
    assert titles(client.get("/events/", headers=one)) == ["Puja"]

    assert client.delete(f"/events/{event['id']}", headers=two).status_code == 403
    assert client.delete(f"/events/{event['id']}", headers=admin_headers).status_code == 204
    assert titles(client.get("/events/", headers=admin_headers)) == []
