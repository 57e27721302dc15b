import pytest

from family_registry.services.credential_service import create_credential


@pytest.fixture
def submission(client):
    res = client.post("/submissions/", json={
        "form_data": {"firstName": "Meera", "lastName": "Joshi", "email": "meera@example.com", "vansh": 4},
        "submitted_by_name": "Meera Joshi",
        "submitted_by_email": "meera@example.com",
    })
    assert res.status_code == 201
    return res.json()


def test_submission_intake(submission):
    assert submission["status"] == "pending"
    assert submission["kind"] == "hierarchy_form"
    assert submission["member_ser_no"] is None


def test_submission_intake_validation(client):
    res = client.post("/submissions/", json={"form_data": {"phone": "123"}})
    assert res.status_code == 422
    res = client.post("/submissions/", json={"form_data": {"firstName": "A"}, "submitted_by_email": "not-an-email"})
    assert res.status_code == 422


def test_pending_list_and_detail(client, admin_headers, submission):
    res = client.get("/admin/submissions", headers=admin_headers)
    assert res.status_code == 200
    assert [s["id"] for s in res.json()] == [submission["id"]]

    res = client.get(f"/admin/submissions/{submission['id']}", headers=admin_headers)
    assert res.json()["form_data"]["firstName"] == "Meera"
    assert client.get("/admin/submissions/nope", headers=admin_headers).status_code == 404


def test_approve_flow(client, admin, admin_headers, submission):
    url = f"/admin/submissions/{submission['id']}/approve"
    res = client.post(url, json={"approval_comments": "looks right"}, headers=admin_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["member"]["ser_no"] == 1
    assert body["member"]["full_name"] == "Meera Joshi"
    assert body["member"]["vansh"] == "4"
    assert body["credentials_issued"] is True
    assert body["login_username"] == "meera@example.com"

    again = client.post(url, headers=admin_headers)
    assert again.status_code == 409

    reject = client.post(f"/admin/submissions/{submission['id']}/reject", headers=admin_headers)
    assert reject.status_code == 409

    approved = client.get("/admin/submissions", params={"status": "approved"}, headers=admin_headers).json()
    assert approved[0]["reviewed_by"] == admin.id
    assert approved[0]["approval_comments"] == "looks right"
    assert approved[0]["member_ser_no"] == 1
    assert client.get("/admin/submissions", headers=admin_headers).json() == []


def test_approve_with_chosen_login(client, admin_headers, submission):
    res = client.post(
        f"/admin/submissions/{submission['id']}/approve",
        json={"username": "meera", "password": "first-login"},
        headers=admin_headers,
    )
    assert res.json()["login_username"] == "meera"

    token = client.post("/auth/token", data={"username": "meera", "password": "first-login"})
    assert token.status_code == 200


def test_reject_flow(client, admin_headers, submission):
    url = f"/admin/submissions/{submission['id']}/reject"
    res = client.post(url, json={"reason": "incomplete"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["status"] == "rejected"
    assert res.json()["rejection_reason"] == "incomplete"

    assert client.post(url, headers=admin_headers).status_code == 409
    res = client.post(f"/admin/submissions/{submission['id']}/approve", headers=admin_headers)
    assert res.status_code == 409


def test_approve_unknown_submission(client, admin_headers):
    assert client.post("/admin/submissions/missing/approve", headers=admin_headers).status_code == 404
    assert client.post("/admin/submissions/missing/reject", headers=admin_headers).status_code == 404


def test_next_ser_no_and_stats(client, admin_headers, submission, add_members):
    add_members({"ser_no": 3})
    assert client.get("/admin/next-ser-no", headers=admin_headers).json() == {"next_ser_no": 4}

    client.post(f"/admin/submissions/{submission['id']}/approve", headers=admin_headers)
    stats = client.get("/admin/stats", headers=admin_headers).json()
    assert stats["approved_registrations"] == 1
    assert stats["pending_registrations"] == 0
    assert stats["total_members"] == 2
    assert stats["total_logins"] == 2
    assert client.get("/admin/next-ser-no", headers=admin_headers).json() == {"next_ser_no": 5}


def test_login_administration(client, db, admin, admin_headers, test_settings):
    user = create_credential(db, settings=test_settings, username="ravi", password="old-pass")

    logins = client.get("/admin/logins", params={"search": "RAV"}, headers=admin_headers).json()
    assert [c["username"] for c in logins] == ["ravi"]

    res = client.put(f"/admin/logins/{user.id}/reset-password", json={"new_password": "new-pass"},
                     headers=admin_headers)
    assert res.status_code == 200
    assert client.post("/auth/token", data={"username": "ravi", "password": "new-pass"}).status_code == 200

    res = client.put(f"/admin/logins/{user.id}/toggle-status", headers=admin_headers)
    assert res.json()["is_active"] is False
    assert client.post("/auth/token", data={"username": "ravi", "password": "new-pass"}).status_code == 401

    assert client.put(f"/admin/logins/{admin.id}/toggle-status", headers=admin_headers).status_code == 400
    assert client.put("/admin/logins/nope/toggle-status", headers=admin_headers).status_code == 404


def member(client, ser_no):
    res = client.get(f"/family/members/{ser_no}")
    assert res.status_code == 200
    return res.json()


def test_edit_member_moves_it_between_fathers(client, admin_headers, add_members):
    add_members(
        {"ser_no": 1, "first_name": "Old", "son_daughter_ser_nos": [3]},
        {"ser_no": 2, "first_name": "New"},
        {"ser_no": 3, "first_name": "Child", "father_ser_no": 1},
    )

    res = client.put("/admin/members/3", json={"father_ser_no": 2, "occupation": "Teacher"},
                     headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["father_ser_no"] == 2
    assert res.json()["occupation"] == "Teacher"
    assert member(client, 1)["son_daughter_ser_nos"] == []
    assert member(client, 2)["son_daughter_ser_nos"] == [3]

    res = client.put("/admin/members/3", json={"father_ser_no": None}, headers=admin_headers)
    assert res.json()["father_ser_no"] is None
    assert member(client, 2)["son_daughter_ser_nos"] == []
    assert member(client, 3)["occupation"] == "Teacher"


def test_edit_member_validation(client, admin_headers, add_members):
    add_members({"ser_no": 1, "first_name": "Only"})
    assert client.put("/admin/members/1", json={"father_ser_no": 99}, headers=admin_headers).status_code == 422
    assert client.put("/admin/members/1", json={"spouse_ser_no": 1}, headers=admin_headers).status_code == 422
    assert client.put("/admin/members/42", json={"first_name": "X"}, headers=admin_headers).status_code == 404
    assert client.put("/admin/members/1", json={"first_name": "X"}).status_code == 401
    assert member(client, 1)["first_name"] == "Only"


def test_delete_member_detaches_it_and_keeps_the_counter(client, db, admin_headers, add_members, test_settings):
    add_members(
        {"ser_no": 1, "first_name": "Father", "son_daughter_ser_nos": [3]},
        {"ser_no": 2, "first_name": "Wife", "spouse_ser_no": 3},
        {"ser_no": 3, "first_name": "Son", "father_ser_no": 1, "spouse_ser_no": 2},
    )
    create_credential(db, settings=test_settings, username="son", password="son-pass", subject_id=3)

    res = client.delete("/admin/members/3", headers=admin_headers)
    assert res.status_code == 204

    assert client.get("/family/members/3").status_code == 404
    assert member(client, 1)["son_daughter_ser_nos"] == []
    assert member(client, 2)["spouse_ser_no"] is None
    logins = client.get("/admin/logins", headers=admin_headers).json()
    assert [c["username"] for c in logins] == ["admin"]
    assert client.get("/admin/next-ser-no", headers=admin_headers).json() == {"next_ser_no": 4}

    assert client.delete("/admin/members/3", headers=admin_headers).status_code == 404
