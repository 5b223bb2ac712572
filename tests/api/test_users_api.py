# tests/api/test_users_api.py
import pytest

@pytest.mark.parametrize("role_fixture", ["viewer", "editor"])
def test_non_admin_cannot_manage_users(client, headers_for, request, role_fixture, admin):
    user = request.getfixturevalue(role_fixture)
    headers = headers_for(user)

    assert client.get("/users", headers=headers).status_code == 403
    assert client.get(f"/users/{admin.id}", headers=headers).status_code == 403
    response = client.put(f"/users/{user.id}", json={"role": "ADMIN"}, headers=headers)
    assert response.status_code == 403

    me = client.get("/auth/me", headers=headers).json()["data"]
    assert me["role"] == user.role.value

def test_list_users_paginated(client, admin, make_user, headers_for):
    for _ in range(4):
        make_user()

    response = client.get("/users", params={"page": 1, "limit": 2}, headers=headers_for(admin))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 5
    assert data["totalPages"] == 3
    assert len(data["users"]) == 2
    for user in data["users"]:
        assert set(user) >= {"id", "username", "name", "role", "createdAt"}
        assert "hashedPassword" not in user and "password" not in user

def test_get_user(client, admin, viewer, headers_for):
    response = client.get(f"/users/{viewer.id}", headers=headers_for(admin))
    assert response.status_code == 200
    assert response.json()["data"]["username"] == viewer.username

    missing = client.get("/users/nope", headers=headers_for(admin))
    assert missing.status_code == 404
    assert missing.json()["message"] == "User not found"

def test_admin_changes_role_and_it_takes_effect(client, admin, viewer, headers_for, book_payload):
    viewer_headers = headers_for(viewer)
    assert client.post("/books", json=book_payload(), headers=viewer_headers).status_code == 403

    response = client.put(f"/users/{viewer.id}", json={"role": "EDITOR"}, headers=headers_for(admin))
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["roleChanged"] is True
    assert body["data"]["role"] == "EDITOR"

    # same credential, role is read from the store on every request
    assert client.post("/books", json=book_payload(), headers=viewer_headers).status_code == 201

def test_update_name_only(client, admin, editor, headers_for):
    response = client.put(f"/users/{editor.id}", json={"name": "Renamed"}, headers=headers_for(admin))

    body = response.json()
    assert response.status_code == 200
    assert body["roleChanged"] is False
    assert body["data"]["name"] == "Renamed"
    assert body["data"]["role"] == "EDITOR"

def test_admin_cannot_change_own_role(client, admin, headers_for):
    headers = headers_for(admin)

    for role in ("VIEWER", "ADMIN"):
        response = client.put(f"/users/{admin.id}", json={"role": role}, headers=headers)
        assert response.status_code == 403
        assert response.json()["message"] == "You cannot update your own role"

    assert client.get(f"/users/{admin.id}", headers=headers).json()["data"]["role"] == "ADMIN"
    renamed = client.put(f"/users/{admin.id}", json={"name": "Boss"}, headers=headers)
    assert renamed.status_code == 200

def test_update_user_invalid_role(client, admin, viewer, headers_for):
    response = client.put(f"/users/{viewer.id}", json={"role": "OWNER"}, headers=headers_for(admin))
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "role"

def test_update_unknown_user(client, admin, headers_for):
    response = client.put("/users/ghost", json={"name": "Ghost"}, headers=headers_for(admin))
    assert response.status_code == 404
