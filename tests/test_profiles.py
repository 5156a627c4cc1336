"""
Tests for the profile directory endpoints.
"""
from models.profile import Profile


def my_profile(client, account):
    return client.get("/profiles/me", headers=account.headers).get_json()["data"]


def test_list_excludes_caller(client, alice, bob, carol):
    rows = client.get("/profiles", headers=alice.headers).get_json()["data"]

    assert {row["user_id"] for row in rows} == {bob.id, carol.id}


def test_list_for_one_user(client, alice, bob):
    rows = client.get(f"/profiles?user_id={bob.id}", headers=alice.headers).get_json()["data"]

    assert [row["name"] for row in rows] == ["Bob"]


def test_get_profile(client, alice, bob):
    profile_id = my_profile(client, bob)["id"]

    response = client.get(f"/profiles/{profile_id}", headers=alice.headers)

    assert response.status_code == 200
    assert response.get_json()["data"]["user_id"] == bob.id
    assert client.get("/profiles/missing", headers=alice.headers).status_code == 404


def test_update_own_profile(client, alice):
    profile_id = my_profile(client, alice)["id"]

    response = client.put(
        f"/profiles/{profile_id}",
        json={"bio": "tea and rabbits", "age": 27, "gender": "F", "looking_for": "A"},
        headers=alice.headers,
    )

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["bio"] == "tea and rabbits"
    assert data["age"] == 27
    assert data["name"] == "Alice Liddell"


def test_update_validation(client, alice):
    profile_id = my_profile(client, alice)["id"]

    under_age = client.put(f"/profiles/{profile_id}", json={"age": 16}, headers=alice.headers)
    bad_gender = client.put(f"/profiles/{profile_id}", json={"gender": "X"}, headers=alice.headers)
    nothing = client.put(f"/profiles/{profile_id}", json={"unknown": 1}, headers=alice.headers)

    assert under_age.status_code == 400
    assert under_age.get_json()["details"]["age"]
    assert bad_gender.status_code == 400
    assert nothing.status_code == 400
    assert nothing.get_json()["message"] == "no fields to update"


def test_cannot_touch_someone_elses_profile(client, alice, bob):
    profile_id = my_profile(client, bob)["id"]

    assert client.put(f"/profiles/{profile_id}", json={"bio": "x"}, headers=alice.headers).status_code == 403
    assert client.delete(f"/profiles/{profile_id}", headers=alice.headers).status_code == 403


def test_one_profile_per_user(client, alice):
    response = client.post("/profiles", json={"name": "Another"}, headers=alice.headers)

    assert response.status_code == 409


def test_delete_then_recreate(client, storage, alice):
    profile_id = my_profile(client, alice)["id"]

    assert client.delete(f"/profiles/{profile_id}", headers=alice.headers).status_code == 200
    assert client.get("/profiles/me", headers=alice.headers).status_code == 404

    response = client.post("/profiles", json={"name": "Alice", "age": 30}, headers=alice.headers)

    assert response.status_code == 201
    assert response.get_json()["data"]["user_id"] == alice.id
    assert storage.count(Profile) == 1
