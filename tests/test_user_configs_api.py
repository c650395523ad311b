def test_config_lifecycle(client, register, default_theme):
    user_id, headers = register()
    url = f"/api/user-configs/{user_id}"

    assert client.get(url, headers=headers).json()["errorCode"] == "USER_CONFIG_NOT_FOUND"

    created = client.post(
        "/api/user-configs",
        json={"active_theme": default_theme.theme_id},
        headers=headers,
    )
    assert created.status_code == 201
    assert created.json()["config"]["user_id"] == user_id

    again = client.post(
        "/api/user-configs",
        json={"active_theme": default_theme.theme_id},
        headers=headers,
    )
    assert again.status_code == 409
    assert again.json()["errorCode"] == "USER_CONFIG_ALREADY_EXISTS"

    detail = client.get(url, headers=headers).json()
    assert detail["theme"]["theme_id"] == default_theme.theme_id

    unknown = client.put(url, json={"active_theme": 999}, headers=headers)
    assert unknown.json()["errorCode"] == "THEME_NOT_FOUND"

    assert client.delete(url, headers=headers).status_code == 200
    assert client.get(url, headers=headers).status_code == 404


def test_config_requires_theme(client, register):
    _, headers = register()

    response = client.post("/api/user-configs", json={}, headers=headers)

    assert response.status_code == 400
    assert response.json()["errorCode"] == "MISSING_REQUIRED_FIELDS"


def test_other_accounts_config_is_forbidden(client, register, default_theme):
    alice_id, alice = register("alice123")
    _, bob = register("bob_456")
    client.post(
        "/api/user-configs", json={"active_theme": default_theme.theme_id}, headers=alice
    )

    for method in ("get", "delete"):
        response = getattr(client, method)(f"/api/user-configs/{alice_id}", headers=bob)
        assert response.status_code == 403
        assert response.json()["errorCode"] == "OWNERSHIP_REQUIRED"

    put = client.put(
        f"/api/user-configs/{alice_id}",
        json={"active_theme": default_theme.theme_id},
        headers=bob,
    )
    assert put.status_code == 403
