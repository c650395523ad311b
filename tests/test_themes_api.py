import pytest

from nums_api.core.errors import ValidationError
from nums_api.services.themes import create_theme, validate_theme_colors


def _create(client, headers, **overrides):
    payload = {"name": "ocean", "mode": "dark", "colors": overrides.pop("colors")}
    payload.update(overrides)
    return client.post("/api/admin/themes", json=payload, headers=headers)


def test_color_validation(colors):
    assert validate_theme_colors(colors) == colors

    missing = dict(colors)
    missing.pop("on-surface")
    with pytest.raises(ValidationError) as excinfo:
        validate_theme_colors(missing)
    assert excinfo.value.error_code == "INVALID_THEME_COLORS"

    with pytest.raises(ValidationError):
        validate_theme_colors({**colors, "primary": "#12345"})
    with pytest.raises(ValidationError):
        validate_theme_colors({**colors, "primary": "red"})


def test_admin_theme_crud(client, admin_headers, colors):
    created = _create(client, admin_headers, colors=colors, name_kr="바다")
    assert created.status_code == 201
    theme = created.json()["theme"]
    assert theme["mode"] == "dark"
    assert theme["is_default"] is False

    theme_url = f"/api/admin/themes/{theme['theme_id']}"
    updated = client.put(
        theme_url, json={"mode": "light", "variables": {"radius": 4}}, headers=admin_headers
    )
    assert updated.json()["theme"]["mode"] == "light"
    assert updated.json()["theme"]["variables"] == {"radius": 4}
    assert updated.json()["theme"]["name_kr"] == "바다"

    fetched = client.get(theme_url, headers=admin_headers).json()["theme"]
    assert fetched["variables"] == {"radius": 4}

    assert client.delete(theme_url, headers=admin_headers).status_code == 200
    missing = client.get(theme_url, headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["errorCode"] == "THEME_NOT_FOUND"


def test_theme_creation_errors(client, admin_headers, colors):
    _create(client, admin_headers, colors=colors)

    duplicate = _create(client, admin_headers, colors=colors)
    assert duplicate.status_code == 409
    assert duplicate.json()["errorCode"] == "THEME_NAME_ALREADY_EXISTS"

    bad_mode = _create(client, admin_headers, colors=colors, name="other", mode="sepia")
    assert bad_mode.json()["errorCode"] == "INVALID_THEME_MODE"

    incomplete = client.post(
        "/api/admin/themes", json={"name": "x"}, headers=admin_headers
    )
    assert incomplete.json()["errorCode"] == "MISSING_REQUIRED_FIELDS"


def test_default_theme_cannot_be_deleted(client, admin_headers, default_theme):
    response = client.delete(
        f"/api/admin/themes/{default_theme.theme_id}", headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["errorCode"] == "CANNOT_DELETE_DEFAULT_THEME"


def test_referenced_default_theme_cannot_be_deleted(
    client, register, admin_headers, default_theme
):
    _, headers = register()
    client.put(
        "/api/users/me/themes", json={"theme_id": default_theme.theme_id}, headers=headers
    )

    response = client.delete(
        f"/api/admin/themes/{default_theme.theme_id}", headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["errorCode"] == "CANNOT_DELETE_DEFAULT_THEME"


def test_theme_name_length_is_checked_on_every_write(client, admin_headers, colors):
    too_long_kr = _create(client, admin_headers, colors=colors, name_kr="가" * 51)
    assert too_long_kr.json()["errorCode"] == "INVALID_THEME_NAME"

    theme_id = _create(client, admin_headers, colors=colors).json()["theme"]["theme_id"]
    url = f"/api/admin/themes/{theme_id}"

    for field in ("name", "name_kr"):
        response = client.put(url, json={field: "x" * 80}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["errorCode"] == "INVALID_THEME_NAME"

    assert client.get(url, headers=admin_headers).json()["theme"]["name"] == "ocean"


def test_theme_in_use_cannot_be_deleted(client, register, admin_headers, colors):
    theme = create_theme(name="forest", mode="light", colors=colors)
    _, headers = register()
    client.put("/api/users/me/themes", json={"theme_id": theme.theme_id}, headers=headers)

    response = client.delete(f"/api/admin/themes/{theme.theme_id}", headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["errorCode"] == "THEME_IN_USE"
    assert response.json()["references"] == 1


def test_public_catalogue_reports_active_theme(client, register, default_theme, colors):
    create_theme(name="night", mode="dark", colors=colors)

    anonymous = client.get("/api/themes").json()
    assert len(anonymous["themes"]) == 2
    assert anonymous["activeThemeId"] is None

    _, headers = register()
    client.put(
        "/api/users/me/themes", json={"theme_id": default_theme.theme_id}, headers=headers
    )
    signed_in = client.get("/api/themes", headers=headers).json()
    assert signed_in["activeThemeId"] == default_theme.theme_id

    with_bad_token = client.get("/api/themes", headers={"Authorization": "Bearer x"})
    assert with_bad_token.status_code == 200
    assert with_bad_token.json()["activeThemeId"] is None


def test_my_themes_selection(client, register, default_theme, colors):
    create_theme(name="night", mode="dark", colors=colors)
    _, headers = register()

    before = client.get("/api/users/me/themes", headers=headers).json()
    assert [theme["name"] for theme in before["availableThemes"]] == ["light"]
    assert before["activeTheme"] is None

    selected = client.put(
        "/api/users/me/themes", json={"theme_id": default_theme.theme_id}, headers=headers
    )
    assert selected.json()["userConfig"]["active_theme"] == default_theme.theme_id

    after = client.get("/api/users/me/themes", headers=headers).json()
    assert after["activeTheme"]["theme_id"] == default_theme.theme_id


@pytest.mark.parametrize("theme_id", [None, "1", 0, -3, True, 1.5])
def test_select_theme_rejects_bad_ids(client, register, theme_id):
    _, headers = register()

    response = client.put(
        "/api/users/me/themes", json={"theme_id": theme_id}, headers=headers
    )

    assert response.status_code == 400
    assert response.json()["errorCode"] == "INVALID_THEME_ID"


def test_select_unknown_theme(client, register):
    _, headers = register()

    response = client.put("/api/users/me/themes", json={"theme_id": 99}, headers=headers)

    assert response.status_code == 404
    assert response.json()["errorCode"] == "THEME_NOT_FOUND"
