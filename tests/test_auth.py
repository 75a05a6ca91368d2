"""
Auth + branding tests.

Tests:
1-6.  Register / login / refresh / me
7-11. Branding get/put and validation
"""

from roofmaster import models
from roofmaster.auth import create_refresh_token


def test_register_returns_tokens_and_user(register_user):
    data = register_user()
    assert data["success"] is True
    assert data["access_token"]
    assert data["token"] == data["access_token"]
    assert data["refresh_token"]
    assert data["user"]["username"] == "roofer"
    assert data["user"]["subscriptionStatus"] == "free"
    assert "password_hash" not in data["user"]


def test_register_requires_all_fields(client):
    resp = client.post("/api/auth/register", json={"email": "a@b.com", "password": "x"})
    assert resp.status_code == 400


def test_register_rejects_duplicates(client, register_user):
    register_user()
    same_email = client.post("/api/auth/register", json={
        "username": "other", "email": "roofer@example.com", "password": "pw123456",
    })
    assert same_email.status_code == 400
    assert same_email.json()["detail"] == "Email already registered"

    same_username = client.post("/api/auth/register", json={
        "username": "roofer", "email": "new@example.com", "password": "pw123456",
    })
    assert same_username.status_code == 400
    assert same_username.json()["detail"] == "Username already taken"


def test_login(client, register_user):
    register_user()
    ok = client.post("/api/auth/login", json={"email": "roofer@example.com", "password": "strongpassword123"})
    assert ok.status_code == 200
    assert ok.json()["user"]["email"] == "roofer@example.com"

    bad = client.post("/api/auth/login", json={"email": "roofer@example.com", "password": "wrong"})
    assert bad.status_code == 401

    unknown = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert unknown.status_code == 401


def test_me_requires_token(client, auth_headers):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401

    me = client.get("/api/auth/me", headers=auth_headers)
    assert me.status_code == 200
    assert me.json()["user"]["username"] == "roofer"


def test_refresh(client, register_user, db):
    data = register_user()
    resp = client.post("/api/auth/refresh", json={"refreshToken": data["refresh_token"]})
    assert resp.status_code == 200
    new_headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}
    assert client.get("/api/auth/me", headers=new_headers).status_code == 200

    # Access tokens can't be used to refresh
    wrong_type = client.post("/api/auth/refresh", json={"refresh_token": data["access_token"]})
    assert wrong_type.status_code == 401

    # Validly signed but never stored
    user = db.query(models.User).first()
    unknown = client.post("/api/auth/refresh", json={"refresh_token": create_refresh_token(user.id)})
    assert unknown.status_code == 401


def test_refresh_token_is_not_a_bearer_token(client, register_user):
    data = register_user()
    headers = {"Authorization": f"Bearer {data['refresh_token']}"}
    assert client.get("/api/auth/me", headers=headers).status_code == 401


# ============================================================
# BRANDING
# ============================================================

def test_branding_defaults_empty(client, auth_headers):
    resp = client.get("/api/branding", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["branding"] == {"companyName": "", "companyLogo": None}


def test_branding_update(client, auth_headers):
    logo = "data:image/png;base64,iVBORw0KGgo="
    resp = client.put("/api/branding", json={"companyName": "Acme Roofing", "companyLogo": logo},
                      headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["branding"]["companyName"] == "Acme Roofing"

    again = client.get("/api/branding", headers=auth_headers).json()["branding"]
    assert again == {"companyName": "Acme Roofing", "companyLogo": logo}


def test_branding_name_too_long(client, auth_headers):
    resp = client.put("/api/branding", json={"companyName": "x" * 101}, headers=auth_headers)
    assert resp.status_code == 400


def test_branding_rejects_bad_logo_scheme(client, auth_headers):
    resp = client.put("/api/branding", json={"companyLogo": "http://insecure.example.com/logo.png"},
                      headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid logo URI format"


def test_branding_rejects_huge_logo(client, auth_headers):
    huge = "data:image/png;base64," + "A" * (3 * 1024 * 1024)
    resp = client.put("/api/branding", json={"companyLogo": huge}, headers=auth_headers)
    assert resp.status_code == 400
    assert "too large" in resp.json()["detail"]


def test_branding_requires_auth(client):
    assert client.get("/api/branding").status_code == 401
