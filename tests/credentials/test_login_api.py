from __future__ import annotations

from datetime import datetime, timezone

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from construction_portal.core.constants import ADMIN_PROFILES_COLLECTION, CREDENTIALS_COLLECTION
from construction_portal.credentials.service import CredentialResolver
from construction_portal.main import create_app


def test_login_returns_user_without_password(client, db):
    db[ADMIN_PROFILES_COLLECTION].docs.append(
        {"_id": "a1", "adminName": "Root Admin", "email": "root@acme.test", "password": "hunter2"}
    )

    resp = client.post("/auth/login", json={"email": "root@acme.test", "password": "hunter2"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["user"]["email"] == "root@acme.test"
    assert body["user"]["role"] == "superadmin"
    assert body["user"]["profileId"] == "a1"
    assert body["user"]["name"] == "Root Admin"
    assert "password" not in body["user"]


def test_identifier_takes_precedence_over_username_and_email(client, db, hashed):
    db[CREDENTIALS_COLLECTION].docs.append(
        {"_id": "c1", "username": "site.sup", "password": hashed("pw"), "role": "supervisor", "profileId": "p1"}
    )

    resp = client.post(
        "/auth/login",
        json={"identifier": " site.sup ", "username": "someone.else", "email": "x@y.test", "password": "pw"},
    )

    assert resp.status_code == 200
    assert resp.get_json()["user"]["username"] == "site.sup"


def test_blank_identifier_falls_through_to_next_field(client, db, hashed):
    db[CREDENTIALS_COLLECTION].docs.append(
        {"_id": "c1", "email": "x@y.test", "password": hashed("pw"), "role": "client", "profileId": "p1"}
    )

    resp = client.post("/auth/login", json={"identifier": "  ", "username": "", "email": "x@y.test", "password": "pw"})

    assert resp.status_code == 200


@pytest.mark.parametrize(
    "payload",
    [{"password": "pw"}, {"email": "root@acme.test"}, {"email": "root@acme.test", "password": ""}, {}],
)
def test_missing_fields_return_400(client, db, payload):
    resp = client.post("/auth/login", json=payload)

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Email or username and password are required"}
    assert db.total_calls() == 0


def test_non_json_body_returns_400(client):
    resp = client.post("/auth/login", data="not json", content_type="text/plain")

    assert resp.status_code == 400


def test_unknown_user_and_wrong_password_look_the_same(client, db, hashed):
    db[CREDENTIALS_COLLECTION].docs.append(
        {"_id": "c1", "email": "x@y.test", "password": hashed("pw"), "role": "client", "profileId": "p1"}
    )

    unknown = client.post("/auth/login", json={"email": "nobody@nowhere.test", "password": "pw"})
    wrong = client.post("/auth/login", json={"email": "x@y.test", "password": "nope"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.get_json() == wrong.get_json() == {"error": "Invalid email/username or password"}


def test_role_scoped_endpoints(client, db, hashed):
    db[CREDENTIALS_COLLECTION].docs.append(
        {"_id": "c1", "email": "x@y.test", "password": hashed("pw"), "role": "client", "profileId": "p1"}
    )

    assert client.post("/clients/login", json={"email": "x@y.test", "password": "pw"}).status_code == 200
    assert client.post("/supervisors/login", json={"email": "x@y.test", "password": "pw"}).status_code == 401
    assert client.post("/admin/login", json={"email": "x@y.test", "password": "pw"}).status_code == 401


def test_store_fault_returns_opaque_500(monkeypatch, conn, hasher, make_container):
    class DownRepo:
        def find_by_identifier(self, pattern, *, role=None):
            raise ServerSelectionTimeoutError("mongo-0:27017 refused connection")

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(make_container(CredentialResolver(DownRepo(), [], hasher)))

    resp = app.test_client().post("/auth/login", json={"email": "x@y.test", "password": "pw"})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error"}


def test_mixed_role_candidates_still_log_in(client, db, hashed):
    db[CREDENTIALS_COLLECTION].docs.extend(
        [
            {"_id": "sup1", "username": "shared", "role": "supplier", "profileId": "p0"},
            {"_id": "c1", "username": "shared", "password": hashed("pw"), "role": "client", "profileId": "p1"},
        ]
    )

    resp = client.post("/auth/login", json={"identifier": "shared", "password": "pw"})

    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "client"


def test_object_id_fields_are_serialized(client, db):
    project_id = ObjectId()
    db[CREDENTIALS_COLLECTION].docs.append(
        {
            "_id": ObjectId(),
            "email": "x@y.test",
            "password": "pw",
            "role": "client",
            "profileId": ObjectId(),
            "projectId": project_id,
            "sites": [{"siteId": project_id, "openedAt": datetime(2025, 3, 1, tzinfo=timezone.utc)}],
        }
    )

    resp = client.post("/auth/login", json={"email": "x@y.test", "password": "pw"})

    assert resp.status_code == 200
    user = resp.get_json()["user"]
    assert user["projectId"] == str(project_id)
    assert user["sites"] == [{"siteId": str(project_id), "openedAt": "2025-03-01T00:00:00+00:00"}]
    assert "password" not in user
