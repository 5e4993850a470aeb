import os
import sys
import pytest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, ROOT_DIR)

from user_settings import create_app
from user_settings.extensions import db
from user_settings.models.user import User
from user_settings.utils.auth import create_token


@pytest.fixture()
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SQLALCHEMY_ENGINE_OPTIONS": {},
        "SECRET_KEY": "test-secret-key-with-enough-length-for-hs256",
    })
    with app.app_context():
        db.create_all()
        db.session.add(User(name="User Demo", email="user@example.com"))
        db.session.commit()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def user_id(app, email="user@example.com"):
    with app.app_context():
        return User.query.filter_by(email=email).first().id


def auth_headers(app, uid=None):
    with app.app_context():
        token = create_token(uid if uid is not None else user_id(app))
    return {"Authorization": f"Bearer {token}"}


def stored_settings(app):
    with app.app_context():
        return db.session.get(User, user_id(app)).settings


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json()["database"] == "healthy"


def test_requires_bearer_token(client, app):
    r = client.get("/user-settings/mcp-config")
    assert r.status_code == 401
    assert r.get_json()["error"]["code"] == "UNAUTHORIZED"

    r = client.patch("/user-settings/nps-survey", json={"responded": True, "lastShownAt": 1},
                     headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401
    assert r.get_json()["error"]["message"] == "Invalid token"
    assert stored_settings(app) is None


def test_update_nps_survey_responded(client, app):
    r = client.patch("/user-settings/nps-survey", headers=auth_headers(app), json={
        "responded": True,
        "waitingForResponse": True,
        "ignoredCount": 3,
        "lastShownAt": 1700000000000,
    })
    assert r.status_code == 200, r.data
    assert r.data == b""
    assert stored_settings(app) == {"npsSurvey": {"responded": True, "lastShownAt": 1700000000000}}


def test_update_nps_survey_waiting(client, app):
    r = client.patch("/user-settings/nps-survey", headers=auth_headers(app), json={
        "waitingForResponse": True,
        "ignoredCount": 2,
        "lastShownAt": 5,
    })
    assert r.status_code == 200, r.data
    assert stored_settings(app)["npsSurvey"] == {"waitingForResponse": True, "ignoredCount": 2, "lastShownAt": 5}


@pytest.mark.parametrize("body", [
    {"responded": True},
    {"waitingForResponse": True, "lastShownAt": 5},
    [1, 2],
])
def test_update_nps_survey_invalid(client, app, body):
    r = client.patch("/user-settings/nps-survey", headers=auth_headers(app), json=body)
    assert r.status_code == 400
    err = r.get_json()["error"]
    assert err["code"] == "VALIDATION_ERROR"
    assert err["message"] == "Invalid nps survey state structure"
    assert err["details"]
    assert stored_settings(app) is None


def test_update_nps_survey_non_json_body(client, app):
    r = client.patch("/user-settings/nps-survey", headers=auth_headers(app),
                     data="not json", content_type="application/json")
    assert r.status_code == 400
    assert stored_settings(app) is None


def test_get_mcp_config_defaults_to_null(client, app):
    r = client.get("/user-settings/mcp-config", headers=auth_headers(app))
    assert r.status_code == 200
    assert r.get_json() == {"jsonConfig": None}


def test_get_mcp_config_for_user_without_row(client, app):
    r = client.get("/user-settings/mcp-config", headers=auth_headers(app, uid=9999))
    assert r.status_code == 200
    assert r.get_json() == {"jsonConfig": None}


def test_update_and_read_mcp_config(client, app):
    headers = auth_headers(app)
    raw = '  {"mcpServers": {"files": {"command": "npx"}}}  \n'

    r = client.patch("/user-settings/mcp-config", headers=headers, json={"jsonConfig": raw})
    assert r.status_code == 200, r.data
    assert r.get_json() == {"jsonConfig": raw.strip()}
    assert stored_settings(app) == {"mcpConfig": {"jsonConfig": raw.strip()}}

    r = client.get("/user-settings/mcp-config", headers=headers)
    assert r.get_json() == {"jsonConfig": raw.strip()}


@pytest.mark.parametrize("value", [None, "", "   "])
def test_unset_mcp_config_clears_entry(client, app, value):
    headers = auth_headers(app)
    client.patch("/user-settings/mcp-config", headers=headers, json={"jsonConfig": '{"a": 1}'})

    r = client.patch("/user-settings/mcp-config", headers=headers, json={"jsonConfig": value})
    assert r.status_code == 200, r.data
    assert r.get_json() == {"jsonConfig": None}
    assert stored_settings(app) == {"mcpConfig": None}

    r = client.get("/user-settings/mcp-config", headers=headers)
    assert r.get_json() == {"jsonConfig": None}


@pytest.mark.parametrize("body", [
    {},
    {"jsonConfig": "[1,2]"},
    {"jsonConfig": "not json"},
    {"jsonConfig": 42},
])
def test_update_mcp_config_invalid(client, app, body):
    headers = auth_headers(app)
    client.patch("/user-settings/mcp-config", headers=headers, json={"jsonConfig": '{"keep": true}'})

    r = client.patch("/user-settings/mcp-config", headers=headers, json=body)
    assert r.status_code == 400
    err = r.get_json()["error"]
    assert err["code"] == "VALIDATION_ERROR"
    assert err["message"] == "Invalid MCP configuration structure"
    assert stored_settings(app) == {"mcpConfig": {"jsonConfig": '{"keep": true}'}}


def test_updates_preserve_other_settings(client, app):
    headers = auth_headers(app)
    with app.app_context():
        user = db.session.get(User, user_id(app))
        user.settings = {"theme": "dark"}
        db.session.commit()

    client.patch("/user-settings/nps-survey", headers=headers, json={"responded": True, "lastShownAt": 1})
    client.patch("/user-settings/mcp-config", headers=headers, json={"jsonConfig": '{"a": 1}'})

    assert stored_settings(app) == {
        "theme": "dark",
        "npsSurvey": {"responded": True, "lastShownAt": 1},
        "mcpConfig": {"jsonConfig": '{"a": 1}'},
    }


def test_update_for_missing_user(client, app):
    r = client.patch("/user-settings/mcp-config", headers=auth_headers(app, uid=9999),
                     json={"jsonConfig": None})
    assert r.status_code == 404
    assert r.get_json()["error"]["code"] == "USER_NOT_FOUND"


def test_update_mcp_config_deeply_nested(client, app):
    deep = '{"a":' + '[' * 100000 + ']' * 100000 + '}'
    r = client.patch("/user-settings/mcp-config", headers=auth_headers(app), json={"jsonConfig": deep})
    assert r.status_code == 400
    assert r.get_json()["error"]["message"] == "Invalid MCP configuration structure"
    assert stored_settings(app) is None


def test_update_mcp_config_form_body_rejected(client, app):
    r = client.patch("/user-settings/mcp-config", headers=auth_headers(app), data={"jsonConfig": "{}"})
    assert r.status_code == 400
    assert r.get_json()["error"]["message"] == "Invalid MCP configuration structure"
    assert stored_settings(app) is None


@pytest.mark.parametrize("raw", [
    '{"responded": true, "lastShownAt": NaN}',
    '{"waitingForResponse": true, "ignoredCount": Infinity, "lastShownAt": 5}',
])
def test_update_nps_survey_non_finite_number(client, app, raw):
    r = client.patch("/user-settings/nps-survey", headers=auth_headers(app),
                     data=raw, content_type="application/json")
    assert r.status_code == 400
    assert r.get_json()["error"]["message"] == "Invalid nps survey state structure"
    assert stored_settings(app) is None
