"""
Tests for the HTTP routes.

Uses FastAPI's TestClient as a context manager so the startup hook loads
the bundled sample into a fresh session for every test.
"""

import json

import pytest
from fastapi.testclient import TestClient

from character_validator.api.app import app, app_state


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def _upload(client, url, content, name="bot.json"):
    if not isinstance(content, (str, bytes)):
        content = json.dumps(content)
    return client.post(
        url,
        files={"file": (name, content, "application/json")},
        follow_redirects=False,
    )


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["file_name"] == "agent.character.json"
        assert body["valid"] is True


class TestPage:

    def test_sample_is_shown_on_startup(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "Valid Character Config" in response.text
        assert "Ada" in response.text
        assert "Object{" in response.text
        assert "Validation Errors" not in response.text

    def test_upload_valid(self, client, character):
        response = _upload(client, "/upload", character)

        assert response.status_code == 303
        assert response.headers["location"] == "/"

        page = client.get("/").text
        assert "bot.json" in page
        assert "<strong>Name:</strong> Bot" in page
        assert "No plugins configured" in page

    def test_upload_invalid(self, client, character):
        character["clients"] = []

        _upload(client, "/upload", character)
        page = client.get("/").text

        assert "Validation Errors" in page
        assert "Clients" in page
        assert "Array must contain at least 1 element(s)" in page
        assert "Valid Character Config" not in page
        assert app_state["session"].tree is None

    def test_upload_malformed(self, client):
        _upload(client, "/upload", "{ not json")
        page = client.get("/").text

        assert "Invalid JSON format" in page
        assert "File" in page

    def test_upload_while_loading(self, client, character):
        app_state["session"].is_loading = True

        response = _upload(client, "/upload", character)

        assert response.status_code == 409
        app_state["session"].is_loading = False

    def test_reload_sample(self, client, character):
        character["clients"] = []
        _upload(client, "/upload", character)

        response = client.post("/sample", follow_redirects=False)

        assert response.status_code == 303
        assert app_state["session"].is_valid
        assert app_state["session"].file_name == "agent.character.json"


class TestTreeToggle:

    def test_expand_root(self, client):
        assert "modelProvider" not in client.get("/").text

        response = client.post("/tree/toggle", params={"path": ""}, follow_redirects=False)

        assert response.status_code == 303
        page = client.get("/").text
        assert "modelProvider" in page
        assert "▼" in page

    def test_expand_nested(self, client):
        client.post("/tree/toggle", params={"path": ""})
        client.post("/tree/toggle", params={"path": "style"})

        page = client.get("/").text

        assert "warm and precise" not in page  # style.all is still collapsed
        client.post("/tree/toggle", params={"path": "style.all"})
        assert "warm and precise" in client.get("/").text

    def test_expand_dotted_settings_key(self, client, character):
        character["settings"] = {"api.key": {"region": "eu-west"}}
        _upload(client, "/upload", character)

        for path in ("", "settings", 'settings["api.key"]'):
            response = client.post("/tree/toggle", params={"path": path}, follow_redirects=False)
            assert response.status_code == 303

        assert "eu-west" in client.get("/").text

    def test_unknown_path(self, client):
        response = client.post("/tree/toggle", params={"path": "nope"})
        assert response.status_code == 404

    def test_scalar_path(self, client):
        response = client.post("/tree/toggle", params={"path": "name"})
        assert response.status_code == 400

    def test_no_tree_after_invalid_upload(self, client):
        _upload(client, "/upload", "[]")
        response = client.post("/tree/toggle", params={"path": ""})
        assert response.status_code == 404


class TestValidateEndpoint:

    def test_valid(self, client, character):
        response = _upload(client, "/api/validate", character)

        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is True
        assert body["data"] == character
        assert body["errors"] == []

    def test_empty_clients(self, client, character):
        character["clients"] = []

        body = _upload(client, "/api/validate", character).json()

        assert body["valid"] is False
        assert body["data"] is None
        assert body["errors"] == [
            {"path": "clients", "message": "Array must contain at least 1 element(s)", "code": "too_small"}
        ]
        assert body["report"][0]["field"] == "Clients"

    def test_malformed(self, client):
        body = _upload(client, "/api/validate", b"{ not json").json()

        assert body["errors"] == [{"path": "file", "message": "Invalid JSON format", "code": "custom"}]

    def test_deeply_nested(self, client):
        depth = 100_000
        body = _upload(client, "/api/validate", '{"settings": ' + "[" * depth + "]" * depth + "}").json()

        assert body["valid"] is False
        assert body["errors"] == [{"path": "file", "message": "Invalid JSON format", "code": "custom"}]

    def test_does_not_touch_session(self, client, character):
        character["clients"] = []

        _upload(client, "/api/validate", character)

        assert app_state["session"].is_valid
        assert app_state["session"].file_name == "agent.character.json"

    def test_missing_file_field(self, client):
        response = client.post("/api/validate")
        assert response.status_code == 422
