# File: tests/test_project_api.py

"""
HTTP tests for the project endpoints.

These use FastAPI's TestClient. To run:
    pytest -q
"""

import json

from fastapi.testclient import TestClient

from conftest import PNG_BYTES, data_url
from portfolio.main import create_application


def payload(**overrides):
    body = {
        "title": "Nav Robot",
        "description": "Autonomous navigation with lidar and SLAM.",
        "category": "robotics",
        "imageBase64": data_url(PNG_BYTES),
    }
    body.update(overrides)
    return body


def test_health_endpoint(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_list_projects_empty_on_fresh_storage(client, settings):
    resp = client.get("/api/v1/projects/")
    assert resp.status_code == 200
    assert resp.json() == []
    assert json.loads(settings.collection_file.read_text(encoding="utf-8")) == []


def test_create_project_and_fetch_image(client):
    resp = client.post("/api/v1/projects/", json=payload(github="https://github.com/me/nav"))
    assert resp.status_code == 201
    created = resp.json()
    assert created["title"] == "Nav Robot"
    assert created["github"] == "https://github.com/me/nav"
    assert "demo" not in created
    assert "createdAt" in created
    assert created["image"] == f"/projects/{created['id']}.png"

    listed = client.get("/api/v1/projects/").json()
    assert listed == [created]

    image = client.get(created["image"])
    assert image.status_code == 200
    assert image.content == PNG_BYTES


def test_empty_links_are_omitted(client):
    created = client.post("/api/v1/projects/", json=payload(github="", demo="")).json()
    assert "github" not in created
    assert "demo" not in created


def test_missing_field_returns_400_naming_it(client):
    resp = client.post("/api/v1/projects/", json=payload(category=""))
    assert resp.status_code == 400
    assert "category" in resp.json()["detail"]

    resp = client.post("/api/v1/projects/", json=payload(imageBase64=None))
    assert resp.status_code == 400
    assert "image" in resp.json()["detail"]


def test_malformed_image_returns_400(client):
    resp = client.post("/api/v1/projects/", json=payload(imageBase64="data:image/png;base64,!!!"))
    assert resp.status_code == 400
    assert client.get("/api/v1/projects/").json() == []


def test_oversized_image_returns_413(client, settings):
    too_big = data_url(b"x" * (settings.max_image_bytes + 1))
    resp = client.post("/api/v1/projects/", json=payload(imageBase64=too_big))
    assert resp.status_code == 413
    assert "exceeds maximum" in resp.json()["detail"]


def test_corrupt_collection_lists_empty_and_rejects_writes(client, settings):
    settings.collection_file.write_text("[{broken", encoding="utf-8")

    assert client.get("/api/v1/projects/").json() == []

    resp = client.post("/api/v1/projects/", json=payload())
    assert resp.status_code == 500
    assert settings.collection_file.read_text(encoding="utf-8") == "[{broken"


def test_startup_survives_undecodable_collection(settings):
    content = b'[{"id": "\xff\xfe"}]'
    settings.collection_file.parent.mkdir(parents=True)
    settings.collection_file.write_bytes(content)

    with TestClient(create_application(settings)) as c:
        assert c.get("/api/v1/projects/").json() == []

    assert settings.collection_file.read_bytes() == content
