# File: tests/conftest.py

import base64

import pytest
from fastapi.testclient import TestClient

from portfolio.core.config import Settings
from portfolio.main import create_application
from portfolio.services.project_service import ProjectService

# PNG signature followed by filler bytes
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(40))


def data_url(raw: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"


@pytest.fixture
def settings(tmp_path):
    return Settings(storage_root=tmp_path / "public", max_image_bytes=1024 * 1024)


@pytest.fixture
def service(settings):
    return ProjectService.from_settings(settings)


@pytest.fixture
def client(settings):
    app = create_application(settings)
    with TestClient(app) as c:
        yield c
