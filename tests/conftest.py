import pytest
from fastapi.testclient import TestClient

from main import app
from services.gallery import GalleryService
from services.json_store import JsonStore
from services.products import ProductService


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    path = tmp_path / "data"
    monkeypatch.setenv("DATA_DIR", str(path))
    return path


@pytest.fixture
def client(data_dir):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def gallery(tmp_path):
    return GalleryService(JsonStore(tmp_path / "gallery.json"))


@pytest.fixture
def products(tmp_path):
    return ProductService(JsonStore(tmp_path / "products.json"))


@pytest.fixture
def make_post(client):
    def _make_post(**overrides):
        payload = {
            "title": "Sunset",
            "imageUrl": "https://img.example/sunset.jpg",
            "authorName": "Bob",
            "authorId": "u1",
        }
        payload.update(overrides)
        response = client.post("/api/gallery", json=payload)
        assert response.status_code == 201
        return response.json()

    return _make_post
