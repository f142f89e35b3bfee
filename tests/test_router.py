"""Tests for the storage HTTP API."""

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from cloudru_storage.config.settings import get_settings
from cloudru_storage.main import app
from cloudru_storage.storage.router import get_storage_service


@pytest.fixture
def client(service):
    app.dependency_overrides[get_storage_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_create_and_list_folders(client, bucket):
    response = client.post("/storage/folders", json={"name": "photos/"})
    assert response.status_code == 201
    assert response.json() == {"key": "photos/"}

    response = client.get("/storage/folders")
    assert response.status_code == 200
    assert response.json() == {"folders": ["photos"], "count": 1}


def test_create_folder_rejects_empty_name(client):
    response = client.post("/storage/folders", json={"name": "/"})

    assert response.status_code == 422


def test_upload_list_download(client, bucket):
    response = client.post(
        "/storage/files",
        params={"folder": "photos"},
        files={"file": ("cat.png", b"meow", "image/png")},
    )
    assert response.status_code == 201
    assert response.json() == {"key": "photos/cat.png"}

    response = client.get("/storage/files", params={"folder": "photos"})
    assert response.json() == {"folder": "photos", "keys": ["photos/cat.png"], "count": 1}

    response = client.get("/storage/files/download", params={"folder": "photos", "name": "cat.png"})
    assert response.status_code == 200
    assert response.content == b"meow"


def test_download_missing_file_returns_404(client):
    response = client.get("/storage/files/download", params={"folder": "photos", "name": "nope.png"})

    assert response.status_code == 404


def test_rename_and_delete_file(client, bucket):
    bucket["photos/cat.png"] = b"meow"

    response = client.patch(
        "/storage/files/rename", json={"old_key": "photos/cat.png", "new_key": "pets/cat.png"}
    )
    assert response.status_code == 200
    assert bucket == {"pets/cat.png": b"meow"}

    response = client.delete("/storage/files", params={"folder": "pets", "name": "cat.png"})
    assert response.status_code == 200
    assert response.json() == {"deleted": "pets/cat.png"}
    assert bucket == {}


def test_rename_and_delete_folder(client, bucket):
    bucket.update({"old/": b"", "old/a.txt": b"a"})

    response = client.patch("/storage/folders/rename", json={"old_name": "old", "new_name": "new"})
    assert response.status_code == 200
    assert sorted(bucket) == ["new/", "new/a.txt"]

    response = client.delete("/storage/folders", params={"name": "new"})
    assert response.status_code == 200
    assert bucket == {}


def test_rename_folder_into_subfolder_returns_422(client, bucket):
    bucket.update({"old/": b"", "old/a.txt": b"a"})

    response = client.patch("/storage/folders/rename", json={"old_name": "old", "new_name": "old/archive"})

    assert response.status_code == 422
    assert sorted(bucket) == ["old/", "old/a.txt"]


def test_storage_error_returns_500(client, s3_client):
    s3_client.fail_on["list_objects_v2"] = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "ListObjectsV2"
    )

    response = client.get("/storage/folders")

    assert response.status_code == 500
    assert "Error listing folders" in response.json()["detail"]


def test_unconfigured_storage_returns_503(monkeypatch):
    for name in ("S3_TENANT_ID", "S3_ACCESS_KEY", "S3_SECRET_KEY", "S3_BUCKET_NAME"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_storage_service.cache_clear()
    client = TestClient(app)

    try:
        response = client.get("/storage/folders")
    finally:
        get_settings.cache_clear()
        get_storage_service.cache_clear()

    assert response.status_code == 503
    assert response.json()["field"] == "tenant_id"
