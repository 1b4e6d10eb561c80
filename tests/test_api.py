import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi.testclient import TestClient  # noqa: E402

from face_template_migration.api_server import app  # noqa: E402

client = TestClient(app)


def test_version(legacy_b64):
    res = client.post("/version", json={"template": legacy_b64[3]})
    assert res.status_code == 200
    assert res.json() == {"version": 24}


def test_convert_auto(legacy_b64):
    res = client.post("/convert", json={"template": legacy_b64[0]})
    assert res.status_code == 200
    body = res.json()
    assert body["version"] == 16
    assert body["length"] == 128
    assert len(body["vector"]) == 128


def test_convert_version_mismatch(legacy_b64):
    res = client.post("/convert", json={"template": legacy_b64[0], "version": 24})
    assert res.status_code == 422
    assert "Expected version 24" in res.json()["detail"]


def test_convert_bad_base64():
    res = client.post("/convert", json={"template": "not base64!"})
    assert res.status_code == 400


def test_convert_batch(legacy_b64):
    res = client.post("/convert/batch", json={"templates": legacy_b64})
    assert res.status_code == 200
    assert res.json()["count"] == 5

    res = client.post("/convert/batch", json={"templates": legacy_b64, "version": 16})
    assert res.json()["count"] == 3
