"""
Tests for the FastAPI service layer.
"""
import pytest
from fastapi.testclient import TestClient

from service.api import app


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["budget"] == 140
    assert body["measurer"] == "weighted"


def test_split_text(client):
    response = client.post("/split", json={"text": "Line 1\nLine 2\nLine 3"})
    assert response.status_code == 200
    assert response.json() == {
        "chunks":   ["1/3 Line 1", "2/3 Line 2", "3/3 Line 3"],
        "count":    3,
        "budget":   140,
        "overflow": [],
    }


def test_split_empty_text(client):
    response = client.post("/split", json={"text": ""})
    assert response.status_code == 200
    assert response.json()["chunks"] == []


def test_split_literal_resource(client):
    response = client.post("/split", json={"resource": "Line A\nLine B"})
    assert response.status_code == 200
    assert response.json()["chunks"] == ["1/2 Line A", "2/2 Line B"]


def test_split_with_suffix_and_budget(client):
    text = " ".join(["abcd"] * 10)
    response = client.post(
        "/split",
        json={"text": text, "budget": 30, "suffix": " (...)", "measure": "plain"},
    )
    assert response.status_code == 200
    chunks = response.json()["chunks"]
    assert len(chunks) > 1
    assert all(chunk.endswith(" (...)") and len(chunk) <= 30 for chunk in chunks)


@pytest.mark.parametrize("payload", [{}, {"text": "a", "resource": "b"}])
def test_text_or_resource_required(client, payload):
    assert client.post("/split", json=payload).status_code == 422


def test_invalid_budget(client):
    assert client.post("/split", json={"text": "a", "budget": 0}).status_code == 422


def test_unknown_measurer(client):
    response = client.post("/split", json={"text": "a", "measure": "nope"})
    assert response.status_code == 422
    assert "Unknown measurer" in response.json()["detail"]


def test_path_resource_is_not_read_from_server_disk(client, tmp_path):
    secret = tmp_path / "secret.txt"
    secret.write_text("do not leak me", encoding="utf-8")

    response = client.post("/split", json={"resource": str(secret), "measure": "plain"})
    assert response.status_code == 200
    chunks = response.json()["chunks"]
    assert chunks == [f"1/1 {secret}"]
    assert not any("leak" in chunk for chunk in chunks)


def test_url_resource_is_fetched_remotely(client, monkeypatch):
    import segmenter.sources as sources

    monkeypatch.setattr(sources, "http_get", lambda url, timeout: "Remote line")
    response = client.post("/split", json={"resource": "https://example.com/a.txt"})
    assert response.status_code == 200
    assert response.json()["chunks"] == ["1/1 Remote line"]


def test_empty_suffix_is_applied_as_given(client):
    response = client.post(
        "/split", json={"text": "Line 1\nLine 2", "suffix": "", "measure": "plain"},
    )
    assert response.status_code == 200
    assert response.json()["chunks"] == ["1/2 Line 1", "2/2 Line 2"]
