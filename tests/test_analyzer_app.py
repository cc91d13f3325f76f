import json

import pytest
import requests
import responses

from textanalyzer.analysis import analyze_text, word_cloud_request
from textanalyzer.analyzer_app import create_app, main

CLOUD_URL = "http://localhost:9000/wordcloud"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-data"


@pytest.fixture
def client():
    app = create_app(CLOUD_URL)
    app.testing = True
    return app.test_client()


def test_analyze_returns_analysis(client):
    text = "Hello world. Bye!\nNext line?"
    resp = client.post("/files/analyze", data=text.encode("utf-8"))
    assert resp.status_code == 200
    assert resp.mimetype == "application/json"
    assert resp.get_json() == analyze_text(text).to_dict()


def test_analyze_empty_body(client):
    resp = client.post("/files/analyze", data=b"")
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["id"] == -1
    assert body["average_words_per_sentence"] == 0


def test_analyze_counts_utf8_bytes(client):
    text = "é ü"
    resp = client.post("/files/analyze", data=text.encode("utf-8"))
    assert resp.get_json()["symbols_amount"] == len("éü".encode("utf-8"))


def test_word_cloud_success(client):
    text = "cloud of words words words"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, CLOUD_URL, body=PNG_BYTES, status=200)
        resp = client.post("/files/wordcloud", data=text.encode("utf-8"))
        sent = rsps.calls[0].request
    assert resp.status_code == 200
    assert resp.data == PNG_BYTES
    assert resp.mimetype == "image/png"
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.body == word_cloud_request(text)


def test_word_cloud_upstream_error_status(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, CLOUD_URL, body=b"oops", status=503)
        resp = client.post("/files/wordcloud", data=b"text")
    assert resp.status_code == 500
    assert resp.data == b"Cannot get word cloud."


def test_word_cloud_upstream_unreachable(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, CLOUD_URL, body=requests.ConnectionError("down"))
        resp = client.post("/files/wordcloud", data=b"text")
    assert resp.status_code == 500
    assert resp.data == b"Cannot get word cloud."


def test_word_cloud_request_carries_text(client):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, CLOUD_URL, body=PNG_BYTES, status=200)
        resp = client.post("/files/wordcloud", data="привет мир".encode("utf-8"))
        payload = json.loads(rsps.calls[0].request.body)
    assert resp.status_code == 200
    assert resp.data == PNG_BYTES
    assert payload["text"] == "привет мир"


def test_docs_are_served_from_working_directory(client, tmp_path, monkeypatch):
    docs_dir = tmp_path / "docs"
    docs_dir.mkdir()
    (docs_dir / "swagger.json").write_text('{"swagger": "2.0"}')
    monkeypatch.chdir(tmp_path)
    resp = client.get("/docs/swagger.json")
    assert resp.status_code == 200
    assert json.loads(resp.data) == {"swagger": "2.0"}


def test_missing_doc_is_not_found(client, tmp_path, monkeypatch):
    (tmp_path / "docs").mkdir()
    monkeypatch.chdir(tmp_path)
    assert client.get("/docs/absent.json").status_code == 404


def test_main_requires_word_cloud_url(monkeypatch):
    monkeypatch.delenv("TEXTANALYZER_WORD_CLOUD_URL", raising=False)
    with pytest.raises(SystemExit) as excinfo:
        main(["--port", "8083"])
    assert excinfo.value.code == 2