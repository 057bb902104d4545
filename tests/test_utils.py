import io
import json
import logging

import pytest
import requests

from prefroom import utils
from prefroom.utils import (
    ManifestSourceError,
    fetch_manifest,
    is_url,
    load_manifest_source,
    read_manifest_file,
    read_manifest_stream,
)

URL = "https://example.com/manifest.json"


class FakeResponse:
    def __init__(self, payload=None, status_code=200, error=None, content_type="application/json"):
        self.payload = payload
        self.status_code = status_code
        self.error = error
        self.headers = {"Content-Type": content_type}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)

    def json(self):
        if self.error:
            raise self.error
        return self.payload


@pytest.fixture
def fake_get(monkeypatch):
    calls = []

    def install(response=None, raises=None):
        def get(url, timeout, headers):
            calls.append({"url": url, "timeout": timeout, "headers": headers})
            if raises:
                raise raises
            return response

        monkeypatch.setattr(utils.requests, "get", get)
        return calls

    return install


@pytest.mark.parametrize(
    "source, expected",
    [
        (URL, True),
        ("http://localhost:8000/m.json", True),
        ("ftp://example.com/m.json", False),
        ("manifest.json", False),
        ("-", False),
    ],
)
def test_is_url(source, expected):
    assert is_url(source) is expected


def test_read_manifest_file(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps({"components": []}))
    assert read_manifest_file(path) == {"components": []}


def test_missing_manifest_file(tmp_path):
    with pytest.raises(ManifestSourceError, match="no such manifest file") as excinfo:
        read_manifest_file(tmp_path / "nope.json")
    assert excinfo.value.source.endswith("nope.json")


def test_invalid_json_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{")
    with pytest.raises(ManifestSourceError, match="invalid JSON"):
        read_manifest_file(path)


def test_fetch_manifest_asks_for_json(fake_get):
    calls = fake_get(FakeResponse({"entities": {}}))
    assert fetch_manifest(URL, timeout=5) == {"entities": {}}
    assert calls == [
        {"url": URL, "timeout": 5, "headers": {"Accept": "application/json"}}
    ]


def test_fetch_manifest_warns_on_other_content_type(fake_get, caplog, monkeypatch):
    monkeypatch.setattr(logging.getLogger("prefroom"), "propagate", True)
    fake_get(FakeResponse({"entities": {}}, content_type="text/html"))
    assert fetch_manifest(URL) == {"entities": {}}
    assert "served as text/html" in caplog.text


def test_fetch_manifest_http_error(fake_get):
    fake_get(FakeResponse(status_code=404))
    with pytest.raises(ManifestSourceError, match="HTTP 404"):
        fetch_manifest(URL)


def test_fetch_manifest_invalid_json(fake_get):
    fake_get(FakeResponse(error=ValueError("no json")))
    with pytest.raises(ManifestSourceError, match="invalid JSON"):
        fetch_manifest(URL)


def test_fetch_manifest_timeout(fake_get):
    fake_get(raises=requests.exceptions.Timeout())
    with pytest.raises(ManifestSourceError, match="timed out after 30s"):
        fetch_manifest(URL)


def test_fetch_manifest_connection_error(fake_get):
    fake_get(raises=requests.exceptions.ConnectionError("refused"))
    with pytest.raises(ManifestSourceError, match="request failed"):
        fetch_manifest(URL)


def test_fetch_manifest_rejects_non_urls(fake_get):
    calls = fake_get(FakeResponse({}))
    with pytest.raises(ManifestSourceError, match="not an http"):
        fetch_manifest("not a url")
    assert calls == []


def test_read_manifest_stream():
    assert read_manifest_stream(io.StringIO('{"entities": {}}')) == {"entities": {}}
    with pytest.raises(ManifestSourceError, match="<stdin>: invalid JSON"):
        read_manifest_stream(io.StringIO("nope"))


def test_load_manifest_source_dispatches(tmp_path, monkeypatch, fake_get):
    path = tmp_path / "manifest.json"
    path.write_text('{"from": "file"}')
    fake_get(FakeResponse({"from": "url"}))
    monkeypatch.setattr("sys.stdin", io.StringIO('{"from": "stdin"}'))

    assert load_manifest_source(str(path)) == {"from": "file"}
    assert load_manifest_source(URL) == {"from": "url"}
    assert load_manifest_source("-") == {"from": "stdin"}
