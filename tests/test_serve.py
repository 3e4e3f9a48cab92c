import threading
from http.server import HTTPServer

import pytest
import requests

import serve
from ein_chart import fetcher


@pytest.fixture
def base_url():
    server = HTTPServer(("localhost", 0), serve.Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://localhost:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


def test_sample_endpoint(base_url):
    resp = requests.get(f"{base_url}/api/sample", timeout=5)
    assert resp.status_code == 200
    body = resp.json()
    assert body["source"] == "sample"
    assert body["labels"] == ["JAN", "FEB", "MAR"]


def test_chart_endpoint_fetches_each_time(base_url, monkeypatch):
    calls = []

    def fake_fetch(sheet_id, gid):
        calls.append(sheet_id)
        return "Date,Estimate\n2/1/2024,9\n", "https://example.test"

    monkeypatch.setattr(fetcher, "fetch_csv", fake_fetch)
    for _ in range(2):
        body = requests.get(f"{base_url}/api/chart", timeout=5).json()
        assert body["source"] == "https://example.test"
    assert len(calls) == 2


def test_unparsable_source_is_bad_gateway(base_url, monkeypatch):
    monkeypatch.setattr(fetcher, "fetch_csv", lambda sheet_id, gid: ("", "https://example.test"))
    resp = requests.get(f"{base_url}/api/chart", timeout=5)
    assert resp.status_code == 502


def test_unknown_path(base_url):
    assert requests.get(f"{base_url}/nope", timeout=5).status_code == 404
