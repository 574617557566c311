"""Tests for the remote catalog client."""
import socket
import urllib.error

from app.catalog import remote_source
from app.catalog.remote_source import fetch_remote_bytes


class FakeResponse:
    def __init__(self, body=b"", status=200):
        self._body = body
        self.status = status

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False


def test_fetch_success(monkeypatch):
    """Test that a 200 response body is returned as-is."""
    seen = {}

    def fake_urlopen(request, timeout):
        seen["url"] = request.full_url
        seen["accept"] = request.get_header("Accept")
        seen["timeout"] = timeout
        return FakeResponse(b'{"books": []}')

    monkeypatch.setattr(remote_source.urllib.request, "urlopen", fake_urlopen)

    assert fetch_remote_bytes("http://catalog.test/books", timeout=3) == b'{"books": []}'
    assert seen == {"url": "http://catalog.test/books", "accept": "application/json", "timeout": 3}


def test_fetch_http_error(monkeypatch):
    """Test that a 500 response yields None."""
    def fake_urlopen(request, timeout):
        raise urllib.error.HTTPError(request.full_url, 500, "Server Error", None, None)

    monkeypatch.setattr(remote_source.urllib.request, "urlopen", fake_urlopen)

    assert fetch_remote_bytes("http://catalog.test/books") is None


def test_fetch_non_2xx_status(monkeypatch):
    """Test that an unfollowed redirect status yields None."""
    monkeypatch.setattr(
        remote_source.urllib.request, "urlopen",
        lambda request, timeout: FakeResponse(b"moved", status=304),
    )

    assert fetch_remote_bytes("http://catalog.test/books") is None


def test_fetch_timeout(monkeypatch):
    """Test that a timeout yields None."""
    def fake_urlopen(request, timeout):
        raise socket.timeout("timed out")

    monkeypatch.setattr(remote_source.urllib.request, "urlopen", fake_urlopen)

    assert fetch_remote_bytes("http://catalog.test/books") is None


def test_fetch_connection_error(monkeypatch):
    """Test that a connection failure yields None."""
    def fake_urlopen(request, timeout):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(remote_source.urllib.request, "urlopen", fake_urlopen)

    assert fetch_remote_bytes("http://catalog.test/books") is None


def test_fetch_without_url(monkeypatch):
    """Test that an empty URL skips the request entirely."""
    def fail_urlopen(request, timeout):
        raise AssertionError("should not be called")

    monkeypatch.setattr(remote_source.urllib.request, "urlopen", fail_urlopen)

    assert fetch_remote_bytes("") is None
