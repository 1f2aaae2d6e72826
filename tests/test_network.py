"""Tests for the source fetcher."""

import io

import pytest
from PIL import Image

requests = pytest.importorskip("requests")

from photoframe.errors import ProcessingFailure
from photoframe.infrastructure.network import SourceFetcher


def png_bytes(size=(8, 4)):
    buffer = io.BytesIO()
    Image.new("RGB", size, (1, 2, 3)).save(buffer, "PNG")
    return buffer.getvalue()


class FakeResponse:
    def __init__(self, content=b"", status=200):
        self.content = content
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"HTTP {self.status}")


class FakeSession:
    def __init__(self, responses):
        self.headers = {}
        self.responses = list(responses)
        self.requested = []

    def get(self, url, timeout):
        self.requested.append(url)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_fetcher(session):
    return SourceFetcher(session_factory=lambda: session, sleep=lambda _: None)


def test_fetch_source_decodes_image():
    session = FakeSession([FakeResponse(png_bytes())])

    img = make_fetcher(session).fetch_source("http://frame.local/photo.png")

    assert img.size == (8, 4)
    assert session.requested == ["http://frame.local/photo.png"]
    assert session.headers["User-Agent"].startswith("photoframe/")


def test_fetch_retries_then_succeeds():
    session = FakeSession(
        [requests.ConnectionError("down"), FakeResponse(status=503), FakeResponse(b"ok")]
    )

    assert make_fetcher(session).fetch_bytes("http://example.com/a.jpg") == b"ok"
    assert len(session.requested) == 3


def test_fetch_gives_up_with_processing_failure():
    session = FakeSession([FakeResponse(status=500)] * 10)

    with pytest.raises(ProcessingFailure):
        make_fetcher(session).fetch_bytes("http://example.com/a.jpg")


def test_fetch_source_rejects_undecodable_content():
    session = FakeSession([FakeResponse(b"<html>not an image</html>")])

    with pytest.raises(ProcessingFailure):
        make_fetcher(session).fetch_source("http://example.com/a.jpg")
