"""
Tests for the render client. No real HTTP; httpx.MockTransport only.
"""
import httpx
import pytest

from conftest import RecordingTransport
from notion_uml.errors import RenderReadError, RenderStatusError, RenderUnavailable, ValidationError
from notion_uml.render_client import KROKI_URL, PLANTUML_URL, RenderClient, validate_format

PNG_BYTES = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A, 0x00, 0xFF])


class _BrokenStream(httpx.SyncByteStream):
    def __iter__(self):
        yield b"<svg"
        raise httpx.ReadError("connection reset")


def _client(handler, base_url=KROKI_URL):
    transport = RecordingTransport(handler)
    return RenderClient(base_url, transport=transport), transport


def test_validate_format():
    assert validate_format("png") == "png"
    assert validate_format("svg") == "svg"
    for bad in ("", "PNG", "pdf", "bmp", "jpeg"):
        with pytest.raises(ValidationError):
            validate_format(bad)


def test_get_render_url_kroki():
    client = RenderClient(KROKI_URL)
    assert client.get_render_url("eNpL", "svg") == "https://kroki.io/plantuml/svg/eNpL"


def test_get_render_url_plantuml_strips_trailing_slash():
    client = RenderClient(PLANTUML_URL + "/")
    assert client.get_render_url("SoWk", "png") == "https://www.plantuml.com/plantuml/png/SoWk"


def test_get_render_url_rejects_other_formats():
    with pytest.raises(ValidationError):
        RenderClient().get_render_url("tok", "pdf")


def test_fetch_image_returns_body_bytes():
    client, transport = _client(lambda req: httpx.Response(200, content=PNG_BYTES))
    assert client.fetch_image("tok", "png") == PNG_BYTES
    assert len(transport.requests) == 1
    req = transport.requests[0]
    assert req.method == "GET"
    assert str(req.url) == "https://kroki.io/plantuml/png/tok"
    assert req.url.query == b""


def test_fetch_image_network_failure():
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    client, _ = _client(handler)
    with pytest.raises(RenderUnavailable):
        client.fetch_image("tok", "svg")


def test_fetch_image_read_failure():
    client, _ = _client(lambda req: httpx.Response(200, stream=_BrokenStream()))
    with pytest.raises(RenderReadError):
        client.fetch_image("tok", "svg")


@pytest.mark.parametrize("status", [400, 404, 500, 502])
def test_fetch_image_error_status(status):
    client, _ = _client(lambda req: httpx.Response(status, content=b"Syntax Error?"))
    with pytest.raises(RenderStatusError) as exc_info:
        client.fetch_image("tok", "png")
    assert exc_info.value.status_code == status
    assert "Syntax Error?" in str(exc_info.value)


def test_fetch_image_url_too_long():
    client, transport = _client(lambda req: httpx.Response(200, content=b"<svg/>"))
    with pytest.raises(RenderUnavailable):
        client.fetch_image("0" * 70000, "svg")
    assert transport.requests == []
