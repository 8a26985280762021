import io

import pytest
import requests
from PIL import Image

import pngmask.services.image_service as image_service
from pngmask.models.errors import LoadFailed
from pngmask.services.image_service import ImageService


def _png_bytes(size=(4, 2), color=(255, 0, 0, 128)):
    buf = io.BytesIO()
    Image.new("RGBA", size, color).save(buf, format="PNG")
    return buf.getvalue()


class FakeResponse:
    def __init__(self, content=b"", status=200):
        self.content = content
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


def test_load_image_reads_rgba_from_disk(tmp_path):
    path = tmp_path / "mask.png"
    path.write_bytes(_png_bytes())

    image = ImageService().load_image(path)

    assert (image.width, image.height) == (4, 2)
    assert image.to_array()[0, 0].tolist() == [255, 0, 0, 128]


def test_load_image_converts_non_rgba_modes(tmp_path):
    path = tmp_path / "gray.png"
    Image.new("L", (3, 3), 90).save(path)

    image = ImageService().load_image(path)

    assert image.to_array()[1, 1].tolist() == [90, 90, 90, 255]


def test_load_image_missing_file_raises_load_failed(tmp_path):
    with pytest.raises(LoadFailed) as err:
        ImageService().load_image(tmp_path / "nope.png")
    assert "nope.png" in err.value.source


def test_load_image_not_an_image(tmp_path):
    path = tmp_path / "notes.png"
    path.write_text("definitely not a png")
    with pytest.raises(LoadFailed) as err:
        ImageService().load_image(path)
    assert err.value.__cause__ is not None


def test_load_url_decodes_response(monkeypatch):
    seen = {}

    def fake_get(url, timeout):
        seen["url"] = url
        seen["timeout"] = timeout
        return FakeResponse(_png_bytes((5, 5)))

    monkeypatch.setattr(image_service.requests, "get", fake_get)

    image = ImageService(timeout=3.0).load_url("https://example.com/m.png")

    assert (image.width, image.height) == (5, 5)
    assert seen == {"url": "https://example.com/m.png", "timeout": 3.0}


def test_load_url_http_error_is_load_failed(monkeypatch):
    monkeypatch.setattr(image_service.requests, "get", lambda url, timeout: FakeResponse(status=404))

    with pytest.raises(LoadFailed) as err:
        ImageService().load_url("https://example.com/missing.png")
    assert isinstance(err.value.__cause__, requests.HTTPError)


def test_load_url_network_error_is_load_failed(monkeypatch):
    def boom(url, timeout):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(image_service.requests, "get", boom)

    with pytest.raises(LoadFailed):
        ImageService().load_url("http://localhost:1/m.png")


def test_load_url_undecodable_body(monkeypatch):
    monkeypatch.setattr(image_service.requests, "get", lambda url, timeout: FakeResponse(b"<html>"))
    with pytest.raises(LoadFailed):
        ImageService().load_url("https://example.com/page")


def test_fetch_dispatches_on_scheme(monkeypatch, tmp_path):
    svc = ImageService()
    calls = []
    monkeypatch.setattr(svc, "load_url", lambda url: calls.append(("url", url)))
    monkeypatch.setattr(svc, "load_image", lambda path: calls.append(("file", str(path))))

    svc.fetch("HTTPS://example.com/a.png")
    svc.fetch(tmp_path / "b.png")

    assert calls == [("url", "HTTPS://example.com/a.png"), ("file", str(tmp_path / "b.png"))]
