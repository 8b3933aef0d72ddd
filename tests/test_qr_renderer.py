"""
Tests for QR rendering, directly and through /{id}/qr.
"""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from qrlink_app.errors import BadRequest, RenderFailure
from qrlink_app.schemas.url import QRFormat
from qrlink_app.services.qr_renderer import DARK_MODULE, LIGHT_MODULE, QRRenderer

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
TOO_LONG = "https://example.com/" + "x" * 5000


@pytest.fixture
def renderer():
    return QRRenderer(default_size=300, max_size=2000, border=4)


class TestQRRenderer:

    def test_ascii_geometry(self, renderer):
        text = "https://openai.com"
        matrix = renderer.module_matrix(text)
        lines = renderer.render_ascii(text).split("\n")

        assert len(lines) == len(matrix)
        for line, row in zip(lines, matrix):
            assert len(line) == 2 * len(row)
            expected = "".join(DARK_MODULE * 2 if dark else LIGHT_MODULE * 2 for dark in row)
            assert line == expected

    def test_ascii_has_no_quiet_zone(self, renderer):
        lines = renderer.render_ascii("https://openai.com").split("\n")
        # Finder patterns start in the very first module
        assert lines[0].startswith(DARK_MODULE * 14)

    @pytest.mark.parametrize("size", [1, 100, 300, 301, 1000])
    def test_png_is_at_least_requested_size(self, renderer, size):
        image = Image.open(io.BytesIO(renderer.render_png("https://openai.com", size)))

        assert image.format == "PNG"
        assert image.width >= size
        assert image.height >= size
        assert image.width == image.height

    def test_png_default_size(self, renderer):
        image = Image.open(io.BytesIO(renderer.render_png("https://openai.com")))
        assert image.width >= 300

    @pytest.mark.parametrize("size", [0, -5, 2001])
    def test_invalid_sizes_rejected(self, renderer, size):
        with pytest.raises(BadRequest):
            renderer.render_png("https://openai.com", size)

    def test_render_dispatches_on_format(self, renderer):
        ascii_qr = renderer.render("https://openai.com", QRFormat.ASCII)
        png_qr = renderer.render("https://openai.com", QRFormat.PNG)

        assert ascii_qr.media_type == "text/plain"
        assert png_qr.media_type == "image/png"
        assert png_qr.content.startswith(PNG_SIGNATURE)

    def test_format_parsing(self):
        assert QRFormat.parse("ascii") == QRFormat.ASCII
        assert QRFormat.parse("ASCII") == QRFormat.PNG
        assert QRFormat.parse("png") == QRFormat.PNG
        assert QRFormat.parse("svg") == QRFormat.PNG
        assert QRFormat.parse(None) == QRFormat.PNG

    def test_data_too_long(self, renderer):
        with pytest.raises(RenderFailure):
            renderer.render_ascii(TOO_LONG)


class TestQREndpoint:

    def test_png_response(self, client: TestClient):
        client.post("/", params={"url": "https://openai.com"})

        response = client.get("/1/qr", params={"size": 150})
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        image = Image.open(io.BytesIO(response.content))
        assert image.size[0] >= 150 and image.size[1] >= 150

    def test_ascii_response_encodes_stored_url(self, client: TestClient):
        client.post("/", params={"url": "https://openai.com"})

        response = client.get("/1/qr", params={"format": "ascii"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == QRRenderer().render_ascii("https://openai.com")

    def test_zero_size_is_bad_request(self, client: TestClient):
        client.post("/", params={"url": "https://openai.com"})

        assert client.get("/1/qr", params={"size": 0}).status_code == 400
        assert client.get("/1/qr", params={"size": "big"}).status_code == 400

    def test_unknown_id(self, client: TestClient):
        assert client.get("/999999/qr").status_code == 404

    def test_render_failure_is_server_error(self, client: TestClient):
        client.post("/", params={"url": TOO_LONG})

        response = client.get("/1/qr")
        assert response.status_code == 500
        assert "QR code generation failed" in response.json()["detail"]
