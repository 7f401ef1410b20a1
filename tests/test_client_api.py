"""Unit tests for the HTTP client."""

from unittest.mock import MagicMock

import pytest
import requests

from converter.client.api import GENERIC_ERROR, ConversionRequestError, ConverterClient
from converter.client.models import ClientFile

PNG = ClientFile("a.png", b"png-bytes", "image/png")


def _response(status_code: int, body=None) -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


class TestConvert:
    """Tests for ConverterClient.convert()."""

    def test_posts_multipart_with_target_format(self, session):
        session.post.return_value = _response(200, {"message": "ok", "files": [], "failed": []})
        client = ConverterClient("http://converter:8000/", session=session, timeout=5)

        client.convert([PNG], "webp")

        args, kwargs = session.post.call_args
        assert args[0] == "http://converter:8000/api/upload"
        assert kwargs["files"] == [("files", ("a.png", b"png-bytes", "image/png"))]
        assert kwargs["data"] == {"targetFormat": "webp"}
        assert kwargs["timeout"] == 5

    def test_parses_results_and_failures(self, session):
        session.post.return_value = _response(200, {
            "message": "Files converted successfully",
            "files": [{
                "name": "a.webp",
                "buffer": "YWJj",
                "type": "image/webp",
                "metadata": {"original": {"size": 1000}, "converted": {"size": 600}},
            }],
            "failed": [{"name": "b.png", "code": "decode_failed", "error": "bad"}],
        })

        response = ConverterClient("http://x", session=session).convert([PNG], "webp")

        result = response.results[0]
        assert (result.name, result.mime_type, result.original_size, result.converted_size) == (
            "a.webp", "image/webp", 1000, 600,
        )
        assert response.failed[0].code == "decode_failed"

    def test_error_response_carries_server_text_and_code(self, session):
        session.post.return_value = _response(400, {"error": "No files provided", "code": "no_files"})

        with pytest.raises(ConversionRequestError) as exc_info:
            ConverterClient("http://x", session=session).convert([], "webp")

        assert exc_info.value.message == "No files provided"
        assert exc_info.value.code == "no_files"
        assert exc_info.value.status_code == 400

    def test_error_without_body_uses_fallback(self, session):
        session.post.return_value = _response(502)

        with pytest.raises(ConversionRequestError) as exc_info:
            ConverterClient("http://x", session=session).convert([PNG], "webp")

        assert exc_info.value.message == GENERIC_ERROR

    def test_transport_error_is_wrapped(self, session):
        session.post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(ConversionRequestError) as exc_info:
            ConverterClient("http://x", session=session).convert([PNG], "webp")

        assert exc_info.value.message == GENERIC_ERROR
        assert exc_info.value.status_code is None

    def test_malformed_success_body_is_an_error(self, session):
        session.post.return_value = _response(200, {"message": "ok"})

        with pytest.raises(ConversionRequestError):
            ConverterClient("http://x", session=session).convert([PNG], "webp")


class TestAgainstServer:
    """Runs the client against the real app through the test client."""

    def test_round_trip(self, client, png_bytes):
        api = ConverterClient("http://testserver", session=client)

        response = api.convert([ClientFile("cat.png", png_bytes, "image/png")], "jpg")

        assert [r.name for r in response.results] == ["cat.jpg"]
        assert response.results[0].original_size == len(png_bytes)

    def test_server_error_text_reaches_client(self, client):
        api = ConverterClient("http://testserver", session=client)

        with pytest.raises(ConversionRequestError) as exc_info:
            api.convert([ClientFile("cat.png", b"junk", "image/png")], "webp")

        assert exc_info.value.message == "Error processing files"
        assert exc_info.value.code == "conversion_failed"
        assert exc_info.value.failed[0].name == "cat.png"

    def test_health_and_formats(self, client):
        api = ConverterClient("http://testserver", session=client)

        assert api.health() == {"status": "ok"}
        assert "avif" in api.formats()
