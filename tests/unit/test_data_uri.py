"""
Unit tests for data URI helpers.
"""
import pytest

from interview_ace.exceptions import ValidationError
from interview_ace.utils.data_uri import normalize_mime_type, parse_data_uri, to_data_uri


class TestDataUri:
    """Test cases for data URI parsing."""

    @pytest.mark.unit
    def test_parse_data_uri(self):
        decoded = parse_data_uri("data:text/plain;base64,SGVsbG8=")
        assert decoded.mime_type == "text/plain"
        assert decoded.data == b"Hello"
        assert decoded.size == 5

    @pytest.mark.unit
    def test_parse_data_uri_drops_codec_parameters(self):
        """MediaRecorder produces types like audio/webm;codecs=opus."""
        decoded = parse_data_uri("data:audio/webm;codecs=opus;base64,GkXfow==")
        assert decoded.mime_type == "audio/webm"
        assert decoded.data == b"\x1aE\xdf\xa3"

    @pytest.mark.unit
    def test_to_data_uri_is_parseable(self):
        uri = to_data_uri(b"%PDF-1.4", "Application/PDF")
        assert uri.startswith("data:application/pdf;base64,")
        assert parse_data_uri(uri).data == b"%PDF-1.4"

    @pytest.mark.unit
    @pytest.mark.parametrize("uri", [
        "",
        "http://example.com/resume.pdf",
        "data:text/plain;base64",
        "data:text/plain,Hello",
        "data:text/plain;base64,not base64!!",
        "data:text/plain;base64,",
    ])
    def test_rejects_malformed_uris(self, uri):
        with pytest.raises(ValidationError):
            parse_data_uri(uri)

    @pytest.mark.unit
    def test_missing_mime_type_defaults_to_octet_stream(self):
        assert parse_data_uri("data:;base64,SGVsbG8=").mime_type == "application/octet-stream"

    @pytest.mark.unit
    def test_normalize_mime_type(self):
        assert normalize_mime_type(" Video/WebM; codecs=vp8,opus ") == "video/webm"
        assert normalize_mime_type(None) == "application/octet-stream"
