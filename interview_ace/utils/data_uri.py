"""
Data URI helpers.

The browser client reads uploads and recordings with ``FileReader.readAsDataURL``
so résumés and answers arrive as ``data:<mime>;base64,<payload>`` strings.
"""
import base64
import binascii
from dataclasses import dataclass

from interview_ace.exceptions import ValidationError

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class DataUri:
    mime_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def normalize_mime_type(mime_type: str) -> str:
    """Lower-case a MIME type and drop parameters such as ``;codecs=opus``."""
    base = (mime_type or "").split(";", 1)[0].strip().lower()
    return base or DEFAULT_MIME_TYPE


def parse_data_uri(uri: str) -> DataUri:
    """Decode a base64 data URI into its MIME type and raw bytes."""
    if not uri or not uri.startswith("data:"):
        raise ValidationError("Expected a data URI starting with 'data:'")

    header, sep, payload = uri[5:].partition(",")
    if not sep:
        raise ValidationError("Malformed data URI: missing ',' separator")

    params = header.split(";")
    if "base64" not in (p.strip().lower() for p in params[1:]):
        raise ValidationError("Only base64-encoded data URIs are supported")

    try:
        data = base64.b64decode(payload.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Malformed data URI payload: {e}")

    if not data:
        raise ValidationError("Data URI payload is empty")

    return DataUri(mime_type=normalize_mime_type(params[0]), data=data)


def to_data_uri(data: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{normalize_mime_type(mime_type)};base64,{encoded}"
