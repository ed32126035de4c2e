"""Helpers for inline file payloads."""
import base64
import binascii

from constants import DATA_URL_PREFIX, DEFAULT_MIME_TYPE
from exceptions import ValidationError


def encode_data_url(content: bytes, mime_type: str | None = None) -> str:
    """
    Encode raw file bytes as a base64 ``data:`` URL.

    Args:
        content: File bytes
        mime_type: MIME type (default: application/octet-stream)

    Returns:
        data URL string
    """
    encoded = base64.b64encode(content).decode("ascii")
    return f"{DATA_URL_PREFIX}{mime_type or DEFAULT_MIME_TYPE};base64,{encoded}"


def data_url_from_base64(payload: str, mime_type: str | None = None) -> str:
    """
    Build a data URL from a client supplied base64 string.

    Args:
        payload: Base64 text; an existing data URL is returned unchanged
        mime_type: MIME type of the decoded bytes

    Returns:
        data URL string

    Raises:
        ValidationError: If the payload is not valid base64
    """
    if payload.startswith(DATA_URL_PREFIX):
        return payload

    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("File content is not valid base64") from e

    return encode_data_url(content, mime_type)
