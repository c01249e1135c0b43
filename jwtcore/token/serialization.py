"""Compact-token segment codec: base64url without padding over JSON."""

import base64
import re
from typing import Any

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError, from_json, to_json

from jwtcore.core.errors import Base64Error, JSONError

_BASE64URL = re.compile(r"[A-Za-z0-9_-]*")


def base64url_encode(data: bytes) -> str:
    """Encode bytes as base64url without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(text: str | bytes) -> bytes:
    """Decode unpadded base64url, rejecting padding and foreign characters."""
    if isinstance(text, bytes):
        try:
            text = text.decode("ascii")
        except UnicodeDecodeError as exc:
            raise Base64Error() from exc
    if not _BASE64URL.fullmatch(text) or len(text) % 4 == 1:
        raise Base64Error()
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except ValueError as exc:
        raise Base64Error() from exc


def int_to_base64url(value: int) -> str:
    """Encode an integer as big-endian base64url without padding."""
    byte_length = max(1, (value.bit_length() + 7) // 8)
    raw = value.to_bytes(byte_length, byteorder="big")
    return base64url_encode(raw)


def base64url_to_int(text: str) -> int:
    """Decode a big-endian base64url integer."""
    return int.from_bytes(base64url_decode(text), byteorder="big")


def to_json_bytes(value: Any) -> bytes:
    """Serialize a JSON-compatible value, model, or dataclass to compact JSON.

    Pydantic models are dumped by alias with ``None`` members left out.
    """
    try:
        if isinstance(value, BaseModel):
            return value.model_dump_json(by_alias=True, exclude_none=True).encode()
        return to_json(value)
    except PydanticSerializationError as exc:
        raise JSONError(f"Value is not JSON serializable: {exc}") from exc


def serialize_segment(value: Any) -> str:
    """Return ``base64url(json(value))`` for one token segment."""
    return base64url_encode(to_json_bytes(value))


def parse_json_object(data: bytes) -> dict[str, Any]:
    """Parse JSON bytes that must hold an object."""
    try:
        parsed = from_json(data, allow_inf_nan=False)
    except ValueError as exc:
        raise JSONError(f"Invalid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise JSONError("Expected a JSON object")
    return parsed


def deserialize_segment(text: str) -> dict[str, Any]:
    """Decode one token segment into its JSON object.

    Raises:
        Base64Error: the segment is not unpadded base64url.
        JSONError: the decoded bytes are not a JSON object.
    """
    return parse_json_object(base64url_decode(text))
