from __future__ import annotations

import base64
import binascii
import mimetypes
import re
from pathlib import Path
from typing import Optional, Tuple

from alphaportrait.core.errors import EncodingError

DEFAULT_MIME_TYPE = "application/octet-stream"

_HEADER_RE = re.compile(r"^data:(?P<mime>[^;,]*)(?P<params>(;[^;,]*)*),", re.IGNORECASE)


def encode_data_uri(data: bytes, mime_type: str) -> str:
    """Raw bytes -> 'data:<mime>;base64,<payload>'."""
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def strip_data_uri_prefix(value: str) -> str:
    """
    Return the payload part of a data URI.

    Everything up to and including the first comma is dropped. A value with no
    comma is taken to be a bare base64 payload and returned unchanged.
    """
    head, sep, tail = value.partition(",")
    return tail if sep else head


def decode_base64(payload: str) -> bytes:
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Invalid base64 image payload: {e}") from e


def parse_data_uri(value: str) -> Tuple[Optional[str], bytes]:
    """
    Split a data URI (or bare base64 payload) into (mime_type, raw bytes).

    mime_type is None when the value carries no data: header.
    """
    m = _HEADER_RE.match(value)
    mime = (m.group("mime") or None) if m else None
    return mime, decode_base64(strip_data_uri_prefix(value))


def guess_mime_type(path: str | Path) -> str:
    mime, _ = mimetypes.guess_type(str(path))
    return mime or DEFAULT_MIME_TYPE


def read_file_as_data_uri(path: str | Path, mime_type: Optional[str] = None) -> str:
    """Read a whole file and encode it as a self-describing data URI."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise EncodingError(f"Could not read {path}: {e}") from e
    return encode_data_uri(data, mime_type or guess_mime_type(path))
