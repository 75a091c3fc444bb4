from __future__ import annotations

import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from alphaportrait.core.data_uri import parse_data_uri
from alphaportrait.core.errors import EncodingError

DEFAULT_EXPORT_NAME = "sony-alpha-portrait.png"

_FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".webp": "WEBP",
    ".bmp": "BMP",
    ".tif": "TIFF",
    ".tiff": "TIFF",
}


def decode_image(uri: str) -> Image.Image:
    """Data URI -> loaded PIL image."""
    _, raw = parse_data_uri(uri)
    try:
        img = Image.open(io.BytesIO(raw))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise EncodingError(f"Not a readable image: {e}") from e
    return img


def save_data_uri(uri: str, path: str | Path) -> Path:
    """
    Write the image held in a data URI to path.

    The format follows the file extension (PNG when unknown); modes JPEG cannot
    store are flattened to RGB first.
    """
    out = Path(path)
    fmt = _FORMATS.get(out.suffix.lower(), "PNG")
    img = decode_image(uri)
    out.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "JPEG":
        if img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        img.save(out, format=fmt, quality=95, optimize=True)
    else:
        img.save(out, format=fmt)
    return out
