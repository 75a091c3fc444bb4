from __future__ import annotations

import base64
import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from alphaportrait.core.config import EnhancerConfig
from alphaportrait.core.data_uri import DEFAULT_MIME_TYPE, decode_base64, strip_data_uri_prefix
from alphaportrait.core.errors import EmptyResultError, TransportError
from alphaportrait.enhance.prompt import ENHANCEMENT_PROMPT

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "Model did not return an enhanced image."


class EnhancementClient:
    """
    Sends one portrait to the Gemini image model and returns the re-rendered image.

    Stateless apart from the lazily created SDK client: every enhance() call is
    a single request, with no retry, timeout or caching.
    """

    def __init__(self, config: EnhancerConfig, genai_client: Optional[Any] = None):
        self.config = config
        self._client = genai_client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    def build_request(self, image: str, mime_type: str) -> dict[str, Any]:
        """Keyword arguments for models.generate_content()."""
        raw = decode_base64(strip_data_uri_prefix(image))
        return {
            "model": self.config.model_name,
            "contents": [
                types.Part.from_bytes(data=raw, mime_type=mime_type),
                types.Part.from_text(text=ENHANCEMENT_PROMPT),
            ],
            "config": types.GenerateContentConfig(
                image_config=types.ImageConfig(aspect_ratio=self.config.aspect_ratio),
            ),
        }

    def enhance(self, image: str, mime_type: str) -> str:
        """
        image:
            Data URI or bare base64 payload of the source portrait.
        mime_type:
            Declared type of the source, forwarded to the model unchecked.

        Returns the enhanced image as a data URI.
        Raises EncodingError, TransportError or EmptyResultError.
        """
        request = self.build_request(image, mime_type)
        logger.info("Requesting enhancement from %s (%s)", request["model"], mime_type)
        try:
            response = self.client.models.generate_content(**request)
        except Exception as e:
            raise TransportError(str(e)) from e
        return extract_image(response, fallback_mime_type=mime_type)


def extract_image(response: Any, fallback_mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """
    Pull the first inline image out of the first candidate.

    Parts are scanned in order; non-image parts (text commentary) are skipped.
    A part without a MIME type is labelled with fallback_mime_type.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        raise EmptyResultError(NO_IMAGE_MESSAGE)

    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        if inline is None or not inline.data:
            continue
        data = inline.data
        payload = data if isinstance(data, str) else base64.b64encode(data).decode("ascii")
        return f"data:{inline.mime_type or fallback_mime_type};base64,{payload}"

    raise EmptyResultError(NO_IMAGE_MESSAGE)
