from __future__ import annotations

import base64
import logging
from typing import Any, Optional
from urllib.parse import quote

from culinary.app.domain.models import LookupResult
from culinary.services.errors import ImageLookupError
from culinary.services.gemini_client import GeminiClient

logger = logging.getLogger(__name__)

PLACEHOLDER_URL = "https://source.unsplash.com/1200x600/?{query}"


def build_image_prompt(description: str) -> str:
    return (
        f"A professional, high-resolution, appetizing food photography shot of {description}. "
        "Photorealistic, 4k, studio lighting."
    )


def placeholder_image_url(title: str) -> str:
    return PLACEHOLDER_URL.format(query=quote(title, safe=""))


def _first_inline_data(response: Any) -> Optional[str]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return None
    inline = getattr(parts[0], "inline_data", None)
    data = getattr(inline, "data", None) if inline is not None else None
    if not data:
        return None
    # The SDK hands back raw bytes; REST-shaped payloads are already base64 text
    if isinstance(data, bytes):
        return base64.b64encode(data).decode("ascii")
    return str(data)


class ImageLookupClient:
    def __init__(self, gemini: GeminiClient) -> None:
        self._gemini = gemini

    async def generate_result(self, description: str) -> LookupResult[Optional[str]]:
        try:
            response = await self._gemini.generate_image(build_image_prompt(description))
            encoded = _first_inline_data(response)
        except Exception as err:
            error = ImageLookupError(f"Image generation failed: {err}")
            logger.warning("Error generating image for %r: %s", description, error)
            return LookupResult.degrade(None, str(error))

        if encoded is None:
            return LookupResult.ok(None)
        return LookupResult.ok(f"data:image/png;base64,{encoded}")

    async def generate(self, description: str) -> Optional[str]:
        return (await self.generate_result(description)).value
