from __future__ import annotations

from typing import Any

from google import genai
from google.genai import types

from culinary.services.errors import GeminiConfigurationError

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"


def is_rate_limited_error(exc: Exception) -> bool:
    status_code = getattr(exc, "status_code", None) or getattr(exc, "code", None)
    if status_code == 429:
        return True
    return "RESOURCE_EXHAUSTED" in str(exc)


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_TEXT_MODEL,
        image_model_name: str = DEFAULT_IMAGE_MODEL,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self.image_model_name = image_model_name
        self._client = self._configure_api()

    def _configure_api(self) -> genai.Client:
        if not self.api_key:
            raise GeminiConfigurationError("Missing Gemini API key.")
        return genai.Client(api_key=self.api_key)

    async def generate_json(
        self,
        prompt: str,
        response_schema: types.Schema,
        temperature: float = 0.4,
    ) -> str | None:
        response = await self._client.aio.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=response_schema,
                temperature=temperature,
            ),
        )
        return response.text

    async def generate_grounded(self, prompt: str) -> Any:
        return await self._client.aio.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=types.GenerateContentConfig(
                tools=[types.Tool(google_search=types.GoogleSearch())],
            ),
        )

    async def generate_image(self, prompt: str) -> Any:
        return await self._client.aio.models.generate_content(
            model=self.image_model_name,
            contents=types.Content(role="user", parts=[types.Part(text=prompt)]),
            config=types.GenerateContentConfig(response_modalities=["IMAGE"]),
        )
