# culinary/app/deps.py (process-wide singletons exposed as dependencies)

from __future__ import annotations

from fastapi import Depends

from culinary.app.config import settings
from culinary.app.infra.storage.file_provider import FileKeyValueStorage
from culinary.app.services.history_service import HistoryStore
from culinary.services.connectivity import ConnectivityProbe
from culinary.services.gemini_client import GeminiClient
from culinary.services.image_lookup import ImageLookupClient
from culinary.services.recipe_generation import RecipeGenerationClient
from culinary.services.search import SearchService
from culinary.services.video_lookup import VideoLookupClient

_gemini: GeminiClient | None = None
_history: HistoryStore | None = None


def get_gemini_client() -> GeminiClient:
    global _gemini
    if _gemini is None:
        _gemini = GeminiClient(
            api_key=settings.GEMINI_API_KEY.get_secret_value(),
            model_name=settings.GEMINI_TEXT_MODEL,
            image_model_name=settings.GEMINI_IMAGE_MODEL,
        )
    return _gemini


def get_history_store() -> HistoryStore:
    global _history
    if _history is None:
        _history = HistoryStore(
            storage=FileKeyValueStorage(settings.HISTORY_DIR, quota_bytes=settings.STORAGE_QUOTA_BYTES),
            storage_key=settings.HISTORY_STORAGE_KEY,
            capacity=settings.HISTORY_CAPACITY,
        )
    return _history


def get_connectivity() -> ConnectivityProbe:
    return ConnectivityProbe(
        probe_url=settings.CONNECTIVITY_PROBE_URL,
        timeout_seconds=settings.CONNECTIVITY_TIMEOUT_SECONDS,
        force_offline=settings.FORCE_OFFLINE,
    )


def get_recipe_client(gemini: GeminiClient = Depends(get_gemini_client)) -> RecipeGenerationClient:
    return RecipeGenerationClient(gemini, temperature=settings.RECIPE_TEMPERATURE)


def get_video_client(gemini: GeminiClient = Depends(get_gemini_client)) -> VideoLookupClient:
    return VideoLookupClient(gemini)


def get_image_client(gemini: GeminiClient = Depends(get_gemini_client)) -> ImageLookupClient:
    return ImageLookupClient(gemini)


def get_search_service(
    recipes: RecipeGenerationClient = Depends(get_recipe_client),
    videos: VideoLookupClient = Depends(get_video_client),
    history: HistoryStore = Depends(get_history_store),
    connectivity: ConnectivityProbe = Depends(get_connectivity),
) -> SearchService:
    return SearchService(recipes=recipes, videos=videos, history=history, connectivity=connectivity)
