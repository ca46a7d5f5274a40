from __future__ import annotations

import logging
from typing import Any, Iterable

from culinary.app.domain.models import LookupResult
from culinary.services.errors import VideoLookupError
from culinary.services.gemini_client import GeminiClient
from culinary.services.ids import looks_like_video, video_source
from culinary.services.types import VideoResult

logger = logging.getLogger(__name__)

MAX_VIDEOS = 4


def build_video_prompt(query: str) -> str:
    return (
        f'Find the best video tutorial on YouTube for cooking "{query}". '
        "Return the title and URL of the video if found."
    )


def _grounding_chunks(response: Any) -> list[Any]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    if metadata is None:
        return []
    return list(getattr(metadata, "grounding_chunks", None) or [])


def extract_videos(chunks: Iterable[Any], limit: int = MAX_VIDEOS) -> list[VideoResult]:
    """
    Pick video links out of grounding chunks.

    Chunks without both uri and title are skipped. Results are unique by uri:
    a repeated uri keeps its first position and takes the latest title.
    """
    by_uri: dict[str, VideoResult] = {}
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None) if web is not None else None
        title = getattr(web, "title", None) if web is not None else None
        if not uri or not title:
            continue
        if not looks_like_video(uri, title):
            continue
        by_uri[uri] = VideoResult(title=title, uri=uri, source=video_source(uri))
    return list(by_uri.values())[:limit]


class VideoLookupClient:
    def __init__(self, gemini: GeminiClient, limit: int = MAX_VIDEOS) -> None:
        self._gemini = gemini
        self.limit = limit

    async def _lookup(self, query: str) -> list[VideoResult]:
        try:
            response = await self._gemini.generate_grounded(build_video_prompt(query))
            return extract_videos(_grounding_chunks(response), self.limit)
        except Exception as err:
            raise VideoLookupError(f"Video search failed: {err}") from err

    async def find_result(self, query: str) -> LookupResult[list[VideoResult]]:
        try:
            videos = await self._lookup(query)
        except VideoLookupError as err:
            logger.warning("Error finding videos for %r: %s", query, err)
            return LookupResult.degrade([], str(err))
        logger.info("Found %d video(s) for query=%r", len(videos), query)
        return LookupResult.ok(videos)

    async def find(self, query: str) -> list[VideoResult]:
        return (await self.find_result(query)).value
