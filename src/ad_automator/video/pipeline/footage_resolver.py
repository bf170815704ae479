"""Stock footage search and download from Pexels.

Searches portrait videos for a segment's keywords, retries exactly once
with a generic fallback query, then picks one result at random so repeated
keywords across days still give varied footage.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import Optional

import httpx

from ...constants import (
    DOWNLOAD_TIMEOUT_SECONDS,
    HTTP_TIMEOUT_SECONDS,
    PEXELS_API_URL,
    PEXELS_FALLBACK_QUERY,
    PEXELS_MIN_HD_WIDTH,
    PEXELS_ORIENTATION,
    PEXELS_PREFERRED_QUALITY,
    PEXELS_VIDEOS_PER_SEARCH,
)
from .base import (
    MissingCredentialError,
    NoFootageFoundError,
    PipelineStep,
    ProviderCallError,
)


def select_video_file(video_data: dict) -> Optional[dict]:
    """Select the encoding to download.

    The first HD file at least 1280px wide, else the first file.
    """
    video_files = video_data.get("video_files") or []
    if not video_files:
        return None

    for vf in video_files:
        if vf.get("quality") == PEXELS_PREFERRED_QUALITY and (vf.get("width") or 0) >= PEXELS_MIN_HD_WIDTH:
            return vf

    return video_files[0]


class FootageResolver(PipelineStep):
    """Finds a direct media URL for a segment's visual keywords."""

    def __init__(
        self,
        base_url: str = PEXELS_API_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        rng: Optional[random.Random] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize footage resolver.

        Args:
            base_url: Pexels video API base URL.
            timeout: Request timeout in seconds.
            rng: Random source for the pick among results.
            http_client: Optional shared client (closed by its owner).
        """
        super().__init__("FootageResolver")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._rng = rng or random.Random()
        self._client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _search(self, query: str, api_key: str) -> list[dict]:
        client = await self._get_client()
        try:
            response = await client.get(
                f"{self.base_url}/search",
                headers={"Authorization": api_key},
                params={
                    "query": query,
                    "per_page": PEXELS_VIDEOS_PER_SEARCH,
                    "orientation": PEXELS_ORIENTATION,
                },
            )
        except httpx.HTTPError as e:
            raise ProviderCallError(f"Pexels search failed for '{query}': {e}") from e

        if response.status_code >= 400:
            raise ProviderCallError(
                f"Pexels API Error ({response.status_code}) for '{query}': {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            videos = response.json().get("videos") or []
        except (ValueError, AttributeError) as e:
            raise ProviderCallError(f"Pexels returned an invalid response for '{query}'") from e

        return [v for v in videos if isinstance(v, dict)]

    async def resolve(self, keywords: str, api_key: str | None) -> str:
        """Resolve keywords to a downloadable video URL.

        Args:
            keywords: Search query (segment visual keywords).
            api_key: Pexels key.

        Returns:
            Direct media URL.

        Raises:
            MissingCredentialError: If no key is configured.
            ProviderCallError: On HTTP error status or network failure.
            NoFootageFoundError: If neither query returns a usable video.
        """
        if not api_key:
            raise MissingCredentialError("footage_key", "Pexels")

        videos = await self._search(keywords, api_key)
        if not videos:
            await self.log_progress(f"No videos found for '{keywords}'. Trying fallback.")
            videos = await self._search(PEXELS_FALLBACK_QUERY, api_key)

        if not videos:
            raise NoFootageFoundError(
                f"Failed to find any stock footage for '{keywords}', even with the fallback query"
            )

        video = self._rng.choice(videos)
        video_file = select_video_file(video)
        if not video_file or not video_file.get("link"):
            raise NoFootageFoundError(f"Pexels video {video.get('id')} has no downloadable file")

        await self.log_detail(
            f"Picked Pexels video {video.get('id')} "
            f"({video_file.get('quality')}, {video_file.get('width')}x{video_file.get('height')})"
        )
        return video_file["link"]


class FootageDownloader(PipelineStep):
    """Streams a media URL to disk."""

    def __init__(
        self,
        timeout: float = DOWNLOAD_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__("FootageDownloader")
        self.timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def download(self, url: str, output_path: Path) -> Path:
        """Download a video.

        Raises:
            ProviderCallError: If the request fails or returns an error status.
        """
        output_path = Path(output_path)
        client = await self._get_client()

        try:
            async with client.stream("GET", url) as response:
                response.raise_for_status()
                with open(output_path, "wb") as f:
                    async for chunk in response.aiter_bytes(8192):
                        f.write(chunk)
        except httpx.HTTPStatusError as e:
            output_path.unlink(missing_ok=True)
            raise ProviderCallError(
                f"Video download failed: HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            output_path.unlink(missing_ok=True)
            raise ProviderCallError(f"Video download failed: {e}") from e

        await self.log_debug(f"Downloaded {output_path.name} ({output_path.stat().st_size} bytes)")
        return output_path
