"""Narration synthesis with the ElevenLabs REST API.

Voice choice (per API key, cached for the life of the generator):
1. A voice whose name contains "jonathan" (an exact match wins)
2. A voice whose name contains "adam"
3. The first voice on the account
4. The default voice id when the list is empty or cannot be fetched
"""

from __future__ import annotations

from typing import Optional

import httpx

from ...constants import (
    ELEVENLABS_API_URL,
    ELEVENLABS_DEFAULT_MODEL,
    ELEVENLABS_DEFAULT_VOICE_ID,
    ELEVENLABS_PREFERRED_VOICE,
    ELEVENLABS_SECONDARY_VOICE,
    ELEVENLABS_VOICE_SETTINGS,
    HTTP_TIMEOUT_SECONDS,
)
from .base import MissingCredentialError, PipelineStep, SynthesisError


def choose_voice(voices: list[dict]) -> Optional[dict]:
    """Pick the narrator from an ElevenLabs voice list."""
    named = [v for v in voices if isinstance(v, dict) and v.get("voice_id")]
    if not named:
        return None

    def name_of(voice: dict) -> str:
        return str(voice.get("name") or "").lower()

    for voice in named:
        if name_of(voice) == ELEVENLABS_PREFERRED_VOICE:
            return voice
    for wanted in (ELEVENLABS_PREFERRED_VOICE, ELEVENLABS_SECONDARY_VOICE):
        for voice in named:
            if wanted in name_of(voice):
                return voice
    return named[0]


class VoiceGenerator(PipelineStep):
    """Turns narration text into MP3 bytes."""

    def __init__(
        self,
        model_id: str = ELEVENLABS_DEFAULT_MODEL,
        base_url: str = ELEVENLABS_API_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize voice generator.

        Args:
            model_id: ElevenLabs TTS model.
            base_url: API base URL.
            timeout: Request timeout in seconds.
            http_client: Optional shared client (closed by its owner).
        """
        super().__init__("VoiceGenerator")
        self.model_id = model_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None
        self._voice_cache: dict[str, str] = {}

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

    async def resolve_voice(self, api_key: str) -> str:
        """Find the narrator voice id for an account.

        Listing failures are not fatal; the default voice is used instead.
        """
        if api_key in self._voice_cache:
            return self._voice_cache[api_key]

        voice_id = ELEVENLABS_DEFAULT_VOICE_ID
        client = await self._get_client()
        try:
            response = await client.get(
                f"{self.base_url}/voices",
                headers={"xi-api-key": api_key},
            )
            response.raise_for_status()
            voices = response.json().get("voices") or []
            chosen = choose_voice(voices if isinstance(voices, list) else [])
            if chosen is not None:
                voice_id = chosen["voice_id"]
                await self.log_detail(f"Using voice: {chosen.get('name')} ({voice_id})")
            else:
                await self.log_warning("No voices on the ElevenLabs account, using default voice")
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            await self.log_warning(f"Failed to fetch ElevenLabs voices, using default voice ({e})")
            return voice_id

        self._voice_cache[api_key] = voice_id
        return voice_id

    async def synthesize(self, text: str, api_key: str | None) -> bytes:
        """Synthesize narration.

        Args:
            text: Narration text.
            api_key: ElevenLabs key.

        Returns:
            MP3 audio bytes.

        Raises:
            MissingCredentialError: If no key is configured.
            SynthesisError: On HTTP error status or network failure.
        """
        if not api_key:
            raise MissingCredentialError("voice_key", "ElevenLabs")

        voice_id = await self.resolve_voice(api_key)
        client = await self._get_client()

        try:
            response = await client.post(
                f"{self.base_url}/text-to-speech/{voice_id}",
                headers={
                    "xi-api-key": api_key,
                    "Content-Type": "application/json",
                    "Accept": "audio/mpeg",
                },
                json={
                    "text": text,
                    "model_id": self.model_id,
                    "voice_settings": dict(ELEVENLABS_VOICE_SETTINGS),
                },
            )
        except httpx.HTTPError as e:
            raise SynthesisError(f"ElevenLabs request failed: {e}") from e

        if response.status_code >= 400:
            body = response.text
            raise SynthesisError(
                f"ElevenLabs API Error ({response.status_code}): {body}",
                status_code=response.status_code,
                body=body,
            )

        audio = response.content
        if not audio:
            raise SynthesisError("ElevenLabs returned empty audio", status_code=response.status_code)

        await self.log_debug(f"Synthesized {len(audio)} bytes with voice {voice_id}")
        return audio
