"""Three-segment ad script generation with OpenAI.

The master prompt sets the campaign; the date only calibrates tone and
must never appear in the narration.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from ...constants import CONTENT_MAX_ATTEMPTS, CONTENT_RETRY_DELAY_SECONDS
from ...providers.text import TextProvider
from .base import (
    AdContent,
    MissingCredentialError,
    PipelineStep,
)

CONTENT_SYSTEM_PROMPT = """You are a creative director for high-performing video ads.
Your goal is to generate a short, engaging video ad with EXACTLY 3 SEGMENTS.

The ad is for a specific date: {date_context}.

Output structured JSON:
{{
    "theme": "Brief theme description",
    "segments": [
        {{
            "text": "The Hook. Must be a powerful, attention-grabbing opening. (15-20 words)",
            "visualKeywords": "Search terms for stock video",
            "estimatedDuration": 8
        }},
        {{
            "text": "The core message. Detailed and persuasive. (15-25 words)",
            "visualKeywords": "Search terms for stock video",
            "estimatedDuration": 10
        }},
        {{
            "text": "Call to action or final thought. Strong and clear. (10-15 words)",
            "visualKeywords": "Search terms for stock video",
            "estimatedDuration": 7
        }}
    ]
}}

Guidelines:
- STRICTLY 3 SEGMENTS.
- SEGMENT 1 MUST BE A HOOK: Focus on a problem, a surprising fact, or a bold promise.
- NO DATES: DO NOT include the date or any date references (like "Today is...") in the text of any segment.
- VISUAL RULE: Broad, professional concepts.
- COMPLIANCE: No graphs, charts, or trading screens.
- TONALITY: calm, unhurried, and authoritative.
- LENGTH: Allow for natural, flowing sentences. Not too short, but not rambling."""


class ContentGenerator(PipelineStep):
    """Generates the ad script, retrying transient failures."""

    def __init__(
        self,
        model_id: str = "gpt-4o",
        max_attempts: int = CONTENT_MAX_ATTEMPTS,
        retry_delay: float = CONTENT_RETRY_DELAY_SECONDS,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        """Initialize content generator.

        Args:
            model_id: OpenAI chat model.
            max_attempts: Total attempts (including the first).
            retry_delay: Fixed delay between attempts in seconds.
            sleep: Awaitable sleep used for the backoff.
        """
        super().__init__("ContentGenerator")
        self.model_id = model_id
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay
        self._sleep = sleep or asyncio.sleep

    async def _generate_once(self, master_prompt: str, date_context: str, api_key: str) -> AdContent:
        provider = TextProvider("openai", api_key, self.model_id)
        return await provider.generate_structured(
            prompt=f"Master Prompt: {master_prompt}",
            response_model=AdContent,
            system=CONTENT_SYSTEM_PROMPT.format(date_context=date_context),
            task="ad_content",
        )

    async def generate(self, master_prompt: str, date_context: str, api_key: str | None) -> AdContent:
        """Generate a three-segment script.

        Args:
            master_prompt: Campaign brief from the project.
            date_context: Human readable date, e.g. "October 19th, 2026".
            api_key: OpenAI key.

        Returns:
            Validated AdContent with exactly three segments.

        Raises:
            MissingCredentialError: If no key is configured (not retried).
            Exception: The last attempt's error when every attempt failed.
        """
        if not api_key:
            raise MissingCredentialError("content_key", "OpenAI")

        last_error: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            await self.log_progress(
                f"[Attempt {attempt}/{self.max_attempts}] Sending master prompt to OpenAI..."
            )
            try:
                content = await self._generate_once(master_prompt, date_context, api_key)
                await self.log_success("OpenAI generation successful.")
                return content
            except Exception as e:
                last_error = e
                await self.log_warning(f"OpenAI attempt {attempt} failed: {e}")

            if attempt < self.max_attempts:
                await self._sleep(self.retry_delay)

        raise last_error
