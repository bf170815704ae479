"""Tests for ad script generation."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from ad_automator.video.pipeline.base import (
    MissingCredentialError,
    ProviderCallError,
)
from ad_automator.video.pipeline.content_generator import ContentGenerator

MASTER_PROMPT = "Calm investing for busy professionals"
DATE_CONTEXT = "October 19th, 2026"


@pytest.fixture
def provider_cls():
    with patch("ad_automator.video.pipeline.content_generator.TextProvider") as cls:
        yield cls


@pytest.fixture
def sleep() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def generator(sleep, display) -> ContentGenerator:
    generator = ContentGenerator(sleep=sleep)
    generator.set_display(display)
    return generator


class TestContentGenerator:
    """Tests for ContentGenerator.generate."""

    @pytest.mark.asyncio
    async def test_first_attempt_succeeds(self, generator, provider_cls, sleep, sample_content, display):
        provider_cls.return_value.generate_structured = AsyncMock(return_value=sample_content)

        content = await generator.generate(MASTER_PROMPT, DATE_CONTEXT, "sk-openai")

        assert content == sample_content
        sleep.assert_not_awaited()
        provider_cls.assert_called_once_with("openai", "sk-openai", "gpt-4o")
        assert "[Attempt 1/3] Sending master prompt to OpenAI..." in display.messages
        assert "OpenAI generation successful." in display.messages

    @pytest.mark.asyncio
    async def test_prompt_carries_date_and_brief(self, generator, provider_cls, sample_content):
        call = AsyncMock(return_value=sample_content)
        provider_cls.return_value.generate_structured = call

        await generator.generate(MASTER_PROMPT, DATE_CONTEXT, "sk-openai")

        kwargs = call.await_args.kwargs
        assert kwargs["prompt"] == f"Master Prompt: {MASTER_PROMPT}"
        assert DATE_CONTEXT in kwargs["system"]
        assert "EXACTLY 3 SEGMENTS" in kwargs["system"]

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, generator, provider_cls, sleep, sample_content, display):
        call = AsyncMock(side_effect=[RuntimeError("timeout"), ValueError("bad json"), sample_content])
        provider_cls.return_value.generate_structured = call

        content = await generator.generate(MASTER_PROMPT, DATE_CONTEXT, "sk-openai")

        assert content == sample_content
        assert call.await_count == 3
        assert sleep.await_count == 2
        sleep.assert_awaited_with(1.0)
        assert "OpenAI attempt 1 failed: timeout" in display.messages
        assert "OpenAI attempt 2 failed: bad json" in display.messages

    @pytest.mark.asyncio
    async def test_gives_up_after_three_attempts(self, generator, provider_cls, sleep):
        call = AsyncMock(side_effect=RuntimeError("rate limited"))
        provider_cls.return_value.generate_structured = call

        with pytest.raises(RuntimeError, match="rate limited") as exc_info:
            await generator.generate(MASTER_PROMPT, DATE_CONTEXT, "sk-openai")

        assert exc_info.value is call.side_effect
        assert call.await_count == 3
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_pipeline_errors_surface_unchanged(self, generator, provider_cls):
        error = ProviderCallError("OpenAI returned 500", status_code=500)
        provider_cls.return_value.generate_structured = AsyncMock(side_effect=error)

        with pytest.raises(ProviderCallError) as exc_info:
            await generator.generate(MASTER_PROMPT, DATE_CONTEXT, "sk-openai")

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_missing_key(self, generator, provider_cls, sleep):
        with pytest.raises(MissingCredentialError, match="Missing OpenAI API key"):
            await generator.generate(MASTER_PROMPT, DATE_CONTEXT, None)

        provider_cls.assert_not_called()
        sleep.assert_not_awaited()
