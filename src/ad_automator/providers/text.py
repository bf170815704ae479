"""Structured text generation using the Agno framework.

One provider instance wraps one model (OpenAI for scripts, Gemini for the
safety audit). Every request and response is written to the ``ai_calls``
logger so a full transcript of billed calls ends up in logs/ai_calls.log.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Any, TypeVar

from pydantic import BaseModel

_logger = logging.getLogger("ai_calls")

ModelT = TypeVar("ModelT", bound=BaseModel)

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")

SUPPORTED_PROVIDERS = ("openai", "gemini")


def _create_agno_model(provider_name: str, model_id: str, api_key: str) -> Any:
    """Create an Agno model instance for the given provider."""
    if provider_name == "openai":
        from agno.models.openai import OpenAIChat
        return OpenAIChat(
            id=model_id,
            api_key=api_key,
        )

    elif provider_name == "gemini":
        from agno.models.google import Gemini
        return Gemini(
            id=model_id,
            api_key=api_key,
        )

    raise ValueError(
        f"Unsupported text provider: {provider_name} (expected one of {SUPPORTED_PROVIDERS})"
    )


def coerce_structured(content: Any, response_model: type[ModelT]) -> ModelT:
    """Turn an agent reply into ``response_model``.

    Agno returns the validated model when structured output works, but some
    models hand back the raw JSON string (sometimes inside a markdown fence).

    Raises:
        ValueError: If the reply is empty or does not match the model.
    """
    if isinstance(content, response_model):
        return content
    if content is None:
        raise ValueError(f"Empty reply, expected {response_model.__name__}")
    if isinstance(content, dict):
        return response_model.model_validate(content)
    if isinstance(content, str):
        text = _FENCE_RE.sub("", content.strip()).strip()
        if not text:
            raise ValueError(f"Empty reply, expected {response_model.__name__}")
        return response_model.model_validate_json(text)
    raise ValueError(
        f"Unexpected reply type {type(content).__name__}, expected {response_model.__name__}"
    )


class TextProvider:
    """Single-model structured generation through Agno.

    Usage:
        provider = TextProvider("openai", api_key, "gpt-4o")
        content = await provider.generate_structured(prompt, AdContent, system=...)
    """

    def __init__(self, provider: str, api_key: str, model_id: str):
        """Initialize the text provider.

        Args:
            provider: Provider name ('openai' or 'gemini').
            api_key: API key for the provider.
            model_id: Model identifier passed to Agno.
        """
        if provider not in SUPPORTED_PROVIDERS:
            raise ValueError(f"Unsupported text provider: {provider}")
        self.provider = provider
        self.model_id = model_id
        self._api_key = api_key
        self._total_calls = 0

    async def generate_structured(
        self,
        prompt: str,
        response_model: type[ModelT],
        system: str | None = None,
        task: str | None = None,
    ) -> ModelT:
        """Generate structured output matching a Pydantic model.

        Args:
            prompt: The user prompt to send to the model.
            response_model: Pydantic model class for the response.
            system: Optional system prompt for context.
            task: Optional task name for the call log.

        Returns:
            Instance of response_model with extracted data.

        Raises:
            ValueError: If the reply is missing or malformed.
            Exception: Whatever the underlying SDK raises on call failure.
        """
        from agno.agent import Agent

        model = _create_agno_model(self.provider, self.model_id, self._api_key)

        _logger.info(
            f"AI_REQUEST_STRUCTURED | provider:{self.provider} | model:{self.model_id} | "
            f"task:{task} | response_model:{response_model.__name__}\n"
            f"--- SYSTEM ---\n{system or '(none)'}\n"
            f"--- PROMPT ---\n{prompt}\n"
            f"--- END REQUEST ---"
        )

        start_time = time.time()
        try:
            agent = Agent(
                model=model,
                instructions=system,
                output_schema=response_model,
                markdown=False,
            )
            response = await agent.arun(prompt)
            result = coerce_structured(response.content, response_model)
        except Exception as e:
            _logger.warning(
                f"STRUCTURED_ERROR | provider:{self.provider} | model:{self.model_id} | "
                f"task:{task} | error:{e}"
            )
            raise

        duration = time.time() - start_time
        self._total_calls += 1

        _logger.info(
            f"AI_RESPONSE_STRUCTURED | provider:{self.provider} | model:{self.model_id} | "
            f"task:{task} | response_model:{response_model.__name__} | "
            f"duration:{duration:.2f}s\n"
            f"--- RESPONSE (JSON) ---\n{result.model_dump_json(indent=2, by_alias=True)}\n"
            f"--- END RESPONSE ---"
        )

        return result

    @property
    def total_calls(self) -> int:
        return self._total_calls
