"""LLM service for hosted chat-completion providers."""

import logging

import anthropic
import httpx

from stockroom.config import get_settings

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Raised when the provider call fails."""


class LLMNotConfiguredError(LLMError):
    """Raised when the selected provider has no API key."""


class LLMService:
    """Service for generating text with an OpenAI-compatible API or Anthropic."""

    def __init__(self) -> None:
        self.settings = get_settings()
        self.provider = self.settings.llm_provider
        self.timeout = self.settings.llm_timeout_seconds

    @property
    def is_configured(self) -> bool:
        """Check if the selected provider has credentials."""
        if self.provider == "anthropic":
            return bool(self.settings.anthropic_api_key)
        return bool(self.settings.llm_api_key)

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 300,
    ) -> str:
        """Generate a response from the configured provider."""
        if not self.is_configured:
            raise LLMNotConfiguredError(f"No API key configured for provider '{self.provider}'")

        if self.provider == "anthropic":
            return await self._generate_anthropic(prompt, system_prompt, temperature, max_tokens)
        return await self._generate_openai(prompt, system_prompt, temperature, max_tokens)

    async def _generate_openai(
        self,
        prompt: str,
        system_prompt: str | None,
        temperature: float,
        max_tokens: int,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.settings.llm_base_url.rstrip('/')}/chat/completions",
                    headers={"Authorization": f"Bearer {self.settings.llm_api_key}"},
                    json={
                        "model": self.settings.llm_model,
                        "messages": messages,
                        "temperature": temperature,
                        "max_tokens": max_tokens,
                    },
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling LLM provider: {e}")
            raise LLMError(str(e)) from e
        except ValueError as e:
            logger.error(f"LLM provider returned invalid JSON: {e}")
            raise LLMError("Invalid response from LLM provider") from e

        try:
            choices = data.get("choices") or []
            if not choices:
                return ""
            return (choices[0].get("message", {}).get("content") or "").strip()
        except (AttributeError, IndexError, TypeError) as e:
            logger.error(f"Unexpected LLM response shape: {e}")
            raise LLMError("Unexpected response from LLM provider") from e

    async def _generate_anthropic(
        self,
        prompt: str,
        system_prompt: str | None,
        temperature: float,
        max_tokens: int,
    ) -> str:
        client = anthropic.AsyncAnthropic(
            api_key=self.settings.anthropic_api_key, timeout=self.timeout
        )
        kwargs = {}
        if system_prompt:
            kwargs["system"] = system_prompt

        try:
            message = await client.messages.create(
                model=self.settings.anthropic_model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
                **kwargs,
            )
        except anthropic.APIError as e:
            logger.error(f"Anthropic API error: {e}")
            raise LLMError(str(e)) from e

        return "".join(block.text for block in message.content if block.type == "text").strip()
