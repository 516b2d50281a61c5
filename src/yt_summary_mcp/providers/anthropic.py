"""Anthropic Messages API provider."""

import logging

from .base import LLMProvider, raise_for_provider_error, read_reply_text

logger = logging.getLogger(__name__)

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(LLMProvider):
    default_model = "claude-sonnet-4-20250514"

    async def complete(self, system_prompt: str, user_message: str) -> str:
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self._api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }
        body = {
            "model": self.model,
            "max_tokens": 1024,
            "temperature": 1,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_message}],
        }
        logger.info(f"Anthropic request: model={self.model}")
        resp = await self._client.post(ANTHROPIC_URL, headers=headers, json=body)
        raise_for_provider_error(resp)
        return read_reply_text(resp, "content", 0, "text")
