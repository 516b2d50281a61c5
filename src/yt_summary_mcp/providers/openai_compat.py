"""OpenAI-compatible chat completions provider (OpenAI, Moonshot, local servers...)."""

import logging

import httpx

from .base import LLMProvider, raise_for_provider_error, read_reply_text

logger = logging.getLogger(__name__)


def chat_completions_url(base_url: str) -> str:
    return base_url.rstrip("/") + "/chat/completions"


class OpenAICompatibleProvider(LLMProvider):
    default_model = "kimi-k2-0905-preview"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_key, model=model, client=client)
        self.url = chat_completions_url(base_url)

    async def complete(self, system_prompt: str, user_message: str) -> str:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }
        body = {
            "model": self.model,
            "temperature": 1,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        }
        logger.info(f"OpenAI-compatible request: {self.url} model={self.model}")
        resp = await self._client.post(self.url, headers=headers, json=body)
        raise_for_provider_error(resp)
        return read_reply_text(resp, "choices", 0, "message", "content")
