"""Abstract base for LLM providers."""

from abc import ABC, abstractmethod

import httpx

from yt_summary_mcp.errors import ProviderError
from yt_summary_mcp.utils import dig

UNKNOWN_ERROR = "Unknown error"
UNEXPECTED_RESPONSE = "Unexpected response shape"


def extract_error_message(resp: httpx.Response) -> str:
    """Best-effort ``error.message`` from a provider's JSON error body."""
    try:
        body = resp.json()
    except ValueError:
        return UNKNOWN_ERROR
    error = body.get("error") if isinstance(body, dict) else None
    message = error.get("message") if isinstance(error, dict) else None
    return message if isinstance(message, str) and message else UNKNOWN_ERROR


def raise_for_provider_error(resp: httpx.Response) -> None:
    if not resp.is_success:
        raise ProviderError(resp.status_code, extract_error_message(resp))


def read_reply_text(resp: httpx.Response, *path: str | int) -> str:
    """Assistant text at ``path`` in a successful reply body."""
    try:
        body = resp.json()
    except ValueError:
        raise ProviderError(resp.status_code, UNEXPECTED_RESPONSE)
    text = dig(body, *path)
    if not isinstance(text, str):
        raise ProviderError(resp.status_code, UNEXPECTED_RESPONSE)
    return text


class LLMProvider(ABC):
    """One system turn and one user turn in, one assistant text out."""

    default_model: str

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self.model = model or self.default_model
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=120.0)

    @abstractmethod
    async def complete(self, system_prompt: str, user_message: str) -> str:
        """Send the prompt pair and return the assistant's text."""
        ...

    async def close(self) -> None:
        """Clean up resources."""
        if self._owns_client:
            await self._client.aclose()
