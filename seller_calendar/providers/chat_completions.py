"""OpenAI-compatible chat completion providers (OpenAI, OpenRouter)."""

from typing import Optional

from seller_calendar.providers.base import HTTPProvider

OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"
OPENROUTER_API_URL = "https://openrouter.ai/api/v1/chat/completions"


class ChatCompletionsProvider(HTTPProvider):
    """Provider speaking the /chat/completions envelope with a bearer key."""

    def __init__(
        self,
        name: str,
        url: str,
        api_key: str,
        model: str,
        timeout: int = 30,
        extra_headers: Optional[dict] = None,
    ):
        super().__init__(timeout=timeout)
        self.name = name
        self.url = url
        self.api_key = api_key
        self.model = model
        self.extra_headers = extra_headers or {}

    def _request(self, prompt: str, json_mode: bool) -> dict:
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}
        headers = {"Authorization": f"Bearer {self.api_key}", **self.extra_headers}
        return self._post(self.url, payload, headers=headers)

    def _extract_text(self, body: dict) -> str:
        content = body["choices"][0]["message"]["content"]
        if content is None:
            raise TypeError("empty message content")
        return content


def openai_provider(
    api_key: str, model: str, timeout: int = 30
) -> ChatCompletionsProvider:
    return ChatCompletionsProvider("openai", OPENAI_API_URL, api_key, model, timeout)


def openrouter_provider(
    api_key: str, model: str, timeout: int = 30
) -> ChatCompletionsProvider:
    return ChatCompletionsProvider(
        "openrouter",
        OPENROUTER_API_URL,
        api_key,
        model,
        timeout,
        extra_headers={"X-Title": "UAE Seller's Smart Calendar"},
    )
