"""Builtin provider: Google Gemini over the Generative Language REST API."""

from seller_calendar.providers.base import HTTPProvider

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiProvider(HTTPProvider):
    """Gemini generateContent endpoint, keyed by the server's API_KEY."""

    name = "gemini"

    def __init__(
        self, api_key: str, model: str = "gemini-2.5-flash", timeout: int = 30
    ):
        super().__init__(timeout=timeout)
        self.api_key = api_key
        self.model = model

    def _request(self, prompt: str, json_mode: bool) -> dict:
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        if json_mode:
            payload["generationConfig"] = {"responseMimeType": "application/json"}
        return self._post(
            f"{GEMINI_API_URL}/{self.model}:generateContent",
            payload,
            params={"key": self.api_key},
        )

    def _extract_text(self, body: dict) -> str:
        parts = body["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)
