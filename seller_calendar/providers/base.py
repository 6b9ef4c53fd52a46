"""Base classes for AI providers."""

import json
import logging
import re
from typing import Any, Optional, Protocol

import requests

from seller_calendar.exceptions import ProviderError

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class AIProvider(Protocol):
    """Protocol for AI providers."""

    name: str

    def complete(self, prompt: str, json_mode: bool = False) -> Any:
        """Send prompt; return text, or parsed JSON when json_mode is set."""
        ...


def parse_json_text(text: str) -> Any:
    """Parse a model answer as JSON, tolerating a surrounding code fence."""
    cleaned = text.strip()
    match = _CODE_FENCE.match(cleaned)
    if match:
        cleaned = match.group(1)
    try:
        return json.loads(cleaned)
    except ValueError as e:
        raise ProviderError(f"Provider returned malformed JSON: {e}") from e


class HTTPProvider:
    """Shared request handling for providers reached over HTTPS."""

    name = "http"

    def __init__(self, timeout: int = 30):
        self.timeout = timeout

    def _post(
        self,
        url: str,
        payload: dict,
        headers: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> dict:
        """POST JSON and return the decoded response body.

        Raises:
            ProviderError: On transport failure, non-2xx status or non-JSON body
        """
        try:
            response = requests.post(
                url,
                json=payload,
                headers=headers,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ProviderError(f"{self.name} request failed: {e}") from e

        if not response.ok:
            logger.debug(f"{self.name} error body: {response.text[:500]}")
            raise ProviderError(
                f"{self.name} returned HTTP {response.status_code}: {response.reason}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(f"{self.name} returned a non-JSON body") from e

    def _extract_text(self, body: dict) -> str:
        raise NotImplementedError

    def _request(self, prompt: str, json_mode: bool) -> dict:
        raise NotImplementedError

    def complete(self, prompt: str, json_mode: bool = False) -> Any:
        """Send prompt; return text, or parsed JSON when json_mode is set."""
        body = self._request(prompt, json_mode)
        try:
            text = self._extract_text(body)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ProviderError(f"{self.name} returned an unexpected envelope") from e
        if not isinstance(text, str):
            raise ProviderError(f"{self.name} returned non-text content")

        if json_mode:
            return parse_json_text(text)
        return text.strip()
