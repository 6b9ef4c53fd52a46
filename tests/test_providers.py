"""Tests for AI provider adapters."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from seller_calendar.ai_service import (
    check_connection,
    discover_events,
    generate_marketing_ideas,
    marketing_tip,
)
from seller_calendar.config import CalendarConfig
from seller_calendar.constants import FALLBACK_MARKETING_TIP
from seller_calendar.exceptions import (
    ProviderError,
    ProviderNotConfiguredError,
    UnknownProviderError,
)
from seller_calendar.models.settings import AIProviderName, Settings
from seller_calendar.providers import (
    ChatCompletionsProvider,
    GeminiProvider,
    get_provider,
    has_credentials,
    openai_provider,
    openrouter_provider,
    parse_json_text,
)


def _response(body, ok=True, status_code=200):
    response = MagicMock(ok=ok, status_code=status_code, reason="Error", text="")
    response.json.return_value = body
    return response


def _gemini_body(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _chat_body(text):
    return {"choices": [{"message": {"content": text}}]}


def test_parse_json_text_strips_code_fence():
    assert parse_json_text('```json\n[{"a": 1}]\n```') == [{"a": 1}]
    assert parse_json_text(' {"a": 1} ') == {"a": 1}


def test_parse_json_text_malformed():
    with pytest.raises(ProviderError):
        parse_json_text("not json")


@patch("seller_calendar.providers.base.requests.post")
def test_gemini_json_mode(mock_post):
    mock_post.return_value = _response(_gemini_body('["a", "b"]'))
    provider = GeminiProvider("g-key", model="gemini-2.5-flash", timeout=5)

    assert provider.complete("prompt", json_mode=True) == ["a", "b"]

    url = mock_post.call_args.args[0]
    kwargs = mock_post.call_args.kwargs
    assert url.endswith("/gemini-2.5-flash:generateContent")
    assert kwargs["params"] == {"key": "g-key"}
    assert kwargs["timeout"] == 5
    assert kwargs["json"]["generationConfig"]["responseMimeType"] == "application/json"


@patch("seller_calendar.providers.base.requests.post")
def test_gemini_text_mode(mock_post):
    mock_post.return_value = _response(_gemini_body("  Hello  "))
    assert GeminiProvider("g-key").complete("prompt") == "Hello"
    assert "generationConfig" not in mock_post.call_args.kwargs["json"]


@patch("seller_calendar.providers.base.requests.post")
def test_openai_request(mock_post):
    mock_post.return_value = _response(_chat_body('{"ideas": ["x"]}'))
    provider = openai_provider("sk-test", "gpt-4o")

    assert provider.complete("prompt", json_mode=True) == {"ideas": ["x"]}

    kwargs = mock_post.call_args.kwargs
    assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
    assert kwargs["json"]["model"] == "gpt-4o"
    assert kwargs["json"]["response_format"] == {"type": "json_object"}


@patch("seller_calendar.providers.base.requests.post")
def test_openrouter_sends_title_header(mock_post):
    mock_post.return_value = _response(_chat_body("hi"))
    openrouter_provider("or-key", "anthropic/claude-3-haiku").complete("prompt")
    headers = mock_post.call_args.kwargs["headers"]
    assert headers["Authorization"] == "Bearer or-key"
    assert "X-Title" in headers


@patch("seller_calendar.providers.base.requests.post")
def test_http_error_raises_provider_error(mock_post):
    mock_post.return_value = _response({}, ok=False, status_code=401)
    with pytest.raises(ProviderError, match="401"):
        GeminiProvider("bad").complete("prompt")


@patch("seller_calendar.providers.base.requests.post")
def test_network_error_raises_provider_error(mock_post):
    mock_post.side_effect = requests.ConnectionError("down")
    with pytest.raises(ProviderError):
        openai_provider("sk", "gpt-4o").complete("prompt")


@patch("seller_calendar.providers.base.requests.post")
def test_unexpected_envelope_raises_provider_error(mock_post):
    mock_post.return_value = _response({"candidates": []})
    with pytest.raises(ProviderError):
        GeminiProvider("g-key").complete("prompt")


@patch("seller_calendar.providers.base.requests.post")
def test_null_message_content_raises_provider_error(mock_post):
    mock_post.return_value = _response(_chat_body(None))
    with pytest.raises(ProviderError):
        openai_provider("sk", "gpt-4o").complete("prompt")


# Selection


def test_get_provider_gemini_uses_server_key():
    config = CalendarConfig(gemini_api_key="server-key", gemini_model="m")
    provider = get_provider(Settings(), config)
    assert isinstance(provider, GeminiProvider)
    assert provider.api_key == "server-key"
    assert provider.model == "m"


def test_get_provider_openrouter_uses_settings_key():
    settings = Settings(ai_provider=AIProviderName.OPENROUTER, openrouter_api_key="k")
    provider = get_provider(settings, CalendarConfig())
    assert isinstance(provider, ChatCompletionsProvider)
    assert provider.name == "openrouter"
    assert provider.model == "anthropic/claude-3-haiku"


def test_get_provider_not_configured():
    with pytest.raises(ProviderNotConfiguredError):
        get_provider(Settings(ai_provider=AIProviderName.OPENAI), CalendarConfig())


def test_get_provider_unknown():
    with pytest.raises(UnknownProviderError):
        get_provider(Settings(), CalendarConfig(), provider_name="claude")


def test_get_provider_overrides():
    provider = get_provider(
        Settings(), CalendarConfig(), provider_name="openai", api_key="sk-override"
    )
    assert provider.name == "openai"
    assert provider.api_key == "sk-override"


def test_has_credentials():
    config = CalendarConfig(gemini_api_key="k")
    assert has_credentials(Settings(), config)
    assert not has_credentials(Settings(), CalendarConfig())
    assert not has_credentials(Settings(ai_provider=AIProviderName.OPENAI), config)


# AI features


def test_discover_events_filters_malformed(fake_provider):
    fake_provider.response = [
        {"date": "2025-03-05", "name": "Sale", "category": "E-commerce Sale"},
        {"date": "someday", "name": "Bad"},
        {"date": "2025-03-06", "name": ""},
        42,
    ]
    events = discover_events(fake_provider, 2025, 3)
    assert [e.name for e in events] == ["Sale"]
    assert events[0].source == "ai-discovery"


def test_discover_events_rejects_non_list(fake_provider):
    fake_provider.response = "no events"
    with pytest.raises(ProviderError):
        discover_events(fake_provider, 2025, 3)


def test_generate_marketing_ideas_requires_strings(fake_provider):
    fake_provider.response = [1, 2, 3]
    with pytest.raises(ProviderError):
        generate_marketing_ideas(fake_provider, "Eid", "Religious")


def test_marketing_tip_fallbacks(fake_provider):
    assert marketing_tip(None, []) == FALLBACK_MARKETING_TIP
    fake_provider.response = "   "
    assert marketing_tip(fake_provider, []) == FALLBACK_MARKETING_TIP


def test_check_connection(fake_provider):
    fake_provider.response = "Hello"
    assert check_connection(fake_provider) == (True, None)
    fake_provider.error = ProviderError("denied")
    assert check_connection(fake_provider) == (False, "denied")


@patch("seller_calendar.providers.base.requests.post")
def test_content_parts_list_raises_provider_error(mock_post):
    mock_post.return_value = _response(
        {"choices": [{"message": {"content": [{"type": "text", "text": "[]"}]}}]}
    )
    with pytest.raises(ProviderError, match="non-text"):
        openai_provider("sk", "gpt-4o").complete("prompt", json_mode=True)


@patch("seller_calendar.providers.base.requests.post")
def test_gemini_malformed_parts_raise_provider_error(mock_post):
    mock_post.return_value = _response(
        {"candidates": [{"content": {"parts": ["plain string"]}}]}
    )
    with pytest.raises(ProviderError):
        GeminiProvider("g-key").complete("prompt")
