"""Tests for the HTTP API."""

from unittest.mock import MagicMock, patch

from seller_calendar import create_app
from seller_calendar.context import CalendarContext
from seller_calendar.exceptions import (
    ProviderError,
    ProviderNotConfiguredError,
    StorageError,
)


def test_app_factory_exists():
    """Test that the app factory function exists."""
    assert callable(create_app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "scheduler": False}


# Settings


def test_get_settings_returns_defaults(client):
    data = client.get("/api/settings").get_json()
    assert data["webhookUrl"] == ""
    assert data["aiProvider"] == "gemini"
    assert data["autoDiscoverFrequency"] == 2
    assert data["notifyDaysBefore"] == 7
    assert data["dailyBriefingTime"] == "09:00"


def test_settings_round_trip(client):
    settings = client.get("/api/settings").get_json()
    settings.update(
        {
            "webhookUrl": "https://discord.example/webhook",
            "aiProvider": "openrouter",
            "openrouterApiKey": "or-key",
            "isAutoDiscoverEnabled": True,
            "autoDiscoverFrequency": 5,
            "dailyBriefingTime": "07:45",
        }
    )
    response = client.post("/api/settings", json=settings)
    assert response.status_code == 200
    assert response.get_json() == settings
    assert client.get("/api/settings").get_json() == settings


def test_save_settings_rejects_invalid_values(client):
    response = client.post("/api/settings", json={"autoDiscoverFrequency": 0})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid data"


def test_save_settings_requires_object(client):
    response = client.post("/api/settings", json=["not", "an", "object"])
    assert response.status_code == 400


# Stores


def test_user_events_round_trip(client):
    # Browser timestamp for midnight 1 March in Dubai
    events = [
        {"id": "evt-1", "date": "2025-02-28T20:00:00.000Z", "title": "Launch"},
        {"id": "evt-2", "date": "2025-03-10", "title": "Restock", "description": "x"},
    ]
    response = client.post("/api/events", json=events)
    assert response.status_code == 200

    stored = client.get("/api/events").get_json()
    assert stored == [
        {"id": "evt-1", "date": "2025-03-01", "title": "Launch"},
        {"id": "evt-2", "date": "2025-03-10", "title": "Restock", "description": "x"},
    ]


def test_user_events_reject_bad_date(client):
    response = client.post(
        "/api/events", json=[{"id": "1", "date": "not a date", "title": "x"}]
    )
    assert response.status_code == 400


def test_discovered_events_are_deduplicated(client):
    event = {"date": "2025-03-05", "name": "Flash Sale", "category": "Trending"}
    response = client.post("/api/discovered-events", json=[event, event])
    assert response.status_code == 200
    assert len(client.get("/api/discovered-events").get_json()) == 1


def test_chat_history_round_trip_and_clear(client):
    history = [
        {"role": "user", "content": "What's coming up?"},
        {"role": "model", "content": "UAE National Day."},
    ]
    client.post("/api/chat-history", json=history)
    assert client.get("/api/chat-history").get_json() == history

    response = client.delete("/api/chat-history")
    assert response.get_json() == []
    assert client.get("/api/chat-history").get_json() == []


def test_chat_history_rejects_unknown_role(client):
    response = client.post(
        "/api/chat-history", json=[{"role": "system", "content": "hi"}]
    )
    assert response.status_code == 400


# Calendar views


def test_special_dates_for_year(client):
    data = client.get("/api/special-dates/2025").get_json()
    assert data
    assert all(item["date"].startswith("2025-") for item in data)
    assert {
        "date": "2025-12-02",
        "name": "UAE National Day",
        "category": "National Holiday",
        "source": "built-in",
    } in data


def test_special_dates_out_of_range_year(client):
    assert client.get("/api/special-dates/10000").status_code == 400


def test_calendar_merges_all_sources(client):
    client.post(
        "/api/events", json=[{"id": "evt-1", "date": "2025-06-01", "title": "Launch"}]
    )
    client.post(
        "/api/discovered-events",
        json=[{"date": "2025-06-02", "name": "Noon Sale", "category": "E-commerce Sale"}],
    )
    data = client.get("/api/calendar?year=2025").get_json()
    kinds = {item["kind"] for item in data}
    assert kinds == {"built-in", "user", "discovered"}
    dates = [item["date"] for item in data]
    assert dates == sorted(dates)


# AI proxy


def test_ai_unknown_action(client):
    response = client.post("/api/ai/summarize", json={})
    assert response.status_code == 404
    assert response.get_json() == {"error": "Unknown API action."}


def test_ai_generate_marketing_ideas(client, fake_provider):
    fake_provider.response = {"ideas": ["Bundle", "Countdown", "Free gift"]}
    response = client.post(
        "/api/ai/generateMarketingIdeas",
        json={"event": {"name": "Eid Al Fitr", "category": "Religious"}},
    )
    assert response.status_code == 200
    assert response.get_json() == ["Bundle", "Countdown", "Free gift"]
    prompt, json_mode = fake_provider.calls[0]
    assert "Eid Al Fitr" in prompt
    assert json_mode is True


def test_ai_generate_marketing_ideas_requires_event_name(client):
    response = client.post("/api/ai/generateMarketingIdeas", json={"event": {}})
    assert response.status_code == 400


def test_ai_discover_events_uses_zero_based_month(client, fake_provider):
    fake_provider.response = [
        {"date": "2025-03-05", "name": "Flash Sale", "category": "E-commerce Sale"},
        {"name": "No date"},
    ]
    response = client.post("/api/ai/discoverEvents", json={"year": 2025, "month": 2})
    assert response.status_code == 200
    assert response.get_json() == [
        {
            "date": "2025-03-05",
            "name": "Flash Sale",
            "category": "E-commerce Sale",
            "source": "ai-discovery",
        }
    ]
    assert "March 2025" in fake_provider.calls[0][0]


def test_ai_discover_events_rejects_bad_month(client):
    response = client.post("/api/ai/discoverEvents", json={"year": 2025, "month": 12})
    assert response.status_code == 400


def test_ai_chat(client, fake_provider):
    fake_provider.response = "Stock up before Eid."
    response = client.post(
        "/api/ai/chat",
        json={"message": "Any tips?", "history": [{"role": "user", "content": "Hi"}]},
    )
    assert response.status_code == 200
    assert response.get_json() == "Stock up before Eid."
    prompt, json_mode = fake_provider.calls[0]
    assert "Any tips?" in prompt
    assert json_mode is False


def test_ai_provider_failure_returns_500(client, fake_provider):
    fake_provider.error = ProviderError("boom")
    response = client.post("/api/ai/chat", json={"message": "hello"})
    assert response.status_code == 500
    assert "error" in response.get_json()


def test_ai_not_configured_returns_503(config, notifier):
    def no_provider(settings):
        raise ProviderNotConfiguredError("AI provider 'gemini' is not configured")

    ctx = CalendarContext(config=config, provider_factory=no_provider, notifier=notifier)
    client = create_app(ctx).test_client()
    response = client.post("/api/ai/chat", json={"message": "hello"})
    assert response.status_code == 503
    assert response.get_json() == {
        "error": "AI service is not configured on the server."
    }


def test_ai_connection_test_without_key(client):
    response = client.post("/api/ai/test", json={"provider": "openai"})
    data = response.get_json()
    assert data["success"] is False
    assert "not configured" in data["error"]


def test_ai_connection_test_unknown_provider(client):
    data = client.post("/api/ai/test", json={"provider": "nope"}).get_json()
    assert data["success"] is False


@patch("seller_calendar.providers.base.requests.post")
def test_ai_connection_test_with_override_key(mock_post, client):
    mock_post.return_value = MagicMock(
        ok=True,
        json=MagicMock(return_value={"choices": [{"message": {"content": "Hello"}}]}),
    )
    response = client.post(
        "/api/ai/test", json={"provider": "openai", "apiKey": "sk-test"}
    )
    assert response.get_json() == {"success": True}
    headers = mock_post.call_args.kwargs["headers"]
    assert headers["Authorization"] == "Bearer sk-test"


# Discord


@patch("seller_calendar.notifier.requests.post")
def test_discord_test_uses_body_webhook(mock_post, client):
    mock_post.return_value = MagicMock(ok=True)
    response = client.post(
        "/api/discord/test", json={"webhookUrl": "https://discord.example/hook"}
    )
    assert response.get_json() == {"success": True}
    assert mock_post.call_args.args[0] == "https://discord.example/hook"


def test_discord_test_without_webhook(client):
    response = client.post("/api/discord/test", json={})
    assert response.status_code == 502
    assert response.get_json()["success"] is False


@patch("seller_calendar.notifier.requests.post")
def test_discord_event_reminder(mock_post, client):
    mock_post.return_value = MagicMock(ok=True)
    client.post("/api/settings", json={"webhookUrl": "https://discord.example/hook"})
    response = client.post(
        "/api/discord/event-reminder",
        json={"title": "Launch", "date": "2025-03-01", "time": "10:30"},
    )
    assert response.get_json() == {"success": True}
    payload = mock_post.call_args.kwargs["json"]
    assert payload["embeds"][0]["title"] == "📅 Launch"
    assert payload["embeds"][0]["fields"][0]["value"].startswith("<t:")


def test_discord_event_reminder_invalid_date(client):
    response = client.post(
        "/api/discord/event-reminder", json={"title": "Launch", "date": "soon"}
    )
    assert response.status_code == 400


def test_discord_summary_rejects_day_view(client):
    response = client.post("/api/discord/summary", json={"view": "day"})
    assert response.status_code == 400
    assert "Week or Month" in response.get_json()["error"]


@patch("seller_calendar.notifier.requests.post")
def test_discord_summary_month(mock_post, client):
    mock_post.return_value = MagicMock(ok=True)
    client.post("/api/settings", json={"webhookUrl": "https://discord.example/hook"})
    response = client.post(
        "/api/discord/summary", json={"view": "month", "date": "2099-12-01"}
    )
    data = response.get_json()
    assert data["success"] is True
    assert data["count"] > 0
    title = mock_post.call_args.kwargs["json"]["embeds"][0]["title"]
    assert "December 2099" in title


# Jobs


def test_run_discovery_job_when_disabled(client):
    response = client.post("/api/jobs/discovery")
    assert response.get_json() == {"status": "disabled", "added": [], "error": None}


def test_run_notification_job_when_disabled(client):
    data = client.post("/api/jobs/notifications").get_json()
    assert data["status"] == "disabled"
    assert data["remindersSent"] == []


def test_storage_failure_returns_500(client):
    with patch(
        "seller_calendar.storage.json_store.JsonStore.write",
        side_effect=StorageError("disk full"),
    ):
        response = client.post("/api/chat-history", json=[])
    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to save data."}


def test_ai_marketing_ideas_rejects_non_object_event(client):
    response = client.post("/api/ai/generateMarketingIdeas", json={"event": "Eid"})
    assert response.status_code == 400


def test_discord_test_rejects_non_object_body(client):
    response = client.post("/api/discord/test", json=["x"])
    assert response.status_code == 400


def test_discord_test_rejects_non_string_webhook(client):
    response = client.post("/api/discord/test", json={"webhookUrl": ["x"]})
    assert response.status_code == 400


@patch("seller_calendar.notifier.requests.post")
def test_discord_test_without_body_uses_saved_webhook(mock_post, client):
    mock_post.return_value = MagicMock(ok=True)
    client.post("/api/settings", json={"webhookUrl": "https://discord.example/hook"})
    response = client.post("/api/discord/test")
    assert response.get_json() == {"success": True}


def test_discord_summary_rejects_non_object_body(client):
    response = client.post("/api/discord/summary", json=["week"])
    assert response.status_code == 400


def test_calendar_rejects_invalid_year(client):
    assert client.get("/api/calendar?year=abc").status_code == 400
    assert client.get("/api/calendar?year=0").status_code == 400


def test_user_events_reject_out_of_range_timestamp(client):
    response = client.post(
        "/api/events",
        json=[{"id": "a", "date": "0001-01-01T00:00:00+14:00", "title": "t"}],
    )
    assert response.status_code == 400
