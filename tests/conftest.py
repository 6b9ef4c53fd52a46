import shutil
import tempfile
from pathlib import Path

import pytest

from seller_calendar import create_app
from seller_calendar.config import CalendarConfig
from seller_calendar.context import CalendarContext
from seller_calendar.storage.calendar_repository import CalendarRepository
from seller_calendar.storage.json_store import JsonStore


class FakeProvider:
    """AI provider returning canned answers and recording prompts."""

    name = "fake"

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def complete(self, prompt, json_mode=False):
        self.calls.append((prompt, json_mode))
        if self.error is not None:
            raise self.error
        if callable(self.response):
            return self.response(prompt, json_mode)
        return self.response


class RecordingNotifier:
    """Webhook notifier that records payloads instead of posting them."""

    def __init__(self, result=True):
        self.result = result
        self.sent = []

    def __call__(self, webhook_url, payload):
        self.sent.append((webhook_url, payload))
        return self.result


@pytest.fixture
def temp_data_dir():
    """Create a temporary data directory for testing."""
    temp_dir = Path(tempfile.mkdtemp())
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def config(temp_data_dir):
    return CalendarConfig(
        data_dir=temp_data_dir / "data",
        log_dir=temp_data_dir / "logs",
        gemini_api_key="test-key",
    )


@pytest.fixture
def repository(config):
    return CalendarRepository(JsonStore(config.data_dir))


@pytest.fixture
def fake_provider():
    return FakeProvider(response=[])


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def context(config, fake_provider, notifier):
    return CalendarContext(
        config=config,
        provider_factory=lambda settings: fake_provider,
        notifier=notifier,
    )


@pytest.fixture
def app(context):
    """Create and configure a Flask app for testing."""
    app = create_app(context)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
