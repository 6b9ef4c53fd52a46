import logging
from datetime import date, datetime
from typing import Optional

from flask import Flask, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from . import embeds
from .ai_service import (
    chat_reply,
    check_connection,
    discover_events,
    generate_marketing_ideas,
)
from .context import CalendarContext
from .dates import get_special_dates
from .exceptions import (
    NotificationError,
    ProviderError,
    StorageError,
    ValidationError,
)
from .models.event import (
    SpecialDate,
    UserEvent,
    dedupe_new_events,
    merge_events,
    set_calendar_timezone,
)
from .models.settings import ChatMessage, Settings
from .notifier import send_webhook
from .providers import get_provider
from .summary import summarize_period

logger = logging.getLogger(__name__)

AI_UNAVAILABLE = "AI service is not configured on the server."
AI_FAILED = "An error occurred while communicating with the AI service."


def _json_body(expected: type = dict):
    """Parsed request body, or ValidationError if it is missing or mistyped."""
    body = request.get_json(silent=True)
    if not isinstance(body, expected):
        raise ValidationError(f"Request body must be a JSON {expected.__name__}")
    return body


def _optional_json_body() -> dict:
    """Like _json_body, but a request without a body reads as an empty object."""
    if not request.get_data():
        return {}
    return _json_body()


def _dump(items) -> list:
    return [item.model_dump(mode="json", exclude_none=True) for item in items]


def create_app(context: Optional[CalendarContext] = None) -> Flask:
    app = Flask(__name__)
    ctx = context or CalendarContext()
    app.extensions["seller_calendar"] = ctx
    set_calendar_timezone(ctx.config.timezone)

    def today() -> date:
        return ctx.notification_job.now().date()

    def events_for_years(*years: int):
        special = []
        for year in sorted(set(years)):
            special.extend(get_special_dates(year))
        return merge_events(
            special,
            ctx.repository.load_user_events(),
            ctx.repository.load_discovered_events(),
        )

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return jsonify({"error": str(error)}), 400

    @app.errorhandler(PydanticValidationError)
    def handle_pydantic_error(error):
        details = error.errors(include_url=False, include_context=False)
        return jsonify({"error": "Invalid data", "details": details}), 400

    @app.errorhandler(StorageError)
    def handle_storage_error(error):
        logger.error(f"Storage failure: {error}")
        return jsonify({"error": "Failed to save data."}), 500

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "scheduler": ctx.scheduler.running})

    # Settings

    @app.route("/api/settings", methods=["GET"])
    def get_settings():
        return jsonify(ctx.repository.load_settings().to_document())

    @app.route("/api/settings", methods=["POST"])
    def save_settings():
        settings = Settings.model_validate(_json_body())
        ctx.repository.save_settings(settings)
        if ctx.scheduler.running:
            ctx.scheduler.reschedule_notifications(settings)
        return jsonify(settings.to_document())

    # Whole-document event and chat stores

    @app.route("/api/events", methods=["GET"])
    def get_user_events():
        return jsonify(_dump(ctx.repository.load_user_events()))

    @app.route("/api/events", methods=["POST"])
    def save_user_events():
        events = [UserEvent.model_validate(e) for e in _json_body(list)]
        ctx.repository.save_user_events(events)
        return jsonify(_dump(events))

    @app.route("/api/discovered-events", methods=["GET"])
    def get_discovered_events():
        return jsonify(_dump(ctx.repository.load_discovered_events()))

    @app.route("/api/discovered-events", methods=["POST"])
    def save_discovered_events():
        events = [SpecialDate.model_validate(e) for e in _json_body(list)]
        events = dedupe_new_events([], events)
        ctx.repository.save_discovered_events(events)
        return jsonify(_dump(events))

    @app.route("/api/chat-history", methods=["GET"])
    def get_chat_history():
        return jsonify(_dump(ctx.repository.load_chat_history()))

    @app.route("/api/chat-history", methods=["POST"])
    def save_chat_history():
        messages = [ChatMessage.model_validate(m) for m in _json_body(list)]
        ctx.repository.save_chat_history(messages)
        return jsonify(_dump(messages))

    @app.route("/api/chat-history", methods=["DELETE"])
    def clear_chat_history():
        ctx.repository.save_chat_history([])
        return jsonify([])

    # Calendar views

    @app.route("/api/special-dates/<int:year>", methods=["GET"])
    def special_dates(year: int):
        if not 1 <= year <= 9999:
            raise ValidationError(f"Year out of range: {year}")
        return jsonify(_dump(get_special_dates(year)))

    @app.route("/api/calendar", methods=["GET"])
    def calendar_events():
        raw_year = request.args.get("year")
        if raw_year is None:
            year = today().year
        else:
            try:
                year = int(raw_year)
            except ValueError as e:
                raise ValidationError(f"Invalid year: {raw_year!r}") from e
        if not 1 <= year <= 9999:
            raise ValidationError(f"Year out of range: {year}")
        events = [e for e in events_for_years(year) if e.date.year == year]
        return jsonify(_dump(events))

    # AI proxy

    @app.route("/api/ai/test", methods=["POST"])
    def test_ai_connection():
        body = _json_body()
        settings = ctx.repository.load_settings()
        try:
            provider = get_provider(
                settings,
                ctx.config,
                provider_name=body.get("provider"),
                api_key=body.get("apiKey") or None,
            )
        except ProviderError as e:
            return jsonify({"success": False, "error": str(e)})

        ok, error = check_connection(provider)
        if ok:
            return jsonify({"success": True})
        return jsonify({"success": False, "error": error})

    @app.route("/api/ai/<action>", methods=["POST"])
    def ai_action(action: str):
        if action not in ("generateMarketingIdeas", "discoverEvents", "chat"):
            return jsonify({"error": "Unknown API action."}), 404

        payload = _json_body()
        settings = ctx.repository.load_settings()
        try:
            provider = ctx.provider(settings)
        except ProviderError as e:
            logger.warning(f"AI request rejected: {e}")
            return jsonify({"error": AI_UNAVAILABLE}), 503

        try:
            if action == "generateMarketingIdeas":
                event = payload.get("event") or {}
                if not isinstance(event, dict):
                    raise ValidationError("event must be an object")
                name = event.get("name") or event.get("title")
                if not name:
                    raise ValidationError("event.name is required")
                result = generate_marketing_ideas(
                    provider, name, event.get("category") or "Event"
                )
            elif action == "discoverEvents":
                year, month = _discovery_period(payload, today())
                result = _dump(discover_events(provider, year, month))
            else:
                message = payload.get("message")
                if not isinstance(message, str) or not message.strip():
                    raise ValidationError("message is required")
                history = [
                    ChatMessage.model_validate(h) for h in payload.get("history") or []
                ]
                anchor = today()
                events = [
                    e
                    for e in events_for_years(anchor.year)
                    if e.date.month == anchor.month
                ]
                result = chat_reply(provider, message, history, events)
        except ProviderError as e:
            logger.error(f"Error in /api/ai/{action}: {e}")
            return jsonify({"error": AI_FAILED}), 500
        return jsonify(result)

    # Discord

    @app.route("/api/discord/test", methods=["POST"])
    def test_webhook():
        body = _optional_json_body()
        url = body.get("webhookUrl") or ctx.repository.load_settings().webhook_url
        if not isinstance(url, str):
            raise ValidationError("webhookUrl must be a string")
        try:
            send_webhook(url, embeds.webhook_check_message())
        except NotificationError as e:
            return jsonify({"success": False, "error": str(e)}), 502
        return jsonify({"success": True})

    @app.route("/api/discord/event-reminder", methods=["POST"])
    def send_event_reminder():
        body = _json_body()
        title = body.get("title")
        if not title:
            raise ValidationError("title is required")
        try:
            when = datetime.fromisoformat(
                f"{body.get('date')}T{body.get('time') or '09:00'}"
            ).replace(tzinfo=ctx.notification_job.now().tzinfo)
        except ValueError as e:
            raise ValidationError("date must be YYYY-MM-DD and time HH:MM") from e

        url = ctx.repository.load_settings().webhook_url
        payload = embeds.event_reminder(title, body.get("description"), when)
        try:
            send_webhook(url, payload)
        except NotificationError as e:
            return jsonify({"success": False, "error": str(e)}), 502
        return jsonify({"success": True})

    @app.route("/api/discord/summary", methods=["POST"])
    def send_summary():
        body = _optional_json_body()
        current = today()
        anchor = current
        if body.get("date"):
            try:
                anchor = date.fromisoformat(str(body["date"])[:10])
            except ValueError as e:
                raise ValidationError("date must be YYYY-MM-DD") from e

        events = events_for_years(anchor.year)
        title, upcoming = summarize_period(
            events, body.get("view") or "month", anchor, current
        )
        url = ctx.repository.load_settings().webhook_url
        try:
            send_webhook(url, embeds.period_summary(title, upcoming))
        except NotificationError as e:
            return jsonify({"success": False, "error": str(e)}), 502
        return jsonify({"success": True, "count": len(upcoming)})

    # Jobs

    @app.route("/api/jobs/discovery", methods=["POST"])
    def run_discovery():
        return jsonify(ctx.scheduler.run_discovery_now().to_dict())

    @app.route("/api/jobs/notifications", methods=["POST"])
    def run_notifications():
        return jsonify(ctx.scheduler.run_notifications_now().to_dict())

    return app


def _discovery_period(payload: dict, current: date) -> tuple[int, int]:
    """(year, 1-based month) from a discoverEvents payload.

    ``month`` is 0-based (January is 0), as sent by the browser client.
    """
    try:
        year = int(payload.get("year", current.year))
        month = int(payload.get("month", current.month - 1)) + 1
    except (TypeError, ValueError) as e:
        raise ValidationError("year and month must be integers") from e
    if not (1 <= year <= 9999 and 1 <= month <= 12):
        raise ValidationError("month must be between 0 and 11")
    return year, month
