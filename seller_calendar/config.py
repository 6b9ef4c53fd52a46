"""Configuration for the seller calendar server."""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class CalendarConfig(BaseModel):
    """Server configuration with Pydantic validation."""

    # Storage paths
    data_dir: Path = Field(default=Path("data"))
    log_dir: Path = Field(default=Path("logs"))
    log_filename: str = Field(default="seller_calendar.log")

    # Builtin AI provider (Gemini); key comes from the server environment
    gemini_api_key: str | None = None
    gemini_model: str = Field(default="gemini-2.5-flash")
    request_timeout: int = Field(default=30, ge=1)

    # Scheduler
    timezone: str = Field(default="Asia/Dubai")
    discovery_time: str = Field(default="08:00")
    enable_scheduler: bool = Field(default=True)

    # HTTP server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000, ge=1, le=65535)

    @classmethod
    def from_env(cls) -> "CalendarConfig":
        """Load configuration from environment variables and .env file."""
        load_dotenv(find_dotenv(usecwd=True))

        config_dict = {}

        # Storage paths
        if "DATA_DIR" in os.environ:
            config_dict["data_dir"] = Path(os.environ["DATA_DIR"])
        if "LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["LOG_DIR"])
        if "LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["LOG_FILENAME"]

        # AI
        if os.environ.get("API_KEY"):
            config_dict["gemini_api_key"] = os.environ["API_KEY"]
        if "GEMINI_MODEL" in os.environ:
            config_dict["gemini_model"] = os.environ["GEMINI_MODEL"]
        if "REQUEST_TIMEOUT" in os.environ:
            try:
                config_dict["request_timeout"] = int(os.environ["REQUEST_TIMEOUT"])
            except ValueError:
                pass  # Keep default if invalid

        # Scheduler
        if "TIMEZONE" in os.environ:
            config_dict["timezone"] = os.environ["TIMEZONE"]
        if "DISCOVERY_TIME" in os.environ:
            config_dict["discovery_time"] = os.environ["DISCOVERY_TIME"]
        if "ENABLE_SCHEDULER" in os.environ:
            config_dict["enable_scheduler"] = _env_bool(os.environ["ENABLE_SCHEDULER"])

        # HTTP server
        if "HOST" in os.environ:
            config_dict["host"] = os.environ["HOST"]
        if "PORT" in os.environ:
            try:
                config_dict["port"] = int(os.environ["PORT"])
            except ValueError:
                pass  # Keep default if invalid

        return cls(**config_dict)
