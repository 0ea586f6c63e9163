"""Configuration utilities for the Call Concierge backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("concierge.config")


class AppSettings(BaseSettings):
    """Application settings loaded from the environment."""

    environment: str = Field(
        default="development",
        description="Name of the current environment (development, staging, production).",
    )
    log_level: str = Field(default="INFO", description="Root log level name.")
    frontend_url: str = Field(
        default="http://localhost:8501",
        description="Origin allowed by CORS when running in production.",
    )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


@dataclass(frozen=True)
class TwilioCredentials:
    account_sid: str
    auth_token: str
    caller_id: str
    http_timeout: Optional[float] = None


class TwilioSettings(BaseSettings):
    """Twilio account values. Built fresh for every call request."""

    account_sid: Optional[str] = Field(default=None, description="Twilio Account SID.")
    auth_token: Optional[str] = Field(default=None, description="Twilio Auth Token.")
    caller_id: Optional[str] = Field(
        default=None,
        description="Twilio phone number used to originate outbound calls.",
    )
    http_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Timeout in seconds for requests made by the Twilio HTTP client.",
    )

    model_config = SettingsConfigDict(
        env_prefix="TWILIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def credentials(self) -> Optional[TwilioCredentials]:
        """Return credentials, or ``None`` when any required value is blank."""

        account_sid = (self.account_sid or "").strip()
        auth_token = (self.auth_token or "").strip()
        caller_id = (self.caller_id or "").strip()
        if not all((account_sid, auth_token, caller_id)):
            return None
        return TwilioCredentials(
            account_sid=account_sid,
            auth_token=auth_token,
            caller_id=caller_id,
            http_timeout=self.http_timeout,
        )


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()


def load_twilio_credentials() -> Optional[TwilioCredentials]:
    """Current Twilio credentials, or ``None`` when they are absent or invalid."""

    try:
        settings = TwilioSettings()
    except ValidationError as exc:
        logger.error("Ignoring invalid Twilio settings: %s", exc)
        return None
    return settings.credentials()


def configure_logging(level_name: str) -> None:
    level = getattr(logging, (level_name or "INFO").upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def mask_number(number: str) -> str:
    """Hide all but the last four digits of a phone number for logs."""

    if len(number) <= 4:
        return "*" * len(number)
    return "*" * (len(number) - 4) + number[-4:]
