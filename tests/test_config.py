from __future__ import annotations

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from concierge.config import (
    AppSettings,
    TwilioCredentials,
    TwilioSettings,
    load_twilio_credentials,
    mask_number,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for key in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_CALLER_ID", "TWILIO_HTTP_TIMEOUT", "ENVIRONMENT"):
        monkeypatch.delenv(key, raising=False)


def test_credentials_from_environment(monkeypatch):
    monkeypatch.setenv("TWILIO_ACCOUNT_SID", " AC123 ")
    monkeypatch.setenv("TWILIO_AUTH_TOKEN", "token")
    monkeypatch.setenv("TWILIO_CALLER_ID", "+15005550006")
    monkeypatch.setenv("TWILIO_HTTP_TIMEOUT", "7.5")

    assert load_twilio_credentials() == TwilioCredentials(
        account_sid="AC123",
        auth_token="token",
        caller_id="+15005550006",
        http_timeout=7.5,
    )


def test_partial_credentials_are_missing(monkeypatch):
    monkeypatch.setenv("TWILIO_ACCOUNT_SID", "AC123")
    monkeypatch.setenv("TWILIO_AUTH_TOKEN", "token")
    assert load_twilio_credentials() is None


def test_explicit_settings_without_values():
    assert TwilioSettings(account_sid="AC123", auth_token="", caller_id="+15005550006").credentials() is None


def test_production_flag(monkeypatch):
    assert AppSettings().is_production is False
    monkeypatch.setenv("ENVIRONMENT", "Production")
    assert AppSettings().is_production is True


@pytest.mark.parametrize(
    ("number", "masked"),
    [("+15555550100", "********0100"), ("0100", "****"), ("", "")],
)
def test_mask_number(number, masked):
    assert mask_number(number) == masked


def test_invalid_timeout_yields_no_credentials(monkeypatch):
    monkeypatch.setenv("TWILIO_ACCOUNT_SID", "AC123")
    monkeypatch.setenv("TWILIO_AUTH_TOKEN", "token")
    monkeypatch.setenv("TWILIO_CALLER_ID", "+15005550006")
    monkeypatch.setenv("TWILIO_HTTP_TIMEOUT", "abc")
    assert load_twilio_credentials() is None
