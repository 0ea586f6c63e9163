from __future__ import annotations

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from unittest.mock import Mock

import pytest

from concierge import cli
from concierge.config import get_settings
from concierge.dispatcher import CallDispatcher

ARGS = ["call", "--name", "Alex", "--to", "+15555550100", "--message", "Your order is ready for pickup."]


@pytest.fixture(autouse=True)
def twilio_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    monkeypatch.setenv("TWILIO_ACCOUNT_SID", "AC123")
    monkeypatch.setenv("TWILIO_AUTH_TOKEN", "token")
    monkeypatch.setenv("TWILIO_CALLER_ID", "+15005550006")
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield
    get_settings.cache_clear()  # type: ignore[attr-defined]


def _dispatcher(provider: Mock) -> CallDispatcher:
    return CallDispatcher(Mock(return_value=provider))


def test_call_prints_sid(capsys):
    provider = Mock()
    provider.place_call.return_value = "CA123"

    assert cli.main(ARGS, dispatcher=_dispatcher(provider)) == 0
    assert "SID=CA123" in capsys.readouterr().out
    assert provider.place_call.call_args.kwargs["voice"] == "Polly.Joanna"


def test_call_with_explicit_voice():
    provider = Mock()
    provider.place_call.return_value = "CA123"

    assert cli.main([*ARGS, "--voice", "alice"], dispatcher=_dispatcher(provider)) == 0
    assert provider.place_call.call_args.kwargs["voice"] == "alice"


def test_invalid_number_fails(capsys):
    provider = Mock()
    args = ["call", "--name", "Alex", "--to", "12345", "--message", "Your order is ready for pickup."]

    assert cli.main(args, dispatcher=_dispatcher(provider)) == 1
    assert "Enter a valid E.164 phone number." in capsys.readouterr().err
    provider.place_call.assert_not_called()


def test_missing_credentials_fail(monkeypatch, capsys):
    monkeypatch.delenv("TWILIO_CALLER_ID")
    provider = Mock()

    assert cli.main(ARGS, dispatcher=_dispatcher(provider)) == 1
    assert "missing Twilio credentials" in capsys.readouterr().err
    provider.place_call.assert_not_called()


def test_provider_failure_fails(capsys):
    provider = Mock()
    provider.place_call.side_effect = RuntimeError("Authenticate")

    assert cli.main(ARGS, dispatcher=_dispatcher(provider)) == 1
    assert "Authenticate" in capsys.readouterr().err
