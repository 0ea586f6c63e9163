"""Thin wrapper around the Twilio REST client."""

from __future__ import annotations

import logging
from typing import Optional

from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client
from twilio.twiml.voice_response import VoiceResponse

from .config import TwilioCredentials, mask_number
from .errors import ProviderError

logger = logging.getLogger("concierge.twilio")


def render_twiml(script: str, voice: str) -> str:
    """TwiML that reads ``script`` aloud once in ``voice``."""

    response = VoiceResponse()
    response.say(script, voice=voice)
    return str(response)


class TwilioService:
    """Places a single scripted call through Twilio."""

    def __init__(self, credentials: TwilioCredentials, *, client: Optional[Client] = None):
        self._credentials = credentials
        if client is None:
            http_client = TwilioHttpClient(timeout=credentials.http_timeout)
            client = Client(credentials.account_sid, credentials.auth_token, http_client=http_client)
        self._client = client

    def place_call(self, *, to_number: str, from_number: str, script: str, voice: str) -> str:
        twiml = render_twiml(script, voice)
        logger.info("Placing Twilio call to %s with voice %s", mask_number(to_number), voice)
        try:
            call = self._client.calls.create(
                to=to_number,
                from_=from_number,
                twiml=twiml,
            )
        except TwilioRestException as exc:
            raise ProviderError(exc.msg) from exc
        except TwilioException as exc:
            raise ProviderError(str(exc)) from exc
        return str(call.sid)
