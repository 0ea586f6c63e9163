"""Turns a validated call request into a single Twilio call attempt."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union

from .config import TwilioCredentials, mask_number
from .errors import (
    MISSING_CREDENTIALS_MESSAGE,
    UPSTREAM_FALLBACK_MESSAGE,
    FailureKind,
)
from .schemas import CallRequest

logger = logging.getLogger("concierge.dispatch")


class CallProvider(Protocol):
    def place_call(self, *, to_number: str, from_number: str, script: str, voice: str) -> str:
        """Place the call and return the provider's call identifier."""


ProviderFactory = Callable[[TwilioCredentials], CallProvider]


@dataclass(frozen=True)
class CallPlaced:
    sid: str


@dataclass(frozen=True)
class CallFailed:
    kind: FailureKind
    message: str

    @property
    def status_code(self) -> int:
        return self.kind.status_code


CallResult = Union[CallPlaced, CallFailed]


def compose_script(caller_name: str, message: str) -> str:
    return f"Hello, this is {caller_name}. {message}"


class CallDispatcher:
    """Places one call per request. No retries, no backoff."""

    def __init__(self, provider_factory: ProviderFactory):
        self._provider_factory = provider_factory

    def dispatch(self, request: CallRequest, credentials: Optional[TwilioCredentials]) -> CallResult:
        if credentials is None:
            logger.error("Refusing to place call: Twilio credentials are not configured")
            return CallFailed(FailureKind.CONFIGURATION, MISSING_CREDENTIALS_MESSAGE)

        script = compose_script(request.caller_name, request.message)
        try:
            provider = self._provider_factory(credentials)
            sid = provider.place_call(
                to_number=request.target_number,
                from_number=credentials.caller_id,
                script=script,
                voice=request.voice.value,
            )
        except Exception as exc:
            logger.exception("Call to %s failed", mask_number(request.target_number))
            message = str(exc).strip() or UPSTREAM_FALLBACK_MESSAGE
            return CallFailed(FailureKind.UPSTREAM, message)

        logger.info("Call to %s placed: %s", mask_number(request.target_number), sid)
        return CallPlaced(sid=sid)
