"""Pydantic schemas used by the API."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from .errors import GENERIC_VALIDATION_MESSAGE, CallValidationError

E164_RE = re.compile(r"^\+?[1-9]\d{6,14}$", re.ASCII)

CALLER_NAME_MAX = 80
MESSAGE_MIN = 10
MESSAGE_MAX = 600

_CUSTOM_ERROR_PREFIX = "call_"


class Voice(str, Enum):
    """Twilio ``<Say>`` voices offered by the form."""

    POLLY_JOANNA = "Polly.Joanna"
    POLLY_MATTHEW = "Polly.Matthew"
    ALICE = "alice"

    @property
    def label(self) -> str:
        return _VOICE_LABELS[self]


_VOICE_LABELS = {
    Voice.POLLY_JOANNA: "Polly Joanna (US · F)",
    Voice.POLLY_MATTHEW: "Polly Matthew (US · M)",
    Voice.ALICE: "Alice (US · F)",
}

DEFAULT_VOICE = Voice.POLLY_JOANNA


class CallRequest(BaseModel):
    """A validated request to place one call. Fields are stored trimmed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    caller_name: str = Field(..., alias="callerName", description="Name the agent introduces itself with.")
    target_number: str = Field(..., alias="targetNumber", description="Recipient phone number in E.164 format.")
    message: str = Field(..., description="Message the agent reads after the greeting.")
    voice: Voice = Field(..., description="Twilio voice used to read the script.")

    @field_validator("caller_name")
    @classmethod
    def _check_caller_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("call_caller_name_empty", "Please provide your name.")
        if len(value) > CALLER_NAME_MAX:
            raise PydanticCustomError("call_caller_name_too_long", "Name is too long.")
        return value

    @field_validator("target_number")
    @classmethod
    def _check_target_number(cls, value: str) -> str:
        value = value.strip()
        if not E164_RE.match(value):
            raise PydanticCustomError("call_target_number", "Enter a valid E.164 phone number.")
        return value

    @field_validator("message")
    @classmethod
    def _check_message(cls, value: str) -> str:
        value = value.strip()
        if len(value) < MESSAGE_MIN:
            raise PydanticCustomError("call_message_too_short", "Provide more context for the call.")
        if len(value) > MESSAGE_MAX:
            raise PydanticCustomError("call_message_too_long", "Message is too long.")
        return value

    @field_validator("voice", mode="before")
    @classmethod
    def _check_voice(cls, value: Any) -> Any:
        if isinstance(value, Voice):
            return value
        if not isinstance(value, str) or value not in _VOICE_VALUES:
            raise PydanticCustomError(
                "call_voice",
                "Choose one of the supported voices: {choices}.",
                {"choices": ", ".join(_VOICE_VALUES)},
            )
        return value


_VOICE_VALUES = tuple(voice.value for voice in Voice)


class CallPlacedResponse(BaseModel):
    sid: str


class ErrorResponse(BaseModel):
    error: str


class VoiceOption(BaseModel):
    value: str
    label: str


def first_error_message(exc: ValidationError) -> str:
    """Message of the first failing rule, in field declaration order."""

    errors = exc.errors()
    if not errors:
        return GENERIC_VALIDATION_MESSAGE
    first = errors[0]
    if first["type"].startswith(_CUSTOM_ERROR_PREFIX):
        return first["msg"]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def validate_call_request(payload: Any) -> CallRequest:
    """Turn an untyped JSON payload into a :class:`CallRequest`.

    Raises :class:`CallValidationError` carrying the first violated rule.
    """

    if not isinstance(payload, dict):
        raise CallValidationError(GENERIC_VALIDATION_MESSAGE)
    try:
        return CallRequest.model_validate(payload)
    except ValidationError as exc:
        raise CallValidationError(first_error_message(exc)) from exc


def voice_options() -> list[VoiceOption]:
    return [VoiceOption(value=voice.value, label=voice.label) for voice in Voice]
