"""Client-side call state and the request that moves it forward."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urljoin

import requests

CALL_FAILED_FALLBACK = "The call could not be placed."
UNEXPECTED_FAILURE = "Unexpected error while attempting to place the call."
MIN_PREVIEW_LENGTH = 15


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Succeeded:
    sid: str


@dataclass(frozen=True)
class Failed:
    message: str


CallState = Union[Idle, Loading, Succeeded, Failed]


def preview_script(caller_name: str, message: str) -> str:
    name = caller_name.strip()
    if not name:
        return message
    return f"Hello, this is {name}. {message}".strip()


def can_submit(state: CallState, *, caller_name: str, target_number: str, message: str) -> bool:
    if not caller_name.strip() or not target_number.strip() or not message.strip():
        return False
    if len(preview_script(caller_name, message)) < MIN_PREVIEW_LENGTH:
        return False
    return not isinstance(state, Loading)


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return CALL_FAILED_FALLBACK
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return CALL_FAILED_FALLBACK


def submit_call(
    backend_url: str,
    *,
    caller_name: str,
    target_number: str,
    message: str,
    voice: str,
    timeout: Optional[float] = None,
) -> CallState:
    """POST the form to the backend and return the resulting state."""

    try:
        resp = requests.post(
            urljoin(backend_url.rstrip("/") + "/", "api/call"),
            json={
                "callerName": caller_name,
                "targetNumber": target_number,
                "message": message,
                "voice": voice,
            },
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        return Failed(str(e) or UNEXPECTED_FAILURE)

    if not resp.ok:
        return Failed(_error_message(resp))
    try:
        data = resp.json()
    except ValueError:
        data = {}
    sid = data.get("sid") if isinstance(data, dict) else None
    return Succeeded(sid or "unknown")


def describe(state: CallState) -> tuple[str, str]:
    """Map a state to a (kind, text) pair for rendering."""

    if isinstance(state, Idle):
        return "info", "Calls are placed immediately after you submit the form."
    if isinstance(state, Loading):
        return "info", "Placing call…"
    if isinstance(state, Succeeded):
        return "success", f"Call queued. SID: {state.sid}"
    if isinstance(state, Failed):
        return "error", state.message
    raise TypeError(f"Unhandled call state: {state!r}")
